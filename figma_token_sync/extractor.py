"""
Token extractor — Figma document + published styles + variables → TokenSet.

Every extraction attempt returns an optional token. The loops below fold the
attempts into category maps and record each miss as a gap, so one malformed
style or variable never stops the rest of the file from being extracted.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .figma_reader import (
    FigmaColor,
    FigmaNode,
    FigmaVariable,
    PublishedStyle,
    parse_color,
)
from .naming_engine import tokenize_name
from .style_resolver import find_node_by_name, find_node_by_style_id
from .tokens import (
    ColorToken,
    EffectToken,
    EffectValue,
    SpacingToken,
    TokenMetadata,
    TokenSet,
    TypographyToken,
    format_number,
)

DEFAULT_SPACING_SCALE = [0, 4, 8, 12, 16, 20, 24, 32, 40, 48, 64, 80, 96, 128]

SPACING_CONTAINER_NAME = "Spacing"

_EFFECT_KIND_MAP = {
    "DROP_SHADOW": "shadow",
    "INNER_SHADOW": "shadow",
    "LAYER_BLUR": "blur",
    "BACKGROUND_BLUR": "blur",
}

_TEXT_CASE_MAP = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}

_TEXT_DECORATION_MAP = {
    "UNDERLINE": "underline",
    "STRIKETHROUGH": "line-through",
}


# ─── color helpers ──────────────────────────────────────────────────────────

def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _channel(value: float) -> int:
    return max(0, min(255, round_half_up(value * 255)))


def figma_color_to_hex(color: FigmaColor) -> str:
    return f"#{_channel(color.r):02x}{_channel(color.g):02x}{_channel(color.b):02x}"


def figma_color_to_rgba(color: FigmaColor) -> str:
    alpha = color.a if color.a is not None else 1
    return f"rgba({_channel(color.r)}, {_channel(color.g)}, {_channel(color.b)}, {format_number(alpha)})"


def map_effect_kind(figma_type: str) -> str:
    return _EFFECT_KIND_MAP.get(figma_type, "shadow")


# ─── report ─────────────────────────────────────────────────────────────────

@dataclass
class ExtractionGap:
    category: str
    source: str
    reason: str


@dataclass
class KeyCollision:
    category: str
    key: str
    replaced: str
    replaced_by: str


@dataclass
class ExtractionReport:
    gaps: List[ExtractionGap] = field(default_factory=list)
    collisions: List[KeyCollision] = field(default_factory=list)
    spacing_fallback: bool = False


@dataclass
class ExtractionResult:
    tokens: TokenSet
    report: ExtractionReport


# ─── per-entry attempts ─────────────────────────────────────────────────────

def color_from_style(style: PublishedStyle, node: FigmaNode) -> Optional[ColorToken]:
    if not node.fills or node.fills[0].color is None:
        return None
    fill = node.fills[0]
    return ColorToken(
        key=tokenize_name(style.name),
        name=style.name,
        value=figma_color_to_hex(fill.color),
        opacity=fill.opacity if fill.opacity is not None else 1,
        description=style.description or None,
        source_id=style.key or None,
    )


def color_from_variable(variable: FigmaVariable) -> Optional[ColorToken]:
    if variable.resolved_type != "COLOR" or not variable.values_by_mode:
        return None
    # 第一個 mode（依 map 順序）
    first_mode_value = next(iter(variable.values_by_mode.values()))
    color = parse_color(first_mode_value)
    if color is None:
        return None
    return ColorToken(
        key=tokenize_name(variable.name),
        name=variable.name,
        value=figma_color_to_hex(color),
        description=variable.description or None,
        source_id=variable.id or None,
    )


def typography_from_style(style: PublishedStyle, node: FigmaNode) -> Optional[TypographyToken]:
    text = node.style
    if text is None:
        return None
    line_height = text.line_height_px if text.line_height_px is not None else "normal"
    return TypographyToken(
        key=tokenize_name(style.name),
        name=style.name,
        font_family=text.font_family,
        font_size=text.font_size,
        font_weight=text.font_weight,
        line_height=line_height,
        letter_spacing=text.letter_spacing,
        text_case=_TEXT_CASE_MAP.get(text.text_case or ""),
        text_decoration=_TEXT_DECORATION_MAP.get(text.text_decoration or ""),
        description=style.description or None,
        source_id=style.key or None,
    )


def effect_from_style(style: PublishedStyle, node: FigmaNode) -> Optional[EffectToken]:
    if not node.effects:
        return None
    effect = node.effects[0]
    value = EffectValue(
        color=figma_color_to_rgba(effect.color) if effect.color is not None else None,
        offset_x=effect.offset_x if effect.offset_x is not None else 0,
        offset_y=effect.offset_y if effect.offset_y is not None else 0,
        blur=effect.radius,
        spread=effect.spread if effect.spread is not None else 0,
    )
    return EffectToken(
        key=tokenize_name(style.name),
        name=style.name,
        kind=map_effect_kind(effect.type),
        value=value,
        description=style.description or None,
        source_id=style.key or None,
    )


def spacing_from_node(node: FigmaNode) -> Optional[SpacingToken]:
    if node.bounding_box is None:
        return None
    return SpacingToken(
        key=tokenize_name(node.name),
        name=node.name,
        value=round_half_up(node.bounding_box.width),
        description=f"Spacing unit: {node.name}",
    )


def default_spacing_scale() -> dict:
    return {
        f"space-{i}": SpacingToken(
            key=f"space-{i}",
            name=f"Space {i}",
            value=value,
            description=f"{value}px spacing unit",
        )
        for i, value in enumerate(DEFAULT_SPACING_SCALE)
    }


# ─── extractor ──────────────────────────────────────────────────────────────

_STYLE_ATTEMPTS = {
    "FILL": ("colors", color_from_style, "first fill has no solid color"),
    "TEXT": ("typography", typography_from_style, "node has no text style"),
    "EFFECT": ("effects", effect_from_style, "node has no effect layer"),
}


class TokenExtractor:
    """Builds a TokenSet from one fetched Figma file."""

    def extract(
        self,
        document: FigmaNode,
        styles: List[PublishedStyle],
        variables: List[FigmaVariable],
        *,
        synced_at: str,
        file_key: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> ExtractionResult:
        report = ExtractionReport()
        groups = {"colors": {}, "typography": {}, "spacing": {}, "effects": {}}

        for style_type in ("FILL", "TEXT", "EFFECT"):
            category, attempt, miss_reason = _STYLE_ATTEMPTS[style_type]
            for style in styles:
                if style.style_type != style_type:
                    continue
                node = find_node_by_style_id(document, style.node_id)
                if node is None:
                    report.gaps.append(ExtractionGap(category, style.name, f"node '{style.node_id}' not found"))
                    continue
                token = attempt(style, node)
                if token is None:
                    report.gaps.append(ExtractionGap(category, style.name, miss_reason))
                    continue
                self._put(groups[category], category, token, report)

        # 變數在樣式之後處理，key 相同時覆蓋樣式
        for variable in variables:
            if variable.resolved_type != "COLOR":
                continue
            token = color_from_variable(variable)
            if token is None:
                report.gaps.append(ExtractionGap("colors", variable.name, "no color value in first mode"))
                continue
            self._put(groups["colors"], "colors", token, report)

        groups["spacing"] = self._extract_spacing(document, report)

        tokens = TokenSet(
            metadata=TokenMetadata(last_synced=synced_at, file_key=file_key, file_name=file_name),
            colors=groups["colors"],
            typography=groups["typography"],
            spacing=groups["spacing"],
            effects=groups["effects"],
        )
        return ExtractionResult(tokens=tokens, report=report)

    def _extract_spacing(self, document: FigmaNode, report: ExtractionReport) -> dict:
        spacing: dict = {}
        container = find_node_by_name(document, SPACING_CONTAINER_NAME)
        if container is not None and container.kind == "container":
            for child in container.children:
                token = spacing_from_node(child)
                if token is None:
                    report.gaps.append(ExtractionGap("spacing", child.name, "child has no bounding box"))
                    continue
                self._put(spacing, "spacing", token, report)
        if not spacing:
            report.spacing_fallback = True
            return default_spacing_scale()
        return spacing

    @staticmethod
    def _put(group: dict, category: str, token, report: ExtractionReport) -> None:
        if not token.key:
            report.gaps.append(ExtractionGap(category, token.name, "name yields an empty key"))
            return
        previous = group.get(token.key)
        if previous is not None:
            report.collisions.append(KeyCollision(category, token.key, previous.name, token.name))
        group[token.key] = token
