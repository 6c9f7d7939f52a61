"""
Generator — TokenSet → CSS variables / Tailwind theme / DTCG JSON / SCSS.

Every renderer is a pure function of the TokenSet: same snapshot in, same
bytes out. The only timestamp printed is metadata.last_synced.
"""

from __future__ import annotations

import json
from typing import Callable, Dict, List

from .naming_engine import slugify
from .tokens import EffectToken, TokenSet, TypographyToken, format_number

GENERATOR_NAME = "figma-token-sync"
DTCG_SCHEMA = "https://design-tokens.github.io/community-group/format/"
DO_NOT_EDIT = "DO NOT EDIT MANUALLY - This file is auto-generated"


def _px(value) -> str:
    return f"{format_number(value)}px"


def _line_height(typo: TypographyToken) -> str:
    if isinstance(typo.line_height, str):
        return typo.line_height
    return _px(typo.line_height)


def _json_number(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _shadow(effect: EffectToken) -> str:
    v = effect.value
    parts = f"{_px(v.offset_x)} {_px(v.offset_y)} {_px(v.blur)} {_px(v.spread)}"
    return f"{parts} {v.color}" if v.color else parts


def _source(tokens: TokenSet) -> str:
    return tokens.metadata.file_key or "unknown"


def _block_header(title: str, tokens: TokenSet) -> List[str]:
    return [
        "/**",
        f" * {title}",
        f" * Generated: {tokens.metadata.last_synced}",
        f" * Source: Figma file {_source(tokens)}",
        f" * {DO_NOT_EDIT}",
        " */",
    ]


def _has_css_effects(tokens: TokenSet) -> bool:
    return any(e.kind in ("shadow", "blur") for e in tokens.effects.values())


def _finish(lines: List[str]) -> str:
    return "\n".join(lines).rstrip("\n") + "\n"


# ─── CSS custom properties ──────────────────────────────────────────────────

def to_css_variables(tokens: TokenSet) -> str:
    lines = _block_header("Design Tokens", tokens)
    lines += ["", ":root {"]

    if tokens.colors:
        lines.append("  /* Colors */")
        for key, color in tokens.colors.items():
            lines.append(f"  --color-{key}: {color.value};")
            if color.opacity is not None and color.opacity < 1:
                lines.append(f"  --color-{key}-opacity: {format_number(color.opacity)};")
        lines.append("")

    if tokens.typography:
        lines.append("  /* Typography */")
        for key, typo in tokens.typography.items():
            lines.append(f"  --font-{key}-family: \"{typo.font_family}\";")
            lines.append(f"  --font-{key}-size: {_px(typo.font_size)};")
            lines.append(f"  --font-{key}-weight: {format_number(typo.font_weight)};")
            lines.append(f"  --font-{key}-line-height: {_line_height(typo)};")
            lines.append(f"  --font-{key}-letter-spacing: {_px(typo.letter_spacing)};")
            if typo.text_case:
                lines.append(f"  --font-{key}-text-transform: {typo.text_case};")
            if typo.text_decoration:
                lines.append(f"  --font-{key}-text-decoration: {typo.text_decoration};")
        lines.append("")

    if tokens.spacing:
        lines.append("  /* Spacing */")
        for key, space in tokens.spacing.items():
            lines.append(f"  --spacing-{key}: {_px(space.value)};")
        lines.append("")

    if _has_css_effects(tokens):
        lines.append("  /* Effects */")
        for key, effect in tokens.effects.items():
            if effect.kind == "shadow":
                lines.append(f"  --shadow-{key}: {_shadow(effect)};")
            elif effect.kind == "blur":
                lines.append(f"  --blur-{key}: {_px(effect.value.blur)};")
        lines.append("")

    if lines[-1] == "":
        lines.pop()
    lines.append("}")

    # dark mode placeholder
    lines += [
        "",
        "[data-theme=\"dark\"] {",
        "  /* Dark mode overrides - customize as needed */",
        "}",
    ]
    return _finish(lines)


# ─── Tailwind theme.extend ──────────────────────────────────────────────────

def build_tailwind_theme(tokens: TokenSet) -> dict:
    extend: Dict[str, dict] = {}

    colors = {key: color.value for key, color in tokens.colors.items()}

    font_family: Dict[str, list] = {}
    font_size: Dict[str, list] = {}
    for key, typo in tokens.typography.items():
        family_key = slugify(typo.font_family)
        if family_key not in font_family:
            font_family[family_key] = [typo.font_family]
        font_size[key] = [_px(typo.font_size), {"lineHeight": _line_height(typo)}]

    spacing = {key: _px(space.value) for key, space in tokens.spacing.items()}

    box_shadow: Dict[str, str] = {}
    blur: Dict[str, str] = {}
    for key, effect in tokens.effects.items():
        if effect.kind == "shadow":
            box_shadow[key] = _shadow(effect)
        elif effect.kind == "blur":
            blur[key] = _px(effect.value.blur)

    for name, group in (
        ("colors", colors),
        ("fontFamily", font_family),
        ("fontSize", font_size),
        ("spacing", spacing),
        ("boxShadow", box_shadow),
        ("blur", blur),
    ):
        if group:
            extend[name] = group
    return {"theme": {"extend": extend}}


def to_tailwind_config(tokens: TokenSet) -> str:
    config = build_tailwind_theme(tokens)
    lines = _block_header("Tailwind Design Tokens", tokens)
    lines += [
        "",
        "/** @type {import(\"tailwindcss\").Config} */",
        "module.exports = " + json.dumps(config, indent=2, ensure_ascii=False) + ";",
    ]
    return _finish(lines)


# ─── DTCG JSON ──────────────────────────────────────────────────────────────

def build_dtcg_document(tokens: TokenSet) -> dict:
    meta = tokens.metadata
    doc: dict = {
        "$schema": DTCG_SCHEMA,
        "$metadata": {
            "generator": GENERATOR_NAME,
            "version": meta.version,
            "lastSynced": meta.last_synced,
            "source": {"type": "figma", "fileKey": meta.file_key, "fileName": meta.file_name},
        },
    }

    color = {
        key: {"$type": "color", "$value": c.value, "$description": c.description or c.name}
        for key, c in tokens.colors.items()
    }

    typography = {}
    for key, typo in tokens.typography.items():
        value = {
            "fontFamily": typo.font_family,
            "fontSize": _px(typo.font_size),
            "fontWeight": _json_number(typo.font_weight),
            "lineHeight": _line_height(typo),
            "letterSpacing": _px(typo.letter_spacing),
        }
        if typo.text_case:
            value["textCase"] = typo.text_case
        if typo.text_decoration:
            value["textDecoration"] = typo.text_decoration
        typography[key] = {"$type": "typography", "$value": value, "$description": typo.description or typo.name}

    spacing = {
        key: {"$type": "dimension", "$value": _px(s.value), "$description": s.description or s.name}
        for key, s in tokens.spacing.items()
    }

    # 只輸出 shadow；blur / glow 不在此格式中
    effect = {}
    for key, e in tokens.effects.items():
        if e.kind != "shadow":
            continue
        effect[key] = {
            "$type": "shadow",
            "$value": {
                "color": e.value.color,
                "offsetX": _px(e.value.offset_x),
                "offsetY": _px(e.value.offset_y),
                "blur": _px(e.value.blur),
                "spread": _px(e.value.spread),
            },
            "$description": e.description or e.name,
        }

    for name, group in (("color", color), ("typography", typography), ("spacing", spacing), ("effect", effect)):
        if group:
            doc[name] = group
    return doc


def to_json(tokens: TokenSet) -> str:
    return json.dumps(build_dtcg_document(tokens), indent=2, ensure_ascii=False) + "\n"


# ─── SCSS ───────────────────────────────────────────────────────────────────

def to_scss(tokens: TokenSet) -> str:
    lines = [
        "//",
        "// Design Tokens (SCSS)",
        f"// Generated: {tokens.metadata.last_synced}",
        f"// Source: Figma file {_source(tokens)}",
        f"// {DO_NOT_EDIT}",
        "//",
        "",
    ]

    if tokens.colors:
        lines += ["// Colors", "// -------"]
        for key, color in tokens.colors.items():
            lines.append(f"$color-{key}: {color.value};")
        lines.append("")
        lines.append("$colors: (")
        for key, color in tokens.colors.items():
            lines.append(f"  \"{key}\": {color.value},")
        lines += [");", ""]

    if tokens.typography:
        lines += ["// Typography", "// ----------"]
        for key, typo in tokens.typography.items():
            lines.append(f"$font-{key}-family: \"{typo.font_family}\";")
            lines.append(f"$font-{key}-size: {_px(typo.font_size)};")
            lines.append(f"$font-{key}-weight: {format_number(typo.font_weight)};")
            lines.append(f"$font-{key}-line-height: {_line_height(typo)};")
            lines.append(f"$font-{key}-letter-spacing: {_px(typo.letter_spacing)};")
            if typo.text_case:
                lines.append(f"$font-{key}-text-transform: {typo.text_case};")
            if typo.text_decoration:
                lines.append(f"$font-{key}-text-decoration: {typo.text_decoration};")
            lines.append("")

        lines += ["// Typography Mixin", "@mixin typography($style) {"]
        for i, (key, typo) in enumerate(tokens.typography.items()):
            keyword = "@if" if i == 0 else "} @else if"
            opener = f"  {keyword} $style == \"{key}\" {{"
            lines.append(opener)
            lines.append(f"    font-family: $font-{key}-family;")
            lines.append(f"    font-size: $font-{key}-size;")
            lines.append(f"    font-weight: $font-{key}-weight;")
            lines.append(f"    line-height: $font-{key}-line-height;")
            lines.append(f"    letter-spacing: $font-{key}-letter-spacing;")
            if typo.text_case:
                lines.append(f"    text-transform: $font-{key}-text-transform;")
            if typo.text_decoration:
                lines.append(f"    text-decoration: $font-{key}-text-decoration;")
        lines += ["  }", "}", ""]

    if tokens.spacing:
        lines += ["// Spacing", "// -------"]
        for key, space in tokens.spacing.items():
            lines.append(f"$spacing-{key}: {_px(space.value)};")
        lines.append("")
        lines.append("$spacing: (")
        for key, space in tokens.spacing.items():
            lines.append(f"  \"{key}\": {_px(space.value)},")
        lines += [");", ""]

    if _has_css_effects(tokens):
        lines += ["// Effects", "// -------"]
        for key, effect in tokens.effects.items():
            if effect.kind == "shadow":
                lines.append(f"$shadow-{key}: {_shadow(effect)};")
            elif effect.kind == "blur":
                lines.append(f"$blur-{key}: {_px(effect.value.blur)};")
        lines.append("")

    return _finish(lines)


FORMATS: Dict[str, Callable[[TokenSet], str]] = {
    "css": to_css_variables,
    "tailwind": to_tailwind_config,
    "json": to_json,
    "scss": to_scss,
}


def render(format_name: str, tokens: TokenSet) -> str:
    renderer = FORMATS.get(format_name)
    if renderer is None:
        raise ValueError(f"Unsupported format: {format_name}")
    return renderer(tokens)
