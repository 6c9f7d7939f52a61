"""Design token records and the per-sync TokenSet snapshot."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

EFFECT_KINDS = ("shadow", "blur", "glow")


def format_number(value) -> str:
    """16.0 → "16", 0.25 → "0.25"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class ColorToken:
    key: str
    name: str
    value: str
    opacity: Optional[float] = None
    description: Optional[str] = None
    source_id: Optional[str] = None


@dataclass(frozen=True)
class TypographyToken:
    key: str
    name: str
    font_family: str
    font_size: float
    font_weight: float
    line_height: Union[float, str]
    letter_spacing: float
    text_case: Optional[str] = None
    text_decoration: Optional[str] = None
    description: Optional[str] = None
    source_id: Optional[str] = None


@dataclass(frozen=True)
class SpacingToken:
    key: str
    name: str
    value: int
    description: Optional[str] = None


@dataclass(frozen=True)
class EffectValue:
    color: Optional[str] = None
    offset_x: float = 0
    offset_y: float = 0
    blur: float = 0
    spread: float = 0


@dataclass(frozen=True)
class EffectToken:
    key: str
    name: str
    kind: str
    value: EffectValue
    description: Optional[str] = None
    source_id: Optional[str] = None


@dataclass(frozen=True)
class TokenMetadata:
    last_synced: str
    file_key: Optional[str] = None
    file_name: Optional[str] = None
    version: str = "1.0.0"


@dataclass(frozen=True)
class TokenSet:
    """One sync's worth of tokens; built once by the extractor, read by every format."""
    metadata: TokenMetadata
    colors: Dict[str, ColorToken] = field(default_factory=dict)
    typography: Dict[str, TypographyToken] = field(default_factory=dict)
    spacing: Dict[str, SpacingToken] = field(default_factory=dict)
    effects: Dict[str, EffectToken] = field(default_factory=dict)

    def counts(self) -> Dict[str, int]:
        return {
            "colors": len(self.colors),
            "typography": len(self.typography),
            "spacing": len(self.spacing),
            "effects": len(self.effects),
        }

    def is_empty(self) -> bool:
        return not any(self.counts().values())
