"""
figma-token-sync — Figma → Code 設計 token 單向同步（Python 管線）

讀取 Figma 檔案的樣式與變數，正規化名稱後輸出 CSS / Tailwind / JSON / SCSS。
"""

__version__ = "0.1.0"

from .figma_reader import FigmaAPIClient, FigmaNode, TransportError, parse_node
from .style_resolver import find_node_by_name, find_node_by_style_id
from .naming_engine import preview_token_keys, slugify, tokenize_name
from .tokens import ColorToken, EffectToken, SpacingToken, TokenSet, TypographyToken
from .extractor import TokenExtractor, figma_color_to_hex, figma_color_to_rgba
from .generator import FORMATS, render, to_css_variables, to_json, to_scss, to_tailwind_config
from .writer import FingerprintCache, OutputWriter, SinkError
from .config import load_config, validate_config
from .sync import DesignTokenSync, SyncResult

__all__ = [
    "__version__",
    "FigmaAPIClient",
    "FigmaNode",
    "TransportError",
    "parse_node",
    "find_node_by_name",
    "find_node_by_style_id",
    "preview_token_keys",
    "slugify",
    "tokenize_name",
    "ColorToken",
    "EffectToken",
    "SpacingToken",
    "TokenSet",
    "TypographyToken",
    "TokenExtractor",
    "figma_color_to_hex",
    "figma_color_to_rgba",
    "FORMATS",
    "render",
    "to_css_variables",
    "to_json",
    "to_scss",
    "to_tailwind_config",
    "FingerprintCache",
    "OutputWriter",
    "SinkError",
    "load_config",
    "validate_config",
    "DesignTokenSync",
    "SyncResult",
]
