"""
命名引擎 — Figma 樣式名稱 → token canonical key

"Colors/Primary/500" → "colors-primary-500"。兩個名稱若正規化後相同會互相覆蓋，
extractor 會把這類碰撞記錄在報告中。
"""

import re

_SLASH = re.compile(r"/")
_WHITESPACE = re.compile(r"\s+")
_INVALID = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN = re.compile(r"-+")


def tokenize_name(name: str) -> str:
    """將顯示名稱轉成小寫、連字號分隔、僅含 [a-z0-9-] 的 key."""
    key = name.lower()
    key = _SLASH.sub("-", key)
    key = _WHITESPACE.sub("-", key)
    key = _INVALID.sub("", key)
    key = _HYPHEN_RUN.sub("-", key)
    return key.strip("-")


def slugify(text: str) -> str:
    """字型家族 key（Tailwind fontFamily 使用）：不合併連字號、不去頭尾."""
    slug = _WHITESPACE.sub("-", text.lower())
    return _INVALID.sub("", slug)


def preview_token_keys(tokens) -> str:
    """除錯用：列出每個分類的 canonical key 與原始名稱."""
    lines = []
    for label, group in (
        ("colors", tokens.colors),
        ("typography", tokens.typography),
        ("spacing", tokens.spacing),
        ("effects", tokens.effects),
    ):
        lines.append(f"├─ {label} ({len(group)})")
        for key, token in group.items():
            lines.append(f"  ├─ {key}  <{token.name}>")
    return "\n".join(lines)
