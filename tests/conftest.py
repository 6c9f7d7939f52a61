"""
共用假資料：一份最小但完整的 Figma 檔案 JSON 與其已發布樣式。
"""
import pytest


def make_figma_file(spacing_children=None, variables=None):
    page_children = [
        {
            "id": "1:1", "name": "Primary Swatch", "type": "RECTANGLE",
            "styles": {"fill": "S:fill-primary"},
            "fills": [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0, "a": 1}, "opacity": 0.5}],
            "absoluteBoundingBox": {"x": 0, "y": 0, "width": 40, "height": 40},
        },
        {
            "id": "1:2", "name": "Heading Sample", "type": "TEXT",
            "styles": {"text": "S:text-heading"},
            "style": {
                "fontFamily": "Inter", "fontSize": 32, "fontWeight": 700,
                "letterSpacing": -0.5, "lineHeightPx": 40, "lineHeightPercent": 125,
                "textCase": "UPPER",
            },
        },
        {
            "id": "1:3", "name": "Card", "type": "FRAME",
            "styles": {"effect": "S:effect-card"},
            "effects": [{
                "type": "DROP_SHADOW", "visible": True,
                "color": {"r": 0, "g": 0, "b": 0, "a": 0.25},
                "offset": {"x": 0, "y": 4}, "radius": 8,
            }],
        },
        {
            "id": "1:4", "name": "Frosted", "type": "FRAME",
            "styles": {"effect": "S:effect-frosted"},
            "effects": [{"type": "BACKGROUND_BLUR", "visible": True, "radius": 12}],
        },
    ]
    if spacing_children is not None:
        page_children.append({"id": "2:0", "name": "spacing", "type": "FRAME", "children": spacing_children})
    data = {
        "name": "Design System",
        "document": {
            "id": "0:0", "name": "Document", "type": "DOCUMENT",
            "children": [{"id": "0:1", "name": "Page 1", "type": "CANVAS", "children": page_children}],
        },
    }
    if variables is not None:
        data["variables"] = variables
    return data


RAW_STYLES = [
    {"key": "k-primary", "name": "Colors/Primary", "style_type": "FILL", "description": "Brand", "node_id": "S:fill-primary"},
    {"key": "k-heading", "name": "Heading/H1", "style_type": "TEXT", "description": "", "node_id": "S:text-heading"},
    {"key": "k-card", "name": "Shadow/Card", "style_type": "EFFECT", "description": "Card shadow", "node_id": "S:effect-card"},
    {"key": "k-frosted", "name": "Blur/Frosted", "style_type": "EFFECT", "description": "", "node_id": "S:effect-frosted"},
    {"key": "k-grid", "name": "Grid/12", "style_type": "GRID", "description": "", "node_id": "S:grid"},
]


@pytest.fixture
def figma_file():
    return make_figma_file()


@pytest.fixture
def raw_styles():
    return [dict(s) for s in RAW_STYLES]
