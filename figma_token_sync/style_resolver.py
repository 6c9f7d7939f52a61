"""
樣式解析 — 在 Figma 節點樹中找出綁定某個樣式的節點

兩種查找都是深度優先前序走訪，第一個命中者勝出（不是最淺的那個）。
"""

from typing import Optional

from .figma_reader import FigmaNode


def find_node_by_style_id(node: FigmaNode, style_id: str) -> Optional[FigmaNode]:
    """回傳第一個 styles（fill/text/effect/grid）中含 style_id 的節點，找不到回傳 None."""
    if not style_id:
        return None
    for bound_id in node.styles.values():
        if bound_id == style_id:
            return node
    for child in node.children:
        found = find_node_by_style_id(child, style_id)
        if found is not None:
            return found
    return None


def find_node_by_name(node: FigmaNode, name: str) -> Optional[FigmaNode]:
    """以名稱（不分大小寫、完全相符）查找節點."""
    if node.name.lower() == name.lower():
        return node
    for child in node.children:
        found = find_node_by_name(child, name)
        if found is not None:
            return found
    return None
