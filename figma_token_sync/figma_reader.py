"""
Figma REST API 讀取與文件模型

讀取 Figma 檔案、已發布樣式與變數，並轉成具型別的節點樹供 token 擷取使用。
"""

from dataclasses import dataclass, field
from typing import Optional

import requests


class TransportError(Exception):
    """Figma API 無法連線或回傳非成功狀態碼."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FigmaAPIClient:
    """Figma REST API 唯讀封裝."""

    BASE_URL = "https://api.figma.com/v1"

    def __init__(self, token: str):
        self.token = token
        self.session = requests.Session()
        self.session.headers.update({
            "X-Figma-Token": token,
            "Content-Type": "application/json",
        })

    def _get(self, path: str, params: Optional[dict] = None) -> dict:
        url = f"{self.BASE_URL}{path}"
        try:
            resp = self.session.get(url, params=params or {})
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = getattr(e.response, "status_code", None)
            reason = getattr(e.response, "reason", "") or str(e)
            raise TransportError(f"Figma API error: {status} {reason}".strip(), status_code=status) from e
        except requests.RequestException as e:
            raise TransportError(f"Figma API unreachable: {e}") from e

    def get_file(self, file_key: str) -> dict:
        return self._get(f"/files/{file_key}")

    def get_file_styles(self, file_key: str) -> list:
        data = self._get(f"/files/{file_key}/styles")
        return (data.get("meta") or {}).get("styles") or []

    def get_local_variables(self, file_key: str) -> dict:
        data = self._get(f"/files/{file_key}/variables/local")
        return (data.get("meta") or {}).get("variables") or {}


# ─── 文件模型 ────────────────────────────────────────────────────────────────

@dataclass
class FigmaColor:
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


@dataclass
class BoundingBox:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class Paint:
    type: str = "SOLID"
    color: Optional[FigmaColor] = None
    opacity: Optional[float] = None


@dataclass
class Effect:
    type: str = "DROP_SHADOW"
    radius: float = 0.0
    color: Optional[FigmaColor] = None
    offset_x: Optional[float] = None
    offset_y: Optional[float] = None
    spread: Optional[float] = None


@dataclass
class TypeStyle:
    font_family: str = ""
    font_size: float = 0.0
    font_weight: float = 400
    letter_spacing: float = 0.0
    line_height_px: Optional[float] = None
    line_height_percent: Optional[float] = None
    text_case: Optional[str] = None
    text_decoration: Optional[str] = None


@dataclass
class FigmaNode:
    """Figma 文件節點；有 children 者為 container，其餘為 leaf."""
    id: str = ""
    name: str = ""
    type: str = "FRAME"
    children: list = field(default_factory=list)
    styles: dict = field(default_factory=dict)
    fills: list = field(default_factory=list)
    effects: list = field(default_factory=list)
    style: Optional[TypeStyle] = None
    bounding_box: Optional[BoundingBox] = None

    @property
    def kind(self) -> str:
        return "container" if self.children else "leaf"


@dataclass
class PublishedStyle:
    key: str
    name: str
    style_type: str
    description: str = ""
    node_id: str = ""


@dataclass
class FigmaVariable:
    id: str
    name: str
    resolved_type: str
    description: str = ""
    values_by_mode: dict = field(default_factory=dict)


# ─── JSON → 模型 ─────────────────────────────────────────────────────────────

def _number(value, default=None):
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    return default


def _text(value, default=""):
    """JSON null → default；非字串值轉成字串."""
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def parse_color(raw) -> Optional[FigmaColor]:
    """解析 {r,g,b,a}；缺 r/g/b 任一（例如變數 alias）則回傳 None."""
    if not isinstance(raw, dict):
        return None
    channels = [_number(raw.get(c)) for c in ("r", "g", "b")]
    if any(c is None for c in channels):
        return None
    r, g, b = channels
    return FigmaColor(r=r, g=g, b=b, a=_number(raw.get("a"), 1.0))


def _parse_bbox(raw) -> Optional[BoundingBox]:
    if not isinstance(raw, dict):
        return None
    return BoundingBox(
        x=_number(raw.get("x"), 0.0),
        y=_number(raw.get("y"), 0.0),
        width=_number(raw.get("width"), 0.0),
        height=_number(raw.get("height"), 0.0),
    )


def _parse_paint(raw: dict) -> Paint:
    return Paint(
        type=_text(raw.get("type")) or "SOLID",
        color=parse_color(raw.get("color")),
        opacity=_number(raw.get("opacity")),
    )


def _parse_effect(raw: dict) -> Effect:
    offset = raw.get("offset") if isinstance(raw.get("offset"), dict) else {}
    return Effect(
        type=_text(raw.get("type")) or "DROP_SHADOW",
        radius=_number(raw.get("radius"), 0.0),
        color=parse_color(raw.get("color")),
        offset_x=_number(offset.get("x")),
        offset_y=_number(offset.get("y")),
        spread=_number(raw.get("spread")),
    )


def _parse_type_style(raw) -> Optional[TypeStyle]:
    if not isinstance(raw, dict) or not raw:
        return None
    return TypeStyle(
        font_family=_text(raw.get("fontFamily")),
        font_size=_number(raw.get("fontSize"), 0.0),
        font_weight=_number(raw.get("fontWeight"), 400),
        letter_spacing=_number(raw.get("letterSpacing"), 0.0),
        line_height_px=_number(raw.get("lineHeightPx")),
        line_height_percent=_number(raw.get("lineHeightPercent")),
        text_case=_text(raw.get("textCase"), None),
        text_decoration=_text(raw.get("textDecoration"), None),
    )


def parse_node(raw: dict) -> FigmaNode:
    """將 Figma API 節點 JSON 遞迴轉成 FigmaNode；格式錯誤的欄位以預設值代替."""
    styles = raw.get("styles")
    return FigmaNode(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        type=_text(raw.get("type")) or "FRAME",
        children=[parse_node(c) for c in raw.get("children") or [] if isinstance(c, dict)],
        styles=dict(styles) if isinstance(styles, dict) else {},
        fills=[_parse_paint(f) for f in raw.get("fills") or [] if isinstance(f, dict)],
        effects=[_parse_effect(e) for e in raw.get("effects") or [] if isinstance(e, dict)],
        style=_parse_type_style(raw.get("style")),
        bounding_box=_parse_bbox(raw.get("absoluteBoundingBox")),
    )


def parse_styles(raw_styles: list) -> list:
    result = []
    for s in raw_styles or []:
        if not isinstance(s, dict):
            continue
        result.append(PublishedStyle(
            key=_text(s.get("key")),
            name=_text(s.get("name")),
            style_type=_text(s.get("style_type") or s.get("styleType")),
            description=_text(s.get("description")),
            node_id=_text(s.get("node_id")),
        ))
    return result


def parse_variables(raw_variables: dict) -> list:
    result = []
    for var_id, v in (raw_variables or {}).items():
        if not isinstance(v, dict):
            continue
        values = v.get("valuesByMode")
        result.append(FigmaVariable(
            id=_text(var_id),
            name=_text(v.get("name")),
            resolved_type=_text(v.get("resolvedType")),
            description=_text(v.get("description")),
            values_by_mode=dict(values) if isinstance(values, dict) else {},
        ))
    return result
