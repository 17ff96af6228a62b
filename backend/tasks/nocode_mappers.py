# backend/tasks/nocode_mappers.py
from __future__ import annotations

"""
Attribut-mappers: Figma-nod (rå dict) → värden i no-code-schemat.

Varje mapper är ren och total. Saknade fält (frånvarande, null eller tom lista)
ersätts med värden ur MAPPER_DEFAULTS, så att konverteringen aldrig faller på
ofullständiga Figma-exporter.
"""

import math
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .nocode_schemas import (
    Border,
    ButtonRecord,
    ButtonState,
    FontProperties,
    IconSize,
    Padding,
    Shadow,
    ButtonGroupAppearance,
)

# ────────────────────────────────────────────────────────────────────────────
# Defaults (en tabell, en plats)
# ────────────────────────────────────────────────────────────────────────────

MAPPER_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "padding": {"left": 8, "right": 8, "top": 4, "bottom": 4},
    "border": {"width": 0, "color": None},
    "font": {"fontFamily": "Arial", "fontWeight": 400, "fontSize": 14},
    "button": {"label": "Button", "icon": None, "iconSize": None, "borderRadius": 0, "opacity": 1},
    "group": {
        "layoutDirection": "HORIZONTAL",
        "spacing": 8,
        "borderRadius": 0,
        "opacity": 1,
        "blendMode": "NORMAL",
    },
    "color": {"r": 0.0, "g": 0.0, "b": 0.0, "a": 1.0},
}

_ICON_TYPES = ("VECTOR", "FRAME")

# ────────────────────────────────────────────────────────────────────────────
# Hjälpare: robusta getters
# ────────────────────────────────────────────────────────────────────────────

def _get(d: Any, k: str, default=None):
    if not isinstance(d, dict):
        return default
    v = d.get(k, default)
    return v if v is not None else default

def _to_float(x: Any) -> Optional[float]:
    if isinstance(x, bool):
        return None
    try:
        fx = float(x)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return fx if math.isfinite(fx) else None

def _num(d: Any, k: str, default):
    """Numeriskt fält; int/float behålls som de är, annat tolkas eller blir default."""
    v = _get(d, k)
    if isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v):
        return v
    fv = _to_float(v)
    return fv if fv is not None else default

def _text(d: Any, k: str, default):
    v = _get(d, k)
    return v if isinstance(v, str) and v else default

def _list(d: Any, k: str) -> List[Any]:
    v = _get(d, k)
    return v if isinstance(v, list) else []

def _children(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [c for c in _list(node, "children") if isinstance(c, dict)]

def _first_child(node: Dict[str, Any], *types: str) -> Optional[Dict[str, Any]]:
    for ch in _children(node):
        if _get(ch, "type") in types:
            return ch
    return None

def _js_number(x: float) -> str:
    # Som JS Number#toString: 1.0 → "1", 1e-05 → "0.00001", 1e-07 → "1e-7"
    if x.is_integer():
        return str(int(x))
    if x != 0 and abs(x) < 1e-6:
        mantissa, exp = repr(x).split("e")
        return f"{mantissa}e{int(exp)}"
    return format(Decimal(repr(x)), "f")

# ────────────────────────────────────────────────────────────────────────────
# Färg
# ────────────────────────────────────────────────────────────────────────────

def _to_255(c01: float) -> int:
    # round-half-up, inte Pythons bankers rounding
    return int(math.floor(c01 * 255 + 0.5))

def rgba_to_hex(r: Any, g: Any, b: Any, a: Any = 1) -> str:
    """
    Normaliserade kanaler [0,1] → "#rrggbb", eller "rgba(R,G,B,A)" när a < 1.
    A skrivs rått (ej skalat eller avrundat). Ogiltiga kanaler → 0, ogiltig alpha → 1.
    """
    dflt = MAPPER_DEFAULTS["color"]
    r255 = _to_255(_to_float(r) if _to_float(r) is not None else dflt["r"])
    g255 = _to_255(_to_float(g) if _to_float(g) is not None else dflt["g"])
    b255 = _to_255(_to_float(b) if _to_float(b) is not None else dflt["b"])
    fa = _to_float(a)
    if fa is None:
        fa = dflt["a"]
    if fa < 1:
        return f"rgba({r255},{g255},{b255},{_js_number(fa)})"
    # 1 << 24 ger alltid exakt 6 hex-siffror efter slice
    return "#" + format((1 << 24) + (r255 << 16) + (g255 << 8) + b255, "x")[1:]

def color_to_css(color: Any) -> str:
    return rgba_to_hex(_get(color, "r"), _get(color, "g"), _get(color, "b"), _get(color, "a"))

# ────────────────────────────────────────────────────────────────────────────
# Stil-mappers
# ────────────────────────────────────────────────────────────────────────────

def get_padding(node: Dict[str, Any]) -> Padding:
    dflt = MAPPER_DEFAULTS["padding"]
    return Padding(
        left=_num(node, "paddingLeft", dflt["left"]),
        right=_num(node, "paddingRight", dflt["right"]),
        top=_num(node, "paddingTop", dflt["top"]),
        bottom=_num(node, "paddingBottom", dflt["bottom"]),
    )

def get_background_color(node: Dict[str, Any]) -> Optional[str]:
    for fill in _list(node, "fills"):
        if isinstance(fill, dict) and fill.get("type") == "SOLID":
            return color_to_css(_get(fill, "color"))
    return None

def get_border(node: Dict[str, Any]) -> Border:
    dflt = MAPPER_DEFAULTS["border"]
    strokes = _list(node, "strokes")
    stroke = strokes[0] if strokes and isinstance(strokes[0], dict) else None
    return Border(
        width=_num(node, "strokeWeight", dflt["width"]),
        color=color_to_css(_get(stroke, "color")) if stroke is not None else dflt["color"],
    )

def get_shadows(node: Dict[str, Any]) -> List[Shadow]:
    out: List[Shadow] = []
    for ef in _list(node, "effects"):
        if not isinstance(ef, dict) or ef.get("type") != "DROP_SHADOW":
            continue
        off = _get(ef, "offset")
        out.append(Shadow(
            color=color_to_css(_get(ef, "color")),
            offsetX=_num(off, "x", 0),
            offsetY=_num(off, "y", 0),
            blur=_num(ef, "radius", 0),
        ))
    return out

def get_font(node: Dict[str, Any]) -> Optional[FontProperties]:
    """Typografi från första TEXT-barnet; None (serialiseras som {}) utan textbarn."""
    text = _first_child(node, "TEXT")
    if text is None:
        return None
    dflt = MAPPER_DEFAULTS["font"]
    st = _get(text, "style")
    return FontProperties(
        fontFamily=_text(st, "fontFamily", dflt["fontFamily"]),
        fontWeight=_num(st, "fontWeight", dflt["fontWeight"]),
        fontSize=_num(st, "fontSize", dflt["fontSize"]),
        textColor=get_background_color(text),
    )

# ────────────────────────────────────────────────────────────────────────────
# Innehåll-mappers
# ────────────────────────────────────────────────────────────────────────────

def get_button_states(node: Dict[str, Any]) -> List[ButtonState]:
    props = _get(node, "componentProperties")
    if not isinstance(props, dict):
        return []
    return [ButtonState(state=str(key), value=_get(prop, "value")) for key, prop in props.items()]

def get_button_label(node: Dict[str, Any]) -> str:
    text = _first_child(node, "TEXT")
    return _text(text, "characters", MAPPER_DEFAULTS["button"]["label"])

def get_button_icon(node: Dict[str, Any]) -> Optional[str]:
    icon = _first_child(node, *_ICON_TYPES)
    return _text(icon, "name", MAPPER_DEFAULTS["button"]["icon"])

def get_icon_size(node: Dict[str, Any]) -> Optional[IconSize]:
    icon = _first_child(node, *_ICON_TYPES)
    bb = _get(icon, "absoluteBoundingBox")
    if not isinstance(bb, dict):
        return MAPPER_DEFAULTS["button"]["iconSize"]
    return IconSize(width=_num(bb, "width", 0), height=_num(bb, "height", 0))

# ────────────────────────────────────────────────────────────────────────────
# Sammansatta mappers (grupp + knapp)
# ────────────────────────────────────────────────────────────────────────────

def map_button_group_appearance(node: Dict[str, Any]) -> ButtonGroupAppearance:
    dflt = MAPPER_DEFAULTS["group"]
    return ButtonGroupAppearance(
        layoutDirection=_text(node, "layoutMode", dflt["layoutDirection"]),
        spacing=_num(node, "itemSpacing", dflt["spacing"]),
        padding=get_padding(node),
        backgroundColor=get_background_color(node),
        border=get_border(node),
        borderRadius=_num(node, "cornerRadius", dflt["borderRadius"]),
        shadow=get_shadows(node),
        opacity=_num(node, "opacity", dflt["opacity"]),
        blendMode=_text(node, "blendMode", dflt["blendMode"]),
    )

def extract_button_properties(btn: Dict[str, Any], index: int) -> ButtonRecord:
    dflt = MAPPER_DEFAULTS["button"]
    return ButtonRecord(
        id=f"button{index}",
        label=get_button_label(btn),
        icon=get_button_icon(btn),
        iconSize=get_icon_size(btn),
        backgroundColor=get_background_color(btn),
        border=get_border(btn),
        borderRadius=_num(btn, "cornerRadius", dflt["borderRadius"]),
        padding=get_padding(btn),
        font=get_font(btn),
        states=get_button_states(btn),
        opacity=_num(btn, "opacity", dflt["opacity"]),
    )

def visible_button_instances(node: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Direkta INSTANCE-barn som inte uttryckligen är visible=false, i originalordning."""
    return [
        ch for ch in _children(node)
        if _get(ch, "type") == "INSTANCE" and ch.get("visible") is not False
    ]


__all__ = [
    "MAPPER_DEFAULTS",
    "rgba_to_hex",
    "color_to_css",
    "get_padding",
    "get_background_color",
    "get_border",
    "get_shadows",
    "get_font",
    "get_button_states",
    "get_button_label",
    "get_button_icon",
    "get_icon_size",
    "map_button_group_appearance",
    "extract_button_properties",
    "visible_button_instances",
]
