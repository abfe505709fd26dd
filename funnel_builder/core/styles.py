"""
Style Resolver — fusion styles de base + override device, conversion CSS inline.

Une seule table STYLE_UNITS fait foi pour l'éditeur et le rendu publié :
  "length"   → valeur numérique suffixée en px
  "unitless" → valeur numérique émise telle quelle (z-index, opacity…)
  toute autre clé → "raw", émise telle quelle
La recherche se fait sur la clé exacte (pas de sous-chaîne : lineHeight ≠ height).
"""
import re
from typing import Any, Dict, Literal, Mapping, Optional

from .schemas import Block, DeviceType

StyleUnit = Literal["length", "unitless", "raw"]

_LENGTH_KEYS = [
    "padding", "paddingTop", "paddingRight", "paddingBottom", "paddingLeft",
    "margin", "marginTop", "marginRight", "marginBottom", "marginLeft",
    "width", "height", "minWidth", "maxWidth", "minHeight", "maxHeight",
    "fontSize", "letterSpacing",
    "borderRadius", "borderTopLeftRadius", "borderTopRightRadius",
    "borderBottomLeftRadius", "borderBottomRightRadius",
    "borderWidth", "borderTopWidth", "borderRightWidth", "borderBottomWidth", "borderLeftWidth",
    "gap", "rowGap", "columnGap", "gridGap",
    "top", "right", "bottom", "left",
]

_UNITLESS_KEYS = ["zIndex", "opacity", "fontWeight", "lineHeight", "flexGrow", "flexShrink", "order"]

STYLE_UNITS: Dict[str, StyleUnit] = {
    **{k: "length" for k in _LENGTH_KEYS},
    **{k: "unitless" for k in _UNITLESS_KEYS},
}

_CAMEL_RE = re.compile(r"([A-Z])")


def resolve_styles(base: Optional[Mapping[str, Any]], override: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Fusion superficielle : l'override gagne, sauf valeur None (base conservée)."""
    merged = dict(base or {})
    for key, value in (override or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_block_styles(block: Block, device: DeviceType = DeviceType.DESKTOP) -> Dict[str, Any]:
    """Styles effectifs d'un bloc pour un device. Desktop = Block.styles directement."""
    device = DeviceType(device)
    if device == DeviceType.DESKTOP:
        return dict(block.styles)
    bp = block.breakpoint_for(device)
    return resolve_styles(block.styles, bp.styles if bp else None)


def style_unit(key: str) -> StyleUnit:
    """Classe d'une clé de style (camelCase ou kebab-case)."""
    if "-" in key:
        key = re.sub(r"-([a-z])", lambda m: m.group(1).upper(), key)
    return STYLE_UNITS.get(key, "raw")


def to_kebab(key: str) -> str:
    return _CAMEL_RE.sub(r"-\1", key).lower()


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def css_value(key: str, value: Any) -> str:
    if _is_number(value) and style_unit(key) == "length":
        return f"{value}px"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_inline_css(styles: Optional[Mapping[str, Any]]) -> str:
    """{"padding": 16, "zIndex": 5} → "padding: 16px; z-index: 5" """
    return "; ".join(
        f"{to_kebab(key)}: {css_value(key, value)}"
        for key, value in (styles or {}).items()
        if value is not None and value != ""
    )
