"""Blocs de conversion — popup, countdown timer, sticky bar (markup + script inline)."""
from typing import Literal, Optional

from .base import BlockDefinition, BlockProps


class PopupProps(BlockProps):
    trigger: Literal["exitIntent", "scroll", "time", "button"] = "exitIntent"
    # % de scroll, délai en secondes, ou id du bouton déclencheur
    trigger_value: str = "50"
    overlay: bool = True
    overlay_color: str = "rgba(0, 0, 0, 0.7)"
    close_button: bool = True
    position: Literal["center", "top", "bottom", "slideRight"] = "center"
    animation: Literal["fadeIn", "slideUp", "slideDown", "zoomIn"] = "fadeIn"


class CountdownTimerProps(BlockProps):
    end_date: Optional[str] = None
    duration: int = 600
    format: Literal["HH:MM:SS", "MM:SS", "days"] = "HH:MM:SS"
    expired_text: str = "Offer expired!"
    persistent: bool = False
    text_before: str = "Limited time offer ends in:"
    text_after: str = ""


class StickyBarProps(BlockProps):
    position: Literal["top", "bottom"] = "bottom"
    show_on: Literal["always", "scroll", "mobile"] = "always"
    scroll_threshold: int = 100
    dismissible: bool = True


DEFINITIONS = [
    BlockDefinition(
        type="POPUP", category="Conversion", label="Popup",
        props_model=PopupProps,
        default_styles={"position": "fixed", "backgroundColor": "#ffffff", "padding": 32, "borderRadius": 8,
                        "maxWidth": "500px", "width": "90%",
                        "boxShadow": "0 20px 60px rgba(0, 0, 0, 0.3)", "zIndex": 9999},
        can_have_children=True,
    ),
    BlockDefinition(
        type="COUNTDOWN_TIMER", category="Conversion", label="Countdown Timer",
        props_model=CountdownTimerProps,
        default_styles={"display": "flex", "flexDirection": "column", "alignItems": "center", "gap": "12px",
                        "padding": 24, "backgroundColor": "#fff3cd", "borderRadius": 8, "fontSize": 32,
                        "fontWeight": 700, "color": "#856404", "textAlign": "center"},
    ),
    BlockDefinition(
        type="STICKY_BAR", category="Conversion", label="Sticky Bar",
        props_model=StickyBarProps,
        default_styles={"position": "fixed", "width": "100%", "backgroundColor": "#000000", "color": "#ffffff",
                        "padding": 16, "textAlign": "center", "zIndex": 999,
                        "boxShadow": "0 -2px 10px rgba(0, 0, 0, 0.1)"},
        can_have_children=True,
        allowed_children=["HEADING", "PARAGRAPH", "BUTTON"],
    ),
]
