"""
Renderer — arbre de blocs résolu → HTML statique de la page publiée.
"""
from .escape import escape_html
from .html import render, render_blocks, render_node, event_handler
from .scripts import js_literal, format_remaining, render_popup, render_countdown, render_sticky_bar
from .tracking import (
    STANDARD_EVENTS,
    TrackingScript,
    generate_tracking_script,
    generate_tracking_scripts,
    generate_dispatch_script,
)
from .page import generate_page_head, generate_page_body, render_published_page

__all__ = [
    "escape_html", "js_literal",
    "render", "render_blocks", "render_node", "event_handler",
    "format_remaining", "render_popup", "render_countdown", "render_sticky_bar",
    "STANDARD_EVENTS", "TrackingScript",
    "generate_tracking_script", "generate_tracking_scripts", "generate_dispatch_script",
    "generate_page_head", "generate_page_body", "render_published_page",
]
