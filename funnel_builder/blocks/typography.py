"""Blocs texte — heading, paragraph, label, rich text."""
from typing import Literal

from .base import BlockDefinition, BlockProps


class HeadingProps(BlockProps):
    text: str = "Heading"
    tag: Literal["h1", "h2", "h3", "h4", "h5", "h6"] = "h2"


class ParagraphProps(BlockProps):
    text: str = "This is a paragraph. Click to edit."


class LabelProps(BlockProps):
    text: str = "Label"


class RichTextProps(BlockProps):
    # HTML brut fourni par l'auteur, rendu tel quel (pas de sanitisation)
    html: str = "<p>Rich text content...</p>"


DEFINITIONS = [
    BlockDefinition(
        type="HEADING", category="Typography", label="Heading",
        props_model=HeadingProps,
        default_styles={"fontSize": 32, "fontWeight": 700, "lineHeight": 1.2, "color": "#000000", "marginBottom": 16},
    ),
    BlockDefinition(
        type="PARAGRAPH", category="Typography", label="Paragraph",
        props_model=ParagraphProps,
        default_styles={"fontSize": 16, "lineHeight": 1.6, "color": "#333333", "marginBottom": 16},
    ),
    BlockDefinition(
        type="LABEL", category="Typography", label="Label",
        props_model=LabelProps,
        default_styles={"fontSize": 14, "fontWeight": 600, "color": "#666666",
                        "textTransform": "uppercase", "letterSpacing": "0.5px"},
    ),
    BlockDefinition(
        type="RICH_TEXT", category="Typography", label="Rich Text",
        props_model=RichTextProps,
        default_styles={"fontSize": 16, "lineHeight": 1.6, "color": "#333333"},
    ),
]
