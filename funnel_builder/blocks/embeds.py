"""
Blocs embed — iframe, HTML custom, script.

CUSTOM_HTML.html et SCRIPT.script sont émis tels quels : contenu fourni par
l'auteur de la page, volontairement non sanitisé.
"""
from .base import BlockDefinition, BlockProps


class IframeProps(BlockProps):
    src: str = ""
    title: str = "Embedded content"


class CustomHTMLProps(BlockProps):
    html: str = "<div>Custom HTML content</div>"


class ScriptProps(BlockProps):
    script: str = "// Your JavaScript code here"


DEFINITIONS = [
    BlockDefinition(
        type="IFRAME", category="Embeds", label="iFrame",
        props_model=IframeProps,
        default_styles={"width": "100%", "height": 400, "borderRadius": 8, "border": "none"},
    ),
    BlockDefinition(
        type="CUSTOM_HTML", category="Embeds", label="Custom HTML",
        props_model=CustomHTMLProps,
        default_styles={"width": "100%"},
    ),
    BlockDefinition(
        type="SCRIPT", category="Embeds", label="Script",
        props_model=ScriptProps,
        default_styles={"display": "none"},
    ),
]
