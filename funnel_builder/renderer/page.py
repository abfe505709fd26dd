"""
Assemblage de la page publiée : <head> (SEO, pixels, CSS) + blocs + scripts de fin de <body>.
"""
import logging

from .. import config
from ..core.schemas import DeviceType, PublishedPageData
from ..core.smart_sections import SmartSectionContext
from .escape import escape_html
from .html import render_blocks
from .tracking import generate_dispatch_script, generate_tracking_scripts

log = logging.getLogger(__name__)


BASE_CSS = """* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}
body {
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
  line-height: 1.5;
}"""


def generate_page_head(data: PublishedPageData) -> str:
    page  = data.page
    title = page.meta_title or page.name

    tags = [
        '<meta charset="utf-8" />',
        '<meta name="viewport" content="width=device-width, initial-scale=1" />',
        f"<title>{escape_html(title)}</title>",
    ]
    if page.meta_description:
        tags.append(f'<meta name="description" content="{escape_html(page.meta_description)}" />')
    if page.meta_image:
        tags.append(f'<meta property="og:image" content="{escape_html(page.meta_image)}" />')
    tags.append(f'<meta property="og:title" content="{escape_html(title)}" />')
    if page.meta_description:
        tags.append(f'<meta property="og:description" content="{escape_html(page.meta_description)}" />')

    tags.extend(s.head_script for s in generate_tracking_scripts(data.pixel_integrations) if s.head_script)

    if page.custom_css:
        tags.append(f"<style>{page.custom_css}</style>")
    tags.append(f"<style>\n{BASE_CSS}\n</style>")
    return "\n".join(tags)


def generate_page_body(data: PublishedPageData) -> str:
    """Scripts de fin de <body> : JS de la page puis fonction de dispatch du tracking."""
    parts = []
    if data.page.custom_js:
        parts.append(f"<script>{data.page.custom_js}</script>")
    parts.append(generate_dispatch_script(data.pixel_integrations))
    return "\n".join(parts)


def render_published_page(data: PublishedPageData, device: DeviceType | str = config.DEFAULT_DEVICE) -> str:
    """Document HTML complet d'une page publiée."""
    context = SmartSectionContext.from_sections(data.smart_sections, data.smart_section_instances)
    if data.smart_sections is None and data.smart_section_instances:
        log.info("Page %s : smart sections non chargées, rendu pending", data.page.id)

    content = render_blocks(data.page.blocks, device, context)
    lang    = escape_html(data.page.lang or config.DEFAULT_LANG)

    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
{generate_page_head(data)}
</head>
<body>
{content}
{generate_page_body(data)}
</body>
</html>"""
