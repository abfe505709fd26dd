"""
Renderer HTML — forêt de blocs → markup statique (page publiée).

Parcours en profondeur, pré-ordre : le markup du parent enveloppe celui des enfants.
Dispatch par type via _RENDERERS ; type inconnu → <div> générique avec ses enfants.
Les textes et attributs sont échappés ; les props `html` (RICH_TEXT, CUSTOM_HTML)
et `script` (SCRIPT) sont émises telles quelles, par choix : contenu auteur.
"""
import logging
from typing import Callable, Dict, Iterable, Optional, Sequence

from .. import config
from ..blocks import (
    ButtonProps, CheckboxProps, FAQProps, FormProps, HeadingProps, IconProps, IframeProps,
    ImageProps, InputProps, LabelProps, ParagraphProps, PricingProps, SelectProps,
    TextareaProps, VideoProps, parse_props,
)
from ..blocks.base import BlockProps
from ..core.schemas import Block, DeviceType
from ..core.smart_sections import SmartSectionContext, resolve_forest
from ..core.styles import resolve_block_styles, to_inline_css
from ..core.tree import BlockNode, ChildrenState, TranscludedChildren, build_tree
from .escape import escape_html
from .scripts import js_literal, render_countdown, render_popup, render_sticky_bar

log = logging.getLogger(__name__)

Renderer = Callable[[Block, BlockProps, str, str], str]


# ── Point d'entrée public ───────────────────────────────────────────────────

def render(
    forest: Sequence[BlockNode],
    device: DeviceType | str = config.DEFAULT_DEVICE,
    context: Optional[SmartSectionContext] = None,
) -> str:
    """
    Rend une forêt en markup.

    Si `context` est fourni, les instances de smart section sont résolues d'abord ;
    sinon la forêt est supposée déjà passée par resolve_forest.
    """
    device = DeviceType(device)
    if context is not None:
        forest = resolve_forest(forest, context)
    return "".join(render_node(node, device) for node in forest)


def render_blocks(
    blocks: Iterable[Block],
    device: DeviceType | str = config.DEFAULT_DEVICE,
    context: Optional[SmartSectionContext] = None,
) -> str:
    """Liste plate → arbre → smart sections → markup."""
    return render(build_tree(blocks), device, context or SmartSectionContext())


def render_node(node: BlockNode, device: DeviceType = DeviceType.DESKTOP) -> str:
    """Markup d'un nœud et de son sous-arbre (pile explicite, profondeur non bornée)."""
    rendered: Dict[int, str] = {}
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if not current.block.visible:
            rendered[id(current)] = ""
            continue
        placeholder = _placeholder(current)
        children = current.children.nodes if placeholder is None else []
        if not expanded:
            stack.append((current, True))
            stack.extend((child, False) for child in children)
            continue
        inner = placeholder if placeholder is not None else "".join(rendered[id(c)] for c in children)
        rendered[id(current)] = _render_block(current.block, inner, device)
    return rendered[id(node)]


def _render_block(block: Block, inner: str, device: DeviceType) -> str:
    style = escape_html(to_inline_css(resolve_block_styles(block, device)))
    renderer = _RENDERERS.get(block.type)
    if renderer is None:
        log.warning("Type de bloc inconnu %r (bloc %s), rendu générique", block.type, block.id)
        return _render_generic(block, BlockProps(), style, inner)
    return renderer(block, parse_props(block.type, block.props), style, inner)


def _placeholder(node: BlockNode) -> Optional[str]:
    """Marqueur à la place des enfants d'une instance non rendable ; None sinon."""
    children = node.children
    if isinstance(children, TranscludedChildren):
        section_attr = _attr("data-smart-section", children.section_id) if children.section_id else ""
        if children.state == ChildrenState.PENDING:
            return f'<div{section_attr} data-smart-section-state="pending" aria-busy="true"></div>'
        if children.state == ChildrenState.CYCLE:
            return f'<div{section_attr} data-smart-section-state="cycle" hidden></div>'
        return None
    if node.block.smart_section_instance_id:
        # instance jamais passée par resolve_forest : rien de chargé
        return '<div data-smart-section-state="pending" aria-busy="true"></div>'
    return None


# ── Tracking ────────────────────────────────────────────────────────────────

def event_handler(block: Block) -> Optional[str]:
    """Appel JS vers window.trackFunnelEvent, protégé par un test de présence."""
    event = block.tracking_event
    if event is None:
        return None
    args = [js_literal(event.event_type), js_literal(event.event_name)]
    if event.parameters:
        args.append(js_literal(event.parameters))
    return f"if (window.trackFunnelEvent) {{ trackFunnelEvent({', '.join(args)}); }}"


def _attr(name: str, value) -> str:
    return f' {name}="{escape_html(value)}"'


def _style_attr(style: str) -> str:
    return f' style="{style}"' if style else ""


def _flag(name: str, enabled: bool) -> str:
    return f" {name}" if enabled else ""


# ── Renderers par type ──────────────────────────────────────────────────────

def _render_generic(b: Block, p: BlockProps, style: str, inner: str) -> str:
    return f"<div{_style_attr(style)}>{inner}</div>"


def _render_heading(b: Block, p: HeadingProps, style: str, inner: str) -> str:
    return f"<{p.tag}{_style_attr(style)}>{escape_html(p.text or 'Heading')}</{p.tag}>"


def _render_paragraph(b: Block, p: ParagraphProps, style: str, inner: str) -> str:
    return f"<p{_style_attr(style)}>{escape_html(p.text)}</p>"


def _render_label(b: Block, p: LabelProps, style: str, inner: str) -> str:
    return f"<span{_style_attr(style)}>{escape_html(p.text)}</span>"


def _render_raw_html(b: Block, p: BlockProps, style: str, inner: str) -> str:
    # `content` : ancien nom de la prop RICH_TEXT
    html = b.props.get("html", b.props.get("content", getattr(p, "html", "")))
    return f"<div{_style_attr(style)}>{html or ''}</div>"


def _render_image(b: Block, p: ImageProps, style: str, inner: str) -> str:
    return f"<img{_attr('src', p.src)}{_attr('alt', p.alt)}{_style_attr(style)} />"


def _render_video(b: Block, p: VideoProps, style: str, inner: str) -> str:
    poster = _attr("poster", p.poster) if p.poster else ""
    flags  = _flag("controls", p.controls) + _flag("autoplay", p.autoplay) + _flag("muted", p.autoplay) + _flag("loop", p.loop)
    return f"<video{_attr('src', p.src)}{poster}{flags}{_style_attr(style)}></video>"


def _render_icon(b: Block, p: IconProps, style: str, inner: str) -> str:
    return f'<i{_attr("data-icon", p.name)} aria-hidden="true"{_style_attr(style)}></i>'


def _render_input(b: Block, p: InputProps, style: str, inner: str) -> str:
    return (f"<input{_attr('type', p.type)}{_attr('name', p.name)}{_attr('placeholder', p.placeholder)}"
            f"{_style_attr(style)}{_flag('required', p.required)} />")


def _render_textarea(b: Block, p: TextareaProps, style: str, inner: str) -> str:
    return (f"<textarea{_attr('name', p.name)}{_attr('placeholder', p.placeholder)}{_attr('rows', p.rows)}"
            f"{_style_attr(style)}{_flag('required', p.required)}></textarea>")


def _render_select(b: Block, p: SelectProps, style: str, inner: str) -> str:
    options = "".join(f"<option{_attr('value', opt)}>{escape_html(opt)}</option>" for opt in p.option_list())
    return f"<select{_attr('name', p.name)}{_style_attr(style)}{_flag('required', p.required)}>{options}</select>"


def _render_checkbox(b: Block, p: CheckboxProps, style: str, inner: str) -> str:
    return (f'<label{_style_attr(style)}><input type="checkbox"{_attr("name", p.name)}'
            f"{_flag('required', p.required)} /> {escape_html(p.label)}</label>")


def _render_button(b: Block, p: ButtonProps, style: str, inner: str) -> str:
    handler = event_handler(b)
    onclick = _attr("onclick", handler) if handler else ""
    text    = escape_html(p.text or "Click Me")
    if p.target_url:
        return f"<a{_attr('href', p.target_url)}{_style_attr(style)}{onclick}>{text}</a>"
    return f"<button{_attr('type', p.type)}{_style_attr(style)}{onclick}>{text}</button>"


def _render_form(b: Block, p: FormProps, style: str, inner: str) -> str:
    handler  = event_handler(b)
    onsubmit = _attr("onsubmit", f"event.preventDefault(); {handler} this.submit();") if handler else ""
    return (f"<form{_attr('name', p.name)}{_attr('action', p.action or '#')}{_attr('method', p.method.upper())}"
            f"{_style_attr(style)}{onsubmit}>{inner}</form>")


def _render_faq(b: Block, p: FAQProps, style: str, inner: str) -> str:
    return (f"<details{_style_attr(style)}><summary>{escape_html(p.question or 'Question')}</summary>"
            f"<p>{escape_html(p.answer or 'Answer')}</p></details>")


def _render_testimonial(b: Block, p, style: str, inner: str) -> str:
    avatar = f'<img{_attr("src", p.avatar)}{_attr("alt", p.author)} />' if p.avatar else ""
    role   = f", {escape_html(p.role)}" if p.role else ""
    return (f"<div{_style_attr(style)}>{avatar}<blockquote>&ldquo;{escape_html(p.quote)}&rdquo;</blockquote>"
            f"<p><strong>{escape_html(p.author)}</strong>{role}</p></div>")


def _render_pricing(b: Block, p: PricingProps, style: str, inner: str) -> str:
    features = "".join(f"<li>{escape_html(f)}</li>" for f in p.feature_list())
    period   = f"<span>{escape_html(p.period)}</span>" if p.period else ""
    handler  = event_handler(b)
    onclick  = _attr("onclick", handler) if handler else ""
    if p.button_link:
        cta = f"<a{_attr('href', p.button_link)}{onclick}>{escape_html(p.button_text)}</a>"
    else:
        cta = f'<button type="button"{onclick}>{escape_html(p.button_text)}</button>'
    return (f"<div{_style_attr(style)}><h3>{escape_html(p.title)}</h3>"
            f"<p>{escape_html(p.price)}{period}</p><ul>{features}</ul>{cta}</div>")


def _render_iframe(b: Block, p: IframeProps, style: str, inner: str) -> str:
    return f"<iframe{_attr('src', p.src)}{_attr('title', p.title)}{_style_attr(style)}></iframe>"


def _render_script(b: Block, p: BlockProps, style: str, inner: str) -> str:
    return f"<script>{getattr(p, 'script', '')}</script>"


def _render_popup(b: Block, p, style: str, inner: str) -> str:
    return render_popup(b.id, p, style, inner)


def _render_countdown(b: Block, p, style: str, inner: str) -> str:
    return render_countdown(b.id, p, style)


def _render_sticky_bar(b: Block, p, style: str, inner: str) -> str:
    return render_sticky_bar(b.id, p, style, inner)


_RENDERERS: Dict[str, Renderer] = {
    # Structure : wrapper générique + enfants
    "CONTAINER":       _render_generic,
    "ONE_COLUMN":      _render_generic,
    "TWO_COLUMN":      _render_generic,
    "THREE_COLUMN":    _render_generic,
    "SECTION":         _render_generic,
    "CARD":            _render_generic,
    "FEATURE_GRID":    _render_generic,
    # Contenu
    "HEADING":         _render_heading,
    "PARAGRAPH":       _render_paragraph,
    "LABEL":           _render_label,
    "RICH_TEXT":       _render_raw_html,
    "IMAGE":           _render_image,
    "VIDEO":           _render_video,
    "ICON":            _render_icon,
    # Formulaires
    "INPUT":           _render_input,
    "TEXTAREA":        _render_textarea,
    "SELECT":          _render_select,
    "CHECKBOX":        _render_checkbox,
    "BUTTON":          _render_button,
    "FORM":            _render_form,
    # Composants
    "FAQ":             _render_faq,
    "TESTIMONIAL":     _render_testimonial,
    "PRICING":         _render_pricing,
    # Embeds
    "IFRAME":          _render_iframe,
    "CUSTOM_HTML":     _render_raw_html,
    "SCRIPT":          _render_script,
    # Conversion
    "POPUP":           _render_popup,
    "COUNTDOWN_TIMER": _render_countdown,
    "STICKY_BAR":      _render_sticky_bar,
}
