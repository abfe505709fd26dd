"""Tests assemblage de la page publiée."""
import pytest

from funnel_builder.core.schemas import (
    Block, FunnelPage, PixelIntegration, PublishedPageData, SmartSection, SmartSectionInstance,
)
from funnel_builder.renderer import generate_page_body, generate_page_head, render_published_page


@pytest.fixture
def page():
    return FunnelPage(
        id="pg1",
        name="Landing",
        meta_title="Offre <spéciale> & co",
        meta_description='Description "courte"',
        meta_image="https://cdn.test/og.png",
        blocks=[
            Block(id="1", type="CONTAINER"),
            Block(id="2", type="HEADING", parent_block_id="1", props={"text": "Bienvenue"}),
        ],
    )


# ── Head ────────────────────────────────────────────────────────────────────

def test_head_seo_tags_escaped(page):
    head = generate_page_head(PublishedPageData(page=page))
    assert "<title>Offre &lt;spéciale&gt; &amp; co</title>" in head
    assert '<meta name="description" content="Description &quot;courte&quot;" />' in head
    assert '<meta property="og:image" content="https://cdn.test/og.png" />' in head
    assert '<meta property="og:title" content="Offre &lt;spéciale&gt; &amp; co" />' in head


def test_head_title_falls_back_to_name():
    head = generate_page_head(PublishedPageData(page=FunnelPage(name="Nom")))
    assert "<title>Nom</title>" in head
    assert 'name="description"' not in head
    assert "og:image" not in head


def test_head_tracking_and_css(page):
    page.custom_css = ".hero{color:red}"
    data = PublishedPageData(page=page, pixel_integrations=[
        PixelIntegration(provider="META_PIXEL", pixel_id="42"),
        PixelIntegration(provider="GOOGLE_ANALYTICS", pixel_id="G-1", enabled=False),
    ])
    head = generate_page_head(data)
    assert "<!-- Meta Pixel Code -->" in head
    assert "googletagmanager" not in head
    assert "<style>.hero{color:red}</style>" in head
    assert "box-sizing: border-box;" in head
    # CSS de la page avant le reset de base
    assert head.index(".hero{color:red}") < head.index("box-sizing")


# ── Body ────────────────────────────────────────────────────────────────────

def test_body_custom_js_then_dispatch(page):
    page.custom_js = "init();"
    body = generate_page_body(PublishedPageData(page=page))
    assert body.startswith("<script>init();</script>")
    assert "window.trackFunnelEvent" in body


# ── Document ────────────────────────────────────────────────────────────────

def test_full_document(page):
    html = render_published_page(PublishedPageData(page=page))
    assert html.startswith("<!DOCTYPE html>\n<html lang=\"en\">")
    assert "<h2>Bienvenue</h2>" in html
    assert html.index("<h2>Bienvenue</h2>") < html.index("window.trackFunnelEvent")
    assert html.rstrip().endswith("</html>")


def test_document_lang(page):
    page.lang = "fr"
    assert '<html lang="fr">' in render_published_page(PublishedPageData(page=page))


def test_document_device_applies_breakpoints():
    page = FunnelPage(blocks=[Block.model_validate({
        "id": "h", "type": "HEADING", "props": {"text": "T"}, "styles": {"fontSize": 40},
        "breakpoints": [{"device": "MOBILE", "styles": {"fontSize": 24}}],
    })])
    data = PublishedPageData(page=page)
    assert 'style="font-size: 40px"' in render_published_page(data, "DESKTOP")
    assert 'style="font-size: 24px"' in render_published_page(data, "MOBILE")


def test_document_smart_sections_pending_then_loaded():
    page = FunnelPage(blocks=[Block(id="i", type="CONTAINER", smart_section_instance_id="I1")])
    instances = [SmartSectionInstance(id="I1", section_id="S")]

    pending = render_published_page(PublishedPageData(page=page, smart_section_instances=instances))
    assert 'data-smart-section-state="pending"' in pending

    loaded = render_published_page(PublishedPageData(
        page=page,
        smart_section_instances=instances,
        smart_sections=[SmartSection(id="S", blocks=[Block(id="p", type="PARAGRAPH", props={"text": "Partagé"})])],
    ))
    assert "<p>Partagé</p>" in loaded
    assert "pending" not in loaded
