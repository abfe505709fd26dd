"""Tests style resolver — fusion breakpoint + conversion CSS inline."""
import pytest

from funnel_builder.core.schemas import Block, Breakpoint, DeviceType
from funnel_builder.core.styles import (
    STYLE_UNITS,
    css_value,
    resolve_block_styles,
    resolve_styles,
    style_unit,
    to_inline_css,
    to_kebab,
)


# ── resolve_styles ──────────────────────────────────────────────────────────

def test_override_wins_per_key():
    assert resolve_styles({"color": "red", "padding": 8}, {"color": "blue"}) == {"color": "blue", "padding": 8}


def test_none_override_keeps_base():
    assert resolve_styles({"color": "red"}, {"color": None}) == {"color": "red"}


def test_missing_override():
    assert resolve_styles({"a": 1}, None) == {"a": 1}
    assert resolve_styles(None, {"a": 1}) == {"a": 1}


def test_override_adds_keys():
    assert resolve_styles({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}


def test_inputs_not_mutated():
    base, override = {"a": 1}, {"a": 2}
    resolve_styles(base, override)
    assert base == {"a": 1}
    assert override == {"a": 2}


# ── resolve_block_styles ────────────────────────────────────────────────────

def make_block():
    return Block(
        id="b1", type="HEADING",
        styles={"fontSize": 32, "color": "#000"},
        breakpoints=[Breakpoint(block_id="b1", device=DeviceType.MOBILE, styles={"fontSize": 20})],
    )


def test_desktop_uses_base_styles():
    assert resolve_block_styles(make_block(), DeviceType.DESKTOP) == {"fontSize": 32, "color": "#000"}


def test_mobile_applies_breakpoint():
    assert resolve_block_styles(make_block(), DeviceType.MOBILE) == {"fontSize": 20, "color": "#000"}


def test_tablet_without_breakpoint_equals_base():
    assert resolve_block_styles(make_block(), "TABLET") == {"fontSize": 32, "color": "#000"}


# ── Unités ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("key", ["padding", "marginTop", "width", "maxHeight", "fontSize",
                                 "borderRadius", "gap", "top", "borderLeftWidth"])
def test_length_keys(key):
    assert style_unit(key) == "length"


@pytest.mark.parametrize("key", ["zIndex", "opacity", "fontWeight", "lineHeight", "flexGrow"])
def test_unitless_keys(key):
    assert style_unit(key) == "unitless"


def test_unknown_key_is_raw():
    assert style_unit("color") == "raw"
    assert style_unit("gridTemplateColumns") == "raw"


def test_kebab_case_lookup():
    assert style_unit("font-size") == "length"
    assert style_unit("z-index") == "unitless"


def test_table_only_lists_length_and_unitless_keys():
    assert set(STYLE_UNITS.values()) == {"length", "unitless"}


def test_to_kebab():
    assert to_kebab("backgroundColor") == "background-color"
    assert to_kebab("borderTopLeftRadius") == "border-top-left-radius"
    assert to_kebab("color") == "color"


def test_css_value():
    assert css_value("padding", 16) == "16px"
    assert css_value("padding", 1.5) == "1.5px"
    assert css_value("padding", "2rem") == "2rem"
    assert css_value("zIndex", 5) == "5"
    assert css_value("lineHeight", 1.6) == "1.6"
    assert css_value("flexGrow", True) == "true"


def test_inline_css():
    assert to_inline_css({"padding": 16, "zIndex": 5}) == "padding: 16px; z-index: 5"


def test_inline_css_skips_empty_values():
    assert to_inline_css({"color": "", "margin": None, "opacity": 0}) == "opacity: 0"


def test_inline_css_empty():
    assert to_inline_css({}) == ""
    assert to_inline_css(None) == ""
