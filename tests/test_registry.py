"""Tests registry des blocs — capacités, catégories, validation des props."""
import pytest

from funnel_builder.blocks import (
    BLOCK_REGISTRY,
    ButtonProps,
    CountdownTimerProps,
    HeadingProps,
    SelectProps,
    can_have_children,
    get_all_categories,
    get_block_definition,
    get_blocks_by_category,
    is_child_allowed,
    parse_props,
)
from funnel_builder.core.schemas import BlockType


# ── Registry ────────────────────────────────────────────────────────────────

def test_every_block_type_is_registered():
    assert set(BLOCK_REGISTRY) == {t.value for t in BlockType}


def test_lookup_accepts_enum_and_string():
    assert get_block_definition(BlockType.HEADING) is get_block_definition("HEADING")
    assert get_block_definition("NOT_A_REAL_TYPE") is None


def test_categories_order():
    assert get_all_categories() == [
        "Layouts", "Typography", "Media", "Forms", "Components", "Embeds", "Conversion",
    ]


def test_blocks_by_category():
    types = {d.type for d in get_blocks_by_category("Conversion")}
    assert types == {"POPUP", "COUNTDOWN_TIMER", "STICKY_BAR"}
    assert "FEATURE_GRID" in {d.type for d in get_blocks_by_category("Components")}


@pytest.mark.parametrize("block_type,expected", [
    ("CONTAINER", True),
    ("SECTION", True),
    ("CARD", True),
    ("FORM", True),
    ("POPUP", True),
    ("HEADING", False),
    ("BUTTON", False),
    ("IMAGE", False),
    ("NOT_A_REAL_TYPE", False),
])
def test_can_have_children(block_type, expected):
    assert can_have_children(block_type) is expected


def test_allowed_children_restricts_form():
    assert is_child_allowed("INPUT", "FORM")
    assert is_child_allowed("BUTTON", "FORM")
    assert not is_child_allowed("IMAGE", "FORM")


def test_allowed_children_restricts_sticky_bar():
    assert is_child_allowed("PARAGRAPH", "STICKY_BAR")
    assert not is_child_allowed("FORM", "STICKY_BAR")


def test_container_accepts_any_child():
    assert is_child_allowed("IMAGE", "CONTAINER")
    assert is_child_allowed("NOT_A_REAL_TYPE", "CONTAINER")


def test_leaf_accepts_nothing():
    assert not is_child_allowed("PARAGRAPH", "HEADING")


def test_default_props_are_camel_case():
    props = get_block_definition("COUNTDOWN_TIMER").default_props()
    assert props["expiredText"] == "Offer expired!"
    assert props["duration"] == 600
    assert "endDate" not in props


# ── parse_props ─────────────────────────────────────────────────────────────

def test_parse_props_defaults():
    p = parse_props("HEADING", {})
    assert isinstance(p, HeadingProps)
    assert p.text == "Heading"
    assert p.tag == "h2"


def test_parse_props_camel_case_keys():
    p = parse_props("COUNTDOWN_TIMER", {"expiredText": "Trop tard", "textBefore": "Fin dans"})
    assert isinstance(p, CountdownTimerProps)
    assert p.expired_text == "Trop tard"
    assert p.text_before == "Fin dans"


def test_parse_props_invalid_value_falls_back_to_default():
    p = parse_props("HEADING", {"text": "Titre", "tag": "h9"})
    assert p.text == "Titre"
    assert p.tag == "h2"


def test_parse_props_none_value_uses_default():
    p = parse_props("BUTTON", {"text": None})
    assert isinstance(p, ButtonProps)
    assert p.text == "Click Me"


def test_parse_props_coerces_numbers_to_text():
    p = parse_props("PARAGRAPH", {"text": 42})
    assert p.text == "42"


def test_parse_props_keeps_unknown_keys():
    p = parse_props("PARAGRAPH", {"text": "a", "dataFoo": "bar"})
    assert p.model_extra == {"dataFoo": "bar"}


def test_parse_props_unknown_type_returns_raw_props():
    p = parse_props("NOT_A_REAL_TYPE", {"anything": 1})
    assert p.model_extra == {"anything": 1}


def test_button_target_url_prefers_link():
    assert ButtonProps(link="/a", href="/b").target_url == "/a"
    assert ButtonProps(href="/b").target_url == "/b"
    assert ButtonProps().target_url == ""


def test_select_option_list():
    assert SelectProps(options=" Rouge, Vert ,,Bleu ").option_list() == ["Rouge", "Vert", "Bleu"]
