"""Blocs de layout — conteneurs génériques (enfants libres)."""
from typing import Literal

from .base import BlockDefinition, BlockProps


class ContainerProps(BlockProps):
    direction: Literal["column", "row"] = "column"


class TwoColumnProps(BlockProps):
    column_ratio: str = "1:1"


class FeatureGridProps(BlockProps):
    columns: int = 3


DEFINITIONS = [
    BlockDefinition(
        type="CONTAINER", category="Layouts", label="Container",
        props_model=ContainerProps,
        default_styles={"display": "flex", "flexDirection": "column", "gap": "12px", "padding": 24, "width": "100%"},
        can_have_children=True,
    ),
    BlockDefinition(
        type="ONE_COLUMN", category="Layouts", label="1 Column",
        default_styles={"display": "flex", "flexDirection": "column", "gap": "16px", "width": "100%",
                        "maxWidth": "1200px", "margin": "0 auto", "padding": 24},
        can_have_children=True,
    ),
    BlockDefinition(
        type="TWO_COLUMN", category="Layouts", label="2 Columns",
        props_model=TwoColumnProps,
        default_styles={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "24px", "width": "100%", "padding": 24},
        can_have_children=True,
    ),
    BlockDefinition(
        type="THREE_COLUMN", category="Layouts", label="3 Columns",
        default_styles={"display": "grid", "gridTemplateColumns": "1fr 1fr 1fr", "gap": "24px", "width": "100%", "padding": 24},
        can_have_children=True,
    ),
    BlockDefinition(
        type="SECTION", category="Layouts", label="Section",
        default_styles={"display": "flex", "flexDirection": "column", "gap": "16px", "width": "100%",
                        "padding": 64, "backgroundColor": "#ffffff"},
        can_have_children=True,
    ),
    BlockDefinition(
        type="FEATURE_GRID", category="Components", label="Feature Grid",
        props_model=FeatureGridProps,
        default_styles={"display": "grid", "gridTemplateColumns": "1fr 1fr 1fr", "gap": "24px", "padding": 24},
        can_have_children=True,
    ),
]
