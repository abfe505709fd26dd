"""
funnel_builder — arbre de blocs des funnels + rendu HTML statique des pages publiées.

Usage:
    from funnel_builder import Block, PublishedPageData, FunnelPage, render_published_page

    page = FunnelPage(name="Landing", blocks=[
        Block(id="1", type="CONTAINER"),
        Block(id="2", type="HEADING", parent_block_id="1", props={"text": "Hi"}),
    ])
    html = render_published_page(PublishedPageData(page=page), device="MOBILE")
"""
from .core import (
    DeviceType,
    BlockType,
    PixelProvider,
    Breakpoint,
    BlockEvent,
    Block,
    SmartSection,
    SmartSectionInstance,
    PixelIntegration,
    FunnelPage,
    PublishedPageData,
    ChildrenState,
    BlockNode,
    build_tree,
    collect_issues,
    resolve_styles,
    resolve_block_styles,
    to_inline_css,
    SmartSectionContext,
    resolve_children,
    resolve_forest,
)
from .core.errors import (
    FunnelBuilderError,
    MutationError,
    BlockNotFoundError,
    InvalidParentError,
    BlockCycleError,
    NestedSmartSectionError,
    SmartSectionCycleError,
)
from .blocks import BLOCK_REGISTRY, get_block_definition, can_have_children, parse_props
from .renderer import render, render_blocks, render_published_page, escape_html

__version__ = "0.1.0"

__all__ = [
    "DeviceType", "BlockType", "PixelProvider",
    "Breakpoint", "BlockEvent", "Block",
    "SmartSection", "SmartSectionInstance", "PixelIntegration", "FunnelPage", "PublishedPageData",
    "ChildrenState", "BlockNode", "build_tree", "collect_issues",
    "resolve_styles", "resolve_block_styles", "to_inline_css",
    "SmartSectionContext", "resolve_children", "resolve_forest",
    "FunnelBuilderError", "MutationError", "BlockNotFoundError", "InvalidParentError",
    "BlockCycleError", "NestedSmartSectionError", "SmartSectionCycleError",
    "BLOCK_REGISTRY", "get_block_definition", "can_have_children", "parse_props",
    "render", "render_blocks", "render_published_page", "escape_html",
]
