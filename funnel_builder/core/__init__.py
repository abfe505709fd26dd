"""Core — modèle de données, arbre, styles, smart sections."""
from .schemas import (
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
)
from .tree import (
    ChildrenState,
    OwnedChildren,
    TranscludedChildren,
    BlockNode,
    TreeIssue,
    build_tree,
    flatten_tree,
    find_node,
    collect_issues,
)
from .styles import STYLE_UNITS, resolve_styles, resolve_block_styles, style_unit, to_kebab, css_value, to_inline_css
from .smart_sections import SmartSectionContext, ResolvedChildren, resolve_children, resolve_forest

__all__ = [
    "DeviceType", "BlockType", "PixelProvider",
    "Breakpoint", "BlockEvent", "Block",
    "SmartSection", "SmartSectionInstance", "PixelIntegration", "FunnelPage", "PublishedPageData",
    "ChildrenState", "OwnedChildren", "TranscludedChildren", "BlockNode", "TreeIssue",
    "build_tree", "flatten_tree", "find_node", "collect_issues",
    "STYLE_UNITS", "resolve_styles", "resolve_block_styles", "style_unit", "to_kebab", "css_value", "to_inline_css",
    "SmartSectionContext", "ResolvedChildren", "resolve_children", "resolve_forest",
]
