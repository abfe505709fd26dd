"""
Blocs — schémas de props par type + registry.
"""
from .base import BlockProps, BlockDefinition
from .layout import ContainerProps, TwoColumnProps, FeatureGridProps
from .typography import HeadingProps, ParagraphProps, LabelProps, RichTextProps
from .media import ImageProps, VideoProps, IconProps
from .forms import InputProps, TextareaProps, SelectProps, CheckboxProps, ButtonProps, FormProps
from .components import FAQProps, TestimonialProps, PricingProps
from .embeds import IframeProps, CustomHTMLProps, ScriptProps
from .conversion import PopupProps, CountdownTimerProps, StickyBarProps
from .registry import (
    BLOCK_REGISTRY,
    get_block_definition,
    get_blocks_by_category,
    get_all_categories,
    can_have_children,
    is_child_allowed,
    parse_props,
)

__all__ = [
    # Base
    "BlockProps", "BlockDefinition",
    # Props par famille
    "ContainerProps", "TwoColumnProps", "FeatureGridProps",
    "HeadingProps", "ParagraphProps", "LabelProps", "RichTextProps",
    "ImageProps", "VideoProps", "IconProps",
    "InputProps", "TextareaProps", "SelectProps", "CheckboxProps", "ButtonProps", "FormProps",
    "FAQProps", "TestimonialProps", "PricingProps",
    "IframeProps", "CustomHTMLProps", "ScriptProps",
    "PopupProps", "CountdownTimerProps", "StickyBarProps",
    # Registry
    "BLOCK_REGISTRY", "get_block_definition", "get_blocks_by_category", "get_all_categories",
    "can_have_children", "is_child_allowed", "parse_props",
]
