"""
Schémas Pydantic du Funnel Builder.
Structure plate (telle que renvoyée par la couche de persistance) :
  FunnelPage → [Block] (parent_block_id + order) → Breakpoint par device

Les champs acceptent le camelCase du front (parentBlockId, smartSectionInstanceId…)
et le snake_case côté Python.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DeviceType(str, Enum):
    DESKTOP = "DESKTOP"
    TABLET  = "TABLET"
    MOBILE  = "MOBILE"


class BlockType(str, Enum):
    # Layouts
    CONTAINER       = "CONTAINER"
    ONE_COLUMN      = "ONE_COLUMN"
    TWO_COLUMN      = "TWO_COLUMN"
    THREE_COLUMN    = "THREE_COLUMN"
    SECTION         = "SECTION"
    # Typography
    HEADING         = "HEADING"
    PARAGRAPH       = "PARAGRAPH"
    LABEL           = "LABEL"
    RICH_TEXT       = "RICH_TEXT"
    # Media
    IMAGE           = "IMAGE"
    VIDEO           = "VIDEO"
    ICON            = "ICON"
    # Forms
    INPUT           = "INPUT"
    TEXTAREA        = "TEXTAREA"
    SELECT          = "SELECT"
    CHECKBOX        = "CHECKBOX"
    BUTTON          = "BUTTON"
    FORM            = "FORM"
    # Components
    CARD            = "CARD"
    FAQ             = "FAQ"
    TESTIMONIAL     = "TESTIMONIAL"
    PRICING         = "PRICING"
    FEATURE_GRID    = "FEATURE_GRID"
    # Embeds
    IFRAME          = "IFRAME"
    CUSTOM_HTML     = "CUSTOM_HTML"
    SCRIPT          = "SCRIPT"
    # Conversion
    POPUP           = "POPUP"
    COUNTDOWN_TIMER = "COUNTDOWN_TIMER"
    STICKY_BAR      = "STICKY_BAR"


class PixelProvider(str, Enum):
    META_PIXEL       = "META_PIXEL"
    GOOGLE_ANALYTICS = "GOOGLE_ANALYTICS"
    TIKTOK_PIXEL     = "TIKTOK_PIXEL"
    CUSTOM           = "CUSTOM"


class FunnelModel(BaseModel):
    """Base commune : alias camelCase + population par nom Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class Breakpoint(FunnelModel):
    """Override de styles pour un device (tablet/mobile). Desktop = Block.styles."""
    block_id: Optional[str] = None
    device: DeviceType
    styles: Dict[str, Any] = Field(default_factory=dict)


class BlockEvent(FunnelModel):
    """Événement de tracking attaché à l'interaction principale d'un bloc."""
    event_type: str
    event_name: Optional[str] = None
    parameters: Dict[str, Any] = Field(default_factory=dict)


class Block(FunnelModel):
    """Élément placé sur une page ou dans une smart section."""
    id: str
    type: str = Field(..., description="BlockType ou type inconnu (rendu générique)")
    parent_block_id: Optional[str] = None
    order: int = 0
    props: Dict[str, Any] = Field(default_factory=dict)
    styles: Dict[str, Any] = Field(default_factory=dict)
    visible: bool = True
    locked: bool = False
    smart_section_instance_id: Optional[str] = None
    breakpoints: List[Breakpoint] = Field(default_factory=list)
    tracking_event: Optional[BlockEvent] = None

    def breakpoint_for(self, device: DeviceType) -> Optional[Breakpoint]:
        for bp in self.breakpoints:
            if bp.device == device:
                return bp
        return None


class SmartSection(FunnelModel):
    """Sous-arbre réutilisable, transclus (pas copié) par ses instances."""
    id: str
    name: str = ""
    description: Optional[str] = None
    category: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)


class SmartSectionInstance(FunnelModel):
    id: str
    section_id: str


class PixelIntegration(FunnelModel):
    provider: Union[PixelProvider, str] = Field(..., description="PixelProvider ; valeur inconnue ignorée au rendu")
    pixel_id: str = ""
    enabled: bool = True
    metadata: Optional[Dict[str, Any]] = None


class FunnelPage(FunnelModel):
    id: str = ""
    name: str = ""
    slug: Optional[str] = None
    lang: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_image: Optional[str] = None
    custom_css: Optional[str] = None
    custom_js: Optional[str] = None
    blocks: List[Block] = Field(default_factory=list)


class PublishedPageData(FunnelModel):
    """Entrée complète du rendu publié."""
    page: FunnelPage
    pixel_integrations: List[PixelIntegration] = Field(default_factory=list)
    smart_sections: Optional[List[SmartSection]] = Field(
        default=None,
        description="Sections chargées ; None = pas encore chargées (état pending)",
    )
    smart_section_instances: List[SmartSectionInstance] = Field(default_factory=list)
