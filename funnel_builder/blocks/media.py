"""Blocs média — image, vidéo, icône."""
from .base import BlockDefinition, BlockProps


class ImageProps(BlockProps):
    src: str = "https://via.placeholder.com/800x400"
    alt: str = "Placeholder image"


class VideoProps(BlockProps):
    src: str = ""
    poster: str = ""
    autoplay: bool = False
    loop: bool = False
    controls: bool = True


class IconProps(BlockProps):
    name: str = "star"
    size: int = 24


DEFINITIONS = [
    BlockDefinition(
        type="IMAGE", category="Media", label="Image",
        props_model=ImageProps,
        default_styles={"width": "100%", "height": "auto", "borderRadius": 8},
    ),
    BlockDefinition(
        type="VIDEO", category="Media", label="Video",
        props_model=VideoProps,
        default_styles={"width": "100%", "height": "auto", "borderRadius": 8},
    ),
    BlockDefinition(
        type="ICON", category="Media", label="Icon",
        props_model=IconProps,
        default_styles={"fontSize": 24, "color": "#000000"},
    ),
]
