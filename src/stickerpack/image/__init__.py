from .asset import ImageAsset, ImageEncoding, ImageProbe, encoding_for_filename
from .validator import validate_image

__all__ = [
    "ImageAsset",
    "ImageEncoding",
    "ImageProbe",
    "encoding_for_filename",
    "validate_image",
]
