"""Sticker pack bundle ingestion and validation."""

from .assembler import PackAssembler
from .bundle import DirectoryAssetProvider, MappingAssetProvider
from .catalog import CatalogBuilder, FailurePolicy
from .errors import StickerPackError
from .image import ImageAsset, ImageEncoding, validate_image
from .models import Catalog, Pack, Sticker
from .rules import DEFAULT_RULES, ConstraintRules, ImageRole

__version__ = "0.1.0"

__all__ = [
    "PackAssembler",
    "DirectoryAssetProvider",
    "MappingAssetProvider",
    "CatalogBuilder",
    "FailurePolicy",
    "StickerPackError",
    "ImageAsset",
    "ImageEncoding",
    "validate_image",
    "Catalog",
    "Pack",
    "Sticker",
    "DEFAULT_RULES",
    "ConstraintRules",
    "ImageRole",
]
