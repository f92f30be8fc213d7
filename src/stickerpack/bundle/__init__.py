from .assets import AssetProvider, DirectoryAssetProvider, MappingAssetProvider
from .loader import load_bundle, parse_bundle, parse_pack_record
from .models import BundleRecord, PackRecord, StickerRecord

__all__ = [
    "AssetProvider",
    "DirectoryAssetProvider",
    "MappingAssetProvider",
    "load_bundle",
    "parse_bundle",
    "parse_pack_record",
    "BundleRecord",
    "PackRecord",
    "StickerRecord",
]
