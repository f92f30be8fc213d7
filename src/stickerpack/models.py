"""Validated catalog model.

Instances are only built by PackAssembler/CatalogBuilder after every rule
has passed, and are never mutated afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import StickerPackError
from .image.asset import ImageAsset


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """Empty strings mean "not provided"."""
    return value if value else None


def _image_dict(image: ImageAsset) -> Dict[str, Any]:
    w, h = image.pixel_dimensions
    return {
        "file": image.filename,
        "encoding": image.encoding.value,
        "bytes": image.byte_size,
        "width": w,
        "height": h,
        "animated": image.is_animated,
    }


@dataclass(frozen=True, slots=True)
class Sticker:
    image: ImageAsset
    emojis: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"image": _image_dict(self.image), "emojis": list(self.emojis)}


@dataclass(frozen=True, slots=True)
class Pack:
    identifier: str
    name: str
    publisher: str
    tray_image: ImageAsset
    is_animated: bool
    stickers: Tuple[Sticker, ...]
    publisher_website: Optional[str] = None
    privacy_policy_website: Optional[str] = None
    license_agreement_website: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "publisher": self.publisher,
            "animated": self.is_animated,
            "tray_image": _image_dict(self.tray_image),
            "stickers": [s.to_dict() for s in self.stickers],
            "publisher_website": self.publisher_website,
            "privacy_policy_website": self.privacy_policy_website,
            "license_agreement_website": self.license_agreement_website,
        }


@dataclass(frozen=True, slots=True)
class Catalog:
    packs: Tuple[Pack, ...] = ()
    ios_store_link: Optional[str] = None
    android_store_link: Optional[str] = None
    # Only populated under the collect-all policy.
    violations: Tuple[StickerPackError, ...] = ()

    @property
    def sticker_count(self) -> int:
        return sum(len(p.stickers) for p in self.packs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ios_app_store_link": self.ios_store_link,
            "android_play_store_link": self.android_store_link,
            "sticker_packs": [p.to_dict() for p in self.packs],
            "violations": [v.to_dict() for v in self.violations],
        }


__all__ = ["Sticker", "Pack", "Catalog", "normalize_optional"]
