"""Declarative bundle records (types checked, rules not yet applied)."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple


@dataclass(frozen=True, slots=True)
class StickerRecord:
    image_file: str
    emojis: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PackRecord:
    index: int
    identifier: Optional[str]
    name: str
    publisher: str
    tray_image_file: str
    stickers: Tuple[StickerRecord, ...] = ()
    animated_sticker_pack: bool = False
    publisher_website: Optional[str] = None
    privacy_policy_website: Optional[str] = None
    license_agreement_website: Optional[str] = None

    @property
    def path(self) -> str:
        return f"sticker_packs[{self.index}]"


@dataclass(slots=True)
class BundleRecord:
    ios_app_store_link: Optional[str] = None
    android_play_store_link: Optional[str] = None
    # Raw pack entries; each is parsed on demand so violations surface in
    # pack order.
    raw_packs: List[Any] = field(default_factory=list)


__all__ = ["StickerRecord", "PackRecord", "BundleRecord"]
