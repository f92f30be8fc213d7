"""Platform limits for sticker packs (the rulebook)."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

MAX_STATIC_STICKER_FILE_SIZE = 100 * 1024
MAX_ANIMATED_STICKER_FILE_SIZE = 500 * 1024
MAX_TRAY_IMAGE_FILE_SIZE = 50 * 1024

# Frame timing limits; only checked when enforce_frame_timing is set.
MIN_ANIMATED_FRAME_DURATION_MS = 8
MAX_ANIMATED_TOTAL_DURATION_MS = 10000

TRAY_IMAGE_DIMENSIONS: Tuple[int, int] = (96, 96)
IMAGE_DIMENSIONS: Tuple[int, int] = (512, 512)

MIN_STICKERS_PER_PACK = 3
MAX_STICKERS_PER_PACK = 30

MAX_CHAR_LIMIT = 128

MAX_EMOJIS_COUNT = 3


class ImageRole(Enum):
    TRAY = "tray"
    STICKER = "sticker"


@dataclass(frozen=True, slots=True)
class ConstraintRules:
    max_static_sticker_file_size: int = MAX_STATIC_STICKER_FILE_SIZE
    max_animated_sticker_file_size: int = MAX_ANIMATED_STICKER_FILE_SIZE
    max_tray_image_file_size: int = MAX_TRAY_IMAGE_FILE_SIZE
    min_animated_frame_duration_ms: int = MIN_ANIMATED_FRAME_DURATION_MS
    max_animated_total_duration_ms: int = MAX_ANIMATED_TOTAL_DURATION_MS
    tray_image_dimensions: Tuple[int, int] = TRAY_IMAGE_DIMENSIONS
    image_dimensions: Tuple[int, int] = IMAGE_DIMENSIONS
    min_stickers_per_pack: int = MIN_STICKERS_PER_PACK
    max_stickers_per_pack: int = MAX_STICKERS_PER_PACK
    max_char_limit: int = MAX_CHAR_LIMIT
    max_emojis_count: int = MAX_EMOJIS_COUNT
    enforce_frame_timing: bool = False

    def max_file_size(self, role: ImageRole, animated: bool) -> int:
        if role is ImageRole.TRAY:
            return self.max_tray_image_file_size
        if animated:
            return self.max_animated_sticker_file_size
        return self.max_static_sticker_file_size

    def dimensions(self, role: ImageRole) -> Tuple[int, int]:
        if role is ImageRole.TRAY:
            return self.tray_image_dimensions
        return self.image_dimensions


DEFAULT_RULES = ConstraintRules()

__all__ = [
    "ImageRole",
    "ConstraintRules",
    "DEFAULT_RULES",
    "MAX_STATIC_STICKER_FILE_SIZE",
    "MAX_ANIMATED_STICKER_FILE_SIZE",
    "MAX_TRAY_IMAGE_FILE_SIZE",
    "MIN_ANIMATED_FRAME_DURATION_MS",
    "MAX_ANIMATED_TOTAL_DURATION_MS",
    "TRAY_IMAGE_DIMENSIONS",
    "IMAGE_DIMENSIONS",
    "MIN_STICKERS_PER_PACK",
    "MAX_STICKERS_PER_PACK",
    "MAX_CHAR_LIMIT",
    "MAX_EMOJIS_COUNT",
]
