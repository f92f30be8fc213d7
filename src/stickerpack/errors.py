"""Error definitions for stickerpack.

Every violation found while ingesting a bundle is raised as a subclass of
StickerPackError. Each concrete kind carries a stable ``code`` and a
``context`` dict with enough detail (pack identifier, sticker file, numeric
actual-vs-limit values) to render an actionable message.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict

E_BUNDLE_NOT_FOUND = "E_BUNDLE_NOT_FOUND"
E_MALFORMED_BUNDLE = "E_MALFORMED_BUNDLE"
E_IDENTIFIER = "E_IDENTIFIER"
E_EMPTY_STRING = "E_EMPTY_STRING"
E_STRING_TOO_LONG = "E_STRING_TOO_LONG"
E_FILE_NOT_FOUND = "E_FILE_NOT_FOUND"
E_UNSUPPORTED_FORMAT = "E_UNSUPPORTED_FORMAT"
E_DECODE_FAILED = "E_DECODE_FAILED"
E_EMPTY_IMAGE = "E_EMPTY_IMAGE"
E_IMAGE_TOO_LARGE = "E_IMAGE_TOO_LARGE"
E_DIMENSIONS = "E_DIMENSIONS"
E_ANIMATED_TRAY = "E_ANIMATED_TRAY"
E_FRAME_TOO_SHORT = "E_FRAME_TOO_SHORT"
E_ANIMATION_TOO_LONG = "E_ANIMATION_TOO_LONG"
E_STICKER_COUNT = "E_STICKER_COUNT"
E_TOO_MANY_EMOJIS = "E_TOO_MANY_EMOJIS"
E_ANIMATED_MISMATCH = "E_ANIMATED_MISMATCH"
E_INTERNAL = "E_INTERNAL"


@dataclass(eq=False)
class StickerPackError(Exception):
    message: str
    context: Dict[str, Any] = field(default_factory=dict)

    code: ClassVar[str] = E_INTERNAL

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def add_context(self, **extra: Any) -> "StickerPackError":
        """Merge location info into the context; existing keys win."""
        merged = {k: v for k, v in extra.items() if v is not None}
        merged.update(self.context)
        self.context = merged
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "kind": type(self).__name__,
            "message": self.message,
            "context": dict(self.context),
        }


# Structural ---------------------------------------------------------------


class BundleError(StickerPackError):
    pass


class BundleNotFound(BundleError):
    code = E_BUNDLE_NOT_FOUND


class MalformedBundle(BundleError):
    code = E_MALFORMED_BUNDLE


# Asset resolution ---------------------------------------------------------


class AssetResolutionError(StickerPackError):
    pass


class FileNotFound(AssetResolutionError):
    code = E_FILE_NOT_FOUND


class UnsupportedImageFormat(AssetResolutionError):
    code = E_UNSUPPORTED_FORMAT


class DecodeFailed(AssetResolutionError):
    code = E_DECODE_FAILED


# Image constraints --------------------------------------------------------


class ImageValidationError(StickerPackError):
    pass


class EmptyImage(ImageValidationError):
    code = E_EMPTY_IMAGE


class ImageTooLarge(ImageValidationError):
    code = E_IMAGE_TOO_LARGE


class IncorrectDimensions(ImageValidationError):
    code = E_DIMENSIONS


class AnimatedNotSupportedForTray(ImageValidationError):
    code = E_ANIMATED_TRAY


class FrameDurationTooShort(ImageValidationError):
    code = E_FRAME_TOO_SHORT


class AnimationTooLong(ImageValidationError):
    code = E_ANIMATION_TOO_LONG


# Pack level ---------------------------------------------------------------


class PackAssemblyError(StickerPackError):
    pass


class DuplicateOrMissingIdentifier(PackAssemblyError):
    code = E_IDENTIFIER


class EmptyString(PackAssemblyError):
    code = E_EMPTY_STRING


class StringTooLong(PackAssemblyError):
    code = E_STRING_TOO_LONG


class StickerCountOutOfRange(PackAssemblyError):
    code = E_STICKER_COUNT


class TooManyEmojis(PackAssemblyError):
    code = E_TOO_MANY_EMOJIS


class AnimatedStaticMismatch(PackAssemblyError):
    code = E_ANIMATED_MISMATCH


def format_kb(num_bytes: int) -> str:
    return f"{round(num_bytes / 1024, 2)} KB"


__all__ = [
    "StickerPackError",
    "BundleError",
    "BundleNotFound",
    "MalformedBundle",
    "AssetResolutionError",
    "FileNotFound",
    "UnsupportedImageFormat",
    "DecodeFailed",
    "ImageValidationError",
    "EmptyImage",
    "ImageTooLarge",
    "IncorrectDimensions",
    "AnimatedNotSupportedForTray",
    "FrameDurationTooShort",
    "AnimationTooLong",
    "PackAssemblyError",
    "DuplicateOrMissingIdentifier",
    "EmptyString",
    "StringTooLong",
    "StickerCountOutOfRange",
    "TooManyEmojis",
    "AnimatedStaticMismatch",
    "format_kb",
    "E_BUNDLE_NOT_FOUND",
    "E_MALFORMED_BUNDLE",
    "E_IDENTIFIER",
    "E_EMPTY_STRING",
    "E_STRING_TOO_LONG",
    "E_FILE_NOT_FOUND",
    "E_UNSUPPORTED_FORMAT",
    "E_DECODE_FAILED",
    "E_EMPTY_IMAGE",
    "E_IMAGE_TOO_LARGE",
    "E_DIMENSIONS",
    "E_ANIMATED_TRAY",
    "E_FRAME_TOO_SHORT",
    "E_ANIMATION_TOO_LONG",
    "E_STICKER_COUNT",
    "E_TOO_MANY_EMOJIS",
    "E_ANIMATED_MISMATCH",
    "E_INTERNAL",
]
