"""Image payload value type.

Derived properties are decoded lazily with Pillow and memoized per instance.
A payload Pillow cannot decode raises DecodeFailed; it is never reported as a
zero-sized or zero-dimension image.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from pathlib import PurePosixPath
from typing import Optional, Tuple
import io
import warnings

from PIL import Image, ImageSequence, UnidentifiedImageError

from ..errors import DecodeFailed, UnsupportedImageFormat
from ..rules import ImageRole


class ImageEncoding(Enum):
    RASTER = "raster"
    ANIMATABLE_RASTER = "animatable-raster"

    @property
    def pillow_formats(self) -> Tuple[str, ...]:
        if self is ImageEncoding.RASTER:
            return ("PNG",)
        return ("WEBP",)


_EXTENSIONS = {
    "png": ImageEncoding.RASTER,
    "webp": ImageEncoding.ANIMATABLE_RASTER,
}


def encoding_for_filename(filename: str) -> ImageEncoding:
    ext = PurePosixPath(filename).suffix.lstrip(".")
    encoding = _EXTENSIONS.get(ext)
    if encoding is None:
        raise UnsupportedImageFormat(
            f"{filename}: {ext or '<none>'} is not a supported format.",
            {"file": filename, "extension": ext},
        )
    return encoding


@dataclass(frozen=True, slots=True)
class ImageProbe:
    format: str
    width: int
    height: int
    frame_count: int
    frame_durations_ms: Tuple[int, ...]


@dataclass(frozen=True)
class ImageAsset:
    data: bytes = field(repr=False)
    encoding: ImageEncoding
    role: Optional[ImageRole] = None
    filename: Optional[str] = None

    @cached_property
    def byte_size(self) -> int:
        return len(self.data)

    @cached_property
    def probe(self) -> ImageProbe:
        try:
            with warnings.catch_warnings():
                # Headers claiming huge canvases count as undecodable.
                warnings.simplefilter("error", Image.DecompressionBombWarning)
                with Image.open(
                    io.BytesIO(self.data), formats=self.encoding.pillow_formats
                ) as img:
                    width, height = img.size
                    img.load()
                    frame_count = int(getattr(img, "n_frames", 1) or 1)
                    durations = []
                    if frame_count > 1:
                        # WebP frames only publish their duration once loaded.
                        for frame in ImageSequence.Iterator(img):
                            frame.load()
                            durations.append(
                                int(frame.info.get("duration") or 0)
                            )
                    return ImageProbe(
                        format=img.format or "",
                        width=width,
                        height=height,
                        frame_count=frame_count,
                        frame_durations_ms=tuple(durations),
                    )
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            Image.DecompressionBombWarning,
            OSError,
            ValueError,
            EOFError,
            RuntimeError,
        ) as e:
            raise DecodeFailed(
                f"{self.filename or 'image'}: could not be decoded as "
                f"{self.encoding.value} ({e})",
                {"file": self.filename, "encoding": self.encoding.value},
            ) from e

    @cached_property
    def is_animated(self) -> bool:
        # Non-animatable encodings are static without needing a decode.
        if self.encoding is ImageEncoding.RASTER:
            return False
        return self.probe.frame_count > 1

    @cached_property
    def pixel_dimensions(self) -> Tuple[int, int]:
        p = self.probe
        return (p.width, p.height)

    @cached_property
    def frame_durations_ms(self) -> Tuple[int, ...]:
        if not self.is_animated:
            return ()
        return self.probe.frame_durations_ms

    @classmethod
    def from_file_bytes(
        cls, filename: str, data: bytes, role: Optional[ImageRole] = None
    ) -> "ImageAsset":
        return cls(
            data=data,
            encoding=encoding_for_filename(filename),
            role=role,
            filename=filename,
        )


__all__ = [
    "ImageEncoding",
    "ImageAsset",
    "ImageProbe",
    "encoding_for_filename",
]
