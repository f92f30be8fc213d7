"""Asset resolution: filename -> ImageAsset.

Providers only supply bytes and the encoding tag derived from the file
extension. Rule checks happen later in validate_image().
"""

from __future__ import annotations
from pathlib import Path
from typing import Mapping, Optional, Protocol

from ..errors import FileNotFound
from ..image.asset import ImageAsset
from ..rules import ImageRole

__all__ = [
    "AssetProvider",
    "DirectoryAssetProvider",
    "MappingAssetProvider",
]


class AssetProvider(Protocol):
    def resolve(
        self, filename: str, role: Optional[ImageRole] = None
    ) -> ImageAsset: ...


def _safe_file_path(base_dir: Path, file_path: str) -> Path:
    base_dir = base_dir.resolve()
    resolved = (base_dir / file_path).resolve()
    resolved.relative_to(base_dir)  # raises ValueError if escapes
    return resolved


def _not_found(filename: str) -> FileNotFound:
    return FileNotFound(f"{filename} not found.", {"file": filename})


class DirectoryAssetProvider:
    """Reads assets from files below ``base_dir``."""

    def __init__(self, base_dir: str | Path):
        self.base_dir = Path(base_dir)

    def resolve(
        self, filename: str, role: Optional[ImageRole] = None
    ) -> ImageAsset:
        try:
            path = _safe_file_path(self.base_dir, filename)
        except ValueError as e:
            raise _not_found(filename) from e
        if not path.is_file():
            raise _not_found(filename)
        return ImageAsset.from_file_bytes(filename, path.read_bytes(), role)


class MappingAssetProvider:
    """In-memory provider; keys are the filenames used in the bundle."""

    def __init__(self, files: Mapping[str, bytes]):
        self.files = dict(files)

    def resolve(
        self, filename: str, role: Optional[ImageRole] = None
    ) -> ImageAsset:
        data = self.files.get(filename)
        if data is None:
            raise _not_found(filename)
        return ImageAsset.from_file_bytes(filename, data, role)
