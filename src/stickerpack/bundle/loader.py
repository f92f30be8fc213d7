"""Bundle document loading (JSON/YAML) for stickerpack."""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml

from ..errors import BundleNotFound, MalformedBundle
from .models import BundleRecord, PackRecord, StickerRecord

YAML_SUFFIXES = {".yaml", ".yml"}


def _malformed(message: str, path: str) -> MalformedBundle:
    return MalformedBundle(message, {"path": path})


def _field_path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _require_str(entry: Dict[str, Any], key: str, path: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        raise _malformed(f"'{key}' must be a string", _field_path(path, key))
    return value


def _optional_str(entry: Dict[str, Any], key: str) -> Optional[str]:
    # Anything but a string reads as absent.
    value = entry.get(key)
    return value if isinstance(value, str) else None


def parse_bundle(data: bytes | str, fmt: str = "json") -> BundleRecord:
    """Parse the top level of a bundle document.

    Pack entries are kept raw; use parse_pack_record() on each.
    """
    try:
        if fmt == "yaml":
            doc: Any = yaml.safe_load(data)
        else:
            doc = json.loads(data)
    except (ValueError, yaml.YAMLError) as e:
        raise MalformedBundle(
            f"Bundle is not valid {fmt}: {e}", {"path": ""}
        ) from e
    if not isinstance(doc, dict):
        raise _malformed("Root of bundle must be an object", "")
    packs = doc.get("sticker_packs")
    if not isinstance(packs, list):
        raise _malformed("'sticker_packs' must be a list", "sticker_packs")
    return BundleRecord(
        ios_app_store_link=_optional_str(doc, "ios_app_store_link"),
        android_play_store_link=_optional_str(doc, "android_play_store_link"),
        raw_packs=list(packs),
    )


def parse_pack_record(entry: Any, index: int) -> PackRecord:
    path = f"sticker_packs[{index}]"
    if not isinstance(entry, dict):
        raise _malformed("Pack entry must be an object", path)
    # A non-string identifier is treated as missing by the assembler.
    identifier = _optional_str(entry, "identifier")
    animated = entry.get("animated_sticker_pack", False)
    if animated is None:
        animated = False
    if not isinstance(animated, bool):
        raise _malformed(
            "'animated_sticker_pack' must be a boolean",
            f"{path}.animated_sticker_pack",
        )
    raw_stickers = entry.get("stickers")
    if not isinstance(raw_stickers, list):
        raise _malformed("'stickers' must be a list", f"{path}.stickers")
    stickers = tuple(
        _parse_sticker(s, f"{path}.stickers[{i}]")
        for i, s in enumerate(raw_stickers)
    )
    return PackRecord(
        index=index,
        identifier=identifier,
        name=_require_str(entry, "name", path),
        publisher=_require_str(entry, "publisher", path),
        tray_image_file=_require_str(entry, "tray_image_file", path),
        stickers=stickers,
        animated_sticker_pack=animated,
        publisher_website=_optional_str(entry, "publisher_website"),
        privacy_policy_website=_optional_str(entry, "privacy_policy_website"),
        license_agreement_website=_optional_str(
            entry, "license_agreement_website"
        ),
    )


def _parse_sticker(entry: Any, path: str) -> StickerRecord:
    if not isinstance(entry, dict):
        raise _malformed("Sticker entry must be an object", path)
    emojis = entry.get("emojis")
    if emojis is None:
        emojis = []
    if not isinstance(emojis, list) or not all(
        isinstance(e, str) for e in emojis
    ):
        raise _malformed("'emojis' must be a list of strings", f"{path}.emojis")
    return StickerRecord(
        image_file=_require_str(entry, "image_file", path),
        emojis=tuple(emojis),
    )


def bundle_format(path: str | Path) -> str:
    return "yaml" if Path(path).suffix.lower() in YAML_SUFFIXES else "json"


def read_bundle_bytes(path: str | Path) -> bytes:
    p = Path(path)
    if not p.is_file():
        raise BundleNotFound(f"{p} not found.", {"path": str(p)})
    return p.read_bytes()


def load_bundle(path: str | Path) -> BundleRecord:
    return parse_bundle(read_bundle_bytes(path), bundle_format(path))


__all__ = [
    "parse_bundle",
    "parse_pack_record",
    "bundle_format",
    "read_bundle_bytes",
    "load_bundle",
]
