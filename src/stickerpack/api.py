"""High-level API for stickerpack."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .bundle.assets import DirectoryAssetProvider
from .bundle.loader import bundle_format, read_bundle_bytes
from .catalog import CatalogBuilder, FailurePolicy
from .errors import StickerPackError
from .logging import get_logger
from .models import Catalog
from .rules import DEFAULT_RULES, ConstraintRules

__all__ = [
    "BuildOptions",
    "build_catalog",
    "validate_bundle",
    "Catalog",
    "FailurePolicy",
]


@dataclass(slots=True)
class BuildOptions:
    bundle_path: Path
    # Directory holding the image files; defaults to the bundle's directory.
    assets_dir: Path | None = None
    policy: FailurePolicy = FailurePolicy.FAIL_FAST
    enforce_frame_timing: bool = False
    rules: ConstraintRules = DEFAULT_RULES


def _builder(options: BuildOptions) -> CatalogBuilder:
    assets_dir = options.assets_dir or Path(options.bundle_path).parent
    rules = options.rules
    if options.enforce_frame_timing and not rules.enforce_frame_timing:
        rules = replace(rules, enforce_frame_timing=True)
    return CatalogBuilder(
        DirectoryAssetProvider(assets_dir), rules=rules, policy=options.policy
    )


def build_catalog(options: BuildOptions) -> Catalog:
    logger = get_logger()
    data = read_bundle_bytes(options.bundle_path)
    catalog = _builder(options).build(data, bundle_format(options.bundle_path))
    logger.info(
        "Built catalog from %s (%d packs)",
        Path(options.bundle_path).name,
        len(catalog.packs),
    )
    return catalog


def validate_bundle(
    path: str | Path,
    assets_dir: str | Path | None = None,
    *,
    policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    enforce_frame_timing: bool = False,
) -> list[dict[str, Any]]:
    """Validate a bundle file; returns error dicts, empty when valid."""
    options = BuildOptions(
        bundle_path=Path(path),
        assets_dir=Path(assets_dir) if assets_dir is not None else None,
        policy=policy,
        enforce_frame_timing=enforce_frame_timing,
    )
    try:
        catalog = build_catalog(options)
    except StickerPackError as e:
        return [e.to_dict()]
    return [v.to_dict() for v in catalog.violations]
