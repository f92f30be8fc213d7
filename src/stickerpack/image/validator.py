"""Per-image rulebook checks.

Checks run in a fixed order and stop at the first failure so the reported
error is deterministic:

 1. payload is non-empty
 2. tray images are static
 3. byte size within the role/animation ceiling
 4. decode succeeds with the exact role dimensions
 5. (opt-in) animated frame timing
"""

from __future__ import annotations
from typing import Optional

from ..errors import (
    AnimatedNotSupportedForTray,
    AnimationTooLong,
    EmptyImage,
    FrameDurationTooShort,
    ImageTooLarge,
    IncorrectDimensions,
    format_kb,
)
from ..logging import get_logger
from ..rules import DEFAULT_RULES, ConstraintRules, ImageRole
from .asset import ImageAsset


def _label(asset: ImageAsset) -> str:
    return asset.filename or "image"


def _fmt_dims(dims) -> str:
    return f"{dims[0]}x{dims[1]}"


def validate_image(
    asset: ImageAsset,
    role: Optional[ImageRole] = None,
    rules: ConstraintRules = DEFAULT_RULES,
) -> ImageAsset:
    """Return ``asset`` unchanged if it satisfies every rule for ``role``.

    ``role`` defaults to the role the asset was resolved with. Raises an
    ImageValidationError subclass, or DecodeFailed when the payload cannot
    be decoded.
    """
    role = role or asset.role or ImageRole.STICKER
    name = _label(asset)
    ctx = {"file": asset.filename, "role": role.value}

    if asset.byte_size <= 0:
        raise EmptyImage(f"{name}: image file size is 0 KB.", dict(ctx))

    if role is ImageRole.TRAY and asset.is_animated:
        raise AnimatedNotSupportedForTray(
            f"{name} is an animated image. Animated images are not supported"
            " for tray images.",
            dict(ctx),
        )

    animated = asset.is_animated
    limit = rules.max_file_size(role, animated)
    if asset.byte_size > limit:
        kind = "tray image" if role is ImageRole.TRAY else "file"
        raise ImageTooLarge(
            f"{name}: {format_kb(asset.byte_size)} is bigger than the max"
            f" {kind} size ({limit // 1024} KB).",
            {
                **ctx,
                "actual_bytes": asset.byte_size,
                "is_animated": animated,
                "limit": limit,
            },
        )

    expected = rules.dimensions(role)
    actual = asset.pixel_dimensions
    if actual != expected:
        raise IncorrectDimensions(
            f"{name}: {_fmt_dims(actual)} is not compliant with {role.value}"
            f" dimensions requirements, {_fmt_dims(expected)}.",
            {**ctx, "actual": actual, "expected": expected},
        )

    if rules.enforce_frame_timing and animated:
        _check_frame_timing(asset, rules, ctx)

    get_logger().debug(
        "Validated %s %s (%d bytes, %s, animated=%s)",
        role.value,
        name,
        asset.byte_size,
        _fmt_dims(actual),
        animated,
    )
    return asset


def _check_frame_timing(
    asset: ImageAsset, rules: ConstraintRules, ctx: dict
) -> None:
    durations = asset.frame_durations_ms
    if not durations:
        return
    name = _label(asset)
    shortest = min(durations)
    if shortest < rules.min_animated_frame_duration_ms:
        raise FrameDurationTooShort(
            f"{name}: {shortest} ms is shorter than the min frame duration"
            f" ({rules.min_animated_frame_duration_ms} ms).",
            {
                **ctx,
                "min_frame_duration_ms": shortest,
                "limit": rules.min_animated_frame_duration_ms,
            },
        )
    total = sum(durations)
    if total > rules.max_animated_total_duration_ms:
        raise AnimationTooLong(
            f"{name}: {total} ms is longer than the max total animation"
            f" duration ({rules.max_animated_total_duration_ms} ms).",
            {
                **ctx,
                "total_duration_ms": total,
                "limit": rules.max_animated_total_duration_ms,
            },
        )


__all__ = ["validate_image"]
