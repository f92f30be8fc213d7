"""Per-image rule checks: order, boundaries, and error payloads."""

from __future__ import annotations

from dataclasses import replace

import pytest

from image_factory import make_png, make_png_header, make_webp, pad_to
from stickerpack.errors import (
    AnimatedNotSupportedForTray,
    AnimationTooLong,
    DecodeFailed,
    EmptyImage,
    FrameDurationTooShort,
    ImageTooLarge,
    IncorrectDimensions,
)
from stickerpack.image.asset import ImageAsset, ImageEncoding
from stickerpack.image.validator import validate_image
from stickerpack.rules import (
    DEFAULT_RULES,
    MAX_ANIMATED_STICKER_FILE_SIZE,
    MAX_STATIC_STICKER_FILE_SIZE,
    MAX_TRAY_IMAGE_FILE_SIZE,
    ImageRole,
)

TRAY = ImageRole.TRAY
STICKER = ImageRole.STICKER


def _png(data: bytes, name: str = "img.png") -> ImageAsset:
    return ImageAsset(data, ImageEncoding.RASTER, filename=name)


def _webp(data: bytes, name: str = "img.webp") -> ImageAsset:
    return ImageAsset(data, ImageEncoding.ANIMATABLE_RASTER, filename=name)


def test_valid_tray_and_sticker(tray_png, sticker_png):  # noqa: N802
    tray = _png(tray_png)
    assert validate_image(tray, TRAY) is tray
    sticker = _png(sticker_png)
    assert validate_image(sticker, STICKER) is sticker


def test_role_defaults_to_asset_role(tray_png):  # noqa: N802
    asset = ImageAsset(tray_png, ImageEncoding.RASTER, role=TRAY)
    assert validate_image(asset) is asset
    with pytest.raises(IncorrectDimensions):
        validate_image(asset, STICKER)


def test_empty_image_checked_first():  # noqa: N802
    with pytest.raises(EmptyImage):
        validate_image(_webp(b""), TRAY)


def test_animated_tray_rejected(animated_webp):  # noqa: N802
    with pytest.raises(AnimatedNotSupportedForTray):
        validate_image(_webp(animated_webp), TRAY)


def test_static_webp_tray_accepted():  # noqa: N802
    asset = _webp(make_webp((96, 96)))
    assert validate_image(asset, TRAY) is asset


def test_tray_size_boundary():  # noqa: N802
    at = pad_to(MAX_TRAY_IMAGE_FILE_SIZE, lambda p: make_png((96, 96), pad=p))
    over = pad_to(
        MAX_TRAY_IMAGE_FILE_SIZE + 1, lambda p: make_png((96, 96), pad=p)
    )
    validate_image(_png(at), TRAY)
    with pytest.raises(ImageTooLarge) as ei:
        validate_image(_png(over), TRAY)
    ctx = ei.value.context
    assert ctx["actual_bytes"] == MAX_TRAY_IMAGE_FILE_SIZE + 1
    assert ctx["is_animated"] is False
    assert ctx["limit"] == MAX_TRAY_IMAGE_FILE_SIZE


def test_static_sticker_size_boundary():  # noqa: N802
    at = pad_to(MAX_STATIC_STICKER_FILE_SIZE, lambda p: make_png(pad=p))
    over = pad_to(MAX_STATIC_STICKER_FILE_SIZE + 1, lambda p: make_png(pad=p))
    validate_image(_png(at), STICKER)
    with pytest.raises(ImageTooLarge) as ei:
        validate_image(_png(over), STICKER)
    assert ei.value.context["limit"] == MAX_STATIC_STICKER_FILE_SIZE


def test_animated_sticker_uses_animated_ceiling():  # noqa: N802
    # Over the static ceiling but well under the animated one.
    data = make_webp(frames=2, pad=200 * 1024)
    assert MAX_STATIC_STICKER_FILE_SIZE < len(data) < MAX_ANIMATED_STICKER_FILE_SIZE
    validate_image(_webp(data), STICKER)


def test_animated_sticker_over_ceiling():  # noqa: N802
    data = make_webp(frames=2, pad=MAX_ANIMATED_STICKER_FILE_SIZE)
    with pytest.raises(ImageTooLarge) as ei:
        validate_image(_webp(data), STICKER)
    assert ei.value.context["is_animated"] is True
    assert ei.value.context["limit"] == MAX_ANIMATED_STICKER_FILE_SIZE


def test_static_webp_sticker_uses_static_ceiling():  # noqa: N802
    data = make_webp(pad=200 * 1024)
    with pytest.raises(ImageTooLarge) as ei:
        validate_image(_webp(data), STICKER)
    assert ei.value.context["is_animated"] is False


def test_size_checked_before_dimensions():  # noqa: N802
    data = pad_to(
        MAX_TRAY_IMAGE_FILE_SIZE + 10, lambda p: make_png((100, 100), pad=p)
    )
    with pytest.raises(ImageTooLarge):
        validate_image(_png(data), TRAY)


@pytest.mark.parametrize(
    "size,role",
    [((95, 96), TRAY), ((512, 512), TRAY), ((96, 96), STICKER), ((512, 511), STICKER)],
)
def test_incorrect_dimensions(size, role):  # noqa: N802
    with pytest.raises(IncorrectDimensions) as ei:
        validate_image(_png(make_png(size)), role)
    assert ei.value.context["actual"] == size
    assert ei.value.context["expected"] == DEFAULT_RULES.dimensions(role)


def test_corrupt_png_reports_decode_failure():  # noqa: N802
    with pytest.raises(DecodeFailed):
        validate_image(_png(b"\x89PNG\r\n\x1a\n" + b"\0" * 64), STICKER)


def test_corrupt_webp_reports_decode_failure():  # noqa: N802
    with pytest.raises(DecodeFailed):
        validate_image(_webp(b"RIFF\x10\0\0\0WEBPVP8 junk"), STICKER)


@pytest.mark.parametrize("size", [(12000, 12000), (20000, 20000)])
def test_oversized_header_reports_decode_failure(size):  # noqa: N802
    data = make_png_header(*size)
    with pytest.raises(DecodeFailed) as ei:
        validate_image(_png(data, "bomb.png"), STICKER)
    assert ei.value.context["file"] == "bomb.png"


def test_frame_timing_not_enforced_by_default():  # noqa: N802
    data = make_webp(frames=3, durations=[5, 5, 5])
    validate_image(_webp(data), STICKER)


def test_frame_timing_min_duration_when_enforced():  # noqa: N802
    rules = replace(DEFAULT_RULES, enforce_frame_timing=True)
    data = make_webp(frames=3, durations=[5, 100, 100])
    with pytest.raises(FrameDurationTooShort) as ei:
        validate_image(_webp(data), STICKER, rules)
    assert ei.value.context["min_frame_duration_ms"] == 5


def test_frame_timing_total_duration_when_enforced():  # noqa: N802
    rules = replace(DEFAULT_RULES, enforce_frame_timing=True)
    data = make_webp(frames=3, durations=[4000, 4000, 4000])
    with pytest.raises(AnimationTooLong) as ei:
        validate_image(_webp(data), STICKER, rules)
    assert ei.value.context["total_duration_ms"] == 12000


def test_frame_timing_within_limits_when_enforced(animated_webp):  # noqa: N802
    rules = replace(DEFAULT_RULES, enforce_frame_timing=True)
    validate_image(_webp(animated_webp), STICKER, rules)
