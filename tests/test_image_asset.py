import pytest

from image_factory import make_png, make_webp
from stickerpack.errors import DecodeFailed, UnsupportedImageFormat
from stickerpack.image.asset import (
    ImageAsset,
    ImageEncoding,
    encoding_for_filename,
)
from stickerpack.rules import ImageRole


def test_encoding_by_extension():  # noqa: N802
    assert encoding_for_filename("a.png") is ImageEncoding.RASTER
    assert encoding_for_filename("dir/a.webp") is ImageEncoding.ANIMATABLE_RASTER


@pytest.mark.parametrize("name", ["a.gif", "a.jpg", "noext", "a.PNG"])
def test_unsupported_extension(name):  # noqa: N802
    with pytest.raises(UnsupportedImageFormat) as ei:
        encoding_for_filename(name)
    assert ei.value.context["file"] == name


def test_png_properties(sticker_png):  # noqa: N802
    asset = ImageAsset(sticker_png, ImageEncoding.RASTER)
    assert asset.byte_size == len(sticker_png)
    assert asset.is_animated is False
    assert asset.pixel_dimensions == (512, 512)
    assert asset.frame_durations_ms == ()


def test_static_webp_is_not_animated(static_webp):  # noqa: N802
    asset = ImageAsset(static_webp, ImageEncoding.ANIMATABLE_RASTER)
    assert asset.is_animated is False
    assert asset.pixel_dimensions == (512, 512)


def test_animated_webp_properties():  # noqa: N802
    data = make_webp((512, 512), frames=3, durations=[40, 50, 60])
    asset = ImageAsset(data, ImageEncoding.ANIMATABLE_RASTER)
    assert asset.is_animated is True
    assert asset.pixel_dimensions == (512, 512)
    assert asset.frame_durations_ms == (40, 50, 60)


def test_corrupt_payload_is_decode_failure():  # noqa: N802
    asset = ImageAsset(b"not an image", ImageEncoding.RASTER, filename="x.png")
    assert asset.byte_size == 12
    with pytest.raises(DecodeFailed) as ei:
        asset.pixel_dimensions
    assert ei.value.context["file"] == "x.png"


def test_raster_never_decodes_for_animated_flag():  # noqa: N802
    asset = ImageAsset(b"garbage", ImageEncoding.RASTER)
    assert asset.is_animated is False


def test_corrupt_webp_animated_flag_fails_decode():  # noqa: N802
    asset = ImageAsset(b"RIFF0000WEBPjunk", ImageEncoding.ANIMATABLE_RASTER)
    with pytest.raises(DecodeFailed):
        asset.is_animated


def test_encoding_mismatch_fails_decode(static_webp):  # noqa: N802
    # WebP bytes declared as PNG are not accepted by the PNG decoder.
    asset = ImageAsset(static_webp, ImageEncoding.RASTER)
    with pytest.raises(DecodeFailed):
        asset.pixel_dimensions


def test_derived_properties_are_memoized(sticker_png):  # noqa: N802
    asset = ImageAsset(sticker_png, ImageEncoding.RASTER)
    first = asset.probe
    assert asset.probe is first


def test_from_file_bytes_sets_role_and_name():  # noqa: N802
    data = make_png((96, 96))
    asset = ImageAsset.from_file_bytes("tray.png", data, ImageRole.TRAY)
    assert asset.role is ImageRole.TRAY
    assert asset.filename == "tray.png"
    assert asset.encoding is ImageEncoding.RASTER


def test_equal_inputs_are_equal_values():  # noqa: N802
    data = make_png((96, 96))
    a = ImageAsset.from_file_bytes("t.png", data)
    b = ImageAsset.from_file_bytes("t.png", data)
    a.pixel_dimensions  # populate cache on one side only
    assert a == b
