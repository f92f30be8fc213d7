from __future__ import annotations

import pytest

from image_factory import make_png, make_webp
from stickerpack.reporting import SilentReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _quiet_reporter():
    set_reporter(SilentReporter())
    set_verbosity(0)
    yield
    set_reporter(SilentReporter())


@pytest.fixture(scope="session")
def tray_png() -> bytes:
    return make_png((96, 96))


@pytest.fixture(scope="session")
def sticker_png() -> bytes:
    return make_png((512, 512))


@pytest.fixture(scope="session")
def static_webp() -> bytes:
    return make_webp((512, 512))


@pytest.fixture(scope="session")
def animated_webp() -> bytes:
    return make_webp((512, 512), frames=3)


@pytest.fixture
def files(tray_png, sticker_png, static_webp, animated_webp) -> dict:
    return {
        "tray.png": tray_png,
        "sticker.png": sticker_png,
        "static.webp": static_webp,
        "animated.webp": animated_webp,
    }
