"""End-to-end catalog building from bundle bytes.

Covers both failure policies, store link normalization, ordering and
repeatability of a build.
"""

from __future__ import annotations

import json
import threading

import pytest
import yaml

from image_factory import bundle_bytes, make_png_header, pack_entry, sticker_entry
from stickerpack.bundle.assets import MappingAssetProvider
from stickerpack.catalog import CatalogBuilder, FailurePolicy
from stickerpack.errors import (
    AnimatedStaticMismatch,
    DecodeFailed,
    DuplicateOrMissingIdentifier,
    MalformedBundle,
    StickerCountOutOfRange,
    TooManyEmojis,
)


def _builder(files, policy=FailurePolicy.FAIL_FAST):
    return CatalogBuilder(MappingAssetProvider(files), policy=policy)


def test_builds_all_valid_packs_in_order(files):  # noqa: N802
    ids = ["c", "a", "b"]
    catalog = _builder(files).build(bundle_bytes(pack_entry(i) for i in ids))
    assert [p.identifier for p in catalog.packs] == ids
    assert catalog.sticker_count == 9
    assert catalog.violations == ()


def test_store_links_empty_strings_become_absent(files):  # noqa: N802
    catalog = _builder(files).build(bundle_bytes([pack_entry()]))
    assert catalog.ios_store_link is None
    assert catalog.android_store_link is None


def test_store_links_kept_and_missing_links_absent(files):  # noqa: N802
    data = bundle_bytes(
        [pack_entry()], ios="https://apps.apple.com/app/id1", android=None
    )
    catalog = _builder(files).build(data)
    assert catalog.ios_store_link == "https://apps.apple.com/app/id1"
    assert catalog.android_store_link is None


def test_rebuild_is_structurally_identical(files):  # noqa: N802
    data = bundle_bytes(
        [pack_entry("a"), pack_entry("b", image_file="animated.webp", animated=True)]
    )
    builder = _builder(files)
    assert builder.build(data) == builder.build(data)


def test_identifiers_do_not_leak_between_builds(files):  # noqa: N802
    builder = _builder(files)
    data = bundle_bytes([pack_entry("same")])
    builder.build(data)
    assert builder.build(data).packs[0].identifier == "same"


def test_fail_fast_stops_at_first_violation(files):  # noqa: N802
    second = pack_entry("b")
    second["stickers"][0]["emojis"] = ["1", "2", "3", "4"]
    third = pack_entry("c", stickers=2)
    with pytest.raises(TooManyEmojis) as ei:
        _builder(files).build(bundle_bytes([pack_entry("a"), second, third]))
    assert ei.value.context["pack"] == "b"


def test_duplicate_identifier_rejects_second_occurrence(files):  # noqa: N802
    data = bundle_bytes([pack_entry("x"), pack_entry("y"), pack_entry("x")])
    with pytest.raises(DuplicateOrMissingIdentifier) as ei:
        _builder(files).build(data)
    assert ei.value.context["path"] == "sticker_packs[2].identifier"


def test_fail_fast_malformed_pack_reported_in_order(files):  # noqa: N802
    bad_first = pack_entry("a", stickers=2)
    malformed = {"identifier": "b"}
    with pytest.raises(StickerCountOutOfRange):
        _builder(files).build(bundle_bytes([bad_first, malformed]))


def test_collect_all_keeps_valid_packs_and_records_violations(files):  # noqa: N802
    mixed = pack_entry("mixed")
    mixed["stickers"][0] = sticker_entry("animated.webp")
    data = bundle_bytes(
        [
            pack_entry("ok1"),
            mixed,
            pack_entry("ok1"),
            {"identifier": "broken"},
            pack_entry("ok2"),
        ]
    )
    catalog = _builder(files, FailurePolicy.COLLECT_ALL).build(data)
    assert [p.identifier for p in catalog.packs] == ["ok1", "ok2"]
    kinds = [type(v) for v in catalog.violations]
    assert kinds == [
        AnimatedStaticMismatch,
        DuplicateOrMissingIdentifier,
        MalformedBundle,
    ]
    assert catalog.violations[2].context["index"] == 3


def test_collect_all_records_undecodable_oversized_sticker(files):  # noqa: N802
    assets = {**files, "bomb.png": make_png_header(20000, 20000)}
    bad = pack_entry("bomb")
    bad["stickers"][1] = sticker_entry("bomb.png")
    catalog = _builder(assets, FailurePolicy.COLLECT_ALL).build(
        bundle_bytes([bad, pack_entry("ok")])
    )
    assert [p.identifier for p in catalog.packs] == ["ok"]
    assert isinstance(catalog.violations[0], DecodeFailed)
    assert catalog.violations[0].context["pack"] == "bomb"


def test_collect_all_still_raises_on_structural_errors(files):  # noqa: N802
    with pytest.raises(MalformedBundle):
        _builder(files, FailurePolicy.COLLECT_ALL).build(b'{"sticker_packs": 3}')


@pytest.mark.parametrize(
    "payload",
    [b"", b"not json", b"[]", b'{"ios_app_store_link": ""}'],
)
def test_malformed_top_level(files, payload):  # noqa: N802
    with pytest.raises(MalformedBundle):
        _builder(files).build(payload)


def test_mistyped_store_link_is_absent(files):  # noqa: N802
    data = json.dumps({"sticker_packs": [], "ios_app_store_link": 5})
    assert _builder(files).build(data).ios_store_link is None


def test_non_string_identifier_is_missing(files):  # noqa: N802
    with pytest.raises(DuplicateOrMissingIdentifier) as ei:
        _builder(files).build(bundle_bytes([pack_entry(identifier=123)]))
    assert ei.value.context["path"] == "sticker_packs[0].identifier"


def test_yaml_bundle(files):  # noqa: N802
    doc = {"sticker_packs": [pack_entry("y1")], "android_play_store_link": "x"}
    catalog = _builder(files).build(yaml.safe_dump(doc), fmt="yaml")
    assert catalog.packs[0].identifier == "y1"
    assert catalog.android_store_link == "x"


def test_empty_pack_list_builds_empty_catalog(files):  # noqa: N802
    catalog = _builder(files).build(bundle_bytes([]))
    assert catalog.packs == ()


def test_build_async_delivers_catalog(files):  # noqa: N802
    done = threading.Event()
    seen = []

    def _cb(fut):
        seen.append(fut)
        done.set()

    future = _builder(files).build_async(
        bundle_bytes([pack_entry("a")]), callback=_cb
    )
    catalog = future.result(timeout=30)
    assert done.wait(timeout=30)
    assert seen == [future]
    assert catalog.packs[0].identifier == "a"


def test_build_async_delivers_violation(files):  # noqa: N802
    future = _builder(files).build_async(bundle_bytes([pack_entry(stickers=1)]))
    with pytest.raises(StickerCountOutOfRange):
        future.result(timeout=30)


def test_catalog_to_dict_is_json_serialisable(files):  # noqa: N802
    catalog = _builder(files).build(bundle_bytes([pack_entry("a")]))
    doc = json.loads(json.dumps(catalog.to_dict()))
    pack = doc["sticker_packs"][0]
    assert pack["identifier"] == "a"
    assert pack["tray_image"]["width"] == 96
    assert len(pack["stickers"]) == 3
    assert doc["ios_app_store_link"] is None
