"""Catalog building: bundle bytes -> Catalog.

Two failure policies are supported and must be picked explicitly:

* FAIL_FAST (default): the first violation anywhere aborts the build and is
  raised to the caller. No partial catalog exists.
* COLLECT_ALL: every pack is assembled independently; packs that fail are
  left out and their errors are returned in ``Catalog.violations``. Bundle
  level (structural) errors are still raised.
"""

from __future__ import annotations
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Callable, List, Optional, Set

from .assembler import PackAssembler
from .bundle.assets import AssetProvider
from .bundle.loader import parse_bundle, parse_pack_record
from .errors import BundleError, StickerPackError
from .logging import get_logger
from .models import Catalog, Pack, normalize_optional
from .reporting import get_reporter, task
from .rules import DEFAULT_RULES, ConstraintRules

__all__ = ["FailurePolicy", "CatalogBuilder"]


class FailurePolicy(Enum):
    FAIL_FAST = "fail-fast"
    COLLECT_ALL = "collect-all"


class CatalogBuilder:
    def __init__(
        self,
        assets: AssetProvider,
        rules: ConstraintRules = DEFAULT_RULES,
        policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    ):
        self.assets = assets
        self.rules = rules
        self.policy = policy

    def build(self, bundle: bytes | str, fmt: str = "json") -> Catalog:
        logger = get_logger()
        rep = get_reporter()
        record = parse_bundle(bundle, fmt)
        ios_link = normalize_optional(record.ios_app_store_link)
        android_link = normalize_optional(record.android_play_store_link)
        rep.status(
            f"Bundle summary: packs={len(record.raw_packs)}"
            f" ios_link={'yes' if ios_link else 'no'}"
            f" android_link={'yes' if android_link else 'no'}"
            f" policy={self.policy.value}"
        )

        # Identifiers are unique per build() call only.
        seen: Set[str] = set()
        assembler = PackAssembler(self.assets, self.rules, seen)
        packs: List[Pack] = []
        violations: List[StickerPackError] = []

        with task(
            "catalog.packs", "Sticker packs", total=len(record.raw_packs)
        ) as progress:
            for index, raw in enumerate(record.raw_packs):
                try:
                    pack = assembler.assemble(parse_pack_record(raw, index))
                except StickerPackError as e:
                    if self.policy is FailurePolicy.FAIL_FAST:
                        logger.debug("Build aborted at pack #%d: %s", index, e)
                        raise
                    if isinstance(e, BundleError):
                        e.add_context(index=index)
                    rep.violation(e, skipped=True)
                    violations.append(e)
                    progress.advance(f"#{index}")
                    continue
                packs.append(pack)
                logger.debug("Accepted pack %s", pack.identifier)
                progress.advance(pack.identifier)
            catalog = Catalog(
                packs=tuple(packs),
                ios_store_link=ios_link,
                android_store_link=android_link,
                violations=tuple(violations),
            )
            progress.finish(
                packs=len(packs),
                stickers=catalog.sticker_count,
                violations=len(violations),
            )
        rep.status(
            f"Catalog summary: packs={len(packs)}"
            f" stickers={catalog.sticker_count}"
            f" animated={sum(1 for p in packs if p.is_animated)}"
            f" violations={len(violations)}"
        )
        return catalog

    def build_async(
        self,
        bundle: bytes | str,
        fmt: str = "json",
        callback: Optional[Callable[["Future[Catalog]"], None]] = None,
    ) -> "Future[Catalog]":
        """Run build() on a background worker.

        The returned future holds the Catalog or the raised violation;
        ``callback`` is invoked with the future once it completes.
        """
        executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="stickerpack"
        )
        try:
            future = executor.submit(self.build, bundle, fmt)
            if callback is not None:
                future.add_done_callback(callback)
        finally:
            executor.shutdown(wait=False)
        return future
