"""Command line interface for stickerpack."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .api import BuildOptions, build_catalog
from .catalog import FailurePolicy
from .errors import StickerPackError
from .logging import configure_logging, step
from .reporting import (
    JsonLinesReporter,
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
)


def _options(args: argparse.Namespace) -> BuildOptions:
    return BuildOptions(
        bundle_path=args.bundle,
        assets_dir=args.assets,
        policy=FailurePolicy(args.policy),
        enforce_frame_timing=args.enforce_frame_timing,
    )


def _validate_cmd(args: argparse.Namespace) -> int:
    step(f"validating {args.bundle.name}")
    rep = get_reporter()
    try:
        catalog = build_catalog(_options(args))
    except StickerPackError as e:
        rep.violation(e)
        return 1
    # Skipped packs were already reported during the build.
    return 1 if catalog.violations else 0


def _summary_cmd(args: argparse.Namespace) -> int:
    rep = get_reporter()
    try:
        catalog = build_catalog(_options(args))
    except StickerPackError as e:
        rep.violation(e)
        return 1
    rep.flush()
    if args.json:
        print(json.dumps(catalog.to_dict(), indent=2, sort_keys=True))
    else:
        rep.section("Catalog")
        for pack in catalog.packs:
            kind = "animated" if pack.is_animated else "static"
            rep.status(
                f"Pack summary: identifier={pack.identifier}"
                f" stickers={len(pack.stickers)} kind={kind}"
                f" publisher={pack.publisher!r}"
            )
    return 1 if catalog.violations else 0


def _add_build_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "bundle", type=Path, help="Bundle file (.wasticker/.json/.yaml)"
    )
    p.add_argument(
        "--assets",
        type=Path,
        default=None,
        help="Directory containing image files (default: bundle directory)",
    )
    p.add_argument(
        "--policy",
        choices=[fp.value for fp in FailurePolicy],
        default=FailurePolicy.FAIL_FAST.value,
        help="fail-fast (default): stop at first violation; collect-all:"
        " skip invalid packs and report every violation",
    )
    p.add_argument(
        "--enforce-frame-timing",
        action="store_true",
        dest="enforce_frame_timing",
        help="Also check animated frame duration limits (off by default)",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stickerpack", description="Sticker pack bundle validation tool"
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    v = sub.add_parser("validate", help="Validate a bundle and its images")
    _add_build_args(v)
    v.set_defaults(func=_validate_cmd)

    s = sub.add_parser("summary", help="Build the catalog and print a summary")
    _add_build_args(s)
    s.add_argument("--json", action="store_true", help="Emit catalog JSON")
    s.set_defaults(func=_summary_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    if args.reporter == "json":
        set_reporter(JsonLinesReporter())
    elif args.reporter == "silent":
        set_reporter(SilentReporter())
    elif args.reporter == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich falls back to plain without a TTY
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
