"""Pack assembly: one declarative pack record -> one validated Pack.

Steps, in order (first failure wins):
 1. identifier present and unique within the current ingestion pass
 2. identifier/name/publisher non-empty and within the char limit
 3. tray image
 4. each sticker: image, emoji count, animated consistency with the pack
 5. sticker count within range
 6. optional URL normalization
"""

from __future__ import annotations
from typing import List, Optional, Set

from .bundle.assets import AssetProvider
from .bundle.models import PackRecord, StickerRecord
from .errors import (
    AnimatedStaticMismatch,
    DuplicateOrMissingIdentifier,
    EmptyString,
    StickerCountOutOfRange,
    StickerPackError,
    StringTooLong,
    TooManyEmojis,
)
from .image.validator import validate_image
from .logging import get_logger
from .models import Pack, Sticker, normalize_optional
from .rules import DEFAULT_RULES, ConstraintRules, ImageRole


class PackAssembler:
    def __init__(
        self,
        assets: AssetProvider,
        rules: ConstraintRules = DEFAULT_RULES,
        seen_identifiers: Optional[Set[str]] = None,
    ):
        self.assets = assets
        self.rules = rules
        # Shared with the owning CatalogBuilder for one ingestion pass.
        self.seen_identifiers = (
            seen_identifiers if seen_identifiers is not None else set()
        )

    def assemble(self, record: PackRecord) -> Pack:
        """Build a Pack from ``record`` or raise the first violation found.

        Errors raised here carry the pack identifier, name and a field path
        in their context.
        """
        try:
            return self._assemble(record)
        except StickerPackError as e:
            e.add_context(
                pack=record.identifier,
                pack_name=record.name,
                path=record.path,
            )
            raise

    def _assemble(self, record: PackRecord) -> Pack:
        identifier = self._claim_identifier(record)
        for field_name in ("identifier", "name", "publisher"):
            self._check_string(getattr(record, field_name), field_name, record)

        try:
            tray = validate_image(
                self.assets.resolve(record.tray_image_file, ImageRole.TRAY),
                ImageRole.TRAY,
                self.rules,
            )
        except StickerPackError as e:
            raise e.add_context(path=f"{record.path}.tray_image_file")

        stickers: List[Sticker] = []
        for i, sticker_record in enumerate(record.stickers):
            path = f"{record.path}.stickers[{i}]"
            try:
                stickers.append(self._sticker(sticker_record, record, path))
            except StickerPackError as e:
                raise e.add_context(
                    sticker=sticker_record.image_file, path=path
                )

        count = len(stickers)
        lo = self.rules.min_stickers_per_pack
        hi = self.rules.max_stickers_per_pack
        if not lo <= count <= hi:
            raise StickerCountOutOfRange(
                f"Sticker count {count} is outside the allowable range"
                f" ({lo}..{hi} stickers per pack).",
                {
                    "count": count,
                    "min": lo,
                    "max": hi,
                    "path": f"{record.path}.stickers",
                },
            )

        pack = Pack(
            identifier=identifier,
            name=record.name,
            publisher=record.publisher,
            tray_image=tray,
            is_animated=record.animated_sticker_pack,
            stickers=tuple(stickers),
            publisher_website=normalize_optional(record.publisher_website),
            privacy_policy_website=normalize_optional(
                record.privacy_policy_website
            ),
            license_agreement_website=normalize_optional(
                record.license_agreement_website
            ),
        )
        get_logger().debug(
            "Assembled pack %s (%d stickers, animated=%s)",
            identifier,
            count,
            pack.is_animated,
        )
        return pack

    def _claim_identifier(self, record: PackRecord) -> str:
        identifier = record.identifier
        if identifier is None:
            raise DuplicateOrMissingIdentifier(
                f"{record.name} must have an identifier and it must be"
                " unique.",
                {"path": f"{record.path}.identifier"},
            )
        if identifier in self.seen_identifiers:
            raise DuplicateOrMissingIdentifier(
                "A sticker pack already has the identifier"
                f" {identifier}.",
                {"path": f"{record.path}.identifier"},
            )
        self.seen_identifiers.add(identifier)
        return identifier

    def _check_string(
        self, value: str, field_name: str, record: PackRecord
    ) -> None:
        ctx = {"field": field_name, "path": f"{record.path}.{field_name}"}
        if not value:
            raise EmptyString(
                f"The {field_name} of a sticker pack can't be empty.", ctx
            )
        limit = self.rules.max_char_limit
        if len(value) > limit:
            raise StringTooLong(
                f"The {field_name} of a sticker pack must be at most"
                f" {limit} characters (got {len(value)}).",
                {**ctx, "length": len(value), "limit": limit},
            )

    def _sticker(
        self, sticker: StickerRecord, record: PackRecord, path: str
    ) -> Sticker:
        image = validate_image(
            self.assets.resolve(sticker.image_file, ImageRole.STICKER),
            ImageRole.STICKER,
            self.rules,
        )
        if len(sticker.emojis) > self.rules.max_emojis_count:
            raise TooManyEmojis(
                f"{sticker.image_file} has too many emojis."
                f" {self.rules.max_emojis_count} is the maximum number.",
                {
                    "count": len(sticker.emojis),
                    "limit": self.rules.max_emojis_count,
                    "path": f"{path}.emojis",
                },
            )
        if image.is_animated != record.animated_sticker_pack:
            if record.animated_sticker_pack:
                msg = "Animated sticker pack contains static stickers."
            else:
                msg = "Static sticker pack contains animated stickers."
            raise AnimatedStaticMismatch(
                f"{sticker.image_file}: {msg}",
                {
                    "pack_animated": record.animated_sticker_pack,
                    "sticker_animated": image.is_animated,
                },
            )
        return Sticker(image=image, emojis=sticker.emojis)


__all__ = ["PackAssembler"]
