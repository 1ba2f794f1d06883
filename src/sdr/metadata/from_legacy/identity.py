from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.cocina.administrative import ReleaseTag
from sdr.metadata.cocina.identification import CatalogLink, Identification
from sdr.metadata.cocina.vocab import ReleaseScope
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.util.datetime_helpers import parse_utc
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.util.xmlparser import XMLParser, XMLProcessor
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element

OBJECT_KINDS = ("item", "collection", "adminPolicy", "agreement")


class ReleaseTagProcessor(XMLProcessor[ReleaseTag], LoggerMixin):
    @property
    def xpath_expression(self) -> str:
        return "/identityMetadata/release"

    def process_one(
        self, tag: _Element, namespaces: dict[str, str] | None
    ) -> ReleaseTag | None:
        to = self.attribute(tag, "to")
        if to is None:
            self.log.warning("Skipping release tag without a target")
            return None
        date = None
        if when := self.attribute(tag, "when"):
            try:
                date = parse_utc(when)
            except ValueError:
                self.log.warning("Ignoring unparseable release date %r", when)
        return ReleaseTag(
            to=to,
            what=ReleaseScope(self.attribute(tag, "what") or ReleaseScope.self),
            date=date,
            who=self.attribute(tag, "who"),
            release=(tag.text or "").strip().lower() == "true",
        )


class IdentityMapper(LoggerMixin, XMLParser):
    """Reads identityMetadata into identification and release tags."""

    def __init__(self, vocabularies: MappingVocabularies | None = None) -> None:
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def object_kind(self, root: _Element, object_id: str | None = None) -> str:
        """The legacy object type: item, collection, adminPolicy or agreement.

        :raise UnmappableDocument: If the type is missing or unknown.
        """
        kinds = [
            (element.text or "").strip() for element in root.findall("objectType")
        ]
        if not kinds:
            raise UnmappableDocument(
                "identityMetadata has no objectType",
                object_id=object_id,
                element="objectType",
            )
        # A legacy collection may also be typed as a set.
        kind = "collection" if "collection" in kinds else kinds[0]
        if kind not in OBJECT_KINDS:
            raise UnmappableDocument(
                f"Unknown objectType {kind!r}", object_id=object_id, element="objectType"
            )
        return kind

    def label(self, root: _Element) -> str | None:
        return self.text_of_optional_subtag(root, "objectLabel")

    def identification(self, root: _Element) -> Identification:
        catalog_names = self.vocabularies.catalog_names
        catalog_links: list[CatalogLink] = []
        seen: set[tuple[str, str]] = set()
        barcode = None
        for other_id in root.findall("otherId"):
            name = other_id.get("name", "")
            value = (other_id.text or "").strip()
            if not value:
                continue
            if name == "barcode":
                barcode = barcode or value
            elif catalog := catalog_names.get(name):
                if (catalog, value) in seen:
                    continue
                seen.add((catalog, value))
                catalog_links.append(
                    CatalogLink(
                        catalog=catalog,
                        catalog_record_id=value,
                        refresh=not catalog.startswith("previous "),
                    )
                )

        source_id = None
        if (element := root.find("sourceId")) is not None:
            source = element.get("source", "").strip()
            value = (element.text or "").strip()
            if source and value:
                source_id = f"{source}:{value}"

        return Identification(
            source_id=source_id, catalog_links=catalog_links, barcode=barcode
        )

    def release_tags(self, root: _Element) -> list[ReleaseTag]:
        return list(ReleaseTagProcessor().process_all(root))
