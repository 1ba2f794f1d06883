from __future__ import annotations

from typing import Any

from sdr.metadata.cocina.description import RelatedResource as CocinaRelatedResource
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

PREFERRED_CITATION = "preferred citation"
RELATED_ITEM_TYPE = "Other"
DEFAULT_RELATION_TYPE = "References"


class RelatedResource(LoggerMixin):
    """Projects related resources onto DataCite related items and related
    identifiers.

    A related resource with nothing to cite (no title, preferred citation
    or identifier) projects to nothing.
    """

    def __init__(self, vocabularies: MappingVocabularies | None = None) -> None:
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def relation_type(self, related: CocinaRelatedResource) -> str:
        return self.vocabularies.datacite_relation_types.get(
            related.type or "", DEFAULT_RELATION_TYPE
        )

    def identifier(self, related: CocinaRelatedResource) -> tuple[str, str, str] | None:
        """(identifier, scheme, display form) for the first recognized identifier,
        falling back to the first URL."""
        schemes = self.vocabularies.datacite_identifier_schemes
        for identifier in related.identifier:
            if (scheme := schemes.get((identifier.type or "").lower())) is None:
                continue
            scheme_name, prefix = scheme
            value = identifier.value or identifier.uri
            if not value:
                continue
            bare = value.removeprefix(prefix)
            return bare, scheme_name, f"{prefix}{bare}"
        if related.access is not None:
            for url in related.access.url:
                if url.value:
                    return url.value, "URL", url.value
        return None

    def citation(self, related: CocinaRelatedResource) -> str | None:
        for note in related.note:
            if note.type == PREFERRED_CITATION and note.value:
                return note.value
        return None

    def title(self, related: CocinaRelatedResource) -> str | None:
        for title in related.title:
            if value := title.first_value():
                return value
        return None

    def related_item(self, related: CocinaRelatedResource) -> dict[str, Any] | None:
        identifier = self.identifier(related)
        citation = self.citation(related)
        title = citation or self.title(related)
        if identifier is None and title is None:
            return None
        item: dict[str, Any] = {
            "relatedItemType": RELATED_ITEM_TYPE,
            "relationType": (
                DEFAULT_RELATION_TYPE
                if citation and identifier is None
                else self.relation_type(related)
            ),
        }
        if identifier is not None:
            value, scheme, display = identifier
            item["titles"] = [{"title": title or display}]
            item["relatedItemIdentifier"] = {
                "relatedItemIdentifier": value,
                "relatedItemIdentifierType": scheme,
            }
        else:
            item["titles"] = [{"title": title}]
        return item

    def related_identifier(
        self, related: CocinaRelatedResource
    ) -> dict[str, str] | None:
        if (identifier := self.identifier(related)) is None:
            return None
        value, scheme, _ = identifier
        return {
            "relatedIdentifier": value,
            "relatedIdentifierType": scheme,
            "relationType": self.relation_type(related),
        }

    def attributes(
        self, related_resources: list[CocinaRelatedResource]
    ) -> dict[str, list[dict[str, Any]]]:
        items = []
        identifiers = []
        for related in related_resources:
            if (item := self.related_item(related)) is not None:
                items.append(item)
            if (identifier := self.related_identifier(related)) is not None:
                identifiers.append(identifier)
        return {"relatedItems": items, "relatedIdentifiers": identifiers}
