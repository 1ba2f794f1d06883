"""Projection of items onto the attributes of a DataCite DOI record.

See https://support.datacite.org/reference/put_dois-id for the shape of
the attributes.
"""

from __future__ import annotations

from typing import Any

from sdr.metadata.cocina.description import Description, DescriptiveValue
from sdr.metadata.cocina.objects import DRO, AdminPolicy, Agreement, Collection
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.core.exceptions import MetadataValueError
from sdr.metadata.service.logging.configuration import LogLevel
from sdr.metadata.to_datacite.creator_contributor_funder import (
    CreatorContributorFunder,
)
from sdr.metadata.to_datacite.event import Event
from sdr.metadata.to_datacite.related_resource import RelatedResource
from sdr.metadata.util.log import LoggerMixin, log_elapsed_time
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

DATACITE_RESOURCE_TYPES = "DataCite resource types"
SELF_DEPOSIT_RESOURCE_TYPES = "Stanford self-deposit resource types"
TITLE_TYPES = {
    "alternative": "AlternativeTitle",
    "translated": "TranslatedTitle",
    "subtitle": "Subtitle",
}
DESCRIPTION_TYPES = {
    "abstract": "Abstract",
    "summary": "Abstract",
    "table of contents": "TableOfContents",
    "technical information": "TechnicalInfo",
    "methods": "Methods",
}


class Attributes(LoggerMixin):
    """Builds DataCite attributes for an item.

    Keys whose value would be empty are left out. Descriptive shapes that
    have no DataCite counterpart are skipped rather than rejected.
    """

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES
        self.contributors = CreatorContributorFunder(self.vocabularies)
        self.related_resources = RelatedResource(self.vocabularies)

    @log_elapsed_time(log_level=LogLevel.debug, message_prefix="DataCite projection")
    def project(
        self, obj: DRO | Collection | AdminPolicy | Agreement
    ) -> dict[str, Any] | None:
        """
        :return: The attributes, or None for collections and admin policies.
        :raise MetadataValueError: If handed an object type DataCite records
            are never made for.
        """
        match obj:
            case Collection() | AdminPolicy():
                return None
            case DRO():
                return self._attributes(obj)
            case _:
                raise MetadataValueError(
                    f"Cannot project {obj.type.short_name} objects to DataCite"
                )

    def _attributes(self, item: DRO) -> dict[str, Any]:
        description = item.description
        event = Event(item)
        doi = item.identification.doi
        purl = description.purl or self.config.purl(item.external_identifier)
        attributes: dict[str, Any] = {
            "doi": doi,
            "prefix": doi.split("/", 1)[0] if doi else None,
            "url": purl,
            **self.contributors.attributes(description),
            "titles": self.titles(description),
            "publisher": self.config.datacite_publisher,
            "publicationYear": event.pub_year(),
            "dates": event.dates(),
            "types": self.types(description),
            "descriptions": self.descriptions(description),
            "subjects": self.subjects(description),
            "rightsList": self.rights_list(item),
            **self.related_resources.attributes(description.related_resource),
            "identifiers": (
                [{"identifier": f"https://doi.org/{doi}", "identifierType": "DOI"}]
                if doi
                else []
            ),
            "alternateIdentifiers": [
                {"alternateIdentifier": purl, "alternateIdentifierType": "PURL"}
            ],
        }
        return {key: value for key, value in attributes.items() if value}

    def titles(self, description: Description) -> list[dict[str, str]]:
        titles = []
        for title in description.title:
            for value in title.parallel_value or [title]:
                if (text := self._title_text(value)) is None:
                    continue
                entry = {"title": text}
                if title_type := TITLE_TYPES.get(value.type or title.type or ""):
                    entry["titleType"] = title_type
                titles.append(entry)
        return titles

    def _title_text(self, title: DescriptiveValue) -> str | None:
        if title.value is not None:
            return title.value
        parts = {part.type: part.value for part in title.structured_value}
        main = parts.get("main title")
        if main and (subtitle := parts.get("subtitle")):
            return f"{main}: {subtitle}"
        return main or title.first_value()

    def types(self, description: Description) -> dict[str, str]:
        """resourceTypeGeneral from the DataCite term, resourceType from the
        self-deposit subtypes, or the type when there are none."""
        general = None
        resource_type = None
        for form in description.form:
            if form.type != "resource type" or form.source is None:
                continue
            if form.source.value == DATACITE_RESOURCE_TYPES and form.value:
                general = general or form.value
            elif form.source.value == SELF_DEPOSIT_RESOURCE_TYPES:
                types = [p.value for p in form.structured_value if p.type == "type"]
                subtypes = [
                    p.value for p in form.structured_value if p.type == "subtype"
                ]
                values = [v for v in subtypes or types if v]
                resource_type = resource_type or "; ".join(values) or None
        if general is None:
            return {}
        return {"resourceTypeGeneral": general} | (
            {"resourceType": resource_type} if resource_type else {}
        )

    def descriptions(self, description: Description) -> list[dict[str, str]]:
        return [
            {
                "description": note.value,
                "descriptionType": DESCRIPTION_TYPES[note.type or "abstract"],
            }
            for note in description.note
            if note.value and (note.type or "abstract") in DESCRIPTION_TYPES
        ]

    def subjects(self, description: Description) -> list[dict[str, str]]:
        subjects = []
        for subject in description.subject:
            if subject.type == "classification":
                continue
            if (value := subject.value or subject.first_value()) is None:
                continue
            entry = {"subject": value}
            if subject.source is not None and subject.source.code:
                entry["subjectScheme"] = subject.source.code
                if subject.source.uri:
                    entry["schemeURI"] = subject.source.uri
            if subject.uri:
                entry["valueURI"] = subject.uri
            subjects.append(entry)
        return subjects

    def rights_list(self, item: DRO) -> list[dict[str, str]]:
        rights = []
        if item.access.license:
            rights.append({"rightsUri": item.access.license})
        if item.access.use_and_reproduction_statement:
            rights.append({"rights": item.access.use_and_reproduction_statement})
        return rights


def project(
    obj: DRO | Collection | AdminPolicy | Agreement,
    config: MappingConfiguration | None = None,
    vocabularies: MappingVocabularies | None = None,
) -> dict[str, Any] | None:
    return Attributes(config, vocabularies).project(obj)
