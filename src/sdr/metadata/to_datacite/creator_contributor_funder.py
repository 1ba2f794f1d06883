from __future__ import annotations

from typing import Any

from sdr.metadata.cocina.description import Contributor, Description, DescriptiveValue
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.vocabulary import (
    DEFAULT_VOCABULARIES,
    MARC_RELATOR_CODE,
    MappingVocabularies,
)

DataciteName = dict[str, Any]


def _compact(attributes: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in attributes.items() if value}


def is_person(contributor: Contributor) -> bool:
    return contributor.type == "person"


def is_creator(contributor: Contributor) -> bool:
    """Cited contributors are creators; an explicit ``citation status`` of
    ``false`` excludes one unless it is the primary contributor."""
    if contributor.status == "primary":
        return True
    return not any(
        note.type == "citation status" and note.value == "false"
        for note in contributor.note
    )


def marc_relator(contributor: Contributor) -> str | None:
    for role in contributor.role:
        if role.source is not None and role.source.code == MARC_RELATOR_CODE:
            return role.value
    return None


def is_funder(contributor: Contributor) -> bool:
    return marc_relator(contributor) == "funder"


def name_parts(name: DescriptiveValue) -> tuple[str | None, str | None]:
    forename = surname = None
    for part in name.structured_value:
        if part.type == "forename":
            forename = part.value
        elif part.type == "surname":
            surname = part.value
    return forename, surname


class CreatorContributorFunder(LoggerMixin):
    """Projects the contributors of a description onto DataCite creators,
    contributors and funding references."""

    def __init__(self, vocabularies: MappingVocabularies | None = None) -> None:
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def attributes(self, description: Description) -> dict[str, list[dict[str, Any]]]:
        creators = [c for c in description.contributor if is_creator(c)]
        funders = [c for c in description.contributor if is_funder(c)]
        contributors = [
            c
            for c in description.contributor
            if not is_creator(c) and not is_funder(c)
        ] + [
            contributor
            for event in description.event
            if event.type == "publication"
            for contributor in event.contributor
        ]

        datacite_contributors: list[DataciteName] = []
        for contributor in contributors:
            projected = self.contributor(contributor)
            if projected is not None and projected not in datacite_contributors:
                datacite_contributors.append(projected)

        return {
            "creators": [
                projected
                for creator in creators
                if (projected := self.creator(creator)) is not None
            ],
            "contributors": datacite_contributors,
            "fundingReferences": [
                {"funderName": name}
                for funder in funders
                if funder.name and (name := funder.name[0].first_value())
            ],
        }

    def creator(self, contributor: Contributor) -> DataciteName | None:
        if not contributor.name:
            return None
        if is_person(contributor):
            projected = self.personal_name(contributor)
        else:
            projected = self.organizational_name(contributor)
        if projected is None:
            return None
        return projected | _compact(
            {
                "nameIdentifiers": self.name_identifiers(contributor),
                "affiliation": self.affiliations(contributor),
            }
        )

    def contributor(self, contributor: Contributor) -> DataciteName | None:
        projected = self.creator(contributor)
        if projected is None:
            return None
        return projected | {"contributorType": self.contributor_type(contributor)}

    def personal_name(self, contributor: Contributor) -> DataciteName | None:
        name = contributor.name[0]
        forename, surname = name_parts(name)
        if forename and surname:
            return {
                "name": f"{surname}, {forename}",
                "givenName": forename,
                "familyName": surname,
                "nameType": "Personal",
            }
        if (value := name.first_value()) is None:
            return None
        return _compact(
            {
                "name": value,
                "givenName": forename,
                "familyName": surname,
                "nameType": "Personal",
            }
        )

    def organizational_name(self, contributor: Contributor) -> DataciteName | None:
        if (value := contributor.name[0].first_value()) is None:
            return None
        return {"name": value, "nameType": "Organizational"}

    def name_identifiers(self, contributor: Contributor) -> list[dict[str, str]]:
        return [
            _compact(
                {
                    "nameIdentifier": identifier.value or identifier.uri,
                    "nameIdentifierScheme": identifier.type,
                    "schemeURI": identifier.source.uri if identifier.source else None,
                }
            )
            for identifier in contributor.identifier
            if identifier.value or identifier.uri
        ]

    def _affiliation_identifier(self, value: DescriptiveValue) -> dict[str, str]:
        for identifier in value.identifier:
            scheme = self.vocabularies.affiliation_schemes.get(
                (identifier.type or "").lower()
            )
            if scheme is None or not (identifier.uri or identifier.value):
                continue
            scheme_name, scheme_uri = scheme
            return {
                "affiliationIdentifier": identifier.uri or identifier.value or "",
                "affiliationIdentifierScheme": scheme_name,
                "schemeURI": scheme_uri,
            }
        return {}

    def affiliation(self, affiliation: DescriptiveValue) -> dict[str, str] | None:
        """One affiliation; a recognized identifier on the institution wins
        over the more specific department that may follow it."""
        parts = affiliation.structured_value or [affiliation]
        first = parts[0]
        if identifier := self._affiliation_identifier(first):
            if first.value is None:
                return None
            return {"name": first.value} | identifier
        values = [part.value for part in parts if part.value]
        if not values:
            return None
        return {"name": ", ".join(values)}

    def affiliations(self, contributor: Contributor) -> list[dict[str, str]]:
        return [
            projected
            for affiliation in contributor.affiliation
            if (projected := self.affiliation(affiliation)) is not None
        ]

    def contributor_type(self, contributor: Contributor) -> str:
        role = marc_relator(contributor)
        if is_person(contributor):
            table = self.vocabularies.datacite_person_contributor_types
        else:
            table = self.vocabularies.datacite_organization_contributor_types
        return table.get(role or "", "Other")
