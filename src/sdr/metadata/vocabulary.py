"""
Lookup tables used by the normalizers, the mappers in both directions and
the registry projector.

The tables are immutable. A single default instance is created at import
time; components accept a ``MappingVocabularies`` so tests can swap in
their own tables.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from frozendict import frozendict


def _pairs(pairs: Iterable[tuple[str, str]]) -> frozendict[str, str]:
    return frozendict(pairs)


def _inverse(table: frozendict[str, str]) -> frozendict[str, str]:
    # First key wins when several legacy spellings map to one value.
    inverse: dict[str, str] = {}
    for key, value in table.items():
        inverse.setdefault(value, key)
    return frozendict(inverse)


# (canonical model type, MODS type attribute)
IDENTIFIER_TYPES: tuple[tuple[str, str], ...] = (
    ("ISBN", "isbn"),
    ("ISSN", "issn"),
    ("ISSN-L", "issn-l"),
    ("ISMN", "ismn"),
    ("ISRC", "isrc"),
    ("DOI", "doi"),
    ("OCLC", "OCLC"),
    ("LCCN", "lccn"),
    ("URI", "uri"),
    ("URN", "urn"),
    ("Handle", "hdl"),
    ("UPC", "upc"),
    ("EAN", "ean"),
    ("SIRSI", "SIRSI"),
    ("ORCID", "orcid"),
    ("ROR", "ror"),
    ("ISNI", "isni"),
    ("VIAF", "viaf"),
    ("Wikidata", "wikidata"),
    ("arXiv", "arxiv"),
    ("PMID", "pmid"),
    ("local", "local"),
    ("stock number", "stock number"),
    ("music plate", "music plate"),
    ("music publisher", "music publisher"),
    ("videorecording identifier", "videorecording identifier"),
)

MARC_RELATOR_CODE = "marcrelator"
MARC_RELATOR_URI = "http://id.loc.gov/vocabulary/relators/"


@dataclass(frozen=True)
class MappingVocabularies:
    # MODS type attribute (lower-cased) -> canonical MODS spelling
    mods_identifier_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            (mods.lower(), mods) for _, mods in IDENTIFIER_TYPES
        )
    )
    # canonical MODS spelling -> canonical model type
    identifier_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs((mods, cocina) for cocina, mods in IDENTIFIER_TYPES)
    )

    # identityMetadata otherId name -> catalog link name
    catalog_names: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("catkey", "symphony"),
                ("previous_catkey", "previous symphony"),
                ("folio_instance_hrid", "folio"),
                ("previous_folio_instance_hrid", "previous folio"),
            ]
        )
    )
    other_id_allow_list: frozenset[str] = frozenset(
        {
            "catkey",
            "previous_catkey",
            "folio_instance_hrid",
            "previous_folio_instance_hrid",
            "barcode",
        }
    )

    name_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("personal", "person"),
                ("corporate", "organization"),
                ("family", "family"),
                ("conference", "conference"),
            ]
        )
    )
    name_part_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("family", "surname"),
                ("given", "forename"),
                ("termsOfAddress", "term of address"),
                ("date", "life dates"),
            ]
        )
    )
    title_part_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("nonSort", "nonsorting characters"),
                ("title", "main title"),
                ("subTitle", "subtitle"),
                ("partNumber", "part number"),
                ("partName", "part name"),
            ]
        )
    )

    # MODS originInfo/@eventType -> canonical event type; unlisted values
    # pass through unchanged.
    event_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs([("production", "creation")])
    )
    # date element -> (eventType default, canonical date type)
    date_elements: frozendict[str, tuple[str | None, str | None]] = field(
        default_factory=lambda: frozendict(
            {
                "dateCreated": ("production", "creation"),
                "dateIssued": ("publication", "publication"),
                "copyrightDate": ("copyright", "copyright"),
                "dateCaptured": ("capture", "capture"),
                "dateValid": ("validity", "validity"),
                "dateModified": ("modification", "modification"),
                "dateOther": (None, None),
            }
        )
    )
    known_event_types: frozenset[str] = frozenset(
        {
            "acquisition",
            "capture",
            "copyright",
            "creation",
            "degree conferral",
            "deposit",
            "distribution",
            "generation",
            "manufacture",
            "modification",
            "performance",
            "presentation",
            "production",
            "publication",
            "release",
            "validity",
            "withdrawal",
        }
    )

    access_condition_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("restrictionOnAccess", "restriction on access"),
                ("restrictiononaccess", "restriction on access"),
                ("useAndReproduction", "use and reproduction"),
                ("useandreproduction", "use and reproduction"),
            ]
        )
    )
    # abstract/@type -> note type
    abstract_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("scope and content", "scope and content"),
                ("review", "review"),
                ("content advice", "content warning"),
            ]
        )
    )

    related_item_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("preceding", "preceded by"),
                ("succeeding", "succeeded by"),
                ("original", "has original version"),
                ("host", "part of"),
                ("constituent", "has part"),
                ("series", "in series"),
                ("otherVersion", "has version"),
                ("otherFormat", "has other format"),
                ("isReferencedBy", "referenced by"),
                ("references", "references"),
                ("reviewOf", "reviewed by"),
            ]
        )
    )

    # physicalDescription child -> form type
    physical_description_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("form", "form"),
                ("extent", "extent"),
                ("reformattingQuality", "reformatting quality"),
                ("digitalOrigin", "digital origin"),
                ("internetMediaType", "media type"),
            ]
        )
    )

    # subject child -> subject part type; names are typed by name_types
    subject_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("topic", "topic"),
                ("geographic", "place"),
                ("temporal", "time"),
                ("genre", "genre"),
                ("occupation", "occupation"),
                ("titleInfo", "title"),
            ]
        )
    )
    # hierarchicalGeographic children; the element name is the part type
    hierarchical_place_types: frozenset[str] = frozenset(
        {
            "continent",
            "country",
            "province",
            "region",
            "state",
            "territory",
            "county",
            "city",
            "citySection",
            "island",
            "area",
            "extraterrestrialArea",
        }
    )
    # cartographics child -> form type
    cartographic_form_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [("scale", "map scale"), ("projection", "map projection")]
        )
    )

    authority_codes: frozendict[str, str] = field(
        default_factory=lambda: _pairs([("lcnaf", "naf"), ("tgm", "lctgm")])
    )

    # role value -> (code, uri) for roles the mappers create themselves
    relator_roles: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("publisher", "pbl"),
                ("distributor", "dst"),
                ("manufacturer", "mfr"),
                ("issuing body", "isb"),
                ("original cataloging agency", "cat"),
            ]
        )
    )

    datacite_person_contributor_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("copyright holder", "RightsHolder"),
                ("compiler", "DataCollector"),
                ("editor", "Editor"),
                ("organizer", "Supervisor"),
                ("research team head", "ProjectLeader"),
                ("researcher", "Researcher"),
            ]
        )
    )
    datacite_organization_contributor_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("copyright holder", "RightsHolder"),
                ("compiler", "DataCollector"),
                ("distributor", "Distributor"),
                ("host institution", "HostingInstitution"),
                ("issuing body", "Distributor"),
                ("publisher", "Distributor"),
                ("researcher", "ResearchGroup"),
                ("sponsor", "Sponsor"),
            ]
        )
    )
    datacite_relation_types: frozendict[str, str] = field(
        default_factory=lambda: _pairs(
            [
                ("part of", "IsPartOf"),
                ("has part", "HasPart"),
                ("has version", "HasVersion"),
                ("has original version", "IsVersionOf"),
                ("preceded by", "Continues"),
                ("succeeded by", "IsContinuedBy"),
                ("referenced by", "IsReferencedBy"),
                ("references", "References"),
                ("derived from", "IsDerivedFrom"),
                ("supplement to", "IsSupplementTo"),
                ("supplemented by", "IsSupplementedBy"),
                ("described by", "IsDescribedBy"),
                ("reviewed by", "IsReviewedBy"),
                ("has other format", "IsVariantFormOf"),
                ("related to", "References"),
            ]
        )
    )
    # lower-cased identifier type -> (DataCite scheme, display prefix)
    datacite_identifier_schemes: frozendict[str, tuple[str, str]] = field(
        default_factory=lambda: frozendict(
            {
                "doi": ("DOI", "https://doi.org/"),
                "arxiv": ("arXiv", "https://arxiv.org/abs/"),
                "pmid": ("PMID", "https://pubmed.ncbi.nlm.nih.gov/"),
            }
        )
    )
    # lower-cased identifier type -> (scheme, scheme URI)
    affiliation_schemes: frozendict[str, tuple[str, str]] = field(
        default_factory=lambda: frozendict({"ror": ("ROR", "https://ror.org")})
    )

    def canonical_mods_identifier_type(self, value: str) -> str:
        """Canonical MODS spelling of an identifier type, unknown values unchanged."""
        return self.mods_identifier_types.get(value.lower(), value)

    def cocina_identifier_type(self, mods_type: str) -> str:
        canonical = self.canonical_mods_identifier_type(mods_type)
        return self.identifier_types.get(canonical, mods_type)

    def mods_identifier_type(self, cocina_type: str) -> str:
        return _inverse(self.identifier_types).get(cocina_type, cocina_type)

    def cocina_event_type(self, event_type: str) -> str:
        return self.event_types.get(event_type, event_type)

    def mods_event_type(self, cocina_type: str) -> str:
        return _inverse(self.event_types).get(cocina_type, cocina_type)

    def relator_uri(self, code: str) -> str:
        return f"{MARC_RELATOR_URI}{code}"


DEFAULT_VOCABULARIES = MappingVocabularies()
