import pytest

from sdr.metadata.cocina.objects import build_object
from sdr.metadata.cocina.vocab import ObjectType
from sdr.metadata.core.exceptions import MetadataValueError
from sdr.metadata.to_datacite.attributes import Attributes, project
from tests.fixtures.cocina import CocinaFixture

DOI = "10.80343/cc123dd1234"


@pytest.fixture()
def attributes() -> Attributes:
    return Attributes()


class TestAttributes:
    def test_minimal_item(self, cocina: CocinaFixture):
        assert project(cocina.dro()) == {
            "url": "https://purl.stanford.edu/cc123dd1234",
            "titles": [{"title": "title"}],
            "publisher": "Stanford Digital Repository",
            "alternateIdentifiers": [
                {
                    "alternateIdentifier": "https://purl.stanford.edu/cc123dd1234",
                    "alternateIdentifierType": "PURL",
                }
            ],
        }

    def test_doi(self, cocina: CocinaFixture):
        item = cocina.dro(identification={"source_id": "cats:dogs", "doi": DOI})
        result = project(item)
        assert result["doi"] == DOI
        assert result["prefix"] == "10.80343"
        assert result["identifiers"] == [
            {"identifier": f"https://doi.org/{DOI}", "identifierType": "DOI"}
        ]

    def test_purl_from_description(self, cocina: CocinaFixture):
        item = cocina.dro_with_description(
            {"purl": "https://purl.stanford.edu/cc123dd1234"}
        )
        assert project(item)["url"] == "https://purl.stanford.edu/cc123dd1234"

    def test_collection_is_not_projected(self, cocina: CocinaFixture):
        assert project(cocina.collection()) is None

    def test_agreement_is_rejected(self, cocina: CocinaFixture):
        agreement = build_object(cocina.props(type=ObjectType.agreement))
        with pytest.raises(MetadataValueError, match="Cannot project agreement"):
            project(agreement)

    def test_titles(self, attributes: Attributes, cocina: CocinaFixture):
        item = cocina.dro_with_description(
            {
                "title": [
                    {
                        "structured_value": [
                            {"value": "Lichens", "type": "main title"},
                            {"value": "a field guide", "type": "subtitle"},
                        ]
                    },
                    {"value": "Flechten", "type": "translated"},
                    {
                        "parallel_value": [
                            {"value": "Istoriia"},
                            {"value": "История", "type": "alternative"},
                        ]
                    },
                ]
            }
        )
        assert attributes.titles(item.description) == [
            {"title": "Lichens: a field guide"},
            {"title": "Flechten", "titleType": "TranslatedTitle"},
            {"title": "Istoriia"},
            {"title": "История", "titleType": "AlternativeTitle"},
        ]

    @pytest.mark.parametrize(
        "forms, expected",
        [
            pytest.param(
                [
                    {
                        "value": "Dataset",
                        "type": "resource type",
                        "source": {"value": "DataCite resource types"},
                    },
                    {
                        "structured_value": [
                            {"value": "Data", "type": "type"},
                            {"value": "Tabular data", "type": "subtype"},
                            {"value": "Survey", "type": "subtype"},
                        ],
                        "type": "resource type",
                        "source": {"value": "Stanford self-deposit resource types"},
                    },
                ],
                {
                    "resourceTypeGeneral": "Dataset",
                    "resourceType": "Tabular data; Survey",
                },
                id="subtypes",
            ),
            pytest.param(
                [
                    {
                        "value": "Text",
                        "type": "resource type",
                        "source": {"value": "DataCite resource types"},
                    },
                    {
                        "structured_value": [{"value": "Text", "type": "type"}],
                        "type": "resource type",
                        "source": {"value": "Stanford self-deposit resource types"},
                    },
                ],
                {"resourceTypeGeneral": "Text", "resourceType": "Text"},
                id="type-only",
            ),
            pytest.param(
                [{"value": "text", "type": "resource type", "source": {"value": "MODS resource types"}}],
                {},
                id="no-datacite-type",
            ),
        ],
    )
    def test_types(
        self, attributes: Attributes, cocina: CocinaFixture, forms: list, expected: dict
    ):
        item = cocina.dro_with_description({"form": forms})
        assert attributes.types(item.description) == expected

    def test_descriptions(self, attributes: Attributes, cocina: CocinaFixture):
        item = cocina.dro_with_description(
            {
                "note": [
                    {"value": "An abstract"},
                    {"value": "Summary", "type": "summary"},
                    {"value": "Chapter 1", "type": "table of contents"},
                    {"value": "Jane Doe", "type": "statement of responsibility"},
                ]
            }
        )
        assert attributes.descriptions(item.description) == [
            {"description": "An abstract", "descriptionType": "Abstract"},
            {"description": "Summary", "descriptionType": "Abstract"},
            {"description": "Chapter 1", "descriptionType": "TableOfContents"},
        ]

    def test_subjects(self, attributes: Attributes, cocina: CocinaFixture):
        item = cocina.dro_with_description(
            {
                "subject": [
                    {
                        "value": "Lichens",
                        "type": "topic",
                        "uri": "http://id.loc.gov/authorities/subjects/sh85076502",
                        "source": {
                            "code": "lcsh",
                            "uri": "http://id.loc.gov/authorities/subjects/",
                        },
                    },
                    {
                        "structured_value": [
                            {"value": "California", "type": "place"},
                            {"value": "Maps", "type": "genre"},
                        ]
                    },
                    {"value": "QK587", "type": "classification"},
                ]
            }
        )
        assert attributes.subjects(item.description) == [
            {
                "subject": "Lichens",
                "subjectScheme": "lcsh",
                "schemeURI": "http://id.loc.gov/authorities/subjects/",
                "valueURI": "http://id.loc.gov/authorities/subjects/sh85076502",
            },
            {"subject": "California"},
        ]

    def test_rights_list(self, cocina: CocinaFixture):
        item = cocina.dro(
            access={
                "view": "world",
                "download": "world",
                "license": "https://creativecommons.org/licenses/by/4.0/legalcode",
                "use_and_reproduction_statement": "Cite the author",
            }
        )
        assert project(item)["rightsList"] == [
            {"rightsUri": "https://creativecommons.org/licenses/by/4.0/legalcode"},
            {"rights": "Cite the author"},
        ]
