import pytest
from frozendict import frozendict

from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies


class TestMappingVocabularies:
    @pytest.mark.parametrize(
        "mods_type, expected",
        [
            pytest.param("isbn", "ISBN", id="isbn"),
            pytest.param("Isbn", "ISBN", id="mixed-case"),
            pytest.param("oclc", "OCLC", id="upper-case-mods-spelling"),
            pytest.param("hdl", "Handle", id="handle"),
            pytest.param("accession number", "accession number", id="unknown"),
        ],
    )
    def test_cocina_identifier_type(self, mods_type: str, expected: str):
        assert DEFAULT_VOCABULARIES.cocina_identifier_type(mods_type) == expected

    @pytest.mark.parametrize(
        "cocina_type, expected",
        [
            pytest.param("ISBN", "isbn", id="isbn"),
            pytest.param("OCLC", "OCLC", id="oclc"),
            pytest.param("Handle", "hdl", id="handle"),
            pytest.param("accession number", "accession number", id="unknown"),
        ],
    )
    def test_mods_identifier_type(self, cocina_type: str, expected: str):
        assert DEFAULT_VOCABULARIES.mods_identifier_type(cocina_type) == expected

    def test_canonical_mods_identifier_type(self):
        assert DEFAULT_VOCABULARIES.canonical_mods_identifier_type("ISSN-L") == "issn-l"
        assert DEFAULT_VOCABULARIES.canonical_mods_identifier_type("Sirsi") == "SIRSI"

    def test_event_types(self):
        assert DEFAULT_VOCABULARIES.cocina_event_type("production") == "creation"
        assert DEFAULT_VOCABULARIES.cocina_event_type("publication") == "publication"
        assert DEFAULT_VOCABULARIES.mods_event_type("creation") == "production"
        assert DEFAULT_VOCABULARIES.mods_event_type("capture") == "capture"

    def test_relator_uri(self):
        assert (
            DEFAULT_VOCABULARIES.relator_uri("pbl")
            == "http://id.loc.gov/vocabulary/relators/pbl"
        )

    def test_custom_tables(self):
        vocabularies = MappingVocabularies(
            event_types=frozendict({"production": "creation", "broadcast": "release"})
        )
        assert vocabularies.cocina_event_type("broadcast") == "release"
        assert vocabularies.mods_event_type("release") == "broadcast"
        assert DEFAULT_VOCABULARIES.cocina_event_type("broadcast") == "broadcast"

    def test_immutable(self):
        with pytest.raises(TypeError):
            DEFAULT_VOCABULARIES.catalog_names["alma"] = "alma"  # type: ignore[index]
