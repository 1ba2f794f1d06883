import pytest
from lxml import etree

from sdr.metadata.core.exceptions import RoundtripMismatch, UnmappableDocument
from sdr.metadata.roundtrip import RoundtripValidator, signature, xml_equivalent
from sdr.metadata.util.xmlparser import XMLParser
from tests.fixtures.files import (
    ContentFilesFixture,
    EmbargoFilesFixture,
    FilesFixture,
    IdentityFilesFixture,
    ModsFilesFixture,
    RightsFilesFixture,
)
from tests.fixtures.mapping import OBJECT_ID, MappingFixture

UNMAPPABLE = {("identity", "no_type.xml")}


def sample_documents() -> list:
    fixtures: list[FilesFixture] = [
        IdentityFilesFixture(),
        RightsFilesFixture(),
        EmbargoFilesFixture(),
        ContentFilesFixture(),
        ModsFilesFixture(),
    ]
    return [
        pytest.param(fixture, name, id=f"{fixture.directory.name}/{name}")
        for fixture in fixtures
        for name in fixture.sample_names()
        if (fixture.directory.name, name) not in UNMAPPABLE
    ]


class TestRoundtrip:
    @pytest.mark.parametrize("fixture, name", sample_documents())
    def test_sample_roundtrips(
        self, mapping: MappingFixture, fixture: FilesFixture, name: str
    ):
        mapping.assert_roundtrips(fixture.sample_data(name))

    def test_verify(
        self, mapping: MappingFixture, rights_files_fixture: RightsFilesFixture
    ):
        assert mapping.validator.verify(
            rights_files_fixture.sample_data("world.xml"), OBJECT_ID
        )

    def test_check_raises_on_mismatch(self, mapping: MappingFixture, monkeypatch):
        validator = mapping.validator
        monkeypatch.setattr(
            validator,
            "_rights",
            lambda root: etree.fromstring(
                "<rightsMetadata><access type='discover'><machine><none/></machine>"
                "</access></rightsMetadata>"
            ),
        )
        document = RightsFilesFixture().sample_data("world.xml")

        assert not validator.verify(document, OBJECT_ID)
        with pytest.raises(RoundtripMismatch) as excinfo:
            validator.check(document, OBJECT_ID)
        assert excinfo.value.object_id == OBJECT_ID
        assert "<world/>" in excinfo.value.expected
        assert "<world/>" not in excinfo.value.actual

    def test_unknown_datastream(self, mapping: MappingFixture):
        with pytest.raises(UnmappableDocument, match="Cannot round-trip <workflow>"):
            mapping.validator.roundtrip("<workflow/>", OBJECT_ID)

    def test_unmappable_identity(
        self, identity_files_fixture: IdentityFilesFixture
    ):
        with pytest.raises(UnmappableDocument):
            RoundtripValidator().roundtrip(
                identity_files_fixture.sample_data("no_type.xml"), OBJECT_ID
            )


class TestXmlEquivalent:
    @pytest.mark.parametrize(
        "a, b, equivalent",
        [
            pytest.param("<a><b/><c/></a>", "<a><c/><b/></a>", True, id="child-order"),
            pytest.param("<a x='1' y='2'/>", "<a y='2' x='1'/>", True, id="attr-order"),
            pytest.param("<a> text </a>", "<a>text</a>", True, id="whitespace"),
            pytest.param("<a><b/></a>", "<a><b/><b/></a>", False, id="duplicate"),
            pytest.param("<a x='1'/>", "<a x='2'/>", False, id="attr-value"),
            pytest.param(
                "<a><b g='1'>x</b><b g='1'>y</b><b>z</b></a>",
                "<a><b g='7'>y</b><b>z</b><b g='7'>x</b></a>",
                True,
                id="renamed-group",
            ),
            pytest.param(
                "<a><b g='1'>x</b><b g='1'>y</b><b>z</b></a>",
                "<a><b g='1'>x</b><b>y</b><b g='1'>z</b></a>",
                False,
                id="regrouped",
            ),
        ],
    )
    def test_xml_equivalent(self, a: str, b: str, equivalent: bool):
        a = a.replace(" g=", " altRepGroup=")
        b = b.replace(" g=", " altRepGroup=")
        assert (
            xml_equivalent(XMLParser.load_root(a), XMLParser.load_root(b)) is equivalent
        )

    def test_signature_ignores_group_values(self):
        first = XMLParser.load_root("<a><b nameTitleGroup='1'/><c nameTitleGroup='1'/></a>")
        second = XMLParser.load_root("<a><b nameTitleGroup='2'/><c nameTitleGroup='2'/></a>")
        assert signature(first) == signature(second)
