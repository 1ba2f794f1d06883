import datetime

import pytest
import pytz

from sdr.metadata.cocina.access import CollectionAccess, FileAccess
from sdr.metadata.cocina.vocab import Download, LocationCode, View
from sdr.metadata.from_legacy.access import (
    NO_DOWNLOAD,
    MachineRule,
    RightsMapper,
    derive_rights,
)
from sdr.metadata.util.xmlparser import XMLParser
from tests.fixtures.files import EmbargoFilesFixture, RightsFilesFixture


class TestDeriveRights:
    @pytest.mark.parametrize(
        "discoverable, rules, expected",
        [
            pytest.param(
                True,
                [MachineRule("world")],
                {"view": View.world, "download": Download.world},
                id="world",
            ),
            pytest.param(
                True,
                [MachineRule("world", rule=NO_DOWNLOAD)],
                {"view": View.world, "download": Download.none},
                id="world-no-download",
            ),
            pytest.param(
                True,
                [MachineRule("world", rule=NO_DOWNLOAD), MachineRule("group", "stanford")],
                {"view": View.world, "download": Download.stanford},
                id="world-stanford-download",
            ),
            pytest.param(
                True,
                [MachineRule("world", rule=NO_DOWNLOAD), MachineRule("location", "spec")],
                {
                    "view": View.world,
                    "download": Download.location_based,
                    "location": "spec",
                },
                id="world-location-download",
            ),
            pytest.param(
                True,
                [MachineRule("group", "stanford")],
                {"view": View.stanford, "download": Download.stanford},
                id="stanford",
            ),
            pytest.param(
                True,
                [
                    MachineRule("group", "stanford", rule=NO_DOWNLOAD),
                    MachineRule("location", "spec"),
                ],
                {
                    "view": View.stanford,
                    "download": Download.location_based,
                    "location": "spec",
                },
                id="stanford-location-download",
            ),
            pytest.param(
                True,
                [MachineRule("group", "stanford", rule=NO_DOWNLOAD)],
                {"view": View.stanford, "download": Download.none},
                id="stanford-no-download",
            ),
            pytest.param(
                True,
                [MachineRule("location", "music")],
                {
                    "view": View.location_based,
                    "download": Download.location_based,
                    "location": "music",
                },
                id="location",
            ),
            pytest.param(
                True,
                [MachineRule("location", "music", rule=NO_DOWNLOAD)],
                {
                    "view": View.location_based,
                    "download": Download.none,
                    "location": "music",
                },
                id="location-no-download",
            ),
            pytest.param(
                True,
                [MachineRule("cdl")],
                {
                    "view": View.stanford,
                    "download": Download.none,
                    "controlled_digital_lending": True,
                },
                id="cdl",
            ),
            pytest.param(
                True,
                [MachineRule("none")],
                {"view": View.citation_only, "download": Download.none},
                id="citation-only",
            ),
            pytest.param(
                False,
                [MachineRule("none")],
                {"view": View.dark, "download": Download.none},
                id="dark",
            ),
        ],
    )
    def test_derive_rights(
        self, discoverable: bool, rules: list[MachineRule], expected: dict
    ):
        assert derive_rights(discoverable, rules) == expected


class TestRightsMapper:
    def load(self, files: RightsFilesFixture, name: str):
        return XMLParser.load_root(files.sample_data(name))

    def test_world_with_statements(self, rights_files_fixture: RightsFilesFixture):
        access = RightsMapper().dro_access(self.load(rights_files_fixture, "world.xml"))
        assert access.view == View.world
        assert access.download == Download.world
        assert access.license == "https://creativecommons.org/licenses/by/3.0/legalcode"
        assert access.use_and_reproduction_statement.startswith("User agrees")
        assert access.copyright.startswith("Copyright ©")
        assert access.embargo is None

    def test_coded_license(self, rights_files_fixture: RightsFilesFixture):
        access = RightsMapper().dro_access(
            self.load(rights_files_fixture, "legacy_license.xml")
        )
        assert access.view == View.world
        assert access.download == Download.none
        assert (
            access.license == "https://creativecommons.org/licenses/by-sa/3.0/legalcode"
        )

    def test_location(self, rights_files_fixture: RightsFilesFixture):
        access = RightsMapper().dro_access(
            self.load(rights_files_fixture, "stanford_no_download_location.xml")
        )
        assert access.view == View.stanford
        assert access.download == Download.location_based
        assert access.location == LocationCode.spec

    def test_cdl(self, rights_files_fixture: RightsFilesFixture):
        access = RightsMapper().dro_access(self.load(rights_files_fixture, "cdl.xml"))
        assert access.controlled_digital_lending is True
        assert access.view == View.stanford

    @pytest.mark.parametrize(
        "name, view",
        [
            pytest.param("citation_only.xml", View.citation_only, id="citation-only"),
            pytest.param("dark.xml", View.dark, id="dark"),
        ],
    )
    def test_no_read_access(
        self, rights_files_fixture: RightsFilesFixture, name: str, view: View
    ):
        access = RightsMapper().dro_access(self.load(rights_files_fixture, name))
        assert access.view == view
        assert access.download == Download.none

    def test_missing_rights(self):
        access = RightsMapper().dro_access(None)
        assert access.view == View.dark
        assert access.download == Download.none

    def test_file_access(self, rights_files_fixture: RightsFilesFixture):
        file_access = RightsMapper().file_access(
            self.load(rights_files_fixture, "file_level.xml")
        )
        assert file_access == {
            "restricted.pdf": FileAccess(view=View.stanford, download=Download.stanford),
            "hidden.tif": FileAccess(view=View.dark, download=Download.none),
        }
        assert RightsMapper().file_access(None) == {}

    @pytest.mark.parametrize(
        "name, view",
        [
            pytest.param("world.xml", View.world, id="world"),
            pytest.param("stanford_no_download_location.xml", View.dark, id="stanford"),
            pytest.param("dark.xml", View.dark, id="dark"),
        ],
    )
    def test_collection_access(
        self, rights_files_fixture: RightsFilesFixture, name: str, view: View
    ):
        access = RightsMapper().collection_access(self.load(rights_files_fixture, name))
        assert access.view == view
        assert RightsMapper().collection_access(None) == CollectionAccess()


class TestEmbargo:
    def test_embargoed(
        self,
        rights_files_fixture: RightsFilesFixture,
        embargo_files_fixture: EmbargoFilesFixture,
    ):
        access = RightsMapper().dro_access(
            XMLParser.load_root(rights_files_fixture.sample_data("dark.xml")),
            XMLParser.load_root(embargo_files_fixture.sample_data("embargoed.xml")),
        )
        assert access.embargo is not None
        assert access.embargo.release_date == datetime.datetime(
            2029, 2, 28, 8, tzinfo=pytz.UTC
        )
        assert access.embargo.view == View.world
        assert access.embargo.download == Download.world

    def test_released(self, embargo_files_fixture: EmbargoFilesFixture):
        root = XMLParser.load_root(embargo_files_fixture.sample_data("released.xml"))
        assert RightsMapper().embargo(root) is None
        assert RightsMapper().embargo(None) is None
