import datetime

import pytest
import pytz
from lxml import etree

from sdr.metadata.cocina.access import CollectionAccess, DROAccess, Embargo, FileAccess
from sdr.metadata.cocina.vocab import Download, LocationCode, View
from sdr.metadata.from_legacy.access import RightsMapper
from sdr.metadata.to_legacy.rights import RightsWriter, read_rules


def rule_strings(access) -> list[str]:
    return [etree.tostring(rule, encoding="unicode") for rule in read_rules(access)]


class TestReadRules:
    @pytest.mark.parametrize(
        "access, expected",
        [
            pytest.param(
                DROAccess(view=View.world, download=Download.world),
                ["<world/>"],
                id="world",
            ),
            pytest.param(
                DROAccess(view=View.world, download=Download.none),
                ['<world rule="no-download"/>'],
                id="world-no-download",
            ),
            pytest.param(
                DROAccess(view=View.world, download=Download.stanford),
                ['<world rule="no-download"/>', "<group>stanford</group>"],
                id="world-stanford-download",
            ),
            pytest.param(
                DROAccess(
                    view=View.stanford,
                    download=Download.location_based,
                    location=LocationCode.spec,
                ),
                [
                    '<group rule="no-download">stanford</group>',
                    "<location>spec</location>",
                ],
                id="stanford-location-download",
            ),
            pytest.param(
                DROAccess(
                    view=View.location_based,
                    download=Download.none,
                    location=LocationCode.music,
                ),
                ['<location rule="no-download">music</location>'],
                id="location-no-download",
            ),
            pytest.param(
                DROAccess(
                    view=View.stanford,
                    download=Download.none,
                    controlled_digital_lending=True,
                ),
                ['<cdl><group rule="no-download">stanford</group></cdl>'],
                id="cdl",
            ),
            pytest.param(DROAccess(view=View.dark), ["<none/>"], id="dark"),
            pytest.param(
                DROAccess(view=View.citation_only), ["<none/>"], id="citation-only"
            ),
        ],
    )
    def test_read_rules(self, access: DROAccess, expected: list[str]):
        assert rule_strings(access) == expected


class TestRightsWriter:
    @pytest.mark.parametrize(
        "access",
        [
            pytest.param(DROAccess(view=View.world, download=Download.world), id="world"),
            pytest.param(
                DROAccess(view=View.world, download=Download.stanford),
                id="world-stanford",
            ),
            pytest.param(
                DROAccess(
                    view=View.location_based,
                    download=Download.location_based,
                    location=LocationCode.ars,
                ),
                id="location",
            ),
            pytest.param(
                DROAccess(
                    view=View.stanford,
                    download=Download.none,
                    controlled_digital_lending=True,
                ),
                id="cdl",
            ),
            pytest.param(DROAccess(view=View.citation_only), id="citation-only"),
            pytest.param(DROAccess(view=View.dark), id="dark"),
            pytest.param(
                DROAccess(
                    view=View.world,
                    download=Download.world,
                    use_and_reproduction_statement="Use freely",
                    license="https://creativecommons.org/publicdomain/zero/1.0/legalcode",
                    copyright="Copyright 2020",
                ),
                id="statements",
            ),
        ],
    )
    def test_rights_read_back(self, access: DROAccess):
        root = RightsWriter().write_rights(access)
        assert RightsMapper().dro_access(root) == access

    def test_file_rules(self):
        access = DROAccess(view=View.world, download=Download.world)
        restricted = FileAccess(view=View.stanford, download=Download.stanford)

        root = RightsWriter().write_rights(
            access,
            {"open.pdf": access.file_access(), "restricted.pdf": restricted},
        )

        assert root.xpath("access/file/text()") == ["restricted.pdf"]
        assert RightsMapper().file_access(root) == {"restricted.pdf": restricted}

    def test_collection(self):
        root = RightsWriter().write_rights(CollectionAccess(view=View.world))
        assert root.xpath("access[@type='read']/machine/*")[0].tag == "world"
        assert RightsMapper().collection_access(root) == CollectionAccess(view=View.world)

    def test_embargo(self):
        embargo = Embargo(
            release_date=datetime.datetime(2029, 2, 28, 8, tzinfo=pytz.UTC),
            view=View.world,
            download=Download.world,
        )

        root = RightsWriter().write_embargo(embargo)

        assert root.findtext("status") == "embargoed"
        assert root.findtext("releaseDate") == "2029-02-28T08:00:00Z"
        assert RightsMapper().embargo(root) == embargo
