import datetime

import pytest
import pytz

from sdr.metadata.cocina.identification import CatalogLink
from sdr.metadata.cocina.vocab import ReleaseScope
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.from_legacy.identity import IdentityMapper
from sdr.metadata.util.xmlparser import XMLParser
from tests.fixtures.files import IdentityFilesFixture


@pytest.fixture()
def mapper() -> IdentityMapper:
    return IdentityMapper()


class TestIdentityMapper:
    def test_item(self, mapper: IdentityMapper, identity_files_fixture: IdentityFilesFixture):
        root = XMLParser.load_root(identity_files_fixture.sample_data("item.xml"))

        assert mapper.object_kind(root) == "item"
        assert mapper.label(root) == "M0443_S2_D-K_B9_F33_008"

        identification = mapper.identification(root)
        assert identification.source_id == "sul:M0443_S2_D-K_B9_F33_008"
        assert identification.barcode == "36105049267078"
        assert identification.catalog_links == [
            CatalogLink(catalog="symphony", catalog_record_id="129483625", refresh=True)
        ]

    def test_release_tags(
        self, mapper: IdentityMapper, identity_files_fixture: IdentityFilesFixture
    ):
        root = XMLParser.load_root(identity_files_fixture.sample_data("item.xml"))

        searchworks, earthworks = mapper.release_tags(root)
        assert searchworks.to == "Searchworks"
        assert searchworks.what == ReleaseScope.self
        assert searchworks.release is True
        assert searchworks.who == "petucket"
        assert searchworks.date == datetime.datetime(2016, 9, 12, 20, 0, 14, tzinfo=pytz.UTC)

        assert earthworks.what == ReleaseScope.collection
        assert earthworks.release is False
        assert earthworks.date == datetime.datetime(2016, 9, 13, 17, tzinfo=pytz.UTC)

    def test_release_tag_without_target(self, mapper: IdentityMapper, caplog):
        root = XMLParser.load_root(
            "<identityMetadata><release what='self'>true</release></identityMetadata>"
        )
        assert mapper.release_tags(root) == []
        assert "Skipping release tag without a target" in caplog.text

    def test_unparseable_release_date(self, mapper: IdentityMapper):
        root = XMLParser.load_root(
            "<identityMetadata><release to='Searchworks' when='soon'>true</release>"
            "</identityMetadata>"
        )
        [tag] = mapper.release_tags(root)
        assert tag.date is None
        assert tag.what == ReleaseScope.self

    def test_collection(
        self, mapper: IdentityMapper, identity_files_fixture: IdentityFilesFixture
    ):
        root = XMLParser.load_root(identity_files_fixture.sample_data("collection.xml"))

        assert mapper.object_kind(root) == "collection"
        identification = mapper.identification(root)
        assert identification.source_id is None
        assert identification.catalog_links == [
            CatalogLink(catalog="folio", catalog_record_id="a1234567", refresh=True),
            CatalogLink(
                catalog="previous folio", catalog_record_id="a7654321", refresh=False
            ),
        ]
        assert identification.catalog_links[1].is_previous

    def test_missing_object_type(
        self, mapper: IdentityMapper, identity_files_fixture: IdentityFilesFixture
    ):
        root = XMLParser.load_root(identity_files_fixture.sample_data("no_type.xml"))
        with pytest.raises(UnmappableDocument) as excinfo:
            mapper.object_kind(root, "druid:bc123kj8759")
        assert excinfo.value.element == "objectType"
        assert excinfo.value.object_id == "druid:bc123kj8759"
        assert "druid:bc123kj8759: identityMetadata has no objectType" in str(
            excinfo.value
        )

    def test_unknown_object_type(self, mapper: IdentityMapper):
        root = XMLParser.load_root(
            "<identityMetadata><objectType>workflow</objectType></identityMetadata>"
        )
        with pytest.raises(UnmappableDocument, match="Unknown objectType 'workflow'"):
            mapper.object_kind(root)

    @pytest.mark.parametrize(
        "object_type",
        ["item", "collection", "adminPolicy", "agreement"],
    )
    def test_object_kinds(self, mapper: IdentityMapper, object_type: str):
        root = XMLParser.load_root(
            f"<identityMetadata><objectType>{object_type}</objectType></identityMetadata>"
        )
        assert mapper.object_kind(root) == object_type
