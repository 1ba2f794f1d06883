import datetime

import pytest
import pytz

from sdr.metadata.cocina.access import DROAccess, Embargo, FileAccess
from sdr.metadata.cocina.administrative import Administrative, ReleaseTag
from sdr.metadata.cocina.description import Description
from sdr.metadata.cocina.identification import Identification
from sdr.metadata.cocina.structural import (
    DROStructural,
    File,
    FileSet,
    FileSetStructural,
)
from sdr.metadata.cocina.vocab import Download, ObjectType, ReleaseScope, View
from sdr.metadata.core.exceptions import MetadataValueError
from sdr.metadata.from_legacy.object import ObjectMapper
from sdr.metadata.legacy.object import Datastream, LegacyObject
from sdr.metadata.to_legacy.applier import DatastreamApplier
from tests.fixtures.cocina import ADMIN_POLICY_ID, COLLECTION_ID, CocinaFixture
from tests.fixtures.files import IdentityFilesFixture, RightsFilesFixture

OBJECT_ID = "druid:cc123dd1234"


@pytest.fixture()
def applier() -> DatastreamApplier:
    return DatastreamApplier()


@pytest.fixture()
def legacy(
    identity_files_fixture: IdentityFilesFixture,
    rights_files_fixture: RightsFilesFixture,
) -> LegacyObject:
    return LegacyObject(
        pid=OBJECT_ID,
        label="Original label",
        admin_policy_id=ADMIN_POLICY_ID,
        datastreams={
            Datastream.identity: identity_files_fixture.sample_text("item.xml"),
            Datastream.rights: rights_files_fixture.sample_text("file_level.xml"),
        },
    )


class TestDatastreamApplier:
    def test_apply_object(self, applier: DatastreamApplier, cocina: CocinaFixture):
        dro = cocina.dro(
            version=4,
            access={"view": "world", "download": "world"},
            structural={"is_member_of": [COLLECTION_ID]},
        )

        legacy = applier.apply(dro, LegacyObject.empty(OBJECT_ID))

        assert legacy.label == "This is my label"
        assert legacy.version == 4
        assert legacy.admin_policy_id == ADMIN_POLICY_ID
        assert legacy.collection_ids == [COLLECTION_ID]
        for datastream in (
            Datastream.identity,
            Datastream.rights,
            Datastream.content,
            Datastream.descriptive,
        ):
            assert legacy.has(datastream)
        assert not legacy.has(Datastream.embargo)

        mapped = ObjectMapper().build(legacy)
        assert mapped.type == ObjectType.object
        assert mapped.identification == dro.identification
        assert mapped.access == dro.access
        assert mapped.description.title[0].value == "title"

    def test_apply_collection(self, applier: DatastreamApplier, cocina: CocinaFixture):
        collection = cocina.collection(access={"view": "world"})
        legacy = applier.apply(collection, LegacyObject.empty(OBJECT_ID))

        identity = legacy.datastream(Datastream.identity)
        assert identity.findtext("objectType") == "collection"
        assert not legacy.has(Datastream.content)

    def test_apply_identification_keeps_release_tags(
        self, applier: DatastreamApplier, legacy: LegacyObject
    ):
        applier.apply(Identification(source_id="new:source"), legacy)

        identity = legacy.datastream(Datastream.identity)
        assert identity.findtext("sourceId") == "source"
        assert identity.find("sourceId").get("source") == "new"
        assert identity.findtext("objectType") == "item"
        assert identity.findtext("objectLabel") == "M0443_S2_D-K_B9_F33_008"
        assert len(identity.findall("release")) == 2
        assert identity.findall("otherId") == []

    def test_apply_administrative(
        self, applier: DatastreamApplier, legacy: LegacyObject
    ):
        administrative = Administrative(
            has_admin_policy="druid:xz456jk0987",
            release_tags=[
                ReleaseTag(to="Earthworks", what=ReleaseScope.self, release=True)
            ],
        )

        applier.apply(administrative, legacy)

        assert legacy.admin_policy_id == "druid:xz456jk0987"
        identity = legacy.datastream(Datastream.identity)
        [release] = identity.findall("release")
        assert release.get("to") == "Earthworks"
        # Identification is carried over from the existing datastream.
        assert identity.find("sourceId") is not None
        assert identity.find("otherId[@name='barcode']") is not None

    def test_apply_access_keeps_file_rules(
        self, applier: DatastreamApplier, legacy: LegacyObject
    ):
        applier.apply(DROAccess(view=View.world, download=Download.none), legacy)

        rights = legacy.datastream(Datastream.rights)
        assert sorted(rights.xpath("access/file/text()")) == [
            "hidden.tif",
            "restricted.pdf",
        ]
        assert rights.xpath(
            "access[@type='read'][not(file)]/machine/world/@rule"
        ) == ["no-download"]

    def test_embargo_written_and_removed(
        self, applier: DatastreamApplier, legacy: LegacyObject
    ):
        embargo = Embargo(
            release_date=datetime.datetime(2030, 1, 1, tzinfo=pytz.UTC),
            view=View.world,
            download=Download.world,
        )

        applier.apply(DROAccess(view=View.dark, embargo=embargo), legacy)
        assert legacy.datastream(Datastream.embargo).findtext("releaseDate") == (
            "2030-01-01T00:00:00Z"
        )

        applier.apply(DROAccess(view=View.dark), legacy)
        assert not legacy.has(Datastream.embargo)

    def test_apply_structural(self, applier: DatastreamApplier, legacy: LegacyObject):
        restricted = FileAccess(view=View.stanford, download=Download.none)
        structural = DROStructural(
            contains=[
                FileSet(
                    external_identifier="https://cocina.sul.stanford.edu/fileSet/cc123dd1234-1",
                    structural=FileSetStructural(
                        contains=[
                            File(
                                external_identifier="https://cocina.sul.stanford.edu/file/cc123dd1234-1/a.txt",
                                label="a.txt",
                                filename="a.txt",
                                access=restricted,
                            )
                        ]
                    ),
                )
            ],
            is_member_of=[COLLECTION_ID],
        )

        applier.apply(structural, legacy)

        assert legacy.collection_ids == [COLLECTION_ID]
        content = legacy.datastream(Datastream.content)
        assert content.get("type") == "file"
        assert content.xpath("resource/file/@id") == ["a.txt"]
        rights = legacy.datastream(Datastream.rights)
        assert rights.xpath("access/file/text()") == ["a.txt"]

    def test_apply_description(self, applier: DatastreamApplier, legacy: LegacyObject):
        applier.apply(Description(title=[{"value": "A new title"}]), legacy)

        assert legacy.has(Datastream.descriptive)
        assert "A new title" in legacy.datastreams[Datastream.descriptive]
        assert legacy.has(Datastream.rights)

    def test_unsupported_fragment(self, applier: DatastreamApplier, legacy: LegacyObject):
        with pytest.raises(MetadataValueError, match="Cannot apply FileAccess"):
            applier.apply(FileAccess(), legacy)  # type: ignore[arg-type]
