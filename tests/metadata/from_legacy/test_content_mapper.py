import pytest

from sdr.metadata.cocina.access import DROAccess, FileAccess
from sdr.metadata.cocina.structural import MessageDigest
from sdr.metadata.cocina.vocab import (
    DigestType,
    Download,
    FileSetType,
    ObjectType,
    View,
    ViewingDirection,
)
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.from_legacy.structural import ContentMapper
from sdr.metadata.id_generator import IdGenerator
from sdr.metadata.util.xmlparser import XMLParser
from tests.fixtures.files import ContentFilesFixture

OBJECT_ID = "druid:bc123kj8759"
FILE_SET_BASE = "https://cocina.sul.stanford.edu/fileSet/bc123kj8759-"
FILE_BASE = "https://cocina.sul.stanford.edu/file/bc123kj8759-"


@pytest.fixture()
def mapper() -> ContentMapper:
    return ContentMapper(IdGenerator(random_source=lambda: "generated"))


class TestContentMapper:
    @pytest.mark.parametrize(
        "xml, expected",
        [
            pytest.param("<contentMetadata type='book'/>", ObjectType.book, id="book"),
            pytest.param("<contentMetadata type='3d'/>", ObjectType.three_dimensional, id="3d"),
            pytest.param("<contentMetadata type='file'/>", ObjectType.object, id="file"),
            pytest.param("<contentMetadata/>", ObjectType.object, id="untyped"),
        ],
    )
    def test_object_type(self, mapper: ContentMapper, xml: str, expected: ObjectType):
        assert mapper.object_type(XMLParser.load_root(xml)) == expected

    def test_object_type_missing_document(self, mapper: ContentMapper):
        assert mapper.object_type(None) == ObjectType.object

    def test_unknown_object_type(self, mapper: ContentMapper):
        with pytest.raises(UnmappableDocument, match="Unknown content type 'hologram'"):
            mapper.object_type(
                XMLParser.load_root("<contentMetadata type='hologram'/>"), OBJECT_ID
            )

    def test_book(self, mapper: ContentMapper, content_files_fixture: ContentFilesFixture):
        root = XMLParser.load_root(content_files_fixture.sample_data("book.xml"))
        access = DROAccess(view=View.world, download=Download.world)

        structural = mapper.structural(
            root, OBJECT_ID, access, collection_ids=["druid:xz456jk0987"]
        )

        assert structural.is_member_of == ["druid:xz456jk0987"]
        [order] = structural.has_member_orders
        assert order.viewing_direction == ViewingDirection.right_to_left

        pages, transcript, empty = structural.contains
        assert pages.external_identifier == f"{FILE_SET_BASE}bc123kj8759_1"
        assert pages.type == FileSetType.page
        assert pages.label == "Page 1"
        assert transcript.label == "Transcript"
        assert transcript.type == FileSetType.object
        assert transcript.external_identifier == f"{FILE_SET_BASE}bc123kj8759_2"
        assert empty.external_identifier == f"{FILE_SET_BASE}bc123kj8759_3"
        assert empty.structural.contains == []
        assert empty.label == ""

        jp2, tif = pages.structural.contains
        assert jp2.external_identifier == f"{FILE_BASE}bc123kj8759_1/page1.jp2"
        assert jp2.filename == jp2.label == "page1.jp2"
        assert jp2.size == 3575822
        assert jp2.has_mime_type == "image/jp2"
        assert jp2.has_message_digests == [
            MessageDigest(type=DigestType.md5, digest="3d3ff46d98f3d517d0bf086571e05c18"),
            MessageDigest(
                type=DigestType.sha1, digest="ca1eb0edd09a21f9dd9e3a89abc790daf4d04916"
            ),
        ]
        assert jp2.presentation is not None
        assert (jp2.presentation.width, jp2.presentation.height) == (6000, 4000)
        assert jp2.administrative.publish
        assert jp2.administrative.shelve
        assert not jp2.administrative.sdr_preserve
        assert jp2.access == FileAccess(view=View.world, download=Download.world)

        assert not tif.administrative.publish
        assert tif.administrative.sdr_preserve
        assert tif.presentation is None

        [pdf] = transcript.structural.contains
        assert pdf.use == "transcription"

    def test_file_access_overrides(
        self, mapper: ContentMapper, content_files_fixture: ContentFilesFixture
    ):
        root = XMLParser.load_root(content_files_fixture.sample_data("file.xml"))
        restricted = FileAccess(view=View.stanford, download=Download.none)

        structural = mapper.structural(
            root,
            OBJECT_ID,
            DROAccess(view=View.world, download=Download.world),
            {"notes.txt": restricted},
        )

        [file_set] = structural.contains
        data, notes = file_set.structural.contains
        assert data.access.view == View.world
        assert notes.access == restricted
        assert notes.administrative.sdr_preserve is False
        assert notes.has_message_digests == []

    def test_missing_content(self, mapper: ContentMapper):
        structural = mapper.structural(None, OBJECT_ID, collection_ids=["druid:xz456jk0987"])
        assert structural.contains == []
        assert structural.is_member_of == ["druid:xz456jk0987"]

    def test_unknown_resource_type(self, mapper: ContentMapper):
        root = XMLParser.load_root(
            "<contentMetadata type='file'><resource id='r1' type='hologram'/></contentMetadata>"
        )
        with pytest.raises(UnmappableDocument, match="Unknown resource type"):
            mapper.structural(root, OBJECT_ID)

    def test_unsupported_checksum(self, mapper: ContentMapper, caplog):
        root = XMLParser.load_root(
            "<contentMetadata type='file'><resource id='r1' type='file'>"
            "<file id='a.txt'><checksum type='sha256'>abc</checksum></file>"
            "</resource></contentMetadata>"
        )
        [file_set] = mapper.structural(root, OBJECT_ID).contains
        [file] = file_set.structural.contains
        assert file.has_message_digests == []
        assert "Ignoring 'sha256' checksum on a.txt" in caplog.text

    def test_unknown_reading_order(self, mapper: ContentMapper, caplog):
        root = XMLParser.load_root(
            "<contentMetadata type='book'><bookData readingOrder='ttb'/></contentMetadata>"
        )
        assert mapper.structural(root, OBJECT_ID).has_member_orders == []
        assert "Ignoring unknown reading order 'ttb'" in caplog.text
