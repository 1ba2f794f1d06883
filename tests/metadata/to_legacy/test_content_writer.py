from sdr.metadata.cocina.access import DROAccess, FileAccess
from sdr.metadata.cocina.structural import (
    DROStructural,
    File,
    FileAdministrative,
    FileSet,
    FileSetStructural,
    MemberOrder,
    MessageDigest,
    Presentation,
)
from sdr.metadata.cocina.vocab import (
    DigestType,
    Download,
    FileSetType,
    ObjectType,
    View,
    ViewingDirection,
)
from sdr.metadata.from_legacy.structural import ContentMapper
from sdr.metadata.id_generator import IdGenerator
from sdr.metadata.to_legacy.content import ContentWriter

OBJECT_ID = "druid:bc123kj8759"


def file(filename: str, **overrides) -> File:
    props = {
        "external_identifier": f"https://cocina.sul.stanford.edu/file/bc123kj8759-1/{filename}",
        "label": filename,
        "filename": filename,
    } | overrides
    return File(**props)


class TestContentWriter:
    def test_write(self):
        structural = DROStructural(
            contains=[
                FileSet(
                    external_identifier="https://cocina.sul.stanford.edu/fileSet/bc123kj8759-1",
                    type=FileSetType.image,
                    label="Image 1",
                    structural=FileSetStructural(
                        contains=[
                            file(
                                "image.jp2",
                                size=1024,
                                has_mime_type="image/jp2",
                                has_message_digests=[
                                    MessageDigest(type=DigestType.md5, digest="abc")
                                ],
                                presentation=Presentation(height=10, width=20),
                                access=FileAccess(view=View.world, download=Download.world),
                                administrative=FileAdministrative(
                                    publish=True, sdr_preserve=False, shelve=True
                                ),
                            ),
                            file(
                                "hidden.tif",
                                access=FileAccess(view=View.dark),
                                administrative=FileAdministrative(publish=True),
                            ),
                        ]
                    ),
                )
            ],
            has_member_orders=[
                MemberOrder(viewing_direction=ViewingDirection.left_to_right)
            ],
        )

        root = ContentWriter().write(OBJECT_ID, ObjectType.image, structural)

        assert root.get("objectId") == OBJECT_ID
        assert root.get("type") == "image"
        [resource] = root.findall("resource")
        assert dict(resource.attrib) == {
            "id": "bc123kj8759_1",
            "sequence": "1",
            "type": "image",
        }
        assert resource.findtext("label") == "Image 1"
        image, hidden = resource.findall("file")
        assert dict(image.attrib) == {
            "id": "image.jp2",
            "mimetype": "image/jp2",
            "size": "1024",
            "publish": "yes",
            "shelve": "yes",
            "preserve": "no",
        }
        assert image.find("checksum").get("type") == "md5"
        assert image.find("imageData").get("width") == "20"
        # Dark files are never published.
        assert hidden.get("publish") == "no"
        assert root.find("bookData").get("readingOrder") == "ltr"

    def test_read_back(self):
        structural = DROStructural(
            contains=[
                FileSet(
                    external_identifier="https://cocina.sul.stanford.edu/fileSet/bc123kj8759-bc123kj8759_1",
                    type=FileSetType.document,
                    structural=FileSetStructural(contains=[file("report.pdf")]),
                )
            ]
        )
        root = ContentWriter().write(OBJECT_ID, ObjectType.document, structural)

        mapper = ContentMapper(IdGenerator())
        assert mapper.object_type(root) == ObjectType.document
        read = mapper.structural(root, OBJECT_ID, DROAccess())
        [file_set] = read.contains
        assert file_set.external_identifier == structural.contains[0].external_identifier
        assert file_set.type == FileSetType.document
        [report] = file_set.structural.contains
        assert report.filename == "report.pdf"
        assert (
            report.external_identifier
            == "https://cocina.sul.stanford.edu/file/bc123kj8759-bc123kj8759_1/report.pdf"
        )
