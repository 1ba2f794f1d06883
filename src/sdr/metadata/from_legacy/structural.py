from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

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
    FileSetType,
    ObjectType,
    ViewingDirection,
)
from sdr.metadata.configuration import bare_druid
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.id_generator import IdGenerator
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.util.xmlparser import XMLParser

if TYPE_CHECKING:
    from lxml.etree import _Element

# contentMetadata/@type -> object type; "file" is the generic object.
CONTENT_TYPES: dict[str, ObjectType] = {
    "file": ObjectType.object,
    "image": ObjectType.image,
    "book": ObjectType.book,
    "map": ObjectType.map,
    "media": ObjectType.media,
    "3d": ObjectType.three_dimensional,
    "document": ObjectType.document,
    "geo": ObjectType.geo,
    "webarchive-seed": ObjectType.webarchive_seed,
    "manuscript": ObjectType.manuscript,
}
READING_ORDERS: dict[str, ViewingDirection] = {
    "ltr": ViewingDirection.left_to_right,
    "rtl": ViewingDirection.right_to_left,
}


def _yes(value: str | None) -> bool:
    return (value or "").strip().lower() == "yes"


def _int(value: str | None) -> int | None:
    if value is None or not value.strip().isdigit():
        return None
    return int(value)


class ContentMapper(LoggerMixin, XMLParser):
    """Reads contentMetadata into the structural part of an item."""

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self.id_generator = id_generator or IdGenerator()

    def object_type(
        self, root: _Element | None, object_id: str | None = None
    ) -> ObjectType:
        """The item type named by contentMetadata; a missing type is a generic object.

        :raise UnmappableDocument: If the content type is not known.
        """
        content_type = self.attribute(root, "type") if root is not None else None
        if content_type is None:
            return ObjectType.object
        if (object_type := CONTENT_TYPES.get(content_type)) is None:
            raise UnmappableDocument(
                f"Unknown content type {content_type!r}",
                object_id=object_id,
                element="contentMetadata",
            )
        return object_type

    def structural(
        self,
        root: _Element | None,
        object_id: str,
        access: DROAccess | None = None,
        file_access: Mapping[str, FileAccess] | None = None,
        collection_ids: Sequence[str] = (),
    ) -> DROStructural:
        if root is None:
            return DROStructural(is_member_of=list(collection_ids))
        default_access = (access or DROAccess()).file_access()
        file_sets = [
            self.file_set(
                resource, position, object_id, default_access, file_access or {}
            )
            for position, resource in enumerate(root.iterfind("resource"), start=1)
        ]
        member_orders = []
        if reading_order := self.attribute_of(root, "bookData", "readingOrder"):
            if (direction := READING_ORDERS.get(reading_order)) is not None:
                member_orders.append(MemberOrder(viewing_direction=direction))
            else:
                self.log.warning("Ignoring unknown reading order %r", reading_order)
        return DROStructural(
            contains=file_sets,
            has_member_orders=member_orders,
            is_member_of=list(collection_ids),
        )

    def attribute_of(self, root: _Element, path: str, name: str) -> str | None:
        element = root.find(path)
        return None if element is None else self.attribute(element, name)

    def file_set(
        self,
        resource: _Element,
        position: int,
        object_id: str,
        default_access: FileAccess,
        file_access: Mapping[str, FileAccess],
    ) -> FileSet:
        resource_id = (
            self.attribute(resource, "id") or f"{bare_druid(object_id)}_{position}"
        )
        resource_type = self.attribute(resource, "type") or "file"
        try:
            file_set_type = FileSetType.from_short_name(resource_type)
        except ValueError as e:
            raise UnmappableDocument(
                f"Unknown resource type {resource_type!r}",
                object_id=object_id,
                element="resource",
            ) from e
        label = self.text_of_optional_subtag(resource, "label")
        if label is None:
            label = self.text_of_optional_subtag(resource, "attr[@name='label']")
        files = [
            self.file(file, resource_id, object_id, default_access, file_access)
            for file in resource.iterfind("file")
        ]
        return FileSet(
            external_identifier=self.id_generator.file_set_id(object_id, resource_id),
            type=file_set_type,
            label=(label or "").strip(),
            structural=FileSetStructural(contains=files),
        )

    def file(
        self,
        file: _Element,
        resource_id: str,
        object_id: str,
        default_access: FileAccess,
        file_access: Mapping[str, FileAccess],
    ) -> File:
        filename = file.get("id", "")
        digests = []
        for checksum in file.iterfind("checksum"):
            digest_type = (checksum.get("type") or "").lower()
            if digest_type not in {t.value for t in DigestType}:
                self.log.warning("Ignoring %r checksum on %s", digest_type, filename)
                continue
            digests.append(
                MessageDigest(
                    type=DigestType(digest_type), digest=(checksum.text or "").strip()
                )
            )
        presentation = None
        if (image_data := file.find("imageData")) is not None:
            presentation = Presentation(
                height=_int(image_data.get("height")),
                width=_int(image_data.get("width")),
            )
        publish = file.get("publish", file.get("deliver"))
        return File(
            external_identifier=self.id_generator.file_id(
                object_id, resource_id, filename
            ),
            label=filename,
            filename=filename,
            size=_int(file.get("size")),
            has_mime_type=self.attribute(file, "mimetype"),
            use=self.attribute(file, "role"),
            has_message_digests=digests,
            access=file_access.get(filename, default_access),
            administrative=FileAdministrative(
                publish=_yes(publish),
                sdr_preserve=_yes(file.get("preserve")),
                shelve=_yes(file.get("shelve")),
            ),
            presentation=presentation,
        )
