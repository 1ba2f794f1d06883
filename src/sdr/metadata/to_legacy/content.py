from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.cocina.structural import DROStructural, File
from sdr.metadata.cocina.vocab import ObjectType, View, ViewingDirection
from sdr.metadata.configuration import bare_druid
from sdr.metadata.from_legacy.structural import CONTENT_TYPES, READING_ORDERS
from sdr.metadata.normalizers.base import sub_element
from sdr.metadata.util.log import LoggerMixin

if TYPE_CHECKING:
    from lxml.etree import _Element

CONTENT_TYPE_NAMES = {object_type: name for name, object_type in CONTENT_TYPES.items()}
READING_ORDER_NAMES = {direction: name for name, direction in READING_ORDERS.items()}


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _str(value: int | None) -> str | None:
    return None if value is None else str(value)


class ContentWriter(LoggerMixin):
    """Writes the structural part of an item as contentMetadata."""

    def write(
        self, object_id: str, object_type: ObjectType, structural: DROStructural
    ) -> _Element:
        druid = f"druid:{bare_druid(object_id)}"
        root = etree.Element(
            "contentMetadata",
            objectId=druid,
            type=CONTENT_TYPE_NAMES.get(object_type, "file"),
        )
        for sequence, file_set in enumerate(structural.contains, start=1):
            resource = sub_element(
                root,
                "resource",
                id=f"{bare_druid(object_id)}_{sequence}",
                sequence=str(sequence),
                type=file_set.type.short_name,
            )
            if file_set.label:
                sub_element(resource, "label", file_set.label)
            for file in file_set.structural.contains:
                self.write_file(resource, file)

        for member_order in structural.has_member_orders:
            if member_order.viewing_direction is not None:
                sub_element(
                    root,
                    "bookData",
                    readingOrder=READING_ORDER_NAMES[
                        ViewingDirection(member_order.viewing_direction)
                    ],
                )
                break
        return root

    def write_file(self, resource: _Element, file: File) -> _Element:
        administrative = file.administrative
        publish = administrative.publish and file.access.view != View.dark
        element = sub_element(
            resource,
            "file",
            id=file.filename,
            mimetype=file.has_mime_type,
            size=_str(file.size),
            publish=_yes_no(publish),
            shelve=_yes_no(administrative.shelve),
            preserve=_yes_no(administrative.sdr_preserve),
            role=file.use,
        )
        for digest in file.has_message_digests:
            sub_element(element, "checksum", digest.digest, type=digest.type)
        if file.presentation is not None:
            presentation = file.presentation
            sub_element(
                element,
                "imageData",
                height=_str(presentation.height),
                width=_str(presentation.width),
            )
        return element
