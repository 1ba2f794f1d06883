from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sdr.metadata.normalizers.base import (
    Normalizer,
    Rule,
    remove,
    remove_all,
    remove_empty_elements,
    set_default,
    strip_attributes,
    sub_element,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

FILE_DIRECTIVES = ("publish", "shelve", "preserve")


class ContentNormalizer(Normalizer):
    """Normalizes contentMetadata."""

    ROOT_TAG = "contentMetadata"

    def rules(self) -> Sequence[Rule]:
        return (
            self.normalize_root,
            self.normalize_resources,
            self.normalize_files,
            self.normalize_book_data,
            remove_empty_elements,
            self.remove_empty_resources,
        )

    def normalize_root(self, root: _Element) -> None:
        strip_attributes(root, "id", "stacks")
        object_id = root.get("objectId") or self.object_id
        if not object_id.startswith("druid:"):
            object_id = f"druid:{object_id}"
        root.set("objectId", object_id)

    def normalize_resources(self, root: _Element) -> None:
        for resource in root.findall("resource"):
            strip_attributes(resource, "id", "objectId", "data", "sequence")
            if not resource.get("type"):
                resource.set("type", "file")
            for attr in resource.findall("attr"):
                if attr.get("name") == "label" and resource.find("label") is None:
                    sub_element(resource, "label", attr.text)
                remove(attr)
            for external_file in resource.findall("externalFile"):
                strip_attributes(external_file, "resourceId")
            remove_all(resource.findall(".//geoData"))

    def normalize_files(self, root: _Element) -> None:
        for file in root.iter("file"):
            strip_attributes(file, "format", "dataType")
            if "deliver" in file.attrib:
                deliver = file.attrib.pop("deliver")
                set_default(file, "publish", deliver)
            for directive in FILE_DIRECTIVES:
                if not (file.get(directive) or "").strip():
                    file.set(directive, "no")
            remove_all(file.findall("location"))
            remove_all(file.findall("provider_checksum"))
            remove_all(file.findall("provider_md5"))
            remove_all(file.findall("provider_sha1"))
            for checksum in file.findall("checksum"):
                if checksum_type := checksum.get("type"):
                    checksum.set("type", checksum_type.lower())
            for image_data in file.findall("imageData"):
                for name in list(image_data.attrib):
                    if name not in ("height", "width"):
                        del image_data.attrib[name]

    def normalize_book_data(self, root: _Element) -> None:
        for book_data in root.findall("bookData"):
            strip_attributes(book_data, "pageStart")

    def remove_empty_resources(self, root: _Element) -> None:
        for resource in root.findall("resource"):
            if resource.find("file") is None and resource.find("externalFile") is None:
                remove(resource)
