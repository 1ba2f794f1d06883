from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sdr.metadata.normalizers.base import (
    Normalizer,
    Rule,
    remove,
    remove_all,
    remove_empty_elements,
    strip_attributes,
    sub_element,
)
from sdr.metadata.util.datetime_helpers import format_utc, parse_utc

if TYPE_CHECKING:
    from lxml.etree import _Element


class IdentityNormalizer(Normalizer):
    """Normalizes identityMetadata."""

    ROOT_TAG = "identityMetadata"

    # Elements that carry no meaning in the canonical model.
    UNMAPPED_ELEMENTS = (
        "tag",
        "adminPolicy",
        "agreementId",
        "displayType",
        "objectAdminClass",
        "citationTitle",
        "citationCreator",
        "callseq",
        "shelfseq",
    )

    def rules(self) -> Sequence[Rule]:
        return (
            self.remove_unmapped_elements,
            self.remove_set_object_type,
            self.remove_other_ids,
            self.clean_source_ids,
            self.clean_release_tags,
            self.clean_label,
            self.add_object_id,
            self.add_object_creator,
            remove_empty_elements,
        )

    def remove_unmapped_elements(self, root: _Element) -> None:
        for name in self.UNMAPPED_ELEMENTS:
            remove_all(root.findall(name))

    def remove_set_object_type(self, root: _Element) -> None:
        object_types = root.findall("objectType")
        if any((t.text or "").strip() == "collection" for t in object_types):
            remove_all([t for t in object_types if (t.text or "").strip() == "set"])

    def remove_other_ids(self, root: _Element) -> None:
        allowed = self.vocabularies.other_id_allow_list
        seen: set[tuple[str, str]] = set()
        for other_id in root.findall("otherId"):
            name = other_id.get("name", "")
            value = (other_id.text or "").strip()
            key = (name, value)
            if name not in allowed or key in seen:
                remove(other_id)
                continue
            seen.add(key)
            strip_attributes(other_id, "label")
            other_id.text = value

    def clean_source_ids(self, root: _Element) -> None:
        seen: set[tuple[str, str]] = set()
        for source_id in root.findall("sourceId"):
            source = source_id.get("source", "").strip()
            value = (source_id.text or "").strip()
            if (source, value) in seen:
                remove(source_id)
                continue
            seen.add((source, value))
            source_id.set("source", source)
            source_id.text = value

    def clean_release_tags(self, root: _Element) -> None:
        for release in root.findall("release"):
            strip_attributes(release, "displayType", "release")
            release.text = (release.text or "").strip().lower()
            if when := release.get("when"):
                try:
                    release.set("when", format_utc(parse_utc(when)))
                except ValueError:
                    self.log.warning(
                        "Unparseable release date %r on %s", when, self.object_id
                    )

    def clean_label(self, root: _Element) -> None:
        for label in root.findall("objectLabel"):
            if label.text:
                label.text = label.text.replace("\r", "")

    def add_object_id(self, root: _Element) -> None:
        if root.find("objectId") is None:
            sub_element(root, "objectId", self.object_id)

    def add_object_creator(self, root: _Element) -> None:
        if root.find("objectCreator") is None:
            sub_element(root, "objectCreator", self.config.object_creator)
