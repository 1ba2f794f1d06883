from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.cocina.access import (
    CollectionAccess,
    DROAccess,
    Embargo,
    FileAccess,
)
from sdr.metadata.cocina.vocab import Download, View
from sdr.metadata.normalizers.base import sub_element
from sdr.metadata.util.datetime_helpers import format_utc
from sdr.metadata.util.log import LoggerMixin

if TYPE_CHECKING:
    from lxml.etree import _Element

NO_DOWNLOAD = "no-download"
STANFORD = "stanford"

RightsShape = DROAccess | FileAccess | Embargo


def read_rules(access: RightsShape) -> list[_Element]:
    """The machine rules granting read access, one per read block."""
    view, download, location = access.view, access.download, access.location
    no_download = {"rule": NO_DOWNLOAD}

    def rule(tag: str, text: str | None = None, **attributes: str) -> _Element:
        element = etree.Element(tag, **attributes)
        element.text = text
        return element

    if getattr(access, "controlled_digital_lending", False):
        cdl = etree.Element("cdl")
        sub_element(cdl, "group", STANFORD, rule=NO_DOWNLOAD)
        return [cdl]

    match view:
        case View.world:
            rules = [
                rule("world", **({} if download == Download.world else no_download))
            ]
        case View.stanford:
            rules = [
                rule(
                    "group",
                    STANFORD,
                    **({} if download == Download.stanford else no_download),
                )
            ]
        case View.location_based:
            return [
                rule(
                    "location",
                    location,
                    **({} if download == Download.location_based else no_download),
                )
            ]
        case _:
            return [rule("none")]

    if download == Download.location_based:
        rules.append(rule("location", location))
    elif download == Download.stanford and view == View.world:
        rules.append(rule("group", STANFORD))
    return rules


def access_block(
    block_type: str, machine_rule: _Element, filename: str | None = None
) -> _Element:
    access = etree.Element("access", type=block_type)
    if filename is not None:
        sub_element(access, "file", filename)
    sub_element(access, "machine").append(machine_rule)
    return access


def discover_block(view: View) -> _Element:
    rule = etree.Element("none" if view == View.dark else "world")
    return access_block("discover", rule)


class RightsWriter(LoggerMixin):
    """Writes object access as rightsMetadata and embargoMetadata."""

    def write_rights(
        self,
        access: DROAccess | CollectionAccess,
        file_access: Mapping[str, FileAccess] | None = None,
    ) -> _Element:
        root = etree.Element("rightsMetadata")
        root.append(discover_block(access.view))
        if isinstance(access, CollectionAccess):
            rule = etree.Element("world" if access.view == View.world else "none")
            root.append(access_block("read", rule))
        else:
            for machine_rule in read_rules(access):
                root.append(access_block("read", machine_rule))
            object_file_access = access.file_access()
            for filename, per_file in (file_access or {}).items():
                if per_file == object_file_access:
                    continue
                for machine_rule in read_rules(per_file):
                    root.append(access_block("read", machine_rule, filename))

        if access.use_and_reproduction_statement or access.license:
            use = sub_element(root, "use")
            if access.use_and_reproduction_statement:
                sub_element(
                    use,
                    "human",
                    access.use_and_reproduction_statement,
                    type="useAndReproduction",
                )
            if access.license:
                sub_element(use, "license", access.license)
        if access.copyright:
            sub_element(sub_element(root, "copyright"), "human", access.copyright)
        return root

    def write_embargo(self, embargo: Embargo) -> _Element:
        root = etree.Element("embargoMetadata")
        sub_element(root, "status", "embargoed")
        sub_element(root, "releaseDate", format_utc(embargo.release_date))
        release_access = sub_element(root, "releaseAccess")
        release_access.append(discover_block(embargo.view))
        for machine_rule in read_rules(embargo):
            release_access.append(access_block("read", machine_rule))
        return root
