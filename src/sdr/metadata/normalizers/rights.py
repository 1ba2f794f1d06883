from __future__ import annotations

from collections.abc import Sequence
from copy import deepcopy
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.normalizers.base import (
    Normalizer,
    Rule,
    remove,
    remove_all,
    remove_empty_elements,
    sub_element,
)
from sdr.metadata.util.datetime_helpers import format_utc, parse_utc

if TYPE_CHECKING:
    from lxml.etree import _Element


def lowercase_groups(root: _Element) -> None:
    for group in root.iter("group"):
        if group.text:
            group.text = group.text.strip().lower()


def is_machine_rule(element: _Element) -> bool:
    parent = element.getparent()
    return parent is not None and parent.tag == "machine"


def remove_empty_rights_elements(root: _Element) -> None:
    """Like remove_empty_elements, but rule markers such as <world/> are content."""
    remove_empty_elements(root, keep=is_machine_rule)


def remove_extra_discover_blocks(container: _Element) -> None:
    remove_all(container.findall("access[@type='discover']")[1:])


def split_read_blocks(container: _Element) -> None:
    """Give every read block exactly one file (or none) and one machine rule."""
    for access in container.findall("access[@type='read']"):
        files = access.findall("file")
        rules = [rule for machine in access.findall("machine") for rule in machine]
        if len(files) <= 1 and len(rules) <= 1:
            continue
        position = container.index(access)
        for file in files or [None]:
            for rule in rules:
                block = etree.Element("access", type="read")
                if file is not None:
                    block.append(deepcopy(file))
                machine = sub_element(block, "machine")
                machine.append(deepcopy(rule))
                container.insert(position, block)
                position += 1
        remove(access)


class RightsNormalizer(Normalizer):
    """Normalizes rightsMetadata."""

    ROOT_TAG = "rightsMetadata"

    LICENSE_TYPES = ("creativeCommons", "openDataCommons")
    LICENSE_URIS = {
        "by": "https://creativecommons.org/licenses/by/3.0/legalcode",
        "by-sa": "https://creativecommons.org/licenses/by-sa/3.0/legalcode",
        "by-nd": "https://creativecommons.org/licenses/by-nd/3.0/legalcode",
        "by-nc": "https://creativecommons.org/licenses/by-nc/3.0/legalcode",
        "by-nc-sa": "https://creativecommons.org/licenses/by-nc-sa/3.0/legalcode",
        "by-nc-nd": "https://creativecommons.org/licenses/by-nc-nd/3.0/legalcode",
        "pdm": "https://creativecommons.org/publicdomain/mark/1.0/",
        "odc-by": "https://opendatacommons.org/licenses/by/1-0/",
        "odc-odbl": "https://opendatacommons.org/licenses/odbl/1-0/",
        "pddl": "https://opendatacommons.org/licenses/pddl/1-0/",
    }

    def rules(self) -> Sequence[Rule]:
        return (
            self.remove_embargo_release_dates,
            self.normalize_license,
            lowercase_groups,
            remove_extra_discover_blocks,
            split_read_blocks,
            remove_empty_rights_elements,
        )

    def remove_embargo_release_dates(self, root: _Element) -> None:
        remove_all(root.findall(".//embargoReleaseDate"))

    def normalize_license(self, root: _Element) -> None:
        """The license URI is canonical; the coded human/machine forms are not."""
        for use in root.findall("use"):
            if use.find("license") is None:
                for machine in use.findall("machine"):
                    if machine.get("type") not in self.LICENSE_TYPES:
                        continue
                    uri = machine.get("uri") or self.LICENSE_URIS.get(
                        (machine.text or "").strip()
                    )
                    if uri:
                        sub_element(use, "license", uri)
                        break
            for license_type in self.LICENSE_TYPES:
                remove_all(use.findall(f"human[@type='{license_type}']"))
                remove_all(use.findall(f"machine[@type='{license_type}']"))


class EmbargoNormalizer(Normalizer):
    """Normalizes embargoMetadata."""

    ROOT_TAG = "embargoMetadata"

    def rules(self) -> Sequence[Rule]:
        return (
            self.remove_released_embargo,
            self.remove_twenty_percent_visibility,
            self.normalize_release_date,
            self.normalize_release_access,
            remove_empty_rights_elements,
        )

    def remove_released_embargo(self, root: _Element) -> None:
        if (root.findtext("status") or "").strip() == "released":
            for child in list(root):
                root.remove(child)

    def remove_twenty_percent_visibility(self, root: _Element) -> None:
        remove_all(root.findall("twentyPctVisibilityStatus"))
        remove_all(root.findall("twentyPctVisibilityReleaseDate"))

    def normalize_release_date(self, root: _Element) -> None:
        release_date = root.find("releaseDate")
        if release_date is None or not (release_date.text or "").strip():
            return
        try:
            release_date.text = format_utc(parse_utc(release_date.text or ""))
        except ValueError:
            self.log.warning(
                "Unparseable embargo release date %r on %s",
                release_date.text,
                self.object_id,
            )

    def normalize_release_access(self, root: _Element) -> None:
        release_access = root.find("releaseAccess")
        if release_access is None:
            return
        if release_access.find("access[@type='discover']") is None:
            discover = etree.Element("access", type="discover")
            sub_element(sub_element(discover, "machine"), "world")
            release_access.insert(0, discover)
        lowercase_groups(release_access)
        remove_extra_discover_blocks(release_access)
        split_read_blocks(release_access)
