from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sdr.metadata.cocina.access import (
    CollectionAccess,
    DROAccess,
    Embargo,
    FileAccess,
)
from sdr.metadata.cocina.base import build
from sdr.metadata.cocina.vocab import Download, View
from sdr.metadata.normalizers.rights import RightsNormalizer
from sdr.metadata.util.datetime_helpers import parse_utc
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.util.xmlparser import XMLParser

if TYPE_CHECKING:
    from lxml.etree import _Element

NO_DOWNLOAD = "no-download"
STANFORD = "stanford"


@dataclass(frozen=True)
class MachineRule:
    """One rule inside a ``<machine>`` element of a read block."""

    kind: str
    value: str | None = None
    rule: str | None = None

    @property
    def allows_download(self) -> bool:
        return self.rule != NO_DOWNLOAD


def machine_rules(access: _Element) -> list[MachineRule]:
    return [
        MachineRule(
            kind=str(rule.tag),
            value=(rule.text or "").strip().lower() or None,
            rule=rule.get("rule"),
        )
        for machine in access.iterfind("machine")
        for rule in machine
        if isinstance(rule.tag, str)
    ]


def derive_rights(discoverable: bool, rules: list[MachineRule]) -> dict[str, Any]:
    """View, download, location and lending from the read rules of one scope."""
    by_kind: dict[str, MachineRule] = {}
    for rule in rules:
        by_kind.setdefault(rule.kind, rule)
    location = by_kind.get("location")
    group = by_kind.get("group")

    if "cdl" in by_kind:
        return {
            "view": View.stanford,
            "download": Download.none,
            "controlled_digital_lending": True,
        }
    if (world := by_kind.get("world")) is not None:
        if world.allows_download:
            return {"view": View.world, "download": Download.world}
        if location is not None:
            return {
                "view": View.world,
                "download": Download.location_based,
                "location": location.value,
            }
        if group is not None and group.value == STANFORD:
            return {"view": View.world, "download": Download.stanford}
        return {"view": View.world, "download": Download.none}
    if group is not None and group.value == STANFORD:
        if group.allows_download:
            return {"view": View.stanford, "download": Download.stanford}
        if location is not None:
            return {
                "view": View.stanford,
                "download": Download.location_based,
                "location": location.value,
            }
        return {"view": View.stanford, "download": Download.none}
    if location is not None:
        return {
            "view": View.location_based,
            "download": (
                Download.location_based if location.allows_download else Download.none
            ),
            "location": location.value,
        }
    return {
        "view": View.citation_only if discoverable else View.dark,
        "download": Download.none,
    }


class RightsMapper(LoggerMixin, XMLParser):
    """Reads rightsMetadata and embargoMetadata into object and file access."""

    def _object_rights(self, container: _Element) -> dict[str, Any]:
        discover = container.find("access[@type='discover']")
        discoverable = discover is not None and any(
            rule.kind == "world" for rule in machine_rules(discover)
        )
        rules = [
            rule
            for access in container.iterfind("access[@type='read']")
            if access.find("file") is None
            for rule in machine_rules(access)
        ]
        return derive_rights(discoverable, rules)

    def _statements(self, root: _Element) -> dict[str, Any]:
        return {
            "use_and_reproduction_statement": self.text_of_optional_subtag(
                root, "use/human[@type='useAndReproduction']"
            ),
            "license": self.text_of_optional_subtag(root, "use/license")
            or self.coded_license(root),
            "copyright": self.text_of_optional_subtag(root, "copyright/human"),
        }

    def coded_license(self, root: _Element) -> str | None:
        """The URI of a license given only as a creativeCommons or
        openDataCommons code."""
        for machine in root.iterfind("use/machine"):
            if machine.get("type") not in RightsNormalizer.LICENSE_TYPES:
                continue
            code = (machine.text or "").strip()
            if uri := machine.get("uri") or RightsNormalizer.LICENSE_URIS.get(code):
                return uri
        return None

    def embargo(self, embargo_root: _Element | None) -> Embargo | None:
        if embargo_root is None:
            return None
        if (embargo_root.findtext("status") or "").strip() == "released":
            return None
        release_date = self.text_of_optional_subtag(embargo_root, "releaseDate")
        if release_date is None:
            return None
        props: dict[str, Any] = {"release_date": parse_utc(release_date)}
        if (release_access := embargo_root.find("releaseAccess")) is not None:
            props |= self._object_rights(release_access)
            props.pop("controlled_digital_lending", None)
        return build(Embargo, props)

    def dro_access(
        self, root: _Element | None, embargo_root: _Element | None = None
    ) -> DROAccess:
        if root is None:
            return DROAccess(embargo=self.embargo(embargo_root))
        props = self._object_rights(root) | self._statements(root)
        props["embargo"] = self.embargo(embargo_root)
        return build(DROAccess, props)

    def collection_access(self, root: _Element | None) -> CollectionAccess:
        if root is None:
            return CollectionAccess()
        rights = self._object_rights(root)
        view = View.world if rights["view"] == View.world else View.dark
        return build(CollectionAccess, {"view": view, **self._statements(root)})

    def file_access(self, root: _Element | None) -> dict[str, FileAccess]:
        """Access for files with rules of their own, keyed by filename."""
        if root is None:
            return {}
        rules: dict[str, list[MachineRule]] = {}
        for access in root.iterfind("access[@type='read']"):
            for file in access.iterfind("file"):
                if filename := (file.text or "").strip():
                    rules.setdefault(filename, []).extend(machine_rules(access))
        return {
            filename: build(FileAccess, derive_rights(False, file_rules))
            for filename, file_rules in rules.items()
        }
