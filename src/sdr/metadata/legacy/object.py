from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from lxml import etree

from sdr.metadata.util.xmlparser import XMLParser


class Datastream(StrEnum):
    identity = "identityMetadata"
    rights = "rightsMetadata"
    content = "contentMetadata"
    descriptive = "descMetadata"
    embargo = "embargoMetadata"


@dataclass
class LegacyObject:
    """A repository object as the legacy store holds it.

    Datastreams are kept as serialized XML, keyed by datastream name. The
    relations (governing policy, agreement, collections) come from the
    object's relationship metadata rather than from any datastream.
    """

    pid: str
    label: str = ""
    version: int = 1
    admin_policy_id: str | None = None
    agreement_id: str | None = None
    collection_ids: list[str] = field(default_factory=list)
    datastreams: dict[Datastream, str] = field(default_factory=dict)

    def has(self, datastream: Datastream) -> bool:
        return bool(self.datastreams.get(datastream, "").strip())

    def datastream(self, datastream: Datastream) -> etree._Element | None:
        """The parsed root element of a datastream, None when absent."""
        if not self.has(datastream):
            return None
        return XMLParser.load_root(self.datastreams[datastream])

    def set_datastream(self, datastream: Datastream, root: etree._Element) -> None:
        self.datastreams[datastream] = to_xml_string(root)

    def remove_datastream(self, datastream: Datastream) -> None:
        self.datastreams.pop(datastream, None)

    @classmethod
    def empty(cls, pid: str) -> LegacyObject:
        """A container with no datastreams, the starting point for a fresh write."""
        return cls(pid=pid)


def to_xml_string(root: etree._Element) -> str:
    return etree.tostring(root, encoding="unicode", pretty_print=True)
