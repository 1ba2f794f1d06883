"""Checks that a legacy datastream survives mapping into the canonical model
and back unchanged, up to normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.cocina.access import DROAccess
from sdr.metadata.cocina.vocab import Download, View
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.core.exceptions import RoundtripMismatch, UnmappableDocument
from sdr.metadata.from_legacy.access import RightsMapper
from sdr.metadata.from_legacy.descriptive.builder import DescriptiveMapper
from sdr.metadata.from_legacy.identity import IdentityMapper
from sdr.metadata.from_legacy.structural import ContentMapper
from sdr.metadata.id_generator import IdGenerator
from sdr.metadata.legacy.mods import local_name
from sdr.metadata.legacy.object import Datastream, to_xml_string
from sdr.metadata.normalizers.registry import normalize
from sdr.metadata.service.logging.configuration import LogLevel
from sdr.metadata.to_legacy.content import ContentWriter
from sdr.metadata.to_legacy.descriptive.writer import DescriptiveWriter
from sdr.metadata.to_legacy.identity import IdentityWriter
from sdr.metadata.to_legacy.rights import RightsWriter
from sdr.metadata.util.log import LoggerMixin, log_elapsed_time
from sdr.metadata.util.xmlparser import XMLParser
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

GROUP_ATTRIBUTES = ("altRepGroup", "nameTitleGroup")

Signature = tuple[object, ...]


def _base_signature(element: _Element) -> Signature:
    """The signature of an element with its own group ids left out."""
    attributes = tuple(
        sorted(
            (str(name), value)
            for name, value in element.attrib.items()
            if name not in GROUP_ATTRIBUTES
        )
    )
    return (
        str(element.tag),
        attributes,
        (element.text or "").strip(),
        tuple(sorted(signature(child) for child in _elements(element))),
    )


def _elements(element: _Element) -> list[_Element]:
    return [child for child in element if isinstance(child.tag, str)]


def signature(element: _Element) -> Signature:
    """An order-insensitive fingerprint of an element and its descendants.

    A group id is replaced by the signatures of the siblings that share it,
    so two documents that group the same elements under different ids
    compare equal.
    """
    groups = []
    parent = element.getparent()
    for name in GROUP_ATTRIBUTES:
        if (value := element.get(name)) is None:
            continue
        siblings = _elements(parent) if parent is not None else [element]
        members = sorted(
            repr(_base_signature(sibling))
            for sibling in siblings
            if sibling.get(name) == value
        )
        groups.append((name, tuple(members)))
    return _base_signature(element) + (tuple(groups),)


def xml_equivalent(a: _Element, b: _Element) -> bool:
    """Whether two elements hold the same content, ignoring element order
    and the literal values of group ids."""
    return signature(a) == signature(b)


class RoundtripValidator(LoggerMixin, XMLParser):
    """Maps a single datastream into the canonical model and back, then
    compares the normalized result with the normalized original.

    Content is mapped with world access so that the publish flags of its
    files survive the trip.
    """

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES
        self.id_generator = id_generator or IdGenerator(self.config)

    def _normalize(self, document: _Element, object_id: str) -> _Element:
        return normalize(
            document, object_id, config=self.config, vocabularies=self.vocabularies
        )

    def _identity(self, root: _Element, object_id: str) -> _Element:
        mapper = IdentityMapper(self.vocabularies)
        return IdentityWriter(self.config, self.vocabularies).write(
            object_id,
            mapper.object_kind(root, object_id),
            label=mapper.label(root),
            identification=mapper.identification(root),
            release_tags=mapper.release_tags(root),
        )

    def _rights(self, root: _Element) -> _Element:
        mapper = RightsMapper()
        return RightsWriter().write_rights(
            mapper.dro_access(root), mapper.file_access(root)
        )

    def _embargo(self, root: _Element) -> _Element:
        embargo = RightsMapper().embargo(root)
        if embargo is None:
            return etree.Element(Datastream.embargo.value)
        return RightsWriter().write_embargo(embargo)

    def _content(self, root: _Element, object_id: str) -> _Element:
        mapper = ContentMapper(self.id_generator)
        access = DROAccess(view=View.world, download=Download.world)
        return ContentWriter().write(
            object_id,
            mapper.object_type(root, object_id),
            mapper.structural(root, object_id, access=access),
        )

    def _descriptive(self, root: _Element, object_id: str) -> _Element:
        description = DescriptiveMapper(self.config, self.vocabularies).build(
            root, object_id
        )
        return DescriptiveWriter(self.config, self.vocabularies).write(
            description, object_id
        )

    def roundtrip(
        self, document: str | bytes | _Element | _ElementTree, object_id: str
    ) -> tuple[_Element, _Element]:
        """The normalized original and the normalized re-serialization.

        :raise UnmappableDocument: If the datastream cannot be mapped.
        """
        root = self.load_root(document)
        match local_name(root.tag):
            case "mods":
                written = self._descriptive(root, object_id)
            case Datastream.identity:
                written = self._identity(root, object_id)
            case Datastream.rights:
                written = self._rights(root)
            case Datastream.embargo:
                written = self._embargo(root)
            case Datastream.content:
                written = self._content(root, object_id)
            case name:
                raise UnmappableDocument(
                    f"Cannot round-trip <{name}> documents",
                    object_id=object_id,
                    element=name,
                )
        return self._normalize(root, object_id), self._normalize(written, object_id)

    @log_elapsed_time(log_level=LogLevel.debug, message_prefix="RoundtripValidator")
    def verify(
        self, document: str | bytes | _Element | _ElementTree, object_id: str
    ) -> bool:
        expected, actual = self.roundtrip(document, object_id)
        if xml_equivalent(expected, actual):
            return True
        self.log.info("%s does not round-trip", object_id)
        return False

    def check(
        self, document: str | bytes | _Element | _ElementTree, object_id: str
    ) -> None:
        """
        :raise RoundtripMismatch: If the datastream does not round-trip.
        """
        expected, actual = self.roundtrip(document, object_id)
        if not xml_equivalent(expected, actual):
            raise RoundtripMismatch(
                object_id, to_xml_string(expected), to_xml_string(actual)
            )
