from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.legacy.object import to_xml_string
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.util.xmlparser import XMLParser
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

Rule = Callable[["_Element"], None]


class Normalizer(LoggerMixin, XMLParser, ABC):
    """Rewrites a datastream into its canonical form.

    Subclasses list their rules in the order they run. Every rule is a no-op
    when its precondition does not hold, so normalizing a normalized
    document changes nothing.
    """

    ROOT_TAG: str

    def __init__(
        self,
        object_id: str,
        *,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.object_id = object_id
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    @abstractmethod
    def rules(self) -> Sequence[Rule]: ...

    def prepare(self, root: _Element) -> _Element:
        """Hook for rewriting the whole tree before the rules run."""
        return root

    def normalize(self, document: str | bytes | _Element | _ElementTree) -> _Element:
        """Return a normalized copy of ``document``; the input is left untouched."""
        root = self.load_root(document)
        remove_comments(root)
        root = self.prepare(root)
        for rule in self.rules():
            rule(root)
        return root

    def normalize_to_string(self, document: str | bytes | _Element | _ElementTree) -> str:
        return to_xml_string(self.normalize(document))


def remove_comments(root: _Element) -> None:
    for node in root.xpath("//comment() | //processing-instruction()"):
        parent = node.getparent()
        if parent is not None:
            # Keep any tail text that followed the comment.
            if node.tail and node.tail.strip():
                previous = node.getprevious()
                if previous is not None:
                    previous.tail = (previous.tail or "") + node.tail
                else:
                    parent.text = (parent.text or "") + node.tail
            parent.remove(node)


def is_empty(element: _Element) -> bool:
    return (
        len(element) == 0
        and not (element.text or "").strip()
        and not element.attrib
    )


def remove_empty_elements(
    root: _Element, keep: Callable[[_Element], bool] | None = None
) -> None:
    """Remove elements with no text, children or attributes.

    Runs bottom-up, so a parent left empty by the removal of its children is
    removed in the same pass. The root element is never removed, nor is any
    element ``keep`` accepts.
    """
    for element in reversed(list(root.iter(etree.Element))):
        if element is root or (keep is not None and keep(element)):
            continue
        if is_empty(element):
            remove(element)


def remove(element: _Element) -> None:
    parent = element.getparent()
    if parent is not None:
        parent.remove(element)


def remove_all(elements: Sequence[_Element]) -> None:
    for element in elements:
        remove(element)


def set_default(element: _Element, name: str, value: str) -> None:
    if element.get(name) is None:
        element.set(name, value)


def strip_attributes(element: _Element, *names: str) -> None:
    for name in names:
        element.attrib.pop(name, None)


def sub_element(
    parent: _Element, tag: str, text: str | None = None, **attributes: str | None
) -> _Element:
    element = etree.SubElement(parent, tag)
    for key, value in attributes.items():
        if value is not None:
            element.set(key, value)
    if text is not None:
        element.text = text
    return element
