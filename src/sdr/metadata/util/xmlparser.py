from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Generator
from copy import deepcopy
from io import BytesIO
from typing import TYPE_CHECKING, Generic, TypeVar

from lxml import etree

from sdr.metadata.core.exceptions import UnmappableDocument

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

T = TypeVar("T")


class XMLParser:
    """Helper functions to process XML data."""

    NAMESPACES: dict[str, str] = {}

    @classmethod
    def _xpath(
        cls, tag: _Element, expression: str, namespaces: dict[str, str] | None = None
    ) -> list[_Element]:
        """Wrapper to do a namespaced XPath expression."""
        if not namespaces:
            namespaces = cls.NAMESPACES
        return tag.xpath(expression, namespaces=namespaces)  # type: ignore[no-any-return]

    @classmethod
    def _xpath1(
        cls, tag: _Element, expression: str, namespaces: dict[str, str] | None = None
    ) -> _Element | None:
        """Wrapper to do a namespaced XPath expression."""
        values = cls._xpath(tag, expression, namespaces=namespaces)
        if not values:
            return None
        return values[0]

    @classmethod
    def text_of_optional_subtag(
        cls, tag: _Element, name: str, namespaces: dict[str, str] | None = None
    ) -> str | None:
        found = cls._xpath1(tag, name, namespaces=namespaces)
        if found is None or found.text is None:
            return None
        return str(found.text)

    @staticmethod
    def attribute(tag: _Element, name: str) -> str | None:
        """Return an attribute value, treating a blank value as missing."""
        value = tag.get(name)
        if value is None or not value.strip():
            return None
        return value

    @staticmethod
    def _load_xml(
        xml: str | bytes | _Element | _ElementTree,
    ) -> _ElementTree:
        """
        Load an XML document from string or bytes and handle the case where
        the document has already been parsed.

        :raise UnmappableDocument: If the document is not well-formed.
        """
        if isinstance(xml, str):
            xml = xml.encode("utf8")

        if isinstance(xml, bytes):
            # Whitespace between elements carries no meaning in any of the
            # legacy datastreams.
            parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)
            try:
                return etree.parse(BytesIO(xml), parser)
            except etree.XMLSyntaxError as e:
                raise UnmappableDocument(f"Malformed XML: {e}") from e

        if isinstance(xml, etree._Element):
            return xml.getroottree()

        return xml

    @classmethod
    def load_root(cls, xml: str | bytes | _Element | _ElementTree) -> _Element:
        """Load a document and return a detached copy of its root element."""
        if isinstance(xml, etree._Element):
            return deepcopy(xml)
        return deepcopy(cls._load_xml(xml).getroot())

    @staticmethod
    def _process_all(
        xml: _ElementTree,
        xpath_expression: str,
        namespaces: dict[str, str],
        handler: Callable[[_Element, dict[str, str]], T | None],
    ) -> Generator[T]:
        """
        Process all elements matching the given XPath expression. Calling
        the given handler function on each element and yielding the result
        if it is not None.
        """
        for i in xml.xpath(xpath_expression, namespaces=namespaces):
            data = handler(i, namespaces)
            if data is not None:
                yield data


class XMLProcessor(XMLParser, Generic[T], ABC):
    """
    A class that simplifies making a class that processes XML documents.
    It loads the XML document, runs an XPath expression to find all matching
    elements, and calls the process_one function on each element.
    """

    def process_all(
        self,
        xml: str | bytes | _Element | _ElementTree,
    ) -> Generator[T]:
        """
        Process all elements matching the given XPath expression. Calling
        process_one on each element and yielding the result if it is not None.
        """
        root = self._load_xml(xml)
        return self._process_all(
            root, self.xpath_expression, self.NAMESPACES, self.process_one
        )

    def process_first(
        self,
        xml: str | bytes | _Element | _ElementTree,
    ) -> T | None:
        """
        Process the first element matching the given XPath expression. Calling
        process_one on the element and returning None if no elements match or
        if process_one returns None.
        """
        for i in self.process_all(xml):
            return i
        return None

    @property
    @abstractmethod
    def xpath_expression(self) -> str:
        """
        The xpath expression to use to find elements to process.
        """
        ...

    @abstractmethod
    def process_one(self, tag: _Element, namespaces: dict[str, str] | None) -> T | None:
        """
        Process one element and return the result. Return None if the element
        should be ignored.
        """
        ...
