"""Helpers shared by the MODS element mappers.

Mappers build plain dicts keyed by the snake_case field names of the
canonical model; the builder validates the finished tree in one go.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sdr.metadata.legacy.mods import PRIMARY, XML_LANG_ATTR, local_name, q
from sdr.metadata.util.log import ObjectLoggerAdapter

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.configuration import MappingConfiguration
    from sdr.metadata.vocabulary import MappingVocabularies

Props = dict[str, Any]


@dataclass
class MappingContext:
    """What every element mapper needs to know about the record being mapped."""

    object_id: str
    config: MappingConfiguration
    vocabularies: MappingVocabularies
    log: ObjectLoggerAdapter
    # nameTitleGroup value -> name element, for the record or related item
    # currently being mapped
    name_title_groups: dict[str, _Element] = field(default_factory=dict)
    depth: int = 0


def compact(props: Mapping[str, Any]) -> Props:
    """Drop empty values so missing legacy data stays missing."""
    return {
        key: value
        for key, value in props.items()
        if value is not None and value != [] and value != {}
    }


def text(element: _Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip() or None


def children(element: _Element) -> Iterator[_Element]:
    for child in element:
        if isinstance(child.tag, str):
            yield child


def child(element: _Element, name: str) -> _Element | None:
    return element.find(q(name))


def children_named(element: _Element, name: str) -> list[_Element]:
    return element.findall(q(name))


def authority(element: _Element) -> Props:
    """``source`` and ``uri`` from the authority attributes of an element."""
    source = compact(
        {"code": element.get("authority"), "uri": element.get("authorityURI")}
    )
    return compact({"source": source, "uri": element.get("valueURI")})


def value_language(element: _Element) -> Props:
    lang = element.get("lang") or element.get(XML_LANG_ATTR)
    script = element.get("script")
    language = compact(
        {"code": lang, "value_script": {"code": script} if script else None}
    )
    return compact({"value_language": language})


def display_label(element: _Element) -> Props:
    return compact({"display_label": element.get("displayLabel")})


def status(element: _Element) -> Props:
    return {"status": PRIMARY} if element.get("usage") == PRIMARY else {}


def typed_value(
    element: _Element, value_type: str | None = None, *, with_authority: bool = True
) -> Props:
    props = {"value": text(element), "type": value_type}
    if with_authority:
        props |= authority(element)
    return compact(props)


def parallel(values: list[Props]) -> Props:
    """A single value, or several renderings of one value."""
    if len(values) == 1:
        return values[0]
    return {"parallel_value": values}


def name_text(element: _Element) -> str | None:
    parts = [text(part) for part in children_named(element, "namePart")]
    return parts[0] if len(parts) == 1 else None


def element_name(element: _Element) -> str:
    return local_name(element.tag)
