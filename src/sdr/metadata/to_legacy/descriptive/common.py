from __future__ import annotations

from dataclasses import dataclass, field
from itertools import count
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.legacy.mods import PRIMARY, q
from sdr.metadata.util.log import ObjectLoggerAdapter

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import (
        DescriptiveValue,
        Language,
        ValueLanguage,
    )
    from sdr.metadata.configuration import MappingConfiguration
    from sdr.metadata.vocabulary import MappingVocabularies

Attributes = dict[str, str | None]


@dataclass
class WriterContext:
    object_id: str
    config: MappingConfiguration
    vocabularies: MappingVocabularies
    log: ObjectLoggerAdapter
    alt_rep_groups: count[int] = field(default_factory=lambda: count(1))
    name_title_groups: count[int] = field(default_factory=lambda: count(1))

    def next_alt_rep_group(self) -> str:
        return str(next(self.alt_rep_groups))

    def next_name_title_group(self) -> str:
        return str(next(self.name_title_groups))


def sub(
    parent: _Element, name: str, text: str | None = None, **attributes: str | None
) -> _Element:
    """Append a MODS element, leaving out attributes without a value."""
    element = etree.SubElement(parent, q(name))
    for key, value in attributes.items():
        if value is not None:
            element.set(key, value)
    if text is not None:
        element.text = text
    return element


def authority_attributes(node: DescriptiveValue | Language) -> Attributes:
    source = node.source
    return {
        "authority": source.code if source else None,
        "authorityURI": source.uri if source else None,
        "valueURI": node.uri,
    }


def language_attributes(value_language: ValueLanguage | None) -> Attributes:
    if value_language is None:
        return {}
    script = value_language.value_script
    return {"lang": value_language.code, "script": script.code if script else None}


def usage(status: str | None) -> Attributes:
    return {"usage": PRIMARY} if status == PRIMARY else {}
