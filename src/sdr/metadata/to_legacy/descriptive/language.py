from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    sub,
    usage,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue, Language


def write_terms(
    parent: _Element, name: str, node: Language | DescriptiveValue
) -> None:
    attributes = authority_attributes(node)
    if node.code is not None:
        sub(parent, name, node.code, type="code", **attributes)
    if node.value is not None:
        sub(parent, name, node.value, type="text", **attributes)


def write_language(
    context: WriterContext,
    parent: _Element,
    language: Language,
    element_name: str = "language",
) -> None:
    element = sub(
        parent,
        element_name,
        displayLabel=language.display_label,
        **usage(language.status),
    )
    write_terms(element, "languageTerm", language)
    if language.script is not None:
        write_terms(element, "scriptTerm", language.script)
