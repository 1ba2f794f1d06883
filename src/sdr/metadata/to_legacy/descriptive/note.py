from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    language_attributes,
    sub,
    usage,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue

ABSTRACT = "abstract"
TABLE_OF_CONTENTS = "table of contents"


def note_element(context: WriterContext, note_type: str | None) -> tuple[str, str | None]:
    """The MODS element for a note type, and its type attribute."""
    if note_type == ABSTRACT:
        return "abstract", None
    if note_type == TABLE_OF_CONTENTS:
        return "tableOfContents", None
    for abstract_type, mapped_type in context.vocabularies.abstract_types.items():
        if mapped_type == note_type:
            return "abstract", abstract_type
    return "note", note_type


def write_note(context: WriterContext, parent: _Element, node: DescriptiveValue) -> None:
    name, type_attribute = note_element(context, node.type)
    members = node.parallel_value or [node]
    group = context.next_alt_rep_group() if node.parallel_value else None
    for member in members:
        sub(
            parent,
            name,
            member.value,
            type=type_attribute,
            displayLabel=member.display_label,
            altRepGroup=group,
            **usage(member.status),
            **language_attributes(member.value_language),
        )
