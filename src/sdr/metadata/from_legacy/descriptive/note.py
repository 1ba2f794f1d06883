from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    compact,
    display_label,
    element_name,
    parallel,
    status,
    text,
    value_language,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

ABSTRACT = "abstract"
TABLE_OF_CONTENTS = "table of contents"


def note_type(context: MappingContext, element: _Element) -> str | None:
    given = element.get("type")
    match element_name(element):
        case "abstract":
            return context.vocabularies.abstract_types.get(given or "", given or ABSTRACT)
        case "tableOfContents":
            return TABLE_OF_CONTENTS
        case _:
            return given


def note_value(context: MappingContext, element: _Element) -> Props:
    return compact(
        {"value": text(element), "type": note_type(context, element)}
        | display_label(element)
        | status(element)
        | value_language(element)
    )


def build_note(context: MappingContext, group: list[_Element]) -> list[Props]:
    """abstract, tableOfContents and note; an altRepGroup becomes one parallel note."""
    values = [note_value(context, element) for element in group]
    if len(values) == 1:
        return values
    # The type describes the whole group, not each rendering.
    note_type_ = values[0].get("type")
    members = [{k: v for k, v in value.items() if k != "type"} for value in values]
    return [compact({"parallel_value": members, "type": note_type_})]
