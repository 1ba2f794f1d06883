from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    authority,
    children,
    compact,
    display_label,
    element_name,
    text,
    value_language,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

RESOURCE_TYPE = "resource type"
RESOURCE_TYPE_SOURCE = {"value": "MODS resource types"}
RESOURCE_TYPE_FLAGS = ("manuscript", "collection")


def build_resource_types(context: MappingContext, group: list[_Element]) -> list[Props]:
    """typeOfResource, with its manuscript and collection flags as forms of their own."""
    element = group[0]
    forms = []
    if (value := text(element)) is not None:
        forms.append(
            compact(
                {"value": value, "type": RESOURCE_TYPE, "source": RESOURCE_TYPE_SOURCE}
                | display_label(element)
            )
        )
    forms.extend(
        {"value": flag, "type": RESOURCE_TYPE, "source": RESOURCE_TYPE_SOURCE}
        for flag in RESOURCE_TYPE_FLAGS
        if element.get(flag) == "yes"
    )
    return forms


def build_genre(context: MappingContext, group: list[_Element]) -> list[Props]:
    element = group[0]
    return [
        compact(
            {"value": text(element), "type": "genre"}
            | authority(element)
            | display_label(element)
            | value_language(element)
        )
    ]


def build_physical_description(
    context: MappingContext, group: list[_Element]
) -> list[Props]:
    element = group[0]
    form_types = context.vocabularies.physical_description_types
    values: list[Props] = []
    notes: list[Props] = []
    for child in children(element):
        name = element_name(child)
        if name == "note":
            notes.append(
                compact(
                    {"value": text(child), "type": child.get("type")}
                    | display_label(child)
                )
            )
        elif name in form_types:
            values.append(
                compact({"value": text(child), "type": form_types[name]} | authority(child))
            )
        else:
            context.log.data_error("Unmapped physicalDescription child <%s>", name)
    if not values and not notes:
        return []
    if len(values) == 1 and not notes:
        return [values[0] | display_label(element)]
    return [
        compact(
            {"grouped_value": values, "note": notes} | display_label(element)
        )
    ]
