from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    authority,
    child,
    children,
    children_named,
    compact,
    display_label,
    element_name,
    parallel,
    text,
    value_language,
)
from sdr.metadata.from_legacy.descriptive.contributor import name_value
from sdr.metadata.from_legacy.descriptive.title import title_core

if TYPE_CHECKING:
    from lxml.etree import _Element

CLASSIFICATION = "classification"
PLACE = "place"
MAP_COORDINATES = "map coordinates"
COORDINATES_ENCODING = {"value": "DMS"}


def hierarchical_place(context: MappingContext, element: _Element) -> Props | None:
    """hierarchicalGeographic: one place, structured from continent down to city."""
    levels = []
    for level in children(element):
        name = element_name(level)
        if name not in context.vocabularies.hierarchical_place_types:
            context.log.data_error("Unmapped hierarchicalGeographic child <%s>", name)
            continue
        if (value := text(level)) is not None:
            levels.append({"value": value, "type": name})
    if not levels:
        return None
    return compact({"structured_value": levels, "type": PLACE} | authority(element))


def map_coordinates(element: _Element) -> Props | None:
    # scale and projection are forms; see build_cartographic_forms
    coordinates = text(child(element, "coordinates"))
    if coordinates is None:
        return None
    return {
        "value": coordinates,
        "type": MAP_COORDINATES,
        "encoding": COORDINATES_ENCODING,
    }


def build_cartographic_forms(
    context: MappingContext, group: list[_Element]
) -> list[Props]:
    form_types = context.vocabularies.cartographic_form_types
    forms = []
    # Parallel renderings share one scale and projection.
    for cartographics in children_named(group[0], "cartographics"):
        for element in children(cartographics):
            name = element_name(element)
            if name in form_types and (value := text(element)) is not None:
                forms.append({"value": value, "type": form_types[name]})
    return forms


def subject_part(context: MappingContext, element: _Element) -> Props | None:
    name = element_name(element)
    match name:
        case "name":
            value = name_value(context, element)
            if value is None:
                return None
            name_type = element.get("type")
            return value | {
                "type": context.vocabularies.name_types.get(name_type or "", "name")
            }
        case "titleInfo":
            return title_core(context, element) | {"type": "title"} | authority(element)
        case "geographicCode":
            return compact({"code": text(element), "type": PLACE} | authority(element))
        case "hierarchicalGeographic":
            return hierarchical_place(context, element)
        case "cartographics":
            return map_coordinates(element)
        case _ if name in context.vocabularies.subject_types:
            return compact(
                {"value": text(element), "type": context.vocabularies.subject_types[name]}
                | authority(element)
            )
    context.log.data_error("Unmapped subject child <%s>", name)
    return None


def subject_value(context: MappingContext, subject: _Element) -> Props | None:
    parts = [
        part
        for child in children(subject)
        if (part := subject_part(context, child)) is not None
    ]
    if not parts:
        return None
    if len(parts) == 1:
        value = parts[0]
    else:
        value = {"structured_value": parts} | authority(subject)
    return compact(value | display_label(subject) | value_language(subject))


def build_subject(context: MappingContext, group: list[_Element]) -> list[Props]:
    values = [
        value
        for subject in group
        if (value := subject_value(context, subject)) is not None
    ]
    return [parallel(values)] if values else []


def build_classification(context: MappingContext, group: list[_Element]) -> list[Props]:
    element = group[0]
    source = compact({"code": element.get("authority"), "version": element.get("edition")})
    return [
        compact(
            {
                "value": text(element),
                "type": CLASSIFICATION,
                "source": source,
                "uri": element.get("valueURI"),
            }
            | display_label(element)
        )
    ]
