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
)
from sdr.metadata.legacy.mods import PRIMARY, PRIMARY_DISPLAY

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.from_legacy.descriptive.builder import ResourceProps

REPOSITORY = "repository"
SHELF_LOCATOR = "shelf locator"


def map_url(context: MappingContext, url: _Element, resource: ResourceProps) -> None:
    value = text(url)
    if (
        url.get("usage") == PRIMARY_DISPLAY
        and value
        and value.startswith(context.config.purl_base_url)
        and "purl" not in resource
    ):
        resource["purl"] = value
        return
    note = url.get("note")
    resource.access("url").append(
        compact(
            {
                "value": value,
                "status": PRIMARY if url.get("usage") == PRIMARY_DISPLAY else None,
                "note": [{"value": note}] if note else None,
            }
            | display_label(url)
        )
    )


def map_physical_location(
    context: MappingContext, element: _Element, resource: ResourceProps
) -> None:
    location_type = element.get("type")
    props = compact(
        {"value": text(element), "type": location_type}
        | authority(element)
        | display_label(element)
    )
    field = "access_contact" if location_type == REPOSITORY else "physical_location"
    resource.access(field).append(props)


def map_location(
    context: MappingContext, group: list[_Element], resource: ResourceProps
) -> None:
    for location in group:
        for child in children(location):
            match element_name(child):
                case "url":
                    map_url(context, child, resource)
                case "physicalLocation":
                    map_physical_location(context, child, resource)
                case "shelfLocator":
                    resource.access("physical_location").append(
                        compact({"value": text(child), "type": SHELF_LOCATOR})
                    )
                case other:
                    context.log.data_error("Unmapped location child <%s>", other)


def access_condition_type(context: MappingContext, element: _Element) -> str | None:
    given = element.get("type")
    if given is None:
        return None
    return context.vocabularies.access_condition_types.get(given, given)


def map_access_condition(
    context: MappingContext, group: list[_Element], resource: ResourceProps
) -> None:
    for element in group:
        note: Props = compact(
            {"value": text(element), "type": access_condition_type(context, element)}
            | display_label(element)
        )
        resource.access("note").append(note)
