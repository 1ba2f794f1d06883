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
from sdr.metadata.legacy.mods import PRIMARY
from sdr.metadata.vocabulary import MARC_RELATOR_CODE, MARC_RELATOR_URI

if TYPE_CHECKING:
    from lxml.etree import _Element

EVENT_NOTES = ("edition", "issuance", "frequency")


def date_type(context: MappingContext, date: _Element) -> str | None:
    name = element_name(date)
    if name == "dateOther":
        return date.get("type")
    return context.vocabularies.date_elements[name][1]


def date_attributes(context: MappingContext, date: _Element) -> Props:
    encoding = date.get("encoding")
    return compact(
        {
            "type": date_type(context, date),
            "encoding": {"code": encoding} if encoding else None,
            "qualifier": date.get("qualifier"),
            "status": PRIMARY if date.get("keyDate") == "yes" else None,
        }
    )


def dates(context: MappingContext, origin_info: _Element) -> list[Props]:
    """Dates in document order; a start point and the end point after it form one range."""
    date_elements = context.vocabularies.date_elements
    result: list[Props] = []
    pending_start: tuple[_Element, Props] | None = None
    for date in children(origin_info):
        if element_name(date) not in date_elements:
            continue
        point = date.get("point")
        if point == "end" and pending_start and pending_start[0].tag == date.tag:
            pending_start[1]["structured_value"].append(
                compact({"value": text(date), "type": "end"})
            )
            pending_start = None
            continue
        if point in ("start", "end"):
            props = date_attributes(context, date) | {
                "structured_value": [compact({"value": text(date), "type": point})]
            }
            result.append(props)
            pending_start = (date, props) if point == "start" else None
            continue
        pending_start = None
        result.append(compact({"value": text(date)} | date_attributes(context, date)))
    return result


def publisher(context: MappingContext, element: _Element) -> Props:
    code = context.vocabularies.relator_roles["publisher"]
    return {
        "name": [
            compact(
                {"value": text(element)} | authority(element) | value_language(element)
            )
        ],
        "type": "organization",
        "role": [
            {
                "value": "publisher",
                "code": code,
                "uri": context.vocabularies.relator_uri(code),
                "source": {"code": MARC_RELATOR_CODE, "uri": MARC_RELATOR_URI},
            }
        ],
    }


def place(place_element: _Element) -> Props:
    props: Props = {}
    for term in place_element:
        if element_name(term) != "placeTerm":
            continue
        key = "code" if term.get("type") == "code" else "value"
        props.setdefault(key, text(term))
        for attribute, value in authority(term).items():
            props.setdefault(attribute, value)
    return compact(props)


def event(context: MappingContext, origin_info: _Element) -> Props:
    event_type = origin_info.get("eventType")
    contributors: list[Props] = []
    locations: list[Props] = []
    notes: list[Props] = []
    for child in children(origin_info):
        name = element_name(child)
        if name in context.vocabularies.date_elements:
            continue
        if name == "publisher":
            contributors.append(publisher(context, child))
        elif name == "place":
            locations.append(place(child))
        elif name in EVENT_NOTES:
            notes.append(compact({"value": text(child), "type": name}))
        else:
            context.log.data_error("Unmapped originInfo child <%s>", name)
    return compact(
        {
            "type": (
                context.vocabularies.cocina_event_type(event_type) if event_type else None
            ),
            "date": dates(context, origin_info),
            "contributor": contributors,
            "location": locations,
            "note": notes,
        }
        | display_label(origin_info)
    )


def build_event(context: MappingContext, group: list[_Element]) -> Props:
    """One event per originInfo; an altRepGroup of originInfos is one parallel event."""
    if len(group) == 1:
        return event(context, group[0])
    return {"parallel_event": [event(context, origin_info) for origin_info in group]}
