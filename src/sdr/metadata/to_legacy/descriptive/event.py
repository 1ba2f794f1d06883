from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.legacy.mods import PRIMARY
from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    language_attributes,
    sub,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue, Event

EVENT_NOTES = ("edition", "issuance", "frequency")
PUBLISHER = "publisher"


def date_element(
    context: WriterContext, date_type: str | None, event_type: str | None
) -> tuple[str, str | None]:
    """The MODS element for a date, and the type attribute dateOther needs."""
    for name, (_, element_date_type) in context.vocabularies.date_elements.items():
        if element_date_type is not None and element_date_type == date_type:
            return name, None
    if date_type == event_type:
        return "dateOther", None
    return "dateOther", date_type


def write_date(
    context: WriterContext,
    origin_info: _Element,
    date: DescriptiveValue,
    event_type: str | None,
) -> None:
    name, other_type = date_element(context, date.type, event_type)
    attributes = {
        "type": other_type,
        "encoding": date.encoding.code if date.encoding else None,
        "qualifier": date.qualifier,
    }
    key_date = "yes" if date.status == PRIMARY else None
    if not date.structured_value:
        sub(origin_info, name, date.value, keyDate=key_date, **attributes)
        return
    for position, point in enumerate(date.structured_value):
        sub(
            origin_info,
            name,
            point.value,
            point=point.type,
            keyDate=key_date if position == 0 else None,
            **attributes,
        )


def write_place(origin_info: _Element, location: DescriptiveValue) -> None:
    place = sub(origin_info, "place")
    attributes = authority_attributes(location)
    if location.value is not None:
        sub(place, "placeTerm", location.value, type="text", **attributes)
    if location.code is not None:
        sub(place, "placeTerm", location.code, type="code", **attributes)


def write_origin_info(
    context: WriterContext,
    parent: _Element,
    event: Event,
    alt_rep_group: str | None = None,
) -> None:
    event_type = (
        context.vocabularies.mods_event_type(event.type) if event.type else None
    )
    origin_info = sub(
        parent,
        "originInfo",
        eventType=event_type,
        displayLabel=event.display_label,
        altRepGroup=alt_rep_group,
    )
    for date in event.date:
        write_date(context, origin_info, date, event_type)
    for contributor in event.contributor:
        if not any(role.value == PUBLISHER for role in contributor.role):
            context.log.data_error("Event contributor without publisher role not written")
            continue
        for name in contributor.name:
            sub(
                origin_info,
                "publisher",
                name.value,
                **authority_attributes(name),
                **language_attributes(name.value_language),
            )
    for location in event.location:
        write_place(origin_info, location)
    for note in event.note:
        if note.type in EVENT_NOTES:
            sub(origin_info, note.type, note.value)
        else:
            context.log.data_error("Event note of type %r not written", note.type)


def write_event(context: WriterContext, parent: _Element, event: Event) -> None:
    if not event.parallel_event:
        write_origin_info(context, parent, event)
        return
    group = context.next_alt_rep_group()
    for member in event.parallel_event:
        write_origin_info(context, parent, member, alt_rep_group=group)
