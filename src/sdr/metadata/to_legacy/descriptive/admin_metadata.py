from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    sub,
)
from sdr.metadata.to_legacy.descriptive.language import write_language

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import AdminMetadata

ORIGINAL_CATALOGING_AGENCY = "original cataloging agency"
EVENT_ELEMENTS = {"creation": "recordCreationDate", "modification": "recordChangeDate"}
NOTE_ELEMENTS = {"record origin": "recordOrigin", "record information": "recordInfoNote"}


def write_admin_metadata(
    context: WriterContext, parent: _Element, admin_metadata: AdminMetadata
) -> None:
    record_info = sub(parent, "recordInfo")
    for contributor in admin_metadata.contributor:
        if not any(r.value == ORIGINAL_CATALOGING_AGENCY for r in contributor.role):
            context.log.data_error("recordInfo contributor without a known role")
            continue
        for name in contributor.name:
            sub(
                record_info,
                "recordContentSource",
                name.value,
                **authority_attributes(name),
            )
    for event in admin_metadata.event:
        if (element_name := EVENT_ELEMENTS.get(event.type or "")) is None:
            context.log.data_error("recordInfo event %r not written", event.type)
            continue
        for date in event.date:
            sub(
                record_info,
                element_name,
                date.value,
                encoding=date.encoding.code if date.encoding else None,
            )
    for identifier in admin_metadata.identifier:
        sub(
            record_info,
            "recordIdentifier",
            identifier.value,
            source=(
                context.vocabularies.mods_identifier_type(identifier.type)
                if identifier.type
                else None
            ),
        )
    for note in admin_metadata.note:
        if (element_name := NOTE_ELEMENTS.get(note.type or "")) is None:
            context.log.data_error("recordInfo note %r not written", note.type)
            continue
        sub(record_info, element_name, note.value)
    for language in admin_metadata.language:
        write_language(context, record_info, language, "languageOfCataloging")
    for standard in admin_metadata.metadata_standard:
        sub(
            record_info,
            "descriptionStandard",
            standard.code,
            **authority_attributes(standard),
        )
