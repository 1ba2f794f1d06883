from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.legacy.mods import PRIMARY, PRIMARY_DISPLAY
from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    sub,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveAccess

SHELF_LOCATOR = "shelf locator"


def write_purl(parent: _Element, purl: str) -> None:
    sub(sub(parent, "location"), "url", purl, usage=PRIMARY_DISPLAY)


def write_access(
    context: WriterContext, parent: _Element, access: DescriptiveAccess
) -> None:
    """Locations, one per url or physical location, and access conditions."""
    for url in access.url:
        sub(
            sub(parent, "location"),
            "url",
            url.value,
            usage=PRIMARY_DISPLAY if url.status == PRIMARY else None,
            displayLabel=url.display_label,
            note=url.note[0].value if url.note else None,
        )
    for location in [*access.physical_location, *access.access_contact]:
        if location.type == SHELF_LOCATOR:
            sub(sub(parent, "location"), "shelfLocator", location.value)
            continue
        sub(
            sub(parent, "location"),
            "physicalLocation",
            location.value,
            type=location.type,
            displayLabel=location.display_label,
            **authority_attributes(location),
        )

    condition_types: dict[str, str] = {}
    for mods_type, cocina_type in context.vocabularies.access_condition_types.items():
        condition_types.setdefault(cocina_type, mods_type)
    for note in access.note:
        sub(
            parent,
            "accessCondition",
            note.value,
            type=condition_types.get(note.type or "", note.type),
            displayLabel=note.display_label,
        )
