from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    authority,
    children,
    compact,
    element_name,
    text,
)
from sdr.metadata.from_legacy.descriptive.language import language_value

if TYPE_CHECKING:
    from lxml.etree import _Element

ORIGINAL_CATALOGING_AGENCY = "original cataloging agency"
RECORD_ORIGIN = "record origin"
RECORD_INFORMATION = "record information"
RECORD_EVENTS = {"recordCreationDate": "creation", "recordChangeDate": "modification"}


def admin_metadata(context: MappingContext, record_info: _Element) -> Props:
    """recordInfo, the provenance of the description itself."""
    props: dict[str, list[Props]] = {
        "contributor": [],
        "event": [],
        "language": [],
        "note": [],
        "metadata_standard": [],
        "identifier": [],
    }
    for child in children(record_info):
        name = element_name(child)
        match name:
            case "recordContentSource":
                props["contributor"].append(
                    {
                        "name": [compact({"value": text(child)} | authority(child))],
                        "type": "organization",
                        "role": [{"value": ORIGINAL_CATALOGING_AGENCY}],
                    }
                )
            case "recordCreationDate" | "recordChangeDate":
                encoding = child.get("encoding")
                date = compact(
                    {
                        "value": text(child),
                        "encoding": {"code": encoding} if encoding else None,
                    }
                )
                props["event"].append({"type": RECORD_EVENTS[name], "date": [date]})
            case "recordIdentifier":
                source = child.get("source")
                props["identifier"].append(
                    compact(
                        {
                            "value": text(child),
                            "type": (
                                context.vocabularies.cocina_identifier_type(source)
                                if source
                                else None
                            ),
                        }
                    )
                )
            case "recordOrigin":
                props["note"].append({"value": text(child), "type": RECORD_ORIGIN})
            case "recordInfoNote":
                props["note"].append({"value": text(child), "type": RECORD_INFORMATION})
            case "languageOfCataloging":
                if language := language_value(context, child):
                    props["language"].append(language)
            case "descriptionStandard":
                props["metadata_standard"].append(
                    compact({"code": text(child)} | authority(child))
                )
            case _:
                context.log.data_error("Unmapped recordInfo child <%s>", name)
    return compact(props)
