from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    compact,
    display_label,
    text,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

INVALID = "invalid"


def identifier_value(context: MappingContext, element: _Element) -> Props:
    identifier_type = element.get("type")
    return compact(
        {
            "value": text(element),
            "type": (
                context.vocabularies.cocina_identifier_type(identifier_type)
                if identifier_type
                else None
            ),
            "status": INVALID if element.get("invalid") == "yes" else None,
        }
        | display_label(element)
    )


def build_identifier(context: MappingContext, group: list[_Element]) -> list[Props]:
    return [identifier_value(context, group[0])]
