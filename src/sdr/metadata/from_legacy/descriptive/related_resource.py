from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    compact,
    display_label,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

RELATED_TO = "related to"
OTHER_RELATION_TYPE = "other relation type"


def relation(context: MappingContext, related_item: _Element) -> Props:
    """Type, status and label of a relatedItem; its content is mapped by the builder."""
    related_type = related_item.get("type")
    if related_type:
        return compact(
            {
                "type": context.vocabularies.related_item_types.get(
                    related_type, related_type
                )
            }
            | display_label(related_item)
        )
    other_type = related_item.get("otherType")
    if other_type is None:
        return display_label(related_item)
    note = compact(
        {
            "value": other_type,
            "type": OTHER_RELATION_TYPE,
            "uri": related_item.get("otherTypeURI"),
            "source": compact({"value": related_item.get("otherTypeAuth")}),
        }
    )
    return {"type": RELATED_TO, "note": [note]} | display_label(related_item)
