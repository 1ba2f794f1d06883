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
    name_text,
    parallel,
    status,
    text,
    value_language,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

UNIFORM = "uniform"


def title_core(context: MappingContext, title_info: _Element) -> Props:
    part_types = context.vocabularies.title_part_types
    parts = [part for part in children(title_info) if element_name(part) in part_types]
    if len(parts) == 1 and element_name(parts[0]) == "title":
        return compact({"value": text(parts[0])})
    for part in children(title_info):
        if element_name(part) not in part_types:
            context.log.data_error("Unmapped titleInfo child <%s>", element_name(part))
    return {
        "structured_value": [
            compact({"value": text(part), "type": part_types[element_name(part)]})
            for part in parts
        ]
    }


def title_value(context: MappingContext, title_info: _Element) -> Props:
    title_type = title_info.get("type")
    core = title_core(context, title_info)
    name = None
    if title_type == UNIFORM and (group := title_info.get("nameTitleGroup")):
        name = context.name_title_groups.get(group)
    if name is not None:
        core = {
            "structured_value": [
                compact({"value": name_text(name), "type": "name"} | authority(name)),
                core | {"type": "title"},
            ]
        }
    return compact(
        core
        | {"type": title_type}
        | status(title_info)
        | display_label(title_info)
        | authority(title_info)
        | value_language(title_info)
    )


def build_title(context: MappingContext, group: list[_Element]) -> Props:
    """One title, or a parallel title for an altRepGroup of titleInfos."""
    return parallel([title_value(context, title_info) for title_info in group])
