from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    authority,
    children_named,
    compact,
    status,
    text,
    value_language,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

DISPLAY = "display"


def name_value(context: MappingContext, name: _Element) -> Props | None:
    """The name parts of one name element as a single value."""
    part_types = context.vocabularies.name_part_types
    parts = [
        compact(
            {
                "value": text(part),
                "type": part_types.get(part.get("type", ""), part.get("type")),
            }
        )
        for part in children_named(name, "namePart")
    ]
    if not parts:
        return None
    value = parts[0] if len(parts) == 1 else {"structured_value": parts}
    return compact(value | authority(name) | value_language(name))


def role(context: MappingContext, role_element: _Element) -> Props:
    props: Props = {}
    source: Props = {}
    for term in children_named(role_element, "roleTerm"):
        value = text(term)
        if term.get("type") == "code":
            if not term.get("authority") and len(value or "") != 3:
                raise UnmappableDocument(
                    f"Role code {value!r} has no authority",
                    object_id=context.object_id,
                    element="roleTerm",
                )
            props["code"] = value
        else:
            props["value"] = value
        term_authority = authority(term)
        source = source or term_authority.get("source", {})
        if "uri" in term_authority:
            props.setdefault("uri", term_authority["uri"])
    return compact(props | {"source": source})


def identifier(context: MappingContext, element: _Element) -> Props:
    identifier_type = element.get("type")
    return compact(
        {
            "value": text(element),
            "type": (
                context.vocabularies.cocina_identifier_type(identifier_type)
                if identifier_type
                else None
            ),
        }
    )


def build_contributor(context: MappingContext, group: list[_Element]) -> Props:
    """A contributor from a name, or from an altRepGroup of names."""
    first = group[0]
    values = [value for name in group if (value := name_value(context, name))]
    names: list[Props] = []
    if len(values) > 1:
        names.append({"parallel_value": values})
    else:
        names.extend(values)
    for name in group:
        display_forms = children_named(name, "displayForm")
        if display_forms and len(group) > 1:
            context.log.data_error("Display form dropped from parallel name")
            continue
        names.extend(
            compact({"value": text(display_form), "type": DISPLAY})
            for display_form in display_forms
        )

    name_type = first.get("type")
    return compact(
        {
            "name": names,
            "type": context.vocabularies.name_types.get(name_type or "", name_type),
            "role": [role(context, r) for r in children_named(first, "role")],
            "identifier": [
                identifier(context, i) for i in children_named(first, "nameIdentifier")
            ],
            "affiliation": [
                compact({"value": text(a)}) for a in children_named(first, "affiliation")
            ],
            "note": [
                compact({"value": text(d), "type": "description"})
                for d in children_named(first, "description")
            ],
        }
        | status(first)
    )
