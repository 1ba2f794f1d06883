from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    Attributes,
    WriterContext,
    authority_attributes,
    language_attributes,
    sub,
    usage,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import Contributor, DescriptiveValue

DISPLAY = "display"


def name_type_attribute(context: WriterContext, contributor_type: str | None) -> str | None:
    if contributor_type is None:
        return None
    inverse = {value: key for key, value in context.vocabularies.name_types.items()}
    return inverse.get(contributor_type, contributor_type)


def write_name_parts(
    context: WriterContext, name: _Element, value: DescriptiveValue
) -> None:
    part_types = {
        part_type: name for name, part_type in context.vocabularies.name_part_types.items()
    }
    parts = value.structured_value or [value]
    for part in parts:
        sub(name, "namePart", part.value, type=part_types.get(part.type or "", part.type))


def write_roles(context: WriterContext, name: _Element, contributor: Contributor) -> None:
    for role in contributor.role:
        role_element = sub(name, "role")
        attributes = authority_attributes(role)
        if role.value is not None:
            sub(role_element, "roleTerm", role.value, type="text", **attributes)
        if role.code is not None:
            sub(role_element, "roleTerm", role.code, type="code", **attributes)


def write_details(
    context: WriterContext, name: _Element, contributor: Contributor
) -> None:
    write_roles(context, name, contributor)
    for identifier in contributor.identifier:
        sub(
            name,
            "nameIdentifier",
            identifier.value,
            type=(
                context.vocabularies.mods_identifier_type(identifier.type)
                if identifier.type
                else None
            ),
        )
    for affiliation in contributor.affiliation:
        sub(name, "affiliation", affiliation.value)
    for note in contributor.note:
        if note.type == "description":
            sub(name, "description", note.value)
        else:
            context.log.data_error("Contributor note of type %r not written", note.type)


def write_name(
    context: WriterContext,
    parent: _Element,
    contributor: Contributor,
    values: list[DescriptiveValue],
    attributes: Attributes,
) -> _Element:
    main = next((v for v in values if v.type != DISPLAY), None)
    name = sub(
        parent,
        "name",
        type=name_type_attribute(context, contributor.type),
        **usage(contributor.status),
        **attributes,
        **(authority_attributes(main) if main else {}),
        **(language_attributes(main.value_language) if main else {}),
    )
    for value in values:
        if value.type == DISPLAY:
            sub(name, "displayForm", value.value)
        else:
            write_name_parts(context, name, value)
    write_details(context, name, contributor)
    return name


def write_contributor(
    context: WriterContext,
    parent: _Element,
    contributor: Contributor,
    name_title_group: str | None = None,
) -> None:
    if contributor.name and contributor.name[0].parallel_value:
        group = context.next_alt_rep_group()
        for member in contributor.name[0].parallel_value:
            write_name(context, parent, contributor, [member], {"altRepGroup": group})
        return
    write_name(
        context, parent, contributor, contributor.name, {"nameTitleGroup": name_title_group}
    )
