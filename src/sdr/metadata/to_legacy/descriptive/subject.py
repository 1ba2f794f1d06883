from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.legacy.mods import q
from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    language_attributes,
    sub,
)
from sdr.metadata.to_legacy.descriptive.contributor import write_name_parts
from sdr.metadata.to_legacy.descriptive.title import write_title_content

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue

CLASSIFICATION = "classification"
GENERIC_NAME = "name"
PLACE = "place"
MAP_COORDINATES = "map coordinates"


def write_hierarchical_place(
    context: WriterContext, subject: _Element, place: DescriptiveValue
) -> None:
    element = sub(subject, "hierarchicalGeographic", **authority_attributes(place))
    for level in place.structured_value:
        if level.type in context.vocabularies.hierarchical_place_types:
            sub(element, level.type, level.value)
        else:
            context.log.data_error("Place level of type %r not written", level.type)


def write_cartographic_forms(
    context: WriterContext, parent: _Element, forms: list[DescriptiveValue]
) -> None:
    """Map scale and projection join the coordinates of the first cartographics."""
    element_names = {
        form_type: name
        for name, form_type in context.vocabularies.cartographic_form_types.items()
    }
    map_forms = [form for form in forms if form.type in element_names]
    if not map_forms:
        return
    cartographics = parent.find(f"{q('subject')}/{q('cartographics')}")
    if cartographics is None:
        cartographics = sub(sub(parent, "subject"), "cartographics")
    # scale and projection precede coordinates
    for position, form in enumerate(map_forms):
        element = etree.Element(q(element_names[form.type or ""]))
        element.text = form.value
        cartographics.insert(position, element)


def write_subject_part(
    context: WriterContext, subject: _Element, part: DescriptiveValue
) -> None:
    vocabularies = context.vocabularies
    element_names = {value: key for key, value in vocabularies.subject_types.items()}
    name_types = {value: key for key, value in vocabularies.name_types.items()}
    authority = authority_attributes(part)
    part_type = part.type or ""

    if part_type == PLACE and part.structured_value:
        write_hierarchical_place(context, subject, part)
    elif part_type == MAP_COORDINATES:
        sub(sub(subject, "cartographics"), "coordinates", part.value)
    elif part_type == PLACE and part.value is None and part.code is not None:
        sub(subject, "geographicCode", part.code, **authority)
    elif part_type == "title":
        write_title_content(context, sub(subject, "titleInfo", **authority), part)
    elif part_type in name_types or part_type == GENERIC_NAME:
        name = sub(subject, "name", type=name_types.get(part_type), **authority)
        write_name_parts(context, name, part)
    elif part_type in element_names:
        sub(subject, element_names[part_type], part.value, **authority)
    else:
        context.log.data_error("Subject part of type %r not written", part.type)


def write_subject_element(
    context: WriterContext,
    parent: _Element,
    node: DescriptiveValue,
    alt_rep_group: str | None = None,
) -> None:
    if node.type == CLASSIFICATION:
        source = node.source
        sub(
            parent,
            "classification",
            node.value,
            authority=source.code if source else None,
            edition=source.version if source else None,
            valueURI=node.uri,
            displayLabel=node.display_label,
        )
        return
    attributes = {
        "displayLabel": node.display_label,
        "altRepGroup": alt_rep_group,
        **language_attributes(node.value_language),
    }
    if node.structured_value and node.type != PLACE:
        subject = sub(parent, "subject", **attributes, **authority_attributes(node))
        for part in node.structured_value:
            write_subject_part(context, subject, part)
    else:
        write_subject_part(context, sub(parent, "subject", **attributes), node)


def write_subject(context: WriterContext, parent: _Element, node: DescriptiveValue) -> None:
    if not node.parallel_value:
        write_subject_element(context, parent, node)
        return
    group = context.next_alt_rep_group()
    for member in node.parallel_value:
        write_subject_element(context, parent, member, alt_rep_group=group)
