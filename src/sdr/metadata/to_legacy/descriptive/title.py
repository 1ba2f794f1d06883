from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    language_attributes,
    sub,
    usage,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue

UNIFORM = "uniform"


def uniform_title_parts(
    node: DescriptiveValue,
) -> tuple[DescriptiveValue, DescriptiveValue] | None:
    """The name and title parts of a uniform title linked to a contributor."""
    if node.type != UNIFORM:
        return None
    parts = {part.type: part for part in node.structured_value}
    if "name" in parts and "title" in parts:
        return parts["name"], parts["title"]
    return None


def write_title_content(
    context: WriterContext, title_info: _Element, content: DescriptiveValue
) -> None:
    if content.value is not None:
        sub(title_info, "title", content.value)
        return
    part_names = {
        part_type: name
        for name, part_type in context.vocabularies.title_part_types.items()
    }
    for part in content.structured_value:
        if (name := part_names.get(part.type or "")) is None:
            context.log.data_error("Title part of type %r not written", part.type)
            continue
        sub(title_info, name, part.value)


def write_title_info(
    context: WriterContext,
    parent: _Element,
    node: DescriptiveValue,
    *,
    alt_rep_group: str | None = None,
    name_title_group: str | None = None,
) -> _Element:
    content = node
    if (parts := uniform_title_parts(node)) is not None:
        content = parts[1]
        if name_title_group is None:
            context.log.data_error("Uniform title name matches no contributor")
    title_info = sub(
        parent,
        "titleInfo",
        type=node.type,
        displayLabel=node.display_label,
        altRepGroup=alt_rep_group,
        nameTitleGroup=name_title_group,
        **usage(node.status),
        **authority_attributes(node),
        **language_attributes(node.value_language),
    )
    write_title_content(context, title_info, content)
    return title_info


def write_title(
    context: WriterContext,
    parent: _Element,
    node: DescriptiveValue,
    name_title_group: str | None = None,
) -> None:
    if not node.parallel_value:
        write_title_info(context, parent, node, name_title_group=name_title_group)
        return
    group = context.next_alt_rep_group()
    for member in node.parallel_value:
        write_title_info(context, parent, member, alt_rep_group=group)
