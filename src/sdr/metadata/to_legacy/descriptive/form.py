from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.to_legacy.descriptive.common import (
    WriterContext,
    authority_attributes,
    language_attributes,
    sub,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import DescriptiveValue

RESOURCE_TYPE = "resource type"
RESOURCE_TYPE_SOURCE = "MODS resource types"
RESOURCE_TYPE_FLAGS = ("manuscript", "collection")


def is_resource_type(form: DescriptiveValue) -> bool:
    return (
        form.type == RESOURCE_TYPE
        and form.source is not None
        and form.source.value == RESOURCE_TYPE_SOURCE
    )


def write_resource_types(
    context: WriterContext, parent: _Element, forms: list[DescriptiveValue]
) -> None:
    """typeOfResource elements; manuscript and collection become flags on the first."""
    flags = {
        form.value: "yes" for form in forms if form.value in RESOURCE_TYPE_FLAGS
    }
    values = [form for form in forms if form.value not in RESOURCE_TYPE_FLAGS]
    if not values:
        sub(parent, "typeOfResource", **flags)
        return
    for position, form in enumerate(values):
        sub(
            parent,
            "typeOfResource",
            form.value,
            displayLabel=form.display_label,
            **(flags if position == 0 else {}),
        )


def write_physical_description(
    context: WriterContext, parent: _Element, form: DescriptiveValue
) -> None:
    element_names = {
        form_type: name
        for name, form_type in context.vocabularies.physical_description_types.items()
    }
    physical_description = sub(
        parent, "physicalDescription", displayLabel=form.display_label
    )
    values = form.grouped_value or ([form] if form.value is not None else [])
    for value in values:
        sub(
            physical_description,
            element_names[value.type or ""],
            value.value,
            **authority_attributes(value),
        )
    for note in form.note:
        sub(
            physical_description,
            "note",
            note.value,
            type=note.type,
            displayLabel=note.display_label,
        )


def is_physical_description(context: WriterContext, form: DescriptiveValue) -> bool:
    physical_types = set(context.vocabularies.physical_description_types.values())
    if form.grouped_value:
        return all(value.type in physical_types for value in form.grouped_value)
    if form.value is None:
        return bool(form.note) and form.type is None
    return form.type in physical_types


def write_forms(
    context: WriterContext, parent: _Element, forms: list[DescriptiveValue]
) -> None:
    resource_types = [form for form in forms if is_resource_type(form)]
    # written with the subject cartographics
    map_form_types = set(context.vocabularies.cartographic_form_types.values())
    if resource_types:
        write_resource_types(context, parent, resource_types)
    for form in forms:
        if is_resource_type(form) or form.type in map_form_types:
            continue
        if form.type == "genre":
            sub(
                parent,
                "genre",
                form.value,
                displayLabel=form.display_label,
                **authority_attributes(form),
                **language_attributes(form.value_language),
            )
        elif is_physical_description(context, form):
            write_physical_description(context, parent, form)
        else:
            context.log.data_error("Form of type %r not written", form.type)
