from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    authority,
    children_named,
    compact,
    display_label,
    status,
    text,
)

if TYPE_CHECKING:
    from lxml.etree import _Element


def terms(elements: list[_Element]) -> Props:
    """code, value and authority from a set of code/text terms."""
    props: Props = {}
    for term in elements:
        key = "code" if term.get("type") == "code" else "value"
        props.setdefault(key, text(term))
        for attribute, value in authority(term).items():
            props.setdefault(attribute, value)
    return compact(props)


def language_value(context: MappingContext, element: _Element) -> Props:
    script = terms(children_named(element, "scriptTerm"))
    return compact(
        terms(children_named(element, "languageTerm"))
        | {"script": script}
        | status(element)
        | display_label(element)
    )


def build_language(context: MappingContext, group: list[_Element]) -> list[Props]:
    value = language_value(context, group[0])
    return [value] if value else []
