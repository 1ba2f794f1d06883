"""Maps a MODS record to the descriptive part of the canonical model.

Every top-level MODS element is routed through ``HANDLERS``, keyed by the
element name and, for elements whose meaning depends on their content, a
discriminator. Elements with no handler are dropped with a data error.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from sdr.metadata.cocina.base import build
from sdr.metadata.cocina.description import Description
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.from_legacy.descriptive.access import (
    map_access_condition,
    map_location,
)
from sdr.metadata.from_legacy.descriptive.admin_metadata import admin_metadata
from sdr.metadata.from_legacy.descriptive.common import (
    MappingContext,
    Props,
    children,
    element_name,
)
from sdr.metadata.from_legacy.descriptive.contributor import build_contributor
from sdr.metadata.from_legacy.descriptive.event import build_event
from sdr.metadata.from_legacy.descriptive.form import (
    build_genre,
    build_physical_description,
    build_resource_types,
)
from sdr.metadata.from_legacy.descriptive.identifier import build_identifier
from sdr.metadata.from_legacy.descriptive.language import build_language
from sdr.metadata.from_legacy.descriptive.note import build_note
from sdr.metadata.from_legacy.descriptive.related_resource import relation
from sdr.metadata.from_legacy.descriptive.subject import (
    build_cartographic_forms,
    build_classification,
    build_subject,
)
from sdr.metadata.from_legacy.descriptive.title import build_title
from sdr.metadata.legacy.mods import local_name
from sdr.metadata.normalizers.mods import ModsNormalizer
from sdr.metadata.util.log import LoggerMixin, ObjectLoggerAdapter
from sdr.metadata.util.xmlparser import XMLParser
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

# Elements whose altRepGroup siblings are renderings of one value.
PARALLEL_ELEMENTS = frozenset(
    {"titleInfo", "name", "abstract", "tableOfContents", "note", "subject", "originInfo"}
)


class ResourceProps(dict[str, Any]):
    """The fields of a description or related resource as they are collected."""

    def add(self, field: str, value: Props | list[Props]) -> None:
        values = value if isinstance(value, list) else [value]
        if values := [v for v in values if v]:
            self.setdefault(field, []).extend(values)

    def access(self, field: str) -> list[Props]:
        access: dict[str, list[Props]] = self.setdefault("access", {})
        return access.setdefault(field, [])


Handler = Callable[[MappingContext, list["_Element"], ResourceProps], None]


def collect(
    field: str, mapper: Callable[[MappingContext, list[_Element]], Props | list[Props]]
) -> Handler:
    def handler(
        context: MappingContext, group: list[_Element], resource: ResourceProps
    ) -> None:
        resource.add(field, mapper(context, group))

    return handler


def map_record_info(
    context: MappingContext, group: list[_Element], resource: ResourceProps
) -> None:
    if "admin_metadata" in resource:
        context.log.data_error("Ignoring repeated recordInfo")
        return
    if props := admin_metadata(context, group[0]):
        resource["admin_metadata"] = props


def map_related_item(
    context: MappingContext, group: list[_Element], resource: ResourceProps
) -> None:
    for related_item in group:
        if context.depth >= context.config.max_value_depth:
            raise UnmappableDocument(
                f"relatedItem nesting exceeds {context.config.max_value_depth}",
                object_id=context.object_id,
                element="relatedItem",
            )
        saved_groups = context.name_title_groups
        context.depth += 1
        try:
            props = map_resource(context, related_item)
        finally:
            context.depth -= 1
            context.name_title_groups = saved_groups
        related = relation(context, related_item)
        if notes := related.pop("note", None):
            props.add("note", notes)
        props.update(related)
        if props:
            resource.add("related_resource", dict(props))


def map_subject(
    context: MappingContext, group: list[_Element], resource: ResourceProps
) -> None:
    resource.add("subject", build_subject(context, group))
    resource.add("form", build_cartographic_forms(context, group))


def discriminator(element: _Element) -> str | None:
    if element_name(element) == "location":
        first = next(children(element), None)
        return None if first is None else element_name(first)
    return None


HANDLERS: dict[tuple[str, str | None], Handler] = {
    ("titleInfo", None): collect("title", build_title),
    ("name", None): collect("contributor", build_contributor),
    ("originInfo", None): collect("event", build_event),
    ("typeOfResource", None): collect("form", build_resource_types),
    ("genre", None): collect("form", build_genre),
    ("physicalDescription", None): collect("form", build_physical_description),
    ("language", None): collect("language", build_language),
    ("abstract", None): collect("note", build_note),
    ("tableOfContents", None): collect("note", build_note),
    ("note", None): collect("note", build_note),
    ("subject", None): map_subject,
    ("classification", None): collect("subject", build_classification),
    ("identifier", None): collect("identifier", build_identifier),
    ("location", "url"): map_location,
    ("location", "physicalLocation"): map_location,
    ("location", "shelfLocator"): map_location,
    ("accessCondition", None): map_access_condition,
    ("relatedItem", None): map_related_item,
    ("recordInfo", None): map_record_info,
}


def groups(element: _Element) -> list[list[_Element]]:
    """Children in document order, with altRepGroup siblings gathered together."""
    result: list[list[_Element]] = []
    by_group: dict[tuple[str, str], list[_Element]] = {}
    for child in children(element):
        group_id = child.get("altRepGroup")
        if group_id and element_name(child) in PARALLEL_ELEMENTS:
            key = (element_name(child), group_id)
            if key in by_group:
                by_group[key].append(child)
                continue
            by_group[key] = [child]
            result.append(by_group[key])
        else:
            result.append([child])
    return result


def map_resource(context: MappingContext, element: _Element) -> ResourceProps:
    context.name_title_groups = {
        group_id: name
        for name in children(element)
        if element_name(name) == "name" and (group_id := name.get("nameTitleGroup"))
    }
    resource = ResourceProps()
    for group in groups(element):
        first = group[0]
        key = (element_name(first), discriminator(first))
        if (handler := HANDLERS.get(key)) is None:
            context.log.data_error("Unmapped element <%s>", element_name(first))
            continue
        handler(context, group, resource)
    return resource


class DescriptiveMapper(LoggerMixin, XMLParser):
    """Reads descMetadata (MODS) into a Description."""

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def build(
        self, document: str | bytes | _Element | _ElementTree, object_id: str
    ) -> Description:
        """
        :raise UnmappableDocument: If the document is not a MODS record or
            has no title.
        :raise SchemaViolation: If the mapped description is not valid.
        """
        root = self.load_root(document)
        if local_name(root.tag) != "mods":
            raise UnmappableDocument(
                f"Expected a <mods> root element, found <{local_name(root.tag)}>",
                object_id=object_id,
                element=local_name(root.tag),
            )
        root = ModsNormalizer(
            object_id, config=self.config, vocabularies=self.vocabularies
        ).normalize(root)
        context = MappingContext(
            object_id=object_id,
            config=self.config,
            vocabularies=self.vocabularies,
            log=ObjectLoggerAdapter(self.logger(), object_id),
        )
        props = map_resource(context, root)
        if not props.get("title"):
            raise UnmappableDocument(
                "MODS record has no title", object_id=object_id, element="titleInfo"
            )
        return build(Description, dict(props), max_depth=self.config.max_value_depth)
