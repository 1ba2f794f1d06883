"""Writes the descriptive part of the canonical model as a MODS record."""

from __future__ import annotations

from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.legacy.mods import NSMAP, SCHEMA_LOCATION_ATTR, q, schema_location
from sdr.metadata.normalizers.mods import MODS_VERSION_PATTERN
from sdr.metadata.to_legacy.descriptive.access import write_access, write_purl
from sdr.metadata.to_legacy.descriptive.admin_metadata import write_admin_metadata
from sdr.metadata.to_legacy.descriptive.common import WriterContext, sub
from sdr.metadata.to_legacy.descriptive.contributor import write_contributor
from sdr.metadata.to_legacy.descriptive.event import write_event
from sdr.metadata.to_legacy.descriptive.form import write_forms
from sdr.metadata.to_legacy.descriptive.identifier import write_identifier
from sdr.metadata.to_legacy.descriptive.language import write_language
from sdr.metadata.to_legacy.descriptive.note import write_note
from sdr.metadata.to_legacy.descriptive.subject import (
    write_cartographic_forms,
    write_subject,
)
from sdr.metadata.to_legacy.descriptive.title import uniform_title_parts, write_title
from sdr.metadata.util.log import LoggerMixin, ObjectLoggerAdapter
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.cocina.description import Description, RelatedResource

OTHER_RELATION_TYPE = "other relation type"
RELATED_TO = "related to"


def name_title_links(
    context: WriterContext, resource: Description | RelatedResource
) -> tuple[dict[int, str], dict[int, str]]:
    """Group ids linking uniform titles to the contributor they name.

    Returns the ids keyed by title position and by contributor position.
    """
    titles: dict[int, str] = {}
    contributors: dict[int, str] = {}
    for title_position, title in enumerate(resource.title):
        if (parts := uniform_title_parts(title)) is None:
            continue
        name_part = parts[0]
        for position, contributor in enumerate(resource.contributor):
            if position in contributors or not contributor.name:
                continue
            if contributor.name[0].value == name_part.value:
                group = context.next_name_title_group()
                titles[title_position] = group
                contributors[position] = group
                break
    return titles, contributors


def write_resource(
    context: WriterContext,
    parent: _Element,
    resource: Description | RelatedResource,
) -> None:
    title_groups, contributor_groups = name_title_links(context, resource)
    for position, title in enumerate(resource.title):
        write_title(context, parent, title, title_groups.get(position))
    for position, contributor in enumerate(resource.contributor):
        write_contributor(context, parent, contributor, contributor_groups.get(position))
    write_forms(context, parent, resource.form)
    for event in resource.event:
        write_event(context, parent, event)
    for language in resource.language:
        write_language(context, parent, language)
    for note in resource.note:
        if note.type == OTHER_RELATION_TYPE:
            continue
        write_note(context, parent, note)
    for subject in resource.subject:
        write_subject(context, parent, subject)
    write_cartographic_forms(context, parent, resource.form)
    for related in resource.related_resource:
        write_related_resource(context, parent, related)
    for identifier in resource.identifier:
        write_identifier(context, parent, identifier)
    if resource.purl:
        write_purl(parent, resource.purl)
    if resource.access is not None:
        write_access(context, parent, resource.access)
    if resource.admin_metadata is not None:
        write_admin_metadata(context, parent, resource.admin_metadata)


def write_related_resource(
    context: WriterContext, parent: _Element, related: RelatedResource
) -> None:
    related_item_types = {
        value: key for key, value in context.vocabularies.related_item_types.items()
    }
    other_type = next(
        (note for note in related.note if note.type == OTHER_RELATION_TYPE), None
    )
    attributes: dict[str, str | None] = {"displayLabel": related.display_label}
    if related.type == RELATED_TO or (related.type is None and other_type):
        if other_type is not None:
            attributes |= {
                "otherType": other_type.value,
                "otherTypeURI": other_type.uri,
                "otherTypeAuth": other_type.source.value if other_type.source else None,
            }
    elif related.type is not None:
        attributes["type"] = related_item_types.get(related.type, related.type)
    write_resource(context, sub(parent, "relatedItem", **attributes), related)


class DescriptiveWriter(LoggerMixin):
    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def mods_version(self, description: Description) -> str:
        if description.admin_metadata is not None:
            for note in description.admin_metadata.note:
                if match := MODS_VERSION_PATTERN.search(note.value or ""):
                    return match.group(1)
        return self.config.mods_version

    def write(self, description: Description, object_id: str) -> _Element:
        context = WriterContext(
            object_id=object_id,
            config=self.config,
            vocabularies=self.vocabularies,
            log=ObjectLoggerAdapter(self.logger(), object_id),
        )
        version = self.mods_version(description)
        root = etree.Element(q("mods"), nsmap=NSMAP)
        root.set("version", version)
        root.set(SCHEMA_LOCATION_ATTR, schema_location(version))
        write_resource(context, root, description)
        return root
