"""Splitting a MODS originInfo into one group per kind of date.

Both the MODS normalizer and the descriptive mapper need to agree on which
children of an originInfo belong to which event, so the rule lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sdr.metadata.legacy.mods import local_name

if TYPE_CHECKING:
    from lxml.etree import _Element

    from sdr.metadata.vocabulary import MappingVocabularies


@dataclass
class OriginInfoGroup:
    kind: str | None
    event_type: str | None
    children: list[_Element] = field(default_factory=list)


def date_kind(element: _Element, vocabularies: MappingVocabularies) -> str | None:
    name = local_name(element.tag)
    if name not in vocabularies.date_elements:
        return None
    if name == "dateOther":
        return f"dateOther:{element.get('type', '')}"
    return name


def default_event_type(kind: str | None, vocabularies: MappingVocabularies) -> str | None:
    if kind is None:
        return None
    if kind.startswith("dateOther:"):
        return kind.partition(":")[2] or None
    return vocabularies.date_elements[kind][0]


def origin_info_groups(
    origin_info: _Element, vocabularies: MappingVocabularies
) -> list[OriginInfoGroup]:
    """Group the children of an originInfo by the kind of date they hold.

    Children that are not dates (publisher, place, edition and so on) go to
    the principal group: the one holding ``dateIssued`` if there is one,
    otherwise the first group. An explicit ``eventType`` belongs to the
    principal group, the other groups take the default for their date kind.
    """
    groups: dict[str | None, OriginInfoGroup] = {}
    others: list[_Element] = []
    for child in origin_info:
        if not isinstance(child.tag, str):
            continue
        kind = date_kind(child, vocabularies)
        if kind is None:
            others.append(child)
            continue
        if kind not in groups:
            groups[kind] = OriginInfoGroup(kind, default_event_type(kind, vocabularies))
        groups[kind].children.append(child)

    if not groups:
        principal = OriginInfoGroup(None, None)
        if any(local_name(child.tag) == "publisher" for child in others):
            principal.event_type = "publication"
        groups[None] = principal
    else:
        principal = groups.get("dateIssued") or next(iter(groups.values()))

    principal.children.extend(others)
    principal.children.sort(key=origin_info.index)
    if explicit := origin_info.get("eventType"):
        principal.event_type = explicit
    return list(groups.values())
