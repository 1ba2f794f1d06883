from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Sequence
from copy import deepcopy
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.legacy.mods import (
    GROUP_ATTRIBUTES,
    MODS_NS,
    NAMESPACES,
    NSMAP,
    PRIMARY,
    PRIMARY_DISPLAY,
    SCHEMA_LOCATION_ATTR,
    XLINK_HREF_ATTR,
    XML_SPACE_ATTR,
    local_name,
    q,
    schema_location,
)
from sdr.metadata.legacy.origin_info import origin_info_groups
from sdr.metadata.normalizers.base import (
    Normalizer,
    Rule,
    remove,
    remove_all,
    remove_empty_elements,
    set_default,
    strip_attributes,
)

if TYPE_CHECKING:
    from lxml.etree import _Element

MODS_VERSION_PATTERN = re.compile(r"MODS version (\d+\.\d+)")
TRAILING_TITLE_PUNCTUATION = re.compile(r"[\s,.]+$")
AUTHORITY_ATTRIBUTES = ("authority", "authorityURI", "valueURI")
DATE_ELEMENTS = (
    "dateCreated",
    "dateIssued",
    "copyrightDate",
    "dateCaptured",
    "dateValid",
    "dateModified",
    "dateOther",
)
ROLE_AUTHORITY_MARCRELATOR = "marcrelator"


def mods_version(root: _Element, default: str) -> str:
    """The MODS version a record declares in its recordOrigin, else ``default``."""
    for origin in root.iterfind(f"{q('recordInfo')}/{q('recordOrigin')}"):
        if match := MODS_VERSION_PATTERN.search(origin.text or ""):
            return match.group(1)
    return default


def rebuild_namespace(root: _Element) -> _Element:
    """Copy the tree so every element is in the MODS namespace, declared as the default."""

    def copy_into(source: _Element, target: _Element) -> None:
        for name, value in source.attrib.items():
            target.set(name, value)
        target.text = source.text
        for child in source:
            if not isinstance(child.tag, str):
                continue
            copy = etree.SubElement(target, _mods_tag(child.tag))
            copy_into(child, copy)
            copy.tail = child.tail

    rebuilt = etree.Element(q("mods"), nsmap=NSMAP)
    copy_into(root, rebuilt)
    return rebuilt


def _mods_tag(tag: str) -> str:
    if tag.startswith("{") and not tag.startswith(f"{{{MODS_NS}}}"):
        return tag
    return q(local_name(tag))


class ModsNormalizer(Normalizer):
    """Normalizes descMetadata (MODS).

    Rules touching the same elements run in a fixed order; each one is a
    no-op on a document it has already been applied to.
    """

    ROOT_TAG = "mods"
    NAMESPACES = NAMESPACES

    def prepare(self, root: _Element) -> _Element:
        return rebuild_namespace(root)

    def rules(self) -> Sequence[Rule]:
        return (
            self.normalize_version,
            self.remove_empty_attributes,
            self.remove_xml_space,
            self.strip_text,
            self.normalize_authority_uris,
            self.normalize_name_hrefs,
            self.normalize_authority_codes,
            self.normalize_subject_authority,
            self.normalize_topical_naf,
            self.split_origin_info,
            self.remove_redundant_date_types,
            self.normalize_place_terms,
            self.normalize_dates,
            self.normalize_role_terms,
            self.remove_names_without_parts,
            self.normalize_language_terms,
            self.normalize_access_conditions,
            self.normalize_identifier_types,
            self.split_locations,
            self.normalize_purls,
            self.remove_other_types,
            self.remove_surplus_primary,
            self.remove_empty_text_elements,
            self.remove_title_types,
            self.normalize_title_punctuation,
            self.remove_summary_abstract_type,
            remove_empty_elements,
            self.remove_unmatched_groups,
            remove_empty_elements,
            self.remove_empty_related_items,
        )

    def normalize_version(self, root: _Element) -> None:
        version = mods_version(root, self.config.mods_version)
        root.set("version", version)
        root.set(SCHEMA_LOCATION_ATTR, schema_location(version))

    def remove_empty_attributes(self, root: _Element) -> None:
        for element in root.iter(etree.Element):
            for name, value in list(element.attrib.items()):
                if not value.strip():
                    del element.attrib[name]

    def remove_xml_space(self, root: _Element) -> None:
        for element in root.iter(etree.Element):
            strip_attributes(element, XML_SPACE_ATTR)

    def strip_text(self, root: _Element) -> None:
        for element in root.iter(etree.Element):
            if element.text is not None:
                element.text = element.text.strip() or None
            element.tail = None

    def normalize_authority_uris(self, root: _Element) -> None:
        for element in self._xpath(root, "//*[@authorityURI]"):
            uri = element.get("authorityURI", "")
            if not uri.endswith("/"):
                element.set("authorityURI", f"{uri}/")

    def normalize_name_hrefs(self, root: _Element) -> None:
        for name in root.iter(q("name")):
            if href := name.attrib.pop(XLINK_HREF_ATTR, None):
                set_default(name, "valueURI", href)

    def normalize_authority_codes(self, root: _Element) -> None:
        codes = self.vocabularies.authority_codes
        for element in self._xpath(root, "//*[@authority]"):
            authority = element.get("authority", "")
            if authority in codes:
                element.set("authority", codes[authority])

    def normalize_subject_authority(self, root: _Element) -> None:
        """A subject with a single child carries its authority on the child."""
        for subject in root.iter(q("subject")):
            children = [child for child in subject if isinstance(child.tag, str)]
            if len(children) != 1:
                continue
            child = children[0]
            for name in AUTHORITY_ATTRIBUTES:
                if (value := subject.attrib.pop(name, None)) is not None:
                    set_default(child, name, value)

    def normalize_topical_naf(self, root: _Element) -> None:
        """The name authority file does not cover topics; such subjects are LCSH."""
        for topic in self._xpath(root, "//mods:subject/mods:topic[@authority='naf']"):
            topic.set("authority", "lcsh")
        for subject in self._xpath(root, "//mods:subject[@authority='naf']"):
            children = [child for child in subject if isinstance(child.tag, str)]
            if children and all(local_name(c.tag) == "topic" for c in children):
                subject.set("authority", "lcsh")

    def split_origin_info(self, root: _Element) -> None:
        """One originInfo per kind of date, each with an explicit eventType."""
        for origin_info in list(root.iter(q("originInfo"))):
            if origin_info.get("altRepGroup"):
                continue
            groups = origin_info_groups(origin_info, self.vocabularies)
            if len(groups) == 1:
                if groups[0].event_type and not origin_info.get("eventType"):
                    origin_info.set("eventType", groups[0].event_type)
                continue
            parent = origin_info.getparent()
            position = parent.index(origin_info)
            for offset, group in enumerate(groups):
                split = etree.Element(q("originInfo"))
                for name, value in origin_info.attrib.items():
                    if name != "eventType":
                        split.set(name, value)
                if group.event_type:
                    split.set("eventType", group.event_type)
                for child in group.children:
                    split.append(deepcopy(child))
                parent.insert(position + offset, split)
            remove(origin_info)

    def remove_redundant_date_types(self, root: _Element) -> None:
        for origin_info in root.iter(q("originInfo")):
            event_type = origin_info.get("eventType")
            for date in origin_info.iterfind(q("dateOther")):
                if date.get("type") and date.get("type") == event_type:
                    del date.attrib["type"]

    def normalize_place_terms(self, root: _Element) -> None:
        for place_term in root.iter(q("placeTerm")):
            set_default(place_term, "type", "text")

    def normalize_dates(self, root: _Element) -> None:
        for origin_info in root.iter(q("originInfo")):
            for name in DATE_ELEMENTS:
                for date in origin_info.iterfind(q(name)):
                    if date.text and date.text.endswith("."):
                        date.text = date.text.rstrip(".").strip() or None

    def normalize_role_terms(self, root: _Element) -> None:
        for role_term in root.iter(q("roleTerm")):
            set_default(role_term, "type", "text")
            if (
                role_term.get("type") == "text"
                and role_term.get("authority") == ROLE_AUTHORITY_MARCRELATOR
                and role_term.text
            ):
                role_term.text = role_term.text.lower()

    def remove_names_without_parts(self, root: _Element) -> None:
        for name in list(root.iter(q("name"))):
            parts = [
                part
                for part in name
                if local_name(part.tag) in ("namePart", "displayForm")
                and (part.text or "").strip()
            ]
            if not parts:
                remove(name)

    def normalize_language_terms(self, root: _Element) -> None:
        for term in root.iter(q("languageTerm")):
            set_default(term, "type", "code")

    def normalize_access_conditions(self, root: _Element) -> None:
        types = self.vocabularies.access_condition_types
        canonical = {}
        for mods_type, cocina_type in types.items():
            canonical.setdefault(cocina_type, mods_type)
        for condition in root.iter(q("accessCondition")):
            condition_type = condition.get("type")
            if not condition_type:
                continue
            key = condition_type.replace(" ", "").lower()
            if cocina_type := types.get(condition_type) or types.get(key):
                condition.set("type", canonical[cocina_type])

    def normalize_identifier_types(self, root: _Element) -> None:
        vocabularies = self.vocabularies
        for tag in ("identifier", "nameIdentifier"):
            for identifier in root.iter(q(tag)):
                if identifier_type := identifier.get("type"):
                    identifier.set(
                        "type", vocabularies.canonical_mods_identifier_type(identifier_type)
                    )
        for record_identifier in root.iter(q("recordIdentifier")):
            if source := record_identifier.get("source"):
                record_identifier.set(
                    "source", vocabularies.canonical_mods_identifier_type(source)
                )

    def split_locations(self, root: _Element) -> None:
        """Every location holds exactly one child."""
        for location in list(root.iter(q("location"))):
            children = [child for child in location if isinstance(child.tag, str)]
            if len(children) <= 1:
                continue
            parent = location.getparent()
            position = parent.index(location)
            for offset, child in enumerate(children):
                single = etree.Element(q("location"))
                single.append(deepcopy(child))
                parent.insert(position + offset, single)
            remove(location)

    def normalize_purls(self, root: _Element) -> None:
        """The first PURL of a resource is its primary display URL.

        Applies to the record itself and to each related item.
        """
        for resource in [root, *root.iter(q("relatedItem"))]:
            purl_found = False
            for url in resource.iterfind(f"{q('location')}/{q('url')}"):
                if not purl_found and (url.text or "").startswith(
                    self.config.purl_base_url
                ):
                    url.set("usage", PRIMARY_DISPLAY)
                    purl_found = True
                elif purl_found and url.get("usage") == PRIMARY_DISPLAY:
                    del url.attrib["usage"]

    def remove_other_types(self, root: _Element) -> None:
        for related_item in root.iter(q("relatedItem")):
            if related_item.get("type"):
                strip_attributes(related_item, "otherType", "otherTypeURI", "otherTypeAuth")

    def remove_surplus_primary(self, root: _Element) -> None:
        for parent in root.iter(etree.Element):
            seen: set[str] = set()
            for child in parent:
                if child.get("usage") != PRIMARY:
                    continue
                if child.tag in seen:
                    del child.attrib["usage"]
                seen.add(child.tag)

    def remove_empty_text_elements(self, root: _Element) -> None:
        for tag in ("note", "title", "subTitle", "abstract"):
            remove_all(
                [element for element in root.iter(q(tag)) if not element.text]
            )
        for resource_type in list(root.iter(q("typeOfResource"))):
            if not resource_type.text and not (
                resource_type.get("manuscript") or resource_type.get("collection")
            ):
                remove(resource_type)
        for title_info in list(root.iter(q("titleInfo"))):
            if not any(isinstance(child.tag, str) for child in title_info):
                remove(title_info)

    def remove_title_types(self, root: _Element) -> None:
        for title in root.iter(q("title")):
            strip_attributes(title, "type")

    def normalize_title_punctuation(self, root: _Element) -> None:
        for title_info in root.iter(q("titleInfo")):
            if title_info.get("type") == "abbreviated":
                continue
            for title in title_info.iterfind(q("title")):
                if title.text:
                    title.text = TRAILING_TITLE_PUNCTUATION.sub("", title.text) or None

    def remove_summary_abstract_type(self, root: _Element) -> None:
        for abstract in root.iter(q("abstract")):
            if abstract.get("type") == "summary":
                del abstract.attrib["type"]

    def remove_unmatched_groups(self, root: _Element) -> None:
        """Drop group attributes that do not link at least two elements."""
        for parent in [root, *root.iter(q("relatedItem"))]:
            members: dict[tuple[str, str], list[_Element]] = defaultdict(list)
            for child in parent:
                for attribute in GROUP_ATTRIBUTES:
                    if value := child.get(attribute):
                        members[(attribute, value)].append(child)
            for (attribute, _), elements in members.items():
                if attribute == "altRepGroup":
                    matched = (
                        len(elements) > 1 and len({e.tag for e in elements}) == 1
                    )
                else:
                    titles = [e for e in elements if e.tag == q("titleInfo")]
                    names = [e for e in elements if e.tag == q("name")]
                    matched = (
                        len(titles) == 1
                        and titles[0].get("type") == "uniform"
                        and len(names) == 1
                        and len(names[0].findall(q("namePart"))) == 1
                    )
                if not matched:
                    for element in elements:
                        del element.attrib[attribute]

    def remove_empty_related_items(self, root: _Element) -> None:
        for related_item in reversed(list(root.iter(q("relatedItem")))):
            if not any(isinstance(child.tag, str) for child in related_item):
                remove(related_item)
