from __future__ import annotations

from typing import TYPE_CHECKING

from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.legacy.mods import local_name
from sdr.metadata.normalizers.base import Normalizer
from sdr.metadata.normalizers.content import ContentNormalizer
from sdr.metadata.normalizers.identity import IdentityNormalizer
from sdr.metadata.normalizers.mods import ModsNormalizer
from sdr.metadata.normalizers.rights import EmbargoNormalizer, RightsNormalizer
from sdr.metadata.util.xmlparser import XMLParser

if TYPE_CHECKING:
    from lxml.etree import _Element, _ElementTree

    from sdr.metadata.configuration import MappingConfiguration
    from sdr.metadata.vocabulary import MappingVocabularies

NORMALIZERS: dict[str, type[Normalizer]] = {
    normalizer.ROOT_TAG: normalizer
    for normalizer in (
        IdentityNormalizer,
        RightsNormalizer,
        EmbargoNormalizer,
        ContentNormalizer,
        ModsNormalizer,
    )
}


def normalizer_for(
    root: _Element,
    object_id: str,
    *,
    config: MappingConfiguration | None = None,
    vocabularies: MappingVocabularies | None = None,
) -> Normalizer:
    """Pick the normalizer for a datastream by its root element.

    :raise UnmappableDocument: If the root element names no known datastream.
    """
    name = local_name(root.tag)
    if (normalizer := NORMALIZERS.get(name)) is None:
        raise UnmappableDocument(
            f"No normalizer for <{name}> documents", object_id=object_id, element=name
        )
    return normalizer(object_id, config=config, vocabularies=vocabularies)


def normalize(
    document: str | bytes | _Element | _ElementTree,
    object_id: str,
    *,
    config: MappingConfiguration | None = None,
    vocabularies: MappingVocabularies | None = None,
) -> _Element:
    """Normalize any legacy datastream; the document itself is not modified."""
    root = XMLParser.load_root(document)
    return normalizer_for(
        root, object_id, config=config, vocabularies=vocabularies
    ).normalize(root)
