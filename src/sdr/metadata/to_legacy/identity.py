from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from lxml import etree

from sdr.metadata.cocina.administrative import ReleaseTag
from sdr.metadata.cocina.identification import Identification
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.normalizers.base import sub_element
from sdr.metadata.util.datetime_helpers import format_utc
from sdr.metadata.util.log import LoggerMixin
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from lxml.etree import _Element


class IdentityWriter(LoggerMixin):
    """Writes identityMetadata.

    ``objectId`` and ``objectCreator`` carry nothing the canonical model
    keeps, but the legacy schema requires them, so they are always written.
    """

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES

    def write(
        self,
        object_id: str,
        object_kind: str,
        label: str | None = None,
        identification: Identification | None = None,
        release_tags: Sequence[ReleaseTag] = (),
    ) -> _Element:
        root = etree.Element("identityMetadata")
        sub_element(root, "objectId", object_id)
        sub_element(root, "objectCreator", self.config.object_creator)
        if label:
            sub_element(root, "objectLabel", label)
        sub_element(root, "objectType", object_kind)
        if identification is not None:
            self.write_identification(root, identification)
        for tag in release_tags:
            sub_element(
                root,
                "release",
                str(tag.release).lower(),
                to=tag.to,
                what=tag.what,
                when=format_utc(tag.date) if tag.date else None,
                who=tag.who,
            )
        return root

    def write_identification(
        self, root: _Element, identification: Identification
    ) -> None:
        if identification.source_id:
            source, _, value = identification.source_id.partition(":")
            sub_element(root, "sourceId", value, source=source)
        other_id_names = {
            catalog: name for name, catalog in self.vocabularies.catalog_names.items()
        }
        for link in identification.catalog_links:
            if (name := other_id_names.get(link.catalog)) is None:
                self.log.warning("No otherId name for catalog %r", link.catalog)
                continue
            sub_element(root, "otherId", link.catalog_record_id, name=name)
        if identification.barcode:
            sub_element(root, "otherId", identification.barcode, name="barcode")
