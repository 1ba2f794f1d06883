from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from sdr.metadata.cocina.access import CollectionAccess, DROAccess, FileAccess
from sdr.metadata.cocina.administrative import Administrative
from sdr.metadata.cocina.description import Description
from sdr.metadata.cocina.identification import Identification
from sdr.metadata.cocina.objects import DRO, AdminPolicy, Agreement, Collection
from sdr.metadata.cocina.structural import DROStructural
from sdr.metadata.cocina.vocab import ObjectType
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.core.exceptions import MetadataValueError
from sdr.metadata.from_legacy.access import RightsMapper
from sdr.metadata.from_legacy.identity import IdentityMapper
from sdr.metadata.from_legacy.structural import ContentMapper
from sdr.metadata.legacy.object import Datastream, LegacyObject
from sdr.metadata.service.logging.configuration import LogLevel
from sdr.metadata.to_legacy.content import ContentWriter
from sdr.metadata.to_legacy.descriptive.writer import DescriptiveWriter
from sdr.metadata.to_legacy.identity import IdentityWriter
from sdr.metadata.to_legacy.rights import RightsWriter
from sdr.metadata.util.log import LoggerMixin, log_elapsed_time
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies

if TYPE_CHECKING:
    from sdr.metadata.cocina.administrative import ReleaseTag

RepositoryObjectType = DRO | Collection | AdminPolicy | Agreement
Fragment = (
    RepositoryObjectType
    | Identification
    | Administrative
    | DROAccess
    | CollectionAccess
    | DROStructural
    | Description
)

# identityMetadata objectType for each non-item object type.
OBJECT_KINDS = {
    ObjectType.collection: "collection",
    ObjectType.admin_policy: "adminPolicy",
    ObjectType.agreement: "agreement",
}


def object_kind(object_type: ObjectType) -> str:
    return OBJECT_KINDS.get(object_type, "item")


def file_access_of(structural: DROStructural) -> dict[str, FileAccess]:
    return {
        file.filename: file.access
        for file_set in structural.contains
        for file in file_set.structural.contains
    }


class DatastreamApplier(LoggerMixin):
    """Writes canonical metadata back into a legacy object.

    A full repository object replaces every datastream it covers. Any other
    fragment touches only the datastreams (and relations) it maps to, and
    keeps what it does not carry, such as the object type and release tags
    held in identityMetadata, from the datastreams already on the object.
    """

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES
        self.identity_writer = IdentityWriter(self.config, self.vocabularies)
        self.rights_writer = RightsWriter()
        self.content_writer = ContentWriter()
        self.descriptive_writer = DescriptiveWriter(self.config, self.vocabularies)
        self.identity_mapper = IdentityMapper(self.vocabularies)
        self.rights_mapper = RightsMapper()

    @log_elapsed_time(log_level=LogLevel.debug, message_prefix="DatastreamApplier")
    def apply(self, fragment: Fragment, legacy: LegacyObject) -> LegacyObject:
        """Write ``fragment`` into ``legacy`` and return it.

        :raise MetadataValueError: If the fragment is not a kind of canonical
            metadata the legacy store holds.
        """
        match fragment:
            case DRO() | Collection() | AdminPolicy() | Agreement():
                self.apply_object(fragment, legacy)
            case Identification():
                self.apply_identification(fragment, legacy)
            case Administrative():
                self.apply_administrative(fragment, legacy)
            case DROAccess() | CollectionAccess():
                self.apply_access(fragment, legacy)
            case DROStructural():
                self.apply_structural(fragment, legacy)
            case Description():
                self.apply_description(fragment, legacy)
            case _:
                raise MetadataValueError(
                    f"Cannot apply {type(fragment).__name__} to a legacy object"
                )
        return legacy

    def apply_object(self, obj: RepositoryObjectType, legacy: LegacyObject) -> None:
        legacy.label = obj.label
        legacy.version = obj.version
        self._apply_relations(obj.administrative, legacy)
        identification = getattr(obj, "identification", None)
        self._write_identity(
            legacy,
            object_kind(obj.type),
            obj.label,
            identification,
            obj.administrative.release_tags,
        )
        if obj.description is not None:
            self.apply_description(obj.description, legacy)
        else:
            legacy.remove_datastream(Datastream.descriptive)

        match obj:
            case DRO():
                file_access = file_access_of(obj.structural)
                self._write_rights(obj.access, legacy, file_access)
                legacy.set_datastream(
                    Datastream.content,
                    self.content_writer.write(
                        obj.external_identifier, obj.type, obj.structural
                    ),
                )
                legacy.collection_ids = list(obj.structural.is_member_of)
            case Agreement():
                self._write_rights(obj.access, legacy, {})
                legacy.collection_ids = list(obj.structural.is_member_of)
            case Collection():
                self._write_rights(obj.access, legacy, {})

    def _apply_relations(
        self, administrative: Administrative, legacy: LegacyObject
    ) -> None:
        legacy.admin_policy_id = administrative.has_admin_policy
        legacy.agreement_id = administrative.has_agreement

    def _write_identity(
        self,
        legacy: LegacyObject,
        kind: str,
        label: str | None,
        identification: Identification | None,
        release_tags: list[ReleaseTag],
    ) -> None:
        legacy.set_datastream(
            Datastream.identity,
            self.identity_writer.write(
                legacy.pid,
                kind,
                label=label,
                identification=identification,
                release_tags=release_tags,
            ),
        )

    def _existing_kind(self, legacy: LegacyObject) -> str:
        identity = legacy.datastream(Datastream.identity)
        if identity is None:
            return "item"
        return self.identity_mapper.object_kind(identity, legacy.pid)

    def apply_identification(
        self, identification: Identification, legacy: LegacyObject
    ) -> None:
        identity = legacy.datastream(Datastream.identity)
        release_tags = (
            self.identity_mapper.release_tags(identity) if identity is not None else []
        )
        label = self.identity_mapper.label(identity) if identity is not None else None
        self._write_identity(
            legacy,
            self._existing_kind(legacy),
            label or legacy.label,
            identification,
            release_tags,
        )

    def apply_administrative(
        self, administrative: Administrative, legacy: LegacyObject
    ) -> None:
        self._apply_relations(administrative, legacy)
        identity = legacy.datastream(Datastream.identity)
        identification = (
            self.identity_mapper.identification(identity)
            if identity is not None
            else None
        )
        label = self.identity_mapper.label(identity) if identity is not None else None
        self._write_identity(
            legacy,
            self._existing_kind(legacy),
            label or legacy.label,
            identification,
            administrative.release_tags,
        )

    def _write_rights(
        self,
        access: DROAccess | CollectionAccess,
        legacy: LegacyObject,
        file_access: Mapping[str, FileAccess],
    ) -> None:
        legacy.set_datastream(
            Datastream.rights, self.rights_writer.write_rights(access, file_access)
        )
        if isinstance(access, CollectionAccess):
            return
        if access.embargo is None:
            legacy.remove_datastream(Datastream.embargo)
        else:
            legacy.set_datastream(
                Datastream.embargo, self.rights_writer.write_embargo(access.embargo)
            )

    def apply_access(
        self, access: DROAccess | CollectionAccess, legacy: LegacyObject
    ) -> None:
        # Per-file rules live in the same datastream; keep them.
        file_access = self.rights_mapper.file_access(
            legacy.datastream(Datastream.rights)
        )
        self._write_rights(access, legacy, file_access)

    def apply_structural(self, structural: DROStructural, legacy: LegacyObject) -> None:
        content = legacy.datastream(Datastream.content)
        object_type = ContentMapper().object_type(content, legacy.pid)
        legacy.set_datastream(
            Datastream.content,
            self.content_writer.write(legacy.pid, object_type, structural),
        )
        legacy.collection_ids = list(structural.is_member_of)
        # File access lives in rightsMetadata next to the object access.
        access = self.rights_mapper.dro_access(
            legacy.datastream(Datastream.rights),
            legacy.datastream(Datastream.embargo),
        )
        legacy.set_datastream(
            Datastream.rights,
            self.rights_writer.write_rights(access, file_access_of(structural)),
        )

    def apply_description(self, description: Description, legacy: LegacyObject) -> None:
        legacy.set_datastream(
            Datastream.descriptive,
            self.descriptive_writer.write(description, legacy.pid),
        )
