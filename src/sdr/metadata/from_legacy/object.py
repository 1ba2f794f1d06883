from __future__ import annotations

from typing import Any

from sdr.metadata.cocina.base import build
from sdr.metadata.cocina.description import Description
from sdr.metadata.cocina.objects import DRO, AdminPolicy, Agreement, Collection
from sdr.metadata.cocina.structural import AgreementStructural
from sdr.metadata.configuration import MappingConfiguration, default_configuration
from sdr.metadata.core.exceptions import UnmappableDocument
from sdr.metadata.from_legacy.access import RightsMapper
from sdr.metadata.from_legacy.descriptive.builder import DescriptiveMapper
from sdr.metadata.from_legacy.identity import IdentityMapper
from sdr.metadata.from_legacy.structural import ContentMapper
from sdr.metadata.id_generator import IdGenerator
from sdr.metadata.legacy.object import Datastream, LegacyObject
from sdr.metadata.service.logging.configuration import LogLevel
from sdr.metadata.util.log import LoggerMixin, log_elapsed_time
from sdr.metadata.vocabulary import DEFAULT_VOCABULARIES, MappingVocabularies


class ObjectMapper(LoggerMixin):
    """Composes the per-datastream mappers into a complete repository object."""

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        vocabularies: MappingVocabularies | None = None,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self.config = config or default_configuration()
        self.vocabularies = vocabularies or DEFAULT_VOCABULARIES
        self.identity = IdentityMapper(self.vocabularies)
        self.rights = RightsMapper()
        self.content = ContentMapper(id_generator or IdGenerator(self.config))
        self.descriptive = DescriptiveMapper(self.config, self.vocabularies)

    def _description(
        self, legacy: LegacyObject, label: str, *, required: bool = True
    ) -> Description | None:
        if (root := legacy.datastream(Datastream.descriptive)) is not None:
            return self.descriptive.build(root, legacy.pid)
        if not required:
            return None
        if label:
            # Objects registered without descriptive metadata are described
            # by their label alone.
            return Description(title=[{"value": label}])
        raise UnmappableDocument(
            "Object has neither descMetadata nor a label",
            object_id=legacy.pid,
            element=Datastream.descriptive,
        )

    @log_elapsed_time(log_level=LogLevel.debug, message_prefix="ObjectMapper.build")
    def build(self, legacy: LegacyObject) -> DRO | Collection | AdminPolicy | Agreement:
        """Map every datastream of a legacy object into one canonical object.

        :raise UnmappableDocument: If a required discriminator is missing or
            holds an unknown value.
        :raise SchemaViolation: If the mapped object is not valid.
        """
        identity = legacy.datastream(Datastream.identity)
        if identity is None:
            raise UnmappableDocument(
                "Object has no identityMetadata",
                object_id=legacy.pid,
                element=Datastream.identity,
            )
        if legacy.admin_policy_id is None:
            raise UnmappableDocument(
                "Object is not governed by an admin policy", object_id=legacy.pid
            )

        kind = self.identity.object_kind(identity, legacy.pid)
        label = self.identity.label(identity) or legacy.label
        props: dict[str, Any] = {
            "external_identifier": legacy.pid,
            "label": label,
            "version": legacy.version,
            "administrative": {
                "has_admin_policy": legacy.admin_policy_id,
                "has_agreement": legacy.agreement_id,
                "release_tags": self.identity.release_tags(identity),
            },
        }
        rights = legacy.datastream(Datastream.rights)
        embargo = legacy.datastream(Datastream.embargo)

        match kind:
            case "adminPolicy":
                props["description"] = self._description(legacy, label, required=False)
                return build(AdminPolicy, props, max_depth=self.config.max_value_depth)
            case "collection":
                props |= {
                    "access": self.rights.collection_access(rights),
                    "description": self._description(legacy, label),
                    "identification": self.identity.identification(identity),
                }
                return build(Collection, props, max_depth=self.config.max_value_depth)
            case "agreement":
                props |= {
                    "access": self.rights.dro_access(rights, embargo),
                    "description": self._description(legacy, label),
                    "identification": self.identity.identification(identity),
                    "structural": AgreementStructural(
                        is_member_of=legacy.collection_ids
                    ),
                }
                return build(Agreement, props, max_depth=self.config.max_value_depth)

        content = legacy.datastream(Datastream.content)
        access = self.rights.dro_access(rights, embargo)
        props |= {
            "type": self.content.object_type(content, legacy.pid),
            "access": access,
            "description": self._description(legacy, label),
            "identification": self.identity.identification(identity),
            "structural": self.content.structural(
                content,
                legacy.pid,
                access=access,
                file_access=self.rights.file_access(rights),
                collection_ids=legacy.collection_ids,
            ),
        }
        return build(DRO, props, max_depth=self.config.max_value_depth)
