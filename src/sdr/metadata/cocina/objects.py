from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Discriminator, Field, PositiveInt, Tag, field_validator

from sdr.metadata.cocina.access import CollectionAccess, DROAccess
from sdr.metadata.cocina.administrative import DRUID_PATTERN, Administrative
from sdr.metadata.cocina.base import COCINA_VERSION, BaseCocinaModel, build
from sdr.metadata.cocina.description import Description
from sdr.metadata.cocina.identification import Identification
from sdr.metadata.cocina.structural import AgreementStructural, DROStructural
from sdr.metadata.cocina.vocab import ObjectType


class _RepositoryObjectBase(BaseCocinaModel):
    cocina_version: str = COCINA_VERSION
    external_identifier: str = Field(pattern=DRUID_PATTERN)
    label: str
    version: PositiveInt = 1
    administrative: Administrative


class DRO(_RepositoryObjectBase):
    type: ObjectType
    access: DROAccess = DROAccess()
    description: Description
    identification: Identification = Identification()
    structural: DROStructural = DROStructural()

    @field_validator("type")
    @classmethod
    def validate_item_type(cls, v: ObjectType) -> ObjectType:
        if not v.is_item:
            raise ValueError(f"{v} is not an item type")
        return v


class Collection(_RepositoryObjectBase):
    type: Literal[ObjectType.collection] = ObjectType.collection
    access: CollectionAccess = CollectionAccess()
    description: Description
    identification: Identification = Identification()


class AdminPolicy(_RepositoryObjectBase):
    type: Literal[ObjectType.admin_policy] = ObjectType.admin_policy
    description: Description | None = None


class Agreement(_RepositoryObjectBase):
    type: Literal[ObjectType.agreement] = ObjectType.agreement
    access: DROAccess = DROAccess()
    description: Description
    identification: Identification = Identification()
    structural: AgreementStructural = AgreementStructural()


def _object_tag(value: Any) -> str:
    object_type = (
        value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    )
    match object_type:
        case ObjectType.collection:
            return "collection"
        case ObjectType.admin_policy:
            return "admin_policy"
        case ObjectType.agreement:
            return "agreement"
        case _:
            return "dro"


RepositoryObject = Annotated[
    Annotated[DRO, Tag("dro")]
    | Annotated[Collection, Tag("collection")]
    | Annotated[AdminPolicy, Tag("admin_policy")]
    | Annotated[Agreement, Tag("agreement")],
    Discriminator(_object_tag),
]


def build_object(
    props: dict[str, Any], *, max_depth: int | None = None
) -> DRO | Collection | AdminPolicy | Agreement:
    """Build whichever object type ``props["type"]`` names.

    :raise SchemaViolation: If required fields are missing or a closed
        vocabulary holds an unlisted value.
    """
    return build(RepositoryObject, props, max_depth=max_depth)  # type: ignore[no-any-return]
