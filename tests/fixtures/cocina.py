from __future__ import annotations

from typing import Any

import pytest

from sdr.metadata.cocina.objects import DRO, Collection, build_object
from sdr.metadata.cocina.vocab import ObjectType

ADMIN_POLICY_ID = "druid:dd999df4567"
COLLECTION_ID = "druid:xz456jk0987"


class CocinaFixture:
    """Builds canonical objects from partial attribute maps."""

    def __init__(self, object_id: str = "druid:cc123dd1234") -> None:
        self.object_id = object_id

    def props(self, **overrides: Any) -> dict[str, Any]:
        props: dict[str, Any] = {
            "type": ObjectType.object,
            "external_identifier": self.object_id,
            "label": "This is my label",
            "version": 1,
            "administrative": {"has_admin_policy": ADMIN_POLICY_ID},
            "description": {"title": [{"value": "title"}]},
            "identification": {"source_id": "cats:dogs"},
        }
        props.update(overrides)
        return props

    def dro(self, **overrides: Any) -> DRO:
        obj = build_object(self.props(**overrides))
        assert isinstance(obj, DRO)
        return obj

    def dro_with_description(
        self, description: dict[str, Any], **overrides: Any
    ) -> DRO:
        description = {"title": [{"value": "title"}]} | description
        return self.dro(description=description, **overrides)

    def collection(self, **overrides: Any) -> Collection:
        props = self.props(type=ObjectType.collection, **overrides)
        obj = build_object(props)
        assert isinstance(obj, Collection)
        return obj


@pytest.fixture()
def cocina() -> CocinaFixture:
    return CocinaFixture()
