from __future__ import annotations

from functools import cache

from pydantic import PositiveInt, field_validator
from pydantic_settings import SettingsConfigDict

from sdr.metadata.service.configuration.service_configuration import (
    ServiceConfiguration,
)


class MappingConfiguration(ServiceConfiguration):
    """Settings shared by the normalizers, mappers and the registry projector."""

    cocina_base_url: str = "https://cocina.sul.stanford.edu"
    purl_base_url: str = "https://purl.stanford.edu"
    object_creator: str = "DOR"
    mods_version: str = "3.7"
    max_value_depth: PositiveInt = 16
    datacite_publisher: str = "Stanford Digital Repository"

    model_config = SettingsConfigDict(env_prefix="SDR_MAPPING_")

    @field_validator("cocina_base_url", "purl_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("mods_version")
    @classmethod
    def validate_mods_version(cls, v: str) -> str:
        major, _, minor = v.partition(".")
        if not (major.isdigit() and minor.isdigit()):
            raise ValueError(f"Invalid MODS version: {v}. Expected e.g. '3.7'.")
        return v

    def purl(self, object_id: str) -> str:
        return f"{self.purl_base_url}/{bare_druid(object_id)}"


def bare_druid(object_id: str) -> str:
    return object_id.removeprefix("druid:")


@cache
def default_configuration() -> MappingConfiguration:
    return MappingConfiguration()
