"""Identifiers for the file sets and files of an object."""

from __future__ import annotations

import uuid
from collections.abc import Callable

from sdr.metadata.configuration import (
    MappingConfiguration,
    bare_druid,
    default_configuration,
)


def random_suffix() -> str:
    return str(uuid.uuid4())


class IdGenerator:
    """Normalizes historical file set and file identifiers to one shape.

    ``https://.../fileSet/bc123df4567/resource1`` and ``resource1`` both
    become ``https://.../fileSet/bc123df4567-resource1``. When no identifier
    is given a random suffix is generated; pass ``random_source`` to make
    that deterministic.
    """

    def __init__(
        self,
        config: MappingConfiguration | None = None,
        random_source: Callable[[], str] = random_suffix,
    ) -> None:
        self.config = config or default_configuration()
        self.random_source = random_source

    @property
    def file_set_base(self) -> str:
        return f"{self.config.cocina_base_url}/fileSet/"

    @property
    def file_base(self) -> str:
        return f"{self.config.cocina_base_url}/file/"

    def _collapse(self, base: str, druid: str, given: str | None) -> str:
        if not given:
            return f"{base}{druid}-{self.random_source()}"
        if given.startswith(base):
            path = given.removeprefix(base)
            if path.startswith(f"{druid}/"):
                return f"{base}{druid}-{path.removeprefix(f'{druid}/')}"
            if path.startswith(f"{druid}-"):
                return given
            return f"{base}{druid}-{path}"
        return f"{base}{druid}-{given}"

    def file_set_id(self, object_id: str, resource_id: str | None = None) -> str:
        return self._collapse(self.file_set_base, bare_druid(object_id), resource_id)

    def file_id(
        self,
        object_id: str,
        resource_id: str | None = None,
        file_id: str | None = None,
    ) -> str:
        """A file identifier, scoped by its file set.

        A fully-qualified ``file_id`` is normalized on its own; otherwise it
        is joined to the (normalized) resource identifier. Whichever of the
        two is missing gets a random suffix of its own.
        """
        druid = bare_druid(object_id)
        if file_id and file_id.startswith(self.file_base):
            return self._collapse(self.file_base, druid, file_id)
        resource_suffix = self.file_set_id(object_id, resource_id).removeprefix(
            f"{self.file_set_base}{druid}-"
        )
        filename = file_id or self.random_source()
        return f"{self.file_base}{druid}-{resource_suffix}/{filename}"
