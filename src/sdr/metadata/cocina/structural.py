from __future__ import annotations

from typing import Annotated

from pydantic import Field, NonNegativeInt, PositiveInt

from sdr.metadata.cocina.access import FileAccess
from sdr.metadata.cocina.administrative import DRUID_PATTERN
from sdr.metadata.cocina.base import BaseCocinaModel
from sdr.metadata.cocina.vocab import (
    FILE_TYPE,
    DigestType,
    FileSetType,
    ViewingDirection,
)

Druid = Annotated[str, Field(pattern=DRUID_PATTERN)]


class MessageDigest(BaseCocinaModel):
    type: DigestType
    digest: str


class FileAdministrative(BaseCocinaModel):
    publish: bool = False
    sdr_preserve: bool = True
    shelve: bool = False


class Presentation(BaseCocinaModel):
    height: NonNegativeInt | None = None
    width: NonNegativeInt | None = None


class File(BaseCocinaModel):
    external_identifier: str
    type: str = FILE_TYPE
    label: str
    filename: str
    size: NonNegativeInt | None = None
    version: PositiveInt = 1
    has_mime_type: str | None = None
    use: str | None = None
    has_message_digests: list[MessageDigest] = []
    access: FileAccess = FileAccess()
    administrative: FileAdministrative = FileAdministrative()
    presentation: Presentation | None = None


class FileSetStructural(BaseCocinaModel):
    contains: list[File] = []


class FileSet(BaseCocinaModel):
    external_identifier: str
    type: FileSetType = FileSetType.file
    label: str = ""
    version: PositiveInt = 1
    structural: FileSetStructural = FileSetStructural()


class MemberOrder(BaseCocinaModel):
    viewing_direction: ViewingDirection | None = None
    members: list[str] = []


class DROStructural(BaseCocinaModel):
    contains: list[FileSet] = []
    has_member_orders: list[MemberOrder] = []
    is_member_of: list[Druid] = []


class AgreementStructural(BaseCocinaModel):
    """Agreements may belong to collections but hold no file sets."""

    is_member_of: list[Druid] = []

