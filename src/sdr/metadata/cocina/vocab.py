from __future__ import annotations

from enum import StrEnum

MODELS_BASE = "https://cocina.sul.stanford.edu/models"


class ObjectType(StrEnum):
    object = f"{MODELS_BASE}/object"
    book = f"{MODELS_BASE}/book"
    document = f"{MODELS_BASE}/document"
    geo = f"{MODELS_BASE}/geo"
    image = f"{MODELS_BASE}/image"
    manuscript = f"{MODELS_BASE}/manuscript"
    map = f"{MODELS_BASE}/map"
    media = f"{MODELS_BASE}/media"
    three_dimensional = f"{MODELS_BASE}/3d"
    webarchive_seed = f"{MODELS_BASE}/webarchive-seed"
    collection = f"{MODELS_BASE}/collection"
    admin_policy = f"{MODELS_BASE}/admin_policy"
    agreement = f"{MODELS_BASE}/agreement"

    @property
    def is_item(self) -> bool:
        return self not in (
            ObjectType.collection,
            ObjectType.admin_policy,
            ObjectType.agreement,
        )

    @property
    def short_name(self) -> str:
        return self.value.rsplit("/", 1)[-1]


class FileSetType(StrEnum):
    file = f"{MODELS_BASE}/resources/file"
    image = f"{MODELS_BASE}/resources/image"
    page = f"{MODELS_BASE}/resources/page"
    object = f"{MODELS_BASE}/resources/object"
    three_dimensional = f"{MODELS_BASE}/resources/3d"
    audio = f"{MODELS_BASE}/resources/audio"
    video = f"{MODELS_BASE}/resources/video"
    document = f"{MODELS_BASE}/resources/document"
    media = f"{MODELS_BASE}/resources/media"
    preview = f"{MODELS_BASE}/resources/preview"
    attachment = f"{MODELS_BASE}/resources/attachment"

    @property
    def short_name(self) -> str:
        return self.value.rsplit("/", 1)[-1]

    @classmethod
    def from_short_name(cls, name: str) -> FileSetType:
        return cls(f"{MODELS_BASE}/resources/{name}")


FILE_TYPE = f"{MODELS_BASE}/file"
FILE_SET_TYPE_PREFIX = f"{MODELS_BASE}/resources/"


class View(StrEnum):
    world = "world"
    stanford = "stanford"
    location_based = "location-based"
    citation_only = "citation-only"
    dark = "dark"


class Download(StrEnum):
    world = "world"
    stanford = "stanford"
    location_based = "location-based"
    none = "none"


class LocationCode(StrEnum):
    spec = "spec"
    music = "music"
    ars = "ars"
    art = "art"
    hoover = "hoover"
    m_and_m = "m&m"


class DigestType(StrEnum):
    sha1 = "sha1"
    md5 = "md5"


class ViewingDirection(StrEnum):
    left_to_right = "left-to-right"
    right_to_left = "right-to-left"


class ReleaseScope(StrEnum):
    self = "self"
    collection = "collection"
