from __future__ import annotations

from pydantic import Field

from sdr.metadata.cocina.base import BaseCocinaModel


class CatalogLink(BaseCocinaModel):
    catalog: str
    catalog_record_id: str
    refresh: bool = False

    @property
    def is_previous(self) -> bool:
        return self.catalog.startswith("previous ")


class Identification(BaseCocinaModel):
    source_id: str | None = Field(default=None, pattern=r"^.+:.+$")
    catalog_links: list[CatalogLink] = []
    barcode: str | None = None
    doi: str | None = None
