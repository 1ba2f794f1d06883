from __future__ import annotations

from datetime import datetime
from typing import Literal, Self

from pydantic import model_validator

from sdr.metadata.cocina.base import BaseCocinaModel
from sdr.metadata.cocina.vocab import Download, LocationCode, View


class _RightsShape(BaseCocinaModel):
    """Consistency rules shared by object, file and embargo access."""

    view: View = View.dark
    download: Download = Download.none
    location: LocationCode | None = None

    @model_validator(mode="after")
    def check_consistency(self) -> Self:
        if (
            self.view == View.location_based or self.download == Download.location_based
        ) and self.location is None:
            raise ValueError("location is required for location-based access")
        if self.view in (View.dark, View.citation_only) and self.download != Download.none:
            raise ValueError(f"download must be none when view is {self.view}")
        if self.download == Download.world and self.view != View.world:
            raise ValueError("world download requires world view")
        if self.download == Download.stanford and self.view not in (
            View.world,
            View.stanford,
        ):
            raise ValueError("stanford download requires world or stanford view")
        return self


class Embargo(_RightsShape):
    release_date: datetime
    use_and_reproduction_statement: str | None = None


class FileAccess(_RightsShape):
    controlled_digital_lending: bool = False


class DROAccess(_RightsShape):
    controlled_digital_lending: bool = False
    embargo: Embargo | None = None
    use_and_reproduction_statement: str | None = None
    copyright: str | None = None
    license: str | None = None

    @model_validator(mode="after")
    def check_lending(self) -> Self:
        if self.controlled_digital_lending and (
            self.view != View.stanford or self.download != Download.none
        ):
            raise ValueError(
                "controlled digital lending requires stanford view and no download"
            )
        return self

    def file_access(self) -> FileAccess:
        """The access a file inherits when it has no rules of its own."""
        return FileAccess(
            view=self.view,
            download=self.download,
            location=self.location,
            controlled_digital_lending=self.controlled_digital_lending,
        )


class CollectionAccess(BaseCocinaModel):
    view: Literal[View.world, View.dark] = View.dark
    use_and_reproduction_statement: str | None = None
    copyright: str | None = None
    license: str | None = None
