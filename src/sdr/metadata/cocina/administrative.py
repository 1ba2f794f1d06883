from __future__ import annotations

from datetime import datetime

from pydantic import Field

from sdr.metadata.cocina.base import BaseCocinaModel
from sdr.metadata.cocina.vocab import ReleaseScope

DRUID_PATTERN = r"^druid:[b-df-hjkmnp-tv-z]{2}[0-9]{3}[b-df-hjkmnp-tv-z]{2}[0-9]{4}$"


class ReleaseTag(BaseCocinaModel):
    to: str
    what: ReleaseScope
    date: datetime | None = None
    who: str | None = None
    release: bool


class Administrative(BaseCocinaModel):
    has_admin_policy: str = Field(pattern=DRUID_PATTERN)
    has_agreement: str | None = Field(default=None, pattern=DRUID_PATTERN)
    # Kept in document order; consolidating by (to, what) is up to the caller.
    release_tags: list[ReleaseTag] = []
