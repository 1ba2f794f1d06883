from __future__ import annotations

from datetime import datetime
from typing import Any

from dateutil import parser as dateparser

from sdr.metadata.cocina.description import DescriptiveValue
from sdr.metadata.cocina.description import Event as CocinaEvent
from sdr.metadata.cocina.objects import DRO
from sdr.metadata.util.log import LoggerMixin

DEFAULT_DATE = datetime(2000, 1, 1)


def year_of(value: str | None) -> str | None:
    if not value:
        return None
    try:
        return str(dateparser.parse(value, default=DEFAULT_DATE).year)
    except (ValueError, OverflowError):
        return None


def date_value(date: DescriptiveValue) -> str | None:
    """A single date, or a ``start/end`` range from a structured date."""
    if date.value is not None:
        return date.value
    parts = {part.type: part.value for part in date.structured_value}
    start, end = parts.get("start"), parts.get("end")
    if start and end:
        return f"{start}/{end}"
    return start or end or date.first_value()


def qualifier_of(date: DescriptiveValue) -> str | None:
    if date.qualifier:
        return date.qualifier
    for part in date.structured_value:
        if part.qualifier:
            return part.qualifier
    return None


class Event(LoggerMixin):
    """Publication year and dates of an item, from its events and embargo.

    Content becomes public when it is deposited, or when its embargo ends.
    """

    def __init__(self, item: DRO) -> None:
        self.item = item

    @property
    def embargo_release_date(self) -> datetime | None:
        embargo = self.item.access.embargo
        return embargo.release_date if embargo is not None else None

    def event(self, event_type: str) -> CocinaEvent | None:
        for event in self.item.description.event:
            if event.type == event_type:
                return event
        return None

    def event_date(
        self, event_type: str, date_type: str | None = None
    ) -> DescriptiveValue | None:
        """A date of the given type from the first event of ``event_type``."""
        if (event := self.event(event_type)) is None:
            return None
        for date in event.date:
            if date_type is None or date.type == date_type:
                return date
        return None

    def _value(self, event_type: str, date_type: str | None = None) -> str | None:
        date = self.event_date(event_type, date_type)
        return date_value(date) if date is not None else None

    def pub_year(self) -> str | None:
        if (release_date := self.embargo_release_date) is not None:
            return str(release_date.year)
        if year := year_of(self._value("deposit", "publication")):
            return year
        return year_of(self._value("publication", "publication")) or year_of(
            self._value("publication")
        )

    def submitted(self) -> str | None:
        # With an embargo the deposit event keeps the deposit date apart from
        # the (future) publication date.
        date_type = "deposit" if self.embargo_release_date else "publication"
        return self._value("deposit", date_type) or self._value("deposit")

    def dates(self) -> list[dict[str, Any]]:
        dates: list[dict[str, Any]] = []
        if submitted := self.submitted():
            dates.append({"date": submitted, "dateType": "Submitted"})
        elif not self.embargo_release_date and (
            published := self._value("publication")
        ):
            dates.append({"date": published, "dateType": "Submitted"})
        if issued := self._value("publication", "publication"):
            dates.append({"date": issued, "dateType": "Issued"})
        if (release_date := self.embargo_release_date) is not None:
            dates.append(
                {"date": release_date.date().isoformat(), "dateType": "Available"}
            )
        if (created := self.event_date("creation", "creation")) is not None:
            if value := date_value(created):
                entry = {"date": value, "dateType": "Created"}
                if qualifier := qualifier_of(created):
                    entry["dateInformation"] = qualifier
                dates.append(entry)
        return dates
