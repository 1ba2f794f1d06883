"""Validity checks for encoded dates in descriptive metadata."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from dateutil.parser import isoparse
from edtf import parse_edtf
from edtf.parser.edtf_exceptions import EDTFParseException

from sdr.metadata.cocina.description import (
    Description,
    DescriptiveValue,
    Event,
    RelatedResource,
)
from sdr.metadata.util.log import LoggerMixin, elapsed_time_logging, pluralize

EDTF = "edtf"
W3CDTF = "w3cdtf"
ISO8601 = "iso8601"
MARC = "marc"
ENCODINGS = frozenset({EDTF, W3CDTF, ISO8601, MARC})

# Long years such as "Y-20555" are valid EDTF but rejected by the parser.
EDTF_LONG_YEAR = re.compile(r"^Y-?\d{5,}$")
# Year and year-month forms that a full timestamp parse does not cover.
W3CDTF_PARTIAL = re.compile(r"^\d{4}(-(0[1-9]|1[0-2]))?$")
W3CDTF_FULL = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:\d{2}))?$"
)
# MARC 008 style: four year positions, u for unknown digits, optional
# month and day.
MARC_DATE = re.compile(r"^[\du]{4}([\du]{2}([\du]{2})?)?$")


def _valid_edtf(value: str) -> bool:
    if value == "XXXX":
        return False
    try:
        parse_edtf(value)
    except EDTFParseException:
        return EDTF_LONG_YEAR.match(value) is not None
    return True


def _valid_w3cdtf(value: str) -> bool:
    if W3CDTF_PARTIAL.match(value):
        return True
    if not W3CDTF_FULL.match(value):
        return False
    try:
        isoparse(value)
    except ValueError:
        return False
    return True


def _valid_iso8601(value: str) -> bool:
    try:
        isoparse(value)
    except ValueError:
        return False
    return True


def _valid_marc(value: str) -> bool:
    return MARC_DATE.match(value) is not None


VALIDATORS = {
    EDTF: _valid_edtf,
    W3CDTF: _valid_w3cdtf,
    ISO8601: _valid_iso8601,
    MARC: _valid_marc,
}


def is_valid(value: str | None, encoding: str | None) -> bool:
    """Whether ``value`` is a well-formed date in ``encoding``.

    Values with no encoding, or an encoding not checked here, are always
    valid.
    """
    if encoding is None or (validator := VALIDATORS.get(encoding.lower())) is None:
        return True
    if value is None or not value.strip():
        return False
    return validator(value.strip())


def encoding_of(date: DescriptiveValue) -> str | None:
    if date.encoding is None or date.encoding.code is None:
        return None
    return date.encoding.code.lower()


@dataclass(frozen=True)
class InvalidDate:
    path: str
    value: str | None
    encoding: str


@dataclass
class DateValidityReport(LoggerMixin):
    """Collects the encoded dates of a description that fail validation.

    A structured or parallel date is checked one component at a time. A
    component without an encoding of its own uses the encoding of the date
    that contains it.
    """

    object_id: str | None = None
    invalid: list[InvalidDate] = field(default_factory=list)

    @classmethod
    def for_description(
        cls, description: Description, object_id: str | None = None
    ) -> DateValidityReport:
        report = cls(object_id=object_id)
        with elapsed_time_logging(
            log_method=report.log.debug,
            message_prefix="DateValidityReport",
            skip_start=True,
        ):
            for path, date in _dates(description, "description"):
                report.check(path, date)
        if report.invalid:
            report.log.info(
                "%s: %s",
                object_id or "description",
                pluralize(len(report.invalid), "invalid date"),
            )
        return report

    @property
    def valid(self) -> bool:
        return not self.invalid

    def check(
        self, path: str, date: DescriptiveValue, inherited: str | None = None
    ) -> None:
        encoding = encoding_of(date) or inherited
        components = list(date.children())
        if components:
            for position, component in enumerate(components):
                self.check(f"{path}[{position}]", component, encoding)
            return
        if encoding in ENCODINGS and not is_valid(date.value, encoding):
            self.invalid.append(InvalidDate(path, date.value, encoding))


def _event_dates(event: Event, path: str) -> Iterator[tuple[str, DescriptiveValue]]:
    for position, date in enumerate(event.date):
        yield f"{path}.date[{position}]", date
    for position, parallel in enumerate(event.parallel_event):
        yield from _event_dates(parallel, f"{path}.parallelEvent[{position}]")


def _dates(
    resource: Description | RelatedResource, path: str
) -> Iterator[tuple[str, DescriptiveValue]]:
    for position, event in enumerate(resource.event):
        yield from _event_dates(event, f"{path}.event[{position}]")
    if resource.admin_metadata is not None:
        for position, event in enumerate(resource.admin_metadata.event):
            yield from _event_dates(event, f"{path}.adminMetadata.event[{position}]")
    for position, related in enumerate(resource.related_resource):
        yield from _dates(related, f"{path}.relatedResource[{position}]")
