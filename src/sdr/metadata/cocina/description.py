from __future__ import annotations

from collections.abc import Iterator
from typing import Self

from pydantic import Field, ValidationInfo, model_validator

from sdr.metadata.cocina.base import DEFAULT_MAX_DEPTH, BaseCocinaModel


def _max_depth(info: ValidationInfo) -> int:
    if isinstance(info.context, dict):
        return int(info.context.get("max_depth", DEFAULT_MAX_DEPTH))
    return DEFAULT_MAX_DEPTH


class Source(BaseCocinaModel):
    code: str | None = None
    uri: str | None = None
    value: str | None = None
    version: str | None = None


class Standard(BaseCocinaModel):
    code: str | None = None
    uri: str | None = None
    value: str | None = None


class ValueLanguage(BaseCocinaModel):
    code: str | None = None
    value: str | None = None
    uri: str | None = None
    source: Source | None = None
    value_script: DescriptiveValue | None = None


class DescriptiveValue(BaseCocinaModel):
    """One node of descriptive metadata.

    A node carries at most one of ``value``, ``structured_value``,
    ``parallel_value`` and ``grouped_value``. The three list shapes hold
    nodes of the same type, so values nest to arbitrary depth, bounded by the
    ``max_depth`` validation context.
    """

    value: str | None = None
    structured_value: list[DescriptiveValue] = []
    parallel_value: list[DescriptiveValue] = []
    grouped_value: list[DescriptiveValue] = []
    type: str | None = None
    status: str | None = None
    code: str | None = None
    uri: str | None = None
    standard: Standard | None = None
    encoding: Source | None = None
    source: Source | None = None
    display_label: str | None = None
    qualifier: str | None = None
    note: list[DescriptiveValue] = []
    value_language: ValueLanguage | None = None
    identifier: list[DescriptiveValue] = []

    @model_validator(mode="after")
    def check_shape(self, info: ValidationInfo) -> Self:
        shapes = [
            name
            for name, present in (
                ("value", self.value is not None),
                ("structuredValue", bool(self.structured_value)),
                ("parallelValue", bool(self.parallel_value)),
                ("groupedValue", bool(self.grouped_value)),
            )
            if present
        ]
        if len(shapes) > 1:
            raise ValueError(f"{' and '.join(shapes)} are mutually exclusive")
        if (depth := self.depth()) > (limit := _max_depth(info)):
            raise ValueError(f"value nesting depth {depth} exceeds {limit}")
        return self

    def children(self) -> Iterator[DescriptiveValue]:
        yield from self.structured_value
        yield from self.parallel_value
        yield from self.grouped_value

    def depth(self) -> int:
        # Iterative so a pathological tree cannot exhaust the stack.
        deepest = 0
        stack: list[tuple[DescriptiveValue, int]] = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children())
        return deepest

    def first_value(self) -> str | None:
        """The first plain value found in document order."""
        if self.value is not None:
            return self.value
        for child in self.children():
            if (found := child.first_value()) is not None:
                return found
        return None


class Contributor(BaseCocinaModel):
    name: list[DescriptiveValue] = []
    type: str | None = None
    status: str | None = None
    role: list[DescriptiveValue] = []
    identifier: list[DescriptiveValue] = []
    note: list[DescriptiveValue] = []
    affiliation: list[DescriptiveValue] = []


class Event(BaseCocinaModel):
    type: str | None = None
    display_label: str | None = None
    date: list[DescriptiveValue] = []
    contributor: list[Contributor] = []
    location: list[DescriptiveValue] = []
    note: list[DescriptiveValue] = []
    value_language: ValueLanguage | None = None
    parallel_event: list[Event] = []


class Language(BaseCocinaModel):
    code: str | None = None
    value: str | None = None
    uri: str | None = None
    source: Source | None = None
    script: DescriptiveValue | None = None
    status: str | None = None
    display_label: str | None = None


class DescriptiveAccess(BaseCocinaModel):
    url: list[DescriptiveValue] = []
    physical_location: list[DescriptiveValue] = []
    access_contact: list[DescriptiveValue] = []
    note: list[DescriptiveValue] = []


class AdminMetadata(BaseCocinaModel):
    contributor: list[Contributor] = []
    event: list[Event] = []
    language: list[Language] = []
    note: list[DescriptiveValue] = []
    metadata_standard: list[DescriptiveValue] = []
    identifier: list[DescriptiveValue] = []


class _DescriptiveResource(BaseCocinaModel):
    contributor: list[Contributor] = []
    event: list[Event] = []
    form: list[DescriptiveValue] = []
    language: list[Language] = []
    note: list[DescriptiveValue] = []
    identifier: list[DescriptiveValue] = []
    subject: list[DescriptiveValue] = []
    access: DescriptiveAccess | None = None
    admin_metadata: AdminMetadata | None = None
    purl: str | None = None


class RelatedResource(_DescriptiveResource):
    type: str | None = None
    status: str | None = None
    display_label: str | None = None
    title: list[DescriptiveValue] = []
    related_resource: list[RelatedResource] = []

    @model_validator(mode="after")
    def check_nesting(self, info: ValidationInfo) -> Self:
        depth, stack = 0, [(self, 1)]
        while stack:
            node, level = stack.pop()
            depth = max(depth, level)
            stack.extend((child, level + 1) for child in node.related_resource)
        if depth > (limit := _max_depth(info)):
            raise ValueError(f"related resource nesting depth {depth} exceeds {limit}")
        return self


class Description(_DescriptiveResource):
    title: list[DescriptiveValue] = Field(min_length=1)
    related_resource: list[RelatedResource] = []


ValueLanguage.model_rebuild()
