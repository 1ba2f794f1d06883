from __future__ import annotations

from typing import Any, Self, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from sdr.metadata.core.exceptions import SchemaViolation

COCINA_VERSION = "0.1.0"
DEFAULT_MAX_DEPTH = 16

T = TypeVar("T")


class BaseCocinaModel(BaseModel):
    """Base class for the canonical model.

    Field names are snake_case in Python and camelCase in the JSON form.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
    )

    def to_dict(self) -> dict[str, Any]:
        """The JSON-compatible form, using the camelCase field names.

        Unset scalars are left out, list fields are always present.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def build(cls, props: Any, *, max_depth: int | None = None) -> Self:
        return build(cls, props, max_depth=max_depth)


def build(model: type[T] | Any, props: Any, *, max_depth: int | None = None) -> T:
    """Validate a plain mapping into a canonical model.

    ``model`` is a model class or any type pydantic can validate, such as the
    ``RepositoryObject`` union.

    :raise SchemaViolation: If the mapping does not describe a valid model.
    """
    context = {"max_depth": max_depth or DEFAULT_MAX_DEPTH}
    try:
        return TypeAdapter(model).validate_python(props, context=context)  # type: ignore[no-any-return]
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(part) for part in error["loc"]), "msg": error["msg"]}
            for error in e.errors()
        ]
        summary = "; ".join(f"{error['loc']}: {error['msg']}" for error in errors)
        raise SchemaViolation(
            f"Invalid {getattr(model, '__name__', 'object')}: {summary}", errors
        ) from e
