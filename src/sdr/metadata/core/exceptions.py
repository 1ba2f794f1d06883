from __future__ import annotations

from typing import Any


class BaseMetadataException(Exception):
    """Base class for all Exceptions raised by the metadata mapping core."""

    def __init__(self, message: str | None = None):
        """Initializes a new instance of BaseMetadataException class

        :param message: String containing description of the exception that occurred
        """
        super().__init__(message)
        self.message = message

    def __getstate__(self) -> dict[str, Any]:
        return {"dict": self.__dict__, "args": self.args}

    def __setstate__(self, state: dict[str, Any] | None) -> None:
        # state is always a dict from __getstate__, but the signature must
        # accept None to match BaseException.__setstate__
        assert state is not None
        self.__dict__.update(state["dict"])
        self.args = state["args"]

    def __reduce__(self) -> tuple[Any, ...]:
        state = self.__getstate__()
        return self.__class__.__new__, (self.__class__,), state


class MetadataValueError(BaseMetadataException, ValueError): ...


class CannotLoadConfiguration(BaseMetadataException):
    """The settings for a component could not be loaded from the environment."""


class UnmappableDocument(BaseMetadataException):
    """A legacy datastream cannot be mapped into the canonical model.

    Raised when a required discriminator (for example the object type, or the
    root element of a datastream) is missing or holds a value outside the
    closed part of the vocabulary. This is fatal for the object being mapped.
    """

    def __init__(
        self,
        message: str,
        *,
        object_id: str | None = None,
        element: str | None = None,
    ) -> None:
        if object_id is not None:
            message = f"{object_id}: {message}"
        super().__init__(message)
        self.object_id = object_id
        self.element = element


class SchemaViolation(BaseMetadataException, ValueError):
    """A canonical model was constructed with an invalid shape."""

    def __init__(
        self, message: str, errors: list[dict[str, Any]] | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class RoundtripMismatch(BaseMetadataException):
    """
    The normalized re-serialization of a datastream differs from the
    normalized original. This is a diagnostic, it is never raised from the
    production mapping paths.
    """

    def __init__(self, object_id: str, expected: str, actual: str) -> None:
        super().__init__(f"Round-trip mismatch for {object_id}")
        self.object_id = object_id
        self.expected = expected
        self.actual = actual
