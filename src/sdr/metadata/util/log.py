import functools
import logging
import time
from collections.abc import Callable, Generator, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, TypeVar

from typing_extensions import ParamSpec

from sdr.metadata.service.logging.configuration import LogLevel

if TYPE_CHECKING:
    LoggerAdapterType = logging.LoggerAdapter[logging.Logger]
else:
    LoggerAdapterType = logging.LoggerAdapter

P = ParamSpec("P")
T = TypeVar("T")


@contextmanager
def elapsed_time_logging(
    *,
    log_method: Callable[[str], None],
    message_prefix: str | None = None,
    skip_start: bool = False,
) -> Generator[None, None, None]:
    """Log how long the enclosed block took, and whether it raised.

    :param log_method: Called with each message, e.g. ``logger.debug``.
    :param message_prefix: Prepended to every message.
    :param skip_start: Only log on completion.
    """
    prefix = f"{message_prefix}: " if message_prefix else ""
    if not skip_start:
        log_method(f"{prefix}Starting...")
    outcome = "Completed"
    tic = time.perf_counter()
    try:
        yield
    except Exception as e:
        outcome = f"Failed (raised {e.__class__.__name__})"
        raise
    finally:
        elapsed = time.perf_counter() - tic
        log_method(f"{prefix}{outcome}. (elapsed time: {elapsed:0.4f} seconds)")


def log_elapsed_time(
    *,
    log_level: LogLevel,
    message_prefix: str | None = None,
    skip_start: bool = False,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator version of :func:`elapsed_time_logging` for LoggerMixin methods.

    The first argument of the decorated callable, a class or an instance,
    supplies the logger.
    """

    def outer(fn: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if not args or not hasattr(args[0], "logger"):
                raise RuntimeError(
                    "Decorator must be applied to a method of a LoggerMixin or a subclass of LoggerMixin."
                )
            log_method = getattr(args[0].logger(), log_level.name)
            with elapsed_time_logging(
                log_method=log_method,
                message_prefix=message_prefix,
                skip_start=skip_start,
            ):
                return fn(*args, **kwargs)

        return wrapper

    return outer


class LoggerMixin:
    """Mixin that adds a logger named after the module and class."""

    @classmethod
    @functools.cache
    def logger(cls) -> logging.Logger:
        # Cached so each class resolves its logger once.
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @property
    def log(self) -> logging.Logger:
        return self.logger()


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """``1 date``, ``2 dates``; pass ``plural`` for irregular words."""
    return f"{count} {singular if count == 1 else plural or singular + 's'}"


class ObjectLoggerAdapter(LoggerAdapterType):
    """Tag every message with the identifier of the object being mapped.

    The identifier is appended to the message text and is also made
    available to the JSON formatter as the ``object_id`` field.
    """

    def __init__(self, logger: logging.Logger, object_id: str | None) -> None:
        self.object_id = object_id
        super().__init__(logger, {"sdr_object_id": object_id})

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        if self.object_id is None:
            return msg, kwargs
        return f"{msg} [{self.object_id}]", kwargs

    def data_error(self, msg: str, *args: Any) -> None:
        """Report a tolerated problem with the legacy data."""
        self.warning(f"[DATA ERROR] {msg}", *args)
