from __future__ import annotations

import logging
import socket
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from sdr.metadata.service.logging.configuration import (
    LoggingConfiguration,
    LogLevel,
)
from sdr.metadata.util.datetime_helpers import from_timestamp
from sdr.metadata.util.json import json_serializer


class JSONFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__()
        self.hostname = socket.getfqdn()
        self.main_thread_id = threading.main_thread().ident

    @staticmethod
    def _is_json_serializable(v: Any) -> bool:
        try:
            json_serializer(v)
            return True
        except (TypeError, ValueError):
            return False

    def format(self, record: logging.LogRecord) -> str:
        def ensure_str(s: Any) -> Any:
            """Ensure that unicode strings are used for a record's message.
            We don't want to try to interpolate an incompatible byte type; it
            could lead to a UnicodeDecodeError.
            """
            if isinstance(s, bytes):
                s = s.decode("utf-8")
            return s

        message = ensure_str(record.msg)
        if record.args:
            record_args: tuple[Any, ...] | dict[str, Any] | None = None
            if isinstance(record.args, Mapping):
                record_args = {
                    ensure_str(k): ensure_str(v) for k, v in record.args.items()
                }
            elif isinstance(record.args, Sequence):
                record_args = tuple(ensure_str(arg) for arg in record.args)

            if record_args is not None:
                try:
                    message = message % record_args
                except Exception as e:
                    # A broken log call must not break the mapping that
                    # emitted it, but the problem still has to be visible.
                    message = (
                        "Log message could not be formatted. Exception: %r. Original message: message=%r args=%r"
                        % (e, message, record_args)
                    )
        data: dict[str, Any] = dict(
            host=self.hostname,
            name=record.name,
            level=record.levelname,
            filename=record.filename,
            message=message,
            timestamp=from_timestamp(record.created).isoformat(),
        )
        if record.exc_info:
            data["traceback"] = self.formatException(record.exc_info)
        if record.process:
            data["process"] = record.process
        if record.thread and record.thread != self.main_thread_id:
            data["thread"] = record.thread
        if record.stack_info:
            data["stack"] = self.formatStack(record.stack_info)

        # Include any custom ('sdr_' prefixed) attributes that have been added to
        # the LogRecord in our json output with the 'sdr_' prefix removed.
        for key, value in record.__dict__.items():
            if (
                key != (log_data_key := key.removeprefix("sdr_"))
                and value is not None
                and self._is_json_serializable(value)
                and log_data_key not in data
            ):
                data[log_data_key] = value

        return json_serializer(data)


def create_stream_handler(formatter: logging.Formatter) -> logging.Handler:
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    return stream_handler


def setup_logging(
    level: LogLevel,
    verbose_level: LogLevel,
    stream: logging.Handler,
) -> None:
    # Set up the root logger
    logging.basicConfig(force=True, level=level.value, handlers=[stream])

    # Verbose third-party loggers get their own level.
    for logger in (
        "urllib3.connectionpool",
        "httpx",
    ):
        logging.getLogger(logger).setLevel(verbose_level.value)


def configure_logging(config: LoggingConfiguration | None = None) -> None:
    """Set up logging from the SDR_LOG_* settings."""
    config = config or LoggingConfiguration()
    formatter = JSONFormatter() if config.json_format else logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    setup_logging(config.level, config.verbose_level, create_stream_handler(formatter))
