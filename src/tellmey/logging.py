# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Structured logging for :mod:`tellmey`.

Every record emitted by the library carries two extra attributes:

- ``event``: a dotted event name such as ``tellmey.assertion.reported``.
- ``context``: a mapping with the logger's bound fields merged with any
  per-call ``context=`` payload.

The library never configures logging on import. Applications that want the
default stderr output call :func:`configure_logging`, optionally steered by the
``TELLMEY_LOG_LEVEL`` and ``TELLMEY_LOG_FORMAT`` (``text`` or ``json``)
environment variables.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from collections.abc import Mapping, MutableMapping
from datetime import UTC, datetime
from typing import Any, cast, override

__all__ = [
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]

_LOG_LEVEL_ENV = "TELLMEY_LOG_LEVEL"
_LOG_FORMAT_ENV = "TELLMEY_LOG_FORMAT"


class StructuredLogger(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter that requires ``event=`` and gathers fields into ``context``."""

    def __init__(
        self,
        logger: logging.Logger,
        *,
        context: Mapping[str, object] | None = None,
    ) -> None:
        super().__init__(logger, dict(context or {}))

    @property
    def context(self) -> dict[str, object]:
        return dict(cast(Mapping[str, object], self.extra))

    def bind(self, **context: object) -> StructuredLogger:
        """Return a sibling adapter with ``context`` added to the bound fields."""

        return type(self)(self.logger, context={**self.context, **context})

    @override
    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        event = kwargs.pop("event", None)
        inline = kwargs.pop("context", None)
        extra = kwargs.get("extra") or {}
        if not isinstance(extra, Mapping):
            raise TypeError("extra must be a mapping when provided.")
        if inline is not None and not isinstance(inline, Mapping):
            raise TypeError("context must be a mapping when provided.")

        fields = dict(cast(Mapping[str, object], extra))
        if event is None:
            event = fields.pop("event", None)
        else:
            fields.pop("event", None)
        if not isinstance(event, str):
            raise TypeError("Structured logs require an 'event' field.")

        payload = self.context
        payload.update(fields)
        if inline is not None:
            payload.update(cast(Mapping[str, object], inline))
        kwargs["extra"] = {"event": event, "context": payload}
        return msg, kwargs


def get_logger(
    name: str,
    *,
    logger_override: logging.Logger
    | logging.LoggerAdapter[logging.Logger]
    | None = None,
    context: Mapping[str, object] | None = None,
) -> StructuredLogger:
    """Return a :class:`StructuredLogger` for the standard logger ``name``.

    ``logger_override`` replaces the named logger. When it is an adapter, its
    bound ``extra`` fields are kept and ``context`` is layered on top.
    """

    if logger_override is None:
        return StructuredLogger(logging.getLogger(name), context=context)
    if isinstance(logger_override, logging.Logger):
        return StructuredLogger(logger_override, context=context)

    inherited = logger_override.extra
    base: logging.Logger | logging.LoggerAdapter[logging.Logger] = logger_override
    while isinstance(base, logging.LoggerAdapter):
        base = cast(logging.LoggerAdapter[logging.Logger], base).logger
    merged: dict[str, object] = {}
    if isinstance(inherited, Mapping):
        merged.update(cast(Mapping[str, object], inherited))
    merged.update(context or {})
    return StructuredLogger(base, context=merged)


def configure_logging(
    *,
    level: int | str | None = None,
    json_mode: bool | None = None,
    env: Mapping[str, str] | None = None,
    force: bool = False,
) -> None:
    """Install a stderr handler on the root logger.

    Explicit arguments win over the environment. When the root logger already
    has handlers the host application owns the output, so only the level is
    adjusted unless ``force=True`` is passed.
    """

    env = os.environ if env is None else env
    if level is None:
        level = env.get(_LOG_LEVEL_ENV) or None
    resolved_level = _coerce_level(level)
    if json_mode is None:
        json_mode = env.get(_LOG_FORMAT_ENV, "text").strip().lower() == "json"

    root = logging.getLogger()
    if root.handlers and not force:
        root.setLevel(resolved_level)
        return

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "format": "%(asctime)s %(levelname)s %(name)s [%(event)s] %(message)s %(context)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                    "defaults": {"event": "-", "context": ""},
                },
                "json": {"()": "tellmey.logging._JsonFormatter"},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "json" if json_mode else "text",
                }
            },
            "root": {"handlers": ["stderr"], "level": resolved_level},
        }
    )


class _JsonFormatter(logging.Formatter):
    """Render records as one compact JSON object per line."""

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attribute in ("event", "context"):
            value = getattr(record, attribute, None)
            if value:
                payload[attribute] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=repr, separators=(",", ":"))


def _coerce_level(level: int | str | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        raise TypeError(f"Unknown log level: {level!r}")
    return resolved
