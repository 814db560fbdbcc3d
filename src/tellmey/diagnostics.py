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

"""Diagnostic sink used by the lenient assertion paths.

Lenient helpers never raise on a failed assertion. They hand the failure
message to a *sink*: any callable accepting a single string. Resolution order
is the ``sink=`` argument of the call, then the sink installed with
:func:`install_diagnostic_sink` (or scoped with :func:`diagnostic_sink`), then
:func:`log_sink`, which emits a WARNING through the structured logger.

A sink that raises does not change the validation outcome; the exception is
logged under the ``tellmey.sink.failed`` event and processing continues.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from .logging import StructuredLogger, get_logger
from .types import DiagnosticSink

logger: StructuredLogger = get_logger(__name__, context={"component": "diagnostics"})

_installed_sink: DiagnosticSink | None = None


def log_sink(message: str) -> None:
    """Default sink: log ``message`` at WARNING level."""

    logger.warning(message, event="tellmey.assertion.reported")


def install_diagnostic_sink(sink: DiagnosticSink) -> None:
    """Route lenient failures to ``sink`` for the whole process."""

    global _installed_sink
    _installed_sink = sink


def reset_diagnostic_sink() -> None:
    """Restore the default logging sink."""

    global _installed_sink
    _installed_sink = None


def current_diagnostic_sink() -> DiagnosticSink:
    return _installed_sink if _installed_sink is not None else log_sink


@contextmanager
def diagnostic_sink(sink: DiagnosticSink) -> Iterator[None]:
    """Temporarily install ``sink`` inside a ``with`` block."""

    global _installed_sink
    previous = _installed_sink
    _installed_sink = sink
    try:
        yield
    finally:
        _installed_sink = previous


def report(message: str, *, sink: DiagnosticSink | None = None) -> None:
    """Deliver ``message`` to the resolved sink without letting it raise."""

    target = sink if sink is not None else current_diagnostic_sink()
    try:
        target(message)
    except Exception:
        logger.exception(
            "Diagnostic sink raised while reporting an assertion failure.",
            event="tellmey.sink.failed",
            context={
                "sink": getattr(target, "__qualname__", repr(target)),
                "assertion": message,
            },
        )


__all__ = [
    "current_diagnostic_sink",
    "diagnostic_sink",
    "install_diagnostic_sink",
    "log_sink",
    "report",
    "reset_diagnostic_sink",
]
