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

"""Strict and lenient assertion helpers.

Strict helpers raise :class:`~tellmey.errors.TypeAssertionError` on the first
failure. Lenient helpers report each failure to the diagnostic sink and hand
back the original, unvalidated value in its place.

Example usage::

    from tellmey import match_all, match_one, match_one_lenient

    port = match_one(config["port"], "int")
    name, tags = match_all([(raw_name, "str"), (raw_tags, ["str"])])

    # Advisory only: logs a warning and returns ``payload`` unchanged.
    payload = match_one_lenient(payload, {"id": "int"})
"""

from __future__ import annotations

from collections.abc import Iterable

from ._matcher import Rejected, match
from .diagnostics import report
from .errors import TypeAssertionError
from .tags import runtime_tag
from .types import Descriptor, DiagnosticSink


def match_one(value: object, descriptor: Descriptor) -> object:
    """Return ``value`` validated against ``descriptor``.

    Raises:
        TypeAssertionError: If ``value`` does not satisfy ``descriptor``.
    """

    result = match(value, descriptor)
    if isinstance(result, Rejected):
        raise result.error()
    return result.value


def match_one_lenient(
    value: object,
    descriptor: Descriptor,
    *,
    sink: DiagnosticSink | None = None,
) -> object:
    """Validate ``value`` but only report failures.

    Returns the validated value on success and the original ``value`` on
    failure, after passing the failure message to ``sink`` (or the configured
    diagnostic sink).
    """

    result = match(value, descriptor)
    if isinstance(result, Rejected):
        report(result.message, sink=sink)
        return value
    return result.value


def match_all(pairs: Iterable[tuple[object, Descriptor]]) -> list[object]:
    """Validate each ``(value, descriptor)`` pair in order.

    Stops at the first failing pair.

    Raises:
        TypeAssertionError: Prefixed with ``In argument <i>`` for the failing
            pair.
    """

    checked: list[object] = []
    for index, (value, descriptor) in enumerate(pairs):
        result = match(value, descriptor)
        if isinstance(result, Rejected):
            raise result.prefixed(f"In argument {index}").error()
        checked.append(result.value)
    return checked


def match_all_lenient(
    pairs: Iterable[tuple[object, Descriptor]],
    *,
    sink: DiagnosticSink | None = None,
) -> list[object]:
    """Validate every pair, reporting each failure independently.

    The returned list always has one entry per input pair; failing pairs keep
    their original value.
    """

    checked: list[object] = []
    for index, (value, descriptor) in enumerate(pairs):
        result = match(value, descriptor)
        if isinstance(result, Rejected):
            report(result.prefixed(f"In argument {index}").message, sink=sink)
            checked.append(value)
        else:
            checked.append(result.value)
    return checked


def check_instance[T](
    value: object,
    cls: type[T] | tuple[type[T], ...],
    message: str | None = None,
) -> T:
    """Return ``value`` if it is an instance of ``cls``.

    ``cls`` may be a class or a tuple of classes, as with :func:`isinstance`.

    Intended for nominal checks against application classes; use tag
    descriptors for builtin kinds.

    Raises:
        TypeAssertionError: With ``message`` or a default describing the
            expected class and the actual runtime type.
    """

    if not isinstance(value, cls):
        raise TypeAssertionError(
            message
            or f"Expected instance of {_class_names(cls)}, got {runtime_tag(value)}"
        )
    return value


def _class_names(cls: type | tuple[type, ...]) -> str:
    if isinstance(cls, tuple):
        return " | ".join(member.__name__ for member in cls)
    return cls.__name__


__all__ = [
    "check_instance",
    "match_all",
    "match_all_lenient",
    "match_one",
    "match_one_lenient",
]
