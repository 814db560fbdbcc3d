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

"""Recursive descriptor matching.

:func:`match` never raises for a value that fails its descriptor. Outcomes are
returned as :class:`Accepted` or :class:`Rejected` so that lenient callers can
report and continue while strict callers convert the rejection to a
:class:`~tellmey.errors.TypeAssertionError` at their own boundary.

Descriptors are dispatched on shape:

- ``list``/``tuple``: a homogeneous array (one entry) or positional tuple
  (several entries).
- ``Mapping``: required keys mapped to sub-descriptors. Weak-reference
  mappings are not objects.
- anything else: a tag nickname looked up in :mod:`tellmey.tags`.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .errors import TypeAssertionError
from .tags import is_object, is_sequence, lookup, runtime_tag
from .types import Descriptor, ObjectDescriptor, SequenceDescriptor


@dataclass(frozen=True, slots=True)
class Accepted:
    """The value satisfied its descriptor.

    ``value`` is the input itself for tag and object descriptors and a rebuilt
    container for sequence descriptors.
    """

    value: object

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    """The value failed its descriptor; ``message`` carries the location trail."""

    message: str

    @property
    def ok(self) -> bool:
        return False

    def prefixed(self, context: str) -> Rejected:
        """Return a rejection with ``context`` prepended to the trail."""

        return Rejected(f"{context}: {self.message}")

    def error(self) -> TypeAssertionError:
        return TypeAssertionError(self.message)


type MatchResult = Accepted | Rejected


def match(value: object, descriptor: Descriptor) -> MatchResult:
    """Check ``value`` against ``descriptor`` and return the outcome.

    Example::

        >>> match([1, 2], ["int"])
        Accepted(value=[1, 2])
        >>> match({"a": "x"}, {"a": "int"})
        Rejected(message="In key 'a': Expected Integer, got str")
    """

    if is_sequence(descriptor):
        return _match_sequence(value, descriptor)  # pyright: ignore[reportArgumentType]
    if isinstance(descriptor, Mapping):
        return _match_object(value, descriptor)
    return _match_tag(value, descriptor)


def _match_sequence(value: object, descriptor: SequenceDescriptor) -> MatchResult:
    if not is_sequence(value):
        return Rejected(f"Expected Array, got {runtime_tag(value)}")
    if not descriptor:
        return Rejected("Empty type sequence: provide at least one type")

    items: Sequence[object] = value  # pyright: ignore[reportAssignmentType]
    positional = len(descriptor) > 1
    checked: list[object] = []
    for index, item in enumerate(items):
        if positional and index >= len(descriptor):
            checked.append(item)
            continue
        result = match(item, descriptor[index] if positional else descriptor[0])
        if isinstance(result, Rejected):
            return result.prefixed(f"At index {index}")
        checked.append(result.value)

    if isinstance(value, tuple):
        return Accepted(tuple(checked))
    return Accepted(checked)


def _match_object(value: object, descriptor: ObjectDescriptor) -> MatchResult:
    if not is_object(value):
        return Rejected(f"Expected Object, got {runtime_tag(value)}")

    mapping: Mapping[object, object] = value  # pyright: ignore[reportAssignmentType]
    for key, expected in descriptor.items():
        if key not in mapping:
            return Rejected(f"Missing key '{key}' in object")
        result = match(mapping[key], expected)
        if isinstance(result, Rejected):
            return result.prefixed(f"In key '{key}'")
    return Accepted(value)


def _match_tag(value: object, descriptor: object) -> MatchResult:
    kind = lookup(descriptor)
    if kind is None:
        return Rejected(
            f"Unknown assertion: {descriptor} (or, needs to be a string). "
            "Run list_recognized_tags() for accepted tags."
        )
    if not kind.accepts(value):
        return Rejected(f"Expected {kind.label}, got {runtime_tag(value)}")
    return Accepted(value)


__all__ = [
    "Accepted",
    "MatchResult",
    "Rejected",
    "match",
]
