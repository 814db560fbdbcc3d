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

"""Static registry of recognized tag descriptors.

Each tag is a short nickname (``"str"``, ``"int"``, ``"f64arr"`` ...) mapped to
a :class:`Kind`: the label used in failure messages and the predicate deciding
whether a runtime value belongs to that kind.

The registry is closed. It is built once at import time, exposed read-only,
and unknown nicknames are reported as failures by the matcher rather than
treated as an extension point::

    from tellmey.tags import list_recognized_tags, lookup

    assert "int" in list_recognized_tags()
    assert lookup("int").accepts(3)
"""

from __future__ import annotations

import inspect
import math
import re
import weakref
from array import array
from collections.abc import Callable, Mapping
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import date
from enum import Enum
from types import MappingProxyType

_SIGNED_TYPECODES = frozenset("bhilq")
_UNSIGNED_TYPECODES = frozenset("BHILQ")
_FLOAT_TYPECODES = frozenset("fd")


@dataclass(frozen=True, slots=True)
class Kind:
    """A recognized runtime kind.

    Attributes:
        label: Human readable name used as the *expected* side of messages.
        accepts: Predicate returning ``True`` for values of this kind.
    """

    label: str
    accepts: Callable[[object], bool]


def typed_array_label(value: object) -> str | None:
    """Return the typed-array label for ``value`` or ``None``.

    Numeric :class:`array.array` instances are labelled by signedness and item
    width, e.g. ``array("h")`` is an ``Int16Array`` on common platforms.
    """

    if not isinstance(value, array):
        return None
    code = value.typecode
    if code in _FLOAT_TYPECODES:
        family = "Float"
    elif code in _SIGNED_TYPECODES:
        family = "Int"
    elif code in _UNSIGNED_TYPECODES:
        family = "Uint"
    else:
        return None
    return f"{family}{value.itemsize * 8}Array"


def runtime_tag(value: object) -> str:
    """Describe the actual runtime type of ``value`` for failure messages."""

    label = typed_array_label(value)
    if label is not None:
        return label
    return type(value).__name__


def _is_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _is_whole(value: object) -> bool:
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def _is_integer(value: object) -> bool:
    return _is_number(value) and _is_whole(value)


def _is_float(value: object) -> bool:
    return _is_number(value) and not _is_whole(value)


def _instance_of(*types: type) -> Callable[[object], bool]:
    def accepts(value: object) -> bool:
        return isinstance(value, types)

    return accepts


def _exact_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_sequence(value: object) -> bool:
    """Return ``True`` for the containers treated as arrays: ``list`` and ``tuple``."""

    return isinstance(value, (list, tuple))


_WEAK_MAPPINGS = (weakref.WeakKeyDictionary, weakref.WeakValueDictionary)


def is_object(value: object) -> bool:
    """Return ``True`` for mappings other than the weak-reference mappings."""

    return isinstance(value, Mapping) and not isinstance(value, _WEAK_MAPPINGS)


def _is_awaitable(value: object) -> bool:
    return isinstance(value, Future) or inspect.isawaitable(value)


def _typed_array(label: str) -> Callable[[object], bool]:
    def accepts(value: object) -> bool:
        return typed_array_label(value) == label

    return accepts


def _typed_array_kind(label: str) -> Kind:
    return Kind(label, _typed_array(label))


_REGISTRY: Mapping[str, Kind] = MappingProxyType(
    {
        "str": Kind("String", _instance_of(str)),
        "numb": Kind("Number", _is_number),
        "int": Kind("Integer", _is_integer),
        "float": Kind("Float", _is_float),
        "bool": Kind("Boolean", _instance_of(bool)),
        "bigint": Kind("BigInt", _exact_int),
        "symb": Kind("Symbol", _instance_of(Enum)),
        "func": Kind("Function", callable),
        "arr": Kind("Array", is_sequence),
        "int8arr": _typed_array_kind("Int8Array"),
        "uint8arr": _typed_array_kind("Uint8Array"),
        "uint8clamparr": Kind("Uint8ClampedArray", _instance_of(bytearray)),
        "int16arr": _typed_array_kind("Int16Array"),
        "uint16arr": _typed_array_kind("Uint16Array"),
        "int32arr": _typed_array_kind("Int32Array"),
        "uint32arr": _typed_array_kind("Uint32Array"),
        "int64arr": _typed_array_kind("Int64Array"),
        "uint64arr": _typed_array_kind("Uint64Array"),
        "f32arr": _typed_array_kind("Float32Array"),
        "f64arr": _typed_array_kind("Float64Array"),
        "obj": Kind("Object", is_object),
        "regexp": Kind("RegExp", _instance_of(re.Pattern)),
        "date": Kind("Date", _instance_of(date)),
        "map": Kind("Map", _instance_of(dict)),
        "set": Kind("Set", _instance_of(set, frozenset)),
        "weakmap": Kind("WeakMap", _instance_of(*_WEAK_MAPPINGS)),
        "weakset": Kind("WeakSet", _instance_of(weakref.WeakSet)),
        "promise": Kind("Promise", _is_awaitable),
        "err": Kind("Error", _instance_of(BaseException)),
        "arraybuffer": Kind("ArrayBuffer", _instance_of(bytes)),
        "dataview": Kind("DataView", _instance_of(memoryview)),
    }
)


def list_recognized_tags() -> tuple[str, ...]:
    """Return every recognized tag nickname in registry order."""

    return tuple(_REGISTRY)


def lookup(tag: object) -> Kind | None:
    """Return the :class:`Kind` registered under ``tag``.

    Non-string tags are never registered, so ``None`` is returned for them
    instead of raising on unhashable input.
    """

    if not isinstance(tag, str):
        return None
    return _REGISTRY.get(tag)


__all__ = [
    "Kind",
    "is_object",
    "is_sequence",
    "list_recognized_tags",
    "lookup",
    "runtime_tag",
    "typed_array_label",
]
