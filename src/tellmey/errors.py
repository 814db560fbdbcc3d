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

"""Base exception hierarchy for :mod:`tellmey`."""

from __future__ import annotations

from typing import ClassVar


class TellmeyError(Exception):
    """Base class for all tellmey exceptions.

    Callers can catch every library-specific exception with a single handler
    while standard Python exceptions (including those raised by guarded
    functions) propagate normally.

    Example:
        Catch any tellmey-specific error::

            try:
                config = match_one(raw_config, {"name": "str", "port": "int"})
            except TellmeyError as e:
                logger.error("Invalid configuration: %s", e)
    """


class TypeAssertionError(TellmeyError, TypeError):
    """Raised when a value does not satisfy a type descriptor.

    This is the only error kind raised by the assertion surface. Unknown tag
    names, empty sequence descriptors, arity mismatches and shape mismatches
    all surface as this type and are distinguished only by message content.

    The message carries a location trail built from the outside in, for
    example ``"At index 2: In key 'name': Expected String, got int"``.

    Example:
        Distinguishing validation failures from other exceptions::

            try:
                result = handler(*args)
            except TypeAssertionError as e:
                return error_response(str(e))

    Note:
        This exception also inherits from ``TypeError``, so it can be caught by
        handlers expecting standard type errors.
    """

    kind: ClassVar[str] = "type assertion failed"


__all__ = [
    "TellmeyError",
    "TypeAssertionError",
]
