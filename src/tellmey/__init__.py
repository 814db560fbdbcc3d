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

"""Declarative runtime type assertions.

A *descriptor* describes the shape a value must have:

- a tag nickname such as ``"str"``, ``"int"`` or ``"date"``
  (see :func:`list_recognized_tags`),
- a one-element list for a homogeneous array (``["int"]``),
- a longer list for a positional tuple (``["int", "str"]``),
- a mapping of required keys (``{"id": "int", "tags": ["str"]}``).

Values are never coerced. They either satisfy the descriptor and come back
unchanged (sequences are rebuilt element by element) or fail with a message
naming where the mismatch happened::

    >>> match_one({"id": 7, "tags": ["a", 3]}, {"id": "int", "tags": ["str"]})
    Traceback (most recent call last):
    ...
    tellmey.errors.TypeAssertionError: In key 'tags': At index 1: Expected String, got int
"""

from __future__ import annotations

from ._matcher import Accepted, MatchResult, Rejected, match
from .assertions import (
    check_instance,
    match_all,
    match_all_lenient,
    match_one,
    match_one_lenient,
)
from .diagnostics import (
    current_diagnostic_sink,
    diagnostic_sink,
    install_diagnostic_sink,
    reset_diagnostic_sink,
)
from .errors import TellmeyError, TypeAssertionError
from .guard import (
    GuardedCallable,
    guard,
    guard_lenient,
)
from .logging import configure_logging
from .tags import list_recognized_tags, runtime_tag
from .types import Descriptor, DiagnosticSink

__all__ = [
    "Accepted",
    "Descriptor",
    "DiagnosticSink",
    "GuardedCallable",
    "MatchResult",
    "Rejected",
    "TellmeyError",
    "TypeAssertionError",
    "check_instance",
    "configure_logging",
    "current_diagnostic_sink",
    "diagnostic_sink",
    "guard",
    "guard_lenient",
    "install_diagnostic_sink",
    "list_recognized_tags",
    "match",
    "match_all",
    "match_all_lenient",
    "match_one",
    "match_one_lenient",
    "reset_diagnostic_sink",
    "runtime_tag",
]
