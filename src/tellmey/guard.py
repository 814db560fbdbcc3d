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

"""Function guards validating positional arguments before each call.

``guard`` is strict: the positional argument count must equal the number of
descriptors and the first failing argument raises
:class:`~tellmey.errors.TypeAssertionError`. ``guard_lenient`` reports
failures through the diagnostic sink and always calls the wrapped function.

Both can wrap a callable directly or be used as decorators::

    @guard(["int", "str"])
    def label(count: int, name: str) -> str:
        return f"{name}{count}"

    label(2, "x")      # "x2"
    label("2", "x")    # TypeAssertionError: In guard(label): In argument 0: ...

Keyword arguments are forwarded untouched and do not count toward the arity.
When a guarded function is used as a method, the receiver is bound through the
wrapped function and is neither counted nor validated.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import update_wrapper
from typing import overload

from .assertions import match_all, match_all_lenient
from .errors import TypeAssertionError
from .logging import StructuredLogger, get_logger
from .types import Descriptor

logger: StructuredLogger = get_logger(__name__, context={"component": "guard"})


def _callable_name(fn: Callable[..., object]) -> str:
    name = getattr(fn, "__name__", "")
    if not name or name == "<lambda>":
        return "anonymous"
    return name


class GuardedCallable[R]:
    """Callable validating positional arguments before delegating to ``fn``."""

    def __init__(
        self,
        descriptors: Sequence[Descriptor],
        fn: Callable[..., R],
        *,
        strict: bool,
    ) -> None:
        # update_wrapper copies fn.__dict__, so it must run before our own state
        _ = update_wrapper(self, fn)
        self._descriptors: tuple[Descriptor, ...] = tuple(descriptors)
        self._fn = fn
        self._strict = strict
        self._name = _callable_name(fn)

    @property
    def descriptors(self) -> tuple[Descriptor, ...]:
        return self._descriptors

    @property
    def strict(self) -> bool:
        return self._strict

    def __get__(
        self, instance: object, owner: type | None = None
    ) -> GuardedCallable[R]:
        if instance is None:
            return self
        bind = getattr(self._fn, "__get__", None)
        if bind is None:
            return self
        return type(self)(self._descriptors, bind(instance, owner), strict=self._strict)

    def __call__(self, *args: object, **kwargs: object) -> R:
        if self._strict:
            checked = self._check_strict(args)
        else:
            checked = match_all_lenient(zip(args, self._descriptors))
        return self._fn(*checked, **kwargs)

    def __repr__(self) -> str:
        mode = "guard" if self._strict else "guard_lenient"
        return f"<{mode}({self._name}) {list(self._descriptors)!r}>"

    def _check_strict(self, args: tuple[object, ...]) -> list[object]:
        if len(args) != len(self._descriptors):
            msg = f"Expected {len(self._descriptors)} arguments, got {len(args)}"
            raise TypeAssertionError(msg)
        try:
            return match_all(zip(args, self._descriptors, strict=True))
        except TypeAssertionError as error:
            logger.debug(
                "Guarded call rejected.",
                event="tellmey.guard.rejected",
                context={"function": self._name, "reason": str(error)},
            )
            raise TypeAssertionError(f"In guard({self._name}): {error}") from error


@overload
def guard[R](
    descriptors: Sequence[Descriptor],
) -> Callable[[Callable[..., R]], GuardedCallable[R]]: ...


@overload
def guard[R](
    descriptors: Sequence[Descriptor], fn: Callable[..., R]
) -> GuardedCallable[R]: ...


def guard[R](
    descriptors: Sequence[Descriptor],
    fn: Callable[..., R] | None = None,
) -> GuardedCallable[R] | Callable[[Callable[..., R]], GuardedCallable[R]]:
    """Wrap ``fn`` so every call is validated against ``descriptors``.

    Returns a decorator when ``fn`` is omitted.
    """

    def decorator(target: Callable[..., R]) -> GuardedCallable[R]:
        return GuardedCallable(descriptors, target, strict=True)

    if fn is None:
        return decorator
    return decorator(fn)


@overload
def guard_lenient[R](
    descriptors: Sequence[Descriptor],
) -> Callable[[Callable[..., R]], GuardedCallable[R]]: ...


@overload
def guard_lenient[R](
    descriptors: Sequence[Descriptor], fn: Callable[..., R]
) -> GuardedCallable[R]: ...


def guard_lenient[R](
    descriptors: Sequence[Descriptor],
    fn: Callable[..., R] | None = None,
) -> GuardedCallable[R] | Callable[[Callable[..., R]], GuardedCallable[R]]:
    """Wrap ``fn`` so argument failures are reported but never raised.

    There is no arity check. Arguments are paired with descriptors
    positionally and only the paired arguments are forwarded to ``fn``.
    """

    def decorator(target: Callable[..., R]) -> GuardedCallable[R]:
        return GuardedCallable(descriptors, target, strict=False)

    if fn is None:
        return decorator
    return decorator(fn)


__all__ = [
    "GuardedCallable",
    "guard",
    "guard_lenient",
]
