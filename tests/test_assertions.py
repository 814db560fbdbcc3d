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

"""Tests for the strict and lenient assertion helpers."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest

from tellmey import (
    TellmeyError,
    TypeAssertionError,
    check_instance,
    diagnostic_sink,
    match_all,
    match_all_lenient,
    match_one,
    match_one_lenient,
)
from tests.helpers import ExplodingSink, RecordingSink

pytestmark = pytest.mark.core


class TestMatchOne:
    def test_returns_value(self) -> None:
        assert match_one(42, "int") == 42
        assert match_one("hello", "str") == "hello"
        assert match_one(3.14, "float") == 3.14
        assert match_one(True, "bool") is True

    def test_returns_rebuilt_sequences(self) -> None:
        assert match_one([1, "hi", False], ["int", "str", "bool"]) == [1, "hi", False]
        assert match_one([1, 2, 3], ["int"]) == [1, 2, 3]

    def test_returns_validated_object(self) -> None:
        value = {"a": 1, "b": "hi"}

        assert match_one(value, {"a": "int", "b": "str"}) is value

    def test_raises_on_wrong_type(self) -> None:
        with pytest.raises(TypeAssertionError, match="Expected Integer"):
            match_one(3.14, "int")

    def test_raises_with_index(self) -> None:
        with pytest.raises(TypeAssertionError, match="At index 1"):
            match_one([1, "x", 3], ["int"])

    def test_raises_for_null_object(self) -> None:
        with pytest.raises(TypeAssertionError, match="Expected Object"):
            match_one(None, {"a": "int"})

    def test_raises_for_unknown_tag(self) -> None:
        with pytest.raises(TypeAssertionError, match="Unknown assertion"):
            match_one("x", "foobar")

    def test_error_is_catchable_as_library_error(self) -> None:
        with pytest.raises(TellmeyError):
            match_one(date(2024, 1, 1), "str")


class TestMatchOneLenient:
    def test_returns_validated_value(self, recording_sink: RecordingSink) -> None:
        assert match_one_lenient([1, 2], ["int"], sink=recording_sink) == [1, 2]
        assert recording_sink.messages == []

    def test_reports_and_returns_original(self, recording_sink: RecordingSink) -> None:
        value = ["a", 2]

        result = match_one_lenient(value, ["int"], sink=recording_sink)

        assert result is value
        assert recording_sink.messages == ["At index 0: Expected Integer, got str"]

    def test_uses_installed_sink(self, recording_sink: RecordingSink) -> None:
        with diagnostic_sink(recording_sink):
            assert match_one_lenient("x", "int") == "x"

        assert recording_sink.messages == ["Expected Integer, got str"]

    def test_does_not_raise_without_sink(self) -> None:
        assert match_one_lenient("x", "int") == "x"


class TestMatchAll:
    def test_returns_values_in_order(self) -> None:
        assert match_all([("x", "str"), (123, "int")]) == ["x", 123]

    def test_accepts_any_iterable_of_pairs(self) -> None:
        pairs = ((value, "int") for value in (1, 2, 3))

        assert match_all(pairs) == [1, 2, 3]

    def test_empty_input(self) -> None:
        assert match_all([]) == []

    def test_prefixes_argument_index(self) -> None:
        with pytest.raises(TypeAssertionError) as exc:
            match_all([("x", "str"), (123.5, "int")])

        assert str(exc.value) == "In argument 1: Expected Integer, got float"

    def test_stops_at_first_failure(self) -> None:
        evaluated: list[int] = []

        def pairs() -> Iterator[tuple[object, str]]:
            for index, (value, descriptor) in enumerate(
                [(1, "str"), (2, "str"), (3, "int")]
            ):
                evaluated.append(index)
                yield value, descriptor

        with pytest.raises(TypeAssertionError, match="In argument 0"):
            match_all(pairs())

        assert evaluated == [0]


class TestMatchAllLenient:
    def test_keeps_original_values(self, recording_sink: RecordingSink) -> None:
        result = match_all_lenient(
            [("x", "str"), (123.5, "int")], sink=recording_sink
        )

        assert result == ["x", 123.5]
        assert recording_sink.messages == [
            "In argument 1: Expected Integer, got float"
        ]

    def test_processes_every_pair(self, recording_sink: RecordingSink) -> None:
        pairs = [(1, "str"), ("a", "int"), ([1], ["int"]), (None, {"k": "str"})]

        result = match_all_lenient(pairs, sink=recording_sink)

        assert result == [1, "a", [1], None]
        assert recording_sink.messages == [
            "In argument 0: Expected String, got int",
            "In argument 1: Expected Integer, got str",
            "In argument 3: Expected Object, got NoneType",
        ]

    def test_returns_rebuilt_values_on_success(
        self, recording_sink: RecordingSink
    ) -> None:
        value = (1, 2)

        result = match_all_lenient([(value, ["int"])], sink=recording_sink)

        assert result == [(1, 2)]
        assert recording_sink.messages == []

    def test_sink_failure_does_not_change_outcome(self) -> None:
        sink = ExplodingSink()

        result = match_all_lenient([("x", "int"), (2.5, "int")], sink=sink)

        assert result == ["x", 2.5]
        assert sink.calls == 2


class _Animal:
    pass


class _Dog(_Animal):
    pass


class TestCheckInstance:
    def test_returns_instance(self) -> None:
        dog = _Dog()

        assert check_instance(dog, _Animal) is dog

    def test_default_message(self) -> None:
        with pytest.raises(TypeAssertionError) as exc:
            check_instance("rex", _Dog)

        assert str(exc.value) == "Expected instance of _Dog, got str"

    def test_custom_message(self) -> None:
        with pytest.raises(TypeAssertionError, match="need a dog"):
            check_instance(_Animal(), _Dog, "need a dog")

    def test_accepts_tuple_of_classes(self) -> None:
        dog = _Dog()

        assert check_instance(dog, (str, _Dog)) is dog

    def test_tuple_of_classes_is_named_in_message(self) -> None:
        with pytest.raises(TypeAssertionError) as exc:
            check_instance(3, (str, _Dog))

        assert str(exc.value) == "Expected instance of str | _Dog, got int"
