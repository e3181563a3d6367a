# Copyright 2025 CrownOps Engineering
#
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

"""Unit tests for whole-element deduplication."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass
from enum import Enum, IntEnum

import pytest

from distinct import Deduplicator, distinct

pytestmark = pytest.mark.unit


class Colour(Enum):
    RED = "red"
    BLUE = "blue"


class Level(IntEnum):
    LOW = 1


@dataclass
class Point:
    x: int
    y: int


def test_removes_duplicate_numbers() -> None:
    assert distinct([1, 2, 2, 3, 4, 4, 5]) == [1, 2, 3, 4, 5]


def test_removes_duplicate_strings() -> None:
    assert distinct(["apple", "banana", "apple", "orange", "banana"]) == ["apple", "banana", "orange"]


def test_empty_input_returns_empty_list() -> None:
    assert distinct([]) == []


def test_unique_input_is_returned_unchanged() -> None:
    assert distinct([1, 2, 3, 4, 5]) == [1, 2, 3, 4, 5]


def test_identical_elements_collapse_to_one() -> None:
    assert distinct(["a", "a", "a", "a"]) == ["a"]


def test_preserves_order_of_first_occurrences() -> None:
    assert distinct([3, 1, 3, 2, 1, 4]) == [3, 1, 2, 4]


def test_booleans() -> None:
    assert distinct([True, False, True, True, False]) == [True, False]


def test_nan_is_self_equal_and_signed_zeros_collapse() -> None:
    output = distinct([math.nan, float("nan"), 0.0, -0.0])

    assert len(output) == 2
    assert math.isnan(output[0])
    assert output[1] == 0
    assert math.copysign(1.0, output[1]) == 1.0


def test_none_values_collapse() -> None:
    assert distinct([None, None, None]) == [None]


def test_booleans_are_not_numbers() -> None:
    assert distinct([1, True, 0, False, 1.0]) == [1, True, 0, False]


def test_enum_members_are_tokens_of_their_own_type() -> None:
    assert distinct([Colour.RED, "red", Colour.RED, Level.LOW, 1]) == [Colour.RED, "red", Level.LOW, 1]


def test_removes_duplicate_dicts_regardless_of_key_order() -> None:
    first = {"id": 1, "name": "Alice"}
    second = {"id": 2, "name": "Bob"}
    third = {"id": 1, "name": "Alice"}
    fourth = {"name": "Alice", "id": 1}

    output = distinct([first, second, third, fourth])

    assert output == [first, second]
    assert output[0] is first


def test_key_order_insensitive_duplicate_scenario() -> None:
    records = [{"id": 1, "name": "A"}, {"id": 2}, {"name": "A", "id": 1}]
    assert distinct(records) == [{"id": 1, "name": "A"}, {"id": 2}]


def test_removes_duplicate_lists() -> None:
    assert distinct([[1, 2], [3, 4], [1, 2], [5, 6], [3, 4]]) == [[1, 2], [3, 4], [5, 6]]


def test_nested_structures() -> None:
    records = [
        {"id": 1, "data": [1, 2, 3]},
        {"id": 2, "data": [4, 5, 6]},
        {"id": 1, "data": [1, 2, 3]},
        {"id": 3, "data": [7, 8, 9]},
        {"id": 2, "data": [4, 5, 6]},
    ]
    assert distinct(records) == [
        {"id": 1, "data": [1, 2, 3]},
        {"id": 2, "data": [4, 5, 6]},
        {"id": 3, "data": [7, 8, 9]},
    ]


def test_mixed_simple_and_complex_values() -> None:
    values = [1, "1", {"id": 1}, {"id": "1"}, [1, 2], [1, "2"], 1, "1", {"id": 1}, [1, 2]]
    assert distinct(values) == [1, "1", {"id": 1}, {"id": "1"}, [1, 2], [1, "2"]]


def test_nested_content_differences_are_kept() -> None:
    records = [
        {"id": 1, "data": [1, 2, 3]},
        {"id": 1, "data": [1, 2, 4]},
        {"id": 1, "data": [1, 2, 3]},
    ]
    assert distinct(records) == [{"id": 1, "data": [1, 2, 3]}, {"id": 1, "data": [1, 2, 4]}]


def test_reordered_sequences_are_distinct() -> None:
    assert distinct([[1, 2, 3], [3, 2, 1], [1, 2, 3]]) == [[1, 2, 3], [3, 2, 1]]


def test_lists_and_tuples_are_distinct() -> None:
    assert distinct([[1, 2], (1, 2), [1, 2]]) == [[1, 2], (1, 2)]


def test_dataclasses_compare_by_fields() -> None:
    assert distinct([Point(1, 2), Point(1, 2), Point(2, 1)]) == [Point(1, 2), Point(2, 1)]


def test_callables_only_match_themselves() -> None:
    def first(value: int) -> int:
        return value

    def second(value: int) -> int:
        return value

    assert distinct([first, second, first]) == [first, second]


def test_accepts_any_iterable() -> None:
    assert distinct(value % 3 for value in range(7)) == [0, 1, 2]


def test_does_not_mutate_input() -> None:
    records = [{"id": 1, "tags": ["a"]}, {"id": 1, "tags": ["a"]}]
    snapshot = copy.deepcopy(records)

    output = distinct(records)

    assert records == snapshot
    assert output == [{"id": 1, "tags": ["a"]}]
    assert output is not records


def test_deduplicator_tracks_seen_values() -> None:
    tracker = Deduplicator()

    assert tracker.seen({"a": [1]}) is False
    assert tracker.seen({"a": [1]}) is True
    assert tracker.seen(1) is False
    assert tracker.seen(1.0) is True
    assert tracker.seen(True) is False
    assert len(tracker) == 3
