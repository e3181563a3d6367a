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

"""Unit tests for key-derived deduplication."""

from __future__ import annotations

import copy

import pytest

from distinct import distinct_by

pytestmark = pytest.mark.unit


def test_numbers_by_remainder() -> None:
    assert distinct_by([1, 2, 3, 4, 5, 6], lambda num: num % 3) == [1, 2, 3]


def test_parity_scenario() -> None:
    assert distinct_by([1, 2, 2, 3, 4, 4, 5], lambda num: num % 2) == [1, 2]


def test_strings_by_first_letter() -> None:
    assert distinct_by(["apple", "apricot", "banana", "blueberry"], lambda word: word[0]) == ["apple", "banana"]
    assert distinct_by(["apple", "banana", "apricot", "blueberry", "cherry"], lambda word: word[0]) == [
        "apple",
        "banana",
        "cherry",
    ]


def test_empty_input_returns_empty_list() -> None:
    assert distinct_by([], lambda value: value) == []


def test_identity_key_keeps_unique_values() -> None:
    assert distinct_by([1, 2, 3, 4, 5], lambda value: value) == [1, 2, 3, 4, 5]


def test_keeps_first_element_sharing_a_key() -> None:
    assert distinct_by([5, 8, 11, 2], lambda num: num % 3) == [5]


def test_case_insensitive_selector() -> None:
    words = ["Apple", "apple", "BANANA", "banana", "Cherry"]
    assert distinct_by(words, str.lower) == ["Apple", "BANANA", "Cherry"]


def test_none_keys_collapse_to_first_occurrence() -> None:
    records = [{"id": 1}, {"id": 2, "group": "a"}, {"id": 3}, {"id": 4, "group": "a"}]
    assert distinct_by(records, lambda record: record.get("group")) == [{"id": 1}, {"id": 2, "group": "a"}]


def test_constant_key_collapses_to_first_element() -> None:
    assert distinct_by([1, 2, 3, 4], lambda _value: "same-key") == [1]


def test_mixed_key_kinds_are_never_equal() -> None:
    assert distinct_by([0, 1, 2, 3, 4], lambda num: "even" if num % 2 == 0 else True) == [0, 1]
    assert distinct_by(["a", "b", "c"], lambda word: {"a": 1, "b": True, "c": "1"}[word]) == ["a", "b", "c"]


def test_objects_by_simple_field() -> None:
    first = {"id": 1, "name": "Alice"}
    second = {"id": 2, "name": "Bob"}
    third = {"id": 3, "name": "Alice"}
    fourth = {"id": 4, "name": "Bob"}
    assert distinct_by([first, second, third, fourth], lambda item: item["name"]) == [first, second]


def test_lists_by_derived_string() -> None:
    values = [[1, 2], [3, 4], [1, 2], [5, 6], [3, 4]]
    assert distinct_by(values, lambda item: ",".join(map(str, item))) == [[1, 2], [3, 4], [5, 6]]


def test_objects_by_mapping_key() -> None:
    first = {"id": 1, "details": {"age": 25, "city": "New York"}}
    second = {"id": 2, "details": {"age": 30, "city": "Los Angeles"}}
    third = {"id": 3, "details": {"age": 25, "city": "New York"}}
    assert distinct_by([first, second, third], lambda item: item["details"]) == [first, second]


def test_objects_by_list_key() -> None:
    records = [
        {"id": 1, "tags": ["a", "b"]},
        {"id": 2, "tags": ["c", "d"]},
        {"id": 3, "tags": ["a", "b"]},
    ]
    assert distinct_by(records, lambda item: item["tags"]) == [
        {"id": 1, "tags": ["a", "b"]},
        {"id": 2, "tags": ["c", "d"]},
    ]


def test_objects_by_nested_structure_key() -> None:
    records = [
        {"id": 1, "info": {"scores": [10, 20], "active": True}},
        {"id": 2, "info": {"scores": [15, 25], "active": False}},
        {"id": 3, "info": {"scores": [10, 20], "active": True}},
    ]
    assert [record["id"] for record in distinct_by(records, lambda item: item["info"])] == [1, 2]


def test_structurally_equal_keys_in_different_order() -> None:
    records = [
        {"id": 1, "meta": {"a": 1, "b": 2}},
        {"id": 2, "meta": {"b": 2, "a": 1}},
        {"id": 3, "meta": {"a": 2, "b": 3}},
    ]
    assert [record["id"] for record in distinct_by(records, lambda item: item["meta"])] == [1, 3]


def test_extractor_called_once_per_element_in_order() -> None:
    calls: list[int] = []

    def key(value: int) -> int:
        calls.append(value)
        return value % 2

    assert distinct_by([3, 5, 4, 7, 6], key) == [3, 4]
    assert calls == [3, 5, 4, 7, 6]


def test_extractor_errors_propagate_unchanged() -> None:
    failure = LookupError("missing")

    def key(value: int) -> int:
        if value == 2:
            raise failure
        return value

    with pytest.raises(LookupError) as excinfo:
        distinct_by([1, 2, 3], key)
    assert excinfo.value is failure


def test_does_not_mutate_input() -> None:
    records = [{"id": 1}, {"id": 1}]
    snapshot = copy.deepcopy(records)

    output = distinct_by(records, lambda item: item["id"])

    assert records == snapshot
    assert output == [{"id": 1}]
