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

"""Property-based tests for distinct, distinct_by and deep_equal."""

from __future__ import annotations

import copy

import pytest
from hypothesis import given

from distinct import deep_equal, distinct, distinct_by
from tests.property_based.strategies import json_like_values, record_lists, set_values

pytestmark = pytest.mark.property


def _first_occurrence_indices(values: list[object]) -> list[int]:
    return [
        index
        for index, value in enumerate(values)
        if not any(deep_equal(earlier, value) for earlier in values[:index])
    ]


@given(record_lists())
def test_distinct_keeps_exactly_the_first_occurrences(values: list[object]) -> None:
    output = distinct(values)
    expected = [values[index] for index in _first_occurrence_indices(values)]

    assert len(output) == len(expected)
    assert all(kept is reference for kept, reference in zip(output, expected))


@given(record_lists())
def test_distinct_output_is_an_ordered_subsequence(values: list[object]) -> None:
    output = distinct(values)
    remaining = iter(values)

    assert len(output) <= len(values)
    assert all(any(kept is candidate for candidate in remaining) for kept in output)


@given(record_lists())
def test_distinct_output_has_no_equal_pairs(values: list[object]) -> None:
    output = distinct(values)

    for index, value in enumerate(output):
        assert not any(deep_equal(value, other) for other in output[index + 1 :])


@given(record_lists())
def test_distinct_is_idempotent(values: list[object]) -> None:
    once = distinct(values)
    twice = distinct(once)

    assert len(twice) == len(once)
    assert all(left is right for left, right in zip(once, twice))


@given(record_lists())
def test_distinct_does_not_modify_input(values: list[object]) -> None:
    snapshot = copy.deepcopy(values)

    _ = distinct(values)

    assert deep_equal(values, snapshot)


@given(record_lists())
def test_identity_key_matches_distinct(values: list[object]) -> None:
    by_identity = distinct_by(values, lambda value: value)
    plain = distinct(values)

    assert len(by_identity) == len(plain)
    assert all(left is right for left, right in zip(by_identity, plain))


@given(record_lists())
def test_distinct_by_never_yields_more_items_than_keys(values: list[object]) -> None:
    output = distinct_by(values, lambda value: type(value).__name__)

    assert len(output) == len({type(value).__name__ for value in values})


@given(json_like_values(), json_like_values())
def test_deep_equal_is_symmetric(left: object, right: object) -> None:
    assert deep_equal(left, right) is deep_equal(right, left)


@given(json_like_values())
def test_deep_equal_matches_deep_copies(value: object) -> None:
    assert deep_equal(value, copy.deepcopy(value))


@given(set_values(), set_values())
def test_set_comparison_is_symmetric_and_order_independent(left: object, right: object) -> None:
    assert deep_equal(left, right) is deep_equal(right, left)
    assert len(distinct([left, right])) == len(distinct([right, left]))
