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

"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = [
    "Box",
    "json_like_values",
    "record_lists",
    "scalar_values",
    "set_values",
]


class Box:
    """Plain object hashed by identity and compared by its attributes."""

    def __init__(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Box({self.value!r})"


def scalar_values() -> st.SearchStrategy[object]:
    """Return a strategy over simple leaves, including NaN and signed zeros."""
    return st.one_of(
        st.none(),
        st.booleans(),
        st.integers(min_value=-3, max_value=3),
        st.floats(allow_infinity=False),
        st.sampled_from([0.0, -0.0, float("nan")]),
        st.text(alphabet="ab1", max_size=2),
    )


def set_values() -> st.SearchStrategy[object]:
    """Return a strategy over sets whose members may repeat under deep equality.

    Fresh NaN floats and ``Box`` instances are distinct set members even when
    they compare deep-equal, which exercises one-to-one member matching.
    """
    fresh_floats = st.builds(float, st.sampled_from(["nan", "0.0", "1.5"]))
    boxes = st.builds(Box, st.integers(min_value=0, max_value=2))
    return st.one_of(
        st.frozensets(fresh_floats, max_size=3),
        st.sets(boxes, max_size=3),
    )


def json_like_values(max_leaves: int = 8) -> st.SearchStrategy[object]:
    """Return a strategy over nested lists, string-keyed dicts and sets.

    Args:
        max_leaves: Upper bound on the number of leaves per generated value.

    Returns:
        Hypothesis strategy producing JSON-like trees with small alphabets so
        that duplicates are frequent.
    """
    return st.recursive(
        st.one_of(scalar_values(), set_values()),
        lambda children: st.one_of(
            st.lists(children, max_size=3),
            st.dictionaries(st.sampled_from(["a", "b", "id"]), children, max_size=3),
        ),
        max_leaves=max_leaves,
    )


def record_lists(max_size: int = 12) -> st.SearchStrategy[list[object]]:
    """Strategy emitting lists of JSON-like values to deduplicate."""
    return st.lists(json_like_values(), max_size=max_size)
