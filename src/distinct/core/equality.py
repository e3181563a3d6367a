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

"""Value classification and deep structural equality.

Values are split into two groups:

- *simple* values (``None``, booleans, numbers, strings, bytes and enum
  members) are reduced to hashable tokens so they can be tracked in a ``set``;
- *complex* values (everything else) are compared with :func:`deep_equal`.

Tokens carry a kind tag alongside the value, so ``True`` and ``1`` never
collide, while ``1`` and ``1.0`` do. Every NaN maps to the same token of its
kind, and signed zeros compare equal through native numeric equality.
"""

from __future__ import annotations

import cmath
import dataclasses
import math
from collections.abc import Hashable, Mapping, Sequence, Set
from decimal import Decimal
from enum import Enum
from numbers import Number
from typing import Final, TypeAlias

__all__ = ["SimpleToken", "deep_equal", "is_simple", "simple_token"]

SimpleToken: TypeAlias = tuple[Hashable, Hashable]

_SIMPLE_TYPES: Final[tuple[type, ...]] = (type(None), bool, Number, str, bytes, Enum)
_NAN: Final[str] = "nan"


def is_simple(value: object) -> bool:
    """Return ``True`` when ``value`` is compared by token rather than structure."""
    return isinstance(value, _SIMPLE_TYPES)


def _is_nan(value: object) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, complex):
        return cmath.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def simple_token(value: object) -> SimpleToken:
    """Return the hashable identity used to detect duplicate simple values.

    Args:
        value: A value for which :func:`is_simple` returns ``True``.

    Returns:
        A ``(kind, value)`` pair. NaN values of the same kind share a token.

    Raises:
        TypeError: If ``value`` is not a simple value.
    """
    # enum members first: IntEnum members are also numbers
    if isinstance(value, Enum):
        return type(value), value
    if value is None:
        return "none", None
    if isinstance(value, bool):
        return "bool", value
    if isinstance(value, Number):
        if _is_nan(value):
            return "number", _NAN
        return "number", value
    if isinstance(value, str):
        return "str", value
    if isinstance(value, bytes):
        return "bytes", value
    message = f"{type(value).__name__} values are not simple"
    raise TypeError(message)


def deep_equal(left: object, right: object) -> bool:
    """Compare two values structurally.

    Mappings match when they hold the same keys with deep-equal values,
    regardless of insertion order; simple keys are matched by token, so
    ``{1: "a"}`` and ``{True: "a"}`` differ. Sequences match element by
    element in order. Sets match when their members pair up one to one.
    Dataclasses and plain objects match field by field; callables only match
    themselves. Values of different concrete types never match, except simple
    values, which follow :func:`simple_token`.

    Args:
        left: First value.
        right: Second value.

    Returns:
        ``True`` when the two values are structurally equal.
    """
    return _deep_equal(left, right, set())


def _deep_equal(left: object, right: object, active: set[tuple[int, int]]) -> bool:
    if left is right:
        return True
    left_simple = is_simple(left)
    if left_simple or is_simple(right):
        return left_simple and is_simple(right) and simple_token(left) == simple_token(right)
    if type(left) is not type(right) or callable(left):
        return False

    pair = (id(left), id(right))
    if pair in active:
        # already being compared further up a self-referencing structure
        return True
    active.add(pair)
    try:
        return _compare_composites(left, right, active)
    finally:
        active.discard(pair)


def _key_token(key: object) -> Hashable:
    # complex keys are hashable already and fall back to native lookup
    return simple_token(key) if is_simple(key) else ("key", key)


def _compare_mappings(
    left: Mapping[object, object],
    right: Mapping[object, object],
    active: set[tuple[int, int]],
) -> bool:
    if len(left) != len(right):
        return False
    right_keys = {_key_token(key): key for key in right}
    for key, value in left.items():
        token = _key_token(key)
        if token not in right_keys:
            return False
        if not _deep_equal(value, right[right_keys[token]], active):
            return False
    return True


def _compare_sets(left: Set[object], right: Set[object], active: set[tuple[int, int]]) -> bool:
    if len(left) != len(right):
        return False
    unmatched = list(right)
    for member in left:
        for index, candidate in enumerate(unmatched):
            if _deep_equal(member, candidate, active):
                del unmatched[index]
                break
        else:
            return False
    return True


def _native_equal(left: object, right: object) -> bool:
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        # ``==`` returned something without a truth value (e.g. an array)
        return False


def _compare_composites(left: object, right: object, active: set[tuple[int, int]]) -> bool:
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return _compare_mappings(left, right, active)
    if isinstance(left, Sequence) and isinstance(right, Sequence):
        if len(left) != len(right):
            return False
        return all(_deep_equal(a, b, active) for a, b in zip(left, right))
    if isinstance(left, Set) and isinstance(right, Set):
        return _compare_sets(left, right, active)
    if dataclasses.is_dataclass(left):
        return all(
            _deep_equal(getattr(left, field.name), getattr(right, field.name), active)
            for field in dataclasses.fields(left)
            if field.compare
        )
    if hasattr(left, "__dict__") and hasattr(right, "__dict__"):
        return _deep_equal(vars(left), vars(right), active)
    return _native_equal(left, right)
