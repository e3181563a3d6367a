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

"""Order-preserving duplicate removal for arbitrary values."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .equality import SimpleToken, deep_equal, is_simple, simple_token

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

__all__ = ["Deduplicator", "distinct", "distinct_by"]

T = TypeVar("T")


class Deduplicator:
    """Record of values already seen during a single deduplication pass.

    Simple values are tracked in a set of tokens. Complex values are kept in a
    list and scanned with :func:`deep_equal`, so each new complex value costs
    one comparison per distinct complex value recorded so far.
    """

    __slots__ = ("_complex", "_simple")

    def __init__(self) -> None:
        self._simple: set[SimpleToken] = set()
        self._complex: list[object] = []

    def __len__(self) -> int:
        return len(self._simple) + len(self._complex)

    def seen(self, value: object) -> bool:
        """Return whether an equal value was recorded, recording it if not.

        Args:
            value: Element or derived key to check.

        Returns:
            ``True`` when ``value`` duplicates an earlier value, ``False`` when
            it is new (it is recorded before returning).
        """
        if is_simple(value):
            token = simple_token(value)
            if token in self._simple:
                return True
            self._simple.add(token)
            return False
        if any(deep_equal(existing, value) for existing in self._complex):
            return True
        self._complex.append(value)
        return False


def distinct(values: Iterable[T]) -> list[T]:
    """Return the first occurrence of each distinct element, in order.

    Args:
        values: Elements to deduplicate. The iterable is read once and its
            elements are never modified.

    Returns:
        A new list holding the first element of every group of equal elements.

    Example:
        >>> distinct([1, 2, 2, 3, 1])
        [1, 2, 3]
        >>> distinct([{"id": 1}, {"id": 2}, {"id": 1}])
        [{'id': 1}, {'id': 2}]
    """
    tracker = Deduplicator()
    return [value for value in values if not tracker.seen(value)]


def distinct_by(values: Iterable[T], key: Callable[[T], object]) -> list[T]:
    """Return the first element for each distinct key, in order.

    ``key`` is called exactly once per element, in iteration order, including
    for elements that end up dropped. Anything it raises propagates to the
    caller unchanged.

    Args:
        values: Elements to deduplicate.
        key: Function deriving the comparison key from an element.

    Returns:
        A new list of original elements (not keys), one per distinct key.

    Example:
        >>> distinct_by(["apple", "apricot", "banana", "blueberry"], lambda s: s[0])
        ['apple', 'banana']
    """
    tracker = Deduplicator()
    result: list[T] = []
    for value in values:
        if tracker.seen(key(value)):
            continue
        result.append(value)
    return result
