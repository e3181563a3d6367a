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

"""Key extractors built from dotted paths such as ``"meta.tags"`` or ``"items.0"``."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Final

from distinct._internal.exceptions import DistinctValidationError

__all__ = ["KeyPathError", "key_path", "parse_key_path"]

logger: logging.Logger = logging.getLogger("distinct.keys")

PATH_SEPARATOR: Final[str] = "."
_MISSING: Final[object] = object()


class KeyPathError(DistinctValidationError):
    """Raised when a key path is malformed or cannot be resolved strictly."""

    def __init__(self, path: str, segment: str | None, reason: str) -> None:
        """Initialize the exception with the offending path and segment.

        Args:
            path: The full dotted key path.
            segment: The segment that failed, or None when the path itself is invalid.
            reason: Human-readable description of the failure.
        """
        self.path = path
        self.segment = segment
        self.reason = reason
        where = f" at segment '{segment}'" if segment is not None else ""
        super().__init__(f"Key path '{path}'{where}: {reason}")


def parse_key_path(path: str) -> tuple[str, ...]:
    """Split a dotted key path into segments.

    Args:
        path: Dotted path, e.g. ``"details.city"``.

    Returns:
        The path segments in lookup order.

    Raises:
        KeyPathError: If the path or any of its segments is empty.
    """
    if not path.strip():
        raise KeyPathError(path, None, "path must not be empty")
    segments = tuple(path.split(PATH_SEPARATOR))
    for segment in segments:
        if not segment:
            raise KeyPathError(path, segment, "segments must not be empty")
    return segments


def _step(current: object, segment: str) -> object:
    if isinstance(current, Mapping):
        return current.get(segment, _MISSING)
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        try:
            return current[int(segment)]
        except (ValueError, IndexError):
            return _MISSING
    return getattr(current, segment, _MISSING)


def key_path(path: str, *, strict: bool = False, default: object = None) -> Callable[[object], object]:
    """Build a key extractor that walks ``path`` through nested values.

    Mapping segments are looked up by key, sequence segments by integer
    index, and any other value by attribute.

    Args:
        path: Dotted key path.
        strict: Raise ``KeyPathError`` when a segment is missing instead of
            returning ``default``.
        default: Key returned for elements where the path does not resolve.

    Returns:
        A single-argument callable suitable for ``distinct_by``.

    Raises:
        KeyPathError: If ``path`` is malformed.
    """
    segments = parse_key_path(path)

    def extract(value: object) -> object:
        current = value
        for segment in segments:
            current = _step(current, segment)
            if current is _MISSING:
                if strict:
                    raise KeyPathError(path, segment, "no such key, index or attribute")
                logger.debug("Key path %s missing segment %s; using default", path, segment)
                return default
        return current

    return extract
