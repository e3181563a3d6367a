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

"""JSON record helpers used by the distinct command line.

This module intentionally has no dependencies on logging, configuration, or
CLI layers to keep the dependency graph simple and acyclic.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypeAlias, cast

from pydantic import JsonValue

from distinct._internal.exceptions import DistinctValidationError
from distinct.core.model_types import RecordFormat

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = [
    "InputDecodeError",
    "JSONList",
    "JSONValue",
    "dump_json_records",
    "load_json_records",
]

JSONValue: TypeAlias = JsonValue
JSONList = list[JsonValue]


class InputDecodeError(DistinctValidationError):
    """Raised when record input is not valid JSON or JSON Lines."""

    def __init__(self, reason: str, *, line: int | None = None) -> None:
        """Initialize the exception with the decode failure and its location.

        Args:
            reason: Description of the decode failure.
            line: 1-based line number of the failing record, when known.
        """
        self.reason = reason
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"Invalid record input{where}: {reason}")


def _load_array(payload: str) -> JSONList:
    if not payload.strip():
        return []
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise InputDecodeError(exc.msg, line=exc.lineno) from exc
    if not isinstance(data, list):
        message = f"expected a JSON array, got {type(data).__name__}"
        raise InputDecodeError(message)
    return cast("JSONList", data)


def _load_lines(payload: str) -> JSONList:
    records: JSONList = []
    for lineno, line in enumerate(payload.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(cast("JsonValue", json.loads(line)))
        except json.JSONDecodeError as exc:
            raise InputDecodeError(exc.msg, line=lineno) from exc
    return records


def load_json_records(payload: str, input_format: RecordFormat = RecordFormat.JSON) -> JSONList:
    """Parse record input into a list of JSON values.

    Args:
        payload: Raw text read from a file or stdin.
        input_format: ``json`` expects one array; ``jsonl`` one document per
            non-blank line.

    Returns:
        The decoded records in input order. Empty input yields an empty list.

    Raises:
        InputDecodeError: If the payload cannot be decoded.
    """
    if input_format is RecordFormat.JSONL:
        return _load_lines(payload)
    return _load_array(payload)


def dump_json_records(
    records: Sequence[JsonValue],
    output_format: RecordFormat = RecordFormat.JSON,
    *,
    indent: int | None = 2,
) -> str:
    """Serialise records as a JSON array or JSON Lines.

    Args:
        records: Records to write.
        output_format: Target layout.
        indent: Indentation for ``json`` output; ignored for ``jsonl``.

    Returns:
        Serialised text ending in a newline (empty string for no JSONL records).
    """
    if output_format is RecordFormat.JSONL:
        return "".join(f"{json.dumps(record, ensure_ascii=False)}\n" for record in records)
    return json.dumps(list(records), indent=indent, ensure_ascii=False) + "\n"
