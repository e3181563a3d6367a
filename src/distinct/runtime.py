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

"""Runtime helpers shared by the configuration and CLI layers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Literal, TypeAlias

from distinct._internal.logging_utils import structured_extra
from distinct.core.model_types import LogComponent

__all__ = ["ROOT_MARKERS", "RootMarker", "consume", "resolve_project_root"]

logger: logging.Logger = logging.getLogger("distinct.config")

RootMarker: TypeAlias = Literal["distinct.toml", ".distinct.toml", "pyproject.toml"]

ROOT_MARKERS: Final[tuple[RootMarker, RootMarker, RootMarker]] = (
    "distinct.toml",
    ".distinct.toml",
    "pyproject.toml",
)


def consume(value: object) -> None:
    """Explicitly discard a return value."""
    _ = value


def resolve_project_root(start: Path | None = None) -> Path:
    """Resolve the project root by walking parent directories for markers.

    Args:
        start: Optional starting path (defaults to current working directory).

    Returns:
        The nearest directory containing a root marker, or the starting
        directory when none is found.
    """
    base = (start or Path.cwd()).resolve()
    if base.is_file():
        base = base.parent

    for candidate in (base, *base.parents):
        for marker in ROOT_MARKERS:
            if (candidate / marker).exists():
                return candidate

    logger.debug(
        "No project markers found above %s; using it as project root",
        base,
        extra=structured_extra(component=LogComponent.CONFIG, path=base),
    )
    return base
