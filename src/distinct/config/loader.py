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

"""Configuration loading for distinct.

Configuration is read from ``distinct.toml``, ``.distinct.toml`` or the
``[tool.distinct]`` table of ``pyproject.toml`` in the detected project root,
validated with pydantic, and returned as a ``Config`` dataclass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from distinct._internal.logging_utils import structured_extra
from distinct.compat import tomllib
from distinct.core.model_types import LogComponent
from distinct.runtime import resolve_project_root

from .constants import DEFAULT_CONFIG_FILENAME, HIDDEN_CONFIG_FILENAME, PYPROJECT_FILENAME, TOOL_TABLE
from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    config_from_model,
)

logger: logging.Logger = logging.getLogger("distinct.config")


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
    """

    config: Config
    path: Path | None


def load_config(explicit_path: Path | None = None) -> Config:
    """Load distinct configuration from a TOML file or use defaults.

    Args:
        explicit_path: Optional explicit path to a configuration file. If provided,
            only this file will be checked. If None, standard locations are searched.

    Returns:
        The resolved ``Config``.
    """
    return load_config_with_metadata(explicit_path).config


def load_config_with_metadata(explicit_path: Path | None = None) -> LoadedConfig:
    """Load distinct configuration with metadata about the source file.

    The search order is:
    1. If explicit_path is provided, only that path is checked, and it must
       contain distinct configuration.
    2. Otherwise ``distinct.toml``, ``.distinct.toml`` and ``pyproject.toml``
       are tried in the detected project root, using the first file that
       contains distinct configuration.

    Args:
        explicit_path: Optional explicit path to a configuration file.

    Returns:
        LoadedConfig: Parsed configuration and the path it originated from.

    Raises:
        ConfigReadError: If a candidate file cannot be read or parsed as TOML.
        InvalidConfigFileError: If a candidate file fails validation.
        ConfigFieldChoiceError: If a record format is not supported.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
    """
    for candidate in _config_search_order(explicit_path):
        loaded = _load_candidate_config(candidate, explicit=explicit_path is not None)
        if loaded is not None:
            logger.debug(
                "Loaded configuration from %s",
                loaded.path,
                extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
            )
            return loaded
    return LoadedConfig(config=Config(), path=None)


def _config_search_order(explicit_path: Path | None) -> list[Path]:
    if explicit_path:
        return [_resolve_candidate_path(explicit_path)]
    base_dir = resolve_project_root(Path.cwd())
    return [
        base_dir / DEFAULT_CONFIG_FILENAME,
        base_dir / HIDDEN_CONFIG_FILENAME,
        base_dir / PYPROJECT_FILENAME,
    ]


def _resolve_candidate_path(candidate: Path) -> Path:
    return candidate if candidate.is_absolute() else (Path.cwd() / candidate).resolve()


def _load_candidate_config(candidate: Path, *, explicit: bool) -> LoadedConfig | None:
    if not candidate.exists():
        if explicit:
            raise ConfigReadError(candidate, FileNotFoundError("file does not exist"))
        return None
    try:
        raw_map: dict[str, object] = tomllib.loads(candidate.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(candidate, exc) from exc

    payload = _extract_payload(candidate, raw_map)
    if payload is None:
        if explicit:
            message = f"{candidate.name} does not define a [tool.{TOOL_TABLE}] table"
            raise InvalidConfigFileError(candidate, ValueError(message))
        return None

    try:
        model = ConfigModel.model_validate(payload)
    except ValidationError as exc:
        domain_error = _domain_error(exc)
        if domain_error is not None:
            logger.debug(
                "Rejected configuration in %s",
                candidate,
                extra=structured_extra(component=LogComponent.CONFIG, path=candidate),
            )
            raise domain_error from exc
        raise InvalidConfigFileError(candidate, exc) from exc
    return LoadedConfig(config=config_from_model(model), path=candidate.resolve())


def _domain_error(exc: ValidationError) -> ConfigValidationError | None:
    """Return the first configuration error raised inside a model validator.

    pydantic wraps errors raised by validators in ``ValidationError``; the
    original exception is kept in the ``ctx`` of the matching error entry.
    """
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        original = ctx.get("error")
        if isinstance(original, ConfigValidationError):
            return original
    return None


def _extract_payload(candidate: Path, raw_map: dict[str, object]) -> dict[str, object] | None:
    """Extract the distinct configuration payload from a TOML mapping.

    Args:
        candidate: Source configuration path.
        raw_map: Data parsed from the TOML document.

    Returns:
        Mapping to validate, or None when a ``pyproject.toml`` has no
        ``[tool.distinct]`` table.

    Raises:
        InvalidConfigFileError: If [tool.distinct] exists but is not a table.
    """
    if candidate.name != PYPROJECT_FILENAME:
        return raw_map
    tool_section = raw_map.get("tool")
    if tool_section is None:
        return None
    if not isinstance(tool_section, dict):
        message = "[tool] in pyproject.toml must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    section = cast("dict[str, object]", tool_section).get(TOOL_TABLE)
    if section is None:
        return None
    if not isinstance(section, dict):
        message = f"[tool.{TOOL_TABLE}] must be a TOML table"
        raise InvalidConfigFileError(candidate, ValueError(message))
    return cast("dict[str, object]", section)


__all__ = ["LoadedConfig", "load_config", "load_config_with_metadata"]
