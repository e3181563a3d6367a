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

"""Configuration models and errors for distinct."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from distinct._internal.exceptions import DistinctValidationError
from distinct.core.model_types import RecordFormat

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "CONFIG_VERSION",
    "Config",
    "ConfigFieldChoiceError",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "UnsupportedConfigVersionError",
    "config_from_model",
]

CONFIG_VERSION: Final[int] = 0
RECORD_FORMAT_VALUES: Final[tuple[str, ...]] = tuple(format_.value for format_ in RecordFormat)


class ConfigValidationError(DistinctValidationError):
    """Raised when configuration data contains invalid values."""


class ConfigFieldChoiceError(ConfigValidationError):
    """Raised when a configuration field is provided with an unsupported value."""

    def __init__(self, field: str, allowed: tuple[str, ...]) -> None:
        """Initialize the exception with the field name and allowed values.

        Args:
            field: The name of the configuration field with an invalid value.
            allowed: Tuple of allowed values for this field.
        """
        self.field = field
        self.allowed = allowed
        allowed_text = ", ".join(sorted(allowed))
        super().__init__(f"{field} must be one of: {allowed_text}")


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of distinct.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when a configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid distinct configuration in {path}: {error}")


@dataclass(slots=True)
class Config:
    """Runtime settings for the ``distinct run`` command.

    Attributes:
        key: Dotted key path used for ``distinct_by``; None deduplicates whole records.
        strict_keys: Fail on records where ``key`` does not resolve.
        input_format: Layout of record input.
        output_format: Layout of record output.
        indent: Indentation for JSON array output; None writes compact JSON.
    """

    key: str | None = None
    strict_keys: bool = False
    input_format: RecordFormat = RecordFormat.JSON
    output_format: RecordFormat = RecordFormat.JSON
    indent: int | None = 2


class ConfigModel(BaseModel):
    """Pydantic model validating distinct configuration read from TOML."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    config_version: int = Field(default=CONFIG_VERSION)
    key: str | None = None
    strict_keys: bool = False
    input_format: RecordFormat = RecordFormat.JSON
    output_format: RecordFormat = RecordFormat.JSON
    indent: Annotated[int, Field(ge=0)] | None = 2

    @field_validator("input_format", "output_format", mode="before")
    @classmethod
    def _normalise_format(cls, value: object) -> RecordFormat:
        if isinstance(value, RecordFormat):
            return value
        field = "record format"
        if isinstance(value, str):
            try:
                return RecordFormat.from_str(value)
            except ValueError as exc:
                raise ConfigFieldChoiceError(field, RECORD_FORMAT_VALUES) from exc
        raise ConfigFieldChoiceError(field, RECORD_FORMAT_VALUES)

    @field_validator("key", mode="before")
    @classmethod
    def _strip_key(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @model_validator(mode="after")
    def _check_version(self) -> ConfigModel:
        if self.config_version != CONFIG_VERSION:
            raise UnsupportedConfigVersionError(self.config_version, CONFIG_VERSION)
        return self


def config_from_model(model: ConfigModel) -> Config:
    """Convert a validated ``ConfigModel`` into the runtime ``Config`` dataclass."""
    return Config(
        key=model.key,
        strict_keys=model.strict_keys,
        input_format=model.input_format,
        output_format=model.output_format,
        indent=model.indent,
    )
