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

"""distinct - order-preserving duplicate removal with deep equality.

``distinct`` keeps the first occurrence of every distinct element;
``distinct_by`` keeps the first element for every distinct derived key.
Primitive values are compared by value, composite values (mappings,
sequences, sets, dataclasses, plain objects) by structure.
"""

from __future__ import annotations

from distinct.exceptions import (
    ConfigFieldChoiceError,
    ConfigReadError,
    ConfigValidationError,
    DistinctError,
    DistinctTypeError,
    DistinctValidationError,
    InputDecodeError,
    InvalidConfigFileError,
    KeyPathError,
    UnsupportedConfigVersionError,
)

from .config import Config, load_config
from .core import Deduplicator, deep_equal, distinct, distinct_by, is_simple, key_path
from .logging import configure_logging

__all__ = [
    "Config",
    "ConfigFieldChoiceError",
    "ConfigReadError",
    "ConfigValidationError",
    "Deduplicator",
    "DistinctError",
    "DistinctTypeError",
    "DistinctValidationError",
    "InputDecodeError",
    "InvalidConfigFileError",
    "KeyPathError",
    "UnsupportedConfigVersionError",
    "__version__",
    "configure_logging",
    "deep_equal",
    "distinct",
    "distinct_by",
    "is_simple",
    "key_path",
    "load_config",
]

__version__ = "0.1.0"
