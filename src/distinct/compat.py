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

"""Version-tolerant imports for Python 3.10 and newer.

Callers import ``tomllib``, ``StrEnum``, ``UTC`` and the typing helpers from
here instead of branching on the interpreter version themselves. The stdlib is
preferred; ``tomli`` and ``typing_extensions`` cover older interpreters.
"""

from __future__ import annotations

import datetime as _dt
import enum as _enum
from datetime import timezone as _timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import tomli as tomllib
    from typing_extensions import TypedDict, Unpack, override
else:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:  # py<3.11
        import tomli as tomllib

    try:
        from typing import TypedDict, override  # py>=3.12
    except ImportError:
        from typing_extensions import TypedDict, override

    try:
        from typing import Unpack  # py>=3.11
    except ImportError:
        from typing_extensions import Unpack

UTC = getattr(_dt, "UTC", _timezone.utc)


class _StrEnumBase(str, _enum.Enum):
    """Enum whose members are also strings."""

    @override
    def __str__(self) -> str:
        return str(self.value)


StrEnum: type[_StrEnumBase] = getattr(_enum, "StrEnum", _StrEnumBase)

__all__ = ["UTC", "StrEnum", "TypedDict", "Unpack", "override", "tomllib"]
