# Copyright 2026 Firefly Software Solutions Inc.
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
"""Outcome of a single resolution pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

SkipReason = Literal["unknown", "not_allowed", "forbidden"]


@dataclass(frozen=True)
class SkippedFilter:
    """A parameter or auto-apply entry that did not fire."""

    param: str | None
    operation: str
    reason: SkipReason


@dataclass
class ResolutionResult:
    """Record of what one pass applied.

    ``applied_filters`` maps operation name to the value it was invoked with,
    in execution order. An operation invoked twice keeps its first position
    and its latest value. ``skipped`` is diagnostic only.
    """

    target: Any = None
    applied_filters: dict[str, Any] = field(default_factory=dict)
    skipped: list[SkippedFilter] = field(default_factory=list)

    def record(self, name: str, value: Any) -> None:
        self.applied_filters[name] = value

    def skip(self, param: str | None, operation: str, reason: SkipReason) -> None:
        self.skipped.append(SkippedFilter(param=param, operation=operation, reason=reason))

    def was_applied(self, name: str) -> bool:
        return name in self.applied_filters

