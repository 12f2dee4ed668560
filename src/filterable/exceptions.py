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
"""Exception hierarchy for Filterable.

All library errors inherit from FilterableException, so callers can catch
the base class or target a specific failure.

Categories:
- UnknownOperationException: a filter was invoked by name and does not exist
- InvalidConfigurationException: strict validation found rules that reference
  filters the registry does not provide
"""

from __future__ import annotations

from collections.abc import Iterable


class FilterableException(Exception):
    """Base exception for all Filterable errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FILTER_UNKNOWN_OPERATION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class UnknownOperationException(FilterableException):
    """A filter operation was invoked directly but is not registered.

    Only raised by direct invocation; resolution passes skip unknown names.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            message=f"Filter method {operation} does not exist",
            code="FILTER_UNKNOWN_OPERATION",
            context={"operation": operation},
        )


class InvalidConfigurationException(FilterableException):
    """Filter rules reference operations missing from the registry."""

    def __init__(
        self,
        unknown_auto_apply: Iterable[str] = (),
        unknown_defaults: Iterable[str] = (),
    ) -> None:
        self.unknown_auto_apply = list(unknown_auto_apply)
        self.unknown_defaults = list(unknown_defaults)
        parts = []
        if self.unknown_auto_apply:
            parts.append(f"auto-apply: {', '.join(self.unknown_auto_apply)}")
        if self.unknown_defaults:
            parts.append(f"defaults: {', '.join(self.unknown_defaults)}")
        super().__init__(
            message=f"Filter configuration references unknown operations ({'; '.join(parts)})",
            code="FILTER_INVALID_CONFIGURATION",
            context={
                "unknown_auto_apply": self.unknown_auto_apply,
                "unknown_defaults": self.unknown_defaults,
            },
        )
