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
"""Typed configuration properties for the filter engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from filterable.core.config import config_properties

_SYNONYMS = {"only": "allowed", "except": "forbidden", "auto-apply": "auto_apply"}


@config_properties(prefix="filterable")
@dataclass
class FilterableProperties:
    """Resolver settings (filterable.*)."""

    strict: bool = False
    record_skipped: bool = True
    configure_logging: bool = False


@dataclass
class FilterProfileProperties:
    """A named set of filter rules (filterable.filters.<name>).

    ``only`` and ``except`` are accepted as synonyms of ``allowed`` and
    ``forbidden``; when both spellings are present the explicit list wins.
    """

    aliases: dict[str, str] = field(default_factory=dict)
    allowed: list[str] = field(default_factory=list)
    forbidden: list[str] = field(default_factory=list)
    defaults: dict[str, Any] = field(default_factory=dict)
    auto_apply: list[str] = field(default_factory=list)

    @classmethod
    def from_section(cls, section: dict[str, Any]) -> FilterProfileProperties:
        """Build a profile from a raw config section, rejecting unknown keys."""
        data = dict(section)
        for synonym, key in _SYNONYMS.items():
            if synonym in data:
                value = data.pop(synonym)
                data.setdefault(key, value)

        known = {"aliases", "allowed", "forbidden", "defaults", "auto_apply"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown filter profile keys: {', '.join(unknown)}")

        return cls(
            aliases=dict(data.get("aliases") or {}),
            allowed=list(data.get("allowed") or []),
            forbidden=list(data.get("forbidden") or []),
            defaults=dict(data.get("defaults") or {}),
            auto_apply=list(data.get("auto_apply") or []),
        )
