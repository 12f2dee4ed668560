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
"""Declarative filter rules: aliases, allow/deny lists, defaults and auto-apply.

Every setter replaces its whole collection and returns the configuration,
so rules chain fluently::

    config = (
        FilterConfiguration()
        .set_aliases({"cat": "category"})
        .set_allowed(["title", "category"])
        .set_forbidden(["created_at"])
        .set_defaults({"published": True})
        .set_auto_apply(["published"])
    )

Names are not checked against any registry here; unknown names only matter
when a pass runs (see :class:`~filterable.resolver.FilterResolver`).
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from filterable.config.properties import FilterProfileProperties

if TYPE_CHECKING:
    from filterable.core.config import Config


class FilterConfiguration:
    """Rule state consumed by a resolution pass. Treat as read-only while in use."""

    __slots__ = ("aliases", "allowed", "forbidden", "defaults", "auto_apply")

    def __init__(
        self,
        aliases: Mapping[str, str] | None = None,
        allowed: Iterable[str] | None = None,
        forbidden: Iterable[str] | None = None,
        defaults: Mapping[str, Any] | None = None,
        auto_apply: Iterable[str] | None = None,
    ) -> None:
        self.aliases: dict[str, str] = dict(aliases or {})
        self.allowed: list[str] = list(allowed or [])
        self.forbidden: list[str] = list(forbidden or [])
        self.defaults: dict[str, Any] = dict(defaults or {})
        self.auto_apply: list[str] = list(auto_apply or [])

    # ------------------------------------------------------------------
    # Fluent setters
    # ------------------------------------------------------------------

    def set_aliases(self, aliases: Mapping[str, str]) -> FilterConfiguration:
        """Map request parameter names to operation names (``{"cat": "category"}``)."""
        self.aliases = dict(aliases)
        return self

    def set_allowed(self, names: Iterable[str]) -> FilterConfiguration:
        """Whitelist operations; an empty list lifts the restriction."""
        self.allowed = list(names)
        return self

    def set_forbidden(self, names: Iterable[str]) -> FilterConfiguration:
        """Blacklist operations; wins over the whitelist."""
        self.forbidden = list(names)
        return self

    def set_defaults(self, defaults: Mapping[str, Any]) -> FilterConfiguration:
        self.defaults = dict(defaults)
        return self

    def set_auto_apply(self, names: Iterable[str]) -> FilterConfiguration:
        """Operations to run on every pass, in the given order."""
        self.auto_apply = list(names)
        return self

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FilterConfiguration:
        """Build from a dict using the profile keys.

        Accepts ``aliases``, ``allowed`` (or ``only``), ``forbidden`` (or
        ``except``), ``defaults`` and ``auto_apply``. Unknown keys raise
        ``ValueError``.
        """
        return cls.from_profile(FilterProfileProperties.from_section(dict(data)))

    @classmethod
    def from_profile(cls, profile: FilterProfileProperties) -> FilterConfiguration:
        return cls(
            aliases=profile.aliases,
            allowed=profile.allowed,
            forbidden=profile.forbidden,
            defaults=profile.defaults,
            auto_apply=profile.auto_apply,
        )

    @classmethod
    def from_config(cls, config: Config, name: str) -> FilterConfiguration:
        """Load the ``filterable.filters.<name>`` profile from *config*.

        A missing profile yields an empty (unrestricted) configuration.
        """
        return cls.from_mapping(config.get_section(f"filterable.filters.{name}"))

    def copy(self) -> FilterConfiguration:
        """Independent copy, e.g. one per request when a configuration is shared."""
        return FilterConfiguration(
            aliases=self.aliases,
            allowed=self.allowed,
            forbidden=self.forbidden,
            defaults=copy.deepcopy(self.defaults),
            auto_apply=self.auto_apply,
        )

    # ------------------------------------------------------------------
    # Queries used by the resolver
    # ------------------------------------------------------------------

    def canonical_name(self, param: str) -> str:
        """Operation name a request parameter resolves to."""
        return self.aliases.get(param, param)

    def reverse_aliases(self) -> dict[str, str]:
        """Map each aliased operation to the parameter that feeds it.

        When several parameters alias the same operation, the first one
        declared wins.
        """
        reverse: dict[str, str] = {}
        for param, operation in self.aliases.items():
            reverse.setdefault(operation, param)
        return reverse

    def is_permitted(self, name: str) -> bool:
        """Whitelist/blacklist check only; registry membership is the resolver's concern."""
        if name in self.forbidden:
            return False
        return not self.allowed or name in self.allowed

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the configured rules."""
        return {
            "autoApply": list(self.auto_apply),
            "aliases": dict(self.aliases),
            "allowed": list(self.allowed),
            "forbidden": list(self.forbidden),
            "defaults": dict(self.defaults),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterConfiguration):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"FilterConfiguration(aliases={self.aliases!r}, allowed={self.allowed!r}, "
            f"forbidden={self.forbidden!r}, defaults={self.defaults!r}, auto_apply={self.auto_apply!r})"
        )
