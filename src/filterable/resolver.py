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
"""Resolution engine — decides which filter operations fire and with which values.

A pass runs in two phases against an opaque target:

1. **Auto-apply**: every configured auto-apply name that the registry knows
   is invoked, in configured order. Unknown names are skipped.
2. **Request**: every distinct parameter name, in order of first
   appearance and carrying its last value, is mapped through the alias
   table and invoked when the operation is registered, whitelisted (or no
   whitelist is set) and not blacklisted. Anything else is ignored.

Values resolve in three tiers: the explicit value, then the value the
request carries for the operation's parameter, then the configured default.
``None`` and ``""`` count as blank and fall through to the next tier.

An operation that returns something other than ``None`` replaces the
current target, which lets generative builders such as SQLAlchemy's
``Select`` be filtered as well as mutable ones.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from filterable.config.properties import FilterableProperties
from filterable.configuration import FilterConfiguration
from filterable.core.config import Config
from filterable.exceptions import InvalidConfigurationException, UnknownOperationException
from filterable.logging import configure_logging
from filterable.params import ParameterSource, ParamsLike
from filterable.registry import Operation
from filterable.result import ResolutionResult

logger = structlog.get_logger("filterable.resolver")

Registry = Mapping[str, Operation]


def is_blank(value: Any) -> bool:
    """``None`` and the empty string carry no filter value."""
    return value is None or (isinstance(value, str) and value == "")


class FilterResolver:
    """Stateless resolution engine; one instance can serve any number of passes.

    Args:
        strict: Validate the configuration against the registry before each
            pass and raise :class:`InvalidConfigurationException` when an
            auto-apply or default entry names an unregistered operation.
        record_skipped: Collect skipped parameters on the result.
    """

    def __init__(self, strict: bool = False, record_skipped: bool = True) -> None:
        self.strict = strict
        self.record_skipped = record_skipped

    @classmethod
    def from_properties(cls, properties: FilterableProperties) -> FilterResolver:
        return cls(strict=properties.strict, record_skipped=properties.record_skipped)

    @classmethod
    def from_config(cls, config: Config) -> FilterResolver:
        """Build a resolver from ``filterable.*`` settings.

        With ``filterable.configure_logging`` set, structlog output for the
        ``filterable`` namespace is configured from ``filterable.logging.*`` too.
        """
        properties = config.bind(FilterableProperties)
        if properties.configure_logging:
            configure_logging(config)
        return cls.from_properties(properties)

    # ------------------------------------------------------------------
    # Driven pass
    # ------------------------------------------------------------------

    def apply(
        self,
        target: Any,
        params: ParamsLike,
        registry: Registry,
        configuration: FilterConfiguration,
    ) -> tuple[Any, ResolutionResult]:
        """Run both phases and return the filtered target with its result."""
        if self.strict:
            self.validate(registry, configuration)

        source = ParameterSource.of(params)
        reverse = configuration.reverse_aliases()
        result = ResolutionResult(target=target)

        self._apply_auto_filters(result, source, registry, configuration, reverse)
        self._apply_request_filters(result, source, registry, configuration, reverse)

        logger.debug(
            "filters_resolved",
            applied=list(result.applied_filters),
            skipped=len(result.skipped),
        )
        return result.target, result

    def _apply_auto_filters(
        self,
        result: ResolutionResult,
        source: ParameterSource,
        registry: Registry,
        configuration: FilterConfiguration,
        reverse: dict[str, str],
    ) -> None:
        for name in configuration.auto_apply:
            if name not in registry:
                self._skip(result, None, name, "unknown")
                continue
            value = self.resolve_value(name, None, source, configuration, reverse)
            self._invoke(result, registry, name, value)

    def _apply_request_filters(
        self,
        result: ResolutionResult,
        source: ParameterSource,
        registry: Registry,
        configuration: FilterConfiguration,
        reverse: dict[str, str],
    ) -> None:
        for param, raw_value in source.latest_items():
            name = configuration.canonical_name(param)
            if name not in registry:
                self._skip(result, param, name, "unknown")
            elif name in configuration.forbidden:
                self._skip(result, param, name, "forbidden")
            elif not configuration.is_permitted(name):
                self._skip(result, param, name, "not_allowed")
            else:
                value = self.resolve_value(name, raw_value, source, configuration, reverse)
                self._invoke(result, registry, name, value)

    # ------------------------------------------------------------------
    # Direct invocation
    # ------------------------------------------------------------------

    def apply_filter(
        self,
        target: Any,
        name: str,
        registry: Registry,
        configuration: FilterConfiguration,
        params: ParamsLike = None,
        value: Any = None,
        result: ResolutionResult | None = None,
    ) -> tuple[Any, ResolutionResult]:
        """Invoke a single operation by name, bypassing eligibility rules.

        The value resolves like any other (explicit, then request, then
        default). When *result* is given the invocation is recorded on it
        and its target is used; otherwise a fresh result wraps *target*.

        Raises:
            UnknownOperationException: *name* is not in *registry*.
        """
        if name not in registry:
            raise UnknownOperationException(name)

        if result is None:
            result = ResolutionResult(target=target)
        source = ParameterSource.of(params)
        resolved = self.resolve_value(name, value, source, configuration)
        self._invoke(result, registry, name, resolved)
        return result.target, result

    # ------------------------------------------------------------------
    # Value resolution and validation
    # ------------------------------------------------------------------

    def resolve_value(
        self,
        name: str,
        override: Any,
        params: ParamsLike,
        configuration: FilterConfiguration,
        reverse: dict[str, str] | None = None,
    ) -> Any:
        """Resolve the value for operation *name*.

        Returns *override* unless blank, then the request value of the
        parameter feeding *name* unless blank, then ``defaults[name]``,
        else ``None``.
        """
        if not is_blank(override):
            return override

        if reverse is None:
            reverse = configuration.reverse_aliases()
        param = reverse.get(name, name)
        requested = ParameterSource.of(params).get(param)
        if not is_blank(requested):
            return requested

        return configuration.defaults.get(name)

    def validate(self, registry: Registry, configuration: FilterConfiguration) -> None:
        """Raise if auto-apply or default entries name unregistered operations."""
        unknown_auto = [name for name in configuration.auto_apply if name not in registry]
        unknown_defaults = [name for name in configuration.defaults if name not in registry]
        if unknown_auto or unknown_defaults:
            raise InvalidConfigurationException(unknown_auto, unknown_defaults)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _invoke(self, result: ResolutionResult, registry: Registry, name: str, value: Any) -> None:
        result.record(name, value)
        logger.debug("filter_applied", filter=name, value=value)
        returned = registry[name](value)
        if returned is not None:
            result.target = returned

    def _skip(self, result: ResolutionResult, param: str | None, name: str, reason: str) -> None:
        logger.debug("filter_skipped", param=param, filter=name, reason=reason)
        if self.record_skipped:
            result.skip(param, name, reason)  # type: ignore[arg-type]
