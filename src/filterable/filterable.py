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
"""Base class for concrete filters.

Subclass :class:`Filterable`, mark operations with
:func:`~filterable.registry.filter_method`, and apply the filter to a query::

    class PostFilter(Filterable):
        default_aliases = {"cat": "category"}
        default_auto_apply = ["published"]
        default_defaults = {"published": True}

        @filter_method
        def category(self, value: str) -> None:
            self.query = self.query.where(Post.category == value)

        @filter_method
        def published(self, value: bool) -> None:
            self.query = self.query.where(Post.published.is_(value))

    stmt = PostFilter.make(request.query_params).only(["category"]).apply(select(Post))

Inside an operation the query being filtered is ``self.query``. An operation
may reassign it, mutate it in place, or return a replacement.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Self

from filterable.configuration import FilterConfiguration
from filterable.params import ParameterSource, ParamsLike
from filterable.registry import Operation, OperationRegistry, operation_names
from filterable.resolver import FilterResolver
from filterable.result import ResolutionResult


class Filterable:
    """A filter bound to one parameter source and one set of rules."""

    default_aliases: dict[str, str] = {}
    default_only: list[str] = []
    default_except: list[str] = []
    default_defaults: dict[str, Any] = {}
    default_auto_apply: list[str] = []

    def __init__(
        self,
        params: ParamsLike = None,
        configuration: FilterConfiguration | None = None,
        resolver: FilterResolver | None = None,
    ) -> None:
        self.query: Any = None
        self._params = ParameterSource.of(params)
        if configuration is not None:
            self._configuration = configuration.copy()
        else:
            self._configuration = FilterConfiguration(
                aliases=self.default_aliases,
                allowed=self.default_only,
                forbidden=self.default_except,
                defaults=self.default_defaults,
                auto_apply=self.default_auto_apply,
            )
        self._resolver = resolver or FilterResolver()
        self._result = ResolutionResult()

    @classmethod
    def make(cls, params: ParamsLike = None, **kwargs: Any) -> Self:
        """Create a filter instance (fluent entry point)."""
        return cls(params, **kwargs)

    # ------------------------------------------------------------------
    # Parameter source
    # ------------------------------------------------------------------

    def set_params(self, params: ParamsLike) -> Self:
        self._params = ParameterSource.of(params)
        return self

    def set_request(self, request: Any) -> Self:
        """Use the query string of an HTTP request (anything with ``query_params``)."""
        self._params = ParameterSource.of(request.query_params)
        return self

    @property
    def params(self) -> ParameterSource:
        return self._params

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    @property
    def configuration(self) -> FilterConfiguration:
        return self._configuration

    def aliases(self, aliases: Mapping[str, str]) -> Self:
        """Map request parameters to operations: ``{"request_param": "operation"}``."""
        self._configuration.set_aliases(aliases)
        return self

    def only(self, filters: Iterable[str]) -> Self:
        self._configuration.set_allowed(filters)
        return self

    def exclude(self, filters: Iterable[str]) -> Self:
        self._configuration.set_forbidden(filters)
        return self

    def defaults(self, defaults: Mapping[str, Any]) -> Self:
        self._configuration.set_defaults(defaults)
        return self

    def auto_apply(self, filters: Iterable[str]) -> Self:
        self._configuration.set_auto_apply(filters)
        return self

    # ------------------------------------------------------------------
    # Application
    # ------------------------------------------------------------------

    def apply(self, query: Any) -> Any:
        """Filter *query* and return the result.

        Applied filters from any previous call are discarded.
        """
        self.query = query
        target, self._result = self._resolver.apply(query, self._params, self.registry(), self._configuration)
        self.query = target
        return target

    def apply_filter(self, name: str, value: Any = None) -> Self:
        """Invoke one operation on the current query, ignoring allow/deny rules.

        Raises:
            UnknownOperationException: *name* is not an operation of this filter.
        """
        self._result.target = self.query
        self.query, self._result = self._resolver.apply_filter(
            self.query,
            name,
            self.registry(),
            self._configuration,
            params=self._params,
            value=value,
            result=self._result,
        )
        return self

    def registry(self) -> OperationRegistry:
        """Operations of this filter, bound so that results land on ``self.query``."""
        return OperationRegistry(
            {name: self._bind(getattr(self, attr)) for name, attr in operation_names(type(self)).items()}
        )

    def _bind(self, method: Operation) -> Operation:
        def operation(value: Any) -> Any:
            returned = method(value)
            if returned is not None:
                self.query = returned
            return self.query

        return operation

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_applied_filters(self) -> dict[str, Any]:
        """Operations applied by the most recent pass, with their values."""
        return dict(self._result.applied_filters)

    def get_configured_filters(self) -> dict[str, Any]:
        return self._configuration.to_dict()

    @property
    def result(self) -> ResolutionResult:
        return self._result
