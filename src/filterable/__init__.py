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
"""Filterable — declarative resolution of request parameters into query filters.

Concrete filters subclass :class:`Filterable` and expose operations with
:func:`filter_method`. The :class:`FilterResolver` engine decides which
operations run, with what value, under a :class:`FilterConfiguration`
(aliases, allow/deny lists, defaults, auto-apply).
"""

from filterable.configuration import FilterConfiguration
from filterable.exceptions import (
    FilterableException,
    InvalidConfigurationException,
    UnknownOperationException,
)
from filterable.filterable import Filterable
from filterable.params import ParameterSource
from filterable.registry import OperationRegistry, filter_method
from filterable.resolver import FilterResolver
from filterable.result import ResolutionResult, SkippedFilter

__all__ = [
    "FilterConfiguration",
    "FilterResolver",
    "Filterable",
    "FilterableException",
    "InvalidConfigurationException",
    "OperationRegistry",
    "ParameterSource",
    "ResolutionResult",
    "SkippedFilter",
    "UnknownOperationException",
    "filter_method",
]
