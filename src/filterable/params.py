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
"""Read-only, ordered view over the parameters a filter pass consumes.

Accepts a plain mapping, a multi-dict exposing ``multi_items()`` (such as
Starlette's ``QueryParams``), or any iterable of ``(name, value)`` pairs.
``items()`` yields every pair in source order, repeats included.
``latest_items()`` and lookups see one entry per name carrying the last
value given for it, positioned where the name first appeared.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Union

ParamsLike = Union["ParameterSource", Mapping[str, Any], Iterable[tuple[str, Any]], None]


class ParameterSource:
    """Ordered ``(name, value)`` pairs with last-value-wins lookup."""

    __slots__ = ("_pairs", "_lookup")

    def __init__(self, pairs: Iterable[tuple[str, Any]] = ()) -> None:
        self._pairs: tuple[tuple[str, Any], ...] = tuple((str(name), value) for name, value in pairs)
        self._lookup: dict[str, Any] = dict(self._pairs)

    @classmethod
    def of(cls, params: ParamsLike) -> ParameterSource:
        """Wrap *params* unless it already is a ParameterSource."""
        if params is None:
            return cls()
        if isinstance(params, ParameterSource):
            return params
        multi_items = getattr(params, "multi_items", None)
        if callable(multi_items):
            return cls(multi_items())
        if isinstance(params, Mapping):
            return cls(params.items())
        return cls(params)

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(self._pairs)

    def latest_items(self) -> Iterator[tuple[str, Any]]:
        """One ``(name, value)`` per distinct name, last value wins."""
        return iter(self._lookup.items())

    def get(self, name: str, default: Any = None) -> Any:
        return self._lookup.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._lookup)

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._pairs)

    def __repr__(self) -> str:
        return f"ParameterSource({list(self._pairs)!r})"
