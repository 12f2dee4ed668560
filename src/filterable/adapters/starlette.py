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
"""Starlette integration — build filters from incoming requests.

Only the query string is read; request bodies are left to the application.

Example::

    async def list_posts(request: Request) -> JSONResponse:
        post_filter = filter_from_request(PostFilter, request)
        stmt = post_filter.apply(select(Post))
        ...
        return JSONResponse({"filters": post_filter.get_applied_filters(), ...})
"""

from __future__ import annotations

from typing import Any, TypeVar

from starlette.requests import Request

from filterable.filterable import Filterable
from filterable.params import ParameterSource

F = TypeVar("F", bound=Filterable)


def request_params(request: Request) -> ParameterSource:
    """Query parameters of *request*, repeated keys included, in request order."""
    return ParameterSource(request.query_params.multi_items())


def filter_from_request(filter_cls: type[F], request: Request, **kwargs: Any) -> F:
    """Instantiate *filter_cls* fed by the query string of *request*."""
    return filter_cls(request_params(request), **kwargs)
