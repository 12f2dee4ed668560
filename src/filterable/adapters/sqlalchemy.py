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
"""SQLAlchemy integration — a ``filterable`` scope for declarative models.

Example::

    class Post(FilterableMixin, Base):
        __tablename__ = "posts"
        ...

    stmt = Post.filterable(PostFilter.make(request.query_params))
    posts = (await session.execute(stmt)).scalars().all()

Filter operations receive the ``Select`` as ``self.query`` and, since
``Select`` is generative, reassign it (``self.query = self.query.where(...)``).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, select

from filterable.filterable import Filterable


def apply_filterable(statement: Select[Any], query_filter: Filterable) -> Select[Any]:
    """Apply *query_filter* to *statement* and return the filtered statement."""
    return query_filter.apply(statement)


class FilterableMixin:
    """Mixin for mapped classes adding :meth:`filterable`."""

    @classmethod
    def filterable(cls, query_filter: Filterable, statement: Select[Any] | None = None) -> Select[Any]:
        """Return ``select(cls)`` (or *statement*) with *query_filter* applied."""
        if statement is None:
            statement = select(cls)
        return apply_filterable(statement, query_filter)
