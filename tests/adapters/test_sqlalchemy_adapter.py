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
"""Tests for the SQLAlchemy integration — filters applied to real queries."""

from __future__ import annotations

import pytest
from sqlalchemy import String, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from filterable import Filterable, filter_method
from filterable.adapters.sqlalchemy import FilterableMixin, apply_filterable

# ---------------------------------------------------------------------------
# Test entity and filter
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Post(FilterableMixin, Base):
    __tablename__ = "filterable_posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    category: Mapped[str] = mapped_column(String(50))
    published: Mapped[bool] = mapped_column(default=True)


class PostFilter(Filterable):
    default_aliases = {"cat": "category"}
    default_defaults = {"published": True}
    default_auto_apply = ["published"]

    @filter_method
    def title(self, value: str) -> None:
        self.query = self.query.where(Post.title.contains(value))

    @filter_method
    def category(self, value: str) -> None:
        self.query = self.query.where(Post.category == value)

    @filter_method
    def published(self, value: object) -> None:
        flag = value if isinstance(value, bool) else str(value).lower() in ("1", "true", "yes")
        self.query = self.query.where(Post.published.is_(flag))

    @filter_method
    def sort(self, value: str):
        column = getattr(Post, value.lstrip("-"))
        return self.query.order_by(column.desc() if value.startswith("-") else column.asc())


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    session.add_all(
        [
            Post(id=1, title="Python news", category="news", published=True),
            Post(id=2, title="Draft news", category="news", published=False),
            Post(id=3, title="Python blog", category="blog", published=True),
            Post(id=4, title="Another blog", category="blog", published=True),
        ]
    )
    await session.flush()
    return session


async def _ids(session: AsyncSession, stmt) -> list[int]:
    result = await session.execute(stmt)
    return [p.id for p in result.scalars().all()]


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestFilterableScope:
    @pytest.mark.asyncio
    async def test_auto_apply_default_only(self, seeded_session: AsyncSession):
        stmt = Post.filterable(PostFilter.make()).order_by(Post.id)
        assert await _ids(seeded_session, stmt) == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_alias_and_default(self, seeded_session: AsyncSession):
        stmt = Post.filterable(PostFilter.make({"cat": "news"})).order_by(Post.id)
        assert await _ids(seeded_session, stmt) == [1]

    @pytest.mark.asyncio
    async def test_request_value_overrides_default(self, seeded_session: AsyncSession):
        post_filter = PostFilter.make({"published": "false"}).exclude(["published"])
        stmt = Post.filterable(post_filter).order_by(Post.id)
        assert await _ids(seeded_session, stmt) == [2]
        assert post_filter.get_applied_filters() == {"published": "false"}

    @pytest.mark.asyncio
    async def test_returned_statement_replaces_query(self, seeded_session: AsyncSession):
        stmt = Post.filterable(PostFilter.make({"cat": "blog", "sort": "-id"}))
        assert await _ids(seeded_session, stmt) == [4, 3]

    @pytest.mark.asyncio
    async def test_whitelist_blocks_unlisted_filters(self, seeded_session: AsyncSession):
        post_filter = PostFilter.make({"title": "Python", "cat": "blog"}).only(["title"])
        stmt = Post.filterable(post_filter).order_by(Post.id)
        assert await _ids(seeded_session, stmt) == [1, 3]
        assert post_filter.get_applied_filters() == {"published": True, "title": "Python"}

    @pytest.mark.asyncio
    async def test_custom_base_statement(self, seeded_session: AsyncSession):
        base = select(Post).where(Post.id > 1).order_by(Post.id)
        stmt = Post.filterable(PostFilter.make({"title": "blog"}), base)
        assert await _ids(seeded_session, stmt) == [3, 4]

    @pytest.mark.asyncio
    async def test_query_filter_keyword(self, seeded_session: AsyncSession):
        stmt = Post.filterable(query_filter=PostFilter.make({"cat": "blog"}), statement=select(Post).order_by(Post.id))
        assert await _ids(seeded_session, stmt) == [3, 4]
        stmt = apply_filterable(select(Post).order_by(Post.id), query_filter=PostFilter.make({"title": "Draft"}))
        assert await _ids(seeded_session, stmt) == []

    @pytest.mark.asyncio
    async def test_apply_filterable_function(self, seeded_session: AsyncSession):
        stmt = apply_filterable(select(Post).order_by(Post.id), PostFilter.make({"cat": "news"}))
        assert await _ids(seeded_session, stmt) == [1]
