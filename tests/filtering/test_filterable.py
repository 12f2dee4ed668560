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
"""Tests for the Filterable base class."""

from __future__ import annotations

from typing import Any

import pytest

from filterable import Filterable, FilterConfiguration, FilterResolver, filter_method
from filterable.exceptions import InvalidConfigurationException, UnknownOperationException


class Query:
    """Mutable accumulator standing in for a query builder."""

    def __init__(self) -> None:
        self.wheres: list[tuple[str, Any]] = []

    def where(self, column: str, value: Any) -> Query:
        self.wheres.append((column, value))
        return self


class PostFilter(Filterable):
    @filter_method
    def title(self, value: str) -> None:
        self.query.where("title", value)

    @filter_method
    def category(self, value: str) -> None:
        self.query.where("category", value)

    @filter_method
    def published(self, value: bool) -> None:
        self.query.where("published", value)

    @filter_method
    def created_at(self, value: str) -> None:
        self.query.where("created_at", value)

    def apply_everything(self, value: Any) -> None:
        self.query.where("everything", value)


class DefaultsFilter(PostFilter):
    default_aliases = {"cat": "category"}
    default_defaults = {"published": True}
    default_auto_apply = ["published"]
    default_except = ["created_at"]


class TestApply:
    def test_applies_request_params(self):
        query = PostFilter.make({"title": "Hello"}).apply(Query())
        assert query.wheres == [("title", "Hello")]

    def test_returns_same_query_object(self):
        query = Query()
        assert PostFilter.make({"title": "Hello"}).apply(query) is query

    def test_undecorated_methods_unreachable_from_params(self):
        f = PostFilter.make({"apply_everything": "1", "apply": "x", "query": "y"})
        query = f.apply(Query())
        assert query.wheres == []
        assert f.get_applied_filters() == {}

    def test_end_to_end_scenario(self):
        f = PostFilter.make({"title": "Test", "created_at": "2025-01-01"}).only(["title", "category"]).exclude(
            ["created_at"]
        )
        query = f.apply(Query())
        assert f.get_applied_filters() == {"title": "Test"}
        assert query.wheres == [("title", "Test")]

    def test_fluent_rules(self):
        f = (
            PostFilter.make({"cat": "news"})
            .aliases({"cat": "category"})
            .defaults({"published": True})
            .auto_apply(["published"])
        )
        query = f.apply(Query())
        assert query.wheres == [("published", True), ("category", "news")]
        assert f.get_applied_filters() == {"published": True, "category": "news"}

    def test_class_level_defaults(self):
        f = DefaultsFilter.make({"cat": "news", "created_at": "2025-01-01"})
        query = f.apply(Query())
        assert query.wheres == [("published", True), ("category", "news")]

    def test_instances_do_not_share_rules(self):
        a = DefaultsFilter.make()
        a.only(["title"])
        b = DefaultsFilter.make()
        assert b.configuration.allowed == []
        assert DefaultsFilter.default_only == []

    def test_applied_filters_reset_between_calls(self):
        f = PostFilter.make({"title": "A"})
        f.apply(Query())
        f.set_params({"category": "B"})
        f.apply(Query())
        assert f.get_applied_filters() == {"category": "B"}

    def test_shared_configuration_is_copied(self):
        shared = FilterConfiguration(allowed=["title"])
        f = PostFilter({"title": "A"}, configuration=shared)
        f.only(["category"])
        assert shared.allowed == ["title"]


class GenerativeFilter(Filterable):
    """Operations that return a new query instead of mutating."""

    @filter_method
    def tag(self, value: str) -> tuple[str, ...]:
        return (*self.query, f"tag={value}")

    @filter_method
    def limit(self, value: int) -> None:
        self.query = (*self.query, f"limit={value}")


class TestGenerativeQueries:
    def test_returned_query_replaces_current(self):
        result = GenerativeFilter.make([("tag", "a"), ("tag", "b")]).apply(())
        assert result == ("tag=b",)

    def test_reassigned_query_is_kept(self):
        result = GenerativeFilter.make([("tag", "a"), ("limit", 5)]).apply(())
        assert result == ("tag=a", "limit=5")


class TestApplyFilter:
    def test_unknown_filter_raises(self):
        f = PostFilter.make()
        f.apply(Query())
        with pytest.raises(UnknownOperationException):
            f.apply_filter("nope")

    def test_apply_filter_after_pass(self):
        f = PostFilter.make({"title": "A"})
        query = f.apply(Query())
        f.apply_filter("category", "news")
        assert query.wheres == [("title", "A"), ("category", "news")]
        assert f.get_applied_filters() == {"title": "A", "category": "news"}

    def test_apply_filter_bypasses_blacklist(self):
        f = PostFilter.make().exclude(["created_at"])
        f.apply(Query())
        f.apply_filter("created_at", "2025-01-01")
        assert f.get_applied_filters() == {"created_at": "2025-01-01"}

    def test_apply_filter_on_generative_query(self):
        f = GenerativeFilter.make()
        f.apply(())
        f.apply_filter("tag", "x")
        assert f.query == ("tag=x",)


class TestIntrospection:
    def test_get_configured_filters(self):
        f = DefaultsFilter.make()
        assert f.get_configured_filters() == {
            "autoApply": ["published"],
            "aliases": {"cat": "category"},
            "allowed": [],
            "forbidden": ["created_at"],
            "defaults": {"published": True},
        }

    def test_applied_filters_empty_before_apply(self):
        assert PostFilter.make().get_applied_filters() == {}

    def test_result_exposes_skipped(self):
        f = PostFilter.make({"bogus": "1"})
        f.apply(Query())
        assert [s.param for s in f.result.skipped] == ["bogus"]


class FakeRequest:
    def __init__(self, query_params: dict[str, str]) -> None:
        self.query_params = query_params


class TestParameterInjection:
    def test_set_request_reads_query_params(self):
        f = PostFilter.make().set_request(FakeRequest({"title": "From request"}))
        query = f.apply(Query())
        assert query.wheres == [("title", "From request")]

    def test_strict_resolver(self):
        f = PostFilter.make(resolver=FilterResolver(strict=True)).auto_apply(["ghost"])
        with pytest.raises(InvalidConfigurationException):
            f.apply(Query())


class TestFluentTyping:
    def test_fluent_chain_keeps_subclass(self):
        f = DefaultsFilter.make({"title": "A"}).only(["title"]).exclude([]).defaults({}).auto_apply([])
        assert type(f) is DefaultsFilter
        assert type(f.set_params({}).set_request(FakeRequest({}))) is DefaultsFilter
        f.apply(Query())
        assert type(f.aliases({}).apply_filter("title", "x")) is DefaultsFilter
