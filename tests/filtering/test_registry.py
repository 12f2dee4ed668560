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
"""Tests for the operation registry and the @filter_method decorator."""

from __future__ import annotations

from filterable.registry import OperationRegistry, filter_method, operation_names


class PostOperations:
    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []

    @filter_method
    def title(self, value: str) -> None:
        self.calls.append(("title", value))

    @filter_method("published")
    def only_published(self, value: bool) -> None:
        self.calls.append(("published", value))

    def helper(self, value: object) -> None:
        self.calls.append(("helper", value))


class ExtendedOperations(PostOperations):
    @filter_method("heading")
    def title(self, value: str) -> None:
        self.calls.append(("heading", value))

    @filter_method()
    def category(self, value: str) -> None:
        self.calls.append(("category", value))


class TestFilterMethod:
    def test_bare_decorator_uses_method_name(self):
        assert operation_names(PostOperations)["title"] == "title"

    def test_named_decorator(self):
        assert operation_names(PostOperations)["published"] == "only_published"

    def test_undecorated_methods_are_not_operations(self):
        names = operation_names(PostOperations)
        assert "helper" not in names
        assert "only_published" not in names

    def test_names_cached_per_class(self):
        assert operation_names(PostOperations) is operation_names(PostOperations)


class TestInheritance:
    def test_subclass_inherits_and_extends(self):
        names = operation_names(ExtendedOperations)
        assert names["published"] == "only_published"
        assert names["category"] == "category"

    def test_redefined_method_drops_inherited_name(self):
        names = operation_names(ExtendedOperations)
        assert "title" not in names
        assert names["heading"] == "title"

    def test_base_class_unaffected_by_subclass(self):
        assert set(operation_names(PostOperations)) == {"title", "published"}


class TestOperationRegistry:
    def test_for_instance_binds_methods(self):
        ops = PostOperations()
        registry = OperationRegistry.for_instance(ops)

        registry["published"](True)
        registry["title"]("Hello")

        assert ops.calls == [("published", True), ("title", "Hello")]

    def test_membership(self):
        registry = OperationRegistry.for_instance(PostOperations())
        assert "title" in registry
        assert "helper" not in registry
        assert len(registry) == 2

    def test_register_plain_callable(self):
        seen: list[object] = []
        registry = OperationRegistry().register("tag", seen.append)
        registry["tag"]("python")
        assert seen == ["python"]
        assert list(registry) == ["tag"]
