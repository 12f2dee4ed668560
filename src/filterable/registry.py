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
"""Operation registry — the explicit name-to-callable table a filter exposes.

Filter classes mark their operations with :func:`filter_method`::

    class PostFilter(Filterable):

        @filter_method
        def title(self, value: str) -> None:
            self.query = self.query.where(Post.title.contains(value))

        @filter_method("published")
        def only_published(self, value: bool) -> None: ...

The table of operation names is collected once per class and bound to an
instance on demand. Only decorated methods are operations, so a request
parameter can never reach an arbitrary method by name.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar, overload

F = TypeVar("F", bound=Callable[..., Any])

_OPERATION_ATTR = "__filterable_operation__"
_CLASS_CACHE_ATTR = "__filterable_operations__"

Operation = Callable[[Any], Any]


@overload
def filter_method(func: F) -> F: ...
@overload
def filter_method(name: str | None = None) -> Callable[[F], F]: ...


def filter_method(func: Any = None) -> Any:
    """Mark a method as a filter operation.

    Used bare, the operation takes the method's name; ``@filter_method("x")``
    registers it as ``x`` instead.
    """

    def decorator(f: F, name: str | None = None) -> F:
        setattr(f, _OPERATION_ATTR, name or f.__name__)
        return f

    if callable(func):
        return decorator(func)
    return lambda f: decorator(f, func)


def operation_names(cls: type) -> dict[str, str]:
    """Return ``{operation name: attribute name}`` for *cls*, cached per class.

    Subclass definitions override base class ones, so a subclass may
    redefine or rename an inherited operation.
    """
    cached = cls.__dict__.get(_CLASS_CACHE_ATTR)
    if cached is not None:
        return cached

    names: dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for attr, member in vars(klass).items():
            target = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
            op_name = getattr(target, _OPERATION_ATTR, None)
            if op_name is None:
                continue
            # a redefined attribute drops the name it was inherited under
            for stale in [k for k, v in names.items() if v == attr]:
                del names[stale]
            names[op_name] = attr

    setattr(cls, _CLASS_CACHE_ATTR, names)
    return names


class OperationRegistry(Mapping[str, Operation]):
    """Mapping of operation name to a unary callable.

    Membership is the only existence check the resolver performs; a plain
    ``dict`` works just as well where no class is involved.
    """

    def __init__(self, operations: Mapping[str, Operation] | None = None) -> None:
        self._operations: dict[str, Operation] = dict(operations or {})

    @classmethod
    def for_instance(cls, instance: object) -> OperationRegistry:
        """Bind the ``@filter_method`` operations of *instance*'s class."""
        return cls({name: getattr(instance, attr) for name, attr in operation_names(type(instance)).items()})

    def register(self, name: str, operation: Operation) -> OperationRegistry:
        self._operations[name] = operation
        return self

    def __getitem__(self, name: str) -> Operation:
        return self._operations[name]

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[str]:
        return iter(self._operations)

    def __len__(self) -> int:
        return len(self._operations)

    def __repr__(self) -> str:
        return f"OperationRegistry({sorted(self._operations)!r})"
