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
"""StructlogAdapter — structlog output for the ``filterable`` logger namespace.

Only the ``filterable`` stdlib logger and its children are touched; the
application's root logger keeps whatever handlers it already has.

Settings (``filterable.logging.*``)::

    filterable:
      logging:
        format: console          # or json
        level:
          root: WARNING          # level of the "filterable" namespace
          filterable.resolver: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from filterable.core.config import Config

NAMESPACE = "filterable"


class StructlogAdapter:
    """Routes resolver decisions (``filter_applied``, ``filter_skipped``, ...) through structlog."""

    def __init__(self, stream: Any = None) -> None:
        self._namespace_level: str = "WARNING"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._stream = stream or sys.stderr

    def configure(self, config: Config) -> None:
        level_section = dict(config.get_section("filterable.logging.level"))
        self._namespace_level = str(level_section.pop("root", "WARNING")).upper()
        self._module_levels = {
            name if name.startswith(NAMESPACE) else f"{NAMESPACE}.{name}": str(level).upper()
            for name, level in level_section.items()
        }
        self._format = str(config.get("filterable.logging.format", "console")).lower()

        self._setup_structlog()
        self._setup_handler()
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog logger inside the ``filterable`` namespace."""
        if not name.startswith(NAMESPACE):
            name = f"{NAMESPACE}.{name}"
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def _setup_structlog(self) -> None:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _setup_handler(self) -> None:
        namespace_logger = logging.getLogger(NAMESPACE)
        for handler in list(namespace_logger.handlers):
            if getattr(handler, "_filterable_handler", False):
                namespace_logger.removeHandler(handler)

        handler = logging.StreamHandler(self._stream)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._filterable_handler = True  # type: ignore[attr-defined]
        namespace_logger.addHandler(handler)
        namespace_logger.setLevel(getattr(logging, self._namespace_level, logging.WARNING))
        namespace_logger.propagate = False


def configure_logging(config: Config, stream: Any = None) -> StructlogAdapter:
    """Configure structlog output for the library from *config*."""
    adapter = StructlogAdapter(stream)
    adapter.configure(config)
    return adapter
