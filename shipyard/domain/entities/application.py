"""
Application Entity

Architectural Intent:
- Read-only description of the application being deployed
- Owns the on-disk convention: releases/, shared/ and the current/previous links
- Options are looked up by name; absence is distinct from presence-with-value
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

RELEASES_DIRECTORY = "releases"
SHARED_DIRECTORY = "shared"
CURRENT_LINK = "current"
PREVIOUS_LINK = "previous"


@dataclass(frozen=True)
class Application:
    name: str
    deployment_path: str
    shared_path: Optional[str] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Application name cannot be empty")
        if not self.deployment_path:
            raise ValueError("Application deployment path cannot be empty")
        root = self.deployment_path.rstrip("/") or "/"
        object.__setattr__(self, "deployment_path", root)
        if not self.shared_path:
            object.__setattr__(self, "shared_path", self._join(SHARED_DIRECTORY))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def _join(self, *parts: str) -> str:
        return "/".join((self.deployment_path.rstrip("/"),) + parts)

    @property
    def releases_path(self) -> str:
        return self._join(RELEASES_DIRECTORY)

    @property
    def current_path(self) -> str:
        return self._join(RELEASES_DIRECTORY, CURRENT_LINK)

    @property
    def previous_path(self) -> str:
        return self._join(RELEASES_DIRECTORY, PREVIOUS_LINK)

    def has_option(self, name: str) -> bool:
        return name in self.options

    def get_option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)
