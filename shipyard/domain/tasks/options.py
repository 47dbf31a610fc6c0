"""
Typed Task Options

Architectural Intent:
- Each task variant declares its options as a frozen dataclass
- Fields without a default are required, the rest carry explicit defaults
- Built from the untyped option mapping; unknown keys are ignored so no task
  depends on another task's option names
- Every option may be spelled snake_case (keep_releases) or camelCase
  (keepReleases); giving both with different values is a configuration error
"""

from __future__ import annotations
import dataclasses
import types
import typing
from typing import Any, Mapping, Optional, TypeVar, Union
from shipyard.domain.exceptions import TaskConfigurationError
from shipyard.domain.services.command_template import camel_case

T = TypeVar("T", bound="TaskOptions")


def find_option(
    options: Mapping[str, Any], name: str, owner: str = ""
) -> Optional[str]:
    """Return the key under which option ``name`` is given, or None."""
    present = [key for key in dict.fromkeys((name, camel_case(name))) if key in options]
    if len(present) == 2 and options[present[0]] != options[present[1]]:
        raise TaskConfigurationError(
            f"Conflicting values for {present[0]} and {present[1]}"
            + (f" of {owner}" if owner else "")
        )
    return present[0] if present else None


def _is_string_type(hint: Any) -> bool:
    if hint is str:
        return True
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = typing.get_args(hint)
        return str in args and all(a in (str, type(None)) for a in args)
    return False


@dataclasses.dataclass(frozen=True)
class TaskOptions:
    @classmethod
    def from_mapping(
        cls: type[T], options: Optional[Mapping[str, Any]], task_name: str = ""
    ) -> T:
        options = options or {}
        owner = task_name or cls.__name__
        hints = typing.get_type_hints(cls)
        values: dict[str, Any] = {}

        for f in dataclasses.fields(cls):
            required = (
                f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
            )
            key = find_option(options, f.name, owner)
            if key is None or options[key] is None:
                if required:
                    raise TaskConfigurationError(
                        f"No {f.name} option provided for {owner}"
                    )
                continue

            value = options[key]
            if required and value == "":
                raise TaskConfigurationError(f"Option {f.name} of {owner} is empty")
            if _is_string_type(hints.get(f.name)) and not isinstance(value, str):
                raise TaskConfigurationError(
                    f"Option {f.name} of {owner} must be a string, "
                    f"got {type(value).__name__}"
                )
            values[f.name] = value

        return cls(**values)
