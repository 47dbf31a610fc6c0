"""
Command Template

Architectural Intent:
- Resolves the well-known path facts of a deployment once per task invocation
- Pure substitution of {placeholder} tokens in operator-supplied commands
- Unknown braces (e.g. shell ${VAR}) are left untouched
- Tokens are accepted as {release_path} or {releasePath}
"""

from __future__ import annotations
import re
from dataclasses import dataclass, asdict
from typing import Mapping
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment

_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


@dataclass(frozen=True)
class PathPlaceholders:
    deployment_path: str
    shared_path: str
    release_path: str
    current_path: str
    previous_path: str

    @classmethod
    def resolve(cls, application: Application, deployment: Deployment) -> PathPlaceholders:
        return cls(
            deployment_path=application.deployment_path,
            shared_path=application.shared_path,
            release_path=deployment.application_release_path(application),
            current_path=application.current_path,
            previous_path=application.previous_path,
        )

    def as_mapping(self) -> dict[str, str]:
        """Placeholder values keyed by snake_case and camelCase names."""
        values = asdict(self)
        values.update({camel_case(k): v for k, v in list(values.items())})
        return values


def substitute(template: str, values: Mapping[str, str]) -> str:
    """Replace every known {name} token in a single pass."""

    def _replace(match: re.Match) -> str:
        return values.get(match.group(1), match.group(0))

    return _TOKEN_RE.sub(_replace, template)
