"""
Release Retention

Architectural Intent:
- Pure arithmetic behind the cleanup of old release directories
- The current and previous releases are never selected for removal
- keep_releases counts old releases retained on top of current/previous
"""

import shlex
from typing import Iterable
from shipyard.domain.value_objects.release_identifier import RESERVED_NAMES


def removable_releases(
    releases: Iterable[str], current: str, previous: str
) -> list[str]:
    """Releases that are neither live, previous, nor a link name, oldest first."""
    protected = {".", current, previous} | RESERVED_NAMES
    candidates = {r.strip() for r in releases}
    return sorted(r for r in candidates if r and r not in protected)


def select_releases_to_remove(
    releases: Iterable[str], current: str, previous: str, keep_releases: int
) -> list[str]:
    if keep_releases < 0:
        raise ValueError(f"keep_releases must be >= 0, got {keep_releases}")
    removable = removable_releases(releases, current, previous)
    return removable[: max(0, len(removable) - keep_releases)]


def build_removal_command(releases_path: str, identifiers: Iterable[str]) -> str:
    """One combined command deleting each release and its REVISION marker."""
    command = ""
    for identifier in identifiers:
        release = shlex.quote(f"{releases_path}/{identifier}")
        marker = shlex.quote(f"{releases_path}/{identifier}REVISION")
        command += f"rm -rf {release};rm -f {marker};"
    return command
