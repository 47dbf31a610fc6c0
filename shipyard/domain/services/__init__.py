"""
Domain Services Package

Architectural Intent:
- Contains domain services shared by the deployment tasks
- The shell gateway is the only service that talks to a port
"""

from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.services.command_template import PathPlaceholders, substitute
from shipyard.domain.services.release_retention import (
    build_removal_command,
    removable_releases,
    select_releases_to_remove,
)

__all__ = [
    "ShellCommandService",
    "PathPlaceholders",
    "substitute",
    "build_removal_command",
    "removable_releases",
    "select_releases_to_remove",
]
