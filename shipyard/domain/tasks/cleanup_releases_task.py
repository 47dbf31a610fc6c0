"""
Cleanup Releases Task

Architectural Intent:
- Deletes old release directories beyond the application's keep_releases option
- The current and previous releases are always protected
- No rollback: deleted releases cannot be recovered, so the protection of
  current/previous is the only safety net

Example configuration:
    Application(..., options={"keep_releases": 2})  # or "keepReleases"
"""

import shlex
from typing import Any
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.exceptions import TaskConfigurationError
from shipyard.domain.services.release_retention import (
    build_removal_command,
    select_releases_to_remove,
)
from shipyard.domain.tasks.options import find_option
from shipyard.domain.tasks.task import Task, TaskOptionsMapping
from shipyard.domain.value_objects.node import Node

KEEP_RELEASES_OPTION = "keep_releases"


def _parse_keep_releases(value: Any) -> int:
    if isinstance(value, bool):
        raise TaskConfigurationError(f"{KEEP_RELEASES_OPTION} must be an integer")
    try:
        keep = int(value)
    except (TypeError, ValueError):
        raise TaskConfigurationError(
            f"{KEEP_RELEASES_OPTION} must be an integer, got {value!r}"
        ) from None
    if isinstance(value, float) and keep != value:
        raise TaskConfigurationError(
            f"{KEEP_RELEASES_OPTION} must be an integer, got {value!r}"
        )
    if keep < 0:
        raise TaskConfigurationError(f"{KEEP_RELEASES_OPTION} must be >= 0, got {keep}")
    return keep


class CleanupReleasesTask(Task):
    name = "cleanup_releases"

    async def execute(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        log = deployment.logger
        key = find_option(application.options, KEEP_RELEASES_OPTION, self.name)
        if key is None:
            log.debug(
                '%s all releases for "%s"',
                "Would keep" if deployment.is_dry_run else "Keeping",
                application.name,
            )
            return

        keep_releases = _parse_keep_releases(application.get_option(key))
        releases_path = application.releases_path
        previous_path = shlex.quote(application.previous_path)

        # Unforced reads: both come back empty in a dry run
        previous_release = (
            await self.shell.run(
                f"if [ -h {previous_path} ]; then basename $(readlink {previous_path}) ; fi",
                node,
                deployment,
            )
        ).strip()
        listing = await self.shell.run(
            f"find {shlex.quote(releases_path + '/.')} -maxdepth 1 -type d -exec basename {{}} \\;",
            node,
            deployment,
        )

        to_remove = select_releases_to_remove(
            listing.split(),
            current=str(deployment.release_identifier),
            previous=previous_release,
            keep_releases=keep_releases,
        )
        if not to_remove:
            log.debug("No releases to remove")
            return

        log.info(
            "%s releases %s",
            "Would remove" if deployment.is_dry_run else "Removing",
            ", ".join(to_remove),
        )
        await self.shell.execute_or_simulate(
            build_removal_command(releases_path, to_remove), node, deployment
        )
