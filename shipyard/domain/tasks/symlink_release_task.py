"""
Symlink Release Task

Architectural Intent:
- Atomic cutover of the live release on a node
- One composed pipeline: drop previous, demote current to previous,
  point current at the new release
- Rollback is the exact inverse; there is no rollback-of-rollback
"""

import shlex
from shipyard.domain.entities.application import (
    Application,
    CURRENT_LINK,
    PREVIOUS_LINK,
)
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.tasks.task import Task, TaskOptionsMapping
from shipyard.domain.value_objects.node import Node


class SymlinkReleaseTask(Task):
    name = "symlink_release"

    def cutover_command(self, application: Application, deployment: Deployment) -> str:
        releases_path = shlex.quote(application.releases_path)
        release = shlex.quote(f"./{deployment.release_identifier}")
        return (
            f"cd {releases_path}"
            f" && rm -f ./{PREVIOUS_LINK}"
            f" && if [ -e ./{CURRENT_LINK} ]; then mv ./{CURRENT_LINK} ./{PREVIOUS_LINK}; fi"
            f" && ln -s {release} ./{CURRENT_LINK}"
        )

    def rollback_command(self, application: Application) -> str:
        releases_path = shlex.quote(application.releases_path)
        return (
            f"cd {releases_path}"
            f" && rm -f ./{CURRENT_LINK}"
            f" && mv ./{PREVIOUS_LINK} ./{CURRENT_LINK}"
        )

    async def execute(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        await self.shell.execute_or_simulate(
            self.cutover_command(application, deployment), node, deployment
        )
        deployment.logger.info(
            'Node "%s" %s live!',
            node.display_name,
            "would be" if deployment.is_dry_run else "is",
        )

    async def rollback(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        await self.shell.run(
            self.rollback_command(application), node, deployment, force=True
        )
