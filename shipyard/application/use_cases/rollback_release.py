"""
Rollback Release Use Case

Architectural Intent:
- Operator-initiated revert of the last cutover on each node
- Restores current from previous; always takes real effect
"""

import logging
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.exceptions import TaskExecutionError
from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.tasks.symlink_release_task import SymlinkReleaseTask
from shipyard.domain.value_objects.node import Node

logger = logging.getLogger(__name__)


class RollbackRelease:
    def __init__(self, shell: ShellCommandService):
        self.task = SymlinkReleaseTask(shell)

    async def execute(
        self, nodes: list[Node], application: Application, deployment: Deployment
    ) -> bool:
        success = True
        for node in nodes:
            try:
                await self.task.rollback(node, application, deployment)
                deployment.logger.info(
                    'Node "%s" rolled back to previous release', node.display_name
                )
            except TaskExecutionError as e:
                logger.error("Rollback failed on %s: %s", node.display_name, e)
                success = False
        return success
