"""
Shell Command Service

Architectural Intent:
- Single gateway through which every task runs shell commands on a node
- Sole place where the dry-run policy is applied: in a simulated deployment
  unforced commands are logged and never sent to the node
- Translates failed commands into TaskExecutionError

Known Hazard:
- Read-only introspection shares the same suppression as mutating commands;
  a caller that needs real state during a dry run must pass force=True
"""

import logging
from typing import Optional
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.exceptions import TaskExecutionError
from shipyard.domain.ports.remote_executor_port import RemoteExecutorPort
from shipyard.domain.value_objects.node import Node

logger = logging.getLogger(__name__)


class ShellCommandService:
    def __init__(
        self,
        executor: RemoteExecutorPort,
        local_executor: Optional[RemoteExecutorPort] = None,
    ):
        self.executor = executor
        self.local_executor = local_executor

    def _executor_for(self, node: Node) -> RemoteExecutorPort:
        if node.is_local and self.local_executor is not None:
            return self.local_executor
        return self.executor

    async def run(
        self,
        command: str,
        node: Node,
        deployment: Deployment,
        force: bool = False,
    ) -> str:
        """Run a command on the node and return its standard output.

        Args:
            command: Shell command line to run.
            node: Target node.
            deployment: Current deployment; its mode decides whether the
                command is suppressed.
            force: Run the command even in a simulated deployment.

        Returns:
            Captured stdout, or an empty string for a suppressed command.
        """
        if deployment.is_dry_run and not force:
            deployment.logger.info(
                'Would execute "%s" on %s', command, node.display_name
            )
            return ""

        logger.debug("Executing on %s: %s", node, command)
        result = await self._executor_for(node).run(node, command)
        if not result.ok:
            raise TaskExecutionError(
                f'Command "{command}" failed on {node.display_name} '
                f"with exit code {result.exit_code}: {result.stderr.strip()}",
                command=command,
                node=str(node),
                exit_code=result.exit_code,
                stderr=result.stderr,
            )
        return result.stdout

    async def execute_or_simulate(
        self, command: str, node: Node, deployment: Deployment
    ) -> str:
        return await self.run(command, node, deployment, force=False)
