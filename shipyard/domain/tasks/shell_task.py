"""
Shell Task

Architectural Intent:
- Generic task running an operator-supplied command template
- Placeholders ({deployment_path}, {shared_path}, {release_path},
  {current_path}, {previous_path}, or their camelCase forms) are resolved
  once per invocation
- The optional rollback command always takes real effect
"""

from dataclasses import dataclass
from typing import Optional
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.exceptions import TaskConfigurationError
from shipyard.domain.services.command_template import PathPlaceholders, substitute
from shipyard.domain.tasks.options import TaskOptions, find_option
from shipyard.domain.tasks.task import Task, TaskOptionsMapping
from shipyard.domain.value_objects.node import Node


@dataclass(frozen=True)
class ShellTaskOptions(TaskOptions):
    command: str
    rollback_command: Optional[str] = None


class ShellTask(Task):
    name = "shell"

    async def execute(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        parsed = ShellTaskOptions.from_mapping(options, self.name)
        values = PathPlaceholders.resolve(application, deployment).as_mapping()
        await self.shell.execute_or_simulate(
            substitute(parsed.command, values), node, deployment
        )

    async def rollback(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        options = options or {}
        key = find_option(options, "rollback_command", self.name)
        rollback_command = options[key] if key else None
        if not rollback_command:
            return
        if not isinstance(rollback_command, str):
            raise TaskConfigurationError(
                f"Option rollback_command of {self.name} must be a string"
            )
        values = PathPlaceholders.resolve(application, deployment).as_mapping()
        await self.shell.run(
            substitute(rollback_command, values), node, deployment, force=True
        )
