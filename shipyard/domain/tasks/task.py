"""
Task Module

Architectural Intent:
- Polymorphic unit of deployment work run by the orchestrator per node
- execute performs the effect; every mutating command goes through the shell
  gateway, which owns the dry-run policy
- simulate shows what execute would do without persistent side effects
- rollback is a best-effort reversal derived only from options and context

Failure Contract:
- TaskConfigurationError for a missing or invalid option (also in a dry run)
- TaskExecutionError when an underlying command fails
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Mapping, Optional
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.value_objects.node import Node

TaskOptionsMapping = Optional[Mapping[str, Any]]


class Task(ABC):
    name: ClassVar[str] = "task"

    def __init__(self, shell: ShellCommandService):
        self.shell = shell

    @abstractmethod
    async def execute(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        pass

    async def simulate(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        await self.execute(node, application, deployment, options)

    async def rollback(
        self,
        node: Node,
        application: Application,
        deployment: Deployment,
        options: TaskOptionsMapping = None,
    ) -> None:
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
