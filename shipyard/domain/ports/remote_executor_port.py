"""
Remote Executor Port

Architectural Intent:
- Port interface for running a shell command on a node
- The core only needs "run this command on this node and return output"
- Implemented by adapters (Fabric/SSH, local shell, etc.)
- Timeouts and retries are a transport concern
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from shipyard.domain.value_objects.node import Node


@dataclass(frozen=True)
class CommandResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class RemoteExecutorPort(ABC):
    """
    Port interface for executing commands on a node.
    """

    @abstractmethod
    async def run(self, node: Node, command: str) -> CommandResult:
        """
        Runs a command on the node and returns its captured result.
        Raises TransportError if the node cannot be reached or the
        command does not complete.
        """
        pass
