"""
Fabric Adapter

Architectural Intent:
- Infrastructure adapter implementing RemoteExecutorPort via Fabric/SSH
- Blocking Fabric calls run in the default executor
- Non-zero exits are returned, not raised; the shell gateway decides

Security:
- SSH connections use connect_timeout, allow_agent, look_for_keys
"""

import asyncio
import logging
from typing import Optional
from fabric import Connection
from shipyard.domain.exceptions import TransportError
from shipyard.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from shipyard.domain.value_objects.node import Node

logger = logging.getLogger(__name__)


class FabricAdapter(RemoteExecutorPort):
    """Adapter implementing RemoteExecutorPort via Fabric/SSH."""

    def __init__(self, connect_timeout: int = 30, command_timeout: Optional[int] = None):
        self.connect_timeout = connect_timeout
        self.command_timeout = command_timeout

    def _get_connection(self, node: Node) -> Connection:
        return Connection(
            host=node.host,
            user=node.user,
            port=node.port,
            connect_timeout=self.connect_timeout,
            connect_kwargs={
                "allow_agent": True,
                "look_for_keys": True,
            },
        )

    async def run(self, node: Node, command: str) -> CommandResult:
        def _run() -> CommandResult:
            conn = self._get_connection(node)
            try:
                result = conn.run(
                    command, hide=True, warn=True, timeout=self.command_timeout
                )
                return CommandResult(
                    exit_code=result.exited,
                    stdout=result.stdout,
                    stderr=result.stderr,
                )
            except Exception as e:
                logger.error("SSH execution failed on %s: %s", node, e)
                raise TransportError(
                    f"Could not run command on {node}: {e}",
                    command=command,
                    node=str(node),
                ) from e
            finally:
                conn.close()

        return await asyncio.get_event_loop().run_in_executor(None, _run)
