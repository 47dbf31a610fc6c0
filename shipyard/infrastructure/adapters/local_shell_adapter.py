"""
Local Shell Adapter

Architectural Intent:
- Infrastructure adapter implementing RemoteExecutorPort for the local host
- Used for nodes addressed as localhost
- Uses subprocess wrapped in async
- Output is decoded as UTF-8; undecodable bytes are replaced, never raised
"""

import asyncio
import logging
import subprocess
from typing import Optional
from shipyard.domain.exceptions import TransportError
from shipyard.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from shipyard.domain.value_objects.node import Node

logger = logging.getLogger(__name__)


class LocalShellAdapter(RemoteExecutorPort):
    def __init__(self, timeout: Optional[int] = None):
        self.timeout = timeout

    async def run(self, node: Node, command: str) -> CommandResult:
        def _run() -> CommandResult:
            try:
                result = subprocess.run(
                    command,
                    shell=True,
                    capture_output=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise TransportError(
                    f"Command timed out after {self.timeout}s",
                    command=command,
                    node=str(node),
                ) from e
            except (OSError, ValueError) as e:
                raise TransportError(
                    f"Could not run local shell command: {e}",
                    command=command,
                    node=str(node),
                ) from e
            return CommandResult(
                exit_code=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        return await asyncio.get_event_loop().run_in_executor(None, _run)
