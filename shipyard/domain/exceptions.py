"""
Domain Exceptions

Architectural Intent:
- Error taxonomy shared by tasks, the shell gateway and transport adapters
- Configuration errors are authoring mistakes and are raised even in a dry run
- Execution errors abort the run and trigger rollback of completed tasks
"""

from typing import Optional


class ShipyardError(Exception):
    pass


class TaskConfigurationError(ShipyardError):
    """A required task option is missing or has an invalid value."""


class TaskExecutionError(ShipyardError):
    """A command run through the shell gateway failed."""

    def __init__(
        self,
        message: str,
        command: str = "",
        node: Optional[str] = None,
        exit_code: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.node = node
        self.exit_code = exit_code
        self.stderr = stderr


class TransportError(TaskExecutionError):
    """The node could not be reached or the command did not complete."""
