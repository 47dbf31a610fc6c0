"""
Task Result Value Object

Architectural Intent:
- Explicit outcome of a single task invocation on a single node
- Lets the orchestrator decide whether to continue or unwind without
  relying on exceptions crossing task boundaries
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from shipyard.domain.value_objects.node import Node


class TaskPhase(Enum):
    EXECUTE = "execute"
    SIMULATE = "simulate"
    ROLLBACK = "rollback"


class TaskOutcome(Enum):
    OK = "ok"
    CONFIGURATION_ERROR = "configuration_error"
    EXECUTION_ERROR = "execution_error"


@dataclass(frozen=True)
class TaskResult:
    task_name: str
    phase: TaskPhase
    node: Node
    outcome: TaskOutcome
    error: Optional[Exception] = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.outcome is TaskOutcome.OK

    @property
    def error_message(self) -> str:
        return str(self.error) if self.error else ""

    @classmethod
    def success(
        cls, task_name: str, phase: TaskPhase, node: Node, duration_ms: float = 0.0
    ) -> TaskResult:
        return cls(task_name, phase, node, TaskOutcome.OK, duration_ms=duration_ms)

    @classmethod
    def configuration_error(
        cls,
        task_name: str,
        phase: TaskPhase,
        node: Node,
        error: Exception,
        duration_ms: float = 0.0,
    ) -> TaskResult:
        return cls(
            task_name, phase, node, TaskOutcome.CONFIGURATION_ERROR, error, duration_ms
        )

    @classmethod
    def execution_error(
        cls,
        task_name: str,
        phase: TaskPhase,
        node: Node,
        error: Exception,
        duration_ms: float = 0.0,
    ) -> TaskResult:
        return cls(
            task_name, phase, node, TaskOutcome.EXECUTION_ERROR, error, duration_ms
        )
