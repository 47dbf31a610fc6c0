"""
Application Orchestration Package

Architectural Intent:
- Contains the task orchestrator sequencing a deployment run
- Reverse-order rollback of completed tasks on failure
"""

from shipyard.application.orchestration.task_orchestrator import (
    DeploymentReport,
    NodeReport,
    TaskOrchestrator,
    WorkflowStep,
    invoke_step,
)
from shipyard.domain.value_objects.task_result import TaskPhase

__all__ = [
    "DeploymentReport",
    "NodeReport",
    "TaskOrchestrator",
    "TaskPhase",
    "WorkflowStep",
    "invoke_step",
]
