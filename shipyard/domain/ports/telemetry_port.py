"""
Telemetry Port

Architectural Intent:
- Abstract interface for recording task spans and outcomes
- Keeps the orchestrator independent of the OpenTelemetry SDK
"""

from typing import Any, Optional, Protocol, runtime_checkable
from shipyard.domain.value_objects.task_result import TaskResult


@runtime_checkable
class TelemetryPort(Protocol):
    def start_span(
        self, name: str, attributes: Optional[dict[str, str]] = None
    ) -> Optional[Any]: ...

    def end_span(self, span: Any) -> None: ...

    def record_task_result(self, result: TaskResult) -> None: ...

    def record_deployment_outcome(self, deployment_name: str, status: str) -> None: ...

    def flush(self) -> None: ...
