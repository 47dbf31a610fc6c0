"""
Task Orchestration Module

Architectural Intent:
- Sequences a fixed list of tasks for one deployment run on each node
- Task errors are turned into TaskResult values; the orchestrator decides
  whether to continue or unwind
- On failure, completed tasks of that node are rolled back in reverse order

Scheduling:
- Tasks run strictly one after another within a node
- Nodes run sequentially by default; parallel_nodes=True runs them
  concurrently, which is safe because no mutable state is shared across nodes
- In a simulated run nothing real happened, so the unwind is only logged
"""

from __future__ import annotations
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.exceptions import TaskConfigurationError, TaskExecutionError
from shipyard.domain.ports.telemetry_port import TelemetryPort
from shipyard.domain.tasks.task import Task
from shipyard.domain.value_objects.node import Node
from shipyard.domain.value_objects.task_result import TaskPhase, TaskResult

logger = logging.getLogger(__name__)


@dataclass
class WorkflowStep:
    task: Task
    options: Mapping[str, Any] = field(default_factory=dict)
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.task.name


@dataclass
class NodeReport:
    node: Node
    results: list[TaskResult] = field(default_factory=list)
    rolled_back: bool = False

    @property
    def ok(self) -> bool:
        return all(
            r.ok for r in self.results if r.phase is not TaskPhase.ROLLBACK
        )

    @property
    def failure(self) -> Optional[TaskResult]:
        for result in self.results:
            if not result.ok and result.phase is not TaskPhase.ROLLBACK:
                return result
        return None


@dataclass
class DeploymentReport:
    node_reports: list[NodeReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.node_reports)

    @property
    def rolled_back(self) -> bool:
        return any(r.rolled_back for r in self.node_reports)

    @property
    def failures(self) -> list[TaskResult]:
        return [r.failure for r in self.node_reports if r.failure is not None]


async def invoke_step(
    step: WorkflowStep,
    phase: TaskPhase,
    node: Node,
    application: Application,
    deployment: Deployment,
) -> TaskResult:
    """Run one phase of a step and capture its outcome."""
    operation = {
        TaskPhase.EXECUTE: step.task.execute,
        TaskPhase.SIMULATE: step.task.simulate,
        TaskPhase.ROLLBACK: step.task.rollback,
    }[phase]

    started = time.perf_counter()
    try:
        await operation(node, application, deployment, step.options)
    except TaskConfigurationError as e:
        return TaskResult.configuration_error(
            step.name, phase, node, e, _elapsed_ms(started)
        )
    except TaskExecutionError as e:
        return TaskResult.execution_error(
            step.name, phase, node, e, _elapsed_ms(started)
        )
    return TaskResult.success(step.name, phase, node, _elapsed_ms(started))


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


class TaskOrchestrator:
    def __init__(
        self,
        steps: list[WorkflowStep],
        parallel_nodes: bool = False,
        telemetry: Optional[TelemetryPort] = None,
    ) -> None:
        self.steps = list(steps)
        self.parallel_nodes = parallel_nodes
        self.telemetry = telemetry

    async def _invoke(
        self,
        step: WorkflowStep,
        phase: TaskPhase,
        node: Node,
        application: Application,
        deployment: Deployment,
    ) -> TaskResult:
        span = None
        if self.telemetry:
            span = self.telemetry.start_span(
                f"shipyard.task.{phase.value}",
                {"task": step.name, "node": node.display_name},
            )
        try:
            result = await invoke_step(step, phase, node, application, deployment)
        finally:
            if self.telemetry:
                self.telemetry.end_span(span)
        if self.telemetry:
            self.telemetry.record_task_result(result)
        return result

    async def _unwind(
        self,
        completed: list[WorkflowStep],
        node: Node,
        application: Application,
        deployment: Deployment,
        report: NodeReport,
    ) -> None:
        if deployment.is_dry_run:
            for step in reversed(completed):
                deployment.logger.info(
                    'Would roll back "%s" on %s', step.name, node.display_name
                )
            return

        for step in reversed(completed):
            deployment.logger.info('Rolling back "%s" on %s', step.name, node.display_name)
            result = await self._invoke(
                step, TaskPhase.ROLLBACK, node, application, deployment
            )
            report.results.append(result)
            if not result.ok:
                logger.error(
                    "Rollback of %s failed on %s: %s",
                    step.name,
                    node.display_name,
                    result.error_message,
                )
        report.rolled_back = True

    async def run_node(
        self, node: Node, application: Application, deployment: Deployment
    ) -> NodeReport:
        phase = TaskPhase.SIMULATE if deployment.is_dry_run else TaskPhase.EXECUTE
        report = NodeReport(node=node)
        completed: list[WorkflowStep] = []

        for step in self.steps:
            deployment.logger.debug(
                'Running task "%s" on %s', step.name, node.display_name
            )
            result = await self._invoke(step, phase, node, application, deployment)
            report.results.append(result)
            if not result.ok:
                logger.error(
                    "Task %s failed on %s: %s",
                    step.name,
                    node.display_name,
                    result.error_message,
                )
                await self._unwind(completed, node, application, deployment, report)
                break
            completed.append(step)

        return report

    async def run(
        self,
        nodes: list[Node],
        application: Application,
        deployment: Deployment,
    ) -> DeploymentReport:
        if self.parallel_nodes:
            reports = await asyncio.gather(
                *(self.run_node(node, application, deployment) for node in nodes)
            )
            report = DeploymentReport(list(reports))
        else:
            report = DeploymentReport()
            for node in nodes:
                node_report = await self.run_node(node, application, deployment)
                report.node_reports.append(node_report)
                if not node_report.ok:
                    # stop issuing tasks to further nodes after a fatal error
                    break

        if not report.ok:
            # nodes that finished every step are unwound too
            for node_report in reversed(report.node_reports):
                if node_report.ok:
                    await self._unwind(
                        self.steps, node_report.node, application, deployment, node_report
                    )
        return report
