"""
Application Layer Tests

Architectural Intent:
- Tests for the task orchestrator
- Tasks are stubs recording their calls; no transport involved
"""

import asyncio
import pytest
from unittest.mock import MagicMock
from shipyard.application.orchestration import (
    TaskOrchestrator,
    TaskPhase,
    WorkflowStep,
    invoke_step,
)
from shipyard.domain.exceptions import TaskConfigurationError, TaskExecutionError
from shipyard.domain.tasks.task import Task
from shipyard.domain.value_objects.node import Node
from shipyard.domain.value_objects.task_result import TaskOutcome


class StubTask(Task):
    def __init__(self, name, calls, fail_with=None, rollback_fails=False):
        super().__init__(shell=None)
        self.name = name
        self.calls = calls
        self.fail_with = fail_with
        self.rollback_fails = rollback_fails

    async def execute(self, node, application, deployment, options=None):
        self.calls.append(("execute", self.name, node.host))
        if self.fail_with:
            raise self.fail_with

    async def simulate(self, node, application, deployment, options=None):
        self.calls.append(("simulate", self.name, node.host))
        if self.fail_with:
            raise self.fail_with

    async def rollback(self, node, application, deployment, options=None):
        self.calls.append(("rollback", self.name, node.host))
        if self.rollback_fails:
            raise TaskExecutionError("rollback failed")


NODE_A = Node(host="web1.example.com")
NODE_B = Node(host="web2.example.com")


class TestInvokeStep:
    @pytest.mark.asyncio
    async def test_success(self, application, deployment):
        calls = []
        step = WorkflowStep(StubTask("a", calls))

        result = await invoke_step(step, TaskPhase.EXECUTE, NODE_A, application, deployment)

        assert result.ok
        assert result.task_name == "a"
        assert result.duration_ms >= 0
        assert calls == [("execute", "a", "web1.example.com")]

    @pytest.mark.asyncio
    async def test_configuration_error_captured(self, application, deployment):
        step = WorkflowStep(StubTask("a", [], fail_with=TaskConfigurationError("no command")))

        result = await invoke_step(step, TaskPhase.EXECUTE, NODE_A, application, deployment)

        assert result.outcome is TaskOutcome.CONFIGURATION_ERROR
        assert result.error_message == "no command"

    @pytest.mark.asyncio
    async def test_execution_error_captured(self, application, deployment):
        step = WorkflowStep(StubTask("a", [], fail_with=TaskExecutionError("exit 1")))

        result = await invoke_step(step, TaskPhase.EXECUTE, NODE_A, application, deployment)

        assert result.outcome is TaskOutcome.EXECUTION_ERROR

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, application, deployment):
        step = WorkflowStep(StubTask("a", [], fail_with=RuntimeError("bug")))

        with pytest.raises(RuntimeError):
            await invoke_step(step, TaskPhase.EXECUTE, NODE_A, application, deployment)

    def test_step_name_defaults_to_task_name(self):
        assert WorkflowStep(StubTask("symlink", [])).name == "symlink"
        assert WorkflowStep(StubTask("shell", []), name="migrate").name == "migrate"


class TestTaskOrchestrator:
    @pytest.mark.asyncio
    async def test_sequential_execution(self, application, deployment):
        calls = []
        orchestrator = TaskOrchestrator(
            [WorkflowStep(StubTask("a", calls)), WorkflowStep(StubTask("b", calls))]
        )

        report = await orchestrator.run([NODE_A], application, deployment)

        assert report.ok
        assert calls == [
            ("execute", "a", "web1.example.com"),
            ("execute", "b", "web1.example.com"),
        ]

    @pytest.mark.asyncio
    async def test_dry_run_uses_simulate(self, application, dry_run_deployment):
        calls = []
        orchestrator = TaskOrchestrator([WorkflowStep(StubTask("a", calls))])

        await orchestrator.run([NODE_A], application, dry_run_deployment)

        assert calls == [("simulate", "a", "web1.example.com")]

    @pytest.mark.asyncio
    async def test_failure_rolls_back_completed_in_reverse(self, application, deployment):
        calls = []
        orchestrator = TaskOrchestrator(
            [
                WorkflowStep(StubTask("a", calls)),
                WorkflowStep(StubTask("b", calls)),
                WorkflowStep(StubTask("c", calls, fail_with=TaskExecutionError("boom"))),
                WorkflowStep(StubTask("d", calls)),
            ]
        )

        report = await orchestrator.run([NODE_A], application, deployment)

        assert not report.ok
        assert report.rolled_back
        assert report.failures[0].task_name == "c"
        assert calls == [
            ("execute", "a", "web1.example.com"),
            ("execute", "b", "web1.example.com"),
            ("execute", "c", "web1.example.com"),
            ("rollback", "b", "web1.example.com"),
            ("rollback", "a", "web1.example.com"),
        ]

    @pytest.mark.asyncio
    async def test_rollback_failure_does_not_stop_unwind(self, application, deployment):
        calls = []
        orchestrator = TaskOrchestrator(
            [
                WorkflowStep(StubTask("a", calls)),
                WorkflowStep(StubTask("b", calls, rollback_fails=True)),
                WorkflowStep(StubTask("c", calls, fail_with=TaskExecutionError("boom"))),
            ]
        )

        report = await orchestrator.run([NODE_A], application, deployment)

        assert ("rollback", "a", "web1.example.com") in calls
        rollback_results = [
            r for r in report.node_reports[0].results if r.phase is TaskPhase.ROLLBACK
        ]
        assert [r.ok for r in rollback_results] == [False, True]

    @pytest.mark.asyncio
    async def test_dry_run_failure_only_logs_unwind(self, application, dry_run_deployment):
        calls = []
        orchestrator = TaskOrchestrator(
            [
                WorkflowStep(StubTask("a", calls)),
                WorkflowStep(StubTask("b", calls, fail_with=TaskConfigurationError("x"))),
            ]
        )

        report = await orchestrator.run([NODE_A], application, dry_run_deployment)

        assert not report.ok
        assert not report.rolled_back
        assert all(call[0] == "simulate" for call in calls)

    @pytest.mark.asyncio
    async def test_failure_stops_later_nodes_and_unwinds_earlier(self, application, deployment):
        calls = []

        class FailOnSecondNode(StubTask):
            async def execute(self, node, application, deployment, options=None):
                await super().execute(node, application, deployment, options)
                if node == NODE_B:
                    raise TaskExecutionError("unreachable")

        orchestrator = TaskOrchestrator(
            [WorkflowStep(StubTask("a", calls)), WorkflowStep(FailOnSecondNode("b", calls))]
        )

        report = await orchestrator.run(
            [NODE_A, NODE_B, Node(host="web3.example.com")], application, deployment
        )

        assert len(report.node_reports) == 2
        assert ("rollback", "a", "web2.example.com") in calls
        assert ("rollback", "b", "web1.example.com") in calls
        assert ("rollback", "a", "web1.example.com") in calls
        assert not any(host == "web3.example.com" for _, _, host in calls)

    @pytest.mark.asyncio
    async def test_parallel_nodes_run_concurrently(self, application, deployment):
        started = []
        release = asyncio.Event()

        class WaitingTask(StubTask):
            async def execute(self, node, application, deployment, options=None):
                started.append(node.host)
                if len(started) == 2:
                    release.set()
                await asyncio.wait_for(release.wait(), timeout=1)

        orchestrator = TaskOrchestrator(
            [WorkflowStep(WaitingTask("a", []))], parallel_nodes=True
        )

        report = await orchestrator.run([NODE_A, NODE_B], application, deployment)

        assert report.ok
        assert sorted(started) == ["web1.example.com", "web2.example.com"]

    @pytest.mark.asyncio
    async def test_telemetry_records_each_result(self, application, deployment):
        telemetry = MagicMock()
        orchestrator = TaskOrchestrator(
            [WorkflowStep(StubTask("a", [])), WorkflowStep(StubTask("b", []))],
            telemetry=telemetry,
        )

        await orchestrator.run([NODE_A], application, deployment)

        assert telemetry.start_span.call_count == 2
        assert telemetry.end_span.call_count == 2
        recorded = [c.args[0].task_name for c in telemetry.record_task_result.call_args_list]
        assert recorded == ["a", "b"]
