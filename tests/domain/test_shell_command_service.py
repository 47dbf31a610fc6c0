"""Tests for the shell command gateway."""

import logging
import pytest
from unittest.mock import AsyncMock
from shipyard.domain.exceptions import TaskExecutionError, TransportError
from shipyard.domain.ports.remote_executor_port import CommandResult
from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.value_objects.node import Node


class TestRealMode:
    @pytest.mark.asyncio
    async def test_returns_stdout(self, shell, executor, node, deployment):
        executor.respond("uptime", stdout="up 3 days\n")

        output = await shell.run("uptime", node, deployment)

        assert output == "up 3 days\n"
        assert executor.commands == ["uptime"]

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, shell, executor, node, deployment):
        executor.respond("false", exit_code=1, stderr="nope\n")

        with pytest.raises(TaskExecutionError) as exc_info:
            await shell.execute_or_simulate("false", node, deployment)

        error = exc_info.value
        assert error.exit_code == 1
        assert error.command == "false"
        assert error.stderr == "nope\n"
        assert "web1" in str(error)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, node, deployment):
        executor = AsyncMock()
        executor.run.side_effect = TransportError("unreachable")
        shell = ShellCommandService(executor)

        with pytest.raises(TaskExecutionError, match="unreachable"):
            await shell.run("uptime", node, deployment)


class TestSimulatedMode:
    @pytest.mark.asyncio
    async def test_unforced_command_suppressed(
        self, shell, executor, node, dry_run_deployment, caplog
    ):
        with caplog.at_level(logging.INFO, logger="shipyard"):
            output = await shell.execute_or_simulate("rm -rf /tmp/x", node, dry_run_deployment)

        assert output == ""
        assert executor.commands == []
        assert 'Would execute "rm -rf /tmp/x" on web1' in caplog.text

    @pytest.mark.asyncio
    async def test_forced_command_runs(self, shell, executor, node, dry_run_deployment):
        executor.respond("readlink", stdout="20230103\n")

        output = await shell.run("readlink previous", node, dry_run_deployment, force=True)

        assert output == "20230103\n"
        assert executor.commands == ["readlink previous"]

    @pytest.mark.asyncio
    async def test_suppressed_command_never_fails(self, shell, executor, node, dry_run_deployment):
        executor.respond("false", exit_code=1)
        assert await shell.run("false", node, dry_run_deployment) == ""


class TestExecutorRouting:
    @pytest.mark.asyncio
    async def test_local_node_uses_local_executor(self, deployment):
        remote = AsyncMock()
        local = AsyncMock()
        local.run.return_value = CommandResult(0, "local\n")
        shell = ShellCommandService(remote, local_executor=local)

        output = await shell.run("hostname", Node(host="localhost"), deployment)

        assert output == "local\n"
        remote.run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_local_node_without_local_executor(self, deployment):
        remote = AsyncMock()
        remote.run.return_value = CommandResult(0, "remote\n")
        shell = ShellCommandService(remote)

        assert await shell.run("hostname", Node(host="localhost"), deployment) == "remote\n"
