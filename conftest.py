"""Global test configuration.

Shared fixtures for the deployment context and a recording transport that
stands in for a node.
"""

import logging

import pytest

from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.value_objects.execution_mode import ExecutionMode
from shipyard.domain.value_objects.node import Node
from shipyard.domain.value_objects.release_identifier import ReleaseIdentifier


class RecordingExecutor(RemoteExecutorPort):
    """Transport double: records commands and answers from a script."""

    def __init__(self):
        self.commands = []
        self.responses = {}

    def respond(self, fragment, stdout="", exit_code=0, stderr=""):
        self.responses[fragment] = CommandResult(exit_code, stdout, stderr)

    async def run(self, node, command):
        self.commands.append(command)
        for fragment, result in self.responses.items():
            if fragment in command:
                return result
        return CommandResult(0)


@pytest.fixture
def executor():
    return RecordingExecutor()


@pytest.fixture
def shell(executor):
    return ShellCommandService(executor)


@pytest.fixture
def node():
    return Node(host="web1.example.com", user="deploy", name="web1")


@pytest.fixture
def application():
    return Application(name="shop", deployment_path="/var/www/shop")


@pytest.fixture
def deployment():
    return Deployment(name="shop-production", release_identifier=ReleaseIdentifier("20230104"))


@pytest.fixture
def dry_run_deployment():
    return Deployment(
        name="shop-production",
        release_identifier=ReleaseIdentifier("20230104"),
        mode=ExecutionMode.SIMULATED,
    )


@pytest.fixture(autouse=True)
def _restore_shipyard_logger():
    logger = logging.getLogger("shipyard")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
