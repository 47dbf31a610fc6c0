"""
Composition Root

Architectural Intent:
- Dependency injection composition root for Shipyard
- Single place where adapters, the shell gateway, tasks and use cases are wired
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Localhost nodes are served by the local shell adapter, all others by Fabric
"""

from dataclasses import dataclass
from typing import Optional
from shipyard.application.use_cases.deploy_release import DeployRelease
from shipyard.application.use_cases.rollback_release import RollbackRelease
from shipyard.domain.services.shell_command_service import ShellCommandService
from shipyard.domain.tasks import BUILTIN_TASKS, Task
from shipyard.infrastructure.adapters.fabric_adapter import FabricAdapter
from shipyard.infrastructure.adapters.local_shell_adapter import LocalShellAdapter
from shipyard.infrastructure.config import ShipyardConfig, load_config
from shipyard.infrastructure.event_bus import EventBus
from shipyard.infrastructure.logging import configure_logging, level_from_name
from shipyard.infrastructure.telemetry.otel_exporter import OTELExporter, create_exporter


@dataclass
class ShipyardContainer:
    """DI container holding all wired dependencies."""

    config: ShipyardConfig
    fabric_adapter: FabricAdapter
    local_adapter: LocalShellAdapter
    shell: ShellCommandService
    event_bus: EventBus
    telemetry: OTELExporter
    tasks: dict[str, Task]
    deploy_release: DeployRelease
    rollback_release: RollbackRelease

    def task(self, name: str) -> Task:
        try:
            return self.tasks[name]
        except KeyError:
            raise KeyError(f"Unknown task: {name!r}") from None


def create_container(config: Optional[ShipyardConfig] = None) -> ShipyardContainer:
    """Create and wire all dependencies."""
    config = config or load_config()
    configure_logging(level_from_name(config.log_level), json_format=config.log_json)

    timeout = config.transport.command_timeout or None
    fabric_adapter = FabricAdapter(
        connect_timeout=config.transport.connect_timeout, command_timeout=timeout
    )
    local_adapter = LocalShellAdapter(timeout=timeout)
    shell = ShellCommandService(fabric_adapter, local_executor=local_adapter)
    event_bus = EventBus()
    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint, insecure=config.telemetry.insecure
    )

    tasks = {task_cls.name: task_cls(shell) for task_cls in BUILTIN_TASKS}
    deploy_release = DeployRelease(
        event_bus,
        telemetry=telemetry,
        parallel_nodes=config.orchestration.parallel_nodes,
    )
    rollback_release = RollbackRelease(shell)

    return ShipyardContainer(
        config=config,
        fabric_adapter=fabric_adapter,
        local_adapter=local_adapter,
        shell=shell,
        event_bus=event_bus,
        telemetry=telemetry,
        tasks=tasks,
        deploy_release=deploy_release,
        rollback_release=rollback_release,
    )
