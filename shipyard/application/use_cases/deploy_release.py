"""
Deploy Release Use Case

Architectural Intent:
- Promotes one release onto a set of nodes by running a fixed list of tasks
- Drives the Deployment aggregate through its lifecycle
- Publishes the accumulated domain events once the run is over
"""

import logging
from typing import Optional
from shipyard.domain.entities.application import Application
from shipyard.domain.entities.deployment import Deployment
from shipyard.domain.ports.event_bus_port import EventBusPort
from shipyard.domain.ports.telemetry_port import TelemetryPort
from shipyard.domain.value_objects.node import Node
from shipyard.application.orchestration.task_orchestrator import (
    DeploymentReport,
    TaskOrchestrator,
    WorkflowStep,
)

logger = logging.getLogger(__name__)


class DeployRelease:
    def __init__(
        self,
        event_bus: EventBusPort,
        telemetry: Optional[TelemetryPort] = None,
        parallel_nodes: bool = False,
    ):
        self.event_bus = event_bus
        self.telemetry = telemetry
        self.parallel_nodes = parallel_nodes

    async def execute(
        self,
        steps: list[WorkflowStep],
        nodes: list[Node],
        application: Application,
        deployment: Deployment,
    ) -> tuple[Deployment, DeploymentReport]:
        orchestrator = TaskOrchestrator(
            steps, parallel_nodes=self.parallel_nodes, telemetry=self.telemetry
        )
        deployment = deployment.start()
        deployment.logger.info(
            "%s release %s of %s to %d node(s)",
            "Simulating" if deployment.is_dry_run else "Deploying",
            deployment.release_identifier,
            application.name,
            len(nodes),
        )

        report = await orchestrator.run(nodes, application, deployment)

        if report.ok:
            deployment = deployment.complete()
            logger.info("Deployment %s completed.", deployment.name)
        else:
            failure = report.failures[0]
            deployment = deployment.fail(
                f"Task {failure.task_name} failed on "
                f"{failure.node.display_name}: {failure.error_message}"
            )
            logger.error("Deployment %s failed: %s", deployment.name, deployment.error_message)
            if report.rolled_back:
                deployment = deployment.mark_rolled_back()

        if self.telemetry:
            self.telemetry.record_deployment_outcome(deployment.name, deployment.status.name)
            self.telemetry.flush()
        await self.event_bus.publish(list(deployment.domain_events))
        return deployment, report
