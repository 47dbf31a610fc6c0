"""
Deployment Module

Architectural Intent:
- Deployment aggregate describes one release being promoted (or rolled back)
- Tasks receive it as a read-only context; it carries the release identifier,
  the execution mode and the logger every task writes to
- Lifecycle managed through state transitions enforced by domain methods
- All state changes produce new instances to ensure auditability
- Domain events published for cross-context communication

Domain Events:
- DeploymentStartedEvent: Published when a deployment run begins
- DeploymentCompletedEvent: Published when every task succeeded on every node
- DeploymentFailedEvent: Published when a task failed
- DeploymentRolledBackEvent: Published when completed tasks were unwound
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union
from shipyard.domain.entities.application import Application
from shipyard.domain.events.event_base import DomainEvent
from shipyard.domain.value_objects.execution_mode import ExecutionMode
from shipyard.domain.value_objects.release_identifier import ReleaseIdentifier

DeploymentLogger = Union[logging.Logger, logging.LoggerAdapter]


class DeploymentStatus(Enum):
    PENDING = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()
    ROLLED_BACK = auto()


@dataclass(frozen=True)
class DeploymentStartedEvent(DomainEvent):
    release_identifier: str = ""
    dry_run: bool = False


@dataclass(frozen=True)
class DeploymentCompletedEvent(DomainEvent):
    release_identifier: str = ""


@dataclass(frozen=True)
class DeploymentFailedEvent(DomainEvent):
    release_identifier: str = ""
    error_message: str = ""


@dataclass(frozen=True)
class DeploymentRolledBackEvent(DomainEvent):
    release_identifier: str = ""


def _default_logger(name: str, release_identifier: ReleaseIdentifier) -> DeploymentLogger:
    return logging.LoggerAdapter(
        logging.getLogger("shipyard.deployment"),
        {"deployment": name, "release": str(release_identifier)},
    )


class Deployment:
    __slots__ = (
        "_name",
        "_release_identifier",
        "_mode",
        "_logger",
        "_status",
        "_error_message",
        "_domain_events",
    )

    def __init__(
        self,
        name: str,
        release_identifier: Optional[ReleaseIdentifier] = None,
        mode: ExecutionMode = ExecutionMode.REAL,
        logger: Optional[DeploymentLogger] = None,
        status: DeploymentStatus = DeploymentStatus.PENDING,
        error_message: Optional[str] = None,
        domain_events: tuple = (),
    ):
        if not name:
            raise ValueError("Deployment name cannot be empty")
        self._name = name
        self._release_identifier = release_identifier or ReleaseIdentifier.generate()
        self._mode = mode
        self._logger = logger or _default_logger(name, self._release_identifier)
        self._status = status
        self._error_message = error_message
        self._domain_events = domain_events

    @property
    def name(self) -> str:
        return self._name

    @property
    def release_identifier(self) -> ReleaseIdentifier:
        return self._release_identifier

    @property
    def mode(self) -> ExecutionMode:
        return self._mode

    @property
    def is_dry_run(self) -> bool:
        return self._mode is ExecutionMode.SIMULATED

    @property
    def logger(self) -> DeploymentLogger:
        return self._logger

    @property
    def status(self) -> DeploymentStatus:
        return self._status

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def domain_events(self) -> tuple:
        return self._domain_events

    def application_release_path(self, application: Application) -> str:
        return f"{application.releases_path}/{self._release_identifier}"

    def _evolve(
        self,
        status: DeploymentStatus,
        event: DomainEvent,
        error_message: Optional[str] = None,
    ) -> "Deployment":
        return Deployment(
            name=self._name,
            release_identifier=self._release_identifier,
            mode=self._mode,
            logger=self._logger,
            status=status,
            error_message=error_message or self._error_message,
            domain_events=self._domain_events + (event,),
        )

    def start(self) -> "Deployment":
        if self._status != DeploymentStatus.PENDING:
            raise ValueError("Deployment can only start from PENDING state")
        return self._evolve(
            DeploymentStatus.RUNNING,
            DeploymentStartedEvent(
                aggregate_id=self._name,
                release_identifier=str(self._release_identifier),
                dry_run=self.is_dry_run,
            ),
        )

    def complete(self) -> "Deployment":
        if self._status != DeploymentStatus.RUNNING:
            raise ValueError("Deployment must be RUNNING to complete")
        return self._evolve(
            DeploymentStatus.COMPLETED,
            DeploymentCompletedEvent(
                aggregate_id=self._name,
                release_identifier=str(self._release_identifier),
            ),
        )

    def fail(self, message: str) -> "Deployment":
        return self._evolve(
            DeploymentStatus.FAILED,
            DeploymentFailedEvent(
                aggregate_id=self._name,
                release_identifier=str(self._release_identifier),
                error_message=message,
            ),
            error_message=message,
        )

    def mark_rolled_back(self) -> "Deployment":
        if self._status != DeploymentStatus.FAILED:
            raise ValueError("Only a FAILED deployment can be rolled back")
        return self._evolve(
            DeploymentStatus.ROLLED_BACK,
            DeploymentRolledBackEvent(
                aggregate_id=self._name,
                release_identifier=str(self._release_identifier),
            ),
        )

    def __repr__(self) -> str:
        return (
            f"Deployment(name={self._name}, "
            f"release_identifier={self._release_identifier}, mode={self._mode}, "
            f"status={self._status}, error_message={self._error_message})"
        )
