"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from shipyard.domain.ports.remote_executor_port import CommandResult, RemoteExecutorPort
from shipyard.domain.ports.event_bus_port import EventBusPort
from shipyard.domain.ports.telemetry_port import TelemetryPort

__all__ = [
    "CommandResult",
    "RemoteExecutorPort",
    "EventBusPort",
    "TelemetryPort",
]
