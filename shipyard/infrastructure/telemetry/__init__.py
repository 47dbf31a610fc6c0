"""
Shipyard Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability of deployment runs
- Task spans and task/deployment metrics
"""

from shipyard.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
