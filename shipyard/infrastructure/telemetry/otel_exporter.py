"""
OpenTelemetry Exporter for Shipyard

Architectural Intent:
- Exports task and deployment telemetry to OTLP-compatible backends
- One span per task invocation, one duration metric per task result
- Disabled (bounded local buffer only) when no endpoint is configured

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging
from datetime import datetime, UTC

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, SERVICE_NAME
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from shipyard.domain.value_objects.task_result import TaskResult

logger = logging.getLogger(__name__)

METRICS_BUFFER_SIZE = 1000


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "shipyard"
    environment: str = "production"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry exporter for deployment runs.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._metrics_buffer: deque[dict[str, Any]] = deque(maxlen=METRICS_BUFFER_SIZE)
        self._meter: Any = None
        self._histograms: dict[str, Any] = {}

    @property
    def enabled(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Initialize OpenTelemetry SDK and exporters."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, telemetry disabled")
            return

        try:
            resource = Resource(
                attributes={
                    SERVICE_NAME: self.config.service_name,
                    "environment": self.config.environment,
                }
            )
            provider = TracerProvider(resource=resource)
            provider.add_span_processor(
                BatchSpanProcessor(
                    OTLPSpanExporter(
                        endpoint=self.config.endpoint, insecure=self.config.insecure
                    )
                )
            )
            trace.set_tracer_provider(provider)

            metric_reader = PeriodicExportingMetricReader(
                OTLPMetricExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
            metrics.set_meter_provider(
                MeterProvider(resource=resource, metric_readers=[metric_reader])
            )
            self._meter = metrics.get_meter(__name__)
            self._initialized = True
        except Exception as e:
            logger.error("Failed to initialize OTEL: %s", e)
            self._initialized = False

    def _get_histogram(self, name: str, unit: str = "") -> Any:
        if name not in self._histograms and self._meter:
            self._histograms[name] = self._meter.create_histogram(name, unit=unit)
        return self._histograms.get(name)

    def record_metric(
        self,
        name: str,
        value: float,
        unit: str = "",
        attributes: Optional[dict[str, str]] = None,
    ) -> None:
        """Record a metric value."""
        self._metrics_buffer.append(
            {
                "name": name,
                "value": value,
                "unit": unit,
                "attributes": attributes or {},
                "timestamp": datetime.now(UTC).isoformat(),
            }
        )

        if self._initialized:
            histogram = self._get_histogram(name, unit)
            if histogram:
                histogram.record(value, attributes=attributes or {})

    def record_task_result(self, result: TaskResult) -> None:
        self.record_metric(
            "shipyard.task.duration_ms",
            result.duration_ms,
            unit="ms",
            attributes={
                "task": result.task_name,
                "phase": result.phase.value,
                "node": result.node.display_name,
                "outcome": result.outcome.value,
            },
        )

    def record_deployment_outcome(self, deployment_name: str, status: str) -> None:
        self.record_metric(
            "shipyard.deployment.outcome",
            1.0 if status == "COMPLETED" else 0.0,
            attributes={"deployment": deployment_name, "status": status},
        )

    def start_span(
        self,
        name: str,
        attributes: Optional[dict[str, str]] = None,
    ) -> Optional[Any]:
        """Start a tracing span."""
        if not self._initialized:
            return None
        tracer = trace.get_tracer(__name__)
        return tracer.start_span(name, attributes=attributes or {})

    def end_span(self, span: Any) -> None:
        if span is not None:
            span.end()

    def flush(self) -> None:
        """Drop the local buffer; with the SDK enabled the readers export the rest."""
        flushed = len(self._metrics_buffer)
        self._metrics_buffer.clear()
        if flushed:
            logger.debug("Flushed %d buffered metrics", flushed)


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "shipyard",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create OTEL exporter."""
    exporter = OTELExporter(
        OTELConfig(endpoint=endpoint or "", service_name=service_name, insecure=insecure)
    )
    exporter.initialize()
    return exporter
