"""
Configuration Module

Architectural Intent:
- Centralized configuration of the Shipyard runtime (transport, orchestration,
  telemetry, logging)
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- JSON config file, shipyard.json in CWD by default
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Nodes, applications and task lists are not loaded here
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

from shipyard.domain.value_objects.execution_mode import ExecutionMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    """SSH / local shell transport configuration."""
    connect_timeout: int = 30
    command_timeout: int = 0  # 0 disables the timeout


@dataclass(frozen=True)
class OrchestrationConfig:
    """Task orchestration configuration."""
    parallel_nodes: bool = False
    dry_run: bool = False

    @property
    def execution_mode(self) -> ExecutionMode:
        return ExecutionMode.from_dry_run(self.dry_run)


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class ShipyardConfig:
    """Root configuration for Shipyard."""
    transport: TransportConfig = field(default_factory=TransportConfig)
    orchestration: OrchestrationConfig = field(default_factory=OrchestrationConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"
    log_json: bool = False


def _env_override(data: dict, prefix: str = "SHIPYARD") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern SHIPYARD_SECTION_KEY.
    For example: SHIPYARD_TRANSPORT_CONNECT_TIMEOUT=10,
    SHIPYARD_ORCHESTRATION_DRY_RUN=true
    """
    top_level = {f.name for f in dataclasses.fields(ShipyardConfig)}
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in top_level:
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _coerce(type_name: str, value):
    if not isinstance(value, str):
        return value
    if type_name == "int":
        return int(value)
    if type_name == "bool":
        return value.lower() in ("true", "1", "yes")
    return value


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid = {f.name: f.type for f in dataclasses.fields(cls)}
    filtered = {k: _coerce(valid[k], v) for k, v in data.items() if k in valid}
    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "SHIPYARD",
) -> ShipyardConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (SHIPYARD_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to shipyard.json in CWD.
        env_prefix: Environment variable prefix. Defaults to SHIPYARD.
    """
    config_path = Path(path) if path else Path("shipyard.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return ShipyardConfig(
        transport=_build_sub_config(TransportConfig, data.get("transport", {})),
        orchestration=_build_sub_config(
            OrchestrationConfig, data.get("orchestration", {})
        ),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=data.get("log_level", "WARNING"),
        log_json=_coerce("bool", data.get("log_json", False)),
    )
