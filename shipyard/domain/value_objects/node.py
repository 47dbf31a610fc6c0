"""
Node Value Object

Architectural Intent:
- Immutable value object identifying a target host of a deployment
- A host is an IP address or a DNS name; user and port address the SSH login
- An optional display name is used in deployment log lines
- Nodes on the loopback address are served by the local shell
"""

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

_LABEL_RE = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def _is_valid_host(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass
    # dotted digits that are not an address are a typo, not a DNS name
    if not host or len(host) > 253 or host.replace(".", "").isdigit():
        return False
    return all(_LABEL_RE.match(label) for label in host.split("."))


@dataclass(frozen=True)
class Node:
    host: str
    user: str = "root"
    port: int = 22
    name: str = ""

    def __post_init__(self) -> None:
        if not self.user:
            raise ValueError("Node user cannot be empty")
        if not (1 <= self.port <= 65535):
            raise ValueError(f"Port must be 1-65535, got {self.port}")
        if not _is_valid_host(self.host):
            raise ValueError(f"Invalid hostname: {self.host!r}")

    @property
    def display_name(self) -> str:
        return self.name or self.host

    @property
    def is_local(self) -> bool:
        if self.host == "localhost":
            return True
        try:
            return ipaddress.ip_address(self.host).is_loopback
        except ValueError:
            return False

    def __str__(self) -> str:
        return f"{self.user}@{self.host}:{self.port}"

    @staticmethod
    def parse(connection_string: str, name: str = "") -> "Node":
        """Parse 'host', 'user@host:port' or 'user@[::1]:port' into a Node."""
        try:
            parts = urlsplit(f"ssh://{connection_string.strip()}")
            port = parts.port
        except ValueError as e:
            raise ValueError(
                f"Invalid connection string {connection_string!r}: {e}"
            ) from None
        return Node(
            host=parts.hostname or "",
            user=parts.username or "root",
            port=port or 22,
            name=name,
        )
