"""
Domain Events Package

Architectural Intent:
- Contains the base of the events raised during a deployment run
- Concrete deployment events live beside the Deployment aggregate
"""

from shipyard.domain.events.event_base import DomainEvent

__all__ = ["DomainEvent"]
