"""
Event Bus Port

Architectural Intent:
- Abstract interface for publishing deployment events
- Allows decoupling of event producers from consumers
- Implementation can be in-memory or backed by a message queue
"""

from typing import Protocol, Callable, Awaitable, runtime_checkable
from shipyard.domain.events.event_base import DomainEvent


@runtime_checkable
class EventBusPort(Protocol):
    async def publish(self, events: list[DomainEvent]) -> None: ...

    def subscribe(
        self, event_type: type, handler: Callable[[DomainEvent], Awaitable[None]]
    ) -> None: ...
