"""
chainlaunch/events.py

Progress events emitted while publishing.

The EventBus is a fire-and-forget sink: senders never wait for, or hear
about, what subscribers do with an event.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Deque, List, Optional
import logging
import time

logger = logging.getLogger("chainlaunch.events")


class EventStatus(Enum):
    """
    Status attached to a progress event.

    NEUTRAL: Informational only
    ONGOING: A step has started
    DONE: A step has completed
    """
    NEUTRAL = auto()
    ONGOING = auto()
    DONE = auto()


@dataclass
class Event:
    """A human-readable progress notification."""
    status: EventStatus
    description: str
    timestamp: float = field(default_factory=time.time)

    @property
    def in_progress(self) -> bool:
        return self.status == EventStatus.ONGOING

    def to_dict(self) -> dict:
        return {
            "status": self.status.name.lower(),
            "description": self.description,
            "timestamp": self.timestamp,
        }

    def __str__(self) -> str:
        return self.description


EventCallback = Callable[[Event], None]


class EventBus:
    """
    Event sink that logs events and fans them out to subscribers.

    Example:
        bus = EventBus(history=100)
        bus.subscribe(lambda event: print(event))
        network = Network(broadcaster, queries, account, events=bus)
    """

    def __init__(self, history: int = 0):
        """
        Initialize the bus.

        Args:
            history: Number of recent events to keep (0 keeps none)
        """
        self._subscribers: List[EventCallback] = []
        self._history: Optional[Deque[Event]] = deque(maxlen=history) if history > 0 else None
        self._sent = 0

    def subscribe(self, callback: EventCallback) -> None:
        """Register a callback invoked for every event."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: EventCallback) -> None:
        """Remove a previously registered callback."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def send(self, event: Event) -> None:
        """Deliver an event to every subscriber."""
        self._sent += 1
        if self._history is not None:
            self._history.append(event)

        logger.info(f"[{event.status.name.lower()}] {event.description}")

        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception as e:
                logger.warning(f"Event subscriber error: {e}")

    @property
    def history(self) -> List[Event]:
        """Most recent events, oldest first."""
        return list(self._history) if self._history is not None else []

    @property
    def sent_count(self) -> int:
        return self._sent


def new_event(status: EventStatus, description: str) -> Event:
    """Create an event stamped with the current time."""
    return Event(status=status, description=description)
