"""Event queue implementation for discrete event simulation."""

import heapq
import itertools
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional


class EventType(Enum):
    """Types of events in the haul cycle."""
    FINISH_MINING = "finish_mining"
    ARRIVE_STATION = "arrive_station"
    START_UNLOADING = "start_unloading"
    FINISH_UNLOADING = "finish_unloading"


@dataclass(order=True)
class Event:
    """Event in the discrete event simulation.

    Attributes:
        time: Event timestamp (simulated minutes)
        sequence: Insertion order, assigned by the queue; breaks time ties
        event_type: Type of event
        truck_id: Truck the event concerns
        station_id: Station the event concerns, None until bound to one
    """
    time: float
    sequence: int = field(default=0)
    event_type: Optional[EventType] = field(default=None, compare=False)
    truck_id: int = field(default=0, compare=False)
    station_id: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")
        if not isinstance(self.event_type, EventType):
            raise ValueError(f"Event requires an EventType, got {self.event_type!r}")


class EventQueue:
    """Priority queue for managing simulation events.

    Events are ordered by time, with earlier events processed first.
    Events with the same time come out in the order they were pushed.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue = []
        self._counter = itertools.count()
        self._event_count = 0

    def push(self, event: Event) -> None:
        """Add event to the queue, stamping its sequence number.

        Args:
            event: Event to add
        """
        event.sequence = next(self._counter)
        heapq.heappush(self._queue, event)
        self._event_count += 1

    def pop(self) -> Event:
        """Remove and return the next event.

        Returns:
            Next event to process

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")
        return heapq.heappop(self._queue)

    def peek(self) -> Optional[Event]:
        """Return the next event without removing it.

        Returns:
            Next event, or None if queue is empty
        """
        return self._queue[0] if self._queue else None

    def is_empty(self) -> bool:
        """Check if queue is empty."""
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    @property
    def total_pushed(self) -> int:
        """Number of events pushed over the queue's lifetime."""
        return self._event_count

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={len(self._queue)}, next={self.peek()})"
