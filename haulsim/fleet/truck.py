"""Haul truck state and statistics."""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Optional


class TruckState(Enum):
    """Phases of a truck's haul cycle.

    Each state corresponds to exactly one kind of pending event, except
    STRANDED, which has none.
    """
    MINING = "mining"  # includes the return leg from the station
    TRAVELING_TO_STATION = "traveling_to_station"
    QUEUED = "queued"
    UNLOADING = "unloading"
    STRANDED = "stranded"


@dataclass
class Truck:
    """A mining truck and its cumulative statistics (minutes)."""
    truck_id: int

    # Statistics
    loads_delivered: int = 0
    total_wait_time: float = 0.0
    total_travel_time: float = 0.0
    total_mining_time: float = 0.0
    total_unload_time: float = 0.0

    # Transient: time the truck last joined a station queue
    queue_join_time: Optional[float] = None

    state: TruckState = TruckState.MINING
    pending_event: bool = field(default=False, repr=False)

    def mark_scheduled(self) -> None:
        """Record that an event for this truck is now in the queue.

        Raises:
            RuntimeError: If the truck already has an outstanding event
        """
        if self.pending_event:
            raise RuntimeError(
                f"Truck {self.truck_id} already has a pending event (state={self.state.value})"
            )
        self.pending_event = True

    def mark_dispatched(self) -> None:
        """Record that the truck's outstanding event has been handled."""
        self.pending_event = False

    def join_queue(self, current_time: float) -> None:
        self.queue_join_time = current_time
        self.state = TruckState.QUEUED

    def start_unloading(self, current_time: float, unload_time: float) -> None:
        """Charge queue wait and the fixed unload duration."""
        self.total_wait_time += current_time - self.queue_join_time
        self.total_unload_time += unload_time
        self.queue_join_time = None
        self.state = TruckState.UNLOADING

    def discard_unfinished_unload(self, unload_time: float) -> bool:
        """Drop the unload booked for a truck still unloading at the horizon.

        Unload time only counts completed unloads, so it always equals
        ``loads_delivered * unload_time``.

        Returns:
            True if an unfinished unload was removed
        """
        if self.state != TruckState.UNLOADING:
            return False
        self.total_unload_time -= unload_time
        return True

    def to_dict(self) -> Dict:
        stats = asdict(self)
        for key in ("queue_join_time", "state", "pending_event"):
            stats.pop(key)
        return stats

    def __repr__(self) -> str:
        return (
            f"Truck(id={self.truck_id}, state={self.state.value}, "
            f"loads={self.loads_delivered})"
        )
