"""Unload station with an exclusive server and a FIFO queue."""

from collections import deque
from typing import Deque, Dict, Optional


class Station:
    """An unload station where one truck unloads at a time.

    The truck currently unloading stays at the head of ``queue`` until its
    unload finishes. ``is_busy`` is true iff that head truck is unloading.
    """

    def __init__(self, station_id: int):
        """Initialize station.

        Args:
            station_id: Unique station identifier
        """
        self.station_id = station_id
        self.is_busy = False
        self.busy_until = 0.0
        self.total_busy_time = 0.0
        self.queue: Deque[int] = deque()

    def enqueue(self, truck_id: int) -> None:
        self.queue.append(truck_id)

    def head(self) -> Optional[int]:
        """Truck at the front of the queue, or None if empty."""
        return self.queue[0] if self.queue else None

    def queue_length(self) -> int:
        """Number of trucks waiting plus the one unloading."""
        return len(self.queue)

    def begin_service(self, current_time: float, unload_time: float) -> None:
        """Mark the station busy for one unload starting now.

        Args:
            current_time: Current simulation time
            unload_time: Fixed unload duration
        """
        self.is_busy = True
        self.busy_until = current_time + unload_time
        self.total_busy_time += unload_time

    def finish_service(self) -> Optional[int]:
        """Pop the unloaded truck and return the next head, if any.

        The station stays busy when another truck is waiting; the caller
        starts that truck's unload at the same time.

        Returns:
            Id of the next truck to unload, or None if the queue is empty
        """
        if self.queue:
            self.queue.popleft()

        if self.queue:
            return self.queue[0]

        self.is_busy = False
        return None

    def trim_to_horizon(self, horizon: float) -> float:
        """Remove busy time booked past the horizon by an unfinished unload.

        Args:
            horizon: Simulation horizon

        Returns:
            Minutes removed from ``total_busy_time``
        """
        if not self.is_busy:
            return 0.0
        overhang = max(0.0, self.busy_until - horizon)
        self.total_busy_time = max(0.0, self.total_busy_time - overhang)
        return overhang

    def utilization(self, horizon: float) -> float:
        """Percentage of the horizon the station spent unloading."""
        if horizon <= 0:
            return 0.0
        return self.total_busy_time / horizon * 100.0

    def to_dict(self, horizon: float) -> Dict:
        return {
            'station_id': self.station_id,
            'total_busy_time': self.total_busy_time,
            'utilization': self.utilization(horizon),
        }

    def __repr__(self) -> str:
        return (
            f"Station(id={self.station_id}, busy={self.is_busy}, "
            f"queue={list(self.queue)})"
        )
