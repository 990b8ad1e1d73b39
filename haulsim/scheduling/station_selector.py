"""Policies for choosing which station an arriving truck joins."""

from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..fleet.station import Station
from ..utils.logger import setup_logger


class StationSelector(ABC):
    """Abstract base class for station-selection policies."""

    def __init__(self, config: Dict = None):
        """Initialize selector.

        Args:
            config: Dispatch configuration
        """
        self.config = config or {}
        self.logger = setup_logger(self.__class__.__name__)

    @abstractmethod
    def select(self, stations: Sequence[Station]) -> int:
        """Choose a station for an arriving truck.

        Args:
            stations: All stations, in id order

        Returns:
            Id of the chosen station

        Raises:
            ValueError: If there are no stations
        """
        pass


class ShortestQueueSelector(StationSelector):
    """Join the station with the fewest trucks queued or unloading.

    Ties go to the first station in enumeration order. Only the current
    queue length is considered, not when the station will free up.
    """

    def select(self, stations: Sequence[Station]) -> int:
        if not stations:
            raise ValueError("Cannot select a station from an empty station list")

        best = stations[0]
        for station in stations[1:]:
            # strict comparison keeps the lowest id among ties
            if station.queue_length() < best.queue_length():
                best = station

        self.logger.debug(
            f"Selected station {best.station_id} (queue length {best.queue_length()})"
        )
        return best.station_id


SELECTORS = {
    'shortest_queue': ShortestQueueSelector,
}


def create_selector(config: Dict) -> StationSelector:
    """Build the selector named by ``config['station_policy']``.

    Args:
        config: Dispatch configuration

    Returns:
        Station selector instance

    Raises:
        ValueError: If the policy name is unknown
    """
    policy = config.get('station_policy', 'shortest_queue')
    if policy not in SELECTORS:
        raise ValueError(
            f"Unknown station policy '{policy}'. Available: {sorted(SELECTORS)}"
        )
    return SELECTORS[policy](config)
