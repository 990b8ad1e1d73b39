"""Station-selection policies."""

from .station_selector import StationSelector, ShortestQueueSelector, create_selector

__all__ = [
    "StationSelector",
    "ShortestQueueSelector",
    "create_selector",
]
