"""HaulSim: discrete event simulator for mining haul fleets."""

from .core.simulator import Simulator
from .core.event_queue import Event, EventType, EventQueue
from .core.metrics_collector import MetricsCollector
from .fleet.truck import Truck, TruckState
from .fleet.station import Station
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "Simulator",
    "Event",
    "EventType",
    "EventQueue",
    "MetricsCollector",
    "Truck",
    "TruckState",
    "Station",
    "setup_logger",
]
