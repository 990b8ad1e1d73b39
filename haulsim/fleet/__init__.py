"""Trucks and unload stations."""

from .truck import Truck, TruckState
from .station import Station

__all__ = ["Truck", "TruckState", "Station"]
