"""Main simulator class orchestrating the discrete event simulation."""

import time
from typing import Dict, Optional
import numpy as np

from .event_queue import Event, EventType, EventQueue
from .metrics_collector import MetricsCollector
from ..fleet.truck import Truck, TruckState
from ..fleet.station import Station
from ..scheduling.station_selector import create_selector
from ..utils.logger import setup_logger


class Simulator:
    """Discrete event simulator for a mining haul fleet.

    Trucks cycle through mining, travel to an unload station, queue for
    exclusive unloading, and travel back to mine again. The simulator owns:
    - the event queue and simulation clock
    - truck and station state
    - the station-selection policy
    - the random source for mining durations
    - metrics collection

    Events with equal timestamps are dispatched in the order they were
    scheduled, so a seeded run is fully reproducible.
    """

    def __init__(self, config: Dict, num_trucks: Optional[int] = None,
                 num_stations: Optional[int] = None, seed: Optional[int] = None):
        """Initialize simulator.

        Args:
            config: Simulation configuration dictionary
            num_trucks: Fleet size; defaults to ``config['fleet']['num_trucks']``
            num_stations: Station count; defaults to ``config['fleet']['num_stations']``
            seed: Random seed; defaults to ``config['simulation']['random_seed']``.
                None draws fresh OS entropy.

        Raises:
            ValueError: If counts are negative or timing parameters are invalid
        """
        self.config = config
        self.logger = setup_logger(self.__class__.__name__)

        fleet_config = config.get('fleet', {})
        if num_trucks is None:
            num_trucks = fleet_config.get('num_trucks', 0)
        if num_stations is None:
            num_stations = fleet_config.get('num_stations', 0)

        # Timing parameters (minutes)
        timing = config['timing']
        self.horizon = float(config['simulation']['horizon'])
        self.mining_time_min = int(timing['mining_time_min'])
        self.mining_time_max = int(timing['mining_time_max'])
        self.travel_time = float(timing['travel_time'])
        self.unload_time = float(timing['unload_time'])
        self._validate(num_trucks, num_stations)

        # Owned random source; entropy is kept so unseeded runs can be replayed
        if seed is None:
            seed = config['simulation'].get('random_seed')
        seed_sequence = np.random.SeedSequence(seed)
        self.seed = seed_sequence.entropy
        self.rng = np.random.default_rng(seed_sequence)

        # Simulation state
        self.current_time = 0.0
        self.event_queue = EventQueue()
        self.trucks = [Truck(truck_id=i) for i in range(num_trucks)]
        self.stations = [Station(i) for i in range(num_stations)]

        self.selector = create_selector(config.get('dispatch', {}))
        self.metrics_collector = MetricsCollector(config)

        self._handlers = {
            EventType.FINISH_MINING: self._handle_finish_mining,
            EventType.ARRIVE_STATION: self._handle_arrive_station,
            EventType.START_UNLOADING: self._handle_start_unloading,
            EventType.FINISH_UNLOADING: self._handle_finish_unloading,
        }
        self._has_run = False

        self.logger.info(
            f"Simulator initialized: {num_trucks} trucks, {num_stations} stations, "
            f"horizon {self.horizon:.0f} min"
        )

    def _validate(self, num_trucks: int, num_stations: int) -> None:
        """Reject configurations the engine cannot run."""
        if num_trucks < 0:
            raise ValueError(f"num_trucks must be non-negative, got {num_trucks}")
        if num_stations < 0:
            raise ValueError(f"num_stations must be non-negative, got {num_stations}")
        if self.horizon <= 0:
            raise ValueError(f"horizon must be positive, got {self.horizon}")
        if self.mining_time_min < 0 or self.mining_time_min > self.mining_time_max:
            raise ValueError(
                f"Invalid mining time range [{self.mining_time_min}, {self.mining_time_max}]"
            )
        if self.travel_time < 0 or self.unload_time < 0:
            raise ValueError("travel_time and unload_time must be non-negative")
        # Every cycle must advance the clock or the run never reaches the horizon
        if 2 * self.travel_time + self.unload_time + self.mining_time_min <= 0:
            raise ValueError("Haul cycle has zero duration; travel, unload or mining time must be positive")

    def run(self) -> Dict:
        """Run the simulation up to the horizon.

        Returns:
            Dictionary containing simulation results and metrics

        Raises:
            RuntimeError: If the simulator has already been run
        """
        if self._has_run:
            raise RuntimeError("Simulator.run() can only be called once")
        self._has_run = True

        start_time = time.time()
        self.logger.info("Starting simulation...")

        self._initialize()

        # Main simulation loop
        while not self.event_queue.is_empty():
            event = self.event_queue.pop()

            # Anything past the horizon ends the run; later events are never reached
            if event.time > self.horizon:
                self.logger.debug(
                    f"Event {event.event_type.value} at {event.time:.1f} is past the horizon, stopping"
                )
                break

            self.current_time = event.time
            self._process_event(event)

        results = self._finalize()

        elapsed_time = time.time() - start_time
        self.logger.info(f"Simulation completed in {elapsed_time:.2f}s")

        return results

    def _initialize(self) -> None:
        """Schedule the first end-of-mining event for every truck."""
        for truck in self.trucks:
            mining_time = self._draw_mining_time()
            truck.state = TruckState.MINING
            self._schedule(self.current_time + mining_time, EventType.FINISH_MINING, truck.truck_id)

        self.logger.debug(f"Seeded {len(self.trucks)} initial mining events")

    def _draw_mining_time(self) -> int:
        """Draw a mining duration uniformly from the closed configured range."""
        return int(self.rng.integers(self.mining_time_min, self.mining_time_max, endpoint=True))

    def _schedule(self, event_time: float, event_type: EventType, truck_id: int,
                  station_id: Optional[int] = None) -> None:
        """Push an event for a truck that has no other pending event."""
        self.trucks[truck_id].mark_scheduled()
        self.event_queue.push(Event(
            time=event_time,
            event_type=event_type,
            truck_id=truck_id,
            station_id=station_id,
        ))

    def _process_event(self, event: Event) -> None:
        """Process a single event.

        Args:
            event: Event to process

        Raises:
            ValueError: If the event references an unknown truck or station
        """
        if not 0 <= event.truck_id < len(self.trucks):
            raise ValueError(f"Event references unknown truck {event.truck_id}")
        if event.event_type in (EventType.START_UNLOADING, EventType.FINISH_UNLOADING):
            if event.station_id is None or not 0 <= event.station_id < len(self.stations):
                raise ValueError(
                    f"Event {event.event_type.value} references unknown station {event.station_id}"
                )

        self.metrics_collector.record_event(event.time)
        self.trucks[event.truck_id].mark_dispatched()

        self.logger.debug(
            f"[{self.current_time:.1f}] {event.event_type.value} truck={event.truck_id} "
            f"station={event.station_id}"
        )
        self._handlers[event.event_type](event)

    def _handle_finish_mining(self, event: Event) -> None:
        """Truck leaves the mine for the stations."""
        truck = self.trucks[event.truck_id]
        truck.total_travel_time += self.travel_time
        truck.state = TruckState.TRAVELING_TO_STATION

        self._schedule(self.current_time + self.travel_time, EventType.ARRIVE_STATION, truck.truck_id)

    def _handle_arrive_station(self, event: Event) -> None:
        """Truck picks a station and joins its queue."""
        truck = self.trucks[event.truck_id]

        # With no stations the truck waits out the rest of the run, charged once
        if not self.stations:
            truck.queue_join_time = self.current_time
            truck.total_wait_time += self.horizon - self.current_time
            truck.state = TruckState.STRANDED
            self.logger.debug(f"Truck {truck.truck_id} stranded: no stations")
            return

        station = self.stations[self.selector.select(self.stations)]
        truck.join_queue(self.current_time)
        station.enqueue(truck.truck_id)
        self.metrics_collector.record_queue_join(station.station_id, truck.truck_id)

        if not station.is_busy and station.head() == truck.truck_id:
            self._schedule(
                self.current_time, EventType.START_UNLOADING,
                truck.truck_id, station.station_id
            )

    def _handle_start_unloading(self, event: Event) -> None:
        """Head of a station queue begins unloading."""
        truck = self.trucks[event.truck_id]
        station = self.stations[event.station_id]

        if station.head() != truck.truck_id:
            raise RuntimeError(
                f"Truck {truck.truck_id} is not at the head of station {station.station_id}'s queue"
            )

        station.begin_service(self.current_time, self.unload_time)
        truck.start_unloading(self.current_time, self.unload_time)

        self._schedule(
            station.busy_until, EventType.FINISH_UNLOADING,
            truck.truck_id, station.station_id
        )

    def _handle_finish_unloading(self, event: Event) -> None:
        """Truck finishes unloading, frees the station and heads back to mine."""
        truck = self.trucks[event.truck_id]
        station = self.stations[event.station_id]

        truck.loads_delivered += 1
        self.metrics_collector.record_unload_complete(station.station_id, truck.truck_id)

        # Next truck in line starts with no gap
        next_truck_id = station.finish_service()
        if next_truck_id is not None:
            self._schedule(
                self.current_time, EventType.START_UNLOADING,
                next_truck_id, station.station_id
            )

        # Return leg and the next mining shift are booked together
        truck.total_travel_time += self.travel_time
        mining_time = self._draw_mining_time()
        truck.total_mining_time += mining_time
        truck.state = TruckState.MINING

        self._schedule(
            self.current_time + self.travel_time + mining_time,
            EventType.FINISH_MINING, truck.truck_id
        )

    def _finalize(self) -> Dict:
        """Finalize simulation and compute results.

        Returns:
            Dictionary containing all results and metrics
        """
        self.logger.info("Finalizing simulation...")

        for station in self.stations:
            trimmed = station.trim_to_horizon(self.horizon)
            if trimmed > 0:
                self.logger.debug(
                    f"Station {station.station_id}: trimmed {trimmed:.1f} min past the horizon"
                )

        for truck in self.trucks:
            if truck.discard_unfinished_unload(self.unload_time):
                self.logger.debug(f"Truck {truck.truck_id}: unload unfinished at the horizon")

        results = self.metrics_collector.compute_metrics(
            self.trucks, self.stations, self.current_time
        )
        results['random_seed'] = self.seed

        self.logger.debug(self.metrics_collector.get_summary(results))
        return results
