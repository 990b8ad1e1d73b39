"""Run batches of fleet/station scenarios against one base configuration."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from ..core.simulator import Simulator
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class Scenario:
    """A named fleet/station combination."""
    name: str
    num_trucks: int
    num_stations: int
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict) -> "Scenario":
        try:
            name = data.get('name') or f"{data['num_trucks']}x{data['num_stations']}"
            return cls(
                name=name,
                num_trucks=int(data['num_trucks']),
                num_stations=int(data['num_stations']),
                seed=data.get('seed'),
            )
        except KeyError as e:
            raise ValueError(f"Scenario is missing required key {e}") from e


def load_scenarios(config: Dict) -> List[Scenario]:
    """Parse the ``scenarios`` list of a scenario file.

    Args:
        config: Parsed scenario YAML

    Returns:
        List of scenarios
    """
    return [Scenario.from_dict(entry) for entry in config.get('scenarios', [])]


def run_scenario(config: Dict, scenario: Scenario) -> Dict:
    """Run a single scenario.

    Args:
        config: Base simulation configuration
        scenario: Scenario to run

    Returns:
        Simulation results, tagged with the scenario name
    """
    logger.info(
        f"Running scenario '{scenario.name}': "
        f"{scenario.num_trucks} trucks, {scenario.num_stations} stations"
    )
    simulator = Simulator(
        config,
        num_trucks=scenario.num_trucks,
        num_stations=scenario.num_stations,
        seed=scenario.seed,
    )
    results = simulator.run()
    results['scenario'] = scenario.name
    return results


def run_scenarios(config: Dict, scenarios: List[Scenario],
                  show_progress: bool = False) -> List[Tuple[Scenario, Dict]]:
    """Run scenarios one after another.

    Args:
        config: Base simulation configuration
        scenarios: Scenarios to run
        show_progress: Show a progress bar

    Returns:
        List of (scenario, results) pairs in input order
    """
    outcomes = []
    for scenario in tqdm(scenarios, desc="Scenarios", disable=not show_progress):
        outcomes.append((scenario, run_scenario(config, scenario)))
    return outcomes
