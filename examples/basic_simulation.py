"""Basic simulation example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from haulsim.core.simulator import Simulator
from haulsim.reports.report_writer import ReportWriter
from haulsim.utils.logger import setup_logger
from configs import load_default_config, merge_configs


def main():
    """Run a basic simulation."""
    logger = setup_logger("BasicSimulation")

    logger.info("=== Basic Haul Fleet Simulation ===")

    # Customize the defaults for this example
    config = merge_configs(load_default_config(), {
        'simulation': {'horizon': 24 * 60, 'random_seed': 7},
        'fleet': {'num_trucks': 12, 'num_stations': 2},
    })

    logger.info(f"Running simulation for {config['simulation']['horizon']} minutes")

    simulator = Simulator(config)
    results = simulator.run()

    trucks_df, stations_df = ReportWriter().to_dataframes(results)

    logger.info("\n=== Trucks ===\n" + trucks_df.to_string())
    logger.info("\n=== Stations ===\n" + stations_df.to_string())
    logger.info(f"Loads delivered: {results['total_loads_delivered']}")
    logger.info(f"Longest total wait: {results['max_wait_time']:.1f} min")

    logger.info("\nSimulation complete!")


if __name__ == "__main__":
    main()
