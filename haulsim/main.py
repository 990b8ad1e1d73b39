"""Main entry point for HaulSim simulator."""

import argparse
import sys
from pathlib import Path

from haulsim.core.simulator import Simulator
from haulsim.reports.report_writer import ReportWriter
from haulsim.scenarios.runner import load_scenarios, run_scenarios
from haulsim.utils.io import save_json
from haulsim.utils.logger import setup_logger, set_default_level
from configs import load_config, load_default_config, merge_configs


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HaulSim: Mining Haul Fleet Simulator"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a configuration file merged over the defaults",
    )
    parser.add_argument(
        "--trucks",
        type=int,
        default=None,
        help="Number of trucks (overrides config)",
    )
    parser.add_argument(
        "--stations",
        type=int,
        default=None,
        help="Number of unload stations (overrides config)",
    )
    parser.add_argument(
        "--horizon",
        type=float,
        default=None,
        help="Simulated minutes (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs",
    )
    parser.add_argument(
        "--scenarios",
        type=str,
        default=None,
        help="Path to a scenario file; runs every scenario in it",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save results",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate visualization plots (requires --output-dir)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_config(args) -> dict:
    """Merge defaults, the optional config file and command line overrides."""
    config = load_default_config()
    if args.config:
        config = merge_configs(config, load_config(args.config))

    overrides = {'simulation': {}, 'fleet': {}}
    if args.horizon is not None:
        overrides['simulation']['horizon'] = args.horizon
    if args.seed is not None:
        overrides['simulation']['random_seed'] = args.seed
    if args.trucks is not None:
        overrides['fleet']['num_trucks'] = args.trucks
    if args.stations is not None:
        overrides['fleet']['num_stations'] = args.stations
    return merge_configs(config, overrides)


def main(argv=None):
    """Main function."""
    args = parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else "INFO"
    set_default_level(log_level)
    logger = setup_logger("HaulSim", level=log_level)

    logger.info("=== HaulSim: Mining Haul Fleet Simulator ===")

    try:
        config = build_config(args)
        writer = ReportWriter()
        output_dir = Path(args.output_dir) if args.output_dir else None

        if args.scenarios:
            logger.info(f"Loading scenarios from {args.scenarios}")
            scenarios = load_scenarios(load_config(args.scenarios))
            outcomes = run_scenarios(config, scenarios, show_progress=not args.verbose)

            for scenario, results in outcomes:
                logger.info("\n" + writer.generate_summary(results, title=f"SCENARIO: {scenario.name}"))

            comparison = writer.compare_scenarios(outcomes)
            logger.info("\n=== Scenario Comparison ===\n" + comparison.to_string(index=False))

            if output_dir:
                for scenario, results in outcomes:
                    save_json(results, output_dir / scenario.name / "results.json")
                    writer.write_tables(results, output_dir / scenario.name)
                comparison.to_csv(output_dir / "comparison.csv", index=False)
                logger.info(f"Results saved to {output_dir}")
            return 0

        fleet = config['fleet']
        logger.info(f"Trucks: {fleet['num_trucks']}, Stations: {fleet['num_stations']}")

        simulator = Simulator(config)
        results = simulator.run()

        logger.info("\n" + writer.generate_summary(results))

        # Save results
        if output_dir:
            save_json(results, output_dir / "results.json")
            writer.write_tables(results, output_dir)
            logger.info(f"Results saved to {output_dir}")

            # Generate visualizations
            if args.visualize:
                from haulsim.utils.visualization import plot_results
                logger.info("Generating visualization plots...")
                plot_results(results, output_dir)
                logger.info(f"Plots saved to {output_dir}")
        elif args.visualize:
            logger.warning("--visualize needs --output-dir; skipping plots")

        logger.info("Simulation completed successfully!")
        return 0

    except Exception as e:
        logger.error(f"Simulation failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
