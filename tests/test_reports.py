"""Tests for reporting, configuration, logging, scenarios and the CLI."""

import contextlib
import io
import logging
import tempfile
import unittest
from pathlib import Path

import yaml

from haulsim.core.simulator import Simulator
from haulsim.main import main
from haulsim.reports.report_writer import ReportWriter
from haulsim.scenarios.runner import Scenario, load_scenarios, run_scenarios
from haulsim.utils.io import load_json, save_json
from haulsim.utils.logger import setup_logger, set_default_level
from configs import load_config, load_default_config, merge_configs, DEFAULT_SCENARIOS_PATH


class TestConfigs(unittest.TestCase):
    """Test cases for configuration loading."""

    def test_default_config(self):
        config = load_default_config()

        self.assertEqual(config['simulation']['horizon'], 4320)
        self.assertEqual(config['timing']['mining_time_min'], 60)
        self.assertEqual(config['timing']['mining_time_max'], 300)
        self.assertEqual(config['timing']['travel_time'], 30)
        self.assertEqual(config['timing']['unload_time'], 5)
        self.assertEqual(config['dispatch']['station_policy'], 'shortest_queue')
        self.assertFalse(config['metrics']['record_trace'])

    def test_trace_off_by_default(self):
        """Default runs count events without keeping the trace."""
        config = merge_configs(load_default_config(), {'simulation': {'random_seed': 8}})
        simulator = Simulator(config, num_trucks=3, num_stations=1)
        results = simulator.run()

        collector = simulator.metrics_collector
        self.assertGreater(results['events_processed'], 0)
        self.assertEqual(collector.event_times, [])
        self.assertEqual(dict(collector.queue_joins), {})
        self.assertEqual(dict(collector.unload_order), {})

    def test_merge_configs_is_recursive(self):
        merged = merge_configs(
            {'timing': {'travel_time': 30, 'unload_time': 5}, 'fleet': {'num_trucks': 1}},
            {'timing': {'travel_time': 45}},
        )

        self.assertEqual(merged['timing'], {'travel_time': 45, 'unload_time': 5})
        self.assertEqual(merged['fleet'], {'num_trucks': 1})

    def test_load_config_from_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "override.yaml"
            path.write_text(yaml.safe_dump({'fleet': {'num_trucks': 4}}))

            self.assertEqual(load_config(str(path)), {'fleet': {'num_trucks': 4}})


class TestReportWriter(unittest.TestCase):
    """Test cases for ReportWriter."""

    def setUp(self):
        config = merge_configs(load_default_config(), {'simulation': {'random_seed': 11}})
        self.results = Simulator(config, num_trucks=4, num_stations=2).run()
        self.writer = ReportWriter()

    def test_generate_summary(self):
        summary = self.writer.generate_summary(self.results)

        for truck_id in range(4):
            self.assertIn(f"Truck {truck_id} Statistics:", summary)
        self.assertIn("Station 1 Statistics:", summary)
        self.assertIn("Utilization:", summary)
        self.assertIn(f"Loads Delivered:    {self.results['total_loads_delivered']}", summary)

    def test_summary_without_trucks(self):
        results = Simulator(load_default_config(), num_trucks=0, num_stations=1).run()
        summary = self.writer.generate_summary(results, title="EMPTY")

        self.assertIn("EMPTY", summary)
        self.assertIn("No trucks simulated.", summary)

    def test_to_dataframes(self):
        trucks_df, stations_df = self.writer.to_dataframes(self.results)

        self.assertEqual(len(trucks_df), 4)
        self.assertEqual(len(stations_df), 2)
        self.assertEqual(trucks_df['loads_delivered'].sum(), self.results['total_loads_delivered'])
        self.assertTrue(((stations_df['utilization'] >= 0) & (stations_df['utilization'] <= 100)).all())

    def test_to_dataframes_empty(self):
        results = Simulator(load_default_config(), num_trucks=0, num_stations=0).run()
        trucks_df, stations_df = self.writer.to_dataframes(results)

        self.assertTrue(trucks_df.empty)
        self.assertTrue(stations_df.empty)

    def test_write_tables_and_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            trucks_path, stations_path = self.writer.write_tables(self.results, tmp)
            save_json(self.results, Path(tmp) / "results.json")

            self.assertTrue(trucks_path.exists())
            self.assertTrue(stations_path.exists())
            loaded = load_json(str(Path(tmp) / "results.json"))
            self.assertEqual(loaded['trucks'], self.results['trucks'])


class TestVisualization(unittest.TestCase):
    """Test cases for plot generation."""

    def test_plot_results(self):
        from haulsim.utils.visualization import plot_results

        config = merge_configs(load_default_config(), {'simulation': {'random_seed': 3}})
        results = Simulator(config, num_trucks=5, num_stations=2).run()

        with tempfile.TemporaryDirectory() as tmp:
            written = plot_results(results, Path(tmp))

            self.assertEqual(
                sorted(p.name for p in written),
                ["station_utilization.png", "truck_time_breakdown.png"],
            )
            self.assertTrue(all(p.exists() for p in written))

    def test_plot_results_without_stations(self):
        from haulsim.utils.visualization import plot_results

        results = Simulator(load_default_config(), num_trucks=0, num_stations=0).run()
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(plot_results(results, Path(tmp)), [])


class TestScenarios(unittest.TestCase):
    """Test cases for the scenario runner."""

    def test_packaged_scenarios(self):
        scenarios = load_scenarios(load_config(str(DEFAULT_SCENARIOS_PATH)))
        pairs = [(s.num_trucks, s.num_stations) for s in scenarios]

        self.assertIn((1, 0), pairs)
        self.assertIn((0, 1), pairs)
        self.assertIn((0, 0), pairs)
        self.assertIn((50, 3), pairs)

    def test_scenario_from_dict(self):
        scenario = Scenario.from_dict({'num_trucks': 2, 'num_stations': 1})
        self.assertEqual(scenario.name, "2x1")

        with self.assertRaises(ValueError):
            Scenario.from_dict({'num_trucks': 2})

    def test_run_scenarios(self):
        scenarios = [
            Scenario("pair", 2, 1, seed=1),
            Scenario("stranded", 2, 0, seed=2),
        ]
        outcomes = run_scenarios(load_default_config(), scenarios)

        self.assertEqual([s.name for s, _ in outcomes], ["pair", "stranded"])
        self.assertEqual(outcomes[0][1]['scenario'], "pair")
        self.assertGreater(outcomes[0][1]['total_loads_delivered'], 0)
        self.assertEqual(outcomes[1][1]['total_loads_delivered'], 0)

        comparison = ReportWriter().compare_scenarios(outcomes)
        self.assertEqual(list(comparison['scenario']), ["pair", "stranded"])


class TestLogger(unittest.TestCase):
    """Test cases for setup_logger."""

    def tearDown(self):
        set_default_level("INFO")

    def test_one_handler_per_logger(self):
        first = setup_logger("HaulSimTestLogger")
        second = setup_logger("HaulSimTestLogger", level="WARNING")

        self.assertIs(first, second)
        self.assertEqual(len(second.handlers), 1)
        self.assertFalse(second.propagate)
        self.assertEqual(second.level, logging.WARNING)

    def test_default_level_applies_to_existing_loggers(self):
        logger = setup_logger("HaulSimTestDefaultLevel")
        set_default_level("DEBUG")

        self.assertEqual(logger.level, logging.DEBUG)
        self.assertEqual(setup_logger("HaulSimTestLaterLogger").level, logging.DEBUG)


class TestCli(unittest.TestCase):
    """Test cases for the command line entry point."""

    def run_main(self, argv):
        """Run the CLI and return its exit code and everything it logged."""
        with contextlib.redirect_stdout(io.StringIO()) as stdout:
            with self.assertLogs("HaulSim", level="INFO") as logs:
                code = main(argv)

        # Reports go through the logger only
        self.assertEqual(stdout.getvalue(), "")
        return code, "\n".join(logs.output)

    def test_summary_reported_once(self):
        code, out = self.run_main([
            "--trucks", "2", "--stations", "1", "--seed", "4", "--horizon", "600",
        ])

        self.assertEqual(code, 0)
        self.assertEqual(out.count("Truck 1 Statistics:"), 1)

    def test_single_run(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, out = self.run_main([
                "--trucks", "3", "--stations", "1", "--seed", "9",
                "--horizon", "720", "--output-dir", tmp,
            ])

            self.assertEqual(code, 0)
            self.assertIn("Truck 2 Statistics:", out)
            results = load_json(str(Path(tmp) / "results.json"))
            self.assertEqual(results['horizon'], 720)
            self.assertEqual(results['num_trucks'], 3)
            self.assertTrue((Path(tmp) / "stations.csv").exists())

    def test_scenario_batch(self):
        with tempfile.TemporaryDirectory() as tmp:
            scenario_path = Path(tmp) / "scenarios.yaml"
            scenario_path.write_text(yaml.safe_dump({'scenarios': [
                {'name': 'small', 'num_trucks': 2, 'num_stations': 1},
                {'name': 'none', 'num_trucks': 0, 'num_stations': 0},
            ]}))

            code, out = self.run_main([
                "--scenarios", str(scenario_path), "--seed", "1",
                "--output-dir", str(Path(tmp) / "out"),
            ])

            self.assertEqual(code, 0)
            self.assertIn("SCENARIO: small", out)
            self.assertTrue((Path(tmp) / "out" / "small" / "results.json").exists())
            self.assertTrue((Path(tmp) / "out" / "comparison.csv").exists())

    def test_invalid_arguments_fail(self):
        code, _ = self.run_main(["--trucks", "-1"])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
