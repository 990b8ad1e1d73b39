"""Scenario batches."""

from .runner import Scenario, load_scenarios, run_scenario, run_scenarios

__all__ = ["Scenario", "load_scenarios", "run_scenario", "run_scenarios"]
