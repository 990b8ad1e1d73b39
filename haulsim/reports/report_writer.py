"""
Report writer for simulation results - text summaries and tables.
"""
from pathlib import Path
from typing import Dict, Any, Tuple

import pandas as pd

TRUCK_COLUMNS = [
    'truck_id', 'loads_delivered', 'total_wait_time',
    'total_travel_time', 'total_mining_time', 'total_unload_time',
]
STATION_COLUMNS = ['station_id', 'total_busy_time', 'utilization']


class ReportWriter:
    """Generates human-readable simulation reports."""

    def generate_summary(self, results: Dict[str, Any], title: str = None) -> str:
        """Generate human-readable summary from results."""
        lines = []

        # Header
        lines.append("=" * 60)
        lines.append(f"   {title or 'SIMULATION STATISTICS'}")
        lines.append(f"   Trucks: {results['num_trucks']}   Stations: {results['num_stations']}   "
                     f"Horizon: {results['horizon']:.0f} min")
        lines.append("=" * 60)
        lines.append("")

        if not results['trucks']:
            lines.append("No trucks simulated.")
            lines.append("")

        for truck in results['trucks']:
            lines.append(f"Truck {truck['truck_id']} Statistics:")
            lines.append(f"  Loads Delivered:          {truck['loads_delivered']}")
            lines.append(f"  Total Wait Time (min):    {truck['total_wait_time']:.1f}")
            lines.append(f"  Total Travel Time (min):  {truck['total_travel_time']:.1f}")
            lines.append(f"  Total Mining Time (min):  {truck['total_mining_time']:.1f}")
            lines.append(f"  Total Unload Time (min):  {truck['total_unload_time']:.1f}")
            lines.append("")

        if results['stations']:
            lines.append("STATIONS")
            lines.append("━" * 60)
        for station in results['stations']:
            lines.append(f"Station {station['station_id']} Statistics:")
            lines.append(f"  Total Busy Time (min):    {station['total_busy_time']:.1f}")
            lines.append(f"  Utilization:              {station['utilization']:.2f} %")
            lines.append("")

        lines.append("TOTALS")
        lines.append("━" * 60)
        lines.append(f"Loads Delivered:    {results['total_loads_delivered']}")
        lines.append(f"Mean Wait (min):    {results['mean_wait_time']:.1f}")
        if results['stations']:
            lines.append(f"Mean Utilization:   {results['mean_station_utilization']:.2f} %")
        lines.append("=" * 60)

        return "\n".join(lines)

    def to_dataframes(self, results: Dict[str, Any]) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Return per-truck and per-station statistics as DataFrames."""
        trucks_df = pd.DataFrame(results['trucks'], columns=TRUCK_COLUMNS)
        stations_df = pd.DataFrame(results['stations'], columns=STATION_COLUMNS)
        return trucks_df.set_index('truck_id'), stations_df.set_index('station_id')

    def write_tables(self, results: Dict[str, Any], out_dir: str) -> Tuple[Path, Path]:
        """Write trucks.csv and stations.csv and return their paths."""
        out_path = Path(out_dir)
        out_path.mkdir(parents=True, exist_ok=True)

        trucks_df, stations_df = self.to_dataframes(results)
        trucks_path = out_path / "trucks.csv"
        stations_path = out_path / "stations.csv"
        trucks_df.to_csv(trucks_path)
        stations_df.to_csv(stations_path)
        return trucks_path, stations_path

    def compare_scenarios(self, outcomes) -> pd.DataFrame:
        """One row per scenario with headline metrics."""
        rows = []
        for scenario, results in outcomes:
            rows.append({
                'scenario': scenario.name,
                'num_trucks': results['num_trucks'],
                'num_stations': results['num_stations'],
                'total_loads_delivered': results['total_loads_delivered'],
                'mean_wait_time': results['mean_wait_time'],
                'mean_station_utilization': results['mean_station_utilization'],
            })
        return pd.DataFrame(rows)
