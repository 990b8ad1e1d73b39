"""Visualization utilities for simulation results."""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
from pathlib import Path
from typing import Dict, List

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_results(results: Dict, output_dir: Path) -> List[Path]:
    """Generate all visualization plots.

    Args:
        results: Results dictionary from simulation
        output_dir: Directory to save plots

    Returns:
        Paths of the files written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    if results['stations']:
        path = output_dir / "station_utilization.png"
        plot_station_utilization(results, path)
        written.append(path)

    if results['trucks']:
        path = output_dir / "truck_time_breakdown.png"
        plot_truck_time_breakdown(results, path)
        written.append(path)

    return written


def plot_station_utilization(results: Dict, output_path: Path) -> None:
    """Plot per-station utilization bars.

    Args:
        results: Results dictionary
        output_path: Output file path
    """
    stations = results['stations']
    labels = [f"S{s['station_id']}" for s in stations]
    values = [s['utilization'] for s in stations]

    fig, ax = plt.subplots(figsize=(max(6, len(stations) * 1.2), 5))
    ax.bar(labels, values, color='steelblue')
    ax.axhline(results['mean_station_utilization'], color='coral',
               linestyle='--', label='Mean')
    ax.set_ylim(0, 100)
    ax.set_ylabel('Utilization (%)')
    ax.set_title('Station Utilization')
    ax.legend()
    ax.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_truck_time_breakdown(results: Dict, output_path: Path) -> None:
    """Plot how each truck's time splits across the haul cycle.

    Args:
        results: Results dictionary
        output_path: Output file path
    """
    trucks = results['trucks']
    labels = [f"T{t['truck_id']}" for t in trucks]
    components = [
        ('total_mining_time', 'Mining'),
        ('total_travel_time', 'Travel'),
        ('total_wait_time', 'Wait'),
        ('total_unload_time', 'Unload'),
    ]

    fig, ax = plt.subplots(figsize=(max(8, len(trucks) * 0.4), 5))
    bottom = np.zeros(len(trucks))
    for key, name in components:
        values = np.array([t[key] for t in trucks], dtype=float)
        ax.bar(labels, values, bottom=bottom, label=name)
        bottom += values

    ax.axhline(results['horizon'], color='black', linestyle=':', label='Horizon')
    ax.set_ylabel('Time (min)')
    ax.set_title('Truck Time Breakdown')
    ax.legend(loc='upper right')
    if len(trucks) > 20:
        ax.tick_params(axis='x', labelrotation=90)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
