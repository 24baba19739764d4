"""
Test plotting of recorded statistics.
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from edge_network.core.simulator import NetworkSimulation
from edge_network.core.statistics import StatisticsCollector
from edge_network.core.visualization import (
    plot_simulation_results,
    plot_link_utilization,
    plot_queue_occupancy,
    save_all_plots
)


def run_stats():
    sim = NetworkSimulation(seed=4, attack_mode="flood")
    sim.run(5)
    sim.add_app_server()
    sim.run(5)
    return sim.stats


def test_plots_return_figures():
    stats = run_stats()
    for plot in (plot_simulation_results, plot_link_utilization, plot_queue_occupancy):
        fig = plot(stats)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)


def test_plots_handle_empty_statistics():
    stats = StatisticsCollector()
    for plot in (plot_simulation_results, plot_link_utilization, plot_queue_occupancy):
        fig = plot(stats)
        assert isinstance(fig, plt.Figure)
        plt.close(fig)


def test_save_all_plots(tmp_path):
    save_all_plots(run_stats(), output_dir=str(tmp_path), prefix="flood")

    names = sorted(p.name for p in tmp_path.iterdir())
    assert names == ["flood_queues.png", "flood_results.png", "flood_utilization.png"]
