"""
Visualization Module

Provides functions for plotting recorded simulation statistics:
traffic volumes, link utilization and queue occupancy over time.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Optional, Tuple

from .statistics import StatisticsCollector


def plot_simulation_results(
    stats: StatisticsCollector,
    figsize: Tuple[int, int] = (14, 10),
    title: str = "Simulation Results"
) -> plt.Figure:
    """
    Plot per-tick traffic volumes and overall link utilization

    Args:
        stats: Statistics collector with results
        figsize: Figure size
        title: Plot title

    Returns:
        Matplotlib figure
    """
    fig, axes = plt.subplots(2, 2, figsize=figsize)

    series = [
        (axes[0, 0], stats.generated_series, 'b-', "Generated Packets"),
        (axes[0, 1], stats.forwarded_series, 'g-', "Forwarded Packets"),
        (axes[1, 0], stats.dropped_series, 'r-', "Dropped Packets"),
    ]
    for ax, data, style, name in series:
        if data.timestamps:
            ax.plot(data.timestamps, data.values, style, linewidth=1)
        ax.set_xlabel("Tick")
        ax.set_ylabel("Packets")
        ax.set_title(f"{name} per Tick")
        ax.grid(True, alpha=0.3)

    # Filtered traffic shares the drop panel
    if stats.filtered_series.timestamps:
        axes[1, 0].plot(
            stats.filtered_series.timestamps,
            stats.filtered_series.values,
            'm--', linewidth=1, label="Filtered"
        )
        axes[1, 0].legend()

    # Mean utilization across links
    ax = axes[1, 1]
    if stats.snapshots:
        ticks = [s["tick"] for s in stats.snapshots]
        ax.plot(ticks, [s["avg_link_utilization"] for s in stats.snapshots], 'k-', linewidth=1, label="Average")
        ax.plot(ticks, [s["max_link_utilization"] for s in stats.snapshots], 'r:', linewidth=1, label="Max")
        ax.legend()
    ax.set_xlabel("Tick")
    ax.set_ylabel("Utilization")
    ax.set_ylim(0, 1.05)
    ax.set_title("Link Utilization")
    ax.grid(True, alpha=0.3)

    fig.suptitle(title, fontsize=14, fontweight='bold')
    plt.tight_layout()
    return fig


def plot_link_utilization(
    stats: StatisticsCollector,
    figsize: Tuple[int, int] = (12, 6),
    title: str = "Link Utilization Over Time"
) -> plt.Figure:
    """Plot the utilization series of every link"""
    fig, ax = plt.subplots(figsize=figsize)

    if not stats.link_utilization_series:
        ax.text(0.5, 0.5, "No utilization data", ha='center', va='center')
        return fig

    colors = plt.cm.tab10(np.linspace(0, 1, max(len(stats.link_utilization_series), 1)))
    for color, (link_id, series) in zip(colors, stats.link_utilization_series.items()):
        ax.plot(series.timestamps, series.values, color=color, linewidth=1, label=link_id)

    ax.set_xlabel("Tick")
    ax.set_ylabel("Utilization")
    ax.set_ylim(0, 1.05)
    ax.set_title(title)
    ax.legend(loc="upper right")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    return fig


def plot_queue_occupancy(
    stats: StatisticsCollector,
    figsize: Tuple[int, int] = (12, 6),
    title: str = "Queue Occupancy Heatmap"
) -> plt.Figure:
    """
    Plot queue occupancy (depth / capacity) of every node as a heatmap

    Args:
        stats: Statistics collector with occupancy data
        figsize: Figure size
        title: Plot title

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    node_ids = list(stats.queue_occupancy_series.keys())
    if not node_ids:
        ax.text(0.5, 0.5, "No occupancy data", ha='center', va='center')
        return fig

    # Replicas added mid-run have shorter series; pad their start with zeros
    length = max(len(stats.queue_occupancy_series[n].values) for n in node_ids)
    matrix = np.zeros((len(node_ids), length))
    for row, node_id in enumerate(node_ids):
        values = stats.queue_occupancy_series[node_id].values
        matrix[row, length - len(values):] = values

    im = ax.imshow(matrix, cmap='YlOrRd', aspect='auto', vmin=0.0, vmax=1.0)

    ax.set_yticks(range(len(node_ids)))
    ax.set_yticklabels(node_ids)
    ax.set_xlabel("Tick")
    ax.set_title(title)

    cbar = plt.colorbar(im, ax=ax)
    cbar.set_label("Occupancy")

    plt.tight_layout()
    return fig


def save_all_plots(
    stats: StatisticsCollector,
    output_dir: str = ".",
    prefix: str = "sim",
    title: Optional[str] = None
):
    """
    Save all standard plots to files

    Args:
        stats: Statistics collector
        output_dir: Output directory
        prefix: Filename prefix
        title: Title for the results overview
    """
    import os

    os.makedirs(output_dir, exist_ok=True)

    fig = plot_simulation_results(stats, title=title or "Simulation Results")
    fig.savefig(os.path.join(output_dir, f"{prefix}_results.png"), dpi=150)
    plt.close(fig)

    fig = plot_link_utilization(stats)
    fig.savefig(os.path.join(output_dir, f"{prefix}_utilization.png"), dpi=150)
    plt.close(fig)

    fig = plot_queue_occupancy(stats)
    fig.savefig(os.path.join(output_dir, f"{prefix}_queues.png"), dpi=150)
    plt.close(fig)

    print(f"Plots saved to {output_dir}/")
