#!/usr/bin/env python3
"""
Example: Basic Edge Network Simulation

This script demonstrates the basic usage of the edge network
simulation framework, including:
- Creating the default gateway -> router -> services topology
- Scaling out with an extra application server
- Switching attack modes and blocking attacker ranges at the firewall
- Subscribing to the live event stream
- Analyzing and plotting results
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from edge_network import (
    AttackMode,
    NetworkSimulation,
    SimulationEventType
)
from edge_network.core.visualization import (
    plot_simulation_results,
    plot_link_utilization,
    plot_queue_occupancy
)
import matplotlib.pyplot as plt


def main():
    print("="*70)
    print("Edge Network Simulation - Basic Example")
    print("="*70)

    # =====================================================
    # Step 1: Create Simulation
    # =====================================================
    print("\n[1] Creating Simulation...")

    simulation = NetworkSimulation(
        seed=42,          # For reproducibility
        verbose=True
    )
    print(f"  Topology: {simulation.topology}")
    for node in simulation.topology.nodes.values():
        print(f"  {node.label}: rate={node.processing_rate}/tick, capacity={node.queue_capacity}")

    # =====================================================
    # Step 2: Scale Out
    # =====================================================
    print("\n[2] Adding Application Server...")
    simulation.add_app_server()

    # =====================================================
    # Step 3: Watch Firewall Activity
    # =====================================================
    filtered = []

    def on_filtered(event):
        if event.type == SimulationEventType.PACKET_FILTERED:
            filtered.append(event)

    simulation.on_event(on_filtered)

    # =====================================================
    # Step 4: Baseline Traffic
    # =====================================================
    print("\n[3] Running Baseline (idle)...")
    simulation.run(num_ticks=30, progress_bar=True)

    # =====================================================
    # Step 5: Flood Attack, Then Block
    # =====================================================
    print("\n[4] Launching Flood Attack...")
    simulation.set_attack_mode(AttackMode.FLOOD)
    simulation.run(num_ticks=30, progress_bar=True)

    print("\n[5] Blocking Attacker Ranges...")
    simulation.add_firewall_rule("203.0.113.0", "203.0.113.255", label="Block red team")
    simulation.add_firewall_rule("198.51.100.0", "198.51.100.255", label="Block botnet")
    simulation.run(num_ticks=30, progress_bar=True)
    print(f"  Packets filtered after blocking: {len(filtered)}")

    # =====================================================
    # Step 6: Analyze Results
    # =====================================================
    print("\n[6] Simulation Results:")
    simulation.print_results()

    print("\n--- Latest Events ---")
    for event in simulation.snapshot().events[:5]:
        print(f"  [{event.type.value}] {event.detail}")

    # =====================================================
    # Step 7: Visualization
    # =====================================================
    print("\n[7] Generating Visualizations...")

    output_dir = "output"
    os.makedirs(output_dir, exist_ok=True)
    stats = simulation.stats

    fig1 = plot_simulation_results(stats, title="Idle -> Flood -> Firewall")
    fig1.savefig(os.path.join(output_dir, "results.png"), dpi=150)
    print(f"  Saved: {output_dir}/results.png")

    fig2 = plot_link_utilization(stats)
    fig2.savefig(os.path.join(output_dir, "utilization.png"), dpi=150)
    print(f"  Saved: {output_dir}/utilization.png")

    fig3 = plot_queue_occupancy(stats)
    fig3.savefig(os.path.join(output_dir, "queues.png"), dpi=150)
    print(f"  Saved: {output_dir}/queues.png")

    stats.save_to_json(os.path.join(output_dir, "statistics.json"))
    print(f"  Saved: {output_dir}/statistics.json")

    print("\n" + "="*70)
    print("Simulation Complete!")
    print("="*70)

    # Close figures to free memory
    plt.close('all')

    return simulation


if __name__ == "__main__":
    main()
