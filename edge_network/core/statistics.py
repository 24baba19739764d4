"""
Statistics Collection Module

This module provides classes for collecting and analyzing simulation
statistics: event counts by kind and traffic type, per-tick traffic
volumes, link utilization and queue occupancy over time.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, List
from collections import defaultdict, Counter
import json

from .events import SimulationEvent, SimulationEventType
from .topology import NetworkTopology
from .traffic import TrafficType


@dataclass
class TimeSeriesData:
    """Container for time series data indexed by tick"""
    timestamps: List[float] = field(default_factory=list)
    values: List[float] = field(default_factory=list)

    def add(self, timestamp: float, value: float):
        self.timestamps.append(timestamp)
        self.values.append(value)

    def get_average(self) -> float:
        return float(np.mean(self.values)) if self.values else 0.0

    def get_max(self) -> float:
        return float(np.max(self.values)) if self.values else 0.0

    def get_min(self) -> float:
        return float(np.min(self.values)) if self.values else 0.0

    def get_percentile(self, p: float) -> float:
        return float(np.percentile(self.values, p)) if self.values else 0.0

    def to_dataframe(self, name: str = "value") -> pd.DataFrame:
        return pd.DataFrame({
            "tick": self.timestamps,
            name: self.values
        })


class StatisticsCollector:
    """
    Collects and aggregates simulation statistics

    Subscribes to the simulator's event stream and is sampled once at
    the end of every tick. Tracks:
    - Event totals by kind and traffic type
    - Packets generated / forwarded / dropped / filtered per tick
    - Link utilization per link
    - Queue occupancy per node
    """

    def __init__(self):
        """Initialize statistics collector"""
        self.event_counts: Counter = Counter()
        self.traffic_counts: Dict[str, Counter] = defaultdict(Counter)

        # Counts of the tick in progress
        self._window_counts: Counter = Counter()

        # Time series data
        self.generated_series = TimeSeriesData()
        self.forwarded_series = TimeSeriesData()
        self.dropped_series = TimeSeriesData()
        self.filtered_series = TimeSeriesData()
        self.link_utilization_series: Dict[str, TimeSeriesData] = defaultdict(TimeSeriesData)
        self.queue_occupancy_series: Dict[str, TimeSeriesData] = defaultdict(TimeSeriesData)

        # Snapshot storage
        self.snapshots: List[Dict] = []

    def record_event(self, event: SimulationEvent):
        """Event subscriber: count one simulation event"""
        self.event_counts[event.type.value] += 1
        self._window_counts[event.type] += 1
        if event.traffic_type is not None:
            self.traffic_counts[event.traffic_type.value][event.type.value] += 1

    def record_tick(self, tick: int, topology: NetworkTopology):
        """
        Close the current tick window and sample network state

        Args:
            tick: Index of the tick that just finished
            topology: Network topology after the tick
        """
        window = self._window_counts
        self.generated_series.add(tick, window[SimulationEventType.PACKET_GENERATED])
        self.forwarded_series.add(tick, window[SimulationEventType.PACKET_FORWARDED])
        self.dropped_series.add(tick, window[SimulationEventType.PACKET_DROPPED])
        self.filtered_series.add(tick, window[SimulationEventType.PACKET_FILTERED])

        for link_id, link in topology.links.items():
            self.link_utilization_series[link_id].add(tick, link.utilization)

        for node_id, node in topology.nodes.items():
            self.queue_occupancy_series[node_id].add(tick, node.get_utilization())

        utilizations = [l.utilization for l in topology.links.values()]
        self.snapshots.append({
            "tick": tick,
            "generated": window[SimulationEventType.PACKET_GENERATED],
            "forwarded": window[SimulationEventType.PACKET_FORWARDED],
            "dropped": window[SimulationEventType.PACKET_DROPPED],
            "filtered": window[SimulationEventType.PACKET_FILTERED],
            "queued": sum(n.queue_depth for n in topology.nodes.values()),
            "avg_link_utilization": float(np.mean(utilizations)) if utilizations else 0.0,
            "max_link_utilization": max(utilizations) if utilizations else 0.0,
        })
        self._window_counts = Counter()

    def get_drop_rate(self) -> float:
        """Share of generated packets that were dropped or filtered"""
        generated = self.event_counts[SimulationEventType.PACKET_GENERATED.value]
        filtered = self.event_counts[SimulationEventType.PACKET_FILTERED.value]
        dropped = self.event_counts[SimulationEventType.PACKET_DROPPED.value]
        arrived = generated + filtered
        return (dropped + filtered) / arrived if arrived > 0 else 0.0

    def get_traffic_stats(self, traffic_type: TrafficType) -> Dict:
        """Event totals for one traffic type"""
        counts = self.traffic_counts[traffic_type.value]
        return {
            "generated": counts[SimulationEventType.PACKET_GENERATED.value],
            "forwarded": counts[SimulationEventType.PACKET_FORWARDED.value],
            "dropped": counts[SimulationEventType.PACKET_DROPPED.value],
            "filtered": counts[SimulationEventType.PACKET_FILTERED.value],
        }

    def get_link_utilization_stats(self) -> Dict:
        """Get aggregate link utilization statistics"""
        all_utils = []
        for series in self.link_utilization_series.values():
            all_utils.extend(series.values)

        if not all_utils:
            return {"avg": 0.0, "max": 0.0, "min": 0.0}

        return {
            "avg": float(np.mean(all_utils)),
            "max": float(np.max(all_utils)),
            "min": float(np.min(all_utils)),
            "p95": float(np.percentile(all_utils, 95))
        }

    def get_summary(self) -> Dict:
        """Get comprehensive statistics summary"""
        return {
            "overview": {
                "ticks": len(self.snapshots),
                "events": dict(self.event_counts),
                "drop_rate": self.get_drop_rate(),
                "avg_generated_per_tick": self.generated_series.get_average(),
                "max_generated_per_tick": self.generated_series.get_max(),
            },
            "legitimate_traffic": self.get_traffic_stats(TrafficType.LEGITIMATE),
            "attacker_traffic": self.get_traffic_stats(TrafficType.ATTACKER),
            "link_utilization": self.get_link_utilization_stats(),
            "queue_occupancy": {
                node_id: series.get_average()
                for node_id, series in self.queue_occupancy_series.items()
            },
        }

    def reset(self):
        """Reset all statistics"""
        self.event_counts = Counter()
        self.traffic_counts = defaultdict(Counter)
        self._window_counts = Counter()
        self.generated_series = TimeSeriesData()
        self.forwarded_series = TimeSeriesData()
        self.dropped_series = TimeSeriesData()
        self.filtered_series = TimeSeriesData()
        self.link_utilization_series.clear()
        self.queue_occupancy_series.clear()
        self.snapshots = []

    def to_dataframe(self) -> pd.DataFrame:
        """Convert per-tick snapshots to DataFrame"""
        return pd.DataFrame(self.snapshots)

    def save_to_json(self, filepath: str):
        """Save statistics to JSON file"""
        def convert_numpy(obj):
            """Convert numpy types to Python native types for JSON serialization"""
            if isinstance(obj, np.integer):
                return int(obj)
            elif isinstance(obj, np.floating):
                return float(obj)
            elif isinstance(obj, np.ndarray):
                return obj.tolist()
            elif isinstance(obj, dict):
                return {k: convert_numpy(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_numpy(item) for item in obj]
            return obj

        data = {
            "summary": convert_numpy(self.get_summary()),
            "snapshots": convert_numpy(self.snapshots)
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def print_summary(self):
        """Print formatted statistics summary"""
        summary = self.get_summary()

        print("\n" + "="*60)
        print("SIMULATION STATISTICS SUMMARY")
        print("="*60)

        print("\n--- Overview ---")
        overview = summary["overview"]
        print(f"  Ticks: {overview['ticks']}")
        print(f"  Drop rate: {overview['drop_rate']:.4f}")
        print(f"  Generated per tick: {overview['avg_generated_per_tick']:.2f} avg, "
              f"{overview['max_generated_per_tick']:.0f} max")
        for event_type, count in sorted(overview["events"].items()):
            print(f"  {event_type}: {count}")

        for title, key in (("Legitimate Traffic", "legitimate_traffic"),
                           ("Attacker Traffic", "attacker_traffic")):
            print(f"\n--- {title} ---")
            for name, count in summary[key].items():
                print(f"  {name.capitalize()}: {count}")

        print("\n--- Link Utilization ---")
        util = summary["link_utilization"]
        print(f"  Average: {util['avg']:.4f}")
        print(f"  Max: {util['max']:.4f}")

        print("\n--- Queue Occupancy (avg) ---")
        for node_id, occupancy in summary["queue_occupancy"].items():
            print(f"  {node_id}: {occupancy:.4f}")

        print("\n" + "="*60)
