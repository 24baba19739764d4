"""
Test statistics collection over simulation runs.
"""

import json

import pytest

from edge_network.attacks import AttackMode
from edge_network.core.events import SimulationEventType
from edge_network.core.simulator import NetworkSimulation
from edge_network.core.statistics import StatisticsCollector, TimeSeriesData


def test_time_series_aggregates():
    series = TimeSeriesData()
    for tick, value in enumerate([0.2, 0.4, 0.9], start=1):
        series.add(tick, value)

    assert series.get_average() == pytest.approx(0.5)
    assert series.get_max() == 0.9
    assert series.get_min() == 0.2
    assert list(series.to_dataframe("util").columns) == ["tick", "util"]


def test_empty_time_series():
    series = TimeSeriesData()
    assert series.get_average() == 0.0
    assert series.get_percentile(95) == 0.0


def test_collector_samples_every_tick():
    sim = NetworkSimulation(seed=6, attack_mode=AttackMode.FLOOD)
    sim.run(12)

    stats = sim.stats
    assert len(stats.snapshots) == 12
    assert stats.generated_series.timestamps == list(range(1, 13))
    assert set(stats.link_utilization_series) == set(sim.topology.links)
    assert set(stats.queue_occupancy_series) == set(sim.topology.nodes)

    df = stats.to_dataframe()
    assert len(df) == 12
    assert {"tick", "generated", "dropped", "filtered", "avg_link_utilization"} <= set(df.columns)


def test_collector_counts_match_event_stream():
    sim = NetworkSimulation(seed=12, attack_mode=AttackMode.PULSE)
    sim.add_firewall_rule("203.0.113.0", "203.0.113.255")
    events = []
    sim.on_event(events.append)
    sim.run(8)

    summary = sim.stats.get_summary()
    generated = sum(1 for e in events if e.type == SimulationEventType.PACKET_GENERATED)
    filtered = sum(1 for e in events if e.type == SimulationEventType.PACKET_FILTERED)

    assert summary["overview"]["events"]["packet.generated"] == generated
    assert summary["overview"]["events"].get("packet.filtered", 0) == filtered
    assert sum(sim.stats.generated_series.values) == generated
    assert summary["attacker_traffic"]["filtered"] == filtered
    assert summary["legitimate_traffic"]["filtered"] == 0
    assert 0.0 <= summary["overview"]["drop_rate"] <= 1.0


def test_save_to_json(tmp_path):
    sim = NetworkSimulation(seed=1)
    sim.run(3)
    path = tmp_path / "stats.json"

    sim.stats.save_to_json(str(path))

    data = json.loads(path.read_text())
    assert len(data["snapshots"]) == 3
    assert data["summary"]["overview"]["ticks"] == 3


def test_reset_clears_everything():
    stats = StatisticsCollector()
    sim = NetworkSimulation(seed=1)
    sim.on_event(stats.record_event)
    sim.tick()
    stats.record_tick(1, sim.topology)

    stats.reset()

    assert stats.snapshots == []
    assert not stats.event_counts
    assert not stats.link_utilization_series


def test_print_results(capsys):
    sim = NetworkSimulation(seed=2, attack_mode="stealth")
    sim.run(4)

    sim.print_results()

    out = capsys.readouterr().out
    assert "SIMULATION RESULTS" in out
    assert "Link Utilization" in out
