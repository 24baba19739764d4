"""
Test next-hop selection: round-robin fan-out across service replicas
at the core router and random forwarding elsewhere.
"""

from collections import Counter

import numpy as np
import pytest

from edge_network.core.routing import (
    RandomLinkSelector,
    RoundRobinLinkSelector,
    create_link_selector
)
from edge_network.core.topology import Link, Node, NodeRole, NetworkTopology


def topology_with_replicas(count: int) -> NetworkTopology:
    topology = NetworkTopology.default()
    for i in range(2, count + 1):
        topology.add_node(Node(id=f"app-{i}", label=f"App Service {i}", role=NodeRole.SERVICE,
                               processing_rate=6, queue_capacity=14))
        topology.add_link(Link(id=f"core-app-{i}", source="core", target=f"app-{i}", bandwidth=120))
    return topology


def test_round_robin_alternates_between_service_links():
    topology = topology_with_replicas(2)
    selector = RoundRobinLinkSelector(topology, rng=np.random.default_rng(0), jitter_probability=0.0)
    core = topology.get_node("core")
    links = topology.get_outgoing_links("core")

    chosen = [selector.select_link(core, links).id for _ in range(4)]

    assert chosen == ["core-app", "core-app-2", "core-app", "core-app-2"]


@pytest.mark.parametrize("replicas, packets", [(2, 7), (3, 10), (4, 33)])
def test_round_robin_counts_differ_by_at_most_one(replicas, packets):
    topology = topology_with_replicas(replicas)
    selector = RoundRobinLinkSelector(topology, rng=np.random.default_rng(1), jitter_probability=0.0)
    core = topology.get_node("core")
    links = topology.get_outgoing_links("core")

    counts = Counter(selector.select_link(core, links).id for _ in range(packets))

    assert "core-db" not in counts
    assert len(counts) == replicas
    assert max(counts.values()) - min(counts.values()) <= 1


def test_jitter_can_pick_non_service_links():
    topology = NetworkTopology.default()
    selector = RoundRobinLinkSelector(topology, rng=np.random.default_rng(2), jitter_probability=1.0)
    core = topology.get_node("core")
    links = topology.get_outgoing_links("core")

    chosen = {selector.select_link(core, links).id for _ in range(100)}

    assert chosen == {"core-app", "core-db"}


def test_jitter_is_skipped_when_all_links_lead_to_services():
    topology = NetworkTopology()
    topology.add_node(Node(id="core", label="Core", role=NodeRole.ROUTER, processing_rate=1, queue_capacity=1))
    for i in (1, 2):
        topology.add_node(Node(id=f"s{i}", label=f"S{i}", role=NodeRole.SERVICE, processing_rate=1, queue_capacity=1))
        topology.add_link(Link(id=f"core-s{i}", source="core", target=f"s{i}", bandwidth=10))
    selector = RoundRobinLinkSelector(topology, rng=np.random.default_rng(3), jitter_probability=1.0)
    core = topology.get_node("core")
    links = topology.get_outgoing_links("core")

    chosen = [selector.select_link(core, links).id for _ in range(4)]

    assert chosen == ["core-s1", "core-s2", "core-s1", "core-s2"]


def test_router_without_service_links_forwards_randomly():
    topology = NetworkTopology()
    topology.add_node(Node(id="core", label="Core", role=NodeRole.ROUTER, processing_rate=1, queue_capacity=1))
    topology.add_node(Node(id="db", label="DB", role=NodeRole.DB, processing_rate=1, queue_capacity=1))
    topology.add_link(Link(id="core-db", source="core", target="db", bandwidth=10))
    selector = RoundRobinLinkSelector(topology, rng=np.random.default_rng(4))

    link = selector.select_link(topology.get_node("core"), topology.get_outgoing_links("core"))

    assert link.id == "core-db"


def test_sink_nodes_have_no_next_hop():
    topology = NetworkTopology.default()
    db = topology.get_node("db")
    assert RandomLinkSelector(topology).select_link(db, []) is None
    assert RoundRobinLinkSelector(topology).select_link(db, []) is None


def test_random_selector_uses_every_link():
    topology = NetworkTopology.default()
    selector = RandomLinkSelector(topology, rng=np.random.default_rng(5))
    core = topology.get_node("core")
    links = topology.get_outgoing_links("core")

    chosen = {selector.select_link(core, links).id for _ in range(100)}

    assert chosen == {"core-app", "core-db"}


def test_create_link_selector():
    topology = NetworkTopology.default()
    assert isinstance(create_link_selector("random", topology), RandomLinkSelector)
    selector = create_link_selector("round_robin", topology, jitter_probability=0.0)
    assert isinstance(selector, RoundRobinLinkSelector)
    assert selector.jitter_probability == 0.0
    with pytest.raises(ValueError):
        create_link_selector("ospf", topology)
