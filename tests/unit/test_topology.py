"""
Test the default topology, link utilization decay and topology growth.
"""

import pytest

from edge_network.core.topology import Link, Node, NodeRole, NetworkTopology, UTILIZATION_DECAY


def test_default_topology_layout():
    topology = NetworkTopology.default()

    assert list(topology.nodes) == ["ingress", "core", "app", "db"]
    assert list(topology.links) == ["ingress-core", "core-app", "core-db"]
    assert topology.get_ingress().id == "ingress"
    assert topology.get_router().id == "core"
    assert [n.id for n in topology.get_service_nodes()] == ["app"]

    core = topology.get_node("core")
    assert core.processing_rate == 10
    assert core.queue_capacity == 32
    assert core.queue.capacity == 32


def test_every_node_is_reachable_from_ingress():
    topology = NetworkTopology.default()
    for node_id in topology.nodes:
        assert topology.is_reachable("ingress", node_id)
    assert not topology.is_reachable("db", "ingress")
    assert not topology.is_reachable("ingress", "missing")


def test_outgoing_links_keep_insertion_order():
    topology = NetworkTopology.default()
    assert [l.id for l in topology.get_outgoing_links("core")] == ["core-app", "core-db"]
    assert topology.get_outgoing_links("db") == []


def test_queue_depth_mirrors_queue():
    node = Node(id="n", label="N", role=NodeRole.SERVICE, processing_rate=1, queue_capacity=3)
    assert node.queue_depth == 0
    assert node.queue.node_id == "n"


def test_link_utilization_spikes_and_decays():
    link = Link(id="l", source="a", target="b", bandwidth=100)

    link.add_traffic(500)
    link.decay()
    assert link.utilization == pytest.approx(0.5)
    assert link.recent_bytes == 0

    link.decay()
    assert link.utilization == pytest.approx(0.5 * UTILIZATION_DECAY)

    link.add_traffic(5000)
    link.decay()
    assert link.utilization == 1.0


def test_utilization_never_exceeds_one_or_drops_below_zero():
    link = Link(id="l", source="a", target="b", bandwidth=1)
    for size in (0, 10, 10000, 0, 0, 3):
        link.add_traffic(size)
        link.decay()
        assert 0.0 <= link.utilization <= 1.0


def test_add_link_rejects_unknown_nodes_and_duplicates():
    topology = NetworkTopology.default()

    with pytest.raises(ValueError):
        topology.add_link(Link(id="core-ghost", source="core", target="ghost", bandwidth=10))
    with pytest.raises(ValueError):
        topology.add_link(Link(id="core-app", source="core", target="app", bandwidth=10))
    with pytest.raises(ValueError):
        topology.add_node(Node(id="app", label="Dup", role=NodeRole.SERVICE,
                               processing_rate=1, queue_capacity=1))


def test_added_replica_is_reachable_from_core():
    topology = NetworkTopology.default()
    topology.add_node(Node(id="app-2", label="App Service 2", role=NodeRole.SERVICE,
                           processing_rate=6, queue_capacity=14))
    topology.add_link(Link(id="core-app-2", source="core", target="app-2", bandwidth=120))

    assert topology.is_reachable("core", "app-2")
    assert len(topology.get_service_nodes()) == 2


def test_network_stats():
    stats = NetworkTopology.default().get_network_stats()
    assert stats["total_nodes"] == 4
    assert stats["total_links"] == 3
    assert stats["total_service_replicas"] == 1
    assert stats["max_link_utilization"] == 0.0


def test_topology_without_gateway_has_no_ingress():
    with pytest.raises(ValueError):
        NetworkTopology().get_ingress()
