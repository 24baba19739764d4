"""
Test the bounded packet queue: admission control, FIFO order and
accept/drop notifications.
"""

import pytest

from edge_network.core.queue import PacketQueue, ACCEPTED, DROPPED
from edge_network.core.traffic import Packet, TrafficType


def make_packet(packet_id: str, size: int = 200) -> Packet:
    return Packet(
        id=packet_id,
        size=size,
        created_at=0.0,
        traffic_type=TrafficType.LEGITIMATE,
        source_ip="10.0.0.1"
    )


def test_drops_packets_beyond_capacity_and_reports_depth():
    queue = PacketQueue("ingress", capacity=2)
    updates = []
    queue.on_update(updates.append)

    assert queue.enqueue(make_packet("first")) is True
    assert queue.enqueue(make_packet("second")) is True
    assert queue.enqueue(make_packet("overflow")) is False
    assert queue.depth() == 2

    processed = queue.process(5)

    assert [p.id for p in processed] == ["first", "second"]
    assert queue.depth() == 0
    assert len([u for u in updates if u.reason == ACCEPTED]) == 4
    dropped = [u for u in updates if u.reason == DROPPED]
    assert len(dropped) == 1
    assert dropped[0].packet.id == "overflow"
    assert dropped[0].node_id == "ingress"


def test_process_removes_at_most_max_count_in_fifo_order():
    queue = PacketQueue("core", capacity=10)
    for i in range(6):
        queue.enqueue(make_packet(f"p{i}"))

    first = queue.process(4)
    second = queue.process(4)

    assert [p.id for p in first] == ["p0", "p1", "p2", "p3"]
    assert [p.id for p in second] == ["p4", "p5"]
    assert queue.process(3) == []


def test_capacity_law_holds_for_any_capacity():
    for capacity in (0, 1, 5, 24):
        queue = PacketQueue("node", capacity=capacity)
        accepted = [queue.enqueue(make_packet(f"p{i}")) for i in range(capacity)]
        assert all(accepted)
        assert queue.enqueue(make_packet("extra")) is False
        assert queue.depth() == capacity
        assert queue.is_full()


def test_listeners_are_called_in_registration_order():
    queue = PacketQueue("app", capacity=1)
    calls = []
    queue.on_update(lambda u: calls.append(("first", u.reason)))
    queue.on_update(lambda u: calls.append(("second", u.reason)))

    queue.enqueue(make_packet("a"))

    assert calls == [("first", ACCEPTED), ("second", ACCEPTED)]


def test_drain_empties_queue_without_notifications():
    queue = PacketQueue("db", capacity=4)
    queue.enqueue(make_packet("a"))
    queue.enqueue(make_packet("b"))
    updates = []
    queue.on_update(updates.append)

    drained = queue.drain()

    assert [p.id for p in drained] == ["a", "b"]
    assert len(queue) == 0
    assert updates == []


def test_negative_capacity_is_rejected():
    with pytest.raises(ValueError):
        PacketQueue("bad", capacity=-1)
