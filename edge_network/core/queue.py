"""
Packet Queue Module

Bounded FIFO buffer owned by each network node. Admission control is
expressed through the return value of enqueue and through update
notifications, never through exceptions.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List

from .traffic import Packet

ACCEPTED = "accepted"
DROPPED = "dropped"


@dataclass(frozen=True)
class QueueUpdate:
    """Notification sent to queue listeners"""
    node_id: str
    packet: Packet
    reason: str  # ACCEPTED or DROPPED


QueueListener = Callable[[QueueUpdate], None]


class PacketQueue:
    """
    Fixed-capacity FIFO packet queue

    Every accepted enqueue and every dequeue sends an "accepted" update;
    every rejected enqueue sends a "dropped" update. Listeners are called
    synchronously in registration order.
    """

    def __init__(self, node_id: str, capacity: int):
        if capacity < 0:
            raise ValueError(f"Queue capacity must be non-negative, got {capacity}")
        self.node_id = node_id
        self.capacity = capacity
        self._items: Deque[Packet] = deque()
        self._listeners: List[QueueListener] = []

    def on_update(self, listener: QueueListener):
        """Register a listener for accept/drop updates"""
        self._listeners.append(listener)

    def enqueue(self, packet: Packet) -> bool:
        """Add packet to the tail, return False if the queue is full"""
        if len(self._items) >= self.capacity:
            self._emit(packet, DROPPED)
            return False

        self._items.append(packet)
        self._emit(packet, ACCEPTED)
        return True

    def process(self, max_count: int) -> List[Packet]:
        """Remove and return up to max_count packets from the head"""
        count = min(max(max_count, 0), len(self._items))
        processed = [self._items.popleft() for _ in range(count)]
        for packet in processed:
            self._emit(packet, ACCEPTED)
        return processed

    def drain(self) -> List[Packet]:
        """Remove every queued packet without notifying listeners"""
        drained = list(self._items)
        self._items.clear()
        return drained

    def depth(self) -> int:
        return len(self._items)

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def __len__(self) -> int:
        return len(self._items)

    def _emit(self, packet: Packet, reason: str):
        update = QueueUpdate(node_id=self.node_id, packet=packet, reason=reason)
        for listener in self._listeners:
            listener(update)
