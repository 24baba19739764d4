"""
Simulation Events Module

Events describe everything the simulator does, for display in the live
log and for push delivery to subscribers. Events are immutable; the log
keeps only the most recent ones, newest first.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Tuple
from enum import Enum
import time
import uuid

from .traffic import TrafficType

DEFAULT_MAX_EVENTS = 25


class SimulationEventType(Enum):
    """Kind of simulation event"""
    PACKET_GENERATED = "packet.generated"
    PACKET_FORWARDED = "packet.forwarded"
    PACKET_DROPPED = "packet.dropped"
    PACKET_FILTERED = "packet.filtered"
    TOPOLOGY_UPDATED = "topology.updated"
    FIREWALL_UPDATED = "firewall.updated"


@dataclass(frozen=True)
class SimulationEvent:
    """
    One recorded simulation event

    Attributes:
        id: Unique event identifier
        at: Timestamp (seconds since epoch)
        type: Event kind
        detail: Human-readable description
        node_id: Node the event happened at, if any
        link_id: Link involved, if any
        traffic_type: Traffic type of the packet involved, if any
    """
    id: str
    at: float
    type: SimulationEventType
    detail: str
    node_id: Optional[str] = None
    link_id: Optional[str] = None
    traffic_type: Optional[TrafficType] = None

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "at": self.at,
            "type": self.type.value,
            "detail": self.detail,
        }
        if self.node_id is not None:
            data["nodeId"] = self.node_id
        if self.link_id is not None:
            data["linkId"] = self.link_id
        if self.traffic_type is not None:
            data["trafficType"] = self.traffic_type.value
        return data


EventListener = Callable[[SimulationEvent], None]


class EventLog:
    """
    Bounded event history with synchronous subscribers

    Recording an event stores it at the head of the history, evicting
    the oldest beyond max_events, then calls every subscriber in
    registration order.
    """

    def __init__(
        self,
        max_events: int = DEFAULT_MAX_EVENTS,
        clock: Callable[[], float] = time.time
    ):
        self.max_events = max_events
        self.clock = clock
        self._events: Deque[SimulationEvent] = deque(maxlen=max_events)
        self._listeners: List[EventListener] = []
        self.total_recorded = 0

    def subscribe(self, listener: EventListener):
        """Register a callback invoked once per recorded event"""
        self._listeners.append(listener)

    def record(
        self,
        event_type: SimulationEventType,
        detail: str,
        node_id: Optional[str] = None,
        link_id: Optional[str] = None,
        traffic_type: Optional[TrafficType] = None
    ) -> SimulationEvent:
        """Create, store and publish an event"""
        event = SimulationEvent(
            id=uuid.uuid4().hex,
            at=self.clock(),
            type=event_type,
            detail=detail,
            node_id=node_id,
            link_id=link_id,
            traffic_type=traffic_type
        )
        self._events.appendleft(event)
        self.total_recorded += 1
        for listener in self._listeners:
            listener(event)
        return event

    @property
    def events(self) -> Tuple[SimulationEvent, ...]:
        """Recent events, newest first"""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)
