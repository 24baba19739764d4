"""
Snapshot Module

Read-only copies of simulator state handed to observers. Snapshots
share no mutable state with the simulator.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from .events import SimulationEvent
from .firewall import FirewallRule
from .topology import Node, Link
from ..attacks.attacks import AttackMode


@dataclass(frozen=True)
class NodeState:
    """Point-in-time view of a node"""
    id: str
    label: str
    role: str
    processing_rate: int
    queue_capacity: int
    queue_depth: int
    processed_count: int
    dropped_count: int
    processing: bool

    @classmethod
    def from_node(cls, node: Node) -> "NodeState":
        return cls(
            id=node.id,
            label=node.label,
            role=node.role.value,
            processing_rate=node.processing_rate,
            queue_capacity=node.queue_capacity,
            queue_depth=node.queue_depth,
            processed_count=node.processed_count,
            dropped_count=node.dropped_count,
            processing=node.processing
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "label": self.label,
            "role": self.role,
            "processingRate": self.processing_rate,
            "queueCapacity": self.queue_capacity,
            "queueDepth": self.queue_depth,
            "processedCount": self.processed_count,
            "droppedCount": self.dropped_count,
            "processing": self.processing,
        }


@dataclass(frozen=True)
class LinkState:
    """Point-in-time view of a link"""
    id: str
    source: str
    target: str
    bandwidth: float
    utilization: float

    @classmethod
    def from_link(cls, link: Link) -> "LinkState":
        return cls(
            id=link.id,
            source=link.source,
            target=link.target,
            bandwidth=link.bandwidth,
            utilization=link.utilization
        )

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "bandwidth": self.bandwidth,
            "utilization": self.utilization,
        }


@dataclass(frozen=True)
class SimulationSnapshot:
    """
    Everything an observer may read about the simulation

    Attributes:
        nodes: Node views in forwarding order
        links: Link views in creation order
        events: Recent events, newest first
        attack_mode: Active attack mode
        firewall_rules: Active rules, newest first
    """
    nodes: Tuple[NodeState, ...]
    links: Tuple[LinkState, ...]
    events: Tuple[SimulationEvent, ...]
    attack_mode: AttackMode
    firewall_rules: Tuple[FirewallRule, ...]

    def get_node(self, node_id: str) -> NodeState:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def get_link(self, link_id: str) -> LinkState:
        for link in self.links:
            if link.id == link_id:
                return link
        raise KeyError(link_id)

    def to_dict(self) -> Dict:
        """Render the snapshot with the dashboard's field names"""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
            "events": [e.to_dict() for e in self.events],
            "attackMode": self.attack_mode.value,
            "firewallRules": [r.to_dict() for r in self.firewall_rules],
        }
