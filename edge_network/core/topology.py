"""
Edge Network Topology Module

This module provides classes for modeling the simulated edge network:
an edge gateway feeding a core router, which fans traffic out to
application service replicas and a database cluster.
"""

import numpy as np
import networkx as nx
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum

from .queue import PacketQueue


class NodeRole(Enum):
    """Role of a network node"""
    GATEWAY = "gateway"
    ROUTER = "router"
    SERVICE = "service"
    DB = "db"


# Utilization decays by this factor every tick when a link goes quiet
UTILIZATION_DECAY = 0.35

# Bandwidth is expressed in units per decay window of this many bytes
BANDWIDTH_SCALE = 10


@dataclass
class Node:
    """
    Represents a network node

    Attributes:
        id: Unique identifier
        label: Display name
        role: Node role in the topology
        processing_rate: Packets drained from the queue per tick
        queue_capacity: Queue buffer size (packets)
    """
    id: str
    label: str
    role: NodeRole
    processing_rate: int
    queue_capacity: int

    # Runtime state
    queue: PacketQueue = field(init=False, repr=False)
    processed_count: int = 0
    dropped_count: int = 0
    processing: bool = False

    def __post_init__(self):
        self.queue = PacketQueue(self.id, self.queue_capacity)

    @property
    def queue_depth(self) -> int:
        """Number of packets currently queued"""
        return self.queue.depth()

    def get_utilization(self) -> float:
        """Return buffer utilization ratio"""
        return self.queue_depth / self.queue_capacity if self.queue_capacity > 0 else 0.0


@dataclass
class Link:
    """
    Directed link between two nodes

    Attributes:
        id: Unique identifier
        source: Source node ID
        target: Target node ID
        bandwidth: Capacity units per decay window
        utilization: Smoothed recent load in [0, 1]
        recent_bytes: Bytes forwarded since the last decay step
    """
    id: str
    source: str
    target: str
    bandwidth: float

    # Runtime state
    utilization: float = 0.0
    recent_bytes: int = 0
    total_bytes: int = 0

    def add_traffic(self, bytes_count: int):
        """Account bytes forwarded over this link"""
        self.recent_bytes += bytes_count
        self.total_bytes += bytes_count

    def get_instant_load(self) -> float:
        """Load of the current window relative to bandwidth, capped at 1"""
        capacity = self.bandwidth * BANDWIDTH_SCALE
        if capacity <= 0:
            return 1.0 if self.recent_bytes > 0 else 0.0
        return min(1.0, self.recent_bytes / capacity)

    def decay(self, factor: float = UTILIZATION_DECAY):
        """
        Fold the current window into the utilization estimate

        Utilization rises to the instantaneous load immediately but falls
        off by `factor` per step; the byte window is then reset.
        """
        self.utilization = max(self.get_instant_load(), self.utilization * factor)
        self.recent_bytes = 0


# Fixed nodes of the default topology, in forwarding order
DEFAULT_NODES = [
    {"id": "ingress", "label": "Edge Gateway", "role": NodeRole.GATEWAY, "processing_rate": 8, "queue_capacity": 24},
    {"id": "core", "label": "Core Router", "role": NodeRole.ROUTER, "processing_rate": 10, "queue_capacity": 32},
    {"id": "app", "label": "App Service", "role": NodeRole.SERVICE, "processing_rate": 6, "queue_capacity": 14},
    {"id": "db", "label": "DB Cluster", "role": NodeRole.DB, "processing_rate": 4, "queue_capacity": 16},
]

DEFAULT_LINKS = [
    {"id": "ingress-core", "source": "ingress", "target": "core", "bandwidth": 150},
    {"id": "core-app", "source": "core", "target": "app", "bandwidth": 120},
    {"id": "core-db", "source": "core", "target": "db", "bandwidth": 90},
]


class NetworkTopology:
    """
    Edge network topology

    Nodes are kept in insertion order, which is also the order in which
    the simulator drains them each tick. Nodes and links can be added
    but never removed. A NetworkX graph mirrors the structure for
    reachability queries.
    """

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.links: Dict[str, Link] = {}

        # NetworkX graph for reachability
        self.graph: nx.DiGraph = nx.DiGraph()

    @classmethod
    def default(cls) -> "NetworkTopology":
        """Build the gateway -> router -> {app, db} topology"""
        topology = cls()
        for params in DEFAULT_NODES:
            topology.add_node(Node(**params))
        for params in DEFAULT_LINKS:
            topology.add_link(Link(**params))
        return topology

    def add_node(self, node: Node) -> Node:
        """Add a node to the topology"""
        if node.id in self.nodes:
            raise ValueError(f"Node {node.id!r} already exists")
        self.nodes[node.id] = node
        self.graph.add_node(node.id, role=node.role, label=node.label)
        return node

    def add_link(self, link: Link) -> Link:
        """Add a directed link between two existing nodes"""
        if link.id in self.links:
            raise ValueError(f"Link {link.id!r} already exists")
        if link.source not in self.nodes or link.target not in self.nodes:
            raise ValueError(
                f"Link {link.id!r} references unknown node "
                f"({link.source!r} -> {link.target!r})"
            )
        self.links[link.id] = link
        self.graph.add_edge(link.source, link.target, link_id=link.id, bandwidth=link.bandwidth)
        return link

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    def get_outgoing_links(self, node_id: str) -> List[Link]:
        """Links whose source is node_id, in insertion order"""
        return [link for link in self.links.values() if link.source == node_id]

    def get_nodes_by_role(self, role: NodeRole) -> List[Node]:
        return [node for node in self.nodes.values() if node.role == role]

    def get_service_nodes(self) -> List[Node]:
        return self.get_nodes_by_role(NodeRole.SERVICE)

    def get_ingress(self) -> Node:
        """The gateway node where external traffic enters"""
        gateways = self.get_nodes_by_role(NodeRole.GATEWAY)
        if not gateways:
            raise ValueError("Topology has no gateway node")
        return gateways[0]

    def get_router(self) -> Optional[Node]:
        """The core router, if the topology has one"""
        routers = self.get_nodes_by_role(NodeRole.ROUTER)
        return routers[0] if routers else None

    def is_reachable(self, source: str, target: str) -> bool:
        """Check whether target can be reached from source along links"""
        if source not in self.graph or target not in self.graph:
            return False
        return nx.has_path(self.graph, source, target)

    def decay_utilization(self, factor: float = UTILIZATION_DECAY):
        """Apply one decay step to every link"""
        for link in self.links.values():
            link.decay(factor)

    def get_total_nodes(self) -> int:
        return len(self.nodes)

    def get_total_links(self) -> int:
        return len(self.links)

    def get_network_stats(self) -> Dict:
        """Get overall network statistics"""
        utilizations = [l.utilization for l in self.links.values()]

        return {
            "total_nodes": len(self.nodes),
            "total_links": len(self.links),
            "total_service_replicas": len(self.get_service_nodes()),
            "total_processed_packets": sum(n.processed_count for n in self.nodes.values()),
            "total_dropped_packets": sum(n.dropped_count for n in self.nodes.values()),
            "total_queued_packets": sum(n.queue_depth for n in self.nodes.values()),
            "total_link_bytes": sum(l.total_bytes for l in self.links.values()),
            "avg_link_utilization": float(np.mean(utilizations)) if utilizations else 0.0,
            "max_link_utilization": max(utilizations) if utilizations else 0.0
        }

    def __repr__(self):
        return (f"NetworkTopology(nodes={len(self.nodes)}, "
                f"links={len(self.links)}, "
                f"services={len(self.get_service_nodes())})")
