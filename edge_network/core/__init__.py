"""
Edge Network - Core Module

This module contains the core components of the edge network simulation:
- Traffic: Packet model and per-tick traffic generation
- Queue: Bounded per-node packet queues
- Firewall: IP-range block rules applied at ingress
- Topology: Nodes, links and the default gateway/router/service layout
- Routing: Next-hop selection and round-robin load balancing
- Events: Bounded event log with push subscribers
- Snapshot: Read-only state views for observers
- Statistics: Data collection and analysis
- Simulator: Main simulation engine
- Visualization: Plotting of recorded statistics
"""

from .traffic import (
    Packet,
    TrafficType,
    TrafficSeed,
    TrafficPlan,
    TrafficGenerator
)

from .queue import (
    PacketQueue,
    QueueUpdate
)

from .firewall import (
    Firewall,
    FirewallRule,
    ip_to_int
)

from .topology import (
    Node,
    NodeRole,
    Link,
    NetworkTopology
)

from .routing import (
    LinkSelector,
    RandomLinkSelector,
    RoundRobinLinkSelector,
    create_link_selector
)

from .events import (
    SimulationEvent,
    SimulationEventType,
    EventLog
)

from .snapshot import (
    NodeState,
    LinkState,
    SimulationSnapshot
)

from .statistics import (
    StatisticsCollector,
    TimeSeriesData
)

from .simulator import NetworkSimulation, run_basic_simulation

from .visualization import (
    plot_simulation_results,
    plot_link_utilization,
    plot_queue_occupancy,
    save_all_plots
)

__all__ = [
    # Traffic
    'Packet',
    'TrafficType',
    'TrafficSeed',
    'TrafficPlan',
    'TrafficGenerator',
    # Queue
    'PacketQueue',
    'QueueUpdate',
    # Firewall
    'Firewall',
    'FirewallRule',
    'ip_to_int',
    # Topology
    'Node',
    'NodeRole',
    'Link',
    'NetworkTopology',
    # Routing
    'LinkSelector',
    'RandomLinkSelector',
    'RoundRobinLinkSelector',
    'create_link_selector',
    # Events
    'SimulationEvent',
    'SimulationEventType',
    'EventLog',
    # Snapshot
    'NodeState',
    'LinkState',
    'SimulationSnapshot',
    # Statistics
    'StatisticsCollector',
    'TimeSeriesData',
    # Simulator
    'NetworkSimulation',
    'run_basic_simulation',
    # Visualization
    'plot_simulation_results',
    'plot_link_utilization',
    'plot_queue_occupancy',
    'save_all_plots'
]
