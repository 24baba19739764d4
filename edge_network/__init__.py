"""
Edge Network Traffic Simulation Framework

A real-time simulator of packets flowing through a small edge network
(edge gateway -> core router -> application services / database) under
attacker traffic profiles and operator-configured firewall blocking.

Modules:
- core: Simulation engine components (traffic, queues, firewall, topology, routing, events)
- attacks: Attack mode traffic profiles
"""

# Import from core module
from .core import (
    # Traffic
    Packet,
    TrafficType,
    TrafficSeed,
    TrafficPlan,
    TrafficGenerator,
    # Queue
    PacketQueue,
    QueueUpdate,
    # Firewall
    Firewall,
    FirewallRule,
    ip_to_int,
    # Topology
    Node,
    NodeRole,
    Link,
    NetworkTopology,
    # Routing
    LinkSelector,
    RandomLinkSelector,
    RoundRobinLinkSelector,
    create_link_selector,
    # Events
    SimulationEvent,
    SimulationEventType,
    EventLog,
    # Snapshot
    NodeState,
    LinkState,
    SimulationSnapshot,
    # Statistics
    StatisticsCollector,
    TimeSeriesData,
    # Simulator
    NetworkSimulation,
    run_basic_simulation,
    # Visualization
    plot_simulation_results,
    plot_link_utilization,
    plot_queue_occupancy,
    save_all_plots
)

# Import from attacks module
from .attacks import (
    AttackMode,
    AttackProfile,
    ATTACK_PROFILES,
    get_attack_profile
)

__version__ = "0.1.0"

__all__ = [
    # Core - Traffic
    'Packet',
    'TrafficType',
    'TrafficSeed',
    'TrafficPlan',
    'TrafficGenerator',
    # Core - Queue
    'PacketQueue',
    'QueueUpdate',
    # Core - Firewall
    'Firewall',
    'FirewallRule',
    'ip_to_int',
    # Core - Topology
    'Node',
    'NodeRole',
    'Link',
    'NetworkTopology',
    # Core - Routing
    'LinkSelector',
    'RandomLinkSelector',
    'RoundRobinLinkSelector',
    'create_link_selector',
    # Core - Events
    'SimulationEvent',
    'SimulationEventType',
    'EventLog',
    # Core - Snapshot
    'NodeState',
    'LinkState',
    'SimulationSnapshot',
    # Core - Statistics
    'StatisticsCollector',
    'TimeSeriesData',
    # Core - Simulator
    'NetworkSimulation',
    'run_basic_simulation',
    # Core - Visualization
    'plot_simulation_results',
    'plot_link_utilization',
    'plot_queue_occupancy',
    'save_all_plots',
    # Attacks
    'AttackMode',
    'AttackProfile',
    'ATTACK_PROFILES',
    'get_attack_profile'
]
