"""
Network Simulator Module

This module provides the main simulation engine that orchestrates the
edge network simulation: traffic generation, firewall filtering at
ingress, hop-by-hop forwarding with load balancing, link utilization
decay, and the event log and snapshots exposed to observers.
"""

import numpy as np
from typing import Callable, Dict, List, Optional, Union
from tqdm import tqdm
import time

from .topology import NetworkTopology, Node, Link, NodeRole, UTILIZATION_DECAY
from .traffic import TrafficGenerator, Packet, TrafficType
from .queue import QueueUpdate, DROPPED
from .firewall import Firewall, FirewallRule, DEFAULT_MAX_RULES
from .routing import (
    LinkSelector,
    RandomLinkSelector,
    RoundRobinLinkSelector,
    DEFAULT_JITTER_PROBABILITY
)
from .events import EventLog, EventListener, SimulationEventType, DEFAULT_MAX_EVENTS
from .snapshot import NodeState, LinkState, SimulationSnapshot
from .statistics import StatisticsCollector
from ..attacks.attacks import AttackMode, parse_attack_mode, get_attack_profile

# Ranges (inclusive) for replicas added at runtime
APP_SERVER_RATE = (5, 7)
APP_SERVER_CAPACITY = (12, 17)
APP_SERVER_BANDWIDTH = (110, 139)


class NetworkSimulation:
    """
    Main simulation engine for the edge network

    Advances only when tick() is called. Each tick runs to completion
    (generate, forward, decay), so a snapshot taken between ticks is
    always consistent. Observers get copies through snapshot() or push
    delivery of events through on_event().
    """

    def __init__(
        self,
        topology: Optional[NetworkTopology] = None,
        router: Optional[LinkSelector] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        attack_mode: Union[AttackMode, str] = AttackMode.IDLE,
        jitter_probability: float = DEFAULT_JITTER_PROBABILITY,
        max_events: int = DEFAULT_MAX_EVENTS,
        max_firewall_rules: int = DEFAULT_MAX_RULES,
        clock: Callable[[], float] = time.time,
        verbose: bool = False
    ):
        """
        Initialize simulator

        Args:
            topology: Network topology (default: gateway/router/app/db)
            router: Next-hop selector for the core router
                (default: round-robin across service replicas)
            seed: Random seed for reproducibility
            rng: Random generator to use instead of seeding a new one
            attack_mode: Initial attack mode
            jitter_probability: Chance the core router picks a random link
            max_events: Size of the recent event history
            max_firewall_rules: Maximum number of firewall rules kept
            clock: Time source for packet and event timestamps
            verbose: Print progress information
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.topology = topology if topology is not None else NetworkTopology.default()
        self.clock = clock
        self.verbose = verbose

        # Next-hop selection
        if router is None:
            self.router = RoundRobinLinkSelector(
                self.topology, rng=self.rng, jitter_probability=jitter_probability
            )
        else:
            self.router = router
        self.forwarder = RandomLinkSelector(self.topology, rng=self.rng)

        self.traffic_generator = TrafficGenerator(rng=self.rng)
        self.firewall = Firewall(max_rules=max_firewall_rules)
        self.event_log = EventLog(max_events=max_events, clock=clock)
        self.attack_mode = parse_attack_mode(attack_mode)

        # Initialize statistics collector
        self.stats = StatisticsCollector()
        self.on_event(self.stats.record_event)

        # Simulation state
        self.tick_count = 0

        for node in self.topology.nodes.values():
            self._watch_queue(node)

    # ------------------------------------------------------------------
    # Observer interface
    # ------------------------------------------------------------------

    def on_event(self, listener: EventListener):
        """Subscribe a callback invoked synchronously for every event"""
        self.event_log.subscribe(listener)

    def snapshot(self) -> SimulationSnapshot:
        """Immutable copy of the current simulation state"""
        return SimulationSnapshot(
            nodes=tuple(NodeState.from_node(n) for n in self.topology.nodes.values()),
            links=tuple(LinkState.from_link(l) for l in self.topology.links.values()),
            events=self.event_log.events,
            attack_mode=self.attack_mode,
            firewall_rules=tuple(self.firewall.rules)
        )

    # ------------------------------------------------------------------
    # Operator controls
    # ------------------------------------------------------------------

    def get_attack_mode(self) -> AttackMode:
        return self.attack_mode

    def set_attack_mode(self, mode: Union[AttackMode, str]):
        """Switch the attacker traffic profile"""
        self.attack_mode = parse_attack_mode(mode)
        profile = get_attack_profile(self.attack_mode)
        self.event_log.record(
            SimulationEventType.FIREWALL_UPDATED,
            f"Attack mode set to {profile.title}"
        )
        if self.verbose:
            print(f"Attack mode: {self.attack_mode.value}")

    def add_firewall_rule(
        self,
        start_ip: str,
        end_ip: str,
        label: Optional[str] = None
    ) -> FirewallRule:
        """
        Block attacker traffic from an inclusive address range

        Args:
            start_ip: First blocked address
            end_ip: Last blocked address
            label: Optional rule description

        Returns:
            The created rule
        """
        rule = self.firewall.add_rule(start_ip, end_ip, label)
        self.event_log.record(
            SimulationEventType.FIREWALL_UPDATED,
            f"Firewall rule added: {rule.label} ({rule.start_ip} - {rule.end_ip})"
        )
        return rule

    def add_app_server(self) -> Node:
        """
        Add a service replica behind the core router

        Returns:
            The new service node
        """
        router_node = self.topology.get_router()
        if router_node is None:
            raise ValueError("Topology has no core router to attach a service to")

        index = len(self.topology.get_service_nodes()) + 1
        while f"app-{index}" in self.topology.nodes:
            index += 1
        node_id = f"app-{index}"

        node = Node(
            id=node_id,
            label=f"App Service {index}",
            role=NodeRole.SERVICE,
            processing_rate=self._uniform_int(*APP_SERVER_RATE),
            queue_capacity=self._uniform_int(*APP_SERVER_CAPACITY)
        )
        self.topology.add_node(node)
        self._watch_queue(node)

        link = self.topology.add_link(Link(
            id=f"{router_node.id}-{node_id}",
            source=router_node.id,
            target=node_id,
            bandwidth=self._uniform_int(*APP_SERVER_BANDWIDTH)
        ))

        self.event_log.record(
            SimulationEventType.TOPOLOGY_UPDATED,
            f"Added {node.label} behind {router_node.label}",
            node_id=node.id,
            link_id=link.id
        )
        if self.verbose:
            print(f"Added {node.label}: rate={node.processing_rate}, "
                  f"capacity={node.queue_capacity}, bandwidth={link.bandwidth}")
        return node

    # ------------------------------------------------------------------
    # Simulation loop
    # ------------------------------------------------------------------

    def tick(self):
        """Advance the simulation by one discrete step"""
        self._generate_traffic()
        self._forward_packets()
        self._decay_utilization()

        self.tick_count += 1
        self.stats.record_tick(self.tick_count, self.topology)

    def run(self, num_ticks: int, progress_bar: bool = False) -> StatisticsCollector:
        """
        Run the simulation for a number of ticks

        Args:
            num_ticks: Number of ticks to run
            progress_bar: Show progress bar

        Returns:
            Statistics collector with results
        """
        if self.verbose:
            print(f"Starting simulation: {num_ticks} ticks")
            print(f"Topology: {self.topology}")
            print(f"Router: {self.router.name}")
            print(f"Attack mode: {self.attack_mode.value}")
            print(f"Firewall rules: {len(self.firewall)}")

        iterator = range(num_ticks)
        if progress_bar:
            iterator = tqdm(iterator, desc="Simulating", unit="tick")

        for _ in iterator:
            self.tick()

        return self.stats

    def _generate_traffic(self):
        """Materialize this tick's traffic and admit it at ingress"""
        plan = self.traffic_generator.build_plan(self.attack_mode)
        ingress = self.topology.get_ingress()

        for seed in plan.seeds():
            packet = Packet.create(
                seed.traffic_type,
                seed.size,
                source_ip=seed.source_ip,
                created_at=self.clock()
            )

            # Only attacker traffic is checked against the firewall
            if packet.is_attack and self.firewall.matches(packet.source_ip):
                ingress.dropped_count += 1
                self.event_log.record(
                    SimulationEventType.PACKET_FILTERED,
                    f"Firewall blocked adversary packet from {packet.source_ip} ({packet.size}B)",
                    node_id=ingress.id,
                    traffic_type=packet.traffic_type
                )
                continue

            accepted = ingress.queue.enqueue(packet)
            who = "User" if packet.traffic_type == TrafficType.LEGITIMATE else "Adversary"
            self.event_log.record(
                SimulationEventType.PACKET_GENERATED,
                f"{who} packet from {packet.source_ip} ({packet.size}B) arrived at ingress",
                node_id=ingress.id,
                traffic_type=packet.traffic_type
            )

            # The queue's drop handler has already counted this drop once;
            # ingress admission failures are deliberately counted twice.
            if not accepted:
                ingress.dropped_count += 1

    def _forward_packets(self):
        """Drain every node and pass packets to the next hop"""
        for node in list(self.topology.nodes.values()):
            processed = node.queue.process(node.processing_rate)
            node.processing = len(processed) > 0
            node.processed_count += len(processed)
            if not processed:
                continue

            links = self.topology.get_outgoing_links(node.id)
            selector = self.router if node.role == NodeRole.ROUTER else self.forwarder

            for packet in processed:
                link = selector.select_link(node, links)
                if link is None:
                    # Dead end: the packet has been fully processed here
                    continue

                destination = self.topology.get_node(link.target)
                if destination is None:
                    continue

                if not destination.queue.enqueue(packet):
                    destination.dropped_count += 1
                    continue

                link.add_traffic(packet.size)
                self.event_log.record(
                    SimulationEventType.PACKET_FORWARDED,
                    f"{packet.traffic_type.value} packet forwarded from {node.label} to {destination.label}",
                    node_id=destination.id,
                    link_id=link.id,
                    traffic_type=packet.traffic_type
                )

    def _decay_utilization(self):
        self.topology.decay_utilization(UTILIZATION_DECAY)

    def _watch_queue(self, node: Node):
        """Count and report queue-full drops for a node"""
        def handle(update: QueueUpdate):
            if update.reason != DROPPED:
                return
            node.dropped_count += 1
            packet = update.packet
            self.event_log.record(
                SimulationEventType.PACKET_DROPPED,
                f"Queue full on {node.label}; dropped {packet.traffic_type.value} packet ({packet.size}B)",
                node_id=update.node_id,
                traffic_type=packet.traffic_type
            )

        node.queue.on_update(handle)

    def _uniform_int(self, low: int, high: int) -> int:
        return int(self.rng.integers(low, high + 1))

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def get_results(self) -> Dict:
        """Get comprehensive simulation results"""
        return {
            "simulation_config": {
                "ticks": self.tick_count,
                "attack_mode": self.attack_mode.value,
                "router": self.router.name,
                "num_nodes": self.topology.get_total_nodes(),
                "num_links": self.topology.get_total_links(),
                "num_firewall_rules": len(self.firewall)
            },
            "statistics": self.stats.get_summary(),
            "network": self.topology.get_network_stats(),
            "nodes": {
                node.id: {
                    "processed": node.processed_count,
                    "dropped": node.dropped_count,
                    "queue_depth": node.queue_depth
                }
                for node in self.topology.nodes.values()
            }
        }

    def print_results(self):
        """Print simulation results"""
        print("\n" + "="*70)
        print("SIMULATION RESULTS")
        print("="*70)

        results = self.get_results()

        print("\n--- Configuration ---")
        for key, value in results["simulation_config"].items():
            print(f"  {key}: {value}")

        self.stats.print_summary()

        print("\n--- Nodes ---")
        for node_id, counts in results["nodes"].items():
            print(f"  {node_id}: processed={counts['processed']}, "
                  f"dropped={counts['dropped']}, queued={counts['queue_depth']}")

        print("\n--- Network ---")
        network = results["network"]
        print(f"  Avg link utilization: {network['avg_link_utilization']:.4f}")
        print(f"  Max link utilization: {network['max_link_utilization']:.4f}")


def run_basic_simulation(
    num_ticks: int = 100,
    attack_mode: Union[AttackMode, str] = AttackMode.FLOOD,
    firewall_rules: Optional[List[Dict]] = None,
    num_app_servers: int = 0,
    seed: Optional[int] = 42
) -> Dict:
    """
    Convenience function to run a basic simulation

    Args:
        num_ticks: Number of ticks to run
        attack_mode: Attack mode for the whole run
        firewall_rules: Rules as {"start_ip", "end_ip", "label"} dicts
        num_app_servers: Extra service replicas to add before the run
        seed: Random seed

    Returns:
        Simulation results dictionary
    """
    sim = NetworkSimulation(seed=seed)

    for _ in range(num_app_servers):
        sim.add_app_server()

    for rule in firewall_rules or []:
        sim.add_firewall_rule(rule["start_ip"], rule["end_ip"], rule.get("label"))

    sim.set_attack_mode(attack_mode)
    sim.run(num_ticks)

    return sim.get_results()
