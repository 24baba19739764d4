"""
Routing Module

This module provides next-hop selection strategies for the edge
network: uniform random forwarding for ordinary nodes and round-robin
load balancing across service replicas for the core router.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import List, Optional

from .topology import NetworkTopology, Node, Link, NodeRole

# Probability that the core router ignores the rotation for one packet
DEFAULT_JITTER_PROBABILITY = 0.12


class LinkSelector(ABC):
    """
    Abstract base class for next-hop selection

    All selectors should inherit from this class and implement the
    select_link method.
    """

    def __init__(self, topology: NetworkTopology, rng: Optional[np.random.Generator] = None):
        """
        Initialize selector

        Args:
            topology: Network topology
            rng: Random generator shared with the simulator
        """
        self.topology = topology
        self.rng = rng if rng is not None else np.random.default_rng()
        self.name = "BaseSelector"

    @abstractmethod
    def select_link(self, node: Node, links: List[Link]) -> Optional[Link]:
        """
        Choose the outgoing link for one processed packet

        Args:
            node: Node that processed the packet
            links: Outgoing links of that node

        Returns:
            Chosen link, or None if the node has no outgoing links
        """
        pass

    def random_link(self, links: List[Link]) -> Optional[Link]:
        """Uniformly random link, or None for an empty list"""
        if not links:
            return None
        return links[int(self.rng.integers(len(links)))]


class RandomLinkSelector(LinkSelector):
    """Forwards each packet over a uniformly random outgoing link"""

    def __init__(self, topology: NetworkTopology, rng: Optional[np.random.Generator] = None):
        super().__init__(topology, rng)
        self.name = "RandomSelector"

    def select_link(self, node: Node, links: List[Link]) -> Optional[Link]:
        return self.random_link(links)


class RoundRobinLinkSelector(LinkSelector):
    """
    Round-robin load balancer for the core router

    Service-bound links are served in rotation with a single counter
    that advances once per forwarded packet, so the packet counts of any
    two service paths never differ by more than one. With a small
    probability a packet takes a uniformly random outgoing link instead
    to model routing jitter; this only happens when at least one
    non-service link exists.
    """

    def __init__(
        self,
        topology: NetworkTopology,
        rng: Optional[np.random.Generator] = None,
        jitter_probability: float = DEFAULT_JITTER_PROBABILITY
    ):
        """
        Initialize round-robin selector

        Args:
            topology: Network topology
            rng: Random generator shared with the simulator
            jitter_probability: Chance of a random link per packet
        """
        super().__init__(topology, rng)
        self.jitter_probability = jitter_probability
        self.rotation = 0
        self.name = "RoundRobinSelector"

    def get_service_links(self, links: List[Link]) -> List[Link]:
        """Links that lead to a service replica"""
        service_links = []
        for link in links:
            target = self.topology.get_node(link.target)
            if target is not None and target.role == NodeRole.SERVICE:
                service_links.append(link)
        return service_links

    def select_link(self, node: Node, links: List[Link]) -> Optional[Link]:
        if not links:
            return None

        service_links = self.get_service_links(links)
        has_other_links = len(service_links) < len(links)

        if has_other_links and self.rng.random() < self.jitter_probability:
            return self.random_link(links)

        if not service_links:
            return self.random_link(links)

        chosen = service_links[self.rotation % len(service_links)]
        self.rotation += 1
        return chosen


def create_link_selector(
    selector_type: str,
    topology: NetworkTopology,
    **kwargs
) -> LinkSelector:
    """
    Factory function to create a selector by type

    Args:
        selector_type: Type of selector ("random", "round_robin")
        topology: Network topology
        **kwargs: Additional arguments for specific selector types

    Returns:
        LinkSelector instance
    """
    selector_map = {
        "random": RandomLinkSelector,
        "round_robin": RoundRobinLinkSelector
    }

    if selector_type not in selector_map:
        raise ValueError(f"Unknown selector type: {selector_type}. "
                         f"Available: {list(selector_map.keys())}")

    return selector_map[selector_type](topology, **kwargs)
