"""
Traffic Generation Module

This module provides the packet model and the per-tick traffic
generator, which turns the active attack mode into batches of
legitimate and attacker packet seeds.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from enum import Enum
import time
import uuid

from ..attacks.attacks import (
    AttackMode,
    LEGITIMATE_SIZE,
    LEGITIMATE_RANGES,
    ATTACKER_RANGES,
    get_attack_profile
)


class TrafficType(Enum):
    """Classification of a packet's origin"""
    LEGITIMATE = "legitimate"
    ATTACKER = "attacker"


@dataclass(frozen=True)
class Packet:
    """
    Represents one unit of traffic

    Packets are immutable. A packet is held by at most one queue at a
    time; ownership moves when it is dequeued and enqueued elsewhere.

    Attributes:
        id: Unique packet identifier
        size: Packet size in bytes
        created_at: Creation timestamp (seconds since epoch)
        traffic_type: Legitimate or attacker packet
        source_ip: Dotted-quad source address
    """
    id: str
    size: int
    created_at: float
    traffic_type: TrafficType
    source_ip: str = "0.0.0.0"

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"Packet size must be positive, got {self.size}")

    @classmethod
    def create(
        cls,
        traffic_type: TrafficType,
        size: int,
        source_ip: str = "0.0.0.0",
        created_at: Optional[float] = None
    ) -> "Packet":
        """Create a packet with a fresh identifier"""
        return cls(
            id=uuid.uuid4().hex,
            size=int(size),
            created_at=time.time() if created_at is None else created_at,
            traffic_type=traffic_type,
            source_ip=source_ip
        )

    @property
    def is_attack(self) -> bool:
        return self.traffic_type == TrafficType.ATTACKER


@dataclass(frozen=True)
class TrafficSeed:
    """Size and origin of a packet that has not been materialized yet"""
    traffic_type: TrafficType
    size: int
    source_ip: str


@dataclass
class TrafficPlan:
    """Traffic generated for one tick, split by traffic type"""
    legitimate: List[TrafficSeed] = field(default_factory=list)
    attacker: List[TrafficSeed] = field(default_factory=list)

    def seeds(self) -> List[TrafficSeed]:
        """All seeds in arrival order (legitimate first)"""
        return self.legitimate + self.attacker

    def __len__(self) -> int:
        return len(self.legitimate) + len(self.attacker)


class TrafficGenerator:
    """
    Traffic generator for the edge network

    Produces a fresh TrafficPlan for every tick from the active attack
    mode. Apart from the random source, no state is carried between
    calls, so the plan is purely a function of mode and randomness.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Initialize traffic generator

        Args:
            rng: Random generator to draw from (takes precedence over seed)
            seed: Random seed for reproducibility
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def build_plan(self, mode: Union[AttackMode, str]) -> TrafficPlan:
        """
        Generate the traffic seeds for one tick

        Args:
            mode: Active attack mode

        Returns:
            Legitimate and attacker seed batches
        """
        profile = get_attack_profile(mode)

        attacker_count = 0
        if profile.attacker_count[1] > 0:
            attacker_count = self._uniform_int(*profile.attacker_count)

        return TrafficPlan(
            legitimate=self.generate_legitimate(profile.legitimate_count),
            attacker=self.generate_attack_burst(attacker_count, profile.attacker_size)
        )

    def generate_legitimate(self, count: int) -> List[TrafficSeed]:
        """Generate legitimate user seeds"""
        return [
            TrafficSeed(
                traffic_type=TrafficType.LEGITIMATE,
                size=self._uniform_int(*LEGITIMATE_SIZE),
                source_ip=self.random_ip(LEGITIMATE_RANGES)
            )
            for _ in range(count)
        ]

    def generate_attack_burst(self, count: int, size_range: Tuple[int, int]) -> List[TrafficSeed]:
        """Generate attacker seeds with sizes drawn from size_range"""
        return [
            TrafficSeed(
                traffic_type=TrafficType.ATTACKER,
                size=self._uniform_int(*size_range),
                source_ip=self.random_ip(ATTACKER_RANGES)
            )
            for _ in range(count)
        ]

    def random_ip(self, ranges: List[Tuple[str, str]]) -> str:
        """
        Draw an address from one of the given pools

        The pool is picked uniformly, then each octet is drawn uniformly
        between the pool's start and end octet.
        """
        start, end = ranges[int(self.rng.integers(len(ranges)))]
        start_octets = [int(o) for o in start.split(".")]
        end_octets = [int(o) for o in end.split(".")]
        octets = [
            self._uniform_int(min(lo, hi), max(lo, hi))
            for lo, hi in zip(start_octets, end_octets)
        ]
        return ".".join(str(o) for o in octets)

    def _uniform_int(self, low: int, high: int) -> int:
        """Uniform integer in the inclusive range [low, high]"""
        return int(self.rng.integers(low, high + 1))
