"""
Attack Profiles Module

This module defines the adversary traffic profiles that drive the
simulator's traffic generator:
- Attack modes: Idle, Pulse, Stealth, Flood
- Per-mode packet counts and attacker packet size ranges
- Source address pools for legitimate users and attackers

The traffic generator is the only consumer of this table, so tuning an
attack profile never touches the firewall or the engine.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union
from enum import Enum


class AttackMode(Enum):
    """Named adversary traffic profile"""
    IDLE = "idle"           # User traffic only
    PULSE = "pulse"         # Short bursts probing defenses
    STEALTH = "stealth"     # Low and slow, blends with users
    FLOOD = "flood"         # Volumetric surge overwhelming queues


@dataclass(frozen=True)
class AttackProfile:
    """
    Traffic volume for one attack mode

    Attributes:
        title: Human-readable name of the mode
        description: Short description shown to operators
        legitimate_count: Legitimate packets generated per tick
        attacker_count: Inclusive (min, max) attacker packets per tick
        attacker_size: Inclusive (min, max) attacker packet size in bytes
    """
    title: str
    description: str
    legitimate_count: int
    attacker_count: Tuple[int, int] = (0, 0)
    attacker_size: Tuple[int, int] = (0, 0)


# Legitimate packet size range (bytes), shared by every mode
LEGITIMATE_SIZE: Tuple[int, int] = (80, 480)

ATTACK_PROFILES: Dict[AttackMode, AttackProfile] = {
    AttackMode.IDLE: AttackProfile(
        title="Normal traffic",
        description="User traffic only; attackers stay quiet.",
        legitimate_count=6,
    ),
    AttackMode.PULSE: AttackProfile(
        title="Pulse attack",
        description="Short bursts probing defenses.",
        legitimate_count=5,
        attacker_count=(4, 8),
        attacker_size=(350, 800),
    ),
    AttackMode.STEALTH: AttackProfile(
        title="Stealthy",
        description="Low and slow to blend with users.",
        legitimate_count=6,
        attacker_count=(2, 3),
        attacker_size=(120, 260),
    ),
    AttackMode.FLOOD: AttackProfile(
        title="Flood",
        description="Volumetric surge overwhelming queues.",
        legitimate_count=4,
        attacker_count=(10, 17),
        attacker_size=(450, 950),
    ),
}

# Source address pools as (first, last) dotted quads
LEGITIMATE_RANGES: List[Tuple[str, str]] = [
    ("10.24.0.1", "10.24.0.255"),
    ("10.25.1.1", "10.25.1.200"),
    ("172.16.10.1", "172.16.10.220"),
]

ATTACKER_RANGES: List[Tuple[str, str]] = [
    ("203.0.113.1", "203.0.113.254"),
    ("198.51.100.1", "198.51.100.200"),
    ("192.0.2.10", "192.0.2.220"),
]


def parse_attack_mode(mode: Union[AttackMode, str]) -> AttackMode:
    """
    Coerce an attack mode or its string value to AttackMode

    Raises:
        ValueError: If the mode is not a known attack mode
    """
    if isinstance(mode, AttackMode):
        return mode
    try:
        return AttackMode(mode)
    except ValueError:
        valid = ", ".join(m.value for m in AttackMode)
        raise ValueError(f"Unknown attack mode: {mode!r}. Valid modes: {valid}") from None


def get_attack_profile(mode: Union[AttackMode, str]) -> AttackProfile:
    """Look up the traffic profile for an attack mode"""
    return ATTACK_PROFILES[parse_attack_mode(mode)]
