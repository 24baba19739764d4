"""
Edge Network - Attacks Module

This module contains the adversary traffic profiles:
- Attack modes: Idle, Pulse, Stealth, Flood
- Per-mode packet volume and size ranges
- Legitimate and attacker source address pools
"""

from .attacks import (
    AttackMode,
    AttackProfile,
    ATTACK_PROFILES,
    LEGITIMATE_SIZE,
    LEGITIMATE_RANGES,
    ATTACKER_RANGES,
    parse_attack_mode,
    get_attack_profile
)

__all__ = [
    'AttackMode',
    'AttackProfile',
    'ATTACK_PROFILES',
    'LEGITIMATE_SIZE',
    'LEGITIMATE_RANGES',
    'ATTACKER_RANGES',
    'parse_attack_mode',
    'get_attack_profile'
]
