"""
Firewall Module

Ordered set of inclusive IPv4 block ranges applied at ingress to
attacker-classified traffic.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional
import uuid

DEFAULT_MAX_RULES = 6


def ip_to_int(ip: str) -> int:
    """
    Convert a dotted-quad IPv4 address to its 32-bit big-endian value

    Raises:
        ValueError: If the address is not four octets in 0..255
    """
    parts = ip.strip().split(".")
    if len(parts) != 4:
        raise ValueError(f"Invalid IPv4 address: {ip!r}")

    value = 0
    for part in parts:
        if not part.isdigit() or int(part) > 255:
            raise ValueError(f"Invalid IPv4 address: {ip!r}")
        value = value * 256 + int(part)
    return value


@dataclass(frozen=True)
class FirewallRule:
    """
    Inclusive address range blocked at ingress

    Attributes:
        id: Unique rule identifier
        label: Operator-facing description
        start_ip: First blocked address as entered
        end_ip: Last blocked address as entered
        start: Numeric lower bound
        end: Numeric upper bound
    """
    id: str
    label: str
    start_ip: str
    end_ip: str
    start: int
    end: int

    def contains(self, value: int) -> bool:
        return self.start <= value <= self.end

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "label": self.label,
            "startIp": self.start_ip,
            "endIp": self.end_ip,
            "range": [self.start, self.end],
        }


class Firewall:
    """
    Bounded, most-recent-first list of block rules

    Adding a rule beyond max_rules evicts the oldest one.
    """

    def __init__(self, max_rules: int = DEFAULT_MAX_RULES):
        if max_rules < 1:
            raise ValueError(f"Firewall must hold at least one rule, got {max_rules}")
        self.max_rules = max_rules
        self._rules: List[FirewallRule] = []

    def add_rule(self, start_ip: str, end_ip: str, label: Optional[str] = None) -> FirewallRule:
        """
        Insert a rule at the head of the list

        Args:
            start_ip: First address of the range
            end_ip: Last address of the range
            label: Optional description

        Returns:
            The created rule
        """
        start, end = ip_to_int(start_ip), ip_to_int(end_ip)
        if start > end:
            start, end = end, start

        rule = FirewallRule(
            id=uuid.uuid4().hex,
            label=label or f"Block {start_ip}-{end_ip}",
            start_ip=start_ip,
            end_ip=end_ip,
            start=start,
            end=end
        )
        self._rules = [rule] + self._rules[:self.max_rules - 1]
        return rule

    def matches(self, ip: str) -> bool:
        """True if the address falls in any rule's range"""
        value = ip_to_int(ip)
        return any(rule.contains(value) for rule in self._rules)

    @property
    def rules(self) -> List[FirewallRule]:
        """Current rules, newest first"""
        return list(self._rules)

    def __len__(self) -> int:
        return len(self._rules)
