"""
Data models for resolve-hostname
"""

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from .errors import DNSError, UsageError


SENTINEL_BLOCKED_ADDRESS = ipaddress.IPv4Address('0.0.0.0')


class AddressFamily(Enum):
    """Address family requested by forward lookups"""
    ANY = "ip"
    IPV4 = "ip4"
    IPV6 = "ip6"

    @classmethod
    def from_flag(cls, value: str) -> 'AddressFamily':
        """
        Parse a command-line address family flag.

        Args:
            value: One of "ip", "ip4" or "ip6"

        Returns:
            Matching AddressFamily

        Raises:
            UsageError: for any other value
        """
        for family in cls:
            if family.value == value:
                return family
        choices = ', '.join(f.value for f in cls)
        raise UsageError(f"Invalid ip type '{value}' (expected one of: {choices})")


def is_sentinel(address: str) -> bool:
    """Check whether address is the blocked sentinel (v4 or v4-mapped v6 form)"""
    try:
        addr = ipaddress.ip_address(address)
    except ValueError:
        return False

    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        addr = addr.ipv4_mapped

    return addr == SENTINEL_BLOCKED_ADDRESS


@dataclass
class ReverseResult:
    """Outcome of the reverse lookup for one address"""
    address: str
    names: list[str] = field(default_factory=list)
    error: Optional[DNSError] = None
    skipped: bool = False


@dataclass
class HostResolution:
    """Outcome of resolving one hostname"""
    hostname: str
    addresses: list[str] = field(default_factory=list)
    reverse: list[ReverseResult] = field(default_factory=list)
    error: Optional[DNSError] = None
    duration_ms: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Outcome of a whole batch run"""
    hostnames: list[str]
    family: AddressFamily
    timeout_ms: int
    elapsed: float = 0.0  # seconds since the deadline started, unrounded
    hosts: list[HostResolution] = field(default_factory=list)
    dns_server: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def total_ms(self) -> int:
        return int(self.elapsed * 1000)

    @property
    def deadline_exceeded(self) -> bool:
        # compared unrounded; total_ms is for display only
        return self.elapsed > self.timeout_ms / 1000

    @property
    def summary_prefix(self) -> str:
        if self.deadline_exceeded:
            return "Deadline exceeded"
        return "Total duration"

    @property
    def failed(self) -> list[HostResolution]:
        return [h for h in self.hosts if not h.ok]
