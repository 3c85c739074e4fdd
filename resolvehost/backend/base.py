"""
Abstract base class for resolution backends
"""

from abc import ABC, abstractmethod

from ..deadline import BatchDeadline
from ..models import AddressFamily


class ResolutionBackend(ABC):
    """
    Performs forward and reverse lookups for a batch.

    One instance serves every hostname in a batch concurrently, so
    implementations must not keep per-lookup state on self.
    """

    description = "resolver"

    @abstractmethod
    async def forward_lookup(self, deadline: BatchDeadline,
                             family: AddressFamily, hostname: str) -> list[str]:
        """
        Resolve hostname to IP addresses.

        Args:
            deadline: Shared batch deadline bounding the lookup
            family: Address family to request
            hostname: Name to resolve

        Returns:
            IP address strings in the order returned, without duplicates

        Raises:
            DNSError: on lookup failure or deadline expiry
        """
        pass

    @abstractmethod
    async def reverse_lookup(self, deadline: BatchDeadline, address: str) -> list[str]:
        """
        Resolve an IP address to host names.

        Raises:
            DNSError: on lookup failure or deadline expiry
        """
        pass

    def close(self):
        """Release resources held by the backend"""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def dedupe_preserve_order(values: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
