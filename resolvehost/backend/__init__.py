"""
Resolution backends for resolve-hostname
"""

import ipaddress
from typing import Optional

from ..errors import InvalidAddress
from .base import ResolutionBackend
from .nameserver import DEFAULT_DIAL_TIMEOUT, DNS_PORT, NameserverBackend
from .system import SystemBackend


def build_backend(dns_server: Optional[str] = None,
                  dial_timeout: float = DEFAULT_DIAL_TIMEOUT) -> ResolutionBackend:
    """
    Build the backend for a batch.

    Args:
        dns_server: IP literal of the DNS server to query; None or empty
            selects the operating system resolver
        dial_timeout: Per-query timeout in seconds for an explicit server

    Returns:
        A ResolutionBackend

    Raises:
        InvalidAddress: if dns_server is set but not an IP literal
    """
    if not dns_server:
        return SystemBackend()

    try:
        ipaddress.ip_address(dns_server)
    except ValueError:
        raise InvalidAddress(dns_server) from None

    return NameserverBackend(dns_server, port=DNS_PORT, dial_timeout=dial_timeout)


__all__ = [
    'ResolutionBackend', 'SystemBackend', 'NameserverBackend',
    'build_backend', 'DEFAULT_DIAL_TIMEOUT', 'DNS_PORT',
]
