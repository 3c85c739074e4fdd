"""
Backend bound to an explicit DNS server, via dnspython
"""

import asyncio
import ipaddress

import dns.asyncresolver
import dns.exception
import dns.resolver

from ..deadline import BatchDeadline
from ..errors import DNSError
from ..models import AddressFamily
from .base import ResolutionBackend, dedupe_preserve_order


DNS_PORT = 53
DEFAULT_DIAL_TIMEOUT = 1.0  # seconds, per query attempt

RDTYPES = {
    AddressFamily.IPV4: ('A',),
    AddressFamily.IPV6: ('AAAA',),
    AddressFamily.ANY: ('A', 'AAAA'),
}


class NameserverBackend(ResolutionBackend):
    """
    Resolver that sends every query over UDP to one DNS server.

    Each query attempt has its own short timeout (dial_timeout) and the
    overall lifetime of a lookup is capped by the batch deadline. Errors
    are strict: an explicit failure from the server is never papered
    over with partial results, and SERVFAIL is not retried.
    """

    def __init__(self, address: str, port: int = DNS_PORT,
                 dial_timeout: float = DEFAULT_DIAL_TIMEOUT):
        self.address = address
        self.port = port
        self.dial_timeout = dial_timeout

        if ':' in address:
            self.description = f"[{address}]:{port}"
        else:
            self.description = f"{address}:{port}"

        self._resolver = dns.asyncresolver.Resolver(configure=False)
        # port first: nameserver entries pick it up when assigned
        self._resolver.port = port
        self._resolver.nameservers = [address]
        self._resolver.timeout = dial_timeout
        self._resolver.lifetime = dial_timeout
        self._resolver.retry_servfail = False

    def _lifetime(self, deadline: BatchDeadline) -> float:
        # dnspython rejects a zero lifetime; an expired deadline is caught by run()
        return max(deadline.remaining(), 0.001)

    def _translate(self, name: str, err: dns.exception.DNSException) -> DNSError:
        """Map a dnspython exception onto DNSError"""
        if isinstance(err, (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer)):
            return DNSError(name, "no such host", not_found=True, server=self.description)
        if isinstance(err, dns.exception.Timeout):
            return DNSError(name, "i/o timeout", is_timeout=True, server=self.description)
        if isinstance(err, dns.resolver.NoNameservers):
            return DNSError(name, "server misbehaving", server=self.description)
        return DNSError(name, str(err) or err.__class__.__name__, server=self.description)

    async def _query(self, deadline: BatchDeadline, hostname: str, rdtype: str) -> list[str]:
        """Single record-type query"""
        try:
            answer = await deadline.run(
                self._resolver.resolve(hostname, rdtype, lifetime=self._lifetime(deadline)),
                hostname, server=self.description
            )
        except dns.exception.DNSException as e:
            raise self._translate(hostname, e) from e

        return [rdata.to_text() for rdata in answer]

    async def forward_lookup(self, deadline: BatchDeadline,
                             family: AddressFamily, hostname: str) -> list[str]:
        literal = _parse_literal(hostname)
        if literal is not None:
            if family is AddressFamily.ANY or RDTYPES[family] == _literal_rdtype(literal):
                return [str(literal)]
            raise DNSError(hostname, "no suitable address found", server=self.description)

        rdtypes = RDTYPES[family]
        results = await asyncio.gather(
            *(self._query(deadline, hostname, rdtype) for rdtype in rdtypes),
            return_exceptions=True
        )

        addresses: list[str] = []
        not_found = None
        for result in results:
            if isinstance(result, DNSError):
                if not result.not_found:
                    raise result
                not_found = result
            elif isinstance(result, BaseException):
                raise result
            else:
                addresses.extend(result)

        if not addresses and not_found is not None:
            raise not_found

        return dedupe_preserve_order(addresses)

    async def reverse_lookup(self, deadline: BatchDeadline, address: str) -> list[str]:
        try:
            answer = await deadline.run(
                self._resolver.resolve_address(address, lifetime=self._lifetime(deadline)),
                address, server=self.description
            )
        except dns.exception.DNSException as e:
            raise self._translate(address, e) from e

        return [rdata.to_text() for rdata in answer]


def _parse_literal(hostname: str):
    try:
        return ipaddress.ip_address(hostname)
    except ValueError:
        return None


def _literal_rdtype(literal) -> tuple[str, ...]:
    if isinstance(literal, ipaddress.IPv4Address):
        return ('A',)
    return ('AAAA',)
