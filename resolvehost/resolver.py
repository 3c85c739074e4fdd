"""
Per-hostname forward and reverse resolution
"""

import time

from .backend import ResolutionBackend
from .deadline import BatchDeadline
from .errors import DNSError
from .formatting import addr_string, join_with_separator
from .models import (
    SENTINEL_BLOCKED_ADDRESS, AddressFamily, HostResolution, ReverseResult, is_sentinel
)
from .reporter import Reporter


class ReverseResolver:
    """
    Reverse lookups for the addresses of one hostname.

    Every address gets its own attempt, in order. The blocked sentinel
    (0.0.0.0) is skipped with an info line, never an error.
    """

    def __init__(self, backend: ResolutionBackend, reporter: Reporter):
        self.backend = backend
        self.reporter = reporter

    async def resolve_reverse(self, deadline: BatchDeadline, addresses: list[str],
                              hostname: str) -> list[ReverseResult]:
        """
        Reverse-resolve each address, reporting every outcome.

        Args:
            deadline: Shared batch deadline
            addresses: Forward-resolved addresses of hostname
            hostname: Hostname the addresses belong to (for context)

        Returns:
            One ReverseResult per address, in input order
        """
        results: list[ReverseResult] = []

        for address in addresses:
            if is_sentinel(address):
                self.reporter.info(
                    "Ignoring attempt to resolve reverse for %s as it previously resolved to %s",
                    hostname, SENTINEL_BLOCKED_ADDRESS
                )
                results.append(ReverseResult(address=address, skipped=True))
                continue

            try:
                names = await self.backend.reverse_lookup(deadline, address)
            except Exception as e:
                error = _as_dns_error(address, e, self.backend)
                self.reporter.error(
                    "Error performing reverse lookup for %s (%s): Error - '%s', was not found: %s",
                    address, hostname, error.detail, str(error.not_found).lower()
                )
                results.append(ReverseResult(address=address, error=error))
                continue

            self.reporter.info("Reverse for %s (%s): %s", address, hostname, join_with_separator(names))
            results.append(ReverseResult(address=address, names=names))

        return results


class HostnameResolver:
    """
    Resolves one hostname and its reverse names.

    Failures stay local to the hostname: they are reported and
    recorded on the returned HostResolution, never raised.
    """

    def __init__(self, backend: ResolutionBackend, reporter: Reporter):
        self.backend = backend
        self.reporter = reporter
        self.reverse = ReverseResolver(backend, reporter)

    async def resolve(self, deadline: BatchDeadline, family: AddressFamily,
                      hostname: str) -> HostResolution:
        """
        Forward-resolve hostname, then reverse-resolve every address.

        Args:
            deadline: Shared batch deadline
            family: Address family to request
            hostname: Name to resolve

        Returns:
            HostResolution with addresses, reverse results or the error
        """
        result = HostResolution(hostname=hostname)
        start = time.perf_counter()

        try:
            result.addresses = await self.backend.forward_lookup(deadline, family, hostname)
        except Exception as e:
            result.error = _as_dns_error(hostname, e, self.backend)

        if result.error is not None:
            result.duration_ms = _elapsed_ms(start)
            self.reporter.error(
                "Failed to resolve: %s: Error - '%s', was not found: %s",
                hostname, result.error.detail, str(result.error.not_found).lower()
            )
            return result

        self.reporter.info("IP addresses for %s: %s", hostname, addr_string(result.addresses))

        result.reverse = await self.reverse.resolve_reverse(deadline, result.addresses, hostname)

        result.duration_ms = _elapsed_ms(start)
        self.reporter.info("Duration for resolving %s: %d ms", hostname, result.duration_ms)

        return result


def _as_dns_error(name: str, err: Exception, backend: ResolutionBackend) -> DNSError:
    """Unexpected backend failures are still local to the name being looked up"""
    if isinstance(err, DNSError):
        return err
    return DNSError(name, str(err) or err.__class__.__name__, server=backend.description)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
