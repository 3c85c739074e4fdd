"""
Batch orchestrator: one concurrent resolution per hostname
"""

import asyncio
from typing import Optional, Sequence

from .backend import ResolutionBackend
from .deadline import BatchDeadline
from .errors import EmptyInput
from .formatting import join_with_separator
from .models import AddressFamily, BatchResult
from .reporter import Reporter
from .resolver import HostnameResolver


class BatchCoordinator:
    """
    Fans out one resolution task per hostname and joins them all.

    Every task shares the same backend and deadline. The join waits
    for every task to report, whether it succeeded, failed or ran out
    of time; nothing is retried.
    """

    def __init__(self, backend: ResolutionBackend, reporter: Reporter,
                 dns_server: Optional[str] = None):
        self.backend = backend
        self.reporter = reporter
        self.dns_server = dns_server
        self.resolver = HostnameResolver(backend, reporter)

    async def run(self, deadline: BatchDeadline, family: AddressFamily,
                  hostnames: Sequence[str]) -> BatchResult:
        """
        Resolve every hostname concurrently under one deadline.

        Args:
            deadline: Shared batch deadline
            family: Address family requested for every hostname
            hostnames: Names to resolve

        Returns:
            BatchResult with one HostResolution per hostname, in input order

        Raises:
            EmptyInput: if hostnames is empty
        """
        if not hostnames:
            raise EmptyInput()

        hostnames = list(hostnames)
        result = BatchResult(
            hostnames=hostnames,
            family=family,
            timeout_ms=deadline.timeout_ms,
            dns_server=self.dns_server
        )

        tasks = [
            asyncio.ensure_future(self.resolver.resolve(deadline, family, hostname))
            for hostname in hostnames
        ]
        # return_exceptions: every task finishes before anything is raised
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        result.elapsed = deadline.elapsed()

        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
            result.hosts.append(outcome)

        self.reporter.info(
            "%s for %d addresses %d ms: (%s)",
            result.summary_prefix, len(hostnames), result.total_ms,
            join_with_separator(hostnames)
        )

        return result


def run_batch(backend: ResolutionBackend, reporter: Reporter, hostnames: Sequence[str],
              timeout_ms: int, family: AddressFamily = AddressFamily.IPV4,
              dns_server: Optional[str] = None) -> BatchResult:
    """
    Run a whole batch from synchronous code.

    The deadline starts counting when this is called.
    """
    if not hostnames:
        raise EmptyInput()

    deadline = BatchDeadline(timeout_ms)
    coordinator = BatchCoordinator(backend, reporter, dns_server=dns_server)
    return asyncio.run(coordinator.run(deadline, family, hostnames))
