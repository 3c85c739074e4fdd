"""
Backend using the operating system resolver
"""

import asyncio
import socket
import threading
from typing import Any, Callable, Optional

from ..deadline import BatchDeadline
from ..errors import DNSError
from ..models import AddressFamily
from .base import ResolutionBackend, dedupe_preserve_order


SOCKET_FAMILIES = {
    AddressFamily.ANY: socket.AF_UNSPEC,
    AddressFamily.IPV4: socket.AF_INET,
    AddressFamily.IPV6: socket.AF_INET6,
}

# getaddrinfo codes meaning "no such name / no records of that family"
NOT_FOUND_GAI_CODES = {
    code for code in (
        getattr(socket, 'EAI_NONAME', None),
        getattr(socket, 'EAI_NODATA', None),
    )
    if code is not None
}

# h_errno values from gethostbyaddr: HOST_NOT_FOUND, NO_DATA
NOT_FOUND_H_ERRNO = {1, 4}


def _translate(name: str, err: OSError) -> DNSError:
    """Map a socket error onto DNSError"""
    if isinstance(err, socket.gaierror):
        not_found = err.errno in NOT_FOUND_GAI_CODES
        detail = "no such host" if not_found else (err.strerror or str(err))
        return DNSError(name, detail, not_found=not_found)

    if isinstance(err, socket.herror):
        not_found = err.errno in NOT_FOUND_H_ERRNO
        detail = "no such host" if not_found else (err.strerror or str(err))
        return DNSError(name, detail, not_found=not_found)

    if isinstance(err, socket.timeout):
        return DNSError(name, "i/o timeout", is_timeout=True)

    return DNSError(name, err.strerror or str(err))


def _settle(future: asyncio.Future, result: Any = None, error: Optional[BaseException] = None):
    # the awaiting task may already have given up on this lookup
    if future.done():
        return
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)


class SystemBackend(ResolutionBackend):
    """
    Operating system resolver (getaddrinfo / gethostbyaddr).

    Every blocking call gets its own daemon thread, so all lookups of a
    batch run at once. When the deadline expires the awaiting task is
    released immediately; the thread is left to finish on its own and
    never holds up interpreter exit.
    """

    description = "system resolver"

    def _lookup_ip_sync(self, hostname: str, family: AddressFamily) -> list[str]:
        """Synchronous forward lookup"""
        infos = socket.getaddrinfo(
            hostname, None, SOCKET_FAMILIES[family], socket.SOCK_STREAM
        )
        return dedupe_preserve_order([info[4][0] for info in infos])

    def _lookup_addr_sync(self, address: str) -> list[str]:
        """Synchronous reverse lookup"""
        hostname, aliases, _ = socket.gethostbyaddr(address)
        return dedupe_preserve_order([hostname, *aliases])

    async def _in_thread(self, func: Callable[..., list[str]], *args) -> list[str]:
        """Run func in a fresh daemon thread and await its result"""
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def worker():
            result, error = None, None
            try:
                result = func(*args)
            except Exception as e:
                error = e
            try:
                loop.call_soon_threadsafe(_settle, future, result, error)
            except RuntimeError:
                pass  # loop already closed: the batch finished without us

        threading.Thread(target=worker, name=f"lookup-{args[0]}", daemon=True).start()
        return await future

    async def forward_lookup(self, deadline: BatchDeadline,
                             family: AddressFamily, hostname: str) -> list[str]:
        try:
            return await deadline.run(
                self._in_thread(self._lookup_ip_sync, hostname, family),
                hostname
            )
        except OSError as e:
            raise _translate(hostname, e) from e

    async def reverse_lookup(self, deadline: BatchDeadline, address: str) -> list[str]:
        try:
            return await deadline.run(
                self._in_thread(self._lookup_addr_sync, address),
                address
            )
        except OSError as e:
            raise _translate(address, e) from e
