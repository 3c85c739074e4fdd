import asyncio
import io
import time

import pytest
from rich.console import Console

from resolvehost.backend import ResolutionBackend
from resolvehost.errors import DNSError
from resolvehost.reporter import Reporter


class CapturedReporter(Reporter):
    """Reporter writing into in-memory buffers"""

    def __init__(self):
        self._out_buf = io.StringIO()
        self._err_buf = io.StringIO()
        super().__init__(
            out=Console(file=self._out_buf, width=200),
            err=Console(file=self._err_buf, width=200),
        )

    @property
    def info_lines(self) -> list[str]:
        return self._out_buf.getvalue().splitlines()

    @property
    def error_lines(self) -> list[str]:
        return self._err_buf.getvalue().splitlines()


class FakeBackend(ResolutionBackend):
    """
    In-memory backend.

    forward/reverse map a name to a list of answers or to an exception.
    delay is an awaited (cancellable) sleep inside the deadline; block is
    a blocking sleep taken before the deadline is consulted.
    """

    description = "fake resolver"

    def __init__(self, forward=None, reverse=None, delay: float = 0.0, block: float = 0.0):
        self.forward = forward or {}
        self.reverse = reverse or {}
        self.delay = delay
        self.block = block
        self.forward_calls = []
        self.reverse_calls = []
        self.closed = False

    async def _answer(self, table, key):
        if self.delay:
            await asyncio.sleep(self.delay)
        value = table.get(key, DNSError(key, "no such host", not_found=True))
        if isinstance(value, Exception):
            raise value
        return list(value)

    async def forward_lookup(self, deadline, family, hostname):
        self.forward_calls.append((family, hostname))
        if self.block:
            time.sleep(self.block)
        return await deadline.run(self._answer(self.forward, hostname), hostname)

    async def reverse_lookup(self, deadline, address):
        self.reverse_calls.append(address)
        return await deadline.run(self._answer(self.reverse, address), address)

    def close(self):
        self.closed = True


@pytest.fixture
def reporter():
    return CapturedReporter()


@pytest.fixture
def backend():
    return FakeBackend(
        forward={
            'example.com': ['93.184.216.34'],
            'multi.example': ['10.0.0.1', '10.0.0.2'],
            'blocked.example': ['0.0.0.0'],
            'empty.example': [],
        },
        reverse={
            '93.184.216.34': ['edge.example.net.'],
            '10.0.0.1': DNSError('10.0.0.1', "server misbehaving"),
            '10.0.0.2': ['two.example.', 'deux.example.'],
        },
    )
