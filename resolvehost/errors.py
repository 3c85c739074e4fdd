"""
Error types for resolve-hostname
"""

from typing import Optional


class ResolveHostError(Exception):
    """Base class for all resolve-hostname errors"""


class UsageError(ResolveHostError):
    """Malformed command-line input"""


class InvalidAddress(ResolveHostError, ValueError):
    """DNS server address is not a valid IP literal"""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid ip address: {address}")


class EmptyInput(ResolveHostError, ValueError):
    """Batch started without any hostnames"""

    def __init__(self):
        super().__init__("No hostnames provided")


class DNSError(ResolveHostError):
    """
    Failure of a single forward or reverse lookup.

    Attributes:
        name: Hostname or IP address that was looked up
        detail: Short description of the failure
        not_found: True when the name does not exist or has no records
        is_timeout: True when the lookup ran out of time
        server: Resolver that answered, if known
    """

    def __init__(self, name: str, detail: str, not_found: bool = False,
                 is_timeout: bool = False, server: Optional[str] = None):
        self.name = name
        self.detail = detail
        self.not_found = not_found
        self.is_timeout = is_timeout
        self.server = server
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.server:
            return f"lookup {self.name} on {self.server}: {self.detail}"
        return f"lookup {self.name}: {self.detail}"


class DeadlineExceeded(DNSError):
    """Batch deadline expired while a lookup was in flight"""

    def __init__(self, name: str, server: Optional[str] = None):
        super().__init__(name, "deadline exceeded", not_found=False,
                         is_timeout=True, server=server)
