"""
Helpers for rendering address and name lists
"""

from typing import Any, Iterable


def join_with_separator(items: Iterable[Any], separator: str = ", ") -> str:
    """
    Join any ordered sequence into a single string.

    Args:
        items: Values to join, converted with str()
        separator: Text placed between items (never after the last one)

    Returns:
        Joined string, empty for an empty sequence
    """
    return separator.join(str(item) for item in items)


def addr_string(addresses: Iterable[Any]) -> str:
    """Comma-space joined IP addresses"""
    return join_with_separator(addresses)
