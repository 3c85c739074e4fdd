"""
resolve-hostname - Batch Hostname Resolver

Resolves a batch of hostnames concurrently, optionally against a specific
DNS server, and performs reverse lookups on every address found.
"""

__version__ = "1.0.0"
__author__ = "resolve-hostname"
