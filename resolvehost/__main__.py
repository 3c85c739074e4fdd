"""
resolve-hostname - Batch Hostname Resolver

Entry point for running as a module:
    python -m resolvehost <hostname> [<hostname> ...]
"""

from .cli import main

if __name__ == '__main__':
    main()
