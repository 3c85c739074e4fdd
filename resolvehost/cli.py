import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .backend import build_backend
from .batch import run_batch
from .errors import InvalidAddress, UsageError
from .models import AddressFamily
from .output import JsonExporter
from .reporter import Reporter


DEFAULT_TIMEOUT_MS = 1000  # this is a bit short for slow resolvers
DEFAULT_FAMILY = AddressFamily.IPV4.value

HELP_MSG = (
    "Resolve hostnames via a provided DNS address; cancel if not complete by timeout:\n"
    "Usage: resolve-hostname [-dnsserver dns-server-ip-addr] [-timeout timeout-duration-ms] "
    "[-iptype ip|ip4|ip6] <hostname1> <hostname2> ..."
)


def usage_exit(reporter: Reporter, message: Optional[str] = None):
    """Report a usage problem, print usage and exit 1"""
    if message:
        reporter.error(message)
    click.echo(HELP_MSG, err=True)
    sys.exit(1)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('hostnames', nargs=-1)
@click.option('-dnsserver', '--dns-server', 'dns_server', default='',
              help='The DNS server to use to resolve hostnames (default: system resolver)')
@click.option('-timeout', '--timeout', 'timeout_ms', default=DEFAULT_TIMEOUT_MS, type=int,
              help=f'Timeout in milliseconds for the whole batch (default: {DEFAULT_TIMEOUT_MS})')
@click.option('-iptype', '--ip-type', 'ip_type', default=DEFAULT_FAMILY,
              help=f'Address family to resolve: ip, ip4 or ip6 (default: {DEFAULT_FAMILY})')
@click.option('--json', 'json_path', type=click.Path(),
              help='Export results to JSON file')
@click.version_option(version=__version__)
def main(hostnames: tuple[str, ...], dns_server: str, timeout_ms: int,
         ip_type: str, json_path: Optional[str]):
    """
    resolve-hostname - resolve HOSTNAMES concurrently, then reverse
    every address found.

    All lookups share one deadline of -timeout milliseconds.

    Examples:

        resolve-hostname example.com

        resolve-hostname -dnsserver 8.8.8.8 -timeout 2000 example.com example.org

        resolve-hostname -iptype ip6 example.com --json out.json
    """
    reporter = Reporter()

    if timeout_ms < 0:
        usage_exit(reporter, f"Invalid value provided for timeout: {timeout_ms}")

    # only hostnames are required
    if not hostnames:
        usage_exit(reporter)

    try:
        family = AddressFamily.from_flag(ip_type)
    except UsageError as e:
        usage_exit(reporter, str(e))

    try:
        backend = build_backend(dns_server)
    except InvalidAddress as e:
        reporter.error(str(e))
        sys.exit(1)

    try:
        with backend:
            result = run_batch(
                backend, reporter, hostnames,
                timeout_ms=timeout_ms,
                family=family,
                dns_server=dns_server or None
            )
    except KeyboardInterrupt:
        reporter.error("Interrupted")
        sys.exit(130)

    if json_path:
        exporter = JsonExporter(resolver=backend.description)
        json_file = Path(json_path)
        exporter.export(result, json_file)
        reporter.info("Results exported to: %s", json_file.absolute())


if __name__ == '__main__':
    main()
