"""
JSON export for resolve-hostname
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..errors import DNSError
from ..models import BatchResult, HostResolution, ReverseResult
from .. import __version__


class JsonExporter:
    """
    Export batch results to JSON format.

    Output format is designed to be both human-readable
    and machine-parseable.
    """

    def __init__(self, resolver: Optional[str] = None):
        self.resolver = resolver

    def export(self, result: BatchResult, output_path: Optional[Path] = None) -> dict:
        """
        Export batch result to JSON.

        Args:
            result: Batch result
            output_path: Optional file path to write

        Returns:
            JSON-serializable dict
        """
        data = {
            "meta": {
                "version": __version__,
                "generator": "resolve-hostname",
                "resolver": self.resolver or "system resolver",
                "generated_at": datetime.now().isoformat()
            },
            "hostnames": result.hostnames,
            "ip_type": result.family.value,
            "dns_server": result.dns_server,
            "timeout_ms": result.timeout_ms,
            "timestamp": result.timestamp.isoformat(),
            "summary": {
                "total_ms": result.total_ms,
                "deadline_exceeded": result.deadline_exceeded,
                "resolved": len(result.hosts) - len(result.failed),
                "failed": len(result.failed)
            },
            "hosts": [self._serialize_host(host) for host in result.hosts]
        }

        if output_path:
            self._write_file(data, output_path)

        return data

    def _serialize_host(self, host: HostResolution) -> dict:
        """Serialize a single hostname"""
        return {
            "hostname": host.hostname,
            "addresses": host.addresses,
            "reverse": [self._serialize_reverse(r) for r in host.reverse],
            "error": self._serialize_error(host.error) if host.error else None,
            "duration_ms": host.duration_ms
        }

    def _serialize_reverse(self, reverse: ReverseResult) -> dict:
        return {
            "address": reverse.address,
            "names": reverse.names,
            "skipped": reverse.skipped,
            "error": self._serialize_error(reverse.error) if reverse.error else None
        }

    def _serialize_error(self, error: DNSError) -> dict:
        return {
            "detail": error.detail,
            "not_found": error.not_found,
            "timeout": error.is_timeout,
            "server": error.server
        }

    def _write_file(self, data: dict, path: Path):
        """Write JSON to file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
