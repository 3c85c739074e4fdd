import asyncio

from resolvehost.deadline import BatchDeadline
from resolvehost.errors import DNSError
from resolvehost.models import AddressFamily
from resolvehost.resolver import HostnameResolver, ReverseResolver

from conftest import FakeBackend


def _resolve(backend, reporter, hostname, family=AddressFamily.IPV4, timeout_ms=5000):
    resolver = HostnameResolver(backend, reporter)
    return asyncio.run(resolver.resolve(BatchDeadline(timeout_ms), family, hostname))


def test_resolve_success_reports_addresses_reverse_and_duration(backend, reporter):
    result = _resolve(backend, reporter, "example.com")

    assert result.ok
    assert result.addresses == ["93.184.216.34"]
    assert result.reverse[0].names == ["edge.example.net."]
    assert result.duration_ms is not None

    info = reporter.info_lines
    assert info[0].endswith("INFO: IP addresses for example.com: 93.184.216.34")
    assert info[1].endswith("INFO: Reverse for 93.184.216.34 (example.com): edge.example.net.")
    assert "INFO: Duration for resolving example.com: " in info[2]
    assert info[2].endswith(" ms")
    assert reporter.error_lines == []


def test_resolve_passes_family(backend, reporter):
    _resolve(backend, reporter, "example.com", family=AddressFamily.IPV6)
    assert backend.forward_calls == [(AddressFamily.IPV6, "example.com")]


def test_resolve_failure_stops_before_reverse(backend, reporter):
    result = _resolve(backend, reporter, "nonexistent.invalid")

    assert not result.ok
    assert result.error.not_found
    assert backend.reverse_calls == []
    assert reporter.info_lines == []
    assert len(reporter.error_lines) == 1
    assert reporter.error_lines[0].endswith(
        "ERROR: Failed to resolve: nonexistent.invalid: Error - 'no such host', was not found: true"
    )


def test_resolve_empty_address_set_still_reports_duration(backend, reporter):
    result = _resolve(backend, reporter, "empty.example")

    assert result.ok
    assert result.addresses == []
    assert backend.reverse_calls == []
    assert reporter.info_lines[0].endswith("INFO: IP addresses for empty.example:")
    assert "Duration for resolving empty.example" in reporter.info_lines[-1]


def test_resolve_unexpected_backend_error_is_contained(reporter):
    backend = FakeBackend(forward={"boom.example": RuntimeError("backend exploded")})

    result = _resolve(backend, reporter, "boom.example")

    assert not result.ok
    assert result.error.detail == "backend exploded"
    assert "was not found: false" in reporter.error_lines[0]


def test_reverse_failure_does_not_suppress_later_addresses(backend, reporter):
    result = _resolve(backend, reporter, "multi.example")

    assert backend.reverse_calls == ["10.0.0.1", "10.0.0.2"]
    first, second = result.reverse
    assert first.error is not None and first.names == []
    assert second.names == ["two.example.", "deux.example."]

    assert reporter.error_lines[0].endswith(
        "ERROR: Error performing reverse lookup for 10.0.0.1 (multi.example): "
        "Error - 'server misbehaving', was not found: false"
    )
    assert any(
        line.endswith("Reverse for 10.0.0.2 (multi.example): two.example., deux.example.")
        for line in reporter.info_lines
    )


def test_sentinel_only_address_is_skipped_with_info(backend, reporter):
    result = _resolve(backend, reporter, "blocked.example")

    assert backend.reverse_calls == []
    assert result.reverse[0].skipped
    assert reporter.error_lines == []
    assert any(
        line.endswith(
            "INFO: Ignoring attempt to resolve reverse for blocked.example "
            "as it previously resolved to 0.0.0.0"
        )
        for line in reporter.info_lines
    )


def test_sentinel_among_other_addresses(reporter):
    backend = FakeBackend(reverse={"10.0.0.9": ["nine.example."]})
    reverse = ReverseResolver(backend, reporter)

    results = asyncio.run(reverse.resolve_reverse(
        BatchDeadline(5000), ["0.0.0.0", "10.0.0.9", "::ffff:0.0.0.0"], "mixed.example"
    ))

    assert backend.reverse_calls == ["10.0.0.9"]
    assert [r.skipped for r in results] == [True, False, True]
    ignored = [line for line in reporter.info_lines if "Ignoring attempt" in line]
    assert len(ignored) == 2
    assert reporter.error_lines == []


def test_reverse_order_is_input_order(reporter):
    answers = {f"10.0.0.{i}": [f"h{i}.example."] for i in range(1, 6)}
    backend = FakeBackend(reverse=answers)
    reverse = ReverseResolver(backend, reporter)

    asyncio.run(reverse.resolve_reverse(BatchDeadline(5000), list(answers), "many.example"))

    assert backend.reverse_calls == list(answers)
    reported = [line.split("Reverse for ")[1].split(" ")[0] for line in reporter.info_lines]
    assert reported == list(answers)


def test_reverse_after_deadline_is_reported_as_error(reporter):
    backend = FakeBackend(forward={"late.example": ["10.0.0.1"]},
                          reverse={"10.0.0.1": ["x.example."]})
    reverse = ReverseResolver(backend, reporter)

    results = asyncio.run(reverse.resolve_reverse(BatchDeadline(0), ["10.0.0.1"], "late.example"))

    assert isinstance(results[0].error, DNSError)
    assert results[0].error.is_timeout
    assert "Error - 'deadline exceeded'" in reporter.error_lines[0]
