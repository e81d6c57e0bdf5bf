"""Tests for concurrent range scans, range discovery and usage analysis."""

import asyncio
import threading

import pytest

from helpers import FakeProbe, InMemoryTemplateStore, make_simple_template
from hns.application.services import RangeScanner
from hns.config import Settings
from hns.domain.errors import (
    DiscoveryFailedError,
    NameLengthExceededError,
    ResolutionUnavailableError,
    TemplateNotFoundError,
    ValidationFailure,
)


def _scanner(probe, template=None, **kwargs):
    template = template or make_simple_template()
    return RangeScanner(InMemoryTemplateStore(template), probe, **kwargs)


def test_scan_reports_each_sequence_with_bounded_concurrency():
    probe = FakeProbe(existing={"srv003", "srv007", "srv011"}, delay=0.01)
    scanner = _scanner(probe)

    result = asyncio.run(scanner.scan(1, 1, 20, max_concurrency=4))

    assert result.template_name == "servers"
    assert result.total_hostnames == 20
    assert result.existing_hostnames == 3
    assert result.failed_lookups == 0
    assert sorted(item.sequence_num for item in result.results) == list(range(1, 21))
    assert {item.hostname for item in result.results if item.exists} == probe.existing
    assert 1 < probe.max_in_flight <= 4
    assert result.scan_duration > 0


def test_scan_uses_default_concurrency_when_not_given():
    probe = FakeProbe(delay=0.01)
    scanner = _scanner(probe, max_concurrency=3)

    asyncio.run(scanner.scan(1, 1, 12, max_concurrency=0))

    assert probe.max_in_flight <= 3


def test_scan_rejects_inverted_range_and_bad_template_id():
    scanner = _scanner(FakeProbe())

    with pytest.raises(ValidationFailure):
        asyncio.run(scanner.scan(1, 10, 5))
    with pytest.raises(ValidationFailure):
        asyncio.run(scanner.scan(0, 1, 5))
    with pytest.raises(TemplateNotFoundError):
        asyncio.run(scanner.scan(7, 1, 5))


def test_scan_marks_failed_lookups_without_failing_the_scan():
    probe = FakeProbe(existing={"srv001"}, failing={"srv002"})
    scanner = _scanner(probe)

    result = asyncio.run(scanner.scan(1, 1, 3))

    failed = [item for item in result.results if item.lookup_failed]
    assert [item.hostname for item in failed] == ["srv002"]
    assert failed[0].exists is False
    assert result.failed_lookups == 1
    assert result.existing_hostnames == 1


def test_scan_fails_when_every_lookup_failed():
    probe = FakeProbe(failing={"srv001", "srv002"})

    with pytest.raises(ResolutionUnavailableError):
        asyncio.run(_scanner(probe).scan(1, 1, 2))


def test_scan_skips_sequences_that_cannot_be_rendered():
    template = make_simple_template(max_length=6)
    probe = FakeProbe(existing={"srv999"})
    scanner = _scanner(probe, template)

    result = asyncio.run(scanner.scan(1, 998, 1001))

    assert sorted(item.sequence_num for item in result.results) == [998, 999]
    assert result.existing_hostnames == 1

    with pytest.raises(NameLengthExceededError):
        asyncio.run(scanner.scan(1, 1000, 1001))


def test_discover_range_finds_contiguous_block_after_stride():
    existing = {f"srv{number:03d}" for number in range(100, 151)}
    probe = FakeProbe(existing=existing)
    scanner = _scanner(probe)

    found = asyncio.run(scanner.discover_range(1))

    assert (found.low, found.high) == (100, 150)


def test_discover_range_tolerates_sparse_gaps_below_miss_threshold():
    numbers = [3, 4, 5, 9, 12]
    probe = FakeProbe(existing={f"srv{number:03d}" for number in numbers})
    scanner = _scanner(probe, discovery_miss_threshold=4)

    found = asyncio.run(scanner.discover_range(1))

    assert (found.low, found.high) == (3, 12)


def test_discover_range_fails_without_any_hit():
    scanner = _scanner(FakeProbe(), discovery_search_limit=300)

    with pytest.raises(DiscoveryFailedError):
        asyncio.run(scanner.discover_range(1))


def test_scanner_takes_tunables_from_settings():
    settings = Settings(
        scan_max_concurrency=2,
        discovery_window=5,
        discovery_stride=50,
        discovery_search_limit=500,
        discovery_miss_threshold=3,
    )
    template = make_simple_template()

    scanner = RangeScanner.from_settings(settings, InMemoryTemplateStore(template), FakeProbe())

    assert scanner.max_concurrency == 2
    assert scanner.discovery_window == 5
    assert scanner.discovery_stride == 50
    assert scanner.discovery_search_limit == 500
    assert scanner.discovery_miss_threshold == 3


def test_analyze_usage_buckets_existing_names_by_prefix():
    existing = {f"srv{number:03d}" for number in range(10, 16)}
    probe = FakeProbe(existing=existing)
    scanner = _scanner(probe)

    report = asyncio.run(scanner.analyze_usage(1, sample_size=4))

    assert report.range_discovered is True
    assert (report.low, report.high) == (10, 13)
    assert report.sampled == 4
    assert report.existing == 4
    assert report.buckets == {"SR": 4}


def test_analyze_usage_samples_from_start_when_nothing_is_discovered():
    scanner = _scanner(FakeProbe(), discovery_search_limit=200)

    report = asyncio.run(scanner.analyze_usage(1, sample_size=5))

    assert report.range_discovered is False
    assert (report.low, report.high) == (1, 5)
    assert report.sampled == 5
    assert report.existing == 0
    assert report.buckets == {}


def test_analyze_usage_requires_positive_sample_size():
    with pytest.raises(ValidationFailure):
        asyncio.run(_scanner(FakeProbe()).analyze_usage(1, sample_size=0))


def test_cancelled_scan_stops_issuing_lookups_and_frees_slots():
    probe = FakeProbe(delay=0.05)
    scanner = _scanner(probe)

    async def scan_then_cancel() -> int:
        task = asyncio.create_task(scanner.scan(1, 1, 200, max_concurrency=4))
        await asyncio.sleep(0.12)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        calls_at_cancel = len(probe.calls)
        await asyncio.sleep(0.2)
        return calls_at_cancel

    calls_at_cancel = asyncio.run(scan_then_cancel())

    assert 0 < calls_at_cancel < 200
    assert len(probe.calls) == calls_at_cancel
    assert probe.in_flight == 0
    assert probe.max_in_flight <= 4


def test_scan_reads_template_off_the_event_loop_thread():
    store = InMemoryTemplateStore(make_simple_template())
    original_get = store.get
    reader_threads = []

    def recording_get(template_id):
        reader_threads.append(threading.get_ident())
        return original_get(template_id)

    store.get = recording_get

    async def scan_and_report_loop_thread() -> int:
        await RangeScanner(store, FakeProbe()).scan(1, 1, 2)
        return threading.get_ident()

    loop_thread = asyncio.run(scan_and_report_loop_thread())

    assert reader_threads
    assert loop_thread not in reader_threads
