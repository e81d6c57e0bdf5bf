"""Concurrent DNS scans over a template's sequence space."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Protocol

from hns.application import naming
from hns.config import Settings
from hns.domain.entities import (
    ProbeResult,
    ScanItem,
    ScanResult,
    SequenceRange,
    Template,
    UsageReport,
)
from hns.domain.errors import (
    DiscoveryFailedError,
    ResolutionUnavailableError,
    TemplateNotFoundError,
    ValidationFailure,
)
from hns.domain.repositories import TemplateStore

USAGE_PREFIX_LENGTH = 2


class NameProbe(Protocol):
    async def check(self, hostname: str) -> ProbeResult: ...


class RangeScanner:
    """Probe rendered hostnames over a sequence range with bounded concurrency."""

    def __init__(
        self,
        template_store: TemplateStore,
        probe: NameProbe,
        *,
        max_concurrency: int = 10,
        discovery_window: int = 10,
        discovery_stride: int = 100,
        discovery_search_limit: int = 1000,
        discovery_miss_threshold: int = 10,
        logger: logging.Logger | None = None,
    ) -> None:
        self.template_store = template_store
        self.probe = probe
        self.max_concurrency = max_concurrency
        self.discovery_window = discovery_window
        self.discovery_stride = discovery_stride
        self.discovery_search_limit = discovery_search_limit
        self.discovery_miss_threshold = discovery_miss_threshold
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        template_store: TemplateStore,
        probe: NameProbe,
        *,
        logger: logging.Logger | None = None,
    ) -> "RangeScanner":
        return cls(
            template_store,
            probe,
            max_concurrency=settings.scan_max_concurrency,
            discovery_window=settings.discovery_window,
            discovery_stride=settings.discovery_stride,
            discovery_search_limit=settings.discovery_search_limit,
            discovery_miss_threshold=settings.discovery_miss_threshold,
            logger=logger,
        )

    async def scan(
        self,
        template_id: int,
        start_seq: int,
        end_seq: int,
        params: Mapping[str, str] | None = None,
        max_concurrency: int | None = None,
    ) -> ScanResult:
        """Probe every name of ``template_id`` between ``start_seq`` and ``end_seq``.

        A lookup that no server could answer is recorded as not existing with
        ``lookup_failed`` set. The scan itself only fails when every lookup
        failed or no name in the range could be rendered.
        """

        if template_id <= 0:
            raise ValidationFailure("Invalid template ID")
        if end_seq < start_seq:
            raise ValidationFailure(
                "End sequence must be greater than or equal to start sequence"
            )
        if max_concurrency is None or max_concurrency <= 0:
            max_concurrency = self.max_concurrency

        started = time.perf_counter()
        template = await self._load_template(template_id)
        result = ScanResult(template_id=template_id, template_name=template.name)
        lock = asyncio.Lock()
        render_errors: list[ValidationFailure] = []

        async def probe_sequence(sequence_number: int) -> None:
            try:
                hostname = naming.render(template, sequence_number, params, log=self.logger)
            except ValidationFailure as exc:
                self.logger.error(
                    "Failed to generate hostname for sequence %s: %s", sequence_number, exc
                )
                async with lock:
                    render_errors.append(exc)
                return

            try:
                outcome = await self.probe.check(hostname)
            except ResolutionUnavailableError as exc:
                self.logger.error("Failed to check hostname %s in DNS: %s", hostname, exc)
                item = ScanItem(
                    hostname=hostname,
                    sequence_num=sequence_number,
                    exists=False,
                    lookup_failed=True,
                )
            else:
                item = ScanItem(
                    hostname=hostname,
                    sequence_num=sequence_number,
                    exists=outcome.exists,
                    ip_address=outcome.ip_address,
                )

            async with lock:
                result.results.append(item)
                if item.exists:
                    result.existing_hostnames += 1
                if item.lookup_failed:
                    result.failed_lookups += 1

        await self._run_bounded(range(start_seq, end_seq + 1), probe_sequence, max_concurrency)

        result.total_hostnames = len(result.results)
        result.scan_duration = time.perf_counter() - started

        if not result.results and render_errors:
            raise render_errors[0]
        if result.results and result.failed_lookups == result.total_hostnames:
            raise ResolutionUnavailableError(
                f"All {result.total_hostnames} DNS lookups failed for template {template_id}"
            )

        self.logger.info(
            "Scanned %s hostnames for template %s: %s existing, %s failed lookups in %.3fs",
            result.total_hostnames,
            template_id,
            result.existing_hostnames,
            result.failed_lookups,
            result.scan_duration,
        )
        return result

    async def discover_range(
        self, template_id: int, params: Mapping[str, str] | None = None
    ) -> SequenceRange:
        """Find the contiguous block of sequence numbers currently in DNS.

        The search probes a small window after ``sequence_start``, then strides
        forward until a hit. From that hit it walks down while names exist and
        walks up until ``discovery_miss_threshold`` consecutive misses, so that
        sparse gaps do not end the range early. The bounds are heuristic.
        """

        template = await self._load_template(template_id)
        start = template.sequence_start

        window = range(start, start + self.discovery_window + 1)
        hits = await self._probe_many(template, window, params)
        if not hits:
            stride = range(
                start, start + self.discovery_search_limit + 1, self.discovery_stride
            )
            hits = await self._probe_many(template, stride, params)
        if not hits:
            raise DiscoveryFailedError(
                f"No existing hostnames found for template {template_id}"
            )

        lowest = highest = min(hits)

        number = lowest - 1
        while number >= start:
            if await self._exists(template, number, params) is not True:
                break
            lowest = number
            number -= 1

        misses = 0
        for number in range(highest + 1, highest + self.discovery_search_limit + 1):
            found = await self._exists(template, number, params)
            if found is None:
                break
            if found:
                highest = number
                misses = 0
                continue
            misses += 1
            if misses >= self.discovery_miss_threshold:
                break

        self.logger.info(
            "Discovered sequence range %s-%s for template %s", lowest, highest, template_id
        )
        return SequenceRange(low=lowest, high=highest)

    async def analyze_usage(
        self,
        template_id: int,
        sample_size: int,
        params: Mapping[str, str] | None = None,
    ) -> UsageReport:
        """Sample DNS usage of a template and bucket existing names by prefix."""

        if sample_size <= 0:
            raise ValidationFailure("Sample size must be positive")
        template = await self._load_template(template_id)
        if not template.groups:
            raise ValidationFailure(f"Template {template_id} has no groups")

        discovered = True
        try:
            found = await self.discover_range(template_id, params)
            low, high = found.low, found.high
        except DiscoveryFailedError:
            discovered = False
            low = template.sequence_start
            high = low + sample_size - 1

        if high - low + 1 > sample_size:
            high = low + sample_size - 1

        scan = await self.scan(template_id, low, high, params)
        buckets: dict[str, int] = {}
        for item in scan.results:
            if not item.exists:
                continue
            prefix = item.hostname[:USAGE_PREFIX_LENGTH].upper()
            buckets[prefix] = buckets.get(prefix, 0) + 1

        return UsageReport(
            template_id=template_id,
            low=low,
            high=high,
            range_discovered=discovered,
            sampled=scan.total_hostnames,
            existing=scan.existing_hostnames,
            buckets=buckets,
        )

    async def _run_bounded(
        self,
        sequence_numbers: Iterable[int],
        worker: Callable[[int], Awaitable[None]],
        max_concurrency: int,
    ) -> None:
        """Run ``worker`` for each number with at most ``max_concurrency`` in flight."""

        semaphore = asyncio.Semaphore(max_concurrency)

        async def guarded(number: int) -> None:
            try:
                await worker(number)
            finally:
                semaphore.release()

        tasks: list[asyncio.Task[None]] = []
        try:
            for number in sequence_numbers:
                await semaphore.acquire()
                tasks.append(asyncio.create_task(guarded(number)))
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _probe_many(
        self,
        template: Template,
        sequence_numbers: Iterable[int],
        params: Mapping[str, str] | None,
    ) -> set[int]:
        hits: set[int] = set()

        async def probe(number: int) -> None:
            if await self._exists(template, number, params):
                hits.add(number)

        await self._run_bounded(sequence_numbers, probe, self.max_concurrency)
        return hits

    async def _exists(
        self,
        template: Template,
        sequence_number: int,
        params: Mapping[str, str] | None,
    ) -> bool | None:
        """Return existence of one sequence number, ``None`` when it cannot be rendered."""

        try:
            hostname = naming.render(template, sequence_number, params, log=self.logger)
        except ValidationFailure:
            return None
        try:
            outcome = await self.probe.check(hostname)
        except ResolutionUnavailableError as exc:
            self.logger.warning("Treating %s as missing: %s", hostname, exc)
            return False
        return outcome.exists

    async def _load_template(self, template_id: int) -> Template:
        """Read the template off the event loop."""

        template = await asyncio.to_thread(self.template_store.get, template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template


__all__ = ["NameProbe", "RangeScanner"]
