"""Turns raw source readings into the six published gauges."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .errors import FilesystemStatsError, MetricSourceError
from .snapshot import Metrics, Snapshot
from .sources import MetricSource

logger = logging.getLogger(__name__)


@dataclass
class SampleOutcome:
    """Result of one sampling tick.

    ``fatal`` is set when a required source failed; the snapshot's
    metrics are then left as they were. ``warnings`` lists recoverable
    problems that were worked around during the tick.
    """

    fatal: MetricSourceError | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.fatal is None


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def counter_delta(current: int, baseline: int) -> int | None:
    """Bytes moved since *baseline*, or None if the counter went backwards."""
    if current < baseline:
        return None
    return current - baseline


def percentage(part: float, whole: float) -> int:
    return round_half_up(part / whole * 100)


def scaled_load(load_avg: float, cores: int) -> int:
    """Load average times 100 per core; 100 is roughly saturation."""
    return round_half_up(load_avg * 100 / cores)


def sample(snapshot: Snapshot, source: MetricSource) -> SampleOutcome:
    """Read every source once and update *snapshot* in place."""
    outcome = SampleOutcome()
    config = snapshot.config
    try:
        rx = source.read_network_counter(config.interface, "rx")
        tx = source.read_network_counter(config.interface, "tx")
        uptime = source.read_uptime_seconds()
        mem_total, mem_avail = source.read_memory_totals()
        load_avg = source.read_load_average()
        cores = source.read_core_count()
    except MetricSourceError as exc:
        outcome.fatal = exc
        return outcome

    if mem_total <= 0:
        outcome.fatal = MetricSourceError("Memory total reported as zero")
        return outcome
    if cores <= 0:
        outcome.fatal = MetricSourceError("Processor count reported as zero")
        return outcome

    metrics = Metrics()
    deltas = []
    for direction, current, baseline in (
        ("rx", rx, snapshot.last_rx),
        ("tx", tx, snapshot.last_tx),
    ):
        delta = counter_delta(current, baseline)
        if delta is None:
            message = (
                f"{config.interface} {direction} counter went backwards "
                f"({baseline} -> {current}); resetting baseline"
            )
            logger.warning(message)
            outcome.warnings.append(message)
            delta = 0
        deltas.append(delta)
    metrics.net_rx, metrics.net_tx = deltas
    snapshot.last_rx = rx
    snapshot.last_tx = tx

    metrics.uptime = round_half_up(uptime)
    metrics.avail_mem = percentage(mem_avail, mem_total)
    metrics.load = scaled_load(load_avg, cores)

    try:
        free, total = source.read_filesystem_blocks(config.filesystem)
        if total <= 0:
            raise FilesystemStatsError(f"Filesystem at {config.filesystem} reports zero blocks")
        metrics.disk_free = percentage(free, total)
    except FilesystemStatsError as exc:
        logger.warning("%s; reporting diskfree as 0", exc)
        outcome.warnings.append(str(exc))
        metrics.disk_free = 0

    snapshot.metrics = metrics
    return outcome
