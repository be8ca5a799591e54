"""Read accessors for the OS counters and gauges that uptimed reports."""

from __future__ import annotations

import abc
import logging
import socket
import time

import psutil

from .errors import FilesystemStatsError, MetricSourceError

logger = logging.getLogger(__name__)

DIRECTIONS = ("rx", "tx")


class MetricSource(abc.ABC):
    """Abstract interface over the host's metric sources.

    Every read is synchronous. Failures raise :class:`MetricSourceError`,
    except :meth:`read_filesystem_blocks` which raises the recoverable
    :class:`FilesystemStatsError`.
    """

    @abc.abstractmethod
    def read_hostname(self) -> str:
        """Short name this host reports under."""

    @abc.abstractmethod
    def read_network_counter(self, interface: str, direction: str) -> int:
        """Cumulative bytes received (``"rx"``) or sent (``"tx"``) on *interface*."""

    @abc.abstractmethod
    def read_uptime_seconds(self) -> float:
        """Seconds since boot."""

    @abc.abstractmethod
    def read_memory_totals(self) -> tuple[int, int]:
        """``(total, available)`` memory in kilobytes."""

    @abc.abstractmethod
    def read_load_average(self) -> float:
        """One minute load average."""

    @abc.abstractmethod
    def read_core_count(self) -> int:
        """Number of logical processors."""

    @abc.abstractmethod
    def read_filesystem_blocks(self, path: str) -> tuple[int, int]:
        """``(free, total)`` for the filesystem holding *path*."""


class PsutilMetricSource(MetricSource):
    """Reads metrics from the running host through psutil."""

    def read_hostname(self) -> str:
        try:
            hostname = socket.gethostname().strip()
        except OSError as exc:
            raise MetricSourceError(f"Unable to read hostname: {exc}") from exc
        if not hostname:
            raise MetricSourceError("Unable to read hostname: empty name")
        return hostname

    def read_network_counter(self, interface: str, direction: str) -> int:
        if direction not in DIRECTIONS:
            raise MetricSourceError(f"Unknown counter direction {direction!r}")
        try:
            counters = psutil.net_io_counters(pernic=True)
        except (OSError, psutil.Error) as exc:
            raise MetricSourceError(f"Unable to read network statistics: {exc}") from exc
        nio = counters.get(interface)
        if nio is None:
            raise MetricSourceError(
                f"Unable to read statistics from network interface {interface!r}"
            )
        return int(nio.bytes_recv if direction == "rx" else nio.bytes_sent)

    def read_uptime_seconds(self) -> float:
        # CLOCK_BOOTTIME is the kernel uptime counter; boot_time() is whole seconds.
        clock = getattr(time, "CLOCK_BOOTTIME", None)
        if clock is not None:
            try:
                return time.clock_gettime(clock)
            except OSError as exc:
                logger.debug("CLOCK_BOOTTIME unavailable (%s), using boot time", exc)
        try:
            boot_time = psutil.boot_time()
        except (OSError, psutil.Error) as exc:
            raise MetricSourceError(f"Unable to read uptime: {exc}") from exc
        return max(0.0, time.time() - boot_time)

    def read_memory_totals(self) -> tuple[int, int]:
        try:
            mem = psutil.virtual_memory()
        except (OSError, psutil.Error) as exc:
            raise MetricSourceError(f"Unable to read memory info: {exc}") from exc
        if mem.total <= 0:
            raise MetricSourceError("Unable to read memory info: total is zero")
        return mem.total // 1024, mem.available // 1024

    def read_load_average(self) -> float:
        try:
            load1, _load5, _load15 = psutil.getloadavg()
        except (OSError, psutil.Error) as exc:
            raise MetricSourceError(f"Unable to read load average: {exc}") from exc
        return float(load1)

    def read_core_count(self) -> int:
        cores = psutil.cpu_count(logical=True)
        if not cores:
            raise MetricSourceError("Unable to determine processor count")
        return cores

    def read_filesystem_blocks(self, path: str) -> tuple[int, int]:
        # disk_usage wraps statvfs(): free is f_bavail and total is f_blocks,
        # both scaled by the fragment size, so the ratio is unchanged.
        try:
            usage = psutil.disk_usage(path)
        except (OSError, ValueError, psutil.Error) as exc:
            raise FilesystemStatsError(
                f"Cannot access filesystem stats for {path}: {exc}"
            ) from exc
        if usage.total <= 0:
            raise FilesystemStatsError(f"Filesystem at {path} reports zero blocks")
        return usage.free, usage.total
