"""Sampler state: configuration, counter baselines and current gauges."""

from __future__ import annotations

from dataclasses import dataclass

from .config import TargetConfig
from .sources import MetricSource


@dataclass
class Metrics:
    """Values published on the next emission, all whole numbers."""

    net_rx: int = 0
    net_tx: int = 0
    uptime: int = 0
    avail_mem: int = 0
    disk_free: int = 0
    load: int = 0


@dataclass
class Snapshot:
    """The one stateful object of a running sampler.

    ``config`` never changes. ``last_rx``/``last_tx`` hold the counter
    readings the next network deltas are measured against, and
    ``metrics`` is overwritten in place on every tick.
    """

    config: TargetConfig
    last_rx: int
    last_tx: int
    metrics: Metrics

    @classmethod
    def create(cls, config: TargetConfig, source: MetricSource) -> Snapshot:
        """Read the initial network baselines. This is not a sampling tick."""
        return cls(
            config=config,
            last_rx=source.read_network_counter(config.interface, "rx"),
            last_tx=source.read_network_counter(config.interface, "tx"),
            metrics=Metrics(),
        )
