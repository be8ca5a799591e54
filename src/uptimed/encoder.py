"""statsd gauge rendering.

See https://github.com/statsd/statsd/blob/master/docs/metric_types.md.
Everything is a gauge: deltas are computed here, not by the collector.
"""

from __future__ import annotations

from .snapshot import Snapshot

# Wire name and Metrics attribute, in emission order.
GAUGES = (
    ("net-rx", "net_rx"),
    ("net-tx", "net_tx"),
    ("uptime", "uptime"),
    ("availmem", "avail_mem"),
    ("diskfree", "disk_free"),
    ("load", "load"),
)


def format_gauge(name: str, value: int) -> str:
    return f"{name}:{value}|g\n"


def encode(snapshot: Snapshot) -> str:
    """Render the snapshot's current metrics as six gauge lines."""
    prefix = snapshot.config.prefix
    metrics = snapshot.metrics
    return "".join(
        format_gauge(f"{prefix}.{wire_name}", int(getattr(metrics, attr)))
        for wire_name, attr in GAUGES
    )
