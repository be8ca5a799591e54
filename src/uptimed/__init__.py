"""uptimed - report host uptime, memory, load, disk and network gauges to statsd."""

__version__ = "0.1.0"
