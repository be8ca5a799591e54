"""Shared fixtures: an in-memory metric source and a ready snapshot."""

import pytest

from uptimed.config import TargetConfig
from uptimed.errors import FilesystemStatsError, MetricSourceError
from uptimed.snapshot import Snapshot
from uptimed.sources import MetricSource


class FakeSource(MetricSource):
    """Metric source whose readings are plain attributes.

    Set ``fail`` to the name of a read method to make it raise.
    """

    def __init__(self):
        self.hostname = "web1"
        self.rx = 100
        self.tx = 1000
        self.uptime = 3600.4
        self.mem = (1000, 200)
        self.load = 1.0
        self.cores = 4
        self.fs = (50, 200)
        self.fail = None
        self.calls = []

    def _read(self, name, value):
        self.calls.append(name)
        if self.fail == name:
            if name == "read_filesystem_blocks":
                raise FilesystemStatsError("Cannot access filesystem stats for /")
            raise MetricSourceError(f"{name} failed")
        return value

    def read_hostname(self):
        return self._read("read_hostname", self.hostname)

    def read_network_counter(self, interface, direction):
        return self._read("read_network_counter", self.rx if direction == "rx" else self.tx)

    def read_uptime_seconds(self):
        return self._read("read_uptime_seconds", self.uptime)

    def read_memory_totals(self):
        return self._read("read_memory_totals", self.mem)

    def read_load_average(self):
        return self._read("read_load_average", self.load)

    def read_core_count(self):
        return self._read("read_core_count", self.cores)

    def read_filesystem_blocks(self, path):
        return self._read("read_filesystem_blocks", self.fs)


@pytest.fixture
def source():
    return FakeSource()


@pytest.fixture
def config():
    return TargetConfig(
        destination="127.0.0.1",
        namespace="servers",
        filesystem="/",
        interface="eth0",
        hostname="web1",
    )


@pytest.fixture
def snapshot(config, source):
    return Snapshot.create(config, source)
