"""Fixed-period sample/encode/emit loop."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from .config import INTERVAL_SECONDS
from .emitter import emit
from .encoder import encode
from .sampler import sample
from .snapshot import Snapshot
from .sources import MetricSource

logger = logging.getLogger(__name__)


class Scheduler:
    """Runs sampling cycles in the calling thread until stopped.

    Each cycle samples, encodes and hands the payload to *send*, then
    waits a fixed *interval* regardless of how long the cycle took. There
    is no catch-up for late cycles. :meth:`stop` may be called from a
    signal handler; it interrupts the wait and prevents the next cycle.

    A fatal sampling or send error propagates out of :meth:`run`.
    """

    def __init__(
        self,
        snapshot: Snapshot,
        source: MetricSource,
        send: Callable[[str], None] | None = None,
        interval: float = INTERVAL_SECONDS,
    ) -> None:
        self._snapshot = snapshot
        self._source = source
        self._send = send or self._send_udp
        self._interval = interval
        self._stop_event = threading.Event()
        self.cycles = 0

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def _send_udp(self, payload: str) -> None:
        emit(payload, self._snapshot.config.destination)

    def run_once(self) -> str:
        """Perform one sampling cycle and return the payload sent."""
        outcome = sample(self._snapshot, self._source)
        if outcome.fatal is not None:
            raise outcome.fatal
        payload = encode(self._snapshot)
        self._send(payload)
        self.cycles += 1
        logger.debug("Cycle %d payload:\n%s", self.cycles, payload.rstrip("\n"))
        return payload

    def run(self) -> None:
        """Cycle until :meth:`stop` is called."""
        logger.info("Scheduler started (interval=%.0fs)", self._interval)
        while not self._stop_event.is_set():
            self.run_once()
            if self._stop_event.is_set():
                break
            self._stop_event.wait(self._interval)
        logger.info("Scheduler stopped after %d cycles", self.cycles)

    def stop(self) -> None:
        self._stop_event.set()
