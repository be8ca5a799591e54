"""UDP delivery of encoded payloads to a statsd server."""

from __future__ import annotations

import logging
import socket

from .config import STATSD_PORT
from .errors import EmitError

logger = logging.getLogger(__name__)


def emit(payload: str, destination: str, port: int = STATSD_PORT) -> None:
    """Send *payload* as a single datagram to ``destination:port``.

    A new socket on an ephemeral local port is used for every call and
    closed before returning. Nothing is awaited back.
    """
    try:
        data = payload.encode("ascii")
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind(("0.0.0.0", 0))
            sock.sendto(data, (destination, port))
    except (OSError, UnicodeEncodeError) as exc:
        raise EmitError(f"Couldn't send data to {destination}:{port}: {exc}") from exc
    logger.debug("Sent %d bytes to %s:%d", len(data), destination, port)
