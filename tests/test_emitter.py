"""Tests for UDP emission."""

import socket

import pytest

from uptimed.emitter import emit
from uptimed.errors import EmitError


def test_emit_sends_single_datagram():
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as receiver:
        receiver.bind(("127.0.0.1", 0))
        receiver.settimeout(2.0)
        port = receiver.getsockname()[1]

        payload = "ns.host.load:25|g\nns.host.uptime:10|g\n"
        emit(payload, "127.0.0.1", port=port)

        data, _addr = receiver.recvfrom(65535)
        assert data == payload.encode("ascii")


def test_emit_unresolvable_destination():
    with pytest.raises(EmitError):
        emit("ns.host.load:25|g\n", "host.invalid", port=8125)


def test_emit_non_ascii_payload():
    with pytest.raises(EmitError):
        emit("ns.hôst.load:25|g\n", "127.0.0.1", port=8125)
