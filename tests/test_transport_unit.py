# tests/test_transport_unit.py
import socket

import pytest

from ringer.errors import SocketCreationError
from ringer.prober import raw
from ringer.prober.raw import RawSocketTransport, open_probe_socket


class RecordingSocket:
    """Stands in for socket.socket; records what the transport asks of it."""

    fail_option = None

    def __init__(self, family, type_, proto):
        self.args = (family, type_, proto)
        self.options = []
        self.timeouts = []
        self.sent = []
        self.closed = False
        self.inbox = [b"\x00" * 28]

    def settimeout(self, value):
        self.timeouts.append(value)

    def setsockopt(self, level, option, value):
        if option == self.fail_option:
            raise OSError(22, "Invalid argument")
        self.options.append((level, option, value))

    def sendto(self, data, addr):
        self.sent.append((data, addr))
        return len(data)

    def recvfrom(self, bufsize):
        if not self.inbox:
            raise socket.timeout("timed out")
        return self.inbox.pop(0), ("127.0.0.1", 0)

    def close(self):
        self.closed = True


@pytest.fixture
def recorder(monkeypatch):
    made = []

    def factory(*args):
        s = RecordingSocket(*args)
        made.append(s)
        return s

    monkeypatch.setattr(raw.socket, "socket", factory)
    monkeypatch.setattr(RecordingSocket, "fail_option", None)
    return made


def test_open_v4_socket_applies_timeout_and_ttl(recorder):
    transport = open_probe_socket("v4", 64, 1500)
    sock = recorder[0]
    assert sock.args == (socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    assert sock.timeouts == [1.5]
    assert (socket.IPPROTO_IP, socket.IP_TTL, 64) in sock.options
    assert (socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 64) in sock.options
    assert isinstance(transport, RawSocketTransport)


def test_open_v6_socket_sets_hop_limit(recorder):
    open_probe_socket("v6", 5, 1000)
    sock = recorder[0]
    assert sock.args == (socket.AF_INET6, socket.SOCK_RAW, socket.IPPROTO_ICMPV6)
    assert (socket.IPPROTO_IPV6, socket.IPV6_UNICAST_HOPS, 5) in sock.options


def test_permission_denied_is_socket_creation_error(monkeypatch):
    def deny(*args):
        raise PermissionError(1, "Operation not permitted")

    monkeypatch.setattr(raw.socket, "socket", deny)
    with pytest.raises(SocketCreationError, match="CAP_NET_RAW"):
        open_probe_socket("v4", 128, 1000)


def test_option_failure_closes_socket(recorder, monkeypatch):
    monkeypatch.setattr(RecordingSocket, "fail_option", socket.IP_TTL)
    with pytest.raises(SocketCreationError):
        open_probe_socket("v4", 128, 1000)
    assert recorder[0].closed


def test_unknown_family_rejected(recorder):
    with pytest.raises(SocketCreationError):
        open_probe_socket("ipx", 128, 1000)
    assert recorder == []


def test_transport_send_receive_and_close(recorder):
    with open_probe_socket("v4", 128, 1000) as transport:
        transport.send(b"ping", "127.0.0.1")
        assert transport.receive_with_timeout(250) == b"\x00" * 28
        with pytest.raises(TimeoutError):
            transport.receive_with_timeout(250)
    sock = recorder[0]
    assert sock.sent == [(b"ping", ("127.0.0.1", 0))]
    assert sock.timeouts[-1] == 0.25
    assert sock.closed
