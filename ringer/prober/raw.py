# ringer/prober/raw.py
import logging
import socket

from ringer.errors import SocketCreationError
from ringer.prober.base import Transport
from ringer.schemas import Family

log = logging.getLogger(__name__)

RECV_BUFSIZE = 65535

# (domain, protocol, [(level, option), ...] used to apply the TTL / hop limit)
_FAMILIES = {
    "v4": (socket.AF_INET, socket.IPPROTO_ICMP,
           [(socket.IPPROTO_IP, socket.IP_TTL),
            (socket.IPPROTO_IP, socket.IP_MULTICAST_TTL)]),
    "v6": (socket.AF_INET6, socket.IPPROTO_ICMPV6,
           [(socket.IPPROTO_IPV6, socket.IPV6_UNICAST_HOPS),
            (socket.IPPROTO_IPV6, socket.IPV6_MULTICAST_HOPS)]),
}


class RawSocketTransport(Transport):
    """Transport over an already configured raw ICMP socket. Owns the socket."""

    def __init__(self, sock: socket.socket):
        self.sock = sock

    def send(self, packet: bytes, destination: str) -> None:
        # port is meaningless for raw sockets but sendto wants an address tuple
        self.sock.sendto(packet, (destination, 0))

    def receive_with_timeout(self, timeout_ms: int) -> bytes:
        self.sock.settimeout(timeout_ms / 1000.0)
        data, _addr = self.sock.recvfrom(RECV_BUFSIZE)
        return data

    def close(self) -> None:
        self.sock.close()


def open_probe_socket(family: Family, ttl: int, timeout_ms: int) -> RawSocketTransport:
    """
    Open a raw ICMP/ICMPv6 socket with the read/write timeout and the outgoing
    TTL (hop limit for v6) applied. Raises SocketCreationError if the socket
    can't be created (commonly missing CAP_NET_RAW) or configured.
    """
    if family not in _FAMILIES:
        raise SocketCreationError(f"unknown address family: {family!r}")
    domain, proto, ttl_options = _FAMILIES[family]

    try:
        sock = socket.socket(domain, socket.SOCK_RAW, proto)
    except PermissionError as e:
        raise SocketCreationError(
            f"{e}; raw sockets need root or CAP_NET_RAW on the interpreter"
        ) from e
    except OSError as e:
        raise SocketCreationError(str(e)) from e

    try:
        # settimeout bounds both recv and send
        sock.settimeout(timeout_ms / 1000.0)
        for level, option in ttl_options:
            sock.setsockopt(level, option, ttl)
    except (OSError, ValueError, OverflowError) as e:
        sock.close()
        raise SocketCreationError(f"could not configure socket: {e}") from e

    log.debug("opened raw %s socket ttl=%d timeout=%dms", family, ttl, timeout_ms)
    return RawSocketTransport(sock)
