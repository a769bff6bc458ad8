# ringer/resolve.py
import ipaddress
import logging
import socket

from ringer.errors import ResolutionError

log = logging.getLogger(__name__)


def resolve_target(target: str) -> str:
    """
    Return target as an IP literal. Hostnames are looked up and the first
    IPv4 address wins; an IPv6 address is used only when no IPv4 one exists.
    """
    try:
        return str(ipaddress.ip_address(target))
    except ValueError:
        pass

    try:
        infos = socket.getaddrinfo(target, 0)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(f"Failed to resolve domain: {e}") from e

    v4 = None
    v6 = None
    for family, _type, _proto, _canon, sockaddr in infos:
        if family == socket.AF_INET and v4 is None:
            v4 = sockaddr[0]
        elif family == socket.AF_INET6 and v6 is None:
            v6 = sockaddr[0]

    ip = v4 or v6
    if ip is None:
        raise ResolutionError("No valid IP address found.")
    log.debug("resolved %s -> %s", target, ip)
    return ip
