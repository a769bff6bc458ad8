# ringer/codec/icmp.py
import random
import struct
from typing import Callable, Optional

from ringer.schemas import Family

ICMP_ECHO_REQUEST = 8
ICMPV6_ECHO_REQUEST = 128
HEADER_SIZE = 8

# only one request is ever in flight, so a constant pair is enough
IDENTIFIER = 1
SEQUENCE = 1

PayloadSource = Callable[[int], bytes]

_ECHO_TYPES = {"v4": ICMP_ECHO_REQUEST, "v6": ICMPV6_ECHO_REQUEST}


def checksum(data: bytes) -> int:
    """
    RFC 1071 Internet checksum: one's complement of the one's complement sum
    of big-endian 16-bit words. A trailing odd byte is the high byte of a
    zero-padded word.
    """
    if len(data) % 2:
        data = bytes(data) + b"\x00"
    total = sum(struct.unpack("!%dH" % (len(data) // 2), data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def verify_checksum(packet: bytes) -> bool:
    """True if the checksum stored in the packet matches its contents."""
    return checksum(packet) == 0


def build_echo_request(payload_size: int, family: Family,
                       payload_source: Optional[PayloadSource] = None) -> bytes:
    """
    Build an Echo Request of HEADER_SIZE + payload_size bytes for the given
    family, with a valid checksum. The payload is filler and is not checked
    on the way back.
    """
    if payload_size < 0:
        raise ValueError(f"payload size must be >= 0, got {payload_size}")
    if family not in _ECHO_TYPES:
        raise ValueError(f"unknown address family: {family!r}")

    source = payload_source or random.randbytes
    payload = source(payload_size)
    if len(payload) != payload_size:
        raise ValueError(f"payload source returned {len(payload)} bytes, wanted {payload_size}")

    packet = bytearray(struct.pack("!BBHHH", _ECHO_TYPES[family], 0, 0, IDENTIFIER, SEQUENCE))
    packet += payload
    struct.pack_into("!H", packet, 2, checksum(packet))
    return bytes(packet)
