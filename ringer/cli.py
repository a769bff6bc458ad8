# ringer/cli.py
# Usage examples:
#   sudo ring 8.8.8.8
#   sudo ring example.com -c 5 -s 64 -w 1000 -ttl 64
#   sudo ring ::1 -t
#   ring fake -c 3          (scripted transport, no privileges needed)

import argparse
import logging
import sys

from ringer.config import (
    DEFAULT_COUNT, DEFAULT_PAYLOAD_SIZE, DEFAULT_TIMEOUT_MS, DEFAULT_TTL, ProbeRequest,
)
from ringer.engine.controller import ProbeController, ring
from ringer.engine.report import banner
from ringer.errors import ResolutionError, SocketCreationError
from ringer.resolve import resolve_target

FAKE_TARGET = "fake"
FAKE_ADDRESS = "127.0.0.1"


NUMERIC_FLAGS = {"-c": "count", "-s": "size", "-w": "timeout", "-ttl": "ttl"}
SWITCHES = ("-t", "-v", "--verbose")


def int_option(value, default: int, lo: int | None = None, hi: int | None = None) -> int:
    """Parse a numeric flag; anything missing, malformed or out of range gives the default."""
    try:
        num = int(value)
    except (TypeError, ValueError):
        return default
    if (lo is not None and num < lo) or (hi is not None and num > hi):
        return default
    return num


def take_numeric_flags(argv):
    """
    Pull -c/-s/-w/-ttl out of argv together with the token that follows each.
    That token is taken as is, even when it starts with '-', so a value like
    '-5x' falls back to the default later instead of being rejected as an
    unknown option. A flag followed by another flag (or nothing) has no value.
    """
    rest, values = [], {}
    i = 0
    while i < len(argv):
        tok = argv[i]
        if tok not in NUMERIC_FLAGS:
            rest.append(tok)
            i += 1
            continue
        nxt = argv[i + 1] if i + 1 < len(argv) else None
        if nxt is None or nxt in NUMERIC_FLAGS or nxt in SWITCHES:
            values[NUMERIC_FLAGS[tok]] = None
            i += 1
        else:
            values[NUMERIC_FLAGS[tok]] = nxt
            i += 2
    return rest, values


def build_argparser():
    ap = argparse.ArgumentParser(prog="ring", allow_abbrev=False,
                                 description="Send ICMP echo requests and report round-trip times")
    ap.add_argument("target", nargs="?", help="Destination host/IP (or 'fake' for a scripted run)")
    # values are normally filled in by take_numeric_flags; these entries give -h its text
    ap.add_argument("-c", dest="count", nargs="?", help=f"Number of echo requests (default {DEFAULT_COUNT})")
    ap.add_argument("-s", dest="size", nargs="?", help=f"Payload size in bytes (default {DEFAULT_PAYLOAD_SIZE})")
    ap.add_argument("-w", dest="timeout", nargs="?", help=f"Per-reply timeout in ms (default {DEFAULT_TIMEOUT_MS})")
    ap.add_argument("-ttl", dest="ttl", nargs="?", help=f"TTL / hop limit (default {DEFAULT_TTL})")
    ap.add_argument("-t", dest="continuous", action="store_true", help="Ring until interrupted (overrides -c)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def parse_args(ap, argv=None):
    if argv is None:
        argv = sys.argv[1:]
    rest, values = take_numeric_flags(list(argv))
    args = ap.parse_args(rest)
    for dest, raw in values.items():
        setattr(args, dest, raw)
    return args


def build_request(args, address: str) -> ProbeRequest:
    return ProbeRequest(
        target=address,
        count=int_option(args.count, DEFAULT_COUNT, lo=0),
        payload_size=int_option(args.size, DEFAULT_PAYLOAD_SIZE, lo=0),
        timeout_ms=int_option(args.timeout, DEFAULT_TIMEOUT_MS, lo=1),
        ttl=int_option(args.ttl, DEFAULT_TTL, lo=1, hi=255),
        continuous=args.continuous,
    )


def run_with_fake(args) -> int:
    from ringer.prober.fake import FakeTransport
    fake = FakeTransport()
    req = build_request(args, FAKE_ADDRESS)
    print(banner(FAKE_ADDRESS, req.payload_size))
    ProbeController(fake, req, clock=fake.clock).run()
    return 0


def run_with_socket(args) -> int:
    size = int_option(args.size, DEFAULT_PAYLOAD_SIZE, lo=0)
    print(banner(args.target, size))
    try:
        address = resolve_target(args.target)
    except ResolutionError as e:
        print(f"Invalid target address: {e}")
        return 1
    try:
        ring(build_request(args, address))
    except SocketCreationError as e:
        print(f"Failed to create socket: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    ap = build_argparser()
    args = parse_args(ap, argv)
    if not args.target:
        ap.error("Provide a target (e.g., 8.8.8.8) or 'fake'")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.target == FAKE_TARGET:
        return run_with_fake(args)
    return run_with_socket(args)


if __name__ == "__main__":
    sys.exit(main())
