# ringer/prober/fake.py
from collections import deque

from ringer.prober.base import Transport


class FakeTransport(Transport):
    """
    script: iterable of RTTs in milliseconds, one per attempt; None means the
    attempt times out. Once the script runs dry every attempt answers after
    default_rtt_ms (or times out if that is None).

    Time is virtual: clock() returns nanoseconds that only move when a
    receive is simulated, so pass it to the controller for exact timings.
    """

    def __init__(self, script=None, default_rtt_ms=50):
        self.script = deque(script or [])
        self.default_rtt_ms = default_rtt_ms
        self.now_ns = 0
        self.sent = []          # (packet, destination) in send order
        self.closed = False

    def clock(self) -> int:
        return self.now_ns

    def send(self, packet: bytes, destination: str) -> None:
        self.sent.append((packet, destination))

    def receive_with_timeout(self, timeout_ms: int) -> bytes:
        rtt_ms = self.script.popleft() if self.script else self.default_rtt_ms
        if rtt_ms is None or rtt_ms > timeout_ms:
            self.now_ns += timeout_ms * 1_000_000
            raise TimeoutError("timed out")
        self.now_ns += int(rtt_ms * 1_000_000)
        # content is never inspected, hand back whatever was last sent
        return self.sent[-1][0] if self.sent else b""

    def close(self) -> None:
        self.closed = True
