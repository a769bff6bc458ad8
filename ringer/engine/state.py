# ringer/engine/state.py
from dataclasses import dataclass

from ringer.schemas import AttemptResult

NS_PER_MS = 1_000_000


def whole_ms(ns: int) -> int:
    return ns // NS_PER_MS


@dataclass
class RunStatistics:
    sent: int = 0
    received: int = 0
    min_rtt_ns: int | None = None
    max_rtt_ns: int = 0
    total_rtt_ns: int = 0

    def record(self, result: AttemptResult) -> None:
        self.sent += 1
        if result.get("status") != "reply":
            return
        rtt = result["rtt_ns"]
        self.received += 1
        self.total_rtt_ns += rtt
        self.max_rtt_ns = max(self.max_rtt_ns, rtt)
        self.min_rtt_ns = rtt if self.min_rtt_ns is None else min(self.min_rtt_ns, rtt)

    @property
    def lost(self) -> int:
        return self.sent - self.received

    @property
    def loss_percent(self) -> float:
        if self.sent == 0:
            return 0.0
        return 100.0 * self.lost / self.sent

    @property
    def min_ms(self) -> int | None:
        return None if self.min_rtt_ns is None else whole_ms(self.min_rtt_ns)

    @property
    def max_ms(self) -> int | None:
        return whole_ms(self.max_rtt_ns) if self.received else None

    @property
    def average_ms(self) -> int | None:
        # truncate the total first, then integer-divide
        if not self.received:
            return None
        return whole_ms(self.total_rtt_ns) // self.received
