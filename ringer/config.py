# ringer/config.py
import ipaddress
from dataclasses import dataclass

DEFAULT_COUNT = 4
DEFAULT_PAYLOAD_SIZE = 56
DEFAULT_TIMEOUT_MS = 1000
DEFAULT_TTL = 128
DEFAULT_INTERVAL_MS = 1000

@dataclass(frozen=True)
class ProbeRequest:
    target: str                       # resolved IP literal, v4 or v6
    count: int = DEFAULT_COUNT
    payload_size: int = DEFAULT_PAYLOAD_SIZE
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    ttl: int = DEFAULT_TTL
    continuous: bool = False

    # pause between attempts; the CLI always uses the default
    interval_ms: int = DEFAULT_INTERVAL_MS

    def __post_init__(self):
        ipaddress.ip_address(self.target)       # ValueError unless an IP literal
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")
        if self.payload_size < 0:
            raise ValueError(f"payload size must be >= 0, got {self.payload_size}")
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout must be > 0 ms, got {self.timeout_ms}")
        if not 1 <= self.ttl <= 255:
            raise ValueError(f"ttl must be in 1..255, got {self.ttl}")
        if self.interval_ms < 0:
            raise ValueError(f"interval must be >= 0 ms, got {self.interval_ms}")

    @property
    def family(self) -> str:
        return "v6" if ipaddress.ip_address(self.target).version == 6 else "v4"
