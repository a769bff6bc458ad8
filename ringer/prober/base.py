# ringer/prober/base.py
from abc import ABC, abstractmethod


class Transport(ABC):
    """
    What the engine needs from the network: push one packet out and wait a
    bounded time for anything to come back.
    """

    @abstractmethod
    def send(self, packet: bytes, destination: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def receive_with_timeout(self, timeout_ms: int) -> bytes:
        """Return the next datagram, or raise TimeoutError if none arrives in time."""
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
