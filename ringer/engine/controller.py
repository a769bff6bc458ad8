# ringer/engine/controller.py

import logging
import time
from typing import Callable, Optional

from ringer.codec.icmp import PayloadSource, build_echo_request
from ringer.config import ProbeRequest
from ringer.engine.report import attempt_line, summary_lines
from ringer.engine.state import RunStatistics
from ringer.prober.base import Transport
from ringer.prober.raw import open_probe_socket
from ringer.schemas import AttemptResult

log = logging.getLogger(__name__)


def send_and_wait(transport: Transport, packet: bytes, destination: str,
                  timeout_ms: int, clock: Callable[[], int] = time.monotonic_ns) -> AttemptResult:
    """
    Send one packet and block for at most timeout_ms on a single receive.
    Whatever arrives first counts as the reply; nothing is matched against
    the request. Any send/receive failure is reported as a timeout.
    """
    start = clock()
    try:
        transport.send(packet, destination)
        transport.receive_with_timeout(timeout_ms)
    except TimeoutError:
        return {"status": "timeout", "rtt_ns": None}
    except OSError as e:
        return {"status": "timeout", "rtt_ns": None, "error": str(e)}
    return {"status": "reply", "rtt_ns": clock() - start}


class ProbeController:
    def __init__(self, transport: Transport, request: ProbeRequest,
                 payload_source: Optional[PayloadSource] = None,
                 clock: Callable[[], int] = time.monotonic_ns,
                 sleep: Optional[Callable[[float], None]] = None):
        self.transport = transport
        self.req = request
        self.payload_source = payload_source
        self.clock = clock
        self.sleep = sleep or time.sleep
        self.stats = RunStatistics()

    def _more(self, seq: int) -> bool:
        return self.req.continuous or seq < self.req.count

    def run(self) -> RunStatistics:
        req = self.req
        packet = build_echo_request(req.payload_size, req.family, self.payload_source)

        seq = 0
        try:
            while self._more(seq):
                seq += 1
                result = send_and_wait(self.transport, packet, req.target, req.timeout_ms, self.clock)
                result["seq"] = seq
                self.stats.record(result)
                if result.get("error"):
                    log.debug("attempt %d to %s failed: %s", result["seq"], req.target, result["error"])
                print(attempt_line(result, req.target, req.payload_size, req.ttl))

                # no pause after the last bounded attempt
                if self._more(seq):
                    self.sleep(req.interval_ms / 1000.0)
        except KeyboardInterrupt:
            # Ctrl-C is how continuous mode ends; still report what we have
            log.debug("interrupted after %d attempts", self.stats.sent)

        for line in summary_lines(self.stats, req.target):
            print(line)
        return self.stats


def ring(request: ProbeRequest, payload_source: Optional[PayloadSource] = None) -> RunStatistics:
    """Run a whole probe session over one raw socket, released when the run ends."""
    with open_probe_socket(request.family, request.ttl, request.timeout_ms) as transport:
        return ProbeController(transport, request, payload_source=payload_source).run()
