# ringer/engine/report.py
from ringer.engine.state import RunStatistics, whole_ms
from ringer.schemas import AttemptResult


def banner(target: str, payload_size: int) -> str:
    return f"ringing {target} with {payload_size} bytes of data:"


def attempt_line(result: AttemptResult, target: str, payload_size: int, ttl: int) -> str:
    if result.get("status") == "reply":
        return f"Reply from {target}: bytes={payload_size} time={whole_ms(result['rtt_ns'])}ms TTL={ttl}"
    return "Request timed out."


def summary_lines(stats: RunStatistics, target: str) -> list[str]:
    lines = [
        "",
        f"ring statistics for {target}:",
        f"    Packets: Sent = {stats.sent}, Received = {stats.received}, "
        f"Lost = {stats.lost} ({stats.loss_percent:.0f}% loss),",
    ]
    if stats.received > 0:
        lines.append("Approximate round trip times in milli-seconds:")
        lines.append(
            f"    Minimum = {stats.min_ms}ms, Maximum = {stats.max_ms}ms, "
            f"Average = {stats.average_ms}ms"
        )
    return lines
