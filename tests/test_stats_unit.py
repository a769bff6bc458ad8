# tests/test_stats_unit.py
from ringer.engine.report import attempt_line, banner, summary_lines
from ringer.engine.state import RunStatistics

MS = 1_000_000


def reply(ms):
    return {"status": "reply", "rtt_ns": ms * MS}


TIMEOUT = {"status": "timeout", "rtt_ns": None}


def test_statistics_mixed_outcomes():
    stats = RunStatistics()
    for r in [reply(10), TIMEOUT, reply(30), reply(20)]:
        stats.record(r)

    assert stats.sent == 4
    assert stats.received == 3
    assert stats.lost == 1
    assert stats.loss_percent == 25.0
    assert stats.min_ms == 10
    assert stats.max_ms == 30
    assert stats.average_ms == 20


def test_statistics_average_is_integer_division():
    stats = RunStatistics()
    for r in [reply(1), reply(2)]:
        stats.record(r)
    assert stats.average_ms == 1


def test_statistics_sub_millisecond_rtts_truncate():
    stats = RunStatistics()
    stats.record({"status": "reply", "rtt_ns": 900_000})
    assert stats.min_ms == 0
    assert stats.max_ms == 0
    assert stats.average_ms == 0


def test_zero_attempts_no_division_by_zero():
    stats = RunStatistics()
    assert stats.loss_percent == 0.0
    assert stats.average_ms is None
    lines = summary_lines(stats, "10.0.0.1")
    assert "    Packets: Sent = 0, Received = 0, Lost = 0 (0% loss)," in lines
    assert not any("Minimum" in line for line in lines)


def test_all_timeouts_skip_rtt_summary():
    stats = RunStatistics()
    stats.record(TIMEOUT)
    stats.record(TIMEOUT)
    lines = summary_lines(stats, "10.0.0.1")
    assert lines[2].endswith("Lost = 2 (100% loss),")
    assert len(lines) == 3


def test_summary_lines_with_replies():
    stats = RunStatistics()
    for r in [reply(10), TIMEOUT, reply(30), reply(20)]:
        stats.record(r)
    assert summary_lines(stats, "192.0.2.1") == [
        "",
        "ring statistics for 192.0.2.1:",
        "    Packets: Sent = 4, Received = 3, Lost = 1 (25% loss),",
        "Approximate round trip times in milli-seconds:",
        "    Minimum = 10ms, Maximum = 30ms, Average = 20ms",
    ]


def test_attempt_and_banner_lines():
    assert banner("example.com", 56) == "ringing example.com with 56 bytes of data:"
    assert attempt_line(reply(12), "192.0.2.1", 56, 128) == \
        "Reply from 192.0.2.1: bytes=56 time=12ms TTL=128"
    assert attempt_line(TIMEOUT, "192.0.2.1", 56, 128) == "Request timed out."
