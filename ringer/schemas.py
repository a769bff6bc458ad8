# ringer/schemas.py
from typing import Literal, TypedDict, Optional

Family = Literal["v4", "v6"]
AttemptStatus = Literal["reply", "timeout"]

class AttemptResult(TypedDict, total=False):
    seq: int
    status: AttemptStatus
    rtt_ns: Optional[int]
    error: Optional[str]      # OS error text when the attempt failed for another reason
