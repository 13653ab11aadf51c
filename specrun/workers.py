import math
import os
import re
from typing import Optional

from .exceptions import InvalidWorkerCountError

AUTO = "auto"
# plain decimal notation, so `1_000` and padded values are rejected
_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _auto_worker_count(cpu_count: Optional[int]) -> int:
    if cpu_count is None:
        cpu_count = os.cpu_count() or 1
    # leave one core for the controller process
    return max(1, cpu_count - 1)


def resolve_worker_count(value: str, cpu_count: Optional[int] = None) -> int:
    if value == AUTO:
        return _auto_worker_count(cpu_count)

    if _NUMBER.fullmatch(value) is None:
        raise InvalidWorkerCountError()

    num = float(value)
    if not math.isfinite(num) or num < 2 or num != math.floor(num):
        raise InvalidWorkerCountError()

    return int(num)
