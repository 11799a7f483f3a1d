import math
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Any

BATCH_PREFIX = "BATCH-"


def epoch_ms() -> int:
    return time.time_ns() // 1_000_000


class BatchIdGenerator:
    """
    Issues "BATCH-<epoch ms>" ids.

    Within one process the millisecond part is strictly increasing, so two
    calls landing in the same millisecond still get distinct ids.
    """

    def __init__(self, clock: Callable[[], int] = epoch_ms):
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_ms(self) -> int:
        with self._lock:
            ms = max(self._clock(), self._last + 1)
            self._last = ms
            return ms


def batch_id_for(ms: int) -> str:
    return f"{BATCH_PREFIX}{ms}"


def iso_from_ms(ms: int) -> str:
    # fixed width so string order == time order
    dt = datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{ms % 1000:03d}Z"


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def percentage(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def pagination(page: int, page_size: int, total: int) -> Dict[str, Any]:
    total_pages = math.ceil(total / page_size) if page_size else 0
    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalEvents": total,
        "pageSize": page_size,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }
