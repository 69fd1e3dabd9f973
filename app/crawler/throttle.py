"""
Fixed pacing between dealers during a crawl.
"""

from __future__ import annotations

import time
from collections.abc import Callable


class DealerThrottle:
    """
    Pauses a fixed interval between consecutive dealers so target sites see
    at most one crawler request burst at a time.
    """

    def __init__(
        self,
        *,
        delay_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._delay_seconds = max(0.0, delay_seconds)
        self._sleep = sleep

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    def pause(self) -> None:
        if self._delay_seconds > 0:
            self._sleep(self._delay_seconds)
