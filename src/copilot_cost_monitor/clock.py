import time
from typing import Protocol


class Clock(Protocol):
    def monotonic(self) -> "float": ...


class SystemClock:
    def monotonic(self) -> "float":
        return time.monotonic()
