from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from maze_lab.core.errors import ConfigurationError

SIZE_MIN = 11
SIZE_MAX = 51
SIZE_DEFAULT = 21

DELAY_MIN = 10
DELAY_MAX = 2000
DELAY_DEFAULT = 100


def coerce_size(size: int) -> int:
    """Even sizes are bumped to the next odd value, then clamped to [SIZE_MIN, SIZE_MAX]."""
    if size % 2 == 0:
        size += 1
    return max(SIZE_MIN, min(SIZE_MAX, size))


def coerce_delay(delay_ms: int) -> int:
    return max(DELAY_MIN, min(DELAY_MAX, delay_ms))


@dataclass(frozen=True)
class RunConfig:
    size: int = SIZE_DEFAULT
    delay_ms: int = DELAY_DEFAULT
    seed: Optional[int] = None
    solvers: Tuple[str, ...] = ("bfs",)
    color: bool = True
    visual: bool = False
    record: bool = False

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0

    @property
    def compare(self) -> bool:
        return len(self.solvers) > 1

    def normalized(self) -> Tuple["RunConfig", List[ConfigurationError]]:
        """
        Returns a copy with size/delay pulled into range, plus one
        ConfigurationError per corrected field. Forcing an even size odd
        is a silent coercion, not an issue.
        """
        issues: List[ConfigurationError] = []

        size = coerce_size(self.size)
        odd_size = self.size + 1 if self.size % 2 == 0 else self.size
        if size != odd_size:
            issues.append(ConfigurationError("size", self.size, size))

        delay = coerce_delay(self.delay_ms)
        if delay != self.delay_ms:
            issues.append(ConfigurationError("delay", self.delay_ms, delay))

        # Recording needs a window to capture
        visual = self.visual or self.record

        return replace(self, size=size, delay_ms=delay, visual=visual), issues
