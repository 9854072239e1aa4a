from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum


class Phase(str, Enum):
    UPCOMING = 'upcoming'
    CODING = 'coding'
    ENDED = 'ended'


def compute_phase(start_time: int, duration: int, now: int) -> Phase:
    """Lifecycle phase of a contest at instant *now* (epoch seconds).

    Boundaries resolve to the later phase: ``now == start_time`` yields
    CODING and ``now == start_time + duration`` yields ENDED.
    """
    if now >= start_time + duration:
        return Phase.ENDED
    if now >= start_time:
        return Phase.CODING
    return Phase.UPCOMING


@dataclass(frozen=True)
class Contest:
    name: str
    start_time: int | None
    duration: int
    phase: Phase
    url: str = ''
    platform: str | None = None

    @property
    def has_start_time(self) -> bool:
        return self.start_time is not None and self.start_time > 0

    @property
    def end_time(self) -> int | None:
        if not self.has_start_time:
            return None
        return self.start_time + (self.duration or 0)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['phase'] = self.phase.value
        data['end_time'] = self.end_time
        return data


@dataclass
class SourceResult:
    """Outcome of one provider's fetch + normalize step."""

    platform: str
    contests: list[Contest] = field(default_factory=list)
    failed: bool = False
    error: str | None = None
