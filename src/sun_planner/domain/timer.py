"""Domain models for the sun exposure countdown."""

from dataclasses import dataclass
from enum import StrEnum

from sun_planner.domain.exposure import SunAdvice


class TimerPhase(StrEnum):
    """Lifecycle phase of the countdown."""

    IDLE = "idle"
    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


@dataclass(frozen=True)
class TimerSnapshot:
    """Read-only view of the countdown for rendering."""

    phase: TimerPhase
    total_seconds: int
    remaining_seconds: int
    progress_percent: float
    display: str
    advice: SunAdvice | None
    loading_advice: bool

    @property
    def status_label(self) -> str:
        if self.phase is TimerPhase.FINISHED:
            return "DONE!"
        if self.phase is TimerPhase.RUNNING:
            return "TANNING"
        return "READY"
