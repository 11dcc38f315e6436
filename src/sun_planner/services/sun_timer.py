"""Countdown state machine for safe sun exposure."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from sun_planner.domain.exposure import ExposureProfile, SunAdvice
from sun_planner.domain.profile import SunSession
from sun_planner.domain.timer import TimerPhase, TimerSnapshot
from sun_planner.services.advice import AdviceProvider, get_advice_or_fallback
from sun_planner.services.profiles import SessionRecorder
from sun_planner.services.ticker import Ticker

_SEEDABLE_PHASES = {TimerPhase.IDLE, TimerPhase.READY}

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _log_alert() -> None:
    _logger.warning("Safe sun exposure time is over")


@dataclass
class SunTimer:
    """Countdown seeded from exposure advice.

    Advice refreshes only seed the countdown while it is idle or ready, so a
    running, paused or finished countdown never shifts. Finishing hands one
    session to the recorder; its duration is the full countdown length.
    """

    advice_provider: AdviceProvider
    session_recorder: SessionRecorder
    ticker: Ticker | None = None
    alert: Callable[[], None] = _log_alert
    clock: Callable[[], datetime] = _utc_now
    location_label: str = "My spot"
    phase: TimerPhase = field(default=TimerPhase.IDLE, init=False)
    total_seconds: int = field(default=0, init=False)
    remaining_seconds: int = field(default=0, init=False)
    advice: SunAdvice | None = field(default=None, init=False)
    profile: ExposureProfile | None = field(default=None, init=False)
    loading_advice: bool = field(default=False, init=False)
    _request_id: int = field(default=0, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _pending: set[asyncio.Task[SunAdvice | None]] = field(
        default_factory=set, init=False, repr=False
    )

    async def request_advice(self, profile: ExposureProfile) -> SunAdvice | None:
        """Fetch advice for the profile and seed the countdown if allowed.

        Returns the applied advice, or None when the result was discarded
        because the timer was closed or a newer request superseded it. A
        superseded result still seeds a timer that is idle.
        """
        if self._closed:
            return None
        self._request_id += 1
        request_id = self._request_id
        self.profile = profile
        self.loading_advice = True
        advice = await get_advice_or_fallback(
            self.advice_provider, profile.uv_index, profile.skin_type
        )
        if self._closed:
            return None
        latest = request_id == self._request_id
        if not latest and self.phase is not TimerPhase.IDLE:
            _logger.info("Discarding stale advice for request %s", request_id)
            return None
        if latest:
            self.loading_advice = False
        self.advice = advice
        self._seed(advice)
        return advice

    def schedule_advice(
        self, profile: ExposureProfile
    ) -> "asyncio.Task[SunAdvice | None]":
        """Run request_advice in the background; close() cancels it."""
        task = asyncio.get_running_loop().create_task(self.request_advice(profile))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def start(self) -> bool:
        """Start or resume the countdown."""
        if self.phase not in {TimerPhase.READY, TimerPhase.PAUSED}:
            return False
        self.phase = TimerPhase.RUNNING
        if self.ticker is not None:
            self.ticker.start(self.tick)
        return True

    def pause(self) -> bool:
        """Pause a running countdown, keeping the remaining time."""
        if self.phase is not TimerPhase.RUNNING:
            return False
        self.phase = TimerPhase.PAUSED
        self._stop_ticker()
        return True

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if self.phase is not TimerPhase.RUNNING:
            return
        self.remaining_seconds = max(self.remaining_seconds - 1, 0)
        if self.remaining_seconds == 0:
            self._finish()

    def reset(self) -> None:
        """Restore the full countdown, or go idle when none was set."""
        self._stop_ticker()
        self.remaining_seconds = self.total_seconds
        self.phase = TimerPhase.READY if self.total_seconds > 0 else TimerPhase.IDLE

    def snapshot(self) -> TimerSnapshot:
        """Return the current read model."""
        return TimerSnapshot(
            phase=self.phase,
            total_seconds=self.total_seconds,
            remaining_seconds=self.remaining_seconds,
            progress_percent=progress_percent(
                self.total_seconds, self.remaining_seconds
            ),
            display=format_clock(self.remaining_seconds),
            advice=self.advice,
            loading_advice=self.loading_advice,
        )

    def close(self) -> None:
        """Stop ticking and make in-flight advice requests inert."""
        self._closed = True
        self._stop_ticker()
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    def _seed(self, advice: SunAdvice) -> None:
        if self.phase not in _SEEDABLE_PHASES:
            return
        self.total_seconds = advice.safe_minutes * 60
        self.remaining_seconds = self.total_seconds
        self.phase = TimerPhase.READY

    def _finish(self) -> None:
        self.phase = TimerPhase.FINISHED
        self._stop_ticker()
        try:
            self.alert()
        except Exception:
            _logger.exception("Finish alert failed")
        uv_index = self.profile.uv_index if self.profile is not None else 0.0
        session = SunSession(
            id=uuid4().hex,
            date=self.clock(),
            duration_minutes=self.total_seconds // 60,
            uv_index=uv_index,
            location=self.location_label,
        )
        self.session_recorder.record(session)

    def _stop_ticker(self) -> None:
        if self.ticker is not None:
            self.ticker.stop()


def format_clock(seconds: int) -> str:
    """Format seconds as zero-padded ``MM:SS``."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


def progress_percent(total_seconds: int, remaining_seconds: int) -> float:
    """Return elapsed share of the countdown in percent."""
    if total_seconds <= 0:
        return 0.0
    return (total_seconds - remaining_seconds) / total_seconds * 100
