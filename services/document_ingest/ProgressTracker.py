"""Milestone-driven upload progress with an optional time-based estimate."""

import asyncio
from typing import Callable

from shared.models.upload import MILESTONE_PROGRESS, UploadMilestone

ProgressListener = Callable[[UploadMilestone | None, int], None]


class ProgressTracker:
    """Holds the displayed progress percentage of the current upload.

    Progress moves forward through named milestones. Between REGISTRATION_PENDING
    and completion an estimator task may interpolate in fixed steps up to a
    ceiling; it never reflects real transfer progress. While an upload is
    active the percentage never decreases; only reset() brings it back to 0.
    """

    def __init__(self, interval: float = 0.1, step: int = 10, ceiling: int = 90) -> None:
        self.interval = interval
        self.step = step
        self.ceiling = ceiling

        self.percent = 0
        self.milestone: UploadMilestone | None = None
        self._listeners: list[ProgressListener] = []
        self._estimate_task: asyncio.Task | None = None
        self._reset_task: asyncio.Task | None = None

    def subscribe(self, listener: ProgressListener) -> None:
        """Register a callback invoked with (milestone, percent) on every change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self.milestone, self.percent)

    def _advance(self, percent: int) -> None:
        if percent > self.percent:
            self.percent = percent
            self._notify()

    ##########################################
    ############### MILESTONES ###############
    ##########################################

    def reach(self, milestone: UploadMilestone) -> None:
        self.milestone = milestone
        if MILESTONE_PROGRESS[milestone] > self.percent:
            self._advance(MILESTONE_PROGRESS[milestone])
        else:
            self._notify()

    ##########################################
    ############### ESTIMATOR ################
    ##########################################

    def is_estimating(self) -> bool:
        return self._estimate_task is not None and not self._estimate_task.done()

    def start_estimate(self) -> None:
        """Start stepping the percentage towards the ceiling. Must run inside an event loop."""
        self.stop_estimate()
        self._estimate_task = asyncio.get_running_loop().create_task(self._run_estimate())

    async def _run_estimate(self) -> None:
        while self.percent < self.ceiling:
            await asyncio.sleep(self.interval)
            self._advance(min(self.percent + self.step, self.ceiling))

    def stop_estimate(self) -> None:
        if self._estimate_task is not None and not self._estimate_task.done():
            self._estimate_task.cancel()
        self._estimate_task = None

    ##########################################
    ################# RESET ##################
    ##########################################

    def _clear(self) -> None:
        self.stop_estimate()
        changed = self.percent != 0 or self.milestone is not None
        self.percent = 0
        self.milestone = None
        if changed:
            self._notify()

    def reset(self) -> None:
        """Cancel the estimator and any pending delayed reset and go back to 0."""
        self.cancel_scheduled_reset()
        self._clear()

    def schedule_reset(self, delay: float) -> None:
        """Reset to 0 after the given delay, unless reset or rescheduled earlier."""
        self.cancel_scheduled_reset()
        self._reset_task = asyncio.get_running_loop().create_task(self._run_delayed_reset(delay))

    async def _run_delayed_reset(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self._reset_task = None
        self._clear()

    def cancel_scheduled_reset(self) -> None:
        if self._reset_task is not None and not self._reset_task.done():
            self._reset_task.cancel()
        self._reset_task = None

    def close(self) -> None:
        """Cancel every pending timer task."""
        self.stop_estimate()
        self.cancel_scheduled_reset()
