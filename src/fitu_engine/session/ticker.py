"""Wall-clock driver for the session countdown.

Runs ``SessionController.tick()`` on an APScheduler interval job. The job
removes itself once the session completes or is quit, and ``stop()``
cancels it immediately so no further ticks are delivered.
"""

from __future__ import annotations

import logging

from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler

from fitu_engine.config import TICK_INTERVAL_S
from fitu_engine.session.controller import SessionController

logger = logging.getLogger(__name__)

TICK_JOB_ID = "fitu_session_tick"


class SessionTicker:
    """Ticks a SessionController once per interval on a background thread."""

    def __init__(
        self,
        controller: SessionController,
        interval_s: float = TICK_INTERVAL_S,
        scheduler: BackgroundScheduler | None = None,
    ) -> None:
        self._controller = controller
        self._interval_s = interval_s
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or BackgroundScheduler()

    @property
    def is_ticking(self) -> bool:
        return self._scheduler.get_job(TICK_JOB_ID) is not None

    def start(self) -> None:
        """Begin ticking; replaces any tick job already scheduled."""
        if not self._scheduler.running:
            self._scheduler.start()
        self._scheduler.add_job(
            self._on_tick,
            "interval",
            seconds=self._interval_s,
            id=TICK_JOB_ID,
            replace_existing=True,
            max_instances=1,
        )
        logger.debug("Session ticker started (every %.2fs)", self._interval_s)

    def stop(self) -> None:
        """Cancel the tick job. Safe to call when not ticking."""
        try:
            self._scheduler.remove_job(TICK_JOB_ID)
            logger.debug("Session ticker stopped")
        except JobLookupError:
            pass

    def shutdown(self) -> None:
        """Stop ticking and shut down the scheduler if this ticker created it."""
        self.stop()
        if self._owns_scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)

    def _on_tick(self) -> None:
        state = self._controller.tick()
        if state.is_terminal:
            self.stop()
