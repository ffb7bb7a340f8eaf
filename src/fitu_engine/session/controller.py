"""Session lifecycle controller — runs one workout session at a time.

State machine::

    NOT_STARTED -> ACTIVE(0) -> [RESTING(0)] -> ACTIVE(1) -> ... -> COMPLETE
                         \\_____________ quit() ______________/-> QUIT

An exercise moves to RESTING when its countdown ends and it has a rest
time; with no rest it goes straight to the next exercise. Past the last
exercise the session completes. Every public operation holds one lock, so
a timer tick and a manual skip or pause are applied one after the other.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto

from fitu_engine.catalog import WorkoutCatalog
from fitu_engine.clock import Clock, now_local
from fitu_engine.event_store import EventKind, EventStore
from fitu_engine.exceptions import InvalidState, ReferenceNotFound
from fitu_engine.models.mood import MoodEntry
from fitu_engine.models.session import WorkoutSession
from fitu_engine.models.workout import Exercise, Workout
from fitu_engine.stats.aggregator import StatsAggregator

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    NOT_STARTED = auto()
    ACTIVE = auto()
    RESTING = auto()
    COMPLETE = auto()
    QUIT = auto()


_RUNNING = frozenset({SessionPhase.ACTIVE, SessionPhase.RESTING})
_TERMINAL = frozenset({SessionPhase.COMPLETE, SessionPhase.QUIT})


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the controller for rendering."""

    phase: SessionPhase
    exercise_index: int = 0
    time_remaining: int = 0
    paused: bool = False
    session_id: str | None = None
    workout_id: str | None = None

    @property
    def is_running(self) -> bool:
        return self.phase in _RUNNING

    @property
    def is_terminal(self) -> bool:
        return self.phase in _TERMINAL


def format_countdown(seconds: int) -> str:
    """Render a countdown as 'M:SS'. e.g. 75 -> '1:15'."""
    seconds = max(0, int(seconds))
    return f"{seconds // 60}:{seconds % 60:02d}"


class SessionController:
    """Drives the single in-progress workout session.

    Usage:
        controller = SessionController(store, catalog, aggregator)
        controller.start("w1", mood_before=current_mood)
        controller.tick()      # once per second
        controller.advance()   # user skip
    """

    def __init__(
        self,
        store: EventStore,
        catalog: WorkoutCatalog,
        aggregator: StatsAggregator,
        clock: Clock = now_local,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._aggregator = aggregator
        self._clock = clock
        self._lock = threading.RLock()

        self._workout: Workout | None = None
        self._session: WorkoutSession | None = None
        self._phase = SessionPhase.NOT_STARTED
        self._index = 0
        self._remaining = 0
        self._paused = False
        # Every (phase, exercise_index) entered since start(), in order
        self.transitions: list[tuple[SessionPhase, int]] = []

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        with self._lock:
            return SessionState(
                phase=self._phase,
                exercise_index=self._index,
                time_remaining=self._remaining,
                paused=self._paused,
                session_id=self._session.id if self._session else None,
                workout_id=self._workout.id if self._workout else None,
            )

    @property
    def workout(self) -> Workout | None:
        return self._workout

    @property
    def session(self) -> WorkoutSession | None:
        return self._session

    @property
    def current_exercise(self) -> Exercise | None:
        with self._lock:
            if self._workout is None or self._phase not in _RUNNING:
                return None
            return self._workout.exercises[self._index]

    @property
    def upcoming(self) -> tuple[Exercise, ...]:
        """The next two exercises after the current one."""
        with self._lock:
            if self._workout is None or self._phase not in _RUNNING:
                return ()
            return self._workout.exercises[self._index + 1 : self._index + 3]

    @property
    def progress_pct(self) -> float:
        """Share of exercises already passed, 0-100."""
        with self._lock:
            if self._workout is None:
                return 0.0
            if self._phase is SessionPhase.COMPLETE:
                return 100.0
            return self._index / len(self._workout.exercises) * 100.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, workout_id: str, mood_before: MoodEntry | None = None) -> WorkoutSession:
        """Open a new session for *workout_id* and start its first exercise.

        Open sessions left behind by an earlier quit or crash are closed
        as abandoned first: they get an end time, stay not completed, and
        count neither as a completion nor as a failure.

        Raises:
            InvalidState: this controller is still running a session.
            ReferenceNotFound: the workout is missing or has no exercises.
        """
        with self._lock:
            if self._phase in _RUNNING:
                raise InvalidState(
                    f"Session {self._session.id if self._session else '?'} is still in progress"
                )
            workout = self._catalog.get(workout_id)
            if workout is None:
                raise ReferenceNotFound(f"Unknown workout {workout_id!r}", reference_id=workout_id)
            if not workout.exercises:
                raise ReferenceNotFound(
                    f"Workout {workout_id!r} has no exercises", reference_id=workout_id
                )

            self._close_orphans()
            session = self._store.append(
                EventKind.WORKOUT_SESSIONS,
                WorkoutSession(
                    id="",
                    workout_id=workout.id,
                    start_time=self._clock(),
                    mood_before=mood_before,
                ),
            )
            self._workout = workout
            self._session = session
            self._paused = False
            self.transitions = []
            self._enter(SessionPhase.ACTIVE, 0, workout.exercises[0].countdown_seconds)
            logger.info("Started session %s for workout %s", session.id, workout.id)
            return session

    def tick(self) -> SessionState:
        """Advance the countdown by one second.

        No-op while paused or when no session is running. When the
        countdown reaches zero the next transition fires in the same call,
        and the countdown is reinitialized, so it fires exactly once.
        """
        with self._lock:
            if self._phase not in _RUNNING or self._paused:
                return self.state
            if self._remaining > 0:
                self._remaining -= 1
            if self._remaining == 0:
                self._transition()
            return self.state

    def advance(self) -> SessionState:
        """Skip the rest of the current exercise or rest period."""
        with self._lock:
            self._require_running("advance")
            self._transition()
            return self.state

    def pause(self) -> SessionState:
        with self._lock:
            self._require_running("pause")
            self._paused = True
            return self.state

    def resume(self) -> SessionState:
        with self._lock:
            self._require_running("resume")
            self._paused = False
            return self.state

    def complete(self, mood_after: MoodEntry | None = None) -> WorkoutSession:
        """Finish the session now, counting every exercise as done.

        Calling it again after the session already completed returns the
        finalized record (attaching *mood_after* if given) without
        counting the workout twice.

        Raises:
            InvalidState: no session was started, or it was quit.
        """
        with self._lock:
            if self._phase is SessionPhase.COMPLETE and self._session is not None:
                if mood_after is not None:
                    self._session = self._store.update_by_id(
                        EventKind.WORKOUT_SESSIONS, self._session.id, mood_after=mood_after
                    ) or self._session
                return self._session
            self._require_running("complete")
            self._finish(mood_after)
            return self._active()[1]

    def quit(self) -> SessionState:
        """Abort the running session.

        The stored session stays open (not completed, no end time) and
        nothing already recorded is rolled back.
        """
        with self._lock:
            self._require_running("quit")
            self._paused = False
            self._enter(SessionPhase.QUIT, self._index, 0)
            logger.info("Quit session %s", self._session.id if self._session else "?")
            return self.state

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_running(self, action: str) -> None:
        if self._phase not in _RUNNING:
            raise InvalidState(f"Cannot {action}: no session in progress ({self._phase.name})")

    def _active(self) -> tuple[Workout, WorkoutSession]:
        if self._workout is None or self._session is None:
            raise InvalidState(f"No active workout session ({self._phase.name})")
        return self._workout, self._session

    def _enter(self, phase: SessionPhase, index: int, countdown: int) -> None:
        self._phase = phase
        self._index = index
        self._remaining = max(0, countdown)
        self.transitions.append((phase, index))
        logger.debug("Session phase %s exercise=%d countdown=%d", phase.name, index, countdown)

    def _transition(self) -> None:
        workout, _ = self._active()
        exercises = workout.exercises
        if self._phase is SessionPhase.ACTIVE:
            exercise = exercises[self._index]
            self._mark_done(exercise)
            if exercise.rest_time_s > 0:
                self._enter(SessionPhase.RESTING, self._index, exercise.rest_time_s)
                return

        next_index = self._index + 1
        if next_index >= len(exercises):
            self._finish(None)
        else:
            self._enter(SessionPhase.ACTIVE, next_index, exercises[next_index].countdown_seconds)

    def _mark_done(self, exercise: Exercise) -> None:
        _, session = self._active()
        if exercise.id in session.exercises_completed:
            return
        done = session.exercises_completed + (exercise.id,)
        updated = self._store.update_by_id(
            EventKind.WORKOUT_SESSIONS, session.id, exercises_completed=done
        )
        self._session = updated or dataclasses.replace(session, exercises_completed=done)

    def _finish(self, mood_after: MoodEntry | None) -> None:
        workout, session = self._active()
        if self._phase is SessionPhase.COMPLETE:
            return
        self._paused = False
        self._enter(SessionPhase.COMPLETE, self._index, 0)

        changes = {
            "completed": True,
            "end_time": self._clock(),
            "exercises_completed": workout.exercise_ids,
        }
        if mood_after is not None:
            changes["mood_after"] = mood_after
        updated = self._store.update_by_id(EventKind.WORKOUT_SESSIONS, session.id, **changes)
        self._session = updated or dataclasses.replace(session, **changes)

        catalog_workout = self._catalog.get(workout.id)
        if catalog_workout is None:
            logger.warning(
                "Workout %s missing from catalog at completion, counting 0 minutes",
                workout.id,
            )
        self._aggregator.record_completion(catalog_workout.duration_min if catalog_workout else 0)
        logger.info("Completed session %s", session.id)

    def _close_orphans(self) -> None:
        now = self._clock()
        for orphan in self._store.open_sessions():
            self._store.update_by_id(
                EventKind.WORKOUT_SESSIONS, orphan.id, end_time=now, abandoned=True
            )
            logger.warning("Closed orphaned session %s as abandoned", orphan.id)
