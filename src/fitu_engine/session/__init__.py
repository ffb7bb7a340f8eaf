"""Session lifecycle — the live workout state machine and its timer."""

from fitu_engine.session.controller import (
    SessionController,
    SessionPhase,
    SessionState,
    format_countdown,
)
from fitu_engine.session.ticker import SessionTicker

__all__ = [
    "SessionController",
    "SessionPhase",
    "SessionState",
    "SessionTicker",
    "format_countdown",
]
