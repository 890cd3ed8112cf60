"""
Session Tracker

Holds the most recent session identifier issued by the upstream. One tracker
belongs to one bridge instance; it is only touched from the dispatch worker.
"""

from typing import Optional

from stdio_bridge.configs import get_logger

logger = get_logger("session")


class SessionTracker:
    """Single-slot holder for the upstream session identifier."""

    def __init__(self):
        self._session_id: Optional[str] = None

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    def adopt(self, session_id: Optional[str]) -> bool:
        """
        Replace the tracked identifier with one returned by the upstream.

        The upstream is authoritative: a new value always wins, even when a
        different one is already tracked. Empty values are ignored.

        Returns:
            True if the tracked value changed
        """
        if not session_id or session_id == self._session_id:
            return False
        if self._session_id is None:
            logger.info(f"Session established: {session_id}")
        else:
            logger.info(f"Session replaced: {self._session_id} -> {session_id}")
        self._session_id = session_id
        return True
