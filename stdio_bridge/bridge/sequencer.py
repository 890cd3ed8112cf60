"""
Request Sequencer

Single-consumer worker that handles submitted lines strictly one at a time,
in submission order:
- One worker thread owns every upstream call
- Line n+1 starts only after line n has been fully handled
- A failing line is logged and never stops the worker
"""

import queue
import threading
from typing import Callable, Optional

from stdio_bridge.configs import get_logger
from stdio_bridge.exceptions import SequencerClosedError

logger = get_logger("sequencer")

# Queued after the last line to end the worker
_STOP = object()


class Sequencer:
    """
    Ordered dispatcher for input lines.

    Usage:
        sequencer = Sequencer(handle_line)
        sequencer.submit(line)
        sequencer.stop()  # waits for every submitted line
    """

    def __init__(self, handler: Callable[[str], None], name: str = "bridge-sequencer"):
        self._handler = handler
        self._name = name
        self._queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._closed = False

    @property
    def pending(self) -> int:
        """Lines submitted but not yet fully handled."""
        return self._queue.unfinished_tasks

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Start the worker thread (idempotent)."""
        with self._lock:
            self._ensure_started()

    def submit(self, line: str) -> None:
        """
        Queue a line for handling after every line submitted before it.

        Raises:
            SequencerClosedError: The sequencer was stopped
        """
        with self._lock:
            if self._closed:
                raise SequencerClosedError("Sequencer is stopped")
            self._ensure_started()
            self._queue.put(line)

    def drain(self) -> None:
        """Block until every submitted line has been handled."""
        self._queue.join()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Handle the remaining lines, then end the worker thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            thread = self._thread
            if thread is not None:
                self._queue.put(_STOP)

        if thread is not None:
            thread.join(timeout)
            logger.debug("Sequencer stopped")

    def _ensure_started(self) -> None:
        if self._thread is None:
            self._thread = threading.Thread(target=self._run_loop, name=self._name, daemon=True)
            self._thread.start()
            logger.debug("Sequencer started")

    def _run_loop(self) -> None:
        """Main processing loop."""
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._handler(item)
            except Exception as e:
                logger.error(f"Line handling failed: {e}")
            finally:
                self._queue.task_done()
