"""
Access Status Watcher - live countdown refresh

Re-resolves a user's access state on a fixed tick, the way the dashboard
countdown refreshes once per second. It runs as a background thread and:
- Re-reads the record each tick (so subscription changes show up live)
- Reports every fresh state to on_tick
- Reports kind transitions (trial -> expired, ...) to on_change
- Stops cleanly when the displaying view goes away

Usage:
    watcher = AccessStatusWatcher(
        lambda: provider.get_record(user_id),
        on_tick=render_countdown,
        on_change=lambda old, new: refresh_menu(new),
    )
    watcher.start()
    ...
    watcher.stop()
"""

import threading
from datetime import datetime
from typing import Callable, Optional

from access.dates import utcnow
from access.models import AccessState, UserAccessRecord
from access.resolver import resolve_access
from utils.logger import logger

DEFAULT_INTERVAL = 1.0


class AccessStatusWatcher:
    """Background re-resolution of one user's access state"""

    def __init__(
        self,
        record_getter: Callable[[], Optional[UserAccessRecord]],
        interval: float = DEFAULT_INTERVAL,
        on_tick: Optional[Callable[[AccessState], None]] = None,
        on_change: Optional[Callable[[Optional[AccessState], AccessState], None]] = None,
        clock: Callable[[], datetime] = utcnow,
        **resolver_options,
    ):
        """
        Initialize the watcher.

        Args:
            record_getter: Returns the user's current record (None if signed out)
            interval: Seconds between ticks
            on_tick: Called with every resolved state
            on_change: Called with (previous, current) when the kind changes
            clock: Source of "now"; injectable for tests
            **resolver_options: Passed through to resolve_access
        """
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.record_getter = record_getter
        self.interval = interval
        self.on_tick = on_tick
        self.on_change = on_change
        self.clock = clock
        self.resolver_options = resolver_options

        # State
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._current: Optional[AccessState] = None

    @property
    def current(self) -> Optional[AccessState]:
        return self._current

    @property
    def is_running(self) -> bool:
        return self._running

    def tick(self) -> AccessState:
        """Resolve once and fire the callbacks"""
        state = resolve_access(self.record_getter(), self.clock(), **self.resolver_options)

        previous = self._current
        self._current = state

        if self.on_tick:
            self.on_tick(state)

        if self.on_change and (previous is None or previous.kind != state.kind):
            self.on_change(previous, state)

        return state

    def start(self) -> None:
        """Start the background refresh thread"""
        if self._running:
            logger.warning("AccessStatusWatcher is already running")
            return

        logger.info(f"Starting AccessStatusWatcher (every {self.interval}s)")

        self._running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the background refresh"""
        if not self._running:
            return

        logger.info("Stopping AccessStatusWatcher")
        self._running = False
        self._stop_event.set()

        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=5)

    def _watch_loop(self) -> None:
        while self._running and not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                logger.error(f"Access status refresh error: {e}")

            # Wait for interval or stop signal
            self._stop_event.wait(timeout=self.interval)

    def __enter__(self) -> 'AccessStatusWatcher':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
