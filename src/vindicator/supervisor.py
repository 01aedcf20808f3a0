"""
Supervisor Module for Vindicator

This module keeps a single blocking worker alive. Two loops share one
Supervisor instance:

- start(): runs one activation of the worker, flagging it as running for
  the duration and publishing worker:* notifications
- monitor(): checks the running flag every interval and launches a new
  activation when the worker is found stopped

stop() cancels both loops and blocks until the worker has fully exited.
"""

import logging
import threading
from typing import Any, Callable, Optional

from .event_bus import EventBus
from .scope import Scope
from .workers.base_worker import BaseWorker

WORKER_START = "worker:start"
WORKER_STOP = "worker:stop"
WORKER_ERROR = "worker:error"
MONITOR_START = "monitor:start"
MONITOR_STOP = "monitor:stop"
MONITOR_INTERRUPT = "monitor:interrupt"
MONITOR_WORKING = "monitor:working"

TOPICS = (
    WORKER_START,
    WORKER_STOP,
    WORKER_ERROR,
    MONITOR_START,
    MONITOR_STOP,
    MONITOR_INTERRUPT,
    MONITOR_WORKING,
)


class Supervisor:
    """
    Restarts a worker whenever its blocking work call returns.

    Provides:
    - A single activation at a time, serialized by the activation lock
    - Periodic monitoring with fire-and-forget restarts
    - Lifecycle notifications through an EventBus
    - A stop() that blocks until the worker is quiescent

    There is no restart limit or backoff: a worker that fails immediately
    is restarted once per interval for as long as the monitor runs.
    """

    def __init__(
        self,
        worker: BaseWorker,
        interval: float,
        bus: Optional[EventBus] = None,
    ):
        """
        Initialize the supervisor.

        Args:
            worker: Worker to keep alive
            interval: Seconds between monitor checks, must be positive
            bus: Event bus for notifications, a new one if omitted
        """
        if (
            isinstance(interval, bool)
            or not isinstance(interval, (int, float))
            or interval <= 0
        ):
            raise ValueError(f"Interval must be a positive number, got {interval!r}")

        self.interval = interval
        self.worker = worker
        self.bus = bus if bus is not None else EventBus()

        name = getattr(worker, "name", type(worker).__name__)
        self.logger = logging.getLogger(f"{__name__}.{name}")

        # Held for the whole span of an activation
        self._lock = threading.Lock()

        # Guards handle replacement against stop()
        self._handle_lock = threading.Lock()
        self._stop_worker: Optional[Callable[[], None]] = None
        self._stop_monitor: Optional[Callable[[], None]] = None

        # Thread running the current activation, if any
        self._activation_thread: Optional[int] = None

    @property
    def is_running(self) -> bool:
        """Check if the worker is currently running."""
        return self.worker.is_running

    def on(self, topic: str, callback: Callable[..., Any]) -> None:
        """
        Subscribe to a lifecycle notification.

        Args:
            topic: One of the notification topics, e.g. "worker:start"
            callback: Called as callback(supervisor, *args)
        """
        self.bus.subscribe(topic, callback)

    def start(self, scope: Scope) -> None:
        """
        Run one activation of the worker.

        Blocks until the worker's work call returns. An exception raised by
        the worker is published on worker:error and re-raised.

        Args:
            scope: Parent scope; the worker receives a child of it
        """
        self._activate(scope)

    def monitor(self, scope: Scope) -> None:
        """
        Check the worker every interval until cancelled.

        Blocks; run it on its own thread. A stopped worker is restarted on a
        new thread so that checks continue while the worker runs.

        Args:
            scope: Parent scope; cancelling it stops the monitor
        """
        monitor_scope = scope.child()
        with self._handle_lock:
            self._stop_monitor = monitor_scope.cancel

        self.bus.publish(MONITOR_START, self)
        self.logger.info(f"Monitoring every {self.interval}s")

        while True:
            monitor_scope.wait(self.interval)

            if monitor_scope.cancelled:
                self.logger.info("Monitor stopped")
                self.bus.publish(MONITOR_STOP, self)
                return

            if not self.worker.is_running:
                self.logger.debug("Worker not running, restarting")
                self.bus.publish(MONITOR_INTERRUPT, self)
                threading.Thread(
                    target=self._restart,
                    args=(scope, monitor_scope),
                    name=f"{self.logger.name}.restart",
                    daemon=True,
                ).start()
            else:
                self.bus.publish(MONITOR_WORKING, self)

    def stop(self) -> None:
        """
        Stop the monitor and the worker.

        Returns once any in-flight activation has published worker:stop and
        cleared the running flag. The worker must honor its scope for this
        to return. Called from a worker:* listener, it only cancels: the
        activation on the calling thread finishes once the listener returns.
        """
        with self._handle_lock:
            if self._stop_monitor is not None:
                self._stop_monitor()
            if self._stop_worker is not None:
                self._stop_worker()

        if self._activation_thread == threading.get_ident():
            return

        # Wait for the in-flight activation, if any
        with self._lock:
            pass

    def _activate(self, scope: Scope, guard: Optional[Scope] = None) -> None:
        with self._lock:
            with self._handle_lock:
                if guard is not None and guard.cancelled:
                    self.logger.debug("Monitor stopped, restart skipped")
                    return
                self.worker.set_running(True)
                worker_scope = scope.child()
                self._stop_worker = worker_scope.cancel
                self._activation_thread = threading.get_ident()

            try:
                self.logger.debug("Worker starting")
                self.bus.publish(WORKER_START, self)
                try:
                    self.worker.work(worker_scope)
                except Exception as e:
                    self.logger.warning(f"Worker failed: {e}")
                    self.bus.publish(WORKER_ERROR, self, e)
                    raise
            finally:
                self.bus.publish(WORKER_STOP, self)
                worker_scope.cancel()
                self._activation_thread = None
                self.worker.set_running(False)
                self.logger.debug("Worker stopped")

    def _restart(self, scope: Scope, guard: Scope) -> None:
        try:
            self._activate(scope, guard)
        except Exception as e:
            # Already published on worker:error
            self.logger.debug(f"Restarted activation ended with error: {e}")
