"""
Base Worker Module for Vindicator

This module provides the abstract base class for supervised workers.
All workers handed to a Supervisor should inherit from BaseWorker.
"""

import abc
import logging
import threading
from typing import Any, Dict, Optional

from ..scope import Scope


class BaseWorker(abc.ABC):
    """
    Abstract base class for supervised workers.

    Provides common functionality for:
    - Configuration lookup
    - A thread-safe running flag
    - Per-worker logging
    """

    def __init__(self, name: str, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the base worker.

        Args:
            name: Unique name for this worker
            config: Configuration dictionary
        """
        self.name = name
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{name}")

        self._state_lock = threading.Lock()
        self._running = False

    def _get_config_value(self, key: str, default: Any) -> Any:
        """Get a configuration value with a default fallback."""
        return self.config.get(key, default)

    @property
    def is_running(self) -> bool:
        """Check if a blocking work call is in progress."""
        with self._state_lock:
            return self._running

    def set_running(self, running: bool) -> None:
        """Set the running flag. Only the supervisor should call this."""
        with self._state_lock:
            self._running = running

    @abc.abstractmethod
    def work(self, scope: Scope) -> None:
        """
        Perform the supervised work.

        This method must block until the work completes, fails or the scope
        is cancelled. Raising an exception reports a failure.

        Args:
            scope: Cancellation scope for this activation
        """
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} running={self.is_running}>"
