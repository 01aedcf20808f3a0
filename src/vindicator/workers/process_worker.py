"""
Process Worker Module for Vindicator

This module provides a worker that runs an external command as a child
process and blocks until it exits. Cancelling the scope terminates the
process.
"""

import os
import shlex
import subprocess
from typing import Any, Dict, List, Optional

from ..scope import Scope
from .base_worker import BaseWorker


class ProcessWorker(BaseWorker):
    """
    Worker that keeps an OS process running.

    A non-zero exit raises subprocess.CalledProcessError. A process stopped
    because the scope was cancelled is not a failure.
    """

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        Initialize the process worker.

        Args:
            name: Unique name for this worker
            config: Configuration dictionary with at least a "command" entry
        """
        super().__init__(name, config)

        self.command = self._parse_command(self._get_config_value("command", None))
        self.cwd: Optional[str] = self._get_config_value("cwd", None)
        self.env: Optional[Dict[str, str]] = self._get_config_value("env", None)
        self.poll_interval = self._get_config_value("poll_interval", 0.5)
        self.terminate_timeout = self._get_config_value("terminate_timeout", 5.0)

        self._process: Optional[subprocess.Popen] = None

    @staticmethod
    def _parse_command(command: Any) -> List[str]:
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ValueError("Process worker requires a non-empty command")
        return [str(part) for part in command]

    @property
    def pid(self) -> Optional[int]:
        """Get the pid of the current child process, if any."""
        process = self._process
        return process.pid if process is not None else None

    def work(self, scope: Scope) -> None:
        """Run the command until it exits or the scope is cancelled."""
        if scope.cancelled:
            self.logger.debug(f"Scope already cancelled, not starting '{self.name}'")
            return

        env = None
        if self.env:
            env = {**os.environ, **{k: str(v) for k, v in self.env.items()}}

        process = subprocess.Popen(self.command, cwd=self.cwd, env=env)
        self._process = process
        self.logger.info(f"Started '{self.name}' (pid {process.pid})")

        try:
            while process.poll() is None:
                if scope.wait(self.poll_interval):
                    self._terminate(process)
                    return
        finally:
            self._process = None

        if process.returncode != 0:
            raise subprocess.CalledProcessError(process.returncode, self.command)

        self.logger.info(f"'{self.name}' exited normally")

    def _terminate(self, process: subprocess.Popen) -> None:
        """Terminate the process, killing it if it does not exit in time."""
        if process.poll() is not None:
            return

        self.logger.debug(f"Terminating '{self.name}' (pid {process.pid})")
        process.terminate()
        try:
            process.wait(timeout=self.terminate_timeout)
        except subprocess.TimeoutExpired:
            self.logger.warning(
                f"'{self.name}' did not exit within {self.terminate_timeout}s, killing"
            )
            process.kill()
            process.wait()
