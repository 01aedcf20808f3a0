"""
Vindicator Command-Line Entry Point

This module keeps the command from the configuration file running. It
handles:

- Configuration loading and validation
- Logging setup with optional colorization
- Building the process worker and its supervisor
- Logging every lifecycle notification
- Graceful shutdown on SIGINT/SIGTERM

Usage:
    vindicator --config configuration/vindicator.yaml

Configuration:
    - vindicator.yaml: supervisor, worker and logging settings
"""

import argparse
import logging
import signal
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import colorlog
import yaml

from .config import DEFAULT_CONFIG_PATH
from .config_validator import validate_configuration_file
from .scope import Scope
from .supervisor import (
    MONITOR_INTERRUPT,
    MONITOR_START,
    MONITOR_STOP,
    MONITOR_WORKING,
    WORKER_ERROR,
    WORKER_START,
    WORKER_STOP,
    Supervisor,
)
from .workers import ProcessWorker

LIFECYCLE_MESSAGES = {
    MONITOR_START: "start monitor",
    MONITOR_WORKING: "process is working normally",
    MONITOR_INTERRUPT: "process stopped unexpectedly, restarting it",
    MONITOR_STOP: "stop monitor",
    WORKER_START: "start worker",
    WORKER_STOP: "stop worker",
}


def setup_logging(config: Dict[str, Any]) -> logging.Logger:
    """Configure logging with colorized output based on configuration."""
    logging_config = config.get("logging", {})
    log_level = str(logging_config.get("level", "INFO")).upper()
    use_colors = logging_config.get("colorized", True)

    colors = logging_config.get(
        "colors",
        {
            "DEBUG": "blue",
            "INFO": "white",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )

    format_config = logging_config.get("format", {})
    date_format = format_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    color_format = format_config.get(
        "message_format",
        "%(log_color)s%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    simple_format = format_config.get(
        "simple_format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Clear existing handlers so basicConfig applies
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if use_colors:
        formatter = colorlog.ColoredFormatter(
            color_format,
            datefmt=date_format,
            log_colors=colors,
            secondary_log_colors={},
            style="%",
        )
        handler = colorlog.StreamHandler()
        handler.setFormatter(formatter)
        logging.basicConfig(level=getattr(logging, log_level), handlers=[handler])
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format=simple_format,
            datefmt=date_format,
        )

    return logging.getLogger(__name__)


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Load configuration from a YAML file with validation.

    Args:
        config_path: Path to the configuration file

    Returns:
        Validated configuration dictionary

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If the configuration is invalid
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    if not validate_configuration_file(config_path):
        raise ValueError(
            "Configuration validation failed. Please check the logs for details."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e


def attach_log_listeners(supervisor: Supervisor, logger: logging.Logger) -> None:
    """Log every lifecycle notification published by the supervisor."""
    for topic, message in LIFECYCLE_MESSAGES.items():
        supervisor.on(topic, lambda _supervisor, *_args, msg=message: logger.info(msg))

    def on_error(_supervisor: Supervisor, error: BaseException) -> None:
        logger.error(f"worker failed: {error}")

    supervisor.on(WORKER_ERROR, on_error)


def build_supervisor(config: Dict[str, Any]) -> Supervisor:
    """Create the process worker and its supervisor from configuration."""
    worker_config = dict(config["worker"])
    name = worker_config.pop("name", "worker")
    worker = ProcessWorker(name, worker_config)
    return Supervisor(worker, config["supervisor"]["interval"])


def _start_once(supervisor: Supervisor, scope: Scope) -> None:
    try:
        supervisor.start(scope)
    except Exception as e:
        # Reported on worker:error; the monitor restarts the worker
        logging.getLogger(__name__).debug(f"Initial activation failed: {e}")


def run(
    supervisor: Supervisor,
    shutdown: threading.Event,
    duration: Optional[float] = None,
) -> None:
    """
    Supervise until shutdown is requested or the duration elapses.

    Args:
        supervisor: Supervisor to run
        shutdown: Event set to request shutdown
        duration: Seconds to run, None to run until shutdown
    """
    scope = Scope()
    worker_thread = threading.Thread(
        target=_start_once, args=(supervisor, scope), name="worker", daemon=True
    )
    monitor_thread = threading.Thread(
        target=supervisor.monitor, args=(scope,), name="monitor", daemon=True
    )

    worker_thread.start()
    monitor_thread.start()

    shutdown.wait(duration)

    supervisor.stop()
    # A late initial activation sees a cancelled scope and returns
    scope.cancel()
    worker_thread.join()
    monitor_thread.join(supervisor.interval)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vindicator",
        description="Keep a command running, restarting it whenever it exits.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the configuration file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Stop after this many seconds (default: run until interrupted)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = _build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logging.basicConfig(level=logging.ERROR)
        logging.getLogger(__name__).error(str(e))
        return 2

    logger = setup_logging(config)

    try:
        supervisor = build_supervisor(config)
    except ValueError as e:
        logger.critical(f"Failed to build supervisor: {e}")
        return 2

    attach_log_listeners(supervisor, logger)

    shutdown = threading.Event()

    def signal_handler(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown")
        shutdown.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info(f"Supervising '{supervisor.worker.name}'")
    run(supervisor, shutdown, args.duration)
    logger.info("Shutdown complete")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
