"""
Worker System for Vindicator

This package holds the units of work a Supervisor keeps alive.

Core Components:
    - BaseWorker: Abstract base class for all workers
    - ProcessWorker: Keeps an external command running

Usage:
    from vindicator.workers import ProcessWorker

    worker = ProcessWorker("sleeper", {"command": ["sleep", "3600"]})
"""

from .base_worker import BaseWorker
from .process_worker import ProcessWorker

__all__ = [
    "BaseWorker",
    "ProcessWorker",
]
