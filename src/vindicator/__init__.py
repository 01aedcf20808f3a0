"""
Vindicator: keep a single blocking worker alive

This package supervises one worker: it runs the worker's blocking work
call, monitors it on a fixed interval, restarts it whenever it stops and
publishes lifecycle notifications. The architecture provides:

- Thread-based concurrent run and monitor loops
- Cancellable scopes handed to the worker
- Synchronous in-process notifications
- A stop that blocks until the worker has exited

Core Components:
    - Supervisor: Runs, monitors and restarts a worker
    - BaseWorker: Abstract base class for supervised workers
    - ProcessWorker: Keeps an external command running
    - EventBus: Named-topic publish/subscribe
    - Scope: Cancellable execution scope

Usage:
    import threading
    from vindicator import ProcessWorker, Scope, Supervisor

    supervisor = Supervisor(ProcessWorker("sleeper", {"command": "sleep 3600"}), 2)
    scope = Scope()
    threading.Thread(target=supervisor.start, args=(scope,), daemon=True).start()
    threading.Thread(target=supervisor.monitor, args=(scope,), daemon=True).start()
    ...
    supervisor.stop()
"""

from .event_bus import EventBus
from .scope import Scope
from .supervisor import Supervisor, TOPICS
from .workers import BaseWorker, ProcessWorker

__version__ = "0.1.0"

__all__ = [
    "BaseWorker",
    "EventBus",
    "ProcessWorker",
    "Scope",
    "Supervisor",
    "TOPICS",
]
