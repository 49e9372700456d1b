"""Thread pool and result channel used by the pipeline stages."""

from .channel import Receiver, Sender, channel
from .pool import TaskFailure, WorkerPool, default_worker_count

__all__ = [
    "Receiver",
    "Sender",
    "TaskFailure",
    "WorkerPool",
    "channel",
    "default_worker_count",
]
