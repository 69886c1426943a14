"""
Task graph and runner
"""

from .graph import Task, TaskGraph, TaskGraphError
from .runner import TaskRunner, TaskResult, TaskStatus

__all__ = [
    "Task",
    "TaskGraph",
    "TaskGraphError",
    "TaskRunner",
    "TaskResult",
    "TaskStatus",
]
