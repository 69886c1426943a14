"""
Sequential task runner
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from .graph import TaskGraph


class TaskStatus(str, Enum):
    NOT_RUN = "NotRun"
    SUCCEEDED = "Succeeded"
    SKIPPED = "Skipped"
    FAILED = "Failed"


@dataclass
class TaskResult:
    name: str
    status: TaskStatus = TaskStatus.NOT_RUN
    duration: float = 0.0


class TaskRunner:
    """Runs a root task and everything it requires, one task at a time"""

    def __init__(self, graph: TaskGraph, logger: Any, skip: Iterable[str] = ()):
        """
        Initialize the runner

        Args:
            graph: Task graph to run
            logger: Logger instance
            skip: Task names to mark skipped without running
        """
        self.graph = graph
        self.logger = logger
        self.skip = set(skip)
        for name in self.skip:
            graph.get(name)
        self.results: Dict[str, TaskResult] = {}

    def run(self, root: str) -> List[TaskResult]:
        """
        Execute the plan for ``root``

        The first exception raised by a task body stops the run and is
        re-raised unchanged; tasks after it stay NOT_RUN.

        Returns:
            One result per planned task, in execution order
        """
        plan = self.graph.plan(root)
        self.logger.info(f"Execution plan: {' -> '.join(plan)}")
        self.results = {name: TaskResult(name) for name in plan}

        try:
            for index, name in enumerate(plan, start=1):
                self._run_task(name, index, len(plan))
        finally:
            self._log_summary()

        return list(self.results.values())

    def _run_task(self, name: str, index: int, total: int) -> None:
        task = self.graph.get(name)
        result = self.results[name]

        if name in self.skip:
            self.logger.info(f"[{index}/{total}] {name}: skipped by request")
            result.status = TaskStatus.SKIPPED
            return

        if task.only_when is not None and not task.only_when():
            self.logger.info(f"[{index}/{total}] {name}: skipped, condition not met")
            result.status = TaskStatus.SKIPPED
            return

        self.logger.info(f"[{index}/{total}] {name}")
        start = time.monotonic()
        try:
            task.action()
        except BaseException:
            result.status = TaskStatus.FAILED
            raise
        else:
            result.status = TaskStatus.SUCCEEDED
        finally:
            result.duration = time.monotonic() - start

    def _log_summary(self) -> None:
        self.logger.info("=" * 50)
        self.logger.info(f"{'Task':20} {'Status':10} {'Duration':>10}")
        for result in self.results.values():
            duration = f"{result.duration:.2f}s" if result.status != TaskStatus.NOT_RUN else "-"
            self.logger.info(f"{result.name:20} {result.status.value:10} {duration:>10}")
        self.logger.info("=" * 50)

        if all(r.status in (TaskStatus.SUCCEEDED, TaskStatus.SKIPPED) for r in self.results.values()):
            self.logger.success("Build succeeded")
        else:
            self.logger.error("Build failed")


__all__ = ["TaskRunner", "TaskResult", "TaskStatus"]
