"""
Task declarations and the dependency graph between them
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple


class TaskGraphError(RuntimeError):
    """The task graph is malformed: unknown task, duplicate or cycle"""


@dataclass
class Task:
    """
    A named unit of pipeline work

    Edges are declared by task name:
        depends_on: must complete first, and is pulled into the run
        after: ordering only, when both tasks run
        before: ordering only, the reverse of ``after``
        dependent_for: the named tasks depend on this one

    ``only_when`` is evaluated right before the body runs. A task whose
    guard is false is skipped and still satisfies its dependents.
    """

    name: str
    action: Callable[[], None]
    depends_on: Tuple[str, ...] = ()
    after: Tuple[str, ...] = ()
    before: Tuple[str, ...] = ()
    dependent_for: Tuple[str, ...] = ()
    only_when: Optional[Callable[[], bool]] = None
    description: str = ""

    def __post_init__(self):
        self.depends_on = tuple(self.depends_on)
        self.after = tuple(self.after)
        self.before = tuple(self.before)
        self.dependent_for = tuple(self.dependent_for)


@dataclass
class TaskGraph:
    """Fixed set of tasks with hard and soft ordering edges"""

    tasks: Dict[str, Task] = field(default_factory=dict)

    def add(self, task: Task) -> Task:
        if task.name in self.tasks:
            raise TaskGraphError(f"Task '{task.name}' is already registered")
        self.tasks[task.name] = task
        return task

    def get(self, name: str) -> Task:
        try:
            return self.tasks[name]
        except KeyError:
            available = ", ".join(self.tasks)
            raise TaskGraphError(f"Unknown task '{name}'. Available: {available}") from None

    @property
    def names(self) -> List[str]:
        return list(self.tasks)

    def _check_references(self) -> None:
        for task in self.tasks.values():
            for edge in (task.depends_on, task.after, task.before, task.dependent_for):
                for name in edge:
                    if name not in self.tasks:
                        raise TaskGraphError(f"Task '{task.name}' references unknown task '{name}'")

    def hard_dependencies(self, name: str) -> List[str]:
        """Tasks that must complete before ``name``, including dependent_for edges"""
        task = self.get(name)
        deps = list(task.depends_on)
        for other in self.tasks.values():
            if name in other.dependent_for and other.name not in deps:
                deps.append(other.name)
        return deps

    def _soft_predecessors(self, name: str) -> List[str]:
        task = self.get(name)
        preds = list(task.after)
        for other in self.tasks.values():
            if name in other.before and other.name not in preds:
                preds.append(other.name)
        return preds

    def closure(self, root: str) -> Set[str]:
        """The root and every task it transitively requires"""
        pending = [self.get(root).name]
        self._check_references()
        required: Set[str] = set()
        while pending:
            name = pending.pop()
            if name in required:
                continue
            required.add(name)
            pending.extend(self.hard_dependencies(name))
        return required

    def plan(self, root: str) -> List[str]:
        """
        Execution order for a root task

        Kahn's algorithm over hard and soft edges restricted to the tasks
        the root requires. Ties go to registration order, so the plan is
        the same on every run.

        Raises:
            TaskGraphError: unknown root or a cycle among the required tasks
        """
        required = self.closure(root)
        order_index = {name: index for index, name in enumerate(self.tasks)}

        predecessors: Dict[str, Set[str]] = {}
        for name in required:
            preds = set(self.hard_dependencies(name)) | set(self._soft_predecessors(name))
            predecessors[name] = preds & required

        plan: List[str] = []
        done: Set[str] = set()
        while len(plan) < len(required):
            ready = sorted(
                (name for name in required - done if predecessors[name] <= done),
                key=order_index.__getitem__,
            )
            if not ready:
                stuck = sorted(required - done, key=order_index.__getitem__)
                raise TaskGraphError(f"Cycle detected between tasks: {', '.join(stuck)}")
            plan.append(ready[0])
            done.add(ready[0])
        return plan

    def describe(self, names: Optional[Iterable[str]] = None) -> List[str]:
        """One line per task: name, description and hard dependencies"""
        lines = []
        for name in names or self.tasks:
            task = self.get(name)
            deps = ", ".join(self.hard_dependencies(name)) or "-"
            lines.append(f"{name:18} {task.description or ''} (requires: {deps})")
        return lines


__all__ = ["Task", "TaskGraph", "TaskGraphError"]
