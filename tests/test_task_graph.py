import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from build_pipeline.tasks import Task, TaskGraph, TaskGraphError, TaskRunner, TaskStatus
from build_pipeline.utils import Logger


def _graph(calls, guards=None, fail=None):
    """Same shape as the real pipeline, recording executed bodies"""
    guards = guards or {}

    def body(name):
        def action():
            calls.append(name)
            if name == fail:
                raise RuntimeError(f"{name} failed")
        return action

    graph = TaskGraph()
    graph.add(Task("Check", body("Check"), before=("Clean",)))
    graph.add(Task("Clean", body("Clean"), depends_on=("Check",), only_when=guards.get("Clean")))
    graph.add(Task("Restore", body("Restore"), depends_on=("Clean",)))
    graph.add(Task("Version", body("Version"), dependent_for=("Publish",), after=("Restore",),
                   only_when=guards.get("Version")))
    graph.add(Task("Tests", body("Tests"), dependent_for=("Publish",), after=("Restore", "Version"),
                   only_when=guards.get("Tests")))
    graph.add(Task("Publish", body("Publish"), depends_on=("Version", "Restore")))
    return graph


def test_plan_orders_dependencies_first():
    graph = _graph([])

    assert graph.plan("Publish") == ["Check", "Clean", "Restore", "Version", "Tests", "Publish"]


def test_plan_only_pulls_hard_dependencies():
    graph = _graph([])

    assert graph.plan("Restore") == ["Check", "Clean", "Restore"]
    # Version only runs after Restore, it does not require it
    assert graph.plan("Version") == ["Version"]


def test_dependent_for_adds_hard_edge():
    graph = _graph([])

    assert graph.hard_dependencies("Publish") == ["Version", "Restore", "Tests"]


def test_soft_edges_order_tasks_when_both_run():
    graph = TaskGraph()
    graph.add(Task("B", lambda: None, after=("A",)))
    graph.add(Task("A", lambda: None))
    graph.add(Task("Root", lambda: None, depends_on=("B", "A")))

    assert graph.plan("Root") == ["A", "B", "Root"]


def test_ties_follow_registration_order():
    graph = TaskGraph()
    graph.add(Task("Z", lambda: None))
    graph.add(Task("Y", lambda: None))
    graph.add(Task("Root", lambda: None, depends_on=("Y", "Z")))

    assert graph.plan("Root") == ["Z", "Y", "Root"]


def test_cycle_is_rejected():
    graph = TaskGraph()
    graph.add(Task("A", lambda: None, depends_on=("B",)))
    graph.add(Task("B", lambda: None, after=("A",)))

    with pytest.raises(TaskGraphError, match="Cycle"):
        graph.plan("A")


def test_unknown_reference_is_rejected():
    graph = TaskGraph()
    graph.add(Task("A", lambda: None, depends_on=("Missing",)))

    with pytest.raises(TaskGraphError, match="Missing"):
        graph.plan("A")
    with pytest.raises(TaskGraphError, match="Unknown task"):
        graph.plan("Nope")


def test_duplicate_task_is_rejected():
    graph = TaskGraph()
    graph.add(Task("A", lambda: None))

    with pytest.raises(TaskGraphError):
        graph.add(Task("A", lambda: None))


def test_runner_executes_each_task_once():
    calls = []
    runner = TaskRunner(_graph(calls), Logger())

    results = runner.run("Publish")

    assert calls == ["Check", "Clean", "Restore", "Version", "Tests", "Publish"]
    assert all(r.status == TaskStatus.SUCCEEDED for r in results)


def test_false_guard_skips_body_but_satisfies_dependents():
    calls = []
    guards = {"Clean": lambda: False, "Version": lambda: False}
    runner = TaskRunner(_graph(calls, guards=guards), Logger())

    results = {r.name: r.status for r in runner.run("Publish")}

    assert calls == ["Check", "Restore", "Tests", "Publish"]
    assert results["Clean"] == TaskStatus.SKIPPED
    assert results["Version"] == TaskStatus.SKIPPED
    assert results["Publish"] == TaskStatus.SUCCEEDED


def test_guard_is_evaluated_when_task_is_reached():
    calls = []
    state = {"run_tests": False}
    graph = _graph(calls, guards={"Tests": lambda: state["run_tests"]})
    graph.tasks["Version"].action = lambda: state.update(run_tests=True)

    TaskRunner(graph, Logger()).run("Publish")

    assert "Tests" in calls


def test_failure_aborts_the_run():
    calls = []
    runner = TaskRunner(_graph(calls, fail="Restore"), Logger())

    with pytest.raises(RuntimeError, match="Restore failed"):
        runner.run("Publish")

    assert calls == ["Check", "Clean", "Restore"]
    assert runner.results["Restore"].status == TaskStatus.FAILED
    assert runner.results["Publish"].status == TaskStatus.NOT_RUN


def test_skip_list():
    calls = []
    runner = TaskRunner(_graph(calls), Logger(), skip=["Clean"])

    runner.run("Restore")

    assert calls == ["Check", "Restore"]
    assert runner.results["Clean"].status == TaskStatus.SKIPPED


def test_skip_unknown_task_is_rejected():
    with pytest.raises(TaskGraphError):
        TaskRunner(_graph([]), Logger(), skip=["Deploy"])


def test_summary_is_logged(caplog):
    caplog.set_level("INFO", logger="build_pipeline")

    TaskRunner(_graph([]), Logger()).run("Restore")

    assert "Execution plan: Check -> Clean -> Restore" in caplog.text
    assert "Build succeeded" in caplog.text
