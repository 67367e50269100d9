"""ORM-backed unit-of-work layer around the scheduling engine.

Fetches the state the pure engine needs, invokes it, and persists what it
changed, each operation inside one database transaction:

- dependency edits read a snapshot of the whole edge set, validate the change
  against it, and write the difference back while holding a graph-wide lock,
  so two concurrent insertions can never each pass a cycle check against a
  stale snapshot,
- completing a task runs the cascade and the project evaluation in the same
  transaction as the flag write,
- deleting a task or a project removes incident edges first.
"""

import logging
import threading
from contextlib import contextmanager
from datetime import date
from functools import reduce
from operator import or_
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

from django.db import transaction
from django.db.models import Q

from .cascade import ScheduleCascader
from .completion import CompletionOutcome, evaluate
from .graph import DependencyGraph
from .models import Project, Task, TaskDependency
from .workdays import compute_end_date

logger = logging.getLogger(__name__)

# Single-writer discipline for the edge set within this process. Every path
# that writes edges or cascades takes it before opening its transaction, never
# after a write. Deployments running several worker processes must point them
# at one database that serializes transactions (e.g. PostgreSQL SERIALIZABLE).
_graph_lock = threading.RLock()


class CompletionReport(NamedTuple):
    rescheduled: List[Task]
    project_outcome: Optional[CompletionOutcome]


# -----------------------
# Dependency graph
# -----------------------

def load_graph() -> DependencyGraph:
    """Snapshot of every persisted dependency edge."""
    return DependencyGraph.from_edges(
        TaskDependency.objects.values_list("predecessor_id", "successor_id")
    )


def _sync_edges(before: set, after: set) -> None:
    removed = before - after
    added = after - before
    if removed:
        TaskDependency.objects.filter(
            reduce(or_, (Q(predecessor_id=p, successor_id=s) for p, s in removed))
        ).delete()
    if added:
        TaskDependency.objects.bulk_create(
            [TaskDependency(predecessor_id=p, successor_id=s) for p, s in added]
        )


@contextmanager
def editing_graph() -> Iterator[DependencyGraph]:
    """Yield a locked graph snapshot; edges changed on it are written back on exit.

    If the body raises, nothing is written and the transaction rolls back.
    """
    with _graph_lock, transaction.atomic():
        graph = load_graph()
        before = set(graph.edges())
        yield graph
        _sync_edges(before, set(graph.edges()))


def declare_dependency(predecessor: Task, successor: Task) -> TaskDependency:
    with editing_graph() as graph:
        graph.add_edge(predecessor.id, successor.id)
    logger.info("Dependency %s -> %s declared", predecessor.id, successor.id)
    return TaskDependency.objects.get(predecessor=predecessor, successor=successor)


def remove_dependency(predecessor_id: int, successor_id: int) -> None:
    with editing_graph() as graph:
        graph.remove_edge(predecessor_id, successor_id)
    logger.info("Dependency %s -> %s removed", predecessor_id, successor_id)


# -----------------------
# Task dates
# -----------------------

def scheduled_end_date(start_date: date, end_date: Optional[date] = None,
                       duration: Optional[int] = None) -> date:
    """End date for a task starting on `start_date`.

    `duration` is in working days; when omitted, the calendar-day span between
    the submitted dates is taken as the working-day duration.
    """
    if duration is None:
        duration = (end_date - start_date).days if end_date is not None else 0
    return compute_end_date(start_date, duration)


def create_task(data: Dict[str, Any]) -> Task:
    data = dict(data)
    duration = data.pop("duration", None)
    data["end_date"] = scheduled_end_date(data["start_date"], data.get("end_date"), duration)
    with transaction.atomic():
        task = Task.objects.create(**data)
        if task.is_completed:
            evaluate_project(task.project)
    logger.info("Task %s created in project %s (%s..%s)", task.id, task.project_id, task.start_date, task.end_date)
    return task


def update_task(task: Task, data: Dict[str, Any]) -> Task:
    """Apply `data` to `task`; completing it triggers the cascade and project evaluation."""
    data = dict(data)
    duration = data.pop("duration", None)
    was_completed = task.is_completed
    old_start, old_end = task.start_date, task.end_date

    for attr, value in data.items():
        setattr(task, attr, value)

    if duration is not None or task.end_date != old_end:
        task.end_date = scheduled_end_date(task.start_date, task.end_date, duration)
    elif task.start_date != old_start:
        # only the start moved: keep the previous span
        task.end_date = scheduled_end_date(task.start_date, duration=(old_end - old_start).days)

    with _graph_lock, transaction.atomic():
        task.save()
        if task.is_completed and not was_completed:
            _after_completion(task)
    return task


def delete_task(task: Task) -> None:
    task_id = task.id
    with _graph_lock, transaction.atomic():
        with editing_graph() as graph:
            graph.remove_all_edges_for(task.id)
        task.delete()
    logger.info("Task %s deleted", task_id)


def assign_task(task: Task, user) -> Task:
    task.assigned_user = user
    task.save(update_fields=["assigned_user"])
    logger.info("Task %s assigned to user %s", task.id, user.pk)
    return task


# -----------------------
# Completion
# -----------------------

def complete_task(task: Task) -> CompletionReport:
    """Mark `task` complete; cascade and evaluation run only on the transition."""
    if task.is_completed:
        logger.debug("Task %s already complete, nothing to cascade", task.id)
        return CompletionReport(rescheduled=[], project_outcome=None)
    with _graph_lock, transaction.atomic():
        task.is_completed = True
        task.save(update_fields=["is_completed"])
        return _after_completion(task)


def _after_completion(task: Task) -> CompletionReport:
    rescheduled = cascade_from_task(task)
    outcome = evaluate_project(task.project)
    return CompletionReport(rescheduled=rescheduled, project_outcome=outcome)


def cascade_from_task(task: Task) -> List[Task]:
    """Reschedule the direct successors of a completed task. Safe to re-run."""
    with _graph_lock, transaction.atomic():
        graph = load_graph()
        successors = Task.objects.select_for_update().filter(id__in=graph.direct_successors(task.id))
        changed = ScheduleCascader(graph).cascade_from(task, list(successors))
        for successor in changed:
            successor.save(update_fields=["start_date", "end_date"])
    return changed


def evaluate_project(project: Project) -> CompletionOutcome:
    """Re-evaluate the completion flag of `project`. Safe to re-run."""
    with transaction.atomic():
        tasks = list(project.tasks.all())
        outcome = evaluate(project, tasks)
        if outcome is CompletionOutcome.MARKED_COMPLETE:
            project.save(update_fields=["is_completed"])
    return outcome


def delete_project(project: Project) -> None:
    project_id = project.id
    with _graph_lock, transaction.atomic():
        with editing_graph() as graph:
            for task_id in project.tasks.values_list("id", flat=True):
                graph.remove_all_edges_for(task_id)
        project.delete()
    logger.info("Project %s deleted", project_id)
