"""Single-hop schedule cascade.

When a task completes, each of its direct successors is slid so that it starts
the calendar day after the predecessor's end date, keeping its planned effort
(the working days its previous window contained). Successors of successors are
not touched: they move only when their own predecessor completes.

Tasks are duck-typed: anything with `id`, `start_date`, `end_date` and
`is_completed` attributes works, including unsaved Django model instances.
"""

import logging
from typing import Any, Iterable, List

from .exceptions import TaskNotCompleted
from .graph import DependencyGraph
from .workdays import ONE_DAY, window_end_date, working_days_in

logger = logging.getLogger(__name__)


class ScheduleCascader:
    def __init__(self, graph: DependencyGraph):
        self.graph = graph

    def cascade_from(self, task: Any, successor_tasks: Iterable[Any]) -> List[Any]:
        """Reschedule the direct successors of a completed `task`.

        Args:
            task: the task that has just been marked complete.
            successor_tasks: candidate tasks; those that are not direct
                successors of `task` in the graph are ignored.

        Returns:
            The successor tasks whose dates changed. Running the cascade again
            with nothing else changed returns an empty list.

        Raises:
            TaskNotCompleted: if `task` is not marked complete.
        """
        if not task.is_completed:
            raise TaskNotCompleted(task.id)

        successor_ids = self.graph.direct_successors(task.id)
        new_start = task.end_date + ONE_DAY
        changed = []
        for successor in successor_tasks:
            if successor.id not in successor_ids:
                continue
            effort = working_days_in(successor.start_date, successor.end_date)
            new_end = window_end_date(new_start, effort)
            if (successor.start_date, successor.end_date) == (new_start, new_end):
                continue
            logger.debug(
                "Task %s moved from %s..%s to %s..%s after task %s completed",
                successor.id, successor.start_date, successor.end_date, new_start, new_end, task.id,
            )
            successor.start_date = new_start
            successor.end_date = new_end
            changed.append(successor)

        logger.info("Cascade from task %s rescheduled %d of %d successor(s)",
                    task.id, len(changed), len(successor_ids))
        return changed
