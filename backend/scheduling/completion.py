"""Project completion tracking.

A project is complete once it owns at least one task and every owned task is
complete. The flag is only ever set here, never cleared: reopening a task of a
completed project leaves the project marked complete.
"""

import logging
from enum import Enum
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class CompletionOutcome(str, Enum):
    MARKED_COMPLETE = "marked_complete"
    NOT_YET_COMPLETE = "not_yet_complete"


def evaluate(project: Any, tasks: Sequence[Any]) -> CompletionOutcome:
    """Mark `project` complete if all of `tasks` (its owned set) are complete.

    Idempotent. An empty task set never completes a project.
    """
    if tasks and all(t.is_completed for t in tasks):
        if not project.is_completed:
            logger.info("Project %s marked complete (%d task(s) done)", project.id, len(tasks))
        project.is_completed = True
        return CompletionOutcome.MARKED_COMPLETE
    return CompletionOutcome.NOT_YET_COMPLETE
