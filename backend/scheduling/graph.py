"""Task dependency graph.

An edge (predecessor, successor) means the successor may not start before the
predecessor completes. The graph owns its adjacency map (predecessor -> set of
successors) and keeps it acyclic: every insertion is preceded by a
reachability check, and a rejected insertion leaves the graph untouched.
"""

import logging
from typing import Dict, Hashable, Iterable, Iterator, Set, Tuple

from .exceptions import CyclicDependency, EdgeNotFound, SelfDependency

logger = logging.getLogger(__name__)

TaskId = Hashable
Edge = Tuple[TaskId, TaskId]


class DependencyGraph:
    """Directed acyclic graph of task-to-task dependencies."""

    def __init__(self) -> None:
        self._successors: Dict[TaskId, Set[TaskId]] = {}

    @classmethod
    def from_edges(cls, edges: Iterable[Edge]) -> "DependencyGraph":
        """Build a snapshot from persisted (predecessor, successor) pairs.

        Pairs are loaded as-is, without cycle checks, so that a malformed
        stored state is still representable and can be reasoned about.
        """
        graph = cls()
        for predecessor, successor in edges:
            graph._successors.setdefault(predecessor, set()).add(successor)
        return graph

    def __contains__(self, edge: Edge) -> bool:
        predecessor, successor = edge
        return successor in self._successors.get(predecessor, ())

    def __len__(self) -> int:
        return sum(len(s) for s in self._successors.values())

    def edges(self) -> Iterator[Edge]:
        for predecessor, successors in self._successors.items():
            for successor in successors:
                yield predecessor, successor

    def direct_successors(self, task_id: TaskId) -> frozenset:
        return frozenset(self._successors.get(task_id, ()))

    def direct_predecessors(self, task_id: TaskId) -> frozenset:
        return frozenset(p for p, succ in self._successors.items() if task_id in succ)

    def can_reach(self, source: TaskId, target: TaskId) -> bool:
        """Return True if `target` is reachable from `source` along existing edges.

        Iterative depth-first search with a visited set: each node is expanded
        at most once, so the cost is bounded by the edges reachable from
        `source` and the search terminates even if the stored edges already
        contain a cycle.
        """
        visited: Set[TaskId] = set()
        stack = [source]
        while stack:
            node = stack.pop()
            if node == target:
                return True
            if node in visited:
                continue
            visited.add(node)
            for neighbour in self._successors.get(node, ()):
                if neighbour not in visited:
                    stack.append(neighbour)
        return False

    def add_edge(self, predecessor: TaskId, successor: TaskId) -> None:
        """Insert predecessor -> successor.

        Raises:
            SelfDependency: if both ends are the same task.
            CyclicDependency: if `successor` can already reach `predecessor`.
        """
        if predecessor == successor:
            raise SelfDependency(predecessor)
        if self.can_reach(successor, predecessor):
            logger.warning("Rejected dependency %s -> %s: would create a cycle", predecessor, successor)
            raise CyclicDependency(predecessor, successor)
        self._successors.setdefault(predecessor, set()).add(successor)

    def remove_edge(self, predecessor: TaskId, successor: TaskId) -> None:
        successors = self._successors.get(predecessor)
        if not successors or successor not in successors:
            raise EdgeNotFound(predecessor, successor)
        successors.remove(successor)
        if not successors:
            del self._successors[predecessor]

    def remove_all_edges_for(self, task_id: TaskId) -> None:
        """Drop every edge in which `task_id` is predecessor or successor."""
        self._successors.pop(task_id, None)
        for predecessor in list(self._successors):
            successors = self._successors[predecessor]
            successors.discard(task_id)
            if not successors:
                del self._successors[predecessor]
