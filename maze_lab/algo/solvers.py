from abc import ABC, abstractmethod
from collections import deque
from enum import Enum
from typing import Dict, List, Optional, Set, Type

from maze_lab.core.errors import UnknownPolicy
from maze_lab.core.grid import Coordinate, Grid


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class Outcome(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"


class SearchEngine(ABC):
    """
    Resumable search that explores one cell per step() call.

    Subclasses only decide the frontier discipline (_new_frontier/_push/_pop);
    visiting, parent tracking and path reconstruction are shared.
    """
    name = "Search"

    def __init__(self):
        self.grid: Optional[Grid] = None
        self.start: Optional[Coordinate] = None
        self.end: Optional[Coordinate] = None
        self.state = RunState.IDLE
        self.outcome: Optional[Outcome] = None
        self.steps = 0
        self.frontier = None
        self.visited: Set[Coordinate] = set()
        self.parents: Dict[Coordinate, Coordinate] = {}
        self._last: List[Coordinate] = []
        self._path: List[Coordinate] = []

    @abstractmethod
    def _new_frontier(self):
        pass

    @abstractmethod
    def _push(self, cell: Coordinate):
        pass

    @abstractmethod
    def _pop(self) -> Coordinate:
        pass

    def init(self, grid: Grid, start: Coordinate, end: Coordinate):
        """Discards any previous run and seeds the frontier with start."""
        self.grid = grid
        self.start = Coordinate(*start)
        self.end = Coordinate(*end)
        self.state = RunState.RUNNING
        self.outcome = None
        self.steps = 0
        self.frontier = self._new_frontier()
        self.visited = {self.start}
        self.parents = {}
        self._last = []
        self._path = []
        self._push(self.start)

    def step(self) -> bool:
        """
        Explores exactly one cell. Returns True once the search is over,
        either because end was reached or the frontier ran dry.
        """
        if self.state is RunState.DONE:
            return True
        if self.state is RunState.IDLE:
            raise RuntimeError(f"{self.name}: init() must be called before step()")

        self.steps += 1

        if not self.frontier:
            self._last = []
            self._finish(Outcome.UNSOLVABLE)
            return True

        current = self._pop()
        self._last = [current]

        if current == self.end:
            self._path = self.reconstruct_path()
            self._finish(Outcome.SOLVED)
            return True

        for nxt in self.grid.open_neighbors(current):
            if nxt not in self.visited:
                self.visited.add(nxt)
                self.parents[nxt] = current
                self._push(nxt)

        return False

    def _finish(self, outcome: Outcome):
        self.state = RunState.DONE
        self.outcome = outcome

    def abort(self):
        """Stops the search as unsolvable; later step() calls just return True."""
        self._path = []
        self._finish(Outcome.UNSOLVABLE)

    def reconstruct_path(self) -> List[Coordinate]:
        """Walks parent links back from end to start, then reverses."""
        if self.end != self.start and self.end not in self.parents:
            return []

        path = [self.end]
        curr = self.end
        while curr != self.start:
            curr = self.parents[curr]
            path.append(curr)
        path.reverse()
        return path

    def run_all(self) -> List[Coordinate]:
        """Helper to step the search to completion."""
        while not self.step():
            pass
        return self.path

    @property
    def visited_this_step(self) -> List[Coordinate]:
        return list(self._last)

    @property
    def path(self) -> List[Coordinate]:
        return list(self._path)

    @property
    def done(self) -> bool:
        return self.state is RunState.DONE

    @property
    def solved(self) -> bool:
        return self.outcome is Outcome.SOLVED

    @property
    def visited_count(self) -> int:
        return len(self.visited)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self.state.value}, steps={self.steps})"


class BreadthFirstSearch(SearchEngine):
    """FIFO frontier: cells come out in distance order, so the path is a shortest one."""
    name = "BFS (Queue)"

    def _new_frontier(self):
        return deque()

    def _push(self, cell: Coordinate):
        self.frontier.append(cell)

    def _pop(self) -> Coordinate:
        return self.frontier.popleft()


class DepthFirstSearch(SearchEngine):
    """LIFO frontier: dives deep before backtracking, no shortest-path guarantee."""
    name = "DFS (Stack)"

    def _new_frontier(self):
        return []

    def _push(self, cell: Coordinate):
        self.frontier.append(cell)

    def _pop(self) -> Coordinate:
        return self.frontier.pop()


SOLVERS: Dict[str, Type[SearchEngine]] = {
    "bfs": BreadthFirstSearch,
    "dfs": DepthFirstSearch,
}

# Class names accepted by the old lab runner
ALIASES: Dict[str, str] = {
    "bfssolver": "bfs",
    "dfssolver": "dfs",
}


def create_solver(name: str) -> SearchEngine:
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    cls = SOLVERS.get(key)
    if cls is None:
        raise UnknownPolicy(name, known=SOLVERS.keys())
    return cls()
