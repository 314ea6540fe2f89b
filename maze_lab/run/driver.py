import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Set

import numpy as np

from maze_lab.algo.solvers import Outcome, SearchEngine
from maze_lab.core.errors import EngineRuntimeFault
from maze_lab.core.grid import Coordinate, Grid
from maze_lab.viz.display import build_display, build_final_display

logger = logging.getLogger(__name__)


@dataclass
class EngineSlot:
    """Driver-side bookkeeping for one engine."""
    engine: SearchEngine
    steps: int = 0
    visited: Set[Coordinate] = field(default_factory=set)
    path: Optional[List[Coordinate]] = None
    done: bool = False
    fault: Optional[EngineRuntimeFault] = None

    @property
    def name(self) -> str:
        return self.engine.name

    @property
    def solved(self) -> bool:
        return bool(self.path)


@dataclass
class Frame:
    name: str
    display: np.ndarray
    steps: int
    path_length: Optional[int] # None while still running
    done: bool


@dataclass
class RunResult:
    name: str
    steps: int
    path: List[Coordinate]
    visited: int
    fault: Optional[EngineRuntimeFault] = None
    outcome: Optional[Outcome] = None

    @property
    def path_length(self) -> int:
        return len(self.path)


class RunDriver:
    """
    Steps one or two engines in lockstep over a shared, read-only grid.
    Each tick gives every unfinished engine exactly one step, in slot order.
    """

    def __init__(self, grid: Grid, engines: Sequence[SearchEngine]):
        if not 1 <= len(engines) <= 2:
            raise ValueError(f"RunDriver takes one or two engines, got {len(engines)}")

        self.grid = grid
        self.ticks = 0
        self.slots = [EngineSlot(engine) for engine in engines]

        for slot in self.slots:
            slot.visited.add(grid.start)
            try:
                slot.engine.init(grid, grid.start, grid.end)
            except Exception as e:
                self._fault(slot, e)

    @property
    def finished(self) -> bool:
        return all(slot.done for slot in self.slots)

    def tick(self) -> bool:
        """Advances every unfinished engine by one step. Returns True when all are done."""
        for slot in self.slots:
            if slot.done:
                continue
            try:
                finished = slot.engine.step()
                slot.steps += 1
                slot.visited.update(slot.engine.visited_this_step)
                if finished:
                    slot.done = True
                    slot.path = slot.engine.path
                    logger.debug(f"{slot.name} finished after {slot.steps} steps, path length {len(slot.path)}")
            except Exception as e:
                self._fault(slot, e)

        self.ticks += 1
        return self.finished

    def _fault(self, slot: EngineSlot, error: Exception):
        slot.fault = EngineRuntimeFault(slot.name, error)
        logger.exception(str(slot.fault))
        slot.engine.abort()
        slot.done = True
        slot.path = []

    def frames(self) -> List[Frame]:
        return [
            Frame(
                name=slot.name,
                display=build_display(self.grid, slot.visited, slot.path),
                steps=slot.steps,
                path_length=len(slot.path) if slot.done else None,
                done=slot.done,
            )
            for slot in self.slots
        ]

    def final_frames(self) -> List[Frame]:
        return [
            Frame(
                name=slot.name,
                display=build_final_display(self.grid, slot.path),
                steps=slot.steps,
                path_length=len(slot.path or []),
                done=True,
            )
            for slot in self.slots
        ]

    def results(self) -> List[RunResult]:
        return [
            RunResult(slot.name, slot.steps, list(slot.path or []), len(slot.visited),
                      slot.fault, slot.engine.outcome)
            for slot in self.slots
        ]

    def run(self, delay: float = 0.0, on_frame: Callable[[List[Frame]], None] = None,
            sleep: Callable[[float], None] = time.sleep) -> List[RunResult]:
        """
        Ticks until every engine is done. delay (seconds) only paces the
        animation; 0 skips sleeping and gives the same results.
        """
        while not self.finished:
            self.tick()
            if on_frame:
                on_frame(self.frames())
            if delay > 0:
                sleep(delay)

        logger.debug(f"Run complete after {self.ticks} ticks")
        return self.results()
