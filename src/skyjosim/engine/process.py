"""Resumable step processes.

A round never runs to completion on its own: the host asks for one step at a
time so it can render between any two card moves. A `Process` holds the
queue of upcoming steps; running a step may plan more steps, which are
queued ahead of everything already pending.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

StepFn = Callable[[], "Sequence[Step] | None"]


@dataclass(frozen=True)
class Step:
    label: str
    run: StepFn


@dataclass(frozen=True)
class Advance:
    done: bool
    label: str | None = None


class Process:
    def __init__(self, name: str, steps: Iterable[Step]) -> None:
        self.name = name
        self._queue: deque[Step] = deque(steps)
        self.steps_run = 0

    @property
    def done(self) -> bool:
        return not self._queue

    def pending(self) -> list[str]:
        return [s.label for s in self._queue]

    def advance(self) -> Advance:
        """Run the next step. `done` is true once nothing is left to run."""
        if not self._queue:
            return Advance(done=True)
        step = self._queue.popleft()
        follow_up = step.run()
        self.steps_run += 1
        if follow_up:
            self._queue.extendleft(reversed(list(follow_up)))
        return Advance(done=not self._queue, label=step.label)

    def run_to_end(self, max_steps: int = 100_000) -> int:
        count = 0
        while not self.done:
            if count >= max_steps:
                raise RuntimeError(f"Process {self.name!r} did not finish in {max_steps} steps")
            self.advance()
            count += 1
        return count
