from __future__ import annotations

import enum
import logging

from .process import Advance, Process
from .round import Round

logger = logging.getLogger(__name__)


class Phase(enum.Enum):
    UNSTARTED = "unstarted"
    INITIALIZING = "initializing"
    PLAYING = "playing"
    FINISHED = "finished"


class RoundDriver:
    """Moves a round through its phases, one step per tick.

    The host calls `tick()` once per frame and renders in between.
    """

    def __init__(self, round_: Round) -> None:
        self.round = round_
        self.phase = Phase.UNSTARTED
        self.process: Process | None = None
        self.ticks = 0

    @property
    def done(self) -> bool:
        return self.phase is Phase.FINISHED

    def tick(self) -> Advance:
        self.ticks += 1
        if self.phase is Phase.UNSTARTED:
            self.process = self.round.initialize()
            self.phase = Phase.INITIALIZING
            return Advance(done=False, label="start")

        if self.phase is Phase.FINISHED or self.process is None:
            return Advance(done=True)

        adv = self.process.advance()
        if adv.done:
            if self.phase is Phase.INITIALIZING:
                self.process = self.round.play()
                self.phase = Phase.PLAYING
                logger.debug("Initialization done after %d ticks", self.ticks)
            else:
                self.phase = Phase.FINISHED
                logger.debug("Play done after %d ticks", self.ticks)
        return adv


def run_round(round_: Round, max_ticks: int = 100_000) -> RoundDriver:
    driver = RoundDriver(round_)
    while not driver.done:
        if driver.ticks >= max_ticks:
            raise RuntimeError(f"Round did not finish in {max_ticks} ticks")
        driver.tick()
    return driver
