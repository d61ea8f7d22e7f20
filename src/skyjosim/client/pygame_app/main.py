from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from skyjosim.engine.driver import run_round
from skyjosim.engine.round import new_round
from skyjosim.logs import LEVEL_NAMES, configure_logging
from skyjosim.paths import get_paths
from skyjosim.services.settings import SettingsService, TableSettings

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene

logger = logging.getLogger(__name__)


def _run_headless(table: TableSettings, seed: int | None) -> int:
    round_ = new_round(table.build_players(), seed=seed)
    driver = run_round(round_)
    scores = ", ".join(f"{name}={points}" for name, points in round_.scores().items())
    if round_.winner is None:
        logger.error("Round %d stopped without a winner after %d ticks (%s)", round_.seed, driver.ticks, scores)
        return 1
    logger.info("Round %d won by %s after %d ticks (%s)", round_.seed, round_.winner.name, driver.ticks, scores)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(prog="skyjo-sim")
    parser.add_argument("--width", type=int, default=800)
    parser.add_argument("--height", type=int, default=480)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--fps", type=int, default=None, help="frames (engine steps) per second")
    parser.add_argument("--log-level", choices=LEVEL_NAMES, default=None)
    parser.add_argument("--table", type=Path, default=None, help="alternative table.json")
    parser.add_argument("--headless", action="store_true", help="play one round without a window")
    args = parser.parse_args()

    paths = get_paths()
    settings = SettingsService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    table = settings.load_table(args.table)
    configure_logging(args.log_level or table.log_level)
    seed = args.seed if args.seed is not None else table.seed

    if args.headless:
        return _run_headless(table, seed)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Skyjo")

    ctx = GameContext(
        screen=screen,
        clock=pygame.time.Clock(),
        paths=paths,
        assets=AssetManager(),
        settings=settings,
        frame_rate=args.fps or table.frame_rate,
        seed=seed,
        table=table,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
