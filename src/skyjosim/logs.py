from __future__ import annotations

import logging

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}
LEVEL_NAMES = ("off", *LEVELS.keys())

ROOT_LOGGER = "skyjosim"


def trace(logger: logging.Logger, msg: str, *args: object) -> None:
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args)


def configure_logging(level_name: str = "info") -> None:
    """Set up console output for the `skyjosim` loggers.

    "off" silences the game entirely; host libraries keep their own level.
    """
    name = level_name.lower()
    if name not in LEVEL_NAMES:
        raise ValueError(f"Unknown log level: {level_name}")
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger(ROOT_LOGGER)
    if name == "off":
        logger.disabled = True
        return
    logger.disabled = False
    logger.setLevel(LEVELS[name])
