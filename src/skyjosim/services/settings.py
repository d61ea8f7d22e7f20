from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from skyjosim.engine.player import Player
from skyjosim.engine.strategy import get_strategy

DEFAULT_FRAME_RATE = 10
DEFAULT_LOG_LEVEL = "info"


class SettingsError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise SettingsError(f"Missing settings file: {path}") from e
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise SettingsError("\n".join(lines))


@dataclass(frozen=True)
class SeatSettings:
    name: str
    strategy: str = "BASIC_STRATEGY"


@dataclass(frozen=True)
class TableSettings:
    seats: tuple[SeatSettings, ...]
    seed: int | None = None
    frame_rate: int = DEFAULT_FRAME_RATE
    log_level: str = DEFAULT_LOG_LEVEL

    def build_players(self) -> list[Player]:
        return [Player(name=s.name, strategy=get_strategy(s.strategy)) for s in self.seats]


def parse_table(raw: Mapping[str, object]) -> TableSettings:
    raw_players = raw.get("players")
    if not isinstance(raw_players, list):
        raise SettingsError("table.players must be a list")
    seats: list[SeatSettings] = []
    for item in raw_players:
        if not isinstance(item, dict):
            raise SettingsError("table.players entries must be objects")
        seats.append(SeatSettings(name=str(item["name"]), strategy=str(item.get("strategy", "BASIC_STRATEGY"))))

    # Not enforced by the engine, but the UI tells seats apart by name
    names = [s.name for s in seats]
    if len(set(names)) != len(names):
        raise SettingsError(f"Player names must be unique: {names}")

    seed = raw.get("seed")
    frame_rate = raw.get("frame_rate", DEFAULT_FRAME_RATE)
    return TableSettings(
        seats=tuple(seats),
        seed=seed if isinstance(seed, int) else None,
        frame_rate=frame_rate if isinstance(frame_rate, int) else DEFAULT_FRAME_RATE,
        log_level=str(raw.get("log_level", DEFAULT_LOG_LEVEL)),
    )


class SettingsService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_table(self, path: Path | None = None) -> TableSettings:
        table_path = path or self._data_dir / "table.json"
        schema = _load_json(self._schema_dir / "table.schema.json")
        raw = _load_json(table_path)
        validate_json(raw, schema, context=str(table_path))
        if not isinstance(raw, dict):
            raise SettingsError("table.json must be an object")
        return parse_table(raw)

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_table()
