from __future__ import annotations

import json
from pathlib import Path

import pytest

from skyjosim.paths import get_paths
from skyjosim.services.settings import SettingsError, SettingsService


def _service() -> SettingsService:
    paths = get_paths()
    return SettingsService(paths.data_dir, paths.schema_dir)


def test_default_table_validates() -> None:
    service = _service()
    service.validate_all()
    table = service.load_table()
    assert [s.name for s in table.seats] == ["A", "B"]
    assert table.frame_rate == 10
    assert table.log_level == "info"
    players = table.build_players()
    assert [p.strategy.name for p in players] == ["BASIC_STRATEGY", "BASIC_STRATEGY"]


def test_table_override_file(tmp_path: Path) -> None:
    path = tmp_path / "table.json"
    path.write_text(
        json.dumps({"players": [{"name": "X"}, {"name": "Y"}, {"name": "Z"}], "seed": 12}),
        encoding="utf-8",
    )
    table = _service().load_table(path)
    assert table.seed == 12
    assert len(table.seats) == 3
    assert table.seats[0].strategy == "BASIC_STRATEGY"


@pytest.mark.parametrize(
    "raw",
    [
        {"players": [{"name": "solo"}]},
        {"players": [{"name": "A"}, {"name": "B", "strategy": "RANDOM"}]},
        {"players": [{"name": "A"}, {"name": "B"}], "log_level": "loud"},
        {"players": [{"name": "A"}, {"name": "A"}]},
    ],
)
def test_invalid_tables_rejected(tmp_path: Path, raw: dict[str, object]) -> None:
    path = tmp_path / "table.json"
    path.write_text(json.dumps(raw), encoding="utf-8")
    with pytest.raises(SettingsError):
        _service().load_table(path)


def test_missing_and_broken_files(tmp_path: Path) -> None:
    with pytest.raises(SettingsError):
        _service().load_table(tmp_path / "nope.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{", encoding="utf-8")
    with pytest.raises(SettingsError):
        _service().load_table(broken)
