import json
from pathlib import Path

import pytest

from academy.utils import json_utils


def test_json_round_trip(tmp_path: Path) -> None:
    payload = {"message": "привет", "count": 2}
    dumped = json_utils.json_dump(payload)
    assert "привет" in dumped
    assert json_utils.json_load(dumped) == payload

    path = tmp_path / "nested" / "payload.json"
    json_utils.write_json_file(path, payload)
    assert json_utils.read_json_file(path, {}) == payload
    assert json_utils.read_json_file(tmp_path / "missing.json", {"fallback": True}) == {"fallback": True}


def test_write_leaves_no_temp_file(tmp_path: Path) -> None:
    path = tmp_path / "visited.json"
    json_utils.write_json_file(path, {"a": 1})
    json_utils.write_json_file(path, {"a": 2})

    assert [p.name for p in tmp_path.iterdir()] == ["visited.json"]
    assert json_utils.read_json_file(path, {}) == {"a": 2}


def test_read_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        json_utils.read_json_file(path, {})
