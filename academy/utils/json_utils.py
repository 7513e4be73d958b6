"""JSON file helpers for client-local documents."""
import json
import os
from pathlib import Path


def json_dump(payload: object) -> str:
    """Serialize object to pretty JSON string."""
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)


def json_load(data: str) -> object:
    """Deserialize JSON string to object."""
    return json.loads(data)


def read_json_file(path: Path, default: object) -> object:
    """Read and parse a JSON file, return ``default`` if it does not exist.

    Raises:
        json.JSONDecodeError: file exists but is not valid JSON.
    """
    if not path.exists():
        return default
    return json_load(path.read_text(encoding="utf-8"))


def write_json_file(path: Path, payload: object) -> None:
    """Write object as a JSON file, replacing the old one in a single rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(json_dump(payload), encoding="utf-8")
    os.replace(tmp_path, path)
