"""JSON files kept in the per-user application data directory."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import platformdirs

APP_NAME = "yomine"

_log = logging.getLogger(__name__)

_LOAD_ERRORS = (OSError, ValueError, KeyError, TypeError)


def get_app_data_dir() -> Path:
    """Return the application's data directory, creating it when possible."""
    try:
        app_dir = Path(platformdirs.user_data_dir(APP_NAME, appauthor=False))
    except Exception:  # platform lookup failed; fall back to the working directory
        return Path(".")
    try:
        app_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        pass
    return app_dir


def get_data_file_path(filename: str) -> Path:
    """Return the path of ``filename`` inside the data directory."""
    return get_app_data_dir() / filename


def _to_jsonable(data: Any) -> Any:
    to_dict = getattr(data, "to_dict", None)
    return to_dict() if callable(to_dict) else data


def save_json(data: Any, filename: str) -> None:
    """Write ``data`` as pretty-printed JSON.

    Objects with a ``to_dict`` method are serialised through it.
    """
    file_path = get_data_file_path(filename)
    text = json.dumps(_to_jsonable(data), indent=2, ensure_ascii=False)
    file_path.write_text(text, encoding="utf-8")
    _log.info("Data saved to: %s", file_path)


def load_json(filename: str, default_factory: Callable[[], Any] = dict) -> Any:
    """Load a JSON file, or return ``default_factory()`` when it does not exist.

    If ``default_factory`` has a ``from_dict`` method, the parsed data is
    passed through it. Read and parse errors propagate.
    """
    file_path = get_data_file_path(filename)
    if not file_path.exists():
        return default_factory()

    data = json.loads(file_path.read_text(encoding="utf-8"))
    from_dict = getattr(default_factory, "from_dict", None)
    if callable(from_dict):
        data = from_dict(data)
    _log.info("Data loaded from: %s", file_path)
    return data


def load_json_or_default(filename: str, default_factory: Callable[[], Any] = dict) -> Any:
    """Like :func:`load_json`, but fall back to the default on any load error."""
    try:
        return load_json(filename, default_factory)
    except _LOAD_ERRORS as exc:
        _log.warning("Failed to load %s: %s. Using defaults.", filename, exc)
        return default_factory()


def delete_data_file(filename: str) -> None:
    """Remove a data file if it exists."""
    file_path = get_data_file_path(filename)
    if file_path.exists():
        file_path.unlink()
        _log.info("Deleted: %s", file_path)


def data_file_exists(filename: str) -> bool:
    """Tell whether a data file exists."""
    return get_data_file_path(filename).exists()