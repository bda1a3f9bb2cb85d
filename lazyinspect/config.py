"""Persistent JSON config helpers.

Stores bookmarks, recently visited paths, the evaluator command, and the
preview highlight style. Malformed or missing config falls back to defaults;
write failures are logged and never interrupt the session.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from pathlib import Path

from platformdirs import user_config_dir

from .model import MAX_RECENTS, Bookmark, TreePath

logger = logging.getLogger(__name__)

APP_NAME = "lazyinspect"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
WORKER_ENV = "LAZYINSPECT_WORKER"
DEFAULT_WORKER_COMMAND: tuple[str, ...] = ("nix-inspect-worker",)
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> bool:
    """Persist config data as pretty-printed JSON; returns success."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Failed to write config %s: %s", CONFIG_PATH, exc)
        return False
    return True


def load_bookmarks() -> list[Bookmark]:
    """Load bookmarks, dropping entries that are not ``{display, path}`` strings."""
    value = load_config().get("bookmarks")
    if not isinstance(value, list):
        return []

    bookmarks: list[Bookmark] = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        display = raw.get("display")
        path = raw.get("path")
        if not isinstance(display, str) or not isinstance(path, str):
            continue
        bookmarks.append(Bookmark(display=display, path=TreePath.parse(path)))
    return bookmarks


def save_bookmarks(bookmarks: list[Bookmark]) -> bool:
    """Rewrite the whole bookmark list."""
    config = load_config()
    config["bookmarks"] = [
        {"display": bookmark.display, "path": bookmark.path.render()}
        for bookmark in bookmarks
    ]
    return save_config(config)


def load_recents() -> list[TreePath]:
    value = load_config().get("recents")
    if not isinstance(value, list):
        return []
    recents: list[TreePath] = []
    for raw in value:
        if not isinstance(raw, str):
            continue
        path = TreePath.parse(raw)
        if path not in recents:
            recents.append(path)
    return recents[:MAX_RECENTS]


def save_recents(recents: list[TreePath]) -> bool:
    config = load_config()
    config["recents"] = [path.render() for path in recents[:MAX_RECENTS]]
    return save_config(config)


def load_worker_command() -> list[str]:
    """Resolve the evaluator command from the environment, config, or default.

    String values are split with shell quoting rules.
    """
    env_value = os.environ.get(WORKER_ENV, "").strip()
    if env_value:
        return shlex.split(env_value)
    value = load_config().get("worker_command")
    if isinstance(value, str) and value.strip():
        return shlex.split(value)
    if isinstance(value, list) and value and all(isinstance(part, str) for part in value):
        return list(value)
    return list(DEFAULT_WORKER_COMMAND)


def load_style_name() -> str:
    """Load persisted preview style name, falling back to the default."""
    value = load_config().get("style")
    if not isinstance(value, str):
        return DEFAULT_STYLE
    stripped = value.strip()
    return stripped if stripped else DEFAULT_STYLE
