from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyinspect import config
from lazyinspect.model import Bookmark, TreePath


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.json"
        patcher = mock.patch("lazyinspect.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_bookmarks_round_trip(self) -> None:
        bookmarks = [
            Bookmark(display="hello", path=TreePath.parse("pkgs.hello")),
            Bookmark(display="root", path=TreePath()),
        ]
        self.assertTrue(config.save_bookmarks(bookmarks))
        self.assertEqual(config.load_bookmarks(), bookmarks)

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved["bookmarks"][0], {"display": "hello", "path": "pkgs.hello"})

    def test_recents_round_trip_keeps_other_keys(self) -> None:
        config.save_config({"style": "native"})
        recents = [TreePath.parse("a.b"), TreePath.parse("c")]
        config.save_recents(recents)
        self.assertEqual(config.load_recents(), recents)
        self.assertEqual(config.load_style_name(), "native")

    def test_missing_file_loads_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_bookmarks(), [])
        self.assertEqual(config.load_recents(), [])
        self.assertEqual(config.load_style_name(), config.DEFAULT_STYLE)

    def test_malformed_file_loads_defaults(self) -> None:
        self.config_path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("lazyinspect.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_invalid_entries_are_dropped(self) -> None:
        config.save_config(
            {
                "bookmarks": [{"display": "ok", "path": "a"}, {"display": 1}, "junk"],
                "recents": ["a", "a", 3, "b"],
            }
        )
        self.assertEqual(config.load_bookmarks(), [Bookmark("ok", TreePath.parse("a"))])
        self.assertEqual(config.load_recents(), [TreePath.parse("a"), TreePath.parse("b")])

    def test_worker_command_resolution(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.load_worker_command(), list(config.DEFAULT_WORKER_COMMAND))
            config.save_config({"worker_command": "nix-inspect-worker --impure"})
            self.assertEqual(config.load_worker_command(), ["nix-inspect-worker", "--impure"])
            config.save_config({"worker_command": ["worker", "a b"]})
            self.assertEqual(config.load_worker_command(), ["worker", "a b"])

        with mock.patch.dict(os.environ, {config.WORKER_ENV: "env-worker 'x y'"}):
            self.assertEqual(config.load_worker_command(), ["env-worker", "x y"])

    def test_write_failure_is_logged_not_raised(self) -> None:
        blocked = Path(self._tmp.name) / "file"
        blocked.write_text("", encoding="utf-8")
        with mock.patch("lazyinspect.config.CONFIG_PATH", blocked / "config.json"):
            with self.assertLogs("lazyinspect.config", level="WARNING"):
                self.assertFalse(config.save_recents([TreePath.parse("a")]))


if __name__ == "__main__":
    unittest.main()
