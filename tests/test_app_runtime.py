from __future__ import annotations

import unittest
from unittest import mock

from lazyinspect import messages as msg
from lazyinspect.model import ROOT_PATH, Bookmark, TreePath
from lazyinspect.runtime.app import build_session


class BuildSessionTests(unittest.TestCase):
    def test_session_uses_persisted_state_and_client_requests(self) -> None:
        bookmark = Bookmark("hello", TreePath.parse("pkgs.hello"))
        client = mock.Mock()
        with mock.patch("lazyinspect.config.load_bookmarks", return_value=[bookmark]), mock.patch(
            "lazyinspect.config.load_recents", return_value=[TreePath.parse("lib")]
        ):
            session = build_session(client)

        self.assertEqual(session.bookmarks, [bookmark])
        self.assertEqual(session.recents, [TreePath.parse("lib")])

        session.apply(msg.ListUp())
        client.request.assert_called_once_with(ROOT_PATH)

    def test_bookmark_changes_are_saved_to_config(self) -> None:
        client = mock.Mock()
        with mock.patch("lazyinspect.config.load_bookmarks", return_value=[]), mock.patch(
            "lazyinspect.config.load_recents", return_value=[]
        ), mock.patch("lazyinspect.config.save_bookmarks") as save_bookmarks:
            session = build_session(client)
            session.go_to_path(TreePath.parse("a"))
            session.apply(msg.BookmarkInputEnter())
            session.apply(msg.CreateBookmark())

        save_bookmarks.assert_called_once_with([Bookmark("a", TreePath.parse("a"))])


if __name__ == "__main__":
    unittest.main()
