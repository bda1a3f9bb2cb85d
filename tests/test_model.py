"""Tests for tree paths, the value cache, the browse stack, and input buffers."""

from __future__ import annotations

import unittest

from lazyinspect.model import (
    BOOKMARKS,
    LOADING,
    ROOT,
    ROOT_PATH,
    AtPath,
    BrowseStack,
    ErrorValue,
    InputBuffer,
    IntValue,
    ListValue,
    PathValueCache,
    StringValue,
    TreePath,
    clamp_cursor,
    record_recent,
)


class TreePathTests(unittest.TestCase):
    def test_parse_render_round_trip(self) -> None:
        for path in (
            ROOT_PATH,
            TreePath(("a",)),
            TreePath(("nixosConfigurations", "host", "config")),
            TreePath(("0", "1")),
        ):
            self.assertEqual(TreePath.parse(path.render()), path)

    def test_root_is_zero_segments_and_renders_empty(self) -> None:
        self.assertEqual(TreePath.parse(""), ROOT_PATH)
        self.assertEqual(ROOT_PATH.segments, ())
        self.assertEqual(ROOT_PATH.render(), "")
        self.assertTrue(ROOT_PATH.is_root)

    def test_single_empty_segment_does_not_round_trip(self) -> None:
        ambiguous = TreePath(("",))
        self.assertEqual(ambiguous.render(), "")
        self.assertEqual(TreePath.parse(ambiguous.render()), ROOT_PATH)
        self.assertNotEqual(TreePath.parse(ambiguous.render()), ambiguous)

    def test_parent_child_and_ancestors(self) -> None:
        path = TreePath.parse("a.b.c")
        self.assertEqual(path.parent(), TreePath.parse("a.b"))
        self.assertEqual(path.last, "c")
        self.assertEqual(TreePath.parse("a").parent(), ROOT_PATH)
        self.assertIsNone(ROOT_PATH.parent())
        self.assertEqual(ROOT_PATH.child("x"), TreePath.parse("x"))
        self.assertEqual(
            list(path.ancestors()),
            [TreePath.parse("a.b"), TreePath.parse("a"), ROOT_PATH],
        )


class PathValueCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        self.cache = PathValueCache()
        self.path = TreePath.parse("pkgs")

    def test_identical_list_twice_keeps_cursor(self) -> None:
        listing = ListValue(("a", "b", "c"))
        self.cache.insert_or_merge(self.path, listing)
        self.cache.set_cursor(self.path, 2)
        self.cache.insert_or_merge(self.path, listing)
        self.assertEqual(self.cache.current_list(self.path), (("a", "b", "c"), 2))

    def test_shorter_list_clamps_cursor(self) -> None:
        self.cache.insert_or_merge(self.path, ListValue(("a", "b", "c", "d")))
        self.cache.set_cursor(self.path, 3)
        self.cache.insert_or_merge(self.path, ListValue(("x", "y")))
        self.assertEqual(self.cache.current_list(self.path), (("x", "y"), 1))

    def test_refresh_through_loading_keeps_cursor(self) -> None:
        self.cache.insert_or_merge(self.path, ListValue(("a", "b", "c")))
        self.cache.set_cursor(self.path, 1)
        self.cache.insert_or_merge(self.path, LOADING)
        self.assertIsNone(self.cache.current_list(self.path))
        self.cache.insert_or_merge(self.path, ListValue(("a", "b", "c")))
        self.assertEqual(self.cache.current_list(self.path), (("a", "b", "c"), 1))

    def test_non_list_replaces_wholesale(self) -> None:
        self.cache.insert_or_merge(self.path, ListValue(("a", "b")))
        self.cache.set_cursor(self.path, 1)
        self.cache.insert_or_merge(self.path, ErrorValue("boom"))
        self.assertEqual(self.cache.get(self.path), ErrorValue("boom"))
        self.cache.insert_or_merge(self.path, ListValue(("a", "b")))
        self.assertEqual(self.cache.current_list(self.path), (("a", "b"), 0))

    def test_selected_child_follows_cursor(self) -> None:
        self.cache.insert_or_merge(self.path, ListValue(("a", "b")))
        self.assertEqual(self.cache.selected_child(self.path), TreePath.parse("pkgs.a"))
        self.cache.set_cursor(self.path, 1)
        self.assertEqual(self.cache.selected_child(self.path), TreePath.parse("pkgs.b"))

    def test_empty_list_has_no_selected_child(self) -> None:
        self.cache.insert_or_merge(self.path, ListValue(()))
        self.assertIsNone(self.cache.selected_child(self.path))

    def test_set_cursor_on_scalar_is_rejected(self) -> None:
        self.cache.insert_or_merge(self.path, IntValue(3))
        self.assertFalse(self.cache.set_cursor(self.path, 1))
        self.assertFalse(self.cache.set_cursor(TreePath.parse("missing"), 1))

    def test_clamp_cursor(self) -> None:
        self.assertEqual(clamp_cursor(5, 3), 2)
        self.assertEqual(clamp_cursor(-1, 3), 0)
        self.assertEqual(clamp_cursor(4, 0), 0)


class BrowseStackTests(unittest.TestCase):
    def test_root_floor_is_never_popped(self) -> None:
        stack = BrowseStack()
        self.assertIsNone(stack.pop())
        self.assertEqual(stack.items, (ROOT,))

    def test_push_pop_and_previous(self) -> None:
        stack = BrowseStack()
        stack.push(BOOKMARKS)
        stack.push_path(TreePath.parse("a"))
        self.assertEqual(stack.previous(), BOOKMARKS)
        self.assertEqual(stack.current_path(), TreePath.parse("a"))
        self.assertEqual(stack.pop(), AtPath(TreePath.parse("a")))
        self.assertIsNone(stack.current_path())

    def test_replace_keeps_root_at_bottom(self) -> None:
        stack = BrowseStack()
        stack.replace([AtPath(ROOT_PATH), AtPath(TreePath.parse("a"))])
        self.assertEqual(stack.items[0], ROOT)
        self.assertEqual(len(stack), 3)


class RecentsTests(unittest.TestCase):
    def test_record_recent_moves_existing_to_front(self) -> None:
        a, b, c = (TreePath.parse(name) for name in "abc")
        self.assertEqual(record_recent([a, b, c], c), [c, a, b])

    def test_record_recent_is_bounded(self) -> None:
        recents = [TreePath.parse(str(index)) for index in range(5)]
        updated = record_recent(recents, TreePath.parse("new"), max_entries=3)
        self.assertEqual(updated, [TreePath.parse("new"), TreePath.parse("0"), TreePath.parse("1")])


class InputBufferTests(unittest.TestCase):
    def test_editing_keys(self) -> None:
        buffer = InputBuffer()
        for key in ("a", "c"):
            self.assertTrue(buffer.handle_key(key))
        self.assertFalse(buffer.handle_key("LEFT"))
        self.assertTrue(buffer.handle_key("b"))
        self.assertEqual((buffer.text, buffer.cursor), ("abc", 2))
        self.assertTrue(buffer.handle_key("BACKSPACE"))
        self.assertEqual((buffer.text, buffer.cursor), ("ac", 1))
        self.assertFalse(buffer.handle_key("RIGHT"))
        self.assertEqual(buffer.cursor, 2)
        self.assertFalse(buffer.handle_key("RIGHT"))
        self.assertEqual(buffer.cursor, 2)

    def test_backspace_at_start_is_noop(self) -> None:
        buffer = InputBuffer.seeded("x")
        buffer.move_left()
        self.assertFalse(buffer.handle_key("BACKSPACE"))
        self.assertEqual(buffer.text, "x")

    def test_named_tokens_are_not_inserted(self) -> None:
        buffer = InputBuffer()
        self.assertFalse(buffer.handle_key("TAB"))
        self.assertFalse(buffer.handle_key("CTRL_D"))
        self.assertEqual(buffer.text, "")


class ValueDisplayTests(unittest.TestCase):
    def test_string_display_quotes_single_line(self) -> None:
        self.assertEqual(StringValue("hi").display(), '"hi"')

    def test_string_display_keeps_multiline_text(self) -> None:
        self.assertEqual(StringValue("a\nb").display(), "''\na\nb\n''")

    def test_list_has_type_name(self) -> None:
        self.assertEqual(ListValue(("a",)).type_name, "List")


if __name__ == "__main__":
    unittest.main()
