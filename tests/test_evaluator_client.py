"""Evaluator client tests against a scripted fake evaluator process.

The fake speaks the line protocol: it reads the root expression, then answers
one JSON line per dotted-path request.
"""

from __future__ import annotations

import subprocess
import sys
import unittest
from unittest import mock

from lazyinspect.evaluator import EvaluatorClient
from lazyinspect.model import LOADING, ErrorValue, IntValue, ListValue, StringValue, TreePath

FAKE_EVALUATOR = r"""
import json
import os
import sys

root = sys.stdin.readline().rstrip("\n")
for line in sys.stdin:
    path = line.rstrip("\n")
    if path == "":
        reply = json.dumps({"type": "7", "data": ["a", "echo"]})
    elif path == "a":
        reply = json.dumps({"type": "1", "data": 1})
    elif path == "echo":
        reply = json.dumps({"type": "4", "data": root})
    elif path == "crash":
        os.close(0)
        sys.exit(1)
    else:
        reply = "error"
    sys.stdout.write(reply + "\n")
    sys.stdout.flush()
"""

RESULT_TIMEOUT_SECONDS = 10.0


class EvaluatorClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = EvaluatorClient([sys.executable, "-c", FAKE_EVALUATOR], "import ./. {}")
        self.client.start()

    def tearDown(self) -> None:
        self.client.close()
        self.client.join(RESULT_TIMEOUT_SECONDS)

    def _next(self):
        return self.client.results.get(timeout=RESULT_TIMEOUT_SECONDS)

    def test_requests_report_loading_then_value_in_order(self) -> None:
        root = TreePath()
        child = TreePath.parse("a")
        self.client.request(root)
        self.client.request(child)

        self.assertEqual(self._next(), (root, LOADING))
        self.assertEqual(self._next(), (root, ListValue(("a", "echo"))))
        self.assertEqual(self._next(), (child, LOADING))
        self.assertEqual(self._next(), (child, IntValue(1)))

    def test_root_expression_is_sent_first(self) -> None:
        path = TreePath.parse("echo")
        self.client.request(path)
        self.assertEqual(self._next(), (path, LOADING))
        self.assertEqual(self._next(), (path, StringValue("import ./. {}")))

    def test_decode_failure_is_scoped_to_its_path(self) -> None:
        bad = TreePath.parse("missing")
        good = TreePath.parse("a")
        self.client.request(bad)
        self.client.request(good)

        self.assertEqual(self._next(), (bad, LOADING))
        path, value = self._next()
        self.assertEqual(path, bad)
        self.assertIsInstance(value, ErrorValue)
        self.assertEqual(self._next(), (good, LOADING))
        self.assertEqual(self._next(), (good, IntValue(1)))
        self.assertFalse(self.client.failed)

    def test_evaluator_exit_becomes_error_value(self) -> None:
        path = TreePath.parse("crash")
        self.client.request(path)
        self.assertEqual(self._next(), (path, LOADING))
        result_path, value = self._next()
        self.assertEqual(result_path, path)
        self.assertIsInstance(value, ErrorValue)

    def test_write_failure_stops_serving_requests(self) -> None:
        crash = TreePath.parse("crash")
        child = TreePath.parse("a")
        with self.assertLogs("lazyinspect.evaluator.client", level="ERROR"):
            self.client.request(crash)
            self.client.request(child)
            self.client.request(child)
            self.assertEqual(self._next(), (crash, LOADING))
            self.assertIsInstance(self._next()[1], ErrorValue)
            self.assertEqual(self._next(), (child, LOADING))
            self.client.join(RESULT_TIMEOUT_SECONDS)

        self.assertTrue(self.client.failed)
        self.assertFalse(self.client._thread.is_alive())
        self.assertTrue(self.client.results.empty())


class EvaluatorShutdownTests(unittest.TestCase):
    def test_close_stops_the_evaluator_process(self) -> None:
        processes: list[subprocess.Popen] = []

        def popen(*args, **kwargs) -> subprocess.Popen:
            process = subprocess.Popen(*args, **kwargs)
            processes.append(process)
            return process

        client = EvaluatorClient([sys.executable, "-c", FAKE_EVALUATOR], "{}", popen=popen)
        client.start()
        path = TreePath.parse("a")
        client.request(path)
        self.assertEqual(client.results.get(timeout=RESULT_TIMEOUT_SECONDS), (path, LOADING))
        self.assertEqual(client.results.get(timeout=RESULT_TIMEOUT_SECONDS), (path, IntValue(1)))

        client.close()
        client.join(RESULT_TIMEOUT_SECONDS)

        self.assertFalse(client.failed)
        self.assertEqual(len(processes), 1)
        self.assertIsNotNone(processes[0].poll())

    def test_multi_line_root_expression_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            EvaluatorClient(["unused"], "let\n  # comment\nin {}")


class EvaluatorSpawnFailureTests(unittest.TestCase):
    def test_spawn_failure_marks_client_failed(self) -> None:
        popen = mock.Mock(side_effect=FileNotFoundError("no such evaluator"))
        client = EvaluatorClient(["missing-evaluator"], "{}", popen=popen)
        with self.assertLogs("lazyinspect.evaluator.client", level="ERROR"):
            client.start()
            client.join(RESULT_TIMEOUT_SECONDS)

        self.assertTrue(client.failed)
        self.assertTrue(client.results.empty())


if __name__ == "__main__":
    unittest.main()
