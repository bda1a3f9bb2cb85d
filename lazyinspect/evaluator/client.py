"""Background worker that owns the evaluator subprocess.

Requests are served strictly one at a time in FIFO order. Each request first
reports ``Loading`` so the UI can show a pending state, then the decoded value
(or an ``ErrorValue`` scoped to that path).
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable, Sequence
from queue import Queue

from ..model import LOADING, ErrorValue, NodeValue, TreePath
from .protocol import ProtocolError, decode_response, encode_request

logger = logging.getLogger(__name__)

TERMINATE_TIMEOUT_SECONDS = 2.0

_SHUTDOWN = object()

EvaluatorResult = tuple[TreePath, NodeValue]


class EvaluatorClient:
    """Sequential request/response client for one evaluator process."""

    def __init__(
        self,
        command: Sequence[str],
        root_expression: str,
        results: Queue[EvaluatorResult] | None = None,
        *,
        popen: Callable[..., subprocess.Popen] = subprocess.Popen,
        stderr: int | None = subprocess.DEVNULL,
    ) -> None:
        self.command = list(command)
        if "\n" in root_expression:
            raise ValueError("root expression must be a single line")
        self.root_expression = root_expression
        self.requests: Queue[object] = Queue()
        self.results: Queue[EvaluatorResult] = results if results is not None else Queue()
        self._popen = popen
        self._stderr = stderr
        self._thread: threading.Thread | None = None
        self._failed = threading.Event()

    @property
    def failed(self) -> bool:
        """Whether the transport broke and no further requests will be served."""
        return self._failed.is_set()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            name="lazyinspect-evaluator",
            daemon=True,
        )
        self._thread.start()

    def request(self, path: TreePath) -> None:
        """Queue ``path`` for evaluation without waiting for the answer."""
        self.requests.put(path)

    def close(self) -> None:
        """Ask the worker to stop after the requests already queued."""
        self.requests.put(_SHUTDOWN)

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        try:
            process = self._popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=self._stderr,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError:
            logger.exception("Failed to start evaluator %s", self.command)
            self._failed.set()
            return

        try:
            if not self._send(process, self.root_expression + "\n"):
                return
            while True:
                path = self.requests.get()
                if path is _SHUTDOWN:
                    break
                logger.debug("Evaluating %r", path.render())
                self.results.put((path, LOADING))
                if not self._send(process, encode_request(path)):
                    break
                self.results.put((path, self._receive(process)))
        finally:
            self._terminate(process)

    def _send(self, process: subprocess.Popen, line: str) -> bool:
        try:
            process.stdin.write(line)
            process.stdin.flush()
        except (OSError, ValueError):
            logger.exception("Failed to send request %r", line.rstrip("\n"))
            self._failed.set()
            return False
        return True

    def _receive(self, process: subprocess.Popen) -> NodeValue:
        try:
            line = process.stdout.readline()
        except (OSError, ValueError) as exc:
            logger.error("Failed to read response: %s", exc)
            return ErrorValue(f"Failed to read response: {exc}")
        if not line:
            logger.error("Evaluator closed its output")
            return ErrorValue("Failed to read response: evaluator closed its output")
        try:
            return decode_response(line)
        except ProtocolError as exc:
            logger.error("Failed to decode response %r: %s", line.rstrip("\n"), exc)
            return ErrorValue(f"Failed to decode response: {exc}")

    def _terminate(self, process: subprocess.Popen) -> None:
        for stream in (process.stdin, process.stdout):
            if stream is None:
                continue
            try:
                stream.close()
            except OSError:
                pass
        if process.poll() is not None:
            return
        process.terminate()
        try:
            process.wait(timeout=TERMINATE_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            logger.warning("Evaluator did not exit after terminate; killing it")
            process.kill()
            process.wait()
