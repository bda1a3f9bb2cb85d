"""Driver loop and the producer threads that feed its inbox.

The driver owns the ``BrowseSession``: it renders, reports the visible list
height, then blocks on the inbox and applies one message at a time. Key
input and evaluator results arrive from background threads only as
messages, so no other thread touches session state.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable

from .. import messages as msg
from ..evaluator import EvaluatorResult
from ..input import normalize_enter, read_key
from ..session import BrowseSession

logger = logging.getLogger(__name__)

INPUT_POLL_MS = 100
RELAY_POLL_SECONDS = 0.1


def input_producer(
    stdin_fd: int,
    inbox: queue.Queue[msg.Message],
    stop: threading.Event,
    read: Callable[..., str] = read_key,
) -> None:
    """Decode key tokens from ``stdin_fd`` and forward them as ``KeyPress``.

    Polls so that ``stop`` is noticed within ``INPUT_POLL_MS``.
    """
    skip_next_lf = False
    while not stop.is_set():
        try:
            raw = read(stdin_fd, timeout_ms=INPUT_POLL_MS)
        except OSError:
            logger.exception("Reading terminal input failed")
            inbox.put(msg.Quit())
            return
        if not raw:
            continue
        key, skip_next_lf = normalize_enter(raw, skip_next_lf)
        if key is None:
            continue
        inbox.put(msg.KeyPress(key))


def result_relay(
    results: queue.Queue[EvaluatorResult],
    inbox: queue.Queue[msg.Message],
    stop: threading.Event,
) -> None:
    """Move evaluator results into the inbox as ``Data`` messages."""
    while not stop.is_set():
        try:
            path, value = results.get(timeout=RELAY_POLL_SECONDS)
        except queue.Empty:
            continue
        inbox.put(msg.Data(path, value))


def run_driver(
    session: BrowseSession,
    inbox: queue.Queue[msg.Message],
    render: Callable[[BrowseSession], int],
) -> None:
    """Run until the session stops; messages still queued after Quit are dropped."""
    while session.running:
        list_height = render(session)
        if list_height != session.visible_list_height:
            session.apply(msg.ViewHeight(list_height))
        session.apply(inbox.get())
