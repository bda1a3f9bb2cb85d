"""Runtime composition layer for lazyinspect.

Builds the session from persisted config, wires it to the evaluator client,
starts the producer threads, and runs the driver inside raw terminal mode.
"""

from __future__ import annotations

import logging
import queue
import shutil
import sys
import threading
from collections.abc import Sequence

from .. import config
from .. import messages as msg
from ..evaluator import EvaluatorClient
from ..model import TreePath
from ..render import render_session, write_frame
from ..render.theme import theme_for
from ..session import BrowseSession, SessionCallbacks
from .loop import input_producer, result_relay, run_driver
from .terminal import TerminalController

logger = logging.getLogger(__name__)

CLIENT_JOIN_TIMEOUT_SECONDS = 3.0


def build_session(client: EvaluatorClient) -> BrowseSession:
    """Create a session whose side effects go to ``client`` and the config file."""
    callbacks = SessionCallbacks(
        request_fetch=client.request,
        save_bookmarks=config.save_bookmarks,
        save_recents=config.save_recents,
    )
    return BrowseSession(
        callbacks,
        bookmarks=config.load_bookmarks(),
        recents=config.load_recents(),
    )


def run_browser(
    root_expression: str,
    worker_command: Sequence[str],
    initial_path: TreePath | None = None,
    style: str = config.DEFAULT_STYLE,
    no_color: bool = False,
) -> None:
    """Browse ``root_expression`` interactively until the user quits."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    theme = theme_for(no_color)

    inbox: queue.Queue[msg.Message] = queue.Queue()
    client = EvaluatorClient(worker_command, root_expression)
    session = build_session(client)
    stop = threading.Event()
    threads = [
        threading.Thread(
            target=input_producer,
            args=(stdin_fd, inbox, stop),
            name="lazyinspect-input",
            daemon=True,
        ),
        threading.Thread(
            target=result_relay,
            args=(client.results, inbox, stop),
            name="lazyinspect-relay",
            daemon=True,
        ),
    ]

    def render(current: BrowseSession) -> int:
        size = shutil.get_terminal_size((80, 24))
        rows, list_height = render_session(current, size.columns, size.lines, theme, style, no_color)
        write_frame(stdout_fd, rows)
        return list_height

    if initial_path is not None:
        inbox.put(msg.GoToPath(initial_path))

    logger.info("Starting evaluator %r", worker_command)
    client.start()
    try:
        with terminal.raw_mode():
            for thread in threads:
                thread.start()
            run_driver(session, inbox, render)
    finally:
        stop.set()
        client.close()
        client.join(CLIENT_JOIN_TIMEOUT_SECONDS)
        logger.info("Session ended")
