"""Public runtime orchestration entry points.

This package groups the interactive bootstrap (`run_browser`) and the
driver loop used by tests and composition code.
"""

from __future__ import annotations


def run_browser(*args, **kwargs):
    """Lazily import the browser entrypoint to avoid terminal setup on import."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


def run_driver(*args, **kwargs):
    """Lazily import the driver loop to avoid package-import cycles."""
    from .loop import run_driver as _run_driver

    return _run_driver(*args, **kwargs)


__all__ = [
    "run_browser",
    "run_driver",
]
