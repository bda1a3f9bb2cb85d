"""Input-layer public API for key decoding and routing.

Low-level terminal decoding (`read_key`) is kept apart from routing
(`route_key`), which turns tokens into session messages.
"""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, normalize_enter, read_key
from .router import route_key

__all__ = [
    "read_key",
    "normalize_enter",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "route_key",
]
