"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..messages import Message

MessageFactory = Callable[[], Message | None]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single message factory."""

    combos: tuple[str, ...]
    factory: MessageFactory


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        """Initialize empty registry with optional token normalizer."""
        self._normalize = normalize if normalize is not None else self._identity
        self._factories: dict[str, MessageFactory] = {}

    @staticmethod
    def _identity(key: str) -> str:
        """Return key unchanged for exact-match dispatch registries."""
        return key

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing factories for same combos."""
        for combo in binding.combos:
            self._factories[self._normalize(combo)] = binding.factory
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> Message | None:
        """Build the message bound to ``key``, or ``None`` when unbound."""
        factory = self._factories.get(self._normalize(key))
        if factory is None:
            return None
        return factory()
