"""Registry of the Kais the service reports as connected.

Maintains mutable state internally but hands out immutable DeviceHandles.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .models import DeviceHandle
from .protocol.envelope import ConnectedKai

logger = logging.getLogger(__name__)

MAX_KAIS = 8


class Alias(Enum):
    """Logical roles the service can bind to a Kai."""
    DEFAULT = "default"
    DEFAULT_LEFT = "default_left"
    DEFAULT_RIGHT = "default_right"


class DeviceRegistry:
    """Fixed table of ``MAX_KAIS`` slots indexed by Kai id, plus alias bindings.

    Written only from the dispatch path and safe to read from any thread.
    Ids outside ``0..MAX_KAIS-1`` are ignored rather than growing the table.
    """

    def __init__(self):
        self._slots: List[Optional[DeviceHandle]] = [None] * MAX_KAIS
        self._aliases: Dict[Alias, Optional[DeviceHandle]] = {alias: None for alias in Alias}
        self._lock = threading.Lock()

    def replace_all(self, entries: Iterable[ConnectedKai]) -> None:
        """Replace the whole table with ``entries``.

        Kais missing from ``entries`` are dropped. An alias is only
        rebound when some entry claims it; otherwise it keeps its binding.
        """
        slots: List[Optional[DeviceHandle]] = [None] * MAX_KAIS
        claimed: Dict[Alias, DeviceHandle] = {}

        for entry in entries:
            if not 0 <= entry.kai_id < MAX_KAIS:
                logger.warning(f"Ignoring Kai with out of range id {entry.kai_id}")
                continue

            handle = DeviceHandle(kai_id=entry.kai_id, hand=entry.hand)
            slots[entry.kai_id] = handle

            if entry.default_kai:
                claimed[Alias.DEFAULT] = handle
            if entry.default_left_kai:
                claimed[Alias.DEFAULT_LEFT] = handle
            if entry.default_right_kai:
                claimed[Alias.DEFAULT_RIGHT] = handle

        with self._lock:
            self._slots = slots
            self._aliases.update(claimed)

        logger.debug(f"Connected Kais: {[h.kai_id for h in slots if h is not None]}")

    def lookup(self, kai_id: int) -> Optional[DeviceHandle]:
        """Return the handle for ``kai_id``, or None if absent or out of range."""
        if not 0 <= kai_id < MAX_KAIS:
            return None
        with self._lock:
            return self._slots[kai_id]

    def alias(self, alias: Alias) -> Optional[DeviceHandle]:
        """Return the Kai bound to ``alias``, or None if it was never bound."""
        with self._lock:
            return self._aliases[alias]

    def connected(self) -> List[DeviceHandle]:
        """Snapshot of all registered Kais, ordered by id."""
        with self._lock:
            return [handle for handle in self._slots if handle is not None]
