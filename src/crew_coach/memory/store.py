"""Agent memory: bounded, per-role log of past crew interactions.

Memory lives for the process lifetime and is keyed by agent role, so two
crews whose agents share a role name also share its memory. Appends and reads
on one role are serialized; different roles never contend.
"""

from __future__ import annotations

import logging
import threading

from crew_coach.models import MemoryEntry

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 10


class MemoryStore:
    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Memory capacity must be at least 1")
        self._capacity = capacity
        self._entries: dict[str, list[MemoryEntry]] = {}
        self._role_locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lock_for(self, role: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._role_locks.get(role)
            if lock is None:
                lock = threading.Lock()
                self._role_locks[role] = lock
            return lock

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def append(self, role: str, entry: MemoryEntry) -> None:
        """Add an entry, evicting the oldest ones beyond capacity (FIFO)."""
        with self._lock_for(role):
            entries = self._entries.setdefault(role, [])
            entries.append(entry)
            overflow = len(entries) - self._capacity
            if overflow > 0:
                del entries[:overflow]
                logger.debug(f"Evicted {overflow} memory entries for {role}")

    def recent(self, role: str, k: int = 3) -> list[MemoryEntry]:
        """Return up to the last ``k`` entries for ``role``, oldest first."""
        if k <= 0:
            return []
        with self._lock_for(role):
            return list(self._entries.get(role, [])[-k:])

    def get(self, role: str) -> list[MemoryEntry]:
        with self._lock_for(role):
            return list(self._entries.get(role, []))

    def clear(self, role: str | None = None) -> None:
        """Drop one role's memory, or every role's when ``role`` is None."""
        if role is not None:
            with self._lock_for(role):
                self._entries.pop(role, None)
            logger.info(f"Cleared memory for {role}")
            return

        with self._registry_lock:
            roles = list(self._role_locks.items())
        for name, lock in roles:
            with lock:
                self._entries.pop(name, None)
        logger.info("Cleared memory for all agents")

    def roles(self) -> list[str]:
        with self._registry_lock:
            names = list(self._role_locks)
        return [name for name in names if self.get(name)]
