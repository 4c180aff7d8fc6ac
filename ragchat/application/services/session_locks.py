"""
Per-session asyncio locks.

Serializes sequence assignment for messages of the same session within
one process. Cross-process duplicates are rejected by the
(session_id, sequence) unique constraint.

Dependencies: asyncio (stdlib)
System role: Message ordering guard
"""

import asyncio
import weakref
from uuid import UUID


class SessionLockRegistry:
    """Hands out one asyncio.Lock per session id; unused locks are collected."""

    def __init__(self) -> None:
        self._locks: weakref.WeakValueDictionary[UUID, asyncio.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, session_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        return lock
