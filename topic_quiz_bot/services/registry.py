import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from topic_quiz_bot.services.session import QuizSession


class SessionRegistry:
    """
    Owns the quiz sessions of all chats, keyed by chat id.

    Callers wrap every operation on a chat in ``async with registry.lock(chat_id)``
    so that messages of one chat never interleave. Locks are per chat; other
    chats are never blocked.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, QuizSession] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: dict[int, int] = {}

    def get(self, chat_id: int) -> Optional[QuizSession]:
        return self._sessions.get(chat_id)

    def get_or_create(self, chat_id: int) -> QuizSession:
        """Get the chat's session, creating an empty one if absent."""
        session = self._sessions.get(chat_id)
        if session is None:
            session = self._sessions[chat_id] = QuizSession()
        return session

    def reset(self, chat_id: int) -> QuizSession:
        """Replace the chat's session with a fresh empty one."""
        session = self._sessions[chat_id] = QuizSession()
        return session

    def remove(self, chat_id: int) -> None:
        self._sessions.pop(chat_id, None)

    @asynccontextmanager
    async def lock(self, chat_id: int) -> AsyncIterator[None]:
        """Hold the chat's lock for the duration of the block."""
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        self._lock_users[chat_id] = self._lock_users.get(chat_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[chat_id] -= 1
            # Drop the lock once nobody holds or waits for it
            if self._lock_users[chat_id] == 0:
                del self._lock_users[chat_id]
                del self._locks[chat_id]

    def __contains__(self, chat_id: int) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
