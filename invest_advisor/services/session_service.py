"""
In-memory advisor sessions.
No persistence: sessions live as long as the process, least recently used
sessions are evicted once the store is full.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections import OrderedDict
from typing import Callable, Dict, Optional

from invest_advisor.domain.models import InvestmentProfile
from invest_advisor.domain.services import session_state
from invest_advisor.domain.services.session_state import AdvisorState
from invest_advisor.domain.services.recommendation_composer import RecommendationComposer

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    pass


class SessionStore:
    """
    Every state change for a session runs under that session's lock, so a
    profile submitted (or a reset) during an analysis waits for it to finish
    and the stored recommendation always belongs to the stored profile.
    """

    def __init__(self, composer: RecommendationComposer, max_sessions: int = 1000):
        if max_sessions <= 0:
            raise ValueError("max_sessions must be positive")
        self.composer = composer
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, AdvisorState]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> str:
        while len(self._sessions) >= self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            self._locks.pop(evicted, None)
            logger.info(f"Session {evicted[:8]} evicted (store full)")

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = AdvisorState()
        self._locks[session_id] = asyncio.Lock()
        return session_id

    def find(self, session_id: str) -> Optional[AdvisorState]:
        return self._sessions.get(session_id)

    def get(self, session_id: str) -> AdvisorState:
        state = self.find(session_id)
        if state is None:
            raise SessionNotFoundError(session_id)
        self._sessions.move_to_end(session_id)
        return state

    def _lock(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)
        return lock

    def _store(self, session_id: str, state: AdvisorState) -> AdvisorState:
        self._sessions[session_id] = state
        return state

    async def _update(self, session_id: str, reducer: Callable[..., AdvisorState], *args) -> AdvisorState:
        async with self._lock(session_id):
            # get() raises if the session went away while we waited
            return self._store(session_id, reducer(self.get(session_id), *args))

    async def delete(self, session_id: str) -> None:
        async with self._lock(session_id):
            self.get(session_id)
            del self._sessions[session_id]
            self._locks.pop(session_id, None)

    async def submit_profile(self, session_id: str, profile: InvestmentProfile) -> AdvisorState:
        return await self._update(session_id, session_state.with_profile, profile)

    async def go_to_step(self, session_id: str, step: int) -> AdvisorState:
        return await self._update(session_id, session_state.go_to_step, step)

    async def reset(self, session_id: str) -> AdvisorState:
        return await self._update(session_id, session_state.reset)

    async def analyze(self, session_id: str) -> AdvisorState:
        """Run the composer for the session's profile; one analysis at a time per session."""
        async with self._lock(session_id):
            state = self._store(session_id, session_state.start_analysis(self.get(session_id)))
            try:
                result = await self.composer.analyze(state.profile)
            except BaseException:
                if self.find(session_id) is not None:
                    self._store(session_id, session_state.analysis_failed(self.get(session_id)))
                raise

            # Evicted while the composer ran: raises rather than resurrecting it
            current = self.get(session_id)
            logger.info(f"Session {session_id[:8]} recommendation replaced")
            return self._store(session_id, session_state.with_result(current, result))
