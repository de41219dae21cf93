import copy
from abc import ABC, abstractmethod

from onboarding.domain.models import Session


class BaseSessionRepository(ABC):
    """Key-value store of sessions by session identifier."""

    @abstractmethod
    def get(self, session_id: str) -> Session | None:
        """Return the stored session, or None when it does not exist."""

    @abstractmethod
    def put(self, session: Session) -> None:
        """Insert or replace the session. Last write wins."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove the session; deleting a missing session is a no-op."""


class InMemorySessionRepository(BaseSessionRepository):
    """Process-local store. Hands out copies so callers never share state."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        return copy.deepcopy(session) if session is not None else None

    def put(self, session: Session) -> None:
        self._sessions[session.session_id] = copy.deepcopy(session)

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)
