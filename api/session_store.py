import logging
import uuid
from typing import Dict, Optional

from core.document_template.template_state import TemplateState

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory registry of open editing sessions, one TemplateState each.
    Nothing is written to disk; a restart discards every session.
    """

    def __init__(self):
        self._sessions: Dict[str, TemplateState] = {}

    def create(self, document_type: str) -> str:
        state = TemplateState(document_type)
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = state
        logger.info(f"Opened editing session {session_id} ({state.document_type.value})")
        return session_id

    def get(self, session_id: str) -> Optional[TemplateState]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None) is not None
        if removed:
            logger.info(f"Closed editing session {session_id}")
        return removed

    def clear(self):
        self._sessions.clear()


session_store = SessionStore()
