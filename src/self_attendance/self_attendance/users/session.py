from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import Ledger
from ..attendance.repository import AttendanceStore
from ..core.exceptions import NoActiveSessionError
from .model import Identity

logger = logging.getLogger(__name__)


@dataclass
class SessionContext:
    """Current identity plus the ledger it owns.

    Passed explicitly to every attendance use case; there is no module-level
    "current user".
    """

    identity: Optional[Identity] = None
    ledger: Ledger = field(default_factory=Ledger.empty)

    @property
    def is_active(self) -> bool:
        return self.identity is not None

    def require_identity(self) -> Identity:
        if self.identity is None:
            raise NoActiveSessionError("No active session")
        return self.identity


class SessionService:
    """Use case: start and end sessions against an AttendanceStore."""

    def __init__(self, store: AttendanceStore):
        self._store = store

    def login(self, context: SessionContext, identity: Identity) -> SessionContext:
        context.identity = identity
        context.ledger = self._store.load(identity.user_id)
        logger.info("Session started for %s (%d records)", identity.user_id, len(context.ledger))
        return context

    def logout(self, context: SessionContext) -> SessionContext:
        if context.identity is not None:
            logger.info("Session ended for %s", context.identity.user_id)
        context.identity = None
        context.ledger = Ledger.empty()
        return context

    def restore(self, identity: Optional[Identity]) -> SessionContext:
        """Build a context for a request from an identity kept in the cookie."""
        context = SessionContext()
        if identity is not None:
            context.identity = identity
            context.ledger = self._store.load(identity.user_id)
        return context
