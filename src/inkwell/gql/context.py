"""Per-request GraphQL context."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from inkwell.core.security import JWTError, decode_access_token
from inkwell.core.settings import settings
from inkwell.db.session import get_db
from inkwell.models import User
from inkwell.services.events import EventBroker, get_event_broker

logger = logging.getLogger(__name__)


class GraphQLContext(BaseContext):
    """Context handed to every resolver.

    The authenticated user and the voter address are derived lazily from the
    underlying HTTP request or WebSocket handshake.
    """

    def __init__(self, db: Session, broker: EventBroker) -> None:
        super().__init__()
        self.db = db
        self.broker = broker
        self._user: User | None = None
        self._user_resolved = False

    @property
    def user(self) -> User | None:
        """Return the user named by the bearer token, or None when anonymous."""
        if not self._user_resolved:
            self._user = self._load_user()
            self._user_resolved = True
        return self._user

    @property
    def client_ip(self) -> str:
        """Return the client address used as the anonymous voter identity."""
        client = getattr(self.request, "client", None)
        if client is not None and client.host:
            return client.host
        return settings.vote_fallback_ip

    def _load_user(self) -> User | None:
        if self.request is None:
            return None
        header = self.request.headers.get("authorization", "")
        if not header:
            return None
        token = header.removeprefix("Bearer ").strip()
        try:
            user_id = decode_access_token(token)
        except JWTError as err:
            logger.warning("Invalid token on GraphQL request: %s", err)
            return None
        return self.db.get(User, user_id)


async def get_context(
    db: Session = Depends(get_db),
    broker: EventBroker = Depends(get_event_broker),
) -> GraphQLContext:
    """Build the resolver context for a GraphQL request."""
    return GraphQLContext(db=db, broker=broker)
