"""Explicit user session state for authenticated store calls."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .constants import ERROR_NOT_SIGNED_IN
from .utils.datetime_utils import utc_now
from .utils.errors import NotSignedInError

logger = logging.getLogger(__name__)


@dataclass
class UserSession:
    """A signed-in user and the access token issued at sign-in."""

    user_id: str
    access_token: Optional[str] = None
    signed_in_at: datetime = field(default_factory=utc_now)
    active: bool = True

    def require_user_id(self) -> str:
        """Get the user id for a store call.

        Raises:
            NotSignedInError: If the session has been signed out
        """
        if not self.active:
            raise NotSignedInError(ERROR_NOT_SIGNED_IN)
        return self.user_id


class SessionManager:
    """Owns the lifecycle of the current session: created at sign-in, cleared at sign-out."""

    def __init__(self):
        self._session: Optional[UserSession] = None

    @property
    def is_signed_in(self) -> bool:
        return self._session is not None and self._session.active

    @property
    def current(self) -> UserSession:
        """Get the current session.

        Raises:
            NotSignedInError: If nobody is signed in
        """
        if not self.is_signed_in:
            raise NotSignedInError(ERROR_NOT_SIGNED_IN)
        return self._session

    def sign_in(self, user_id: str, access_token: Optional[str] = None) -> UserSession:
        """Start a session, replacing any previous one."""
        if self._session is not None:
            self._session.active = False
        self._session = UserSession(user_id=user_id, access_token=access_token)
        logger.info(f"User {user_id} signed in")
        return self._session

    def sign_out(self) -> None:
        """End the current session. Sessions handed out earlier stop working."""
        if self._session is None:
            return
        self._session.active = False
        self._session.access_token = None
        logger.info(f"User {self._session.user_id} signed out")
        self._session = None
