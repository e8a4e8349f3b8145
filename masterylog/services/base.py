"""Base service class and result type for all services."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, TYPE_CHECKING, Union

from ..config import Config, default_config
from ..session import UserSession

if TYPE_CHECKING:
    from ..database.store import EventStore

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Uniform success/failure result returned by service operations."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "ServiceResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error_code: str, error: str) -> "ServiceResult[T]":
        return cls(success=False, error=error, error_code=error_code)


class BaseService:
    """Base class for all services.

    Provides access to common dependencies through dependency injection.
    """

    def __init__(self, store: "EventStore", config: Optional[Config] = None):
        """Initialize the base service.

        Args:
            store: Event store holding the users' evaluation events
            config: Application configuration (defaults when omitted)
        """
        self.store = store
        self.config = config or default_config()

    @staticmethod
    def resolve_user_id(user: Union[str, UserSession]) -> str:
        """Get the user id for a store call from a plain id or a session.

        Raises:
            NotSignedInError: If the session has been signed out
        """
        if isinstance(user, UserSession):
            return user.require_user_id()
        return user
