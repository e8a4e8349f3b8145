"""Custom exceptions for masterylog."""


class MasteryLogError(Exception):
    """Base exception for masterylog errors."""

    pass


class ValidationError(MasteryLogError):
    """Raised when an evaluation draft or topic identifier is rejected."""

    pass


class StoreUnavailableError(MasteryLogError):
    """Raised when the event store cannot complete a call."""

    pass


class ComputationError(MasteryLogError):
    """Raised when a stored event cannot take part in scoring."""

    pass


class NotSignedInError(MasteryLogError):
    """Raised when a session is used before sign-in or after sign-out."""

    pass
