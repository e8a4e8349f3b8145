"""Business logic services."""

from .base import BaseService, ServiceResult
from .evaluation_service import EvaluationService, ResetOutcome
from .progress_service import ProgressService

__all__ = [
    "BaseService",
    "EvaluationService",
    "ProgressService",
    "ResetOutcome",
    "ServiceResult",
]
