"""Mastery levels and score classification."""

from enum import IntEnum
from typing import Optional

from ..config import LevelConfig


class MasteryLevel(IntEnum):
    """Mastery levels for topics, ranked 0-5."""

    NOT_EVALUATED = 0
    WEAK = 1
    NEEDS_REVIEW = 2
    AVERAGE = 3
    SOLID = 4
    CONFIDENT = 5

    @property
    def rank(self) -> int:
        """Get numeric rank of this level."""
        return int(self)

    @property
    def label(self) -> str:
        """Get short label for this level."""
        return {
            MasteryLevel.NOT_EVALUATED: "not yet evaluated",
            MasteryLevel.WEAK: "weak",
            MasteryLevel.NEEDS_REVIEW: "needs review",
            MasteryLevel.AVERAGE: "average",
            MasteryLevel.SOLID: "solid",
            MasteryLevel.CONFIDENT: "confident",
        }[self]

    @property
    def color(self) -> str:
        """Get display color hint for this level."""
        return {
            MasteryLevel.NOT_EVALUATED: "#d1d5db",
            MasteryLevel.WEAK: "#dc2626",
            MasteryLevel.NEEDS_REVIEW: "#ea580c",
            MasteryLevel.AVERAGE: "#ca8a04",
            MasteryLevel.SOLID: "#2563eb",
            MasteryLevel.CONFIDENT: "#16a34a",
        }[self]

    @property
    def emoji(self) -> str:
        """Get emoji for this level."""
        return {
            MasteryLevel.NOT_EVALUATED: "⬜",
            MasteryLevel.WEAK: "🔴",
            MasteryLevel.NEEDS_REVIEW: "🟠",
            MasteryLevel.AVERAGE: "🟡",
            MasteryLevel.SOLID: "🔵",
            MasteryLevel.CONFIDENT: "🟢",
        }[self]


class LevelClassifier:
    """Maps a mastery score to a MasteryLevel using closed lower bounds."""

    def __init__(self, config: LevelConfig = None):
        self.config = config or LevelConfig()

    def classify(self, score: Optional[float]) -> MasteryLevel:
        """Classify a mastery score.

        Thresholds are checked top-down and the first match wins.

        Args:
            score: Mastery score (0-100), or None if the topic has no direct evaluations

        Returns:
            The matching MasteryLevel
        """
        if score is None:
            return MasteryLevel.NOT_EVALUATED
        if score >= self.config.confident:
            return MasteryLevel.CONFIDENT
        if score >= self.config.solid:
            return MasteryLevel.SOLID
        if score >= self.config.average:
            return MasteryLevel.AVERAGE
        if score >= self.config.needs_review:
            return MasteryLevel.NEEDS_REVIEW
        return MasteryLevel.WEAK


_default_classifier = LevelClassifier()


def classify(score: Optional[float]) -> MasteryLevel:
    """Classify a mastery score with the default thresholds."""
    return _default_classifier.classify(score)
