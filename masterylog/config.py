"""Configuration loader for masterylog."""

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml
from dotenv import load_dotenv

from .constants import (
    CORRECT_SCORE,
    DELETE_BATCH_SIZE,
    HALF_LIFE_DAYS,
    INCORRECT_SCORE,
    LEVEL_THRESHOLD_AVERAGE,
    LEVEL_THRESHOLD_CONFIDENT,
    LEVEL_THRESHOLD_NEEDS_REVIEW,
    LEVEL_THRESHOLD_SOLID,
    RELATED_DEFAULT_LIMIT,
    TIER_SCORES,
)


@dataclass
class DatabaseConfig:
    """Database configuration."""

    path: str = "data/masterylog.db"


@dataclass
class ScoringConfig:
    """Score resolution and recency decay configuration."""

    half_life_days: float = HALF_LIFE_DAYS
    tier_scores: Dict[str, float] = field(default_factory=lambda: dict(TIER_SCORES))
    correct_score: float = CORRECT_SCORE
    incorrect_score: float = INCORRECT_SCORE

    def __post_init__(self):
        if not math.isfinite(self.half_life_days) or self.half_life_days <= 0:
            raise ValueError(
                f"scoring.half_life_days must be a positive number, got {self.half_life_days}"
            )


@dataclass
class LevelConfig:
    """Lower bounds (inclusive) for each mastery level."""

    confident: float = LEVEL_THRESHOLD_CONFIDENT
    solid: float = LEVEL_THRESHOLD_SOLID
    average: float = LEVEL_THRESHOLD_AVERAGE
    needs_review: float = LEVEL_THRESHOLD_NEEDS_REVIEW


@dataclass
class RelatedConfig:
    """Related topic drill-down configuration."""

    default_limit: int = RELATED_DEFAULT_LIMIT


@dataclass
class StoreConfig:
    """Event store call configuration."""

    delete_batch_size: int = DELETE_BATCH_SIZE


@dataclass
class Config:
    """Main configuration container."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    levels: LevelConfig = field(default_factory=LevelConfig)
    related: RelatedConfig = field(default_factory=RelatedConfig)
    store: StoreConfig = field(default_factory=StoreConfig)


def default_config() -> Config:
    """Build a configuration from built-in defaults only."""
    return Config()


def load_config(config_path: str = "config.yaml") -> Config:
    """Load configuration from YAML file and environment variables."""
    # Load environment variables
    load_dotenv()

    # Read YAML config
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    database_data = data.get("database", {})
    scoring_data = data.get("scoring", {})
    levels_data = data.get("levels", {})
    related_data = data.get("related", {})
    store_data = data.get("store", {})

    # Tier scores merge over the defaults so a partial mapping is allowed
    tier_scores = dict(TIER_SCORES)
    for tier, score in (scoring_data.get("tier_scores") or {}).items():
        tier_scores[str(tier).lower()] = float(score)

    # Database path can be overridden from the environment
    db_path = os.getenv("MASTERYLOG_DB_PATH", "") or database_data.get(
        "path", "data/masterylog.db"
    )

    config = Config(
        database=DatabaseConfig(path=db_path),
        scoring=ScoringConfig(
            half_life_days=float(scoring_data.get("half_life_days", HALF_LIFE_DAYS)),
            tier_scores=tier_scores,
            correct_score=float(scoring_data.get("correct_score", CORRECT_SCORE)),
            incorrect_score=float(scoring_data.get("incorrect_score", INCORRECT_SCORE)),
        ),
        levels=LevelConfig(
            confident=float(levels_data.get("confident", LEVEL_THRESHOLD_CONFIDENT)),
            solid=float(levels_data.get("solid", LEVEL_THRESHOLD_SOLID)),
            average=float(levels_data.get("average", LEVEL_THRESHOLD_AVERAGE)),
            needs_review=float(
                levels_data.get("needs_review", LEVEL_THRESHOLD_NEEDS_REVIEW)
            ),
        ),
        related=RelatedConfig(
            default_limit=int(related_data.get("default_limit", RELATED_DEFAULT_LIMIT)),
        ),
        store=StoreConfig(
            delete_batch_size=int(store_data.get("delete_batch_size", DELETE_BATCH_SIZE)),
        ),
    )

    return config
