#!/usr/bin/env python3
"""Import evaluation events for one user from a JSON file.

Usage:
    python scripts/import_evaluations.py <user_id> <events.json>

The file holds a list of objects with the EvaluationDraft fields, e.g.
{"topic_ids": ["fractions", "ratios"], "source_type": "past-exam",
 "occurred_at": "2026-05-01T09:00:00+00:00", "evaluation_tier": "strong"}
"""

import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from masterylog import configure_logging
from masterylog.config import load_config
from masterylog.database import Database, EvaluationDraft, EventRepository
from masterylog.services import EvaluationService, ProgressService

configure_logging()
logger = logging.getLogger(__name__)


def _to_draft(item: dict) -> EvaluationDraft:
    occurred_at = item.get("occurred_at")
    return EvaluationDraft(
        topic_ids=item.get("topic_ids") or [],
        source_type=item.get("source_type", "free-practice"),
        source_ref=item.get("source_ref"),
        occurred_at=datetime.fromisoformat(occurred_at) if occurred_at else None,
        performance_score=item.get("performance_score"),
        evaluation_tier=item.get("evaluation_tier"),
        is_correct=item.get("is_correct"),
        notes=item.get("notes", ""),
    )


async def import_evaluations(user_id: str, data_path: Path) -> int:
    """Append every draft in the file, returning the number stored."""
    config = load_config(str(project_root / "config.yaml"))

    with open(data_path, "r", encoding="utf-8") as f:
        items = json.load(f)
    logger.info(f"Loaded {len(items)} evaluations from {data_path}")

    database = Database(config.database.path)
    await database.connect()
    logger.info(f"Connected to database: {config.database.path}")

    store = EventRepository(database)
    evaluation_service = EvaluationService(store, config)
    progress_service = ProgressService(store, config)

    stored = 0
    try:
        for index, item in enumerate(items):
            result = await evaluation_service.append(user_id, _to_draft(item))
            if result.success:
                stored += 1
            else:
                logger.warning(f"Skipped item {index}: {result.error}")

        summary = await progress_service.get_summary(user_id)
        if summary.success:
            logger.info(
                f"{summary.data.evaluated_topics}/{summary.data.total_topics} topics evaluated, "
                f"average score {summary.data.average_score:.1f}"
            )
    finally:
        await database.close()

    logger.info(f"Imported {stored} of {len(items)} evaluations")
    return stored


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    asyncio.run(import_evaluations(sys.argv[1], Path(sys.argv[2])))
