"""Related topic ranking for drill-down navigation."""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List

from ..database.models import EvaluationEvent
from .mastery import scorable_events


@dataclass
class RelatedTopic:
    """A topic that appears alongside an anchor topic."""

    topic_id: str
    count: int


class CoOccurrenceAnalyzer:
    """Ranks topics that accompany an anchor when the anchor is the primary subject."""

    def related(
        self,
        events: Iterable[EvaluationEvent],
        anchor_topic_id: str,
        limit: int,
    ) -> List[RelatedTopic]:
        """Get the topics most often evaluated alongside an anchor topic.

        Events where the anchor is only a co-occurring topic are ignored.
        Each other topic counts at most once per event.

        Args:
            events: Snapshot of a user's evaluation events
            anchor_topic_id: Topic being drilled into
            limit: Maximum number of topics to return

        Returns:
            RelatedTopic list ordered by count descending, then topic_id ascending
        """
        if limit <= 0:
            return []

        counts: Counter = Counter()
        for event in scorable_events(events):
            if event.topic_ids[0] != anchor_topic_id:
                continue
            counts.update(set(event.topic_ids[1:]) - {anchor_topic_id})

        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [RelatedTopic(topic_id=t, count=c) for t, c in ranked[:limit]]


_default_analyzer = CoOccurrenceAnalyzer()


def related(
    events: Iterable[EvaluationEvent], anchor_topic_id: str, limit: int
) -> List[RelatedTopic]:
    """Rank topics related to an anchor topic."""
    return _default_analyzer.related(events, anchor_topic_id, limit)
