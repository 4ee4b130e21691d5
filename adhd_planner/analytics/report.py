"""
Report assembly for the analysis views.

Pulls records from the RecordStore, windows them and runs the metrics,
trend, recommendation and insight stages into a single report structure.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from adhd_planner.core.store import RecordStore
from adhd_planner.analytics.windows import (
    DateLike,
    TimeWindow,
    day_window,
    week_window,
    previous_week,
    previous_period,
)
from adhd_planner.analytics.metrics import MetricsAggregator, WindowMetrics
from adhd_planner.analytics.trends import Trend, TrendComparator
from adhd_planner.analytics.recommendations import Recommendation, RecommendationEngine
from adhd_planner.analytics.insights import Insights, InsightSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Everything the weekly or daily view shows."""
    generated_at: datetime
    window: TimeWindow
    previous_window: TimeWindow
    metrics: WindowMetrics
    previous_metrics: WindowMetrics
    trends: Dict[str, Trend]
    highlights: List[str] = field(default_factory=list)
    recommendations: List[Recommendation] = field(default_factory=list)
    insights: Optional[Insights] = None

    def to_dict(self) -> Dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "window": self.window.to_dict(),
            "previous_window": self.previous_window.to_dict(),
            "metrics": self.metrics.to_dict(),
            "trends": {name: trend.to_dict() for name, trend in self.trends.items()},
            "highlights": list(self.highlights),
            "recommendations": [r.to_dict() for r in self.recommendations],
            "insights": self.insights.to_dict() if self.insights else None,
        }


class ReportBuilder:
    """
    Builds analysis reports from the record store.

    The store is read once per report; every later stage works on the
    materialized lists.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = datetime.now,
        aggregator: Optional[MetricsAggregator] = None,
        comparator: Optional[TrendComparator] = None,
        engine: Optional[RecommendationEngine] = None,
        synthesizer: Optional[InsightSynthesizer] = None,
    ):
        self.store = store
        self.clock = clock
        self.aggregator = aggregator or MetricsAggregator()
        self.comparator = comparator or TrendComparator()
        self.engine = engine or RecommendationEngine()
        self.synthesizer = synthesizer or InsightSynthesizer()

    def _metrics(self, window: TimeWindow, records: Dict[str, list]) -> WindowMetrics:
        return self.aggregator.aggregate(
            window,
            tasks=records["task"],
            moods=records["mood_entry"],
            sessions=records["focus_session"],
            reframes=records["cognitive_reframe"],
            routine_blocks=records["routine_block"],
        )

    def _load(self) -> Dict[str, list]:
        return {
            kind: self.store.repository(kind).all()
            for kind in ("task", "mood_entry", "focus_session", "cognitive_reframe", "routine_block")
        }

    def weekly(self, reference: Optional[DateLike] = None) -> AnalysisReport:
        """
        Full weekly analysis for the Monday-start week containing ``reference``.

        Args:
            reference: Any date inside the week (defaults to today)

        Returns:
            AnalysisReport with recommendations and insights
        """
        reference = reference or self.clock()
        window = week_window(reference)
        previous = previous_week(window)
        records = self._load()

        current_metrics = self._metrics(window, records)
        previous_metrics = self._metrics(previous, records)
        trends = self.comparator.compare(current_metrics, previous_metrics)

        report = AnalysisReport(
            generated_at=self.clock(),
            window=window,
            previous_window=previous,
            metrics=current_metrics,
            previous_metrics=previous_metrics,
            trends=trends,
            highlights=self.comparator.highlights(trends),
            recommendations=self.engine.evaluate(current_metrics),
            insights=self.synthesizer.synthesize(current_metrics),
        )
        logger.info(
            "Weekly report for %s: score=%s, %d recommendations",
            window.start.date().isoformat(),
            report.insights.weekly_score,
            len(report.recommendations),
        )
        return report

    def daily(self, reference: Optional[DateLike] = None) -> AnalysisReport:
        """Metrics and trends for one day compared with the day before."""
        reference = reference or self.clock()
        window = day_window(reference)
        previous = previous_period(window)
        records = self._load()

        current_metrics = self._metrics(window, records)
        previous_metrics = self._metrics(previous, records)
        trends = self.comparator.compare(current_metrics, previous_metrics)

        return AnalysisReport(
            generated_at=self.clock(),
            window=window,
            previous_window=previous,
            metrics=current_metrics,
            previous_metrics=previous_metrics,
            trends=trends,
            highlights=self.comparator.highlights(trends),
        )
