"""
Analytics module for ADHD Planner.

Windows records by day or week, aggregates metrics, compares periods and
derives recommendations and insights.
"""

from .windows import (
    TimeWindow,
    day_window,
    week_window,
    previous_week,
    previous_period,
    days,
    select,
)
from .metrics import (
    NEUTRAL_MOOD,
    MetricsAggregator,
    WindowMetrics,
    DayStats,
    task_completion_rate,
    average_mood,
    focus_minutes,
    session_completion_rate,
    estimation_accuracy,
    average_estimation_accuracy,
    performance_level,
)
from .trends import Trend, TrendComparator, direction, percent_change
from .recommendations import Recommendation, Rule, RULES, RecommendationEngine
from .insights import Insights, InsightSynthesizer, weekly_score
from .report import AnalysisReport, ReportBuilder
from .formatter import ReportFormatter

__all__ = [
    # Windows
    'TimeWindow',
    'day_window',
    'week_window',
    'previous_week',
    'previous_period',
    'days',
    'select',
    # Metrics
    'NEUTRAL_MOOD',
    'MetricsAggregator',
    'WindowMetrics',
    'DayStats',
    'task_completion_rate',
    'average_mood',
    'focus_minutes',
    'session_completion_rate',
    'estimation_accuracy',
    'average_estimation_accuracy',
    'performance_level',
    # Trends
    'Trend',
    'TrendComparator',
    'direction',
    'percent_change',
    # Recommendations
    'Recommendation',
    'Rule',
    'RULES',
    'RecommendationEngine',
    # Insights
    'Insights',
    'InsightSynthesizer',
    'weekly_score',
    # Report
    'AnalysisReport',
    'ReportBuilder',
    'ReportFormatter',
]
