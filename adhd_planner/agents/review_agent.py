"""
Review Agent for ADHD Planner
Handles daily/weekly reviews, trends, recommendations and insights.

This agent provides:
- Weekly review: metrics, trends against the previous week,
  recommendations and insights for a Monday-start week
- Daily review: one day's metrics compared with the day before
- Focused views on trends, recommendations or insights alone
- An estimation report comparing estimated and actual task minutes

The agent reads from the RecordStore and never writes to it.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from adhd_planner.analytics.metrics import estimation_accuracy
from adhd_planner.analytics.report import ReportBuilder
from adhd_planner.analytics.windows import week_window, select

from .base_agent import BaseAgent, AgentResponse


class ReviewAgent(BaseAgent):
    """
    Specialized agent for analysis views.

    Handles intents:
    - weekly_review: Full weekly report
    - daily_review: Day report with trends against the previous day
    - get_trends: Week-over-week trends and highlights
    - get_recommendations: Recommendations for the week
    - get_insights: Summary, positives, challenges and weekly score
    - estimation_report: Per-task estimate vs actual accuracy

    Context params (all intents):
        date (str | date, optional): Reference date (default: today)
    """

    INTENTS = [
        "weekly_review",
        "daily_review",
        "get_trends",
        "get_recommendations",
        "get_insights",
        "estimation_report",
    ]

    def __init__(self, store, builder: Optional[ReportBuilder] = None):
        """Initialize the Review Agent."""
        super().__init__(store, "review")
        self.builder = builder or ReportBuilder(store, clock=store.clock)

    def get_supported_intents(self) -> List[str]:
        """Return list of supported intents."""
        return self.INTENTS

    def process(self, intent: str, context: Dict[str, Any]) -> AgentResponse:
        """
        Process a review-related intent.

        Args:
            intent: One of the supported review intents
            context: Request context with parameters

        Returns:
            AgentResponse with operation result
        """
        self.log_action(f"processing_{intent}", {"context_keys": list(context.keys())})

        handlers = {
            "weekly_review": self._handle_weekly_review,
            "daily_review": self._handle_daily_review,
            "get_trends": self._handle_get_trends,
            "get_recommendations": self._handle_get_recommendations,
            "get_insights": self._handle_get_insights,
            "estimation_report": self._handle_estimation_report,
        }

        handler = handlers.get(intent)
        if not handler:
            return AgentResponse.error(f"Unknown intent: {intent}")

        try:
            return handler(context)
        except Exception as e:
            self.logger.error(f"Error processing {intent}: {e}", exc_info=True)
            return AgentResponse.error(f"Failed to process {intent}: {str(e)}")

    # =========================================================================
    # Intent Handlers
    # =========================================================================

    def _handle_weekly_review(self, context: Dict[str, Any]) -> AgentResponse:
        report = self.builder.weekly(self._parse_date(context.get("date")))
        metrics = report.metrics
        week_start = report.window.start.date().isoformat()

        summary_lines = [
            f"Weekly Review: week of {week_start}",
            report.insights.summary,
            f"Weekly score: {report.insights.weekly_score:.0f}/100 ({report.insights.performance_level})",
        ]
        completion = report.trends.get("completion_rate")
        if completion and completion.direction != "flat":
            summary_lines.append(
                f"Completion rate {completion.direction} {abs(completion.delta):.0f} points from last week"
            )
        if not report.recommendations:
            summary_lines.append("No recommendations this week")

        self.log_action("weekly_review_generated", {
            "week_start": week_start,
            "weekly_score": report.insights.weekly_score,
            "recommendations": len(report.recommendations),
        })

        suggestions = [rec.suggested_action for rec in report.recommendations[:3]]
        if metrics.mood_entry_count == 0:
            suggestions.append("Log your mood: 'planner mood log happy'")

        return AgentResponse.ok(
            message="\n".join(summary_lines),
            data={"report": report.to_dict()},
            suggestions=suggestions or None,
        )

    def _handle_daily_review(self, context: Dict[str, Any]) -> AgentResponse:
        report = self.builder.daily(self._parse_date(context.get("date")))
        metrics = report.metrics
        day = report.window.start.date().isoformat()

        summary_lines = [
            f"Daily Review for {day}",
            f"Tasks: {metrics.completed_tasks} completed of {metrics.total_tasks} "
            f"({metrics.completion_rate:.0f}% completion rate)",
            f"Focus: {metrics.focus_minutes} minutes in {metrics.completed_sessions} completed session(s)",
        ]
        if metrics.mood_entry_count:
            summary_lines.append(
                f"Mood: {metrics.average_mood:.1f}/5 over {metrics.mood_entry_count} entries"
            )

        return AgentResponse.ok(
            message="\n".join(summary_lines),
            data={"report": report.to_dict()},
            suggestions=report.highlights or None,
        )

    def _handle_get_trends(self, context: Dict[str, Any]) -> AgentResponse:
        report = self.builder.weekly(self._parse_date(context.get("date")))
        changed = [t for t in report.trends.values() if t.direction != "flat"]

        return AgentResponse.ok(
            message=f"{len(changed)} of {len(report.trends)} metrics changed since last week",
            data={
                "trends": {name: t.to_dict() for name, t in report.trends.items()},
                "highlights": report.highlights,
            },
        )

    def _handle_get_recommendations(self, context: Dict[str, Any]) -> AgentResponse:
        report = self.builder.weekly(self._parse_date(context.get("date")))
        recommendations = report.recommendations

        if not recommendations:
            message = "Everything looks on track. No action needed this week."
        else:
            high = sum(1 for r in recommendations if r.priority == "high")
            message = f"{len(recommendations)} recommendation(s), {high} high priority"

        return AgentResponse.ok(
            message=message,
            data={"recommendations": [r.to_dict() for r in recommendations]},
            suggestions=[r.suggested_action for r in recommendations] or None,
        )

    def _handle_get_insights(self, context: Dict[str, Any]) -> AgentResponse:
        report = self.builder.weekly(self._parse_date(context.get("date")))
        return AgentResponse.ok(
            message=report.insights.summary,
            data={"insights": report.insights.to_dict()},
        )

    def _handle_estimation_report(self, context: Dict[str, Any]) -> AgentResponse:
        """
        Estimate vs actual for the week's completed tasks.

        Tasks without an estimate or an actual time are listed as excluded
        rather than scored.
        """
        reference = self._parse_date(context.get("date")) or self.store.clock()
        window = week_window(reference)
        tasks = [t for t in select(self.store.tasks.all(), window) if t.is_completed()]

        scored = []
        excluded = []
        for task in tasks:
            accuracy = estimation_accuracy(task)
            if accuracy is None:
                excluded.append(task.id)
                continue
            scored.append({
                "task_id": task.id,
                "title": task.title,
                "estimated_minutes": task.estimated_minutes,
                "actual_minutes": task.actual_minutes,
                "accuracy": round(accuracy, 1),
                "over_estimate": task.actual_minutes < task.estimated_minutes,
            })

        average = sum(s["accuracy"] for s in scored) / len(scored) if scored else None
        if average is None:
            message = "No completed tasks with both estimated and actual time this week"
        else:
            message = f"Average estimation accuracy: {average:.0f}% over {len(scored)} task(s)"

        return AgentResponse.ok(
            message=message,
            data={
                "week": window.to_dict(),
                "tasks": scored,
                "excluded_task_ids": excluded,
                "average_accuracy": round(average, 1) if average is not None else None,
            },
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _parse_date(self, date_input: Any) -> Optional[date]:
        """Parse date input to date object."""
        if date_input is None:
            return None
        if isinstance(date_input, datetime):
            return date_input.date()
        if isinstance(date_input, date):
            return date_input
        if isinstance(date_input, str):
            try:
                return date_parser.parse(date_input).date()
            except (ValueError, OverflowError):
                raise ValueError(f"Could not parse date: {date_input}")
        raise ValueError(f"Unsupported date value: {date_input!r}")
