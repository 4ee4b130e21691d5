"""
Rich formatter for the weekly and daily analysis views.

Renders an AnalysisReport as terminal panels: score header, metric table
with trend arrows, per-day breakdown, insights and recommendations.
"""

from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adhd_planner.analytics.metrics import WindowMetrics
from adhd_planner.analytics.recommendations import Recommendation
from adhd_planner.analytics.insights import Insights
from adhd_planner.analytics.report import AnalysisReport


TREND_ICONS = {
    "up": "[green]▲[/green]",
    "down": "[red]▼[/red]",
    "flat": "[dim]=[/dim]",
}

PRIORITY_COLORS = {
    "high": "red bold",
    "medium": "yellow",
    "low": "dim",
}

LEVEL_COLORS = {
    "excellent": "green bold",
    "good": "green",
    "fair": "yellow",
    "needs-improvement": "red",
}

METRIC_LABELS = {
    "completion_rate": "Completion rate",
    "average_mood": "Average mood",
    "focus_minutes": "Focus time",
    "total_tasks": "Tasks",
    "mood_entry_count": "Mood entries",
    "completed_sessions": "Sessions completed",
}

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class ReportFormatter:
    """Rich-based formatter for analysis reports."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def _format_duration(self, minutes: float) -> str:
        minutes = int(minutes)
        if minutes < 60:
            return f"{minutes}m"
        hours, mins = divmod(minutes, 60)
        return f"{hours}h" if mins == 0 else f"{hours}h {mins}m"

    def _format_metric(self, name: str, value: float) -> str:
        if name == "completion_rate":
            return f"{value:.0f}%"
        if name == "average_mood":
            return f"{value:.1f}/5"
        if name == "focus_minutes":
            return self._format_duration(value)
        return str(int(value))

    def format_header(self, report: AnalysisReport) -> Panel:
        start = report.window.start
        content = Text()
        if report.insights:
            level = report.insights.performance_level
            color = LEVEL_COLORS.get(level, "white")
            content.append(f"Weekly score {report.insights.weekly_score:.0f}/100  ", style="bold")
            content.append(level.replace("-", " "), style=color)
            content.append("\n")
            title = "[bold]Week[/bold]"
            subtitle = f"Week of {start.strftime('%B %d, %Y')}"
        else:
            title = "[bold]Day[/bold]"
            subtitle = start.strftime("%A, %B %d, %Y")
        content.append(subtitle, style="dim")

        return Panel(
            content,
            title=title,
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_trends(self, report: AnalysisReport) -> Panel:
        table = Table(show_header=True, box=None, padding=(0, 1), expand=True)
        table.add_column("Metric", ratio=1)
        table.add_column("Now", justify="right")
        table.add_column("Before", justify="right")
        table.add_column("", width=2)
        table.add_column("Change", justify="right")

        for name, trend in report.trends.items():
            table.add_row(
                METRIC_LABELS.get(name, name),
                self._format_metric(name, trend.current),
                f"[dim]{self._format_metric(name, trend.previous)}[/dim]",
                TREND_ICONS.get(trend.direction, ""),
                f"{trend.percent_change:+.0f}%",
            )

        return Panel(table, title="[bold]Trends[/bold]", border_style="cyan", padding=(0, 1))

    def format_daily_breakdown(self, metrics: WindowMetrics) -> Optional[Panel]:
        if len(metrics.daily) < 2:
            return None

        best = metrics.best_focus_day()
        table = Table(show_header=True, box=None, padding=(0, 1), expand=True)
        table.add_column("Day", width=4)
        table.add_column("Done", justify="right")
        table.add_column("Focus", justify="right")
        table.add_column("Mood", justify="right")

        for day in metrics.daily:
            name = WEEKDAY_NAMES[day.window.start.weekday()]
            if best is not None and day.window == best.window:
                name = f"[bold]{name}*[/bold]"
            mood = f"{day.average_mood:.1f}" if day.average_mood is not None else "[dim]---[/dim]"
            table.add_row(
                name,
                f"{day.tasks_completed}/{day.tasks_created}",
                self._format_duration(day.focus_minutes) if day.focus_minutes else "[dim]---[/dim]",
                mood,
            )

        return Panel(table, title="[bold]By day[/bold]", border_style="white", padding=(0, 1))

    def format_insights(self, insights: Insights, highlights: List[str]) -> Panel:
        lines = [insights.summary, ""]
        for positive in insights.positives:
            lines.append(f"[green]+[/green] {positive}")
        for challenge in insights.challenges:
            lines.append(f"[yellow]![/yellow] {challenge}")
        for highlight in highlights:
            lines.append(f"[cyan]▲[/cyan] {highlight}")
        for advice in insights.advice:
            lines.append(f"[blue]→[/blue] {advice}")

        return Panel("\n".join(lines), title="[bold]Insights[/bold]", border_style="magenta", padding=(0, 1))

    def format_recommendations(self, recommendations: List[Recommendation]) -> Panel:
        if not recommendations:
            return Panel(
                Text("Everything looks on track. No action needed this week.", justify="center"),
                title="[bold]Recommendations[/bold]",
                border_style="green",
                padding=(0, 1),
            )

        lines = []
        for rec in recommendations:
            color = PRIORITY_COLORS.get(rec.priority, "white")
            lines.append(f"[{color}]{rec.priority.upper():<6}[/{color}] [bold]{rec.title}[/bold] [dim]({rec.category})[/dim]")
            lines.append(f"       {rec.description}")
            lines.append(f"       [green]→ {rec.suggested_action}[/green]")

        return Panel(
            "\n".join(lines),
            title=f"[bold]Recommendations ({len(recommendations)})[/bold]",
            border_style="yellow",
            padding=(0, 1),
        )

    def render(self, report: AnalysisReport) -> None:
        """Render a full report to the console."""
        self.console.print(self.format_header(report))
        self.console.print(self.format_trends(report))

        breakdown = self.format_daily_breakdown(report.metrics)
        if breakdown:
            self.console.print(breakdown)

        if report.insights:
            self.console.print(self.format_insights(report.insights, report.highlights))
            self.console.print(self.format_recommendations(report.recommendations))
        elif report.highlights:
            self.console.print("\n".join(f"[cyan]▲[/cyan] {h}" for h in report.highlights))
