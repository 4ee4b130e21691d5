#!/usr/bin/env python3
"""
ADHD Planner - Command Line Interface
Track tasks, mood and focus sessions and review the week
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from dateutil import parser as date_parser
import typer
from rich.console import Console
from rich.table import Table
from typing import List, Optional

from adhd_planner.core import Config, RecordStore, Task, PlannerError, create_store
from adhd_planner.agents import ReviewAgent, AgentResponse
from adhd_planner.analytics import ReportBuilder, ReportFormatter

# Initialize CLI app and console
app = typer.Typer(help="ADHD Planner - tasks, mood and focus with weekly insights")
task_app = typer.Typer(help="Task management")
mood_app = typer.Typer(help="Mood tracking")
focus_app = typer.Typer(help="Focus sessions")
reframe_app = typer.Typer(help="Cognitive reframes")
app.add_typer(task_app, name="task")
app.add_typer(mood_app, name="mood")
app.add_typer(focus_app, name="focus")
app.add_typer(reframe_app, name="reframe")

console = Console()

# Lazy-loaded store (created on first use)
_store: Optional[RecordStore] = None


def get_store() -> RecordStore:
    """
    Get or initialize the RecordStore.

    Loading the config also configures logging from its log_level.
    """
    global _store
    if _store is None:
        config = Config()
        logging.basicConfig(level=config.get("log_level", default="WARNING"))
        _store = create_store(config)
    return _store


STATUS_ICONS = {
    "pending": "[white]○ pending[/white]",
    "in-progress": "[yellow]◐ in progress[/yellow]",
    "completed": "[green]✓ completed[/green]",
}

PRIORITY_LABELS = {
    "urgent-important": "[red bold]Do now[/red bold]",
    "not-urgent-important": "[yellow]Schedule[/yellow]",
    "urgent-not-important": "[blue]Delegate[/blue]",
    "not-urgent-not-important": "[dim]Drop[/dim]",
}


def format_agent_response(response: AgentResponse) -> None:
    """Print an AgentResponse message and its suggestions."""
    if response.success:
        console.print(f"[green]✓[/green] {response.message}")
    else:
        console.print(f"[red]✗[/red] {response.message}")

    if response.suggestions:
        console.print()
        console.print("[dim]Suggestions:[/dim]")
        for suggestion in response.suggestions:
            console.print(f"  [dim]•[/dim] {suggestion}")


def format_task(task: Task) -> str:
    """Format a task for one-line display"""
    parts = [f"[dim]#{task.id}[/dim]", task.title]
    if task.estimated_minutes:
        parts.append(f"[dim]~{task.estimated_minutes}m[/dim]")
    step = task.current_step()
    if step is not None:
        parts.append(f"[cyan]next: {step.title}[/cyan]")
    return " ".join(parts)


# =============================================================================
# Tasks
# =============================================================================

@task_app.command("add")
def task_add(
    title: str = typer.Argument(..., help="Task title"),
    priority: str = typer.Option(
        "not-urgent-important", "--priority", "-p",
        help="urgent-important, urgent-not-important, not-urgent-important, not-urgent-not-important",
    ),
    estimate: Optional[int] = typer.Option(None, "--estimate", "-e", help="Estimated minutes"),
    steps: Optional[List[str]] = typer.Option(None, "--step", "-s", help="Add a step (repeatable)"),
    mvt: Optional[str] = typer.Option(None, "--mvt", help="Minimal viable task"),
):
    """
    Add a new task

    Examples:
      planner task add "Write report" -p urgent-important -e 45
      planner task add "Clean desk" -s "Clear papers" -s "Wipe surface"
    """
    payload = {"title": title, "priority": priority}
    if estimate is not None:
        payload["estimated_minutes"] = estimate
    if steps:
        payload["steps"] = [{"id": str(i), "title": s} for i, s in enumerate(steps, 1)]
    if mvt:
        payload["minimal_viable_task"] = mvt

    try:
        task = get_store().tasks.create(payload)
    except PlannerError as e:
        console.print(f"[red]Error adding task: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Created {format_task(task)}")


@task_app.command("list")
def task_list(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="pending, in-progress, completed"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum tasks to show"),
):
    """
    List tasks, newest first

    Examples:
      planner task list
      planner task list --status pending
    """
    tasks = get_store().list_tasks(status=status, limit=limit)
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Task", min_width=30)
    table.add_column("Quadrant", width=10)
    table.add_column("Est", justify="right", width=5)
    table.add_column("Status", width=14)

    for task in tasks:
        table.add_row(
            str(task.id),
            task.title,
            PRIORITY_LABELS.get(task.priority, task.priority),
            f"{task.estimated_minutes}m" if task.estimated_minutes else "-",
            STATUS_ICONS.get(task.status, task.status),
        )

    console.print(table)


@task_app.command("done")
def task_done(
    task_id: int = typer.Argument(..., help="Task ID to mark as completed"),
    actual: Optional[int] = typer.Option(None, "--actual", "-a", help="Minutes it actually took"),
):
    """
    Mark a task as completed

    Example:
      planner task done 5 --actual 30
    """
    partial = {"status": "completed"}
    if actual is not None:
        partial["actual_minutes"] = actual

    try:
        task = get_store().tasks.update(task_id, partial)
    except PlannerError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Completed: {task.title}")


# =============================================================================
# Mood, focus, reframes
# =============================================================================

@mood_app.command("log")
def mood_log(
    mood: str = typer.Argument(..., help="very-sad, sad, neutral, happy, very-happy"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
    state: Optional[str] = typer.Option(None, "--state", help="Emotional state tag"),
):
    """Log how you feel right now"""
    payload = {"mood": mood}
    if notes:
        payload["notes"] = notes
    if state:
        payload["emotional_state"] = state

    try:
        entry = get_store().mood_entries.create(payload)
    except PlannerError as e:
        console.print(f"[red]Error logging mood: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Logged mood '{entry.mood}' at {entry.timestamp:%H:%M}")


@focus_app.command("log")
def focus_log(
    minutes: Optional[int] = typer.Argument(None, help="Session length (default from preferences)"),
    task_id: Optional[int] = typer.Option(None, "--task", "-t", help="Task worked on"),
    session_type: str = typer.Option("work", "--type", help="work, break, long-break"),
    incomplete: bool = typer.Option(False, "--incomplete", help="Session was abandoned"),
):
    """
    Log a finished focus session

    Example:
      planner focus log 25 --task 3
    """
    if minutes is None:
        minutes = Config().get("default_focus_minutes", section="preferences", default=25)

    payload = {
        "task_id": task_id,
        "duration": minutes,
        "type": session_type,
        "completed": not incomplete,
    }
    try:
        session = get_store().focus_sessions.create(payload)
    except PlannerError as e:
        console.print(f"[red]Error logging session: {e}[/red]")
        raise typer.Exit(1)

    label = "completed" if session.completed else "incomplete"
    console.print(f"[green]✓[/green] Logged {session.duration}m {session.type} session ({label})")


@reframe_app.command("add")
def reframe_add(
    negative: str = typer.Argument(..., help="The negative thought"),
    balanced: str = typer.Argument(..., help="A more balanced version"),
    situation: Optional[str] = typer.Option(None, "--situation"),
):
    """Record a cognitive reframe"""
    payload = {"negative_thought": negative, "balanced_thought": balanced}
    if situation:
        payload["situation"] = situation

    try:
        reframe = get_store().cognitive_reframes.create(payload)
    except PlannerError as e:
        console.print(f"[red]Error saving reframe: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Saved reframe #{reframe.id}")


@app.command()
def plans(
    all: bool = typer.Option(False, "--all", "-a", help="Include inactive plans"),
):
    """Show emergency plans"""
    plan_list = get_store().list_emergency_plans(include_inactive=all)
    if not plan_list:
        console.print("[yellow]No emergency plans[/yellow]")
        return

    for plan in plan_list:
        rating = f" [dim]({plan.effectiveness}/5)[/dim]" if plan.effectiveness else ""
        console.print(f"[bold]{plan.trigger}[/bold]{rating}")
        console.print(f"  → {plan.strategy}")


# =============================================================================
# Reviews
# =============================================================================

@app.command()
def week(
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Any date in the week (YYYY-MM-DD)"),
    summary: bool = typer.Option(False, "--summary", help="Print the text summary only"),
):
    """
    Weekly review: metrics, trends, insights and recommendations

    Examples:
      planner week
      planner week --date 2024-03-13
    """
    store = get_store()
    if summary:
        response = ReviewAgent(store).process("weekly_review", {"date": date} if date else {})
        format_agent_response(response)
        if not response.success:
            raise typer.Exit(1)
        return

    try:
        reference = date_parser.parse(date).date() if date else None
        report = ReportBuilder(store, clock=store.clock).weekly(reference)
    except (PlannerError, ValueError, OverflowError) as e:
        console.print(f"[red]Error building weekly review: {e}[/red]")
        raise typer.Exit(1)

    ReportFormatter(console).render(report)


@app.command()
def today():
    """Today's metrics compared with yesterday"""
    store = get_store()
    report = ReportBuilder(store, clock=store.clock).daily()
    ReportFormatter(console).render(report)


@app.command()
def estimates(
    date: Optional[str] = typer.Option(None, "--date", "-d", help="Any date in the week"),
):
    """How accurate your time estimates were this week"""
    response = ReviewAgent(get_store()).process("estimation_report", {"date": date} if date else {})
    format_agent_response(response)

    tasks = (response.data or {}).get("tasks", [])
    if tasks:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=4)
        table.add_column("Task", min_width=24)
        table.add_column("Est", justify="right")
        table.add_column("Actual", justify="right")
        table.add_column("Accuracy", justify="right")
        for row in tasks:
            table.add_row(
                str(row["task_id"]),
                row["title"],
                f"{row['estimated_minutes']}m",
                f"{row['actual_minutes']}m",
                f"{row['accuracy']:.0f}%",
            )
        console.print(table)

    if not response.success:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
