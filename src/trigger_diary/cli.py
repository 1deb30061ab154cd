"""Command-line interface for Trigger Diary."""

from datetime import date, datetime, timedelta
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .exceptions import AnalysisError, RecommendationError
from .models.analysis import TriggerCounts
from .models.records import DietRecord, MenstrualRecord, SleepRecord, SymptomRecord
from .services import HealthAdvisor, RecordStore, TriggerEngine
from .utils.config import configure_logging, get_settings

app = typer.Typer(
    name="trigger-diary",
    help="Trigger Diary - Log sleep, diet, cycle and symptoms; find what sets off flare-ups",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
):
    configure_logging(log_level)


def parse_date(date_str: Optional[str]) -> date:
    """Parse a date string or return today.

    Supports:
    - None or empty: today
    - "today": today
    - "yesterday": yesterday
    - "-N": N days ago (e.g., "-1" = yesterday, "-7" = a week ago)
    - "YYYY-MM-DD": specific date
    """
    if date_str is None or date_str.lower() == "today":
        return date.today()

    if date_str.lower() == "yesterday":
        return date.today() - timedelta(days=1)

    # Relative days: -1, -2, -7, etc.
    if date_str.startswith("-") and date_str[1:].isdigit():
        days_ago = int(date_str[1:])
        return date.today() - timedelta(days=days_ago)

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date format: {date_str}[/red]")
        console.print("[dim]Use: YYYY-MM-DD, 'yesterday', or -N (days ago)[/dim]")
        raise typer.Exit(1)


def _build(model, **fields):
    try:
        return model(**fields)
    except ValidationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _engine() -> TriggerEngine:
    settings = get_settings()
    with RecordStore(settings) as store:
        records = store.load_records()
    return TriggerEngine.from_settings(records, settings, composer=HealthAdvisor(settings))


DATE_OPTION = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")


@app.command("add-sleep")
def add_sleep(
    hours: float = typer.Argument(..., help="Hours slept"),
    date_str: Optional[str] = DATE_OPTION,
    quality: Optional[int] = typer.Option(None, "--quality", "-q", help="Sleep quality 1-10"),
    disruptions: Optional[str] = typer.Option(None, "--disruptions"),
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Log a night of sleep."""
    record = _build(
        SleepRecord, date=parse_date(date_str), duration=hours,
        quality=quality, disruptions=disruptions, notes=notes,
    )
    with RecordStore() as store:
        saved = store.insert_sleep(record)
    console.print(f"[green]✓ Logged {saved.duration:.1f}h of sleep for {saved.date}[/green]")


@app.command("add-diet")
def add_diet(
    items: list[str] = typer.Argument(..., help="Food items eaten"),
    meal: Optional[str] = typer.Option(None, "--meal", "-m", help="Meal label, e.g. lunch"),
    date_str: Optional[str] = DATE_OPTION,
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Log a meal and its food items."""
    record = _build(DietRecord, date=parse_date(date_str), meal=meal, items=items, notes=notes)
    with RecordStore() as store:
        saved = store.insert_diet(record)
    console.print(f"[green]✓ Logged {len(saved.items)} item(s) for {saved.date}[/green]")


@app.command("add-menstrual")
def add_menstrual(
    period_event: str = typer.Argument(..., help="Period event, e.g. start, end, spotting"),
    flow_level: str = typer.Argument(..., help="Flow level, e.g. light, medium, heavy"),
    date_str: Optional[str] = DATE_OPTION,
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Log a menstrual cycle observation."""
    record = _build(
        MenstrualRecord, date=parse_date(date_str),
        period_event=period_event, flow_level=flow_level, notes=notes,
    )
    with RecordStore() as store:
        saved = store.insert_menstrual(record)
    console.print(f"[green]✓ Logged {saved.period_event} ({saved.flow_level}) for {saved.date}[/green]")


@app.command("add-symptoms")
def add_symptoms(
    nausea: int = typer.Argument(..., help="Nausea 1-10"),
    fatigue: int = typer.Argument(..., help="Fatigue 1-10"),
    pain: int = typer.Argument(..., help="Pain 1-10"),
    date_str: Optional[str] = DATE_OPTION,
    notes: Optional[str] = typer.Option(None, "--notes"),
):
    """Log the day's symptom ratings."""
    record = _build(
        SymptomRecord, date=parse_date(date_str),
        nausea=nausea, fatigue=fatigue, pain=pain, notes=notes,
    )
    with RecordStore() as store:
        saved = store.insert_symptoms(record)
    console.print(f"[green]✓ Logged symptoms for {saved.date}[/green]")


def _counts_table(title: str, counts: TriggerCounts) -> Table:
    table = Table(title=title)
    table.add_column("Trigger", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Spike dates", style="dim")
    for value, count in sorted(counts.counts.items(), key=lambda kv: kv[1], reverse=True):
        days = ", ".join(str(e.date) for e in counts.examples[value])
        table.add_row(value, str(count), days)
    return table


@app.command()
def triggers():
    """Show triggers seen on the day before each symptom spike."""
    try:
        analysis = _engine().analyze_triggers()
    except AnalysisError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(0)

    console.print(Panel(
        f"Average severity: {analysis.mean:.2f}\n"
        f"Standard deviation: {analysis.std_dev:.2f}\n"
        f"Spike threshold (day-over-day increase): {analysis.threshold:.2f}\n"
        f"Low sleep nights before spikes: {analysis.low_sleep.count}",
        title="🔍 Trigger Analysis",
    ))

    for title, counts in (
        ("Food items", analysis.food_items),
        ("Period events", analysis.menstrual_events),
        ("Flow levels", analysis.flow_levels),
    ):
        if counts.counts:
            console.print(_counts_table(title, counts))
        else:
            console.print(f"[dim]{title}: none[/dim]")


@app.command()
def flareup():
    """Estimate short-term flare-up risk from recent records."""
    try:
        prediction = _engine().predict_flareup()
    except AnalysisError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(0)

    if not prediction.has_probability:
        console.print(f"[yellow]{prediction.message}[/yellow]")
        raise typer.Exit(0)

    probability = prediction.flareup_probability
    color = "green" if probability < 34 else "yellow" if probability < 67 else "red"
    console.print(f"Flare-up risk: [{color}]{probability:.2f}%[/{color}]")
    for line in prediction.flareup_predictions:
        console.print(f"  • {line}")
    console.print("[dim]Heuristic score, not a calibrated probability.[/dim]")


@app.command()
def recommend():
    """Ask the AI advisor for three recommendations."""
    try:
        items = _engine().recommend()
    except AnalysisError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(0)
    except RecommendationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    for i, item in enumerate(items, 1):
        console.print(f"{i}. {item}")


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the HTTP API."""
    from .web import run
    run(reload=reload)


if __name__ == "__main__":
    app()
