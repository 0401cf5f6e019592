"""CLI for the workout generation engine.

Developer CLI to run the engine locally against JSON files: a generation
context, an exercise catalog and an optional feedback history. It exercises
the same generate_workout code path a service would call.
"""

import json
import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from app.config.settings import settings
from app.core.logger import setup_logger
from app.generation.budget.estimator import compute_budget, exercise_count
from app.generation.errors import WorkoutGenerationError
from app.generation.pipeline import generate_workout, parse_context
from app.generation.schema.catalog import ExerciseRecord
from app.generation.schema.context import FlexibilityPreferences, WorkoutContext
from app.generation.schema.enums import Equipment, ExperienceLevel, FitnessGoal
from app.generation.schema.feedback import PerformanceFeedback
from app.generation.schema.workout import GeneratedWorkout

# Initialize Rich console for output
console = Console()

# Initialize Typer app
app = typer.Typer(
    name="workout-engine-cli",
    help="Workout generation engine CLI - local generation and budget inspection",
    add_completion=False,
)

_CATALOG_ADAPTER = TypeAdapter(list[ExerciseRecord])
_FEEDBACK_ADAPTER = TypeAdapter(list[PerformanceFeedback])


def _setup_logging(debug: bool = False) -> None:
    level = "DEBUG" if debug else settings.log_level
    setup_logger(level=level, log_file=settings.log_file, serialize=settings.log_json, engine_only=not debug)


def _read_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error:[/red] could not read {path}: {escape(str(e))}", style="bold red")
        raise typer.Exit(1) from e


def _print_error(error: WorkoutGenerationError) -> None:
    console.print(f"[red]{error.code}[/red]")
    for detail in error.details:
        console.print(f"  - {escape(detail)}")


def _load_inputs(
    context_file: Path,
    catalog_file: Path,
    feedback_file: Path | None,
) -> tuple[WorkoutContext, list[ExerciseRecord], list[PerformanceFeedback]]:
    """Parse the JSON inputs into engine models.

    Raises:
        typer.Exit: If any file is unreadable or fails validation
    """
    try:
        context = parse_context(_read_json(context_file))
    except WorkoutGenerationError as e:
        _print_error(e)
        raise typer.Exit(1) from e
    try:
        catalog = _CATALOG_ADAPTER.validate_python(_read_json(catalog_file))
        feedback = _FEEDBACK_ADAPTER.validate_python(_read_json(feedback_file)) if feedback_file else []
    except ValidationError as e:
        console.print(f"[red]Invalid input:[/red] {escape(str(e))}", style="bold red")
        raise typer.Exit(1) from e
    return context, catalog, feedback


def _render_workout(workout: GeneratedWorkout) -> None:
    labels = {
        exercise_id: f"{index}.{position + 1}" if len(block.exercise_ids) > 1 else str(index)
        for index, block in enumerate(workout.blocks, start=1)
        for position, exercise_id in enumerate(block.exercise_ids)
    }
    table = Table(title=workout.title)
    table.add_column("Block")
    table.add_column("Exercise")
    table.add_column("Muscle")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Rest", justify="right")
    table.add_column("Weight", justify="right")
    for exercise in workout.exercises:
        table.add_row(
            labels.get(exercise.exercise_id, "-"),
            exercise.name,
            exercise.muscle_group,
            str(exercise.sets),
            f"{exercise.target_reps} ({exercise.rep_range.low}-{exercise.rep_range.high})",
            f"{exercise.rest_seconds}s",
            "-" if exercise.suggested_weight is None else f"{exercise.suggested_weight:g}",
        )
    console.print(table)
    console.print(
        Panel(
            f"Format: {workout.format.value}\n"
            f"Phase: {workout.session_phase.value}\n"
            f"Estimated duration: {workout.estimated_duration_minutes} min\n"
            f"Relaxations: {', '.join(workout.relaxations) or 'none'}",
            title="Summary",
        )
    )


@app.command()
def generate(
    context_file: Path = typer.Option(..., "--context", "-c", help="Path to a WorkoutContext JSON file"),
    catalog_file: Path = typer.Option(..., "--catalog", help="Path to an exercise catalog JSON file"),
    feedback_file: Path | None = typer.Option(None, "--feedback", "-f", help="Path to a feedback history JSON file"),
    output_file: str | None = typer.Option(None, "--output", "-o", help="Write workout JSON to file"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Generate a workout from JSON inputs."""
    _setup_logging(debug)
    context, catalog, feedback = _load_inputs(context_file, catalog_file, feedback_file)

    try:
        workout = generate_workout(context, catalog, feedback_history=feedback)
    except WorkoutGenerationError as e:
        _print_error(e)
        raise typer.Exit(1) from e

    payload = workout.model_dump_json(indent=2)
    if output_file:
        Path(output_file).write_text(payload, encoding="utf-8")
        console.print(f"[green]Workout written to {output_file}[/green]")
    if as_json:
        console.print(JSON(payload))
    else:
        _render_workout(workout)


@app.command()
def budget(
    duration: int = typer.Option(..., "--duration", "-d", help="Session duration in minutes"),
    goal: FitnessGoal = typer.Option(FitnessGoal.HYPERTROPHY, "--goal", help="Fitness goal"),
    experience: ExperienceLevel = typer.Option(ExperienceLevel.INTERMEDIATE, "--experience", help="Experience level"),
    muscles: int = typer.Option(1, "--muscles", "-m", help="Number of target muscle groups"),
    warm_up: bool = typer.Option(True, "--warm-up/--no-warm-up", help="Include warm-up time"),
    cool_down: bool = typer.Option(True, "--cool-down/--no-cool-down", help="Include cool-down time"),
    bodyweight: bool = typer.Option(False, "--bodyweight", help="Price exercises for bodyweight-only training"),
) -> None:
    """Show the time budget and exercise count for a session."""
    flexibility = FlexibilityPreferences(warm_up_enabled=warm_up, cool_down_enabled=cool_down)
    try:
        session_budget = compute_budget(duration, goal, experience, flexibility, muscle_count=muscles)
        equipment = set() if bodyweight else {Equipment.BARBELLS, Equipment.DUMBBELLS}
        counts = exercise_count(duration, goal, muscles, experience, equipment, flexibility)
    except WorkoutGenerationError as e:
        console.print(f"[red]{e.code}[/red]: {escape('; '.join(e.details))}")
        raise typer.Exit(1) from e

    table = Table(title=f"{duration} min {goal.value} budget")
    table.add_column("Component")
    table.add_column("Seconds", justify="right")
    table.add_row("Warm-up", str(session_budget.warmup_seconds))
    table.add_row("Work", str(session_budget.work_seconds))
    table.add_row("Cool-down", str(session_budget.cooldown_seconds))
    table.add_row("Buffer", str(session_budget.buffer_seconds))
    table.add_row("Max work", str(session_budget.max_work_seconds))
    console.print(table)
    console.print(
        f"Format: [cyan]{session_budget.format.value}[/cyan]  "
        f"Exercises: [cyan]{counts.total}[/cyan] (min {counts.minimum}, cap {counts.cap})"
    )


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
