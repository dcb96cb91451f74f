"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of schedules, records and milestones.
"""

from rich.console import Console
from rich.table import Table

from ..core.milestones import format_milestone
from ..core.models import PR, DaySchedule, LiftWarmup, Milestone, PlateResult, WeekSchedule
from ..core.plates import format_plates
from ..core.schedule import format_warmup_sets

console = Console()

_PHASE_STYLES = {
    "Strength": "cyan",
    "Unloading": "green",
    "Power": "dark_orange",
}


def phase_style(phase: str) -> str:
    """Rich style for a phase name."""
    return _PHASE_STYLES.get(phase, "default")


def format_targets_table(targets: list[dict]) -> Table:
    table = Table(title="Weekly Targets")
    table.add_column("Week", justify="right")
    table.add_column("%1RM", justify="right")
    table.add_column("Scheme", justify="center")
    table.add_column("Phase")

    for t in targets:
        style = phase_style(t["phase"])
        table.add_row(
            str(t["week"]),
            f"{t['percent']}%",
            t["scheme"],
            f"[{style}]{t['phase']}[/{style}]",
        )
    return table


def _fmt_warmup(warmups: list[LiftWarmup], short_name: str) -> str:
    for w in warmups:
        if w.short_name == short_name:
            return format_warmup_sets(w) or "-"
    return "-"


def format_day_table(day: DaySchedule) -> Table:
    """Working sets and warmup ramps for one day."""
    table = Table(title=f"{day.day_name}: {day.intensity_label}", title_justify="left")
    table.add_column("Lift")
    table.add_column("Work", justify="right")
    table.add_column("Scheme", justify="center")
    table.add_column("Warmup", style="dim")

    for ls in day.lifts:
        table.add_row(
            ls.short_name,
            str(ls.weight),
            f"{ls.sets}x{ls.reps}",
            _fmt_warmup(day.warmups, ls.short_name),
        )
    return table


def print_week(week: WeekSchedule) -> None:
    style = phase_style(week.phase)
    console.print()
    console.print(
        f"[bold {style}]{week.phase_label}[/bold {style}]"
        f"  [dim]target {round(week.weekly_target_percent * 100)}% of 1RM[/dim]"
    )
    for day in week.days:
        console.print(format_day_table(day))


def format_program_table(program: list[WeekSchedule]) -> Table:
    """Compact overview: one row per week, Monday/Wednesday/Friday columns."""
    table = Table(title="8-Week Program")
    table.add_column("Week", justify="right")
    table.add_column("Phase")
    for label in ("MON", "WED", "FRI"):
        table.add_column(label)

    for week in program:
        style = phase_style(week.phase)
        cells = []
        for day in week.days:
            lifts = " ".join(f"{ls.short_name} {ls.weight}" for ls in day.lifts)
            scheme = f"{day.lifts[0].sets}x{day.lifts[0].reps}" if day.lifts else ""
            cells.append(f"{lifts}\n[dim]{scheme}[/dim]")
        table.add_row(str(week.week), f"[{style}]{week.phase}[/{style}]", *cells)
    return table


def print_warmup(warmup: LiftWarmup, target_weight: float) -> None:
    table = Table(title=f"Warmup for {target_weight:g}")
    table.add_column("Step")
    table.add_column("Weight", justify="right")
    table.add_column("Reps", justify="right")
    for s in warmup.sets:
        table.add_row(s.label, str(s.weight), str(s.reps))
    console.print(table)


def print_plates(result: PlateResult) -> None:
    console.print(f"[bold]{result.total_weight:g}[/bold]: {format_plates(result)} per side")
    if result.achievable_weight != result.total_weight:
        print_warning(
            f"Closest loadable weight is {result.achievable_weight:g}"
        )


def print_prs(prs: list[PR]) -> None:
    if not prs:
        print_info("No new personal records.")
        return
    table = Table(title="Personal Records")
    table.add_column("Exercise")
    table.add_column("New", justify="right")
    table.add_column("Previous", justify="right", style="dim")
    for pr in prs:
        prev = pr.previous_best
        table.add_row(
            pr.exercise,
            f"{pr.weight:g} x {pr.reps}",
            f"{prev.weight:g} x {prev.reps}" if prev is not None else "-",
        )
    console.print(table)


def print_milestones(milestones: list[Milestone]) -> None:
    if not milestones:
        print_info("No milestones waiting to be celebrated.")
        return
    console.print("[bold]Milestones[/bold]")
    for m in milestones:
        console.print(f"[magenta]{format_milestone(m)}[/magenta]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")
