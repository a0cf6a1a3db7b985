"""Rich terminal output for a parsed run log."""

import math

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from romslog.models import LogSummary
from romslog.parsers.dates import day_number_to_datetime


def _fmt_sci(value: float) -> str:
    if math.isnan(value):
        return "-"
    if value == 0.0:
        return "0"
    if abs(value) < 1e-3 or abs(value) > 1e6:
        return f"{value:.4E}"
    return f"{value:.4f}"


def _fmt_date(days: float) -> str:
    moment = day_number_to_datetime(days)
    return moment.strftime("%Y-%m-%d %H:%M:%S") if moment else "-"


def _fmt_elapsed(seconds: float) -> str:
    if math.isnan(seconds):
        return "-"
    hours, rest = divmod(int(round(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:d}:{minutes:02d}:{secs:02d} ({seconds:.0f} s)"


def render_summary(summary: LogSummary, no_color: bool = False, tail: int = 10):
    """Render the log summary to the terminal."""
    console = Console(force_terminal=not no_color, no_color=no_color, highlight=False)

    # === Run metadata ===
    grids = ", ".join(str(g) for g in summary.grids) or "-"
    header_text = (
        f"Version: {summary.version or '-'}\n"
        f"Start: {_fmt_date(summary.start_date)} | End: {_fmt_date(summary.end_date)}\n"
        f"Elapsed: {_fmt_elapsed(summary.elapsed_seconds)}\n"
        f"Lines: {summary.line_count:,} | Grids: {grids} | "
        f"dstart: {_fmt_sci(summary.parameters.dstart)} | "
        f"Floats declared: {summary.float_count:,}"
    )
    console.print(Panel(header_text, title="ROMS run log", border_style="blue"))

    # === Float sources ===
    if summary.float_sources:
        table = Table(title=f"Float sources ({len(summary.float_sources)})", border_style="dim")
        for name in ("Grid", "Coord", "Count", "t0", "x0", "y0", "z0", "dt", "dx", "dy", "dz"):
            table.add_column(name, justify="right")
        for rec in summary.float_sources:
            table.add_row(
                str(rec.grid), str(rec.coordinate_flag), str(rec.count),
                *(_fmt_sci(v) for v in (
                    rec.t0, rec.x0, rec.y0, rec.z0, rec.dt, rec.dx, rec.dy, rec.dz
                )),
            )
        console.print(table)
    else:
        console.print("[dim]No float sources in this log.[/dim]")

    # === Steps ===
    if summary.steps:
        shown = summary.steps[-tail:] if tail > 0 else summary.steps
        table = Table(
            title=f"Time steps (last {len(shown)} of {len(summary.steps):,})",
            border_style="cyan",
        )
        table.add_column("Grid", justify="right")
        table.add_column("Step", justify="right")
        table.add_column("Day", justify="right")
        table.add_column("Kinetic", justify="right")
        table.add_column("Potential", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Net volume", justify="right")
        for rec in shown:
            table.add_row(
                str(rec.grid), f"{rec.step:,}", f"{rec.time:.5f}",
                _fmt_sci(rec.kinetic_energy), _fmt_sci(rec.potential_energy),
                _fmt_sci(rec.total_energy), _fmt_sci(rec.net_volume),
            )
        console.print(table)
    else:
        console.print("[dim]No time-step records in this log.[/dim]")

    # === Courant numbers ===
    peak = summary.max_cfl
    if peak is not None:
        console.print(Panel(
            f"Samples: {len(summary.cfl):,}\n"
            f"Largest: Cu {_fmt_sci(peak.cu)} | Cv {_fmt_sci(peak.cv)} | "
            f"Cw {_fmt_sci(peak.cw)} | max {_fmt_sci(peak.max_stability_parameter)}",
            title="Courant numbers",
            border_style="yellow",
        ))
    else:
        console.print("[dim]No Courant number records in this log.[/dim]")
