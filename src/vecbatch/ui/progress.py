"""Progress helpers for vecbatch CLI."""

from __future__ import annotations

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from vecbatch.ui.console import get_console


def build_progress() -> Progress:
    return Progress(
        SpinnerColumn(style="accent"),
        TextColumn("[progress.description]{task.description}", style="label"),
        BarColumn(bar_width=None, style="border", complete_style="accent", finished_style="accent"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=get_console(),
        transient=True,
    )
