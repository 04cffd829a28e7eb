"""Render helpers for vecbatch CLI."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from vecbatch.ui.console import get_console, get_error_console


def render_banner(title: str, subtitle: str) -> None:
    console = get_console()
    panel = Panel(
        Group(Text(subtitle, style="subtitle")),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_info(text: str) -> None:
    console = get_console()
    console.print(text, style="info", markup=False)


def render_success(text: str) -> None:
    console = get_console()
    console.print(text, style="success", markup=False)


def render_error(text: str) -> None:
    console = get_error_console()
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_summary_table(rows: Mapping[str, str] | Sequence[tuple[str, str]], title: str = "Summary") -> None:
    console = get_console()
    table = Table(
        show_header=False,
        box=None,
        pad_edge=False,
    )
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")

    items = rows.items() if hasattr(rows, "items") else rows
    for key, value in items:
        label = Text(str(key), style="label")
        value_text = Text(str(value), style="path" if str(key).lower() == "output" else "value")
        table.add_row(label, value_text)

    panel = Panel(
        table,
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_models_table(models: Mapping[str, int], default_model: str) -> None:
    console = get_console()
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Model", style="value")
    table.add_column("Dimensions", style="value", justify="right")
    table.add_column("", style="accent")
    for name, dims in models.items():
        table.add_row(name, str(dims), "default" if name == default_model else "")
    console.print(table)
