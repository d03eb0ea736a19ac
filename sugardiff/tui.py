#!/usr/bin/env python3
"""
🩸 Sugar Diff TUI

Type a level, press Enter, type the time it was measured (HH:MM), press
Enter again. Entries are kept in time order, charted across the day, and the
last two are used to estimate when the level crosses the low or high mark.

Keyboard Shortcuts:
  Enter    : Next field / add measurement
  Backspace: Delete last character
  Esc      : Quit
"""

import argparse
import math
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import plotext as plt
from blessed import Terminal

# Rich imports
from rich.console import Console, ConsoleOptions, RenderResult
from rich.live import Live
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from sugardiff.app import AppState, InputMode, handle_key
from sugardiff.services.analytics import (
    chart_x_bounds,
    format_entry,
    projection_text,
    windowed_rates,
)
from sugardiff.utils.exceptions import ConfigurationError
from sugardiff.utils.helpers import load_config
from sugardiff.utils.logger import StructuredLogger, get_logger
from sugardiff.utils.validators import SettingsSchema, validate_config


class Theme:
    """Color theme."""
    ACTIVE = "bright_green"
    WARNING = "bright_yellow"
    ERROR = "bright_red"
    INFO = "bright_cyan"
    DIM = "dim white"

    HEADER = "bold white on blue"
    BORDER = "cyan"
    FOOTER = "white on blue"
    CHART = "cyan"


class MeasurementChart:
    """Line chart of the log, drawn by plotext at whatever size rich offers."""

    MIN_WIDTH = 20
    MIN_HEIGHT = 5
    TICK_STEP = 180  # minutes

    def __init__(self, points: Sequence[Tuple[float, float]],
                 x_bounds: Tuple[float, float], y_bounds: Tuple[float, float]):
        self.points = list(points)
        self.x_bounds = x_bounds
        self.y_bounds = y_bounds

    def time_ticks(self) -> Tuple[List[float], List[str]]:
        """Tick positions every few hours, labelled HH:MM."""
        lo, hi = self.x_bounds
        first = math.ceil(lo / self.TICK_STEP) * self.TICK_STEP
        ticks = list(range(int(first), int(hi) + 1, self.TICK_STEP))
        labels = [f"{(t // 60) % 24:02d}:{t % 60:02d}" for t in ticks]
        return [float(t) for t in ticks], labels

    def build(self, width: int, height: int) -> str:
        plt.clf()
        plt.plotsize(max(width, self.MIN_WIDTH), max(height, self.MIN_HEIGHT))
        plt.theme('clear')

        if self.points:
            xs = [x for x, _ in self.points]
            ys = [y for _, y in self.points]
            plt.plot(xs, ys, marker='braille', color=Theme.CHART)

        plt.xlim(*self.x_bounds)
        plt.ylim(*self.y_bounds)
        ticks, labels = self.time_ticks()
        if ticks:
            plt.xticks(ticks, labels)
        plt.xlabel("Time")
        plt.ylabel("Level")
        return plt.build()

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        height = options.height or self.MIN_HEIGHT * 3
        yield Text.from_ansi(self.build(options.max_width, height))


class SugarDiffTUI:
    """Main TUI application."""

    def __init__(self, settings: SettingsSchema, logger: StructuredLogger,
                 console: Optional[Console] = None, state: Optional[AppState] = None):
        self.settings = settings
        self.logger = logger
        self.console = console or Console()
        self.state = state or AppState()

    # ============================================================================
    # HEADER & FOOTER
    # ============================================================================

    def make_header(self) -> Panel:
        """Create header bar."""
        grid = Table.grid(expand=True)
        grid.add_column(ratio=1)
        grid.add_column(ratio=1, justify="center")
        grid.add_column(ratio=1, justify="right")

        left = Text()
        left.append("🩸 ", style="bold bright_red")
        left.append("Sugar Diff", style="bold white")

        center = Text(f"[ {len(self.state.log)} measurements ]", style="bold white")
        right = Text(datetime.now().strftime("%H:%M"), style="bold white")

        grid.add_row(left, center, right)
        return Panel(grid, style=Theme.HEADER, box=box.HEAVY, padding=(0, 1))

    def make_footer(self) -> Panel:
        """Status line and shortcuts."""
        grid = Table.grid(expand=True)
        grid.add_column(ratio=2)
        grid.add_column(ratio=1, justify="right")

        color = Theme.ERROR if self.state.status_level == 'error' else Theme.ACTIVE
        status = Text(self.state.status, style=f"bold {color}")

        shortcuts = Text()
        for key, label in (("Enter", "Next"), ("Bksp", "Delete"), ("Esc", "Quit")):
            shortcuts.append(f" {key} ", style=f"bold black on {Theme.INFO}")
            shortcuts.append(f" {label} ", style=Theme.DIM)

        grid.add_row(status, shortcuts)
        return Panel(grid, style=Theme.FOOTER, box=box.HEAVY, padding=(0, 1))

    # ============================================================================
    # INPUTS
    # ============================================================================

    def make_input(self, title: str, text: str, mode: InputMode) -> Panel:
        """Text entry box; the active one shows a cursor."""
        active = self.state.input_mode is mode
        content = Text(text, style="bold white")
        if active:
            content.append("▏", style=f"blink {Theme.ACTIVE}")

        return Panel(
            content,
            title=f"[bold]{title}[/]",
            title_align="left",
            border_style=Theme.ACTIVE if active else Theme.DIM,
            box=box.ROUNDED
        )

    # ============================================================================
    # MEASUREMENTS
    # ============================================================================

    def make_measurements(self) -> Panel:
        """Trailing window of the log with per-minute rates."""
        rows = windowed_rates(self.state.log, self.settings.display.window_size)

        if not rows:
            content = Text("No measurements yet", style=Theme.DIM)
        else:
            lines = []
            for row in rows:
                if row.rate is None:
                    color = "white" if not row.degenerate else Theme.WARNING
                elif row.rate > 0:
                    color = Theme.ERROR
                else:
                    color = Theme.INFO
                lines.append(Text(format_entry(row), style=color))
            content = Text("\n").join(lines)

        return Panel(
            content,
            title="[bold bright_cyan]Measurements[/]",
            title_align="left",
            border_style=Theme.BORDER,
            box=box.SIMPLE_HEAD
        )

    def make_chart(self) -> Panel:
        """Measurements across the day."""
        chart_cfg = self.settings.chart
        points = self.state.log.chart_points()
        x_bounds = chart_x_bounds(points, upper=chart_cfg.x_upper,
                                  lower_factor=chart_cfg.x_lower_factor)

        return Panel(
            MeasurementChart(points, x_bounds, tuple(chart_cfg.y_bounds)),
            title="[bold bright_cyan]📈 Measurements chart[/]",
            border_style=Theme.BORDER,
            box=box.ROUNDED
        )

    def make_projection(self) -> Panel:
        """Estimated time to the next threshold."""
        return Panel(
            Text(projection_text(self.state.log), style="bold white"),
            border_style=Theme.BORDER,
            box=box.ROUNDED
        )

    # ============================================================================
    # MAIN RENDERING
    # ============================================================================

    def render(self) -> Layout:
        """Render the whole screen."""
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="level", size=3),
            Layout(name="time", size=3),
            Layout(name="measurements", size=self.settings.display.window_size + 2),
            Layout(name="chart", minimum_size=8),
            Layout(name="projection", size=3),
            Layout(name="footer", size=3)
        )

        layout["header"].update(self.make_header())
        layout["level"].update(self.make_input("Level", self.state.value_input, InputMode.VALUE))
        layout["time"].update(self.make_input("Time", self.state.time_input, InputMode.TIME))
        layout["measurements"].update(self.make_measurements())
        layout["chart"].update(self.make_chart())
        layout["projection"].update(self.make_projection())
        layout["footer"].update(self.make_footer())

        return layout

    def run(self):
        """Run the TUI until Esc is pressed."""
        term = Terminal()

        try:
            with term.cbreak(), Live(self.render(), console=self.console,
                                     screen=True, auto_refresh=False) as live:
                while self.state.running:
                    # Time out now and then so resizes and the clock get redrawn
                    key = term.inkey(timeout=1)
                    if key:
                        handle_key(self.state, key, self.logger)
                    live.update(self.render(), refresh=True)
        except KeyboardInterrupt:
            pass
        finally:
            self.logger.log_action('info', 'Session ended', measurements=len(self.state.log))
            self.console.print(f"\n[bold bright_cyan]👋 Recorded {len(self.state.log)} measurements this session.[/]\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        prog='sugar-diff',
        description='Record measurements through the day and project when they cross a threshold.'
    )
    parser.add_argument('--config', default=None,
                        help='path to a YAML config file (default: config/config.yaml if present)')
    parser.add_argument('--log-file', default=None,
                        help='override the log file from the config')
    args = parser.parse_args(argv)

    console = Console()
    try:
        settings = validate_config(load_config(args.config))
    except ConfigurationError as e:
        console.print(f"[red]Error: {e.message}[/]")
        for line in e.details.get('errors', []):
            console.print(f"  [dim]{line}[/]")
        return 1

    log_file = Path(args.log_file or settings.logging.file)
    logger = get_logger(log_file, settings.logging.level)
    logger.log_action('info', 'Session started', config=args.config, window_size=settings.display.window_size)

    SugarDiffTUI(settings, logger, console=console).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
