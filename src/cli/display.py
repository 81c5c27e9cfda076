"""
Rich rendering helpers for the simulator CLI.
"""

from typing import Iterable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..sim import Candle, MarketDataSnapshot, PatternPreset, SimulationConfig
from ..sim.metrics import SimulationMetricsSnapshot

console = Console()


def _fmt_price(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.6f}"


def print_error(message: str, details: Optional[str] = None) -> None:
    """Print an error panel."""
    body = f"[bold red]✗ {message}[/]"
    if details:
        body += f"\n[dim]{details}[/]"
    console.print(Panel(body, border_style="red"))


def print_config(config: SimulationConfig) -> None:
    """Print the applied configuration as a key/value table."""
    table = Table(show_header=True, header_style="bold magenta", title="Configuration",
                  title_style="bold cyan", border_style="blue")
    table.add_column("Field", style="bold yellow")
    table.add_column("Value", justify="right", style="cyan")
    for key, value in config.to_dict().items():
        table.add_row(key, "none" if value is None else str(value))
    console.print(table)


def print_run_summary(
    snapshot: MarketDataSnapshot,
    stats: SimulationMetricsSnapshot,
    initial_price: float,
) -> None:
    """Print the outcome of an offline run."""
    change_pct = (snapshot.price - initial_price) / initial_price * 100
    color = "green" if change_pct >= 0 else "red"

    table = Table(show_header=False, border_style="blue", title="Run Summary", title_style="bold cyan")
    table.add_column("Metric", style="bold yellow")
    table.add_column("Value", justify="right")
    table.add_row("Ticks", str(stats.ticks))
    table.add_row("Initial price", _fmt_price(initial_price))
    table.add_row("Final price", _fmt_price(snapshot.price))
    table.add_row("Change", f"[{color}]{change_pct:+.3f}%[/]")
    table.add_row("Min / Max", f"{_fmt_price(stats.min_price)} / {_fmt_price(stats.max_price)}")
    table.add_row("Bid / Ask", f"{_fmt_price(snapshot.bid)} / {_fmt_price(snapshot.ask)}")
    table.add_row("Boosted ticks", str(stats.boosted_ticks))
    table.add_row("Peak vol multiplier", f"{stats.peak_volatility_multiplier:.2f}")
    console.print(table)


def print_candles(candles: List[Candle], interval_ms: int, limit: int = 10) -> None:
    """Print the most recent candles, oldest first."""
    shown = candles[-limit:]
    table = Table(show_header=True, header_style="bold magenta",
                  title=f"Candles ({interval_ms}ms, last {len(shown)} of {len(candles)})",
                  title_style="bold cyan", border_style="blue")
    table.add_column("Start (ms)", style="dim")
    for col in ("Open", "High", "Low", "Close"):
        table.add_column(col, justify="right")
    table.add_column("Volume", justify="right", style="cyan")

    for c in shown:
        close_color = "green" if c.close >= c.open else "red"
        table.add_row(
            str(c.timestamp),
            _fmt_price(c.open),
            _fmt_price(c.high),
            _fmt_price(c.low),
            f"[{close_color}]{_fmt_price(c.close)}[/]",
            f"{c.volume:,.0f}",
        )
    console.print(table)


def print_presets(presets: Iterable[PatternPreset]) -> None:
    """Print the preset catalogue."""
    table = Table(show_header=True, header_style="bold magenta", title="Pattern Presets",
                  title_style="bold cyan", border_style="blue")
    table.add_column("Name", style="bold yellow")
    table.add_column("Pattern")
    table.add_column("Volatility", justify="right")
    table.add_column("Strength", justify="right")
    table.add_column("Duration (ms)", justify="right")
    table.add_column("Description", style="dim")
    for p in presets:
        table.add_row(
            p.name,
            p.pattern_type.value,
            f"{p.volatility:g}",
            f"{p.pattern_strength:g}",
            str(p.pattern_duration_ms),
            p.description,
        )
    console.print(table)
