"""Command-line interface for the token analyzer service."""

import asyncio
import json
from datetime import datetime, timezone
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from token_analyzer.config.settings import Settings, get_settings
from token_analyzer.core.exceptions import TokenAnalyzerError
from token_analyzer.infrastructure.logging import setup_logging
from token_analyzer.models.analysis import TechnicalAnalysisData
from token_analyzer.providers.file_provider import JsonFileDataProvider
from token_analyzer.services.technical_analysis_service import TechnicalAnalysisService

console = Console()

app = typer.Typer(
    name="token-analyzer",
    help="Technical metrics engine for tokens and NFT collections"
)

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]


def get_service(
    data_dir: Optional[str],
    settings: Optional[Settings] = None
) -> TechnicalAnalysisService:
    """Initialize logging and return a service backed by the JSON file provider."""
    settings = settings or get_settings()
    setup_logging(settings)
    provider = JsonFileDataProvider(data_dir or settings.data_directory)
    return TechnicalAnalysisService(settings, provider)


def _save_output(output: str, payload) -> None:
    with open(output, "w") as f:
        json.dump(payload, f, indent=2, default=str)
    console.print(f"[green]Results saved to {output}[/green]")


@app.command()
def analyze(
    identifier: str = typer.Argument(..., help="Token contract or collection identifier"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Directory of JSON data files"),
    output: Optional[str] = typer.Option(None, "--output", help="Output file (JSON)")
) -> None:
    """Run a complete technical analysis for an identifier."""

    async def _analyze() -> TechnicalAnalysisData:
        service = get_service(data_dir)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console
        ) as progress:
            task = progress.add_task(f"Analyzing {identifier}...", total=None)
            result = await service.analyze(identifier)
            progress.update(task, description="Complete!")
        return result

    try:
        result = asyncio.run(_analyze())
    except TokenAnalyzerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1)

    _display_analysis_result(result)

    if output:
        _save_output(output, result.model_dump(mode="json", by_alias=True))


@app.command()
def history(
    identifier: str = typer.Argument(..., help="Token contract or collection identifier"),
    start: datetime = typer.Option(..., "--start", formats=DATE_FORMATS, help="Range start (UTC)"),
    end: datetime = typer.Option(..., "--end", formats=DATE_FORMATS, help="Range end (UTC)"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Directory of JSON data files"),
    output: Optional[str] = typer.Option(None, "--output", help="Output file (JSON)")
) -> None:
    """Analyze an identifier interval by interval over a date range."""
    try:
        service = get_service(data_dir)
    except TokenAnalyzerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1)

    results = asyncio.run(service.get_historical_analysis(identifier, start, end))

    if not results:
        console.print(f"[yellow]No historical analysis available for {identifier}[/yellow]")
        return

    _display_history(identifier, results)

    if output:
        _save_output(output, [r.model_dump(mode="json", by_alias=True) for r in results])


@app.command()
def watch(
    identifier: str = typer.Argument(..., help="Token contract or collection identifier"),
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Directory of JSON data files"),
    interval: Optional[float] = typer.Option(None, "--interval", help="Polling interval in seconds"),
    count: int = typer.Option(3, "--count", help="Number of updates before stopping")
) -> None:
    """Poll the analysis of an identifier and print each update."""

    async def _watch() -> None:
        settings = get_settings()
        if interval is not None:
            settings = settings.model_copy(
                update={"subscription_interval_seconds": interval}
            )
        service = get_service(data_dir, settings)

        received = asyncio.Event()
        updates = 0

        def _on_update(result: TechnicalAnalysisData) -> None:
            nonlocal updates
            updates += 1
            console.print(
                f"[cyan]{_format_timestamp(result.as_of)}[/cyan] "
                f"RSI {result.momentum.rsi:.1f} | "
                f"MACD {result.momentum.macd.histogram:+.4f} | "
                f"Trend {result.trend.direction.value} | "
                f"HV {result.volatility.historical_volatility:.1f}%"
            )
            if updates >= count:
                received.set()

        subscription = await service.subscribe_to_updates(identifier, _on_update)
        console.print(
            f"[green]Watching {identifier} every "
            f"{service.settings.subscription_interval_seconds}s (Ctrl+C to stop)[/green]"
        )
        try:
            await received.wait()
        finally:
            subscription()
            await service.close()

    try:
        asyncio.run(_watch())
    except TokenAnalyzerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        console.print("[yellow]Stopped watching[/yellow]")


def _format_timestamp(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).strftime(
        "%Y-%m-%d %H:%M:%S"
    )


def _display_analysis_result(result: TechnicalAnalysisData) -> None:
    """Display analysis result in formatted panels and tables."""

    info_text = f"""
Identifier: {result.identifier}
As Of: {_format_timestamp(result.as_of)} UTC
Data Points: {result.data_points}
Trend: {result.trend.direction.value.title()} (strength {result.trend.strength:.4f})
Prediction: {result.predictions.predicted_price:.4f} ({result.predictions.timeframe}, confidence {result.predictions.confidence:.2f})
"""
    console.print(Panel(info_text.strip(), title="Technical Analysis", border_style="green"))

    table = Table(title="Indicators")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    momentum = result.momentum
    volatility = result.volatility
    table.add_row("RSI", f"{momentum.rsi:.2f}")
    table.add_row("MACD", f"{momentum.macd.value:.4f}")
    table.add_row("MACD Signal", f"{momentum.macd.signal:.4f}")
    table.add_row("MACD Histogram", f"{momentum.macd.histogram:.4f}")
    table.add_row("Momentum", f"{momentum.momentum:.2f}%")
    table.add_row("Historical Volatility", f"{volatility.historical_volatility:.2f}%")
    table.add_row("Implied Volatility", f"{volatility.implied_volatility:.2f}%")
    table.add_row("Volatility Index", f"{volatility.volatility_index:.2f}")
    table.add_row("Volatility Skew", f"{volatility.volatility_skew:.3f}")
    table.add_row("Value Area", (
        f"{result.volume.value_areas.low:.2f} - {result.volume.value_areas.high:.2f} "
        f"(mean {result.volume.value_areas.value:.2f})"
    ))
    table.add_row("Volume Zones", str(len(result.volume.volume_zones)))
    table.add_row("Liquidity Concentration", f"{result.liquidity.concentration:.3f}")
    table.add_row("Liquidity Imbalance", f"{result.liquidity.imbalance:.3f}")
    table.add_row("Liquidity Efficiency", f"{result.liquidity.efficiency:.3f}")
    table.add_row("Support", _format_levels(result.trend.support))
    table.add_row("Resistance", _format_levels(result.trend.resistance))

    console.print(table)

    if result.patterns:
        patterns_table = Table(title="Patterns")
        patterns_table.add_column("Pattern", style="cyan")
        patterns_table.add_column("Confidence", style="white")
        patterns_table.add_column("Entry", style="white")
        patterns_table.add_column("Target", style="green")
        patterns_table.add_column("Stop Loss", style="red")
        for pattern in result.patterns:
            patterns_table.add_row(
                pattern.pattern,
                f"{pattern.confidence:.2f}",
                f"{pattern.price_targets.entry:.4f}",
                f"{pattern.price_targets.target:.4f}",
                f"{pattern.price_targets.stop_loss:.4f}",
            )
        console.print(patterns_table)


def _display_history(identifier: str, results: List[TechnicalAnalysisData]) -> None:
    """Display historical analyses in a table."""

    table = Table(title=f"Historical Analysis for {identifier} ({len(results)} intervals)")
    table.add_column("As Of", style="cyan")
    table.add_column("Points", style="white")
    table.add_column("RSI", style="white")
    table.add_column("Momentum", style="white")
    table.add_column("HV", style="white")
    table.add_column("Trend", style="white")

    for result in results:
        table.add_row(
            _format_timestamp(result.as_of),
            str(result.data_points),
            f"{result.momentum.rsi:.1f}",
            f"{result.momentum.momentum:+.2f}%",
            f"{result.volatility.historical_volatility:.1f}%",
            result.trend.direction.value,
        )

    console.print(table)


def _format_levels(levels: List[float], limit: int = 5) -> str:
    if not levels:
        return "-"
    shown = ", ".join(f"{level:.2f}" for level in levels[:limit])
    return shown if len(levels) <= limit else f"{shown} (+{len(levels) - limit})"


if __name__ == "__main__":
    app()
