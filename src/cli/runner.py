# src/cli/runner.py

"""Headless runner: cluster a JSON file of offers and print the result."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.clustering.cabin_filter import CabinFilter
from src.clustering.exceptions import InvalidInputError
from src.clustering.signatures import SignatureCanonicalizer
from src.clustering.tie_break import cash_price, total_duration
from src.config.settings import Settings
from src.models.offer import Offer
from src.models.offer_parser import parse_offers
from src.services.offer_pipeline import OfferPipeline, PipelineResult

logger = logging.getLogger("flight_offers.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def load_offers(path: Path) -> list[Offer]:
    """Read and parse a JSON list of offers or a search response file.

    Raises ``OSError``, ``json.JSONDecodeError`` or
    :class:`InvalidInputError` on unreadable input.
    """
    with path.open(encoding="utf-8") as fh:
        payload = json.load(fh)
    return parse_offers(payload)


def _format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"


def _stop_label(stop_count: int) -> str:
    if stop_count == 0:
        return "Nonstop"
    return f"{stop_count} stop" + ("s" if stop_count > 1 else "")


def _result_to_dict(result: PipelineResult) -> dict[str, object]:
    """Serialise a pipeline result to plain dicts for JSON output."""
    return {
        "active_stop": result.active_stop,
        "tab_prices": {
            "best": result.tab_prices.best_price,
            "cheap": result.tab_prices.cheap_price,
        },
        "auto_enrich_ids": sorted(result.auto_enrich_ids),
        "buckets": OfferPipeline.presentation(result),
    }


def _print_tables(result: PipelineResult) -> None:
    """Render one Rich table per stop bucket to stdout."""
    console = Console()
    for bucket in result.buckets:
        marker = " (active)" if bucket.stop_count == result.active_stop else ""
        table = Table(
            title=(
                f"{_stop_label(bucket.stop_count)}{marker}: "
                f"{bucket.offer_count} offers from {bucket.cheapest_price:,.2f}"
            ),
            show_lines=True,
            title_style="bold cyan",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Flight", style="bold")
        table.add_column("Route")
        table.add_column("Departure", style="dim")
        table.add_column("Duration", justify="right")
        table.add_column("Price", justify="right", style="green")
        table.add_column("Similar", justify="center")

        for idx, cluster in enumerate(bucket.clusters, 1):
            primary = cluster.primary
            slices = primary.itinerary_slices
            flag = "*" if primary.id in result.auto_enrich_ids else ""
            table.add_row(
                f"{idx}{flag}",
                SignatureCanonicalizer.primary_flight_number(primary) or "-",
                " / ".join(f"{s.origin}-{s.destination}" for s in slices),
                slices[0].departure[:16] if slices else "-",
                _format_duration(total_duration(primary)),
                f"{primary.currency} {cash_price(primary):,.2f}",
                (
                    f"{len(cluster.similar)} from {cluster.cheapest_price:,.2f}"
                    if cluster.similar
                    else "-"
                ),
            )
        console.print(table)

    _err.print(
        f"[dim]Best (fastest): {result.tab_prices.best_price:,.2f}  "
        f"Cheap: {result.tab_prices.cheap_price:,.2f}[/dim]"
    )


def cli_run(
    offers_file: str,
    cabin: str | None,
    sort_mode: str,
    active_stop: int | None,
    output_format: str,
) -> int:
    """Cluster offers from *offers_file*; 0=ok, 1=no offers, 2=bad input."""
    path = Path(offers_file)
    try:
        offers = load_offers(path)
    except (OSError, json.JSONDecodeError, InvalidInputError) as exc:
        logger.error("Could not load offers from %s: %s", path, exc)
        _err.print(f"[red]Could not load offers: {exc}[/red]")
        return 2

    normalised = CabinFilter.normalise_cabin(cabin) if cabin else ""
    cabin_label = Settings.CABIN_LABELS.get(normalised, cabin or "all cabins")
    _err.print(
        f"[bold]Clustering:[/bold] {len(offers)} offers  "
        f"[dim]cabin={cabin_label} sort={sort_mode}[/dim]"
    )

    pipeline = OfferPipeline()
    result = pipeline.run(
        offers, cabin=cabin, sort_mode=sort_mode, active_stop=active_stop
    )

    if not result.buckets:
        _err.print("[yellow]No offers to show.[/yellow]")
        return 1

    parts: list[str] = []
    if result.excluded_count:
        parts.append(f"{result.excluded_count} other cabins")
    if result.merged_count:
        parts.append(f"{result.merged_count} merged")
    detail = f" ({', '.join(parts)})" if parts else ""
    cluster_count = sum(len(b.clusters) for b in result.buckets)
    _err.print(
        f"[green]✓ {cluster_count} flights"
        f" from {result.total_offers} offers{detail}[/green]"
    )

    if output_format == "table":
        _print_tables(result)
    else:
        json.dump(
            _result_to_dict(result),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0
