"""Command line entry point for the incstats accumulators."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import TextIO

import click
import numpy as np
import structlog

from incstats import buffers
from incstats.errors import IncstatsError
from incstats.logging import configure_logging
from incstats.math import MAX_ORDER
from incstats.schemas import StreamSummarySchema
from incstats.summary import StreamSummary, summarize_observations

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")

logger = structlog.get_logger(__name__)


def _split_fields(line: str, delimiter: str | None) -> list[str]:
    """Split a record on ``delimiter``, or on commas/whitespace when unset."""
    if delimiter is not None:
        return [token.strip() for token in line.split(delimiter)]
    if "," in line:
        return [token.strip() for token in line.split(",")]
    return line.split()


def _parse_field(fields: list[str], column: int, line_number: int, label: str) -> float:
    """Return ``fields[column]`` as a float, raising a usage error otherwise."""
    try:
        raw = fields[column]
    except IndexError:
        raise click.ClickException(
            f"line {line_number}: no {label} column {column} in {len(fields)} field(s)."
        ) from None
    try:
        return float(raw)
    except ValueError:
        raise click.ClickException(f"line {line_number}: cannot parse {label} {raw!r}.") from None


def _read_observations(
    lines: Iterable[str],
    *,
    value_column: int,
    weight_column: int | None,
    delimiter: str | None,
) -> Iterator[tuple[float, float]]:
    """Yield ``(value, weight)`` pairs from delimited text, skipping blanks and comments."""
    for line_number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        fields = _split_fields(stripped, delimiter)
        value = _parse_field(fields, value_column, line_number, "value")
        weight = 1.0
        if weight_column is not None:
            weight = _parse_field(fields, weight_column, line_number, "weight")
        yield value, weight


def _summary_payload(summary: StreamSummary) -> dict[str, object]:
    """Serialize a summary into a JSON-friendly dict."""
    return StreamSummarySchema().dump(summary)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="INCSTATS_LOG_LEVEL",
    default="warning",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="INCSTATS_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """Compute streaming weighted statistics in a single pass."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    logger.bind(command_group="incstats").debug(
        "cli.initialized",
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("summarize")
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--value-column",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Zero-based column holding the observed values.",
)
@click.option(
    "--weight-column",
    type=click.IntRange(min=0),
    default=None,
    help="Zero-based column holding observation weights (unit weights when omitted).",
)
@click.option(
    "--delimiter",
    default=None,
    help="Field separator. Commas or whitespace are detected when omitted.",
)
@click.option(
    "--order",
    type=click.IntRange(0, MAX_ORDER),
    default=4,
    show_default=True,
    help="Highest central moment to report.",
)
@click.option(
    "--raw",
    is_flag=True,
    default=False,
    help="Report unstandardized central moments.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Optional path to write the JSON summary instead of stdout.",
)
def summarize_command(
    *,
    source: TextIO,
    value_column: int,
    weight_column: int | None,
    delimiter: str | None,
    order: int,
    raw: bool,
    output_path: Path | None,
) -> None:
    """Read one observation per line from SOURCE (stdin by default) and summarize it."""
    cmd_log = logger.bind(command="summarize", order=order, standardize=not raw)
    cmd_log.info("command.start", source=getattr(source, "name", "-"))
    observations = _read_observations(
        source,
        value_column=value_column,
        weight_column=weight_column,
        delimiter=delimiter,
    )
    try:
        summary = summarize_observations(observations, order=order, standardize=not raw)
    except IncstatsError as exc:
        cmd_log.warning("command.failed", error=str(exc))
        raise click.ClickException(str(exc)) from exc

    text = json.dumps(_summary_payload(summary), indent=2, allow_nan=False)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n")
        click.echo(f"Wrote summary of {summary.count} observations to {output_path}")
    else:
        click.echo(text)
    cmd_log.info("command.completed", count=summary.count, total_weight=summary.total_weight)


def _benchmark_targets(order: int) -> dict[str, tuple[Callable[..., None], int | None]]:
    """Map each accumulator family to its buffer update function."""
    return {
        "mean": (buffers.update_mean, None),
        "variance": (buffers.update_variance, None),
        "skewness": (buffers.update_skewness, None),
        "kurtosis": (buffers.update_kurtosis, None),
        "central_moment": (buffers.update_central_moment, order),
    }


def _time_updates(
    kind: str,
    update: Callable[..., None],
    order: int | None,
    values: list[float],
    weights: list[float],
) -> float:
    """Return the wall time of one full pass of ``update`` over the stream."""
    buffer = buffers.new_buffer(kind, order)
    extra = () if order is None else (order,)
    start = time.perf_counter()
    for x, w in zip(values, weights):
        update(x, w, buffer, *extra)
    return time.perf_counter() - start


@cli.command("benchmark")
@click.option(
    "--points",
    type=click.IntRange(min=1),
    default=100_000,
    show_default=True,
    help="Number of random observations per pass.",
)
@click.option(
    "--repeat",
    type=click.IntRange(min=1),
    default=3,
    show_default=True,
    help="Passes per accumulator; the fastest is reported.",
)
@click.option(
    "--order",
    type=click.IntRange(0, MAX_ORDER),
    default=10,
    show_default=True,
    help="Order used for the generalized central-moment engine.",
)
@click.option("--seed", type=int, default=111111, show_default=True, help="Random seed.")
def benchmark(*, points: int, repeat: int, order: int, seed: int) -> None:
    """Time every accumulator family over uniformly random weighted observations."""
    cmd_log = logger.bind(command="benchmark", points=points, repeat=repeat, order=order)
    cmd_log.info("command.start", seed=seed)
    rng = np.random.default_rng(seed)
    values = rng.uniform(0.0, 1.0, points).tolist()
    weights = rng.uniform(1e-5, 1.0, points).tolist()

    click.echo(f"{'accumulator':<16}{'seconds':>12}{'updates/s':>16}")
    for kind, (update, kind_order) in _benchmark_targets(order).items():
        best = min(
            _time_updates(kind, update, kind_order, values, weights) for _ in range(repeat)
        )
        rate = points / best if best > 0 else float("inf")
        label = kind if kind_order is None else f"{kind}[{kind_order}]"
        click.echo(f"{label:<16}{best:>12.4f}{rate:>16,.0f}")
        cmd_log.debug("benchmark.result", accumulator=kind, seconds=best, rate=rate)
    cmd_log.info("command.completed")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":  # pragma: no cover
    main()
