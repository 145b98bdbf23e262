"""Typer CLI timing the random empty position samplers of mesa-discrete."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import os
from pathlib import Path
from time import perf_counter
from typing import Annotated, Optional

import polars as pl
import typer

from mesa_discrete import Agent, GridSpace, Model

app = typer.Typer(add_completion=False)


@dataclass(slots=True)
class Strategy:
    name: str
    cutoff: float | None


# Rejection sampling as long as the space is not full, a scan at every density,
# and the default switch between the two.
STRATEGIES: dict[str, Strategy] = {
    "rejection": Strategy(name="rejection", cutoff=1.0),
    "scan": Strategy(name="scan", cutoff=0.0),
    "adaptive": Strategy(name="adaptive", cutoff=None),
}


def _parse_densities(value: str) -> list[float]:
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if not parts:
        raise typer.BadParameter("Density selection must not be empty")
    try:
        densities = [float(part) for part in parts]
    except ValueError as exc:
        raise typer.BadParameter("Densities must be numbers") from exc
    if any(density < 0 or density > 1 for density in densities):
        raise typer.BadParameter("Densities must be between 0 and 1")
    return densities


def _parse_strategies(value: str) -> list[str]:
    value = value.strip()
    if value == "all":
        return list(STRATEGIES.keys())
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if not parts:
        raise typer.BadParameter("Strategy selection must not be empty")
    unknown = [p for p in parts if p not in STRATEGIES]
    if unknown:
        raise typer.BadParameter(f"Unknown strategy selection: {', '.join(unknown)}")
    return list(dict.fromkeys(parts))


def _populated_grid(size: int, density: float, seed: int) -> GridSpace:
    """Build a size x size grid with one agent on a random share ``density`` of the cells."""
    model = Model(seed=seed)
    space = GridSpace(model, [size, size])
    model.space = space
    nagents = round(density * space.npositions)
    for pos in space.positions(by="random")[:nagents]:
        model.add_agent_at(pos, Agent)
    return space


@app.command()
def run(
    densities: Annotated[
        str,
        typer.Option(
            help="Comma-separated agent densities to benchmark (agents per cell).",
        ),
    ] = "0.1,0.5,0.9,0.99,0.999",
    strategies: Annotated[
        str,
        typer.Option(help="Strategies to benchmark: rejection, scan, adaptive, or all"),
    ] = "all",
    size: Annotated[int, typer.Option(min=1, help="Side of the square grid.")] = 100,
    draws: Annotated[
        int, typer.Option(min=1, help="Number of random_empty calls per run.")
    ] = 1000,
    repeats: Annotated[int, typer.Option(help="Repeats per configuration.", min=1)] = 1,
    seed: Annotated[int, typer.Option(help="RNG seed.")] = 42,
    save: Annotated[bool, typer.Option(help="Persist benchmark CSV results.")] = True,
    results_dir: Annotated[
        Optional[Path],
        typer.Option(
            help=(
                "Base directory for benchmark outputs. The CSV file is written to a "
                "timestamped subdirectory. Defaults to the module's results directory."
            ),
        ),
    ] = None,
) -> None:
    """Time random_empty on grids of increasing density."""
    density_values = _parse_densities(densities)
    strategy_names = _parse_strategies(strategies)
    if results_dir is None:
        results_dir = Path(__file__).resolve().parent / "results"

    runtime_typechecking = os.environ.get("MESA_DISCRETE_RUNTIME_TYPECHECKING", "")
    if runtime_typechecking and runtime_typechecking.lower() not in {"0", "false"}:
        typer.secho(
            "Warning: MESA_DISCRETE_RUNTIME_TYPECHECKING is enabled; benchmarks may run significantly slower.",
            fg=typer.colors.YELLOW,
        )
    rows: list[dict[str, object]] = []
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    for density in density_values:
        typer.echo(f"Benchmarking density {density} on a {size}x{size} grid")
        for repeat_idx in range(repeats):
            run_seed = seed + repeat_idx
            space = _populated_grid(size, density, run_seed)
            for name in strategy_names:
                strategy = STRATEGIES[name]
                found = 0
                start = perf_counter()
                for _ in range(draws):
                    if space.random_empty(strategy.cutoff) is not None:
                        found += 1
                runtime = perf_counter() - start
                rows.append(
                    {
                        "strategy": name,
                        "density": density,
                        "size": size,
                        "draws": draws,
                        "found": found,
                        "seed": run_seed,
                        "repeat_idx": repeat_idx,
                        "runtime_seconds": runtime,
                        "timestamp": timestamp,
                    }
                )
                typer.echo(
                    f"Completed {name} for density={density} seed={run_seed} repeat={repeat_idx} in {runtime:.3f}s"
                )
    typer.echo("Finished benchmarking random_empty")

    if not rows:
        typer.echo("No benchmark data collected.")
        return
    df = pl.DataFrame(rows)
    summary = (
        df.group_by(["strategy", "density"], maintain_order=True)
        .agg(pl.col("runtime_seconds").mean().alias("mean_runtime_seconds"))
        .sort(["density", "strategy"])
    )
    typer.echo(str(summary))
    if save:
        timestamp_dir = (results_dir / timestamp).resolve()
        timestamp_dir.mkdir(parents=True, exist_ok=True)
        csv_path = timestamp_dir / f"random_empty_perf_{timestamp}.csv"
        df.write_csv(csv_path)
        typer.echo(f"Saved results to {csv_path}")


if __name__ == "__main__":
    app()
