"""Schelling segregation model on a mesa-discrete GridSpace, with Typer CLI."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import os
import polars as pl
import typer
from time import perf_counter

from mesa_discrete import Agent, GridSpace, Model
from mesa_discrete.types_ import GridCoordinate


class SchellingAgent(Agent):
    """An agent of one of two groups, unhappy when too few neighbors share its group."""

    def __init__(self, model: SchellingModel, group: int) -> None:
        super().__init__(model)
        self.group = group


class SchellingModel(Model):
    """Agents relocate to random empty cells until enough of their neighbors are alike.

    Parameters
    ----------
    width : int
        Width of the torus.
    height : int
        Height of the torus.
    density : float
        Share of cells holding an agent.
    minority : float
        Share of agents in group 1.
    homophily : int
        Minimum number of alike Moore neighbors for an agent to be happy.
    seed : int | None, optional
        RNG seed, by default None
    """

    def __init__(
        self,
        width: int = 20,
        height: int = 20,
        density: float = 0.8,
        minority: float = 0.3,
        homophily: int = 3,
        *,
        seed: int | None = None,
    ) -> None:
        super().__init__(seed)
        self.homophily = homophily
        self.happy = 0
        self.space = GridSpace(self, [width, height])
        self.metrics: list[dict[str, int]] = []
        for pos in self.space.positions():
            if self.random.random() < density:
                group = 1 if self.random.random() < minority else 0
                self.add_agent_at(pos, SchellingAgent, group)

    def neighbors(self, pos: GridCoordinate) -> list[GridCoordinate]:
        # Moore neighborhood on a torus
        width, height = self.space.dimensions
        x, y = pos
        return [
            ((x + dx) % width, (y + dy) % height)
            for dx in (-1, 0, 1)
            for dy in (-1, 0, 1)
            if dx or dy
        ]

    def is_happy(self, agent: SchellingAgent) -> bool:
        alike = 0
        for pos in self.neighbors(agent.pos):
            for other in self.space.agents_in_position(pos):
                if other.group == agent.group:
                    alike += 1
        return alike >= self.homophily

    def step(self) -> None:
        self.happy = 0
        # Cells are visited in random order; agents that move are not revisited
        moved: set[int] = set()
        for pos in self.space.positions(by="random"):
            unique_id = self.space.random_id_in_position(pos)
            if unique_id is None or unique_id in moved:
                continue
            agent = self[unique_id]
            if self.is_happy(agent):
                self.happy += 1
            elif self.space.move_agent_single(agent) is not None:
                moved.add(unique_id)
        self.metrics.append({"step": self.steps, "happy": self.happy})
        if self.happy == self.nagents:
            self.running = False

    def run(self, steps: int) -> None:
        for _ in range(steps):
            if not self.running:
                break
            self.step()


def simulate(
    width: int,
    height: int,
    steps: int,
    seed: int | None = None,
) -> pl.DataFrame:
    model = SchellingModel(width, height, seed=seed)
    model.run(steps)
    return pl.DataFrame(model.metrics, schema={"step": pl.Int64, "happy": pl.Int64})


app = typer.Typer(add_completion=False)


@app.command()
def run(
    width: Annotated[int, typer.Option(help="Width of the grid.")] = 20,
    height: Annotated[int, typer.Option(help="Height of the grid.")] = 20,
    steps: Annotated[int, typer.Option(help="Maximum number of model steps.")] = 50,
    seed: Annotated[int | None, typer.Option(help="Optional RNG seed.")] = None,
    save_results: Annotated[bool, typer.Option(help="Persist metrics as CSV.")] = True,
    results_dir: Annotated[
        Path | None,
        typer.Option(
            help="Directory to write CSV results into. If omitted a timestamped subdir under `results/` is used."
        ),
    ] = None,
) -> None:
    runtime_typechecking = os.environ.get("MESA_DISCRETE_RUNTIME_TYPECHECKING", "")
    if runtime_typechecking and runtime_typechecking.lower() not in {"0", "false"}:
        typer.secho(
            "Warning: MESA_DISCRETE_RUNTIME_TYPECHECKING is enabled; this run will be slower.",
            fg=typer.colors.YELLOW,
        )
    typer.echo(f"Running Schelling model on a {width}x{height} grid for up to {steps} steps")
    start_time = perf_counter()
    metrics = simulate(width=width, height=height, steps=steps, seed=seed)
    typer.echo(f"Simulation complete in {perf_counter() - start_time:.2f} seconds")
    typer.echo(f"Happy agents in the final 5 steps: {metrics.tail(5)}")

    if save_results:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        if results_dir is None:
            results_dir = (
                Path(__file__).resolve().parent / "results" / timestamp
            ).resolve()
        results_dir.mkdir(parents=True, exist_ok=True)
        metrics.write_csv(results_dir / "happy.csv")
        typer.echo(f"Saved CSV results under {results_dir}")


if __name__ == "__main__":
    app()
