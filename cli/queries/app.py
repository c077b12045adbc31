from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

import numpy as np
from numpy.random import default_rng
import typer
from typing_extensions import Annotated

from vptreex import config as vx_config

from cli.runtime import runtime_from_args
from tests.utils.datasets import gaussian_points

from .baselines import run_baseline_comparisons
from .benchmark import benchmark_knn_latency


@dataclass
class QueryCLIOptions:
    dimension: int = 8
    tree_points: int = 16_384
    queries: int = 1_024
    k: int = 8
    seed: int = 0
    metric: str = "euclidean"
    diagnostics: bool | None = None
    log_level: str | None = None
    search_order: str | None = None
    baseline: str = "none"

    @classmethod
    def from_namespace(cls, namespace: Any) -> "QueryCLIOptions":
        values = {}
        for field in cls.__dataclass_fields__:
            if hasattr(namespace, field):
                values[field] = getattr(namespace, field)
        return cls(**values)


app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Benchmark vantage-point tree k-NN queries.",
)

_SHAPE_PANEL = "Benchmark shape"
_RUNTIME_PANEL = "Runtime controls"
_BASELINE_PANEL = "Baselines"


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    dimension: Annotated[
        int,
        typer.Option(
            "--dimension",
            help="Dimensionality of tree/query points.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 8,
    tree_points: Annotated[
        int,
        typer.Option(
            "--tree-points",
            help="Number of points indexed before querying.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 16_384,
    queries: Annotated[
        int,
        typer.Option(
            "--queries",
            help="Number of query points per run.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 1_024,
    k: Annotated[
        int,
        typer.Option(
            "--k",
            help="Number of neighbours requested per query.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 8,
    seed: Annotated[
        int,
        typer.Option(
            "--seed",
            help="Seed for point/query generation and vantage-point selection.",
            rich_help_panel=_SHAPE_PANEL,
        ),
    ] = 0,
    metric: Annotated[
        Literal["euclidean", "manhattan", "chebyshev"],
        typer.Option(
            "--metric",
            case_sensitive=False,
            help="Distance metric to benchmark.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = "euclidean",
    diagnostics: Annotated[
        Optional[bool],
        typer.Option(
            "--enable-diagnostics/--disable-diagnostics",
            help="Control resource polling in operation logs.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="Override runtime log level.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    search_order: Annotated[
        Optional[Literal["near-first", "left-first"]],
        typer.Option(
            "--search-order",
            help="Subtree visiting order during search.",
            rich_help_panel=_RUNTIME_PANEL,
        ),
    ] = None,
    baseline: Annotated[
        Literal["none", "bruteforce"],
        typer.Option(
            "--baseline",
            help="Optional baseline to run against the same points and queries.",
            rich_help_panel=_BASELINE_PANEL,
        ),
    ] = "none",
) -> None:
    if ctx.invoked_subcommand is not None:
        return
    options = QueryCLIOptions(
        dimension=dimension,
        tree_points=tree_points,
        queries=queries,
        k=k,
        seed=seed,
        metric=metric,
        diagnostics=diagnostics,
        log_level=log_level,
        search_order=search_order,
        baseline=baseline,
    )
    run_queries(options)


def run_queries(args: QueryCLIOptions) -> None:
    if args.k < 1:
        raise typer.BadParameter("--k must be at least 1.", param_hint="--k")
    runtime = runtime_from_args(args)
    context = runtime.activate()

    try:
        point_rng = default_rng(args.seed)
        points_np = gaussian_points(point_rng, args.tree_points, args.dimension, dtype=np.float64)
        query_rng = default_rng(args.seed + 1)
        queries_np = gaussian_points(query_rng, args.queries, args.dimension, dtype=np.float64)

        tree, result = benchmark_knn_latency(
            dimension=args.dimension,
            tree_points=args.tree_points,
            query_count=args.queries,
            k=args.k,
            seed=args.seed,
            metric=context.config.metric,
            prebuilt_points=points_np,
            prebuilt_queries=queries_np,
        )

        print(
            f"vptree | build={result.build_seconds:.4f}s "
            f"depth={result.tree_depth} "
            f"queries={result.queries} k={result.k} "
            f"time={result.elapsed_seconds:.4f}s "
            f"latency={result.latency_ms:.4f}ms "
            f"throughput={result.queries_per_second:,.1f} q/s"
        )

        if args.baseline != "none":
            baseline_results = run_baseline_comparisons(
                points_np,
                queries_np,
                k=args.k,
                mode=args.baseline,
                metric=tree.metric,
            )
            for comparison in baseline_results:
                slowdown = (
                    comparison.latency_ms / result.latency_ms if result.latency_ms else float("inf")
                )
                print(
                    f"baseline[{comparison.name}] | build={comparison.build_seconds:.4f}s "
                    f"time={comparison.elapsed_seconds:.4f}s "
                    f"latency={comparison.latency_ms:.4f}ms "
                    f"throughput={comparison.queries_per_second:,.1f} q/s "
                    f"slowdown={slowdown:.3f}x"
                )
    finally:
        vx_config.reset_runtime_context()


def main() -> None:
    app()


__all__ = ["QueryCLIOptions", "app", "main", "run_queries"]
