"""
SJF Dispatch — Experiment Runner
================================
Runs both dispatch strategies over a sweep of synthetic workloads, checks that
they agree task-for-task, and reports runtime and queueing metrics as a CSV,
a summary table and plots.

Usage
-----
    python experiments/run_experiment.py
    python experiments/run_experiment.py --n_jobs 100 1000 --seeds 1 2 3 4 5
    python experiments/run_experiment.py --config experiments/config_default.yaml
"""
from __future__ import annotations

import argparse
import logging
import os
import time
from typing import Any

import pandas as pd
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table
from rich.panel import Panel
from rich import box

from sjf_dispatch import __version__
from sjf_dispatch.config import ExperimentConfig
from sjf_dispatch.metrics.collector import MetricsCollector
from sjf_dispatch.scheduler.registry import SCHEDULER_MAP, make_scheduler
from sjf_dispatch.workloads.synthetic import WorkloadConfig, generate_synthetic

console = Console()
log = logging.getLogger("sjf_dispatch.experiments")

STRATEGY_LABELS = {
    "baseline":  "Baseline (linear scan)",
    "optimized": "Optimized (sorted + heap)",
}

COLORS = {
    "baseline":  "#2196F3",
    "optimized": "#F44336",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def percentile(xs: list[float], p: float) -> float | None:
    if not xs:
        return None
    s = sorted(xs)
    k = int(round((p / 100.0) * (len(s) - 1)))
    return s[max(0, min(k, len(s) - 1))]


def _fmt(val: Any, decimals: int = 3) -> str:
    if val is None:
        return "-"
    if isinstance(val, float):
        return f"{val:.{decimals}f}"
    return str(val)


# ---------------------------------------------------------------------------
# Core runner
# ---------------------------------------------------------------------------

def run_one(
    strategies: list[str],
    n_jobs: int,
    seed: int,
    arrival_rate: float,
    duration_mean: float = 4.0,
) -> list[dict]:
    """Run every strategy on one workload; all must produce the same order."""
    cfg = WorkloadConfig(
        n_jobs=n_jobs, arrival_rate=arrival_rate, duration_mean=duration_mean, seed=seed
    )
    tasks = generate_synthetic(cfg)

    rows: list[dict] = []
    reference: list[int] | None = None
    for name in strategies:
        scheduler = make_scheduler(name, tasks)
        metrics = MetricsCollector()
        t0 = time.perf_counter()
        timeline = scheduler.dispatch_log(metrics=metrics)
        elapsed = time.perf_counter() - t0

        order = [d.task_id for d in timeline]
        if reference is None:
            reference = order
        elif order != reference:
            raise RuntimeError(
                f"Strategy '{name}' disagrees with '{strategies[0]}' "
                f"(n_jobs={n_jobs}, seed={seed}, rate={arrival_rate})"
            )

        rows.append({
            "strategy":       name,
            "strategy_label": STRATEGY_LABELS[name],
            "seed":           seed,
            "arrival_rate":   arrival_rate,
            "n_jobs":         n_jobs,
            "runtime_s":      elapsed,
            "makespan":       metrics.makespan,
            "utilization":    metrics.utilization(),
            "idle_time":      metrics.idle_time,
            "avg_wait":       metrics.avg_wait(),
            "p95_wait":       percentile(metrics.wait_times, 95),
            "avg_turnaround": metrics.avg_turnaround(),
        })
        log.debug("%s n=%d seed=%d rate=%s took %.4fs", name, n_jobs, seed, arrival_rate, elapsed)
    return rows


# ---------------------------------------------------------------------------
# Rich summary table
# ---------------------------------------------------------------------------

def print_banner() -> None:
    console.print(
        Panel.fit(
            f"[bold cyan]SJF Dispatch[/bold cyan]  [dim]v{__version__}[/dim]\n"
            "[dim]Single-server shortest-job-first strategy comparison[/dim]",
            border_style="cyan",
            padding=(0, 2),
        )
    )


def print_summary_table(df: pd.DataFrame) -> None:
    table = Table(
        title="[bold]Results Summary[/bold] (averaged over seeds & arrival rates)",
        box=box.ROUNDED,
        highlight=True,
        show_lines=True,
    )
    table.add_column("Strategy",     style="bold cyan", no_wrap=True)
    table.add_column("Tasks",        justify="right")
    table.add_column("Runtime (ms)", style="magenta", justify="right")
    table.add_column("Utilization",  style="green",   justify="right")
    table.add_column("Avg Wait",     style="yellow",  justify="right")
    table.add_column("P95 Wait",     style="yellow",  justify="right")

    summary = df.groupby(["strategy", "n_jobs"]).mean(numeric_only=True).reset_index()
    order = list(SCHEDULER_MAP.keys())
    summary["_ord"] = summary["strategy"].map({k: i for i, k in enumerate(order)})
    summary = summary.sort_values(["n_jobs", "_ord"]).drop(columns=["_ord"])

    for _, row in summary.iterrows():
        table.add_row(
            STRATEGY_LABELS.get(row["strategy"], row["strategy"]),
            str(int(row["n_jobs"])),
            _fmt(row.get("runtime_s") * 1000.0, 2),
            _fmt(row.get("utilization"), 4),
            _fmt(row.get("avg_wait"), 2),
            _fmt(row.get("p95_wait"), 2),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Plotting
# ---------------------------------------------------------------------------

def make_runtime_plot(df: pd.DataFrame, strategies: list[str], outdir: str) -> None:
    fig, ax = plt.subplots(figsize=(8, 5))
    for name in strategies:
        sub = (
            df[df["strategy"] == name]
            .groupby("n_jobs")["runtime_s"]
            .mean()
            .reset_index()
        )
        if sub.empty:
            continue
        ax.plot(
            sub["n_jobs"],
            sub["runtime_s"],
            marker="o",
            linewidth=2,
            markersize=7,
            label=STRATEGY_LABELS.get(name, name),
            color=COLORS.get(name),
        )
    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Tasks per run", fontsize=12)
    ax.set_ylabel("Runtime (s)", fontsize=12)
    ax.set_title("Dispatch runtime vs input size", fontsize=14, fontweight="bold")
    ax.legend(framealpha=0.9)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig_path = os.path.join(outdir, "runtime.png")
    fig.savefig(fig_path, dpi=160, bbox_inches="tight")
    plt.close(fig)
    console.print(f"  [green]Wrote[/green] {fig_path}")


def make_wait_plot(df: pd.DataFrame, outdir: str) -> None:
    # Strategies agree on the order, so one strategy's queueing metrics suffice.
    first = df["strategy"].iloc[0]
    fig, ax = plt.subplots(figsize=(8, 5))
    for n_jobs, sub in df[df["strategy"] == first].groupby("n_jobs"):
        sub = sub.groupby("arrival_rate")["avg_wait"].mean().reset_index()
        ax.plot(sub["arrival_rate"], sub["avg_wait"], marker="o", linewidth=2,
                label=f"{n_jobs} tasks")
    ax.set_xlabel("Arrival Rate (tasks / time unit)", fontsize=12)
    ax.set_ylabel("Average Wait Time (time units)", fontsize=12)
    ax.set_title("Average Wait Time vs Load", fontsize=14, fontweight="bold")
    ax.legend(framealpha=0.9)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig_path = os.path.join(outdir, "avg_wait.png")
    fig.savefig(fig_path, dpi=160, bbox_inches="tight")
    plt.close(fig)
    console.print(f"  [green]Wrote[/green] {fig_path}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    ap = argparse.ArgumentParser(
        description="SJF Dispatch — baseline vs optimized strategy comparison"
    )
    ap.add_argument("--outdir",        default="experiments/out")
    ap.add_argument("--n_jobs",        type=int,   nargs="+", default=[100, 1000, 5000])
    ap.add_argument("--seeds",         type=int,   nargs="+", default=[1, 2, 3])
    ap.add_argument("--arrival_rates", type=float, nargs="+", default=[0.2, 0.5, 0.9])
    ap.add_argument("--duration_mean", type=float, default=4.0)
    ap.add_argument(
        "--strategies", nargs="+",
        default=list(SCHEDULER_MAP.keys()),
        choices=list(SCHEDULER_MAP.keys()),
    )
    ap.add_argument("--config", default=None,
                    help="Path to YAML experiment config (overrides CLI flags)")
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="Log every dispatch step")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.config:
        cfg = ExperimentConfig.from_yaml(args.config)
        args.n_jobs        = cfg.n_jobs
        args.seeds         = cfg.seeds
        args.arrival_rates = cfg.arrival_rates
        args.strategies    = cfg.strategies
        args.duration_mean = cfg.duration_mean
        args.outdir        = cfg.outdir

    os.makedirs(args.outdir, exist_ok=True)
    print_banner()

    total_runs = len(args.n_jobs) * len(args.arrival_rates) * len(args.seeds)
    rows: list[dict] = []

    console.print(
        f"\n[dim]Strategies:[/dim] [bold]{', '.join(args.strategies)}[/bold]  "
        f"[dim]Workloads:[/dim] [bold]{total_runs}[/bold]\n"
    )
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Running experiments...", total=total_runs)
        for n_jobs in args.n_jobs:
            for rate in args.arrival_rates:
                for seed in args.seeds:
                    progress.update(
                        task,
                        description=(
                            f"[cyan]n={n_jobs:<6d}[/cyan]"
                            f" rate=[yellow]{rate}[/yellow]"
                            f" seed=[dim]{seed}[/dim]"
                        ),
                    )
                    rows.extend(
                        run_one(args.strategies, n_jobs, seed, rate, args.duration_mean)
                    )
                    progress.advance(task)

    df = pd.DataFrame(rows)
    csv_path = os.path.join(args.outdir, "results.csv")
    df.to_csv(csv_path, index=False)

    console.print(f"\n[green]OK[/green] Wrote [bold]{csv_path}[/bold]\n")
    print_summary_table(df)
    console.print("\n[bold]Generating plots...[/bold]")
    make_runtime_plot(df, args.strategies, args.outdir)
    make_wait_plot(df, args.outdir)

    console.print(
        f"\n[bold green]Done![/bold green] "
        f"Results in [cyan]{args.outdir}/[/cyan]"
    )


if __name__ == "__main__":
    main()
