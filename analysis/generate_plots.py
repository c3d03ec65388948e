from __future__ import annotations
import argparse
from pathlib import Path
import matplotlib.pyplot as plt
import pandas as pd

def ensure_output(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)

def line_plot(df: pd.DataFrame, metric: str, output: Path, ylabel: str) -> None:
    fig, ax = plt.subplots()
    for problem_type, group in df.groupby("problem_type"):
        series = group.groupby("num_vars")[metric].mean().sort_index()
        ax.plot(series.index, series.values, marker="o", label=problem_type)
    ax.set_xlabel("num_vars")
    ax.set_ylabel(ylabel)
    ax.legend()
    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)

def status_plot(df: pd.DataFrame, output: Path) -> None:
    fig, ax = plt.subplots()
    pivot = df.pivot_table(values="seed", index="num_vars", columns="status", aggfunc="count", fill_value=0)
    pivot.plot(kind="bar", stacked=True, ax=ax)
    ax.set_xlabel("num_vars")
    ax.set_ylabel("runs")
    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)

def move_mix(df: pd.DataFrame, output: Path) -> None:
    fig, ax = plt.subplots()
    agg = df.groupby("num_vars")[["assignments", "reverts"]].mean().sort_index()
    agg.plot(kind="bar", ax=ax)
    ax.set_ylabel("moves per run")
    fig.tight_layout()
    fig.savefig(output)
    plt.close(fig)

def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--input", required=True)
    parser.add_argument("--output", default="results/plots")
    args = parser.parse_args()
    df = pd.read_csv(args.input)
    output_dir = Path(args.output)
    ensure_output(output_dir)
    status_plot(df, output_dir / "status_by_vars.png")
    solved = df[df["status"] == "SAT"]
    if solved.empty:
        return
    line_plot(solved, "cpu_time", output_dir / "cpu_time_vs_vars.png", "cpu_time")
    line_plot(solved, "peak_memory", output_dir / "peak_memory_vs_vars.png", "peak_memory")
    line_plot(solved, "steps", output_dir / "steps_vs_vars.png", "steps")
    move_mix(solved, output_dir / "assignments_vs_reverts.png")

if __name__ == "__main__":
    main()
