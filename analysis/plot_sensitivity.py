from __future__ import annotations
import argparse
from pathlib import Path
import matplotlib.pyplot as plt
import pandas as pd

def steps_vs_sample_param(summary_csv: Path, output_png: Path) -> None:
    df = pd.read_csv(summary_csv)
    solved = df[df['status'] == 'SAT']
    fig, ax = plt.subplots()
    for milestone, group in solved.groupby('milestone_param'):
        series = group.groupby('sample_param')['elapsed_time'].mean().sort_index()
        ax.plot(series.index, series.values, marker='o', label=f'milestones={milestone}')
    ax.set_xlabel('sample_param')
    ax.set_ylabel('mean elapsed time (s)')
    ax.legend()
    fig.tight_layout()
    output_png.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_png)
    plt.close(fig)

def probe_share(summary_csv: Path, output_png: Path) -> None:
    df = pd.read_csv(summary_csv)
    totals = df.groupby('sample_param')[['probe_hits', 'index_scans']].sum()
    share = totals['probe_hits'] / (totals['probe_hits'] + totals['index_scans'])
    fig, ax = plt.subplots()
    share.plot(kind='bar', ax=ax)
    ax.set_ylabel('picks resolved by random probing')
    ax.set_ylim(0, 1)
    fig.tight_layout()
    output_png.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_png)
    plt.close(fig)

def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument('--summary', required=True, help='Path to parameter_sensitivity.csv')
    parser.add_argument('--output', default='results/sensitivity')
    args = parser.parse_args()
    output_dir = Path(args.output)
    steps_vs_sample_param(Path(args.summary), output_dir / 'time_vs_sample_param.png')
    probe_share(Path(args.summary), output_dir / 'probe_share.png')

if __name__ == '__main__':
    main()
