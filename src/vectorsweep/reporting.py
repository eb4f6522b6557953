"""
===========================================================
reporting.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================
Reporting for scenario sweeps
=============================

Tables and figures built from run_sweep() output. Every number
shown is read straight off the ScenarioResult objects; nothing
is recomputed here.

Usage:
    python -m vectorsweep.reporting [config.yaml] [--save-fig out.png]

License: MIT
===========================================================
"""
from __future__ import annotations

import argparse
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from typing import List, Optional, Sequence

from .config import default_config, load_config
from .parameters import COMPARTMENTS
from .sweep import SweepOutcome, run_from_config

SUMMARY_COLUMNS = [
    'scenario',
    'biting_rate',
    'r0',
    'cumulative_infected_vectors',
    'cumulative_infected_humans',
    'total_unique_infected_humans',
    'peak_infected_humans',
    'peak_day',
    'error',
]

COMPARTMENT_LABELS = {
    'S_h': 'Susceptible humans',
    'I_h': 'Infected humans',
    'R_h': 'Recovered humans',
    'S_v': 'Susceptible vectors',
    'I_v': 'Infected vectors',
}


def summary_frame(results: Sequence[SweepOutcome]) -> pd.DataFrame:
    """One row per scenario, in sweep order. Failed scenarios get NaN and the error message"""
    records = []
    for r in results:
        if r.failed:
            records.append({
                'scenario': r.scenario,
                'biting_rate': r.parameters.biting_rate if r.parameters is not None else np.nan,
                'error': str(r.error),
            })
            continue
        records.append({
            'scenario': r.scenario,
            'biting_rate': r.parameters.biting_rate,
            'r0': r.r0,
            'cumulative_infected_vectors': r.cumulative_infected_vectors,
            'cumulative_infected_humans': r.cumulative_infected_humans,
            'total_unique_infected_humans': r.total_unique_infected_humans,
            'peak_infected_humans': r.peak_infected_humans,
            'peak_day': r.peak_day,
            'error': None,
        })
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


def trajectories_frame(results: Sequence[SweepOutcome]) -> pd.DataFrame:
    """Long format: scenario, t, compartment, value. Failed scenarios are skipped"""
    frames = []
    for r in results:
        if r.failed:
            continue
        df = r.trajectory.to_frame().reset_index()
        df = df.melt(id_vars='t', var_name='compartment', value_name='value')
        df.insert(0, 'scenario', r.scenario)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=['scenario', 't', 'compartment', 'value'])
    return pd.concat(frames, ignore_index=True)


def print_summary(results: Sequence[SweepOutcome]):
    """Print the sweep summary table"""
    df = summary_frame(results)
    print("HOST-VECTOR SCENARIO SWEEP:")
    print(f"Scenarios: {len(df)} ({int(df['error'].notna().sum())} failed)")
    print()
    with pd.option_context('display.float_format', '{:,.2f}'.format, 'display.width', 120):
        print(df.drop(columns='error').to_string(index=False))
    for _, row in df[df['error'].notna()].iterrows():
        print(f"  p={row['scenario']:.2f} failed: {row['error']}")


def plot_compartments(
        results: Sequence[SweepOutcome],
        compartments: Sequence[str] = COMPARTMENTS,
        save_path: Optional[str] = None
) -> plt.Figure:
    """Plot each compartment over time, one line per scenario.

    Parameters:
    results: run_sweep() output. Failed scenarios are skipped
    compartments: sequence of str. Which panels to draw
    save_path: str, optional. Path to save figure

    Returns:
    fig: Figure. Matplotlib figure object
    """
    sns.set_style("whitegrid")
    ok: List = [r for r in results if not r.failed]
    palette = sns.color_palette("viridis", n_colors=max(len(ok), 1))

    fig, axes = plt.subplots(1, len(compartments), figsize=(4.5 * len(compartments), 4.5), squeeze=False)
    for ax, name in zip(axes[0], compartments):
        for color, r in zip(palette, ok):
            ax.plot(r.trajectory.t, r.trajectory.compartment(name),
                    color=color, linewidth=2, label=f"p = {r.scenario:g}")
        ax.set_title(COMPARTMENT_LABELS.get(name, name))
        ax.set_xlabel('Time (days)')
        ax.grid(True, alpha=0.3)
    axes[0][0].set_ylabel('Number of individuals')
    if ok:
        axes[0][-1].legend(title='Unprotected fraction', fontsize=9)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, bbox_inches='tight')
        print(f"Figure saved to {save_path}")

    return fig


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Run a host-vector scenario sweep and print the summary")
    parser.add_argument('config', nargs='?', help="YAML sweep configuration (default: canonical parameters)")
    parser.add_argument('--save-fig', default=None, help="Save the compartment figure to this path")
    parser.add_argument('--workers', type=int, default=None, help="Thread pool size")
    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else default_config()
    results = run_from_config(config, on_error='record', max_workers=args.workers)
    print_summary(results)
    if args.save_fig:
        plot_compartments(results, save_path=args.save_fig)
    return results


if __name__ == "__main__":
    main()
