"""
===========================================================
sweep.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Scenario sweep over the unprotected fraction p of the human
    population. Each scenario rescales the biting rate
    (b = baseline_biting_rate * p), integrates the host-vector
    model and summarizes the epidemic burden.

Example Usage:
    from vectorsweep.sweep import run_sweep
    results = run_sweep([0, 0.25, 0.5, 0.75, 1], params, state, grid)
    [r.total_unique_infected_humans for r in results]

Notes:
    - Results come back in the order the scenario values were given.
    - on_error="raise" (default) aborts the sweep on the first failing
      scenario and re-raises its error. on_error="record" stores a
      ScenarioFailure in that slot and carries on.
    - max_workers > 1 runs scenarios on a thread pool; output order and
      values are the same as the sequential run.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations

import numpy as np
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Union

from .config import SweepConfig, validate_config
from .cumulative import definite_integral
from .errors import VectorSweepError
from .integrate import Trajectory, integrate
from .model import basic_reproduction_number, derivative
from .parameters import HostVectorParameters, HostVectorState, as_time_grid


@dataclass(frozen=True, eq=False)
class ScenarioResult:
    """Trajectory and burden statistics for one scenario value"""
    scenario: float
    parameters: HostVectorParameters
    trajectory: Trajectory
    cumulative_infected_vectors: float      # infected-vector-days
    cumulative_infected_humans: float       # infected-human-days
    total_unique_infected_humans: float     # S_h(start) - S_h(end)
    peak_infected_humans: float
    peak_day: float
    r0: float

    @property
    def failed(self) -> bool:
        return False


@dataclass(frozen=True)
class ScenarioFailure:
    """Marker left in place of a ScenarioResult when on_error='record'"""
    scenario: float
    parameters: Optional[HostVectorParameters]    # None if the scenario value itself was invalid
    error: VectorSweepError

    @property
    def failed(self) -> bool:
        return True


SweepOutcome = Union[ScenarioResult, ScenarioFailure]


def summarize_scenario(
        p: float,
        params: HostVectorParameters,
        trajectory: Trajectory,
        initial_state: HostVectorState
) -> ScenarioResult:
    """Derive the burden statistics of one integrated scenario"""
    t, I_h = trajectory.t, trajectory.I_h
    peak_idx = int(np.argmax(I_h))
    return ScenarioResult(
        scenario=float(p),
        parameters=params,
        trajectory=trajectory,
        cumulative_infected_vectors=definite_integral(t, trajectory.I_v),
        cumulative_infected_humans=definite_integral(t, I_h),
        total_unique_infected_humans=float(initial_state.S_h - trajectory.S_h[-1]),
        peak_infected_humans=float(I_h[peak_idx]),
        peak_day=float(t[peak_idx]),
        r0=basic_reproduction_number(params, S_h=initial_state.S_h, S_v=initial_state.S_v),
    )


def _run_one(p, base_params, initial_state, t, on_error, solver_options) -> SweepOutcome:
    """Run one simulation and return its ScenarioResult (or failure marker)"""
    params = None
    try:
        params = base_params.for_scenario(p)
        trajectory = integrate(derivative, initial_state, t, params, **solver_options)
        return summarize_scenario(p, params, trajectory, initial_state)
    except VectorSweepError as e:
        if on_error == 'raise':
            raise
        return ScenarioFailure(scenario=float(p), parameters=params, error=e)


def run_sweep(
        scenario_values: Sequence[float],
        base_params: HostVectorParameters,
        initial_state: HostVectorState,
        time_grid: Sequence[float],
        on_error: Literal['raise', 'record'] = 'raise',
        max_workers: Optional[int] = None,
        **solver_options
) -> List[SweepOutcome]:
    """
    Integrate the model once per scenario value and collect the results.

    Parameters:
    scenario_values: sequence of float. Unprotected fractions p, run in the given order
    base_params: HostVectorParameters. Shared coefficients; biting_rate is overwritten per scenario
    initial_state: HostVectorState. Same starting point for every scenario
    time_grid: array-like. Output times shared by every scenario
    on_error: 'raise' or 'record'. Failure policy, see module notes
    max_workers: int, optional. Thread pool size; None or 1 runs sequentially
    **solver_options: passed to integrate() (method, rtol, atol, max_step, ...)

    Returns:
    list of ScenarioResult (or ScenarioFailure under on_error='record'),
    one per scenario value, in input order
    """
    if on_error not in ('raise', 'record'):
        raise ValueError("on_error must be 'raise' or 'record'")
    t = as_time_grid(time_grid)
    values = [float(p) for p in scenario_values]

    def job(p):
        return _run_one(p, base_params, initial_state, t, on_error, solver_options)

    if max_workers is None or max_workers <= 1 or len(values) <= 1:
        return [job(p) for p in values]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(job, values))


def run_from_config(config: SweepConfig, **kwargs) -> List[SweepOutcome]:
    """Validate a SweepConfig and run the sweep it describes"""
    validate_config(config)
    options = {'method': config.method}
    options.update(kwargs)
    return run_sweep(
        config.scenarios,
        config.parameters,
        config.initial_state,
        config.time_grid(),
        **options
    )
