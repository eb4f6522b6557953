"""
===========================================================
integrate.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    ODE integration driver for the host-vector model. Turns a
    right-hand side, an initial state, a parameter set and an
    output time grid into a Trajectory.

    Defines:
        - Trajectory: immutable (t, y) result with per-compartment
                      accessors and a DataFrame view.
        - integrate(): solve_ivp for RK45/DOP853/Radau or a fixed-step
                       classical RK4 ("RK4") with sub-steps per grid
                       interval.

Example Usage:
    from vectorsweep.integrate import integrate
    from vectorsweep.model import derivative
    traj = integrate(derivative, state, make_time_grid(0, 365), params)
    traj.I_h[-1]

Notes:
    - State is reported only at grid points; the first column is the
      initial state exactly.
    - Non-finite derivatives, solver failure and the evaluation
      ceiling all surface as DivergenceError. Nothing is clipped.
    - All bookkeeping is local to the call, so independent scenarios
      can be integrated on separate threads.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations

import numpy as np
import pandas as pd
from dataclasses import dataclass
from scipy.integrate import solve_ivp
from typing import Callable, Sequence, Union

from .errors import DivergenceError, ShapeError
from .parameters import COMPARTMENTS, HostVectorParameters, HostVectorState, as_time_grid

RHS = Callable[[float, np.ndarray, HostVectorParameters], np.ndarray]

# solve_ivp methods of fixed order >= 4; RK23 (3rd order) and the
# variable-order BDF/LSODA can drop below that and are not offered
SCIPY_METHODS = ('RK45', 'DOP853', 'Radau')


@dataclass(frozen=True, eq=False)
class Trajectory:
    """
    State at every grid point.

    t: ndarray (n,). Output times
    y: ndarray (5, n). Rows: [S_h, I_h, R_h, S_v, I_v]
    """
    t: np.ndarray
    y: np.ndarray

    def __post_init__(self):
        t = np.array(self.t, dtype=float)
        y = np.array(self.y, dtype=float)
        if y.shape != (len(COMPARTMENTS), t.size):
            raise ShapeError(f"trajectory y must have shape ({len(COMPARTMENTS)}, {t.size}), got {y.shape}")
        t.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, 't', t)
        object.__setattr__(self, 'y', y)

    def __len__(self) -> int:
        return self.t.size

    def compartment(self, name: str) -> np.ndarray:
        return self.y[COMPARTMENTS.index(name)]

    @property
    def S_h(self) -> np.ndarray:
        return self.y[0]

    @property
    def I_h(self) -> np.ndarray:
        return self.y[1]

    @property
    def R_h(self) -> np.ndarray:
        return self.y[2]

    @property
    def S_v(self) -> np.ndarray:
        return self.y[3]

    @property
    def I_v(self) -> np.ndarray:
        return self.y[4]

    def final_state(self) -> np.ndarray:
        """State at the last grid point"""
        return self.y[:, -1]

    def to_frame(self) -> pd.DataFrame:
        """One column per compartment, indexed by time"""
        df = pd.DataFrame(self.y.T, columns=list(COMPARTMENTS))
        df.index = pd.Index(self.t, name='t')
        return df


def _rk4_step(f, t, y, h):
    """single RK4 step"""
    k1 = f(t, y)
    k2 = f(t + 0.5*h, y + 0.5*h*k1)
    k3 = f(t + 0.5*h, y + 0.5*h*k2)
    k4 = f(t + h, y + h*k3)
    return y + (h/6.0)*(k1 + 2*k2 + 2*k3 + k4)


def _rk4_solve(f, t: np.ndarray, y0: np.ndarray, substeps: int) -> np.ndarray:
    """Integrate with fixed-step RK4, `substeps` equal steps per grid interval"""
    y = np.empty((y0.size, t.size), dtype=float)
    y[:, 0] = y0
    for k in range(1, t.size):
        h = (t[k] - t[k-1]) / substeps
        yk = y[:, k-1]
        for j in range(substeps):
            yk = _rk4_step(f, t[k-1] + j*h, yk, h)
        y[:, k] = yk
    return y


def integrate(
        model: RHS,
        initial_state: Union[HostVectorState, Sequence[float]],
        time_grid: Sequence[float],
        params: HostVectorParameters,
        method: str = 'RK45',
        rtol: float = 1e-8,
        atol: float = 1e-8,
        max_step: float = 1.0,
        max_evaluations: int = 1_000_000,
        substeps: int = 10,
) -> Trajectory:
    """Integrate `model` over `time_grid` starting from `initial_state`

    Parameters:
    model: callable. model(t, y, params) -> dydt
    initial_state: HostVectorState or length-5 array [S_h, I_h, R_h, S_v, I_v]
    time_grid: array-like. Strictly increasing output times, first = start time
    params: HostVectorParameters. Passed through to model unchanged
    method: str, default='RK45'. 'RK45', 'DOP853', 'Radau', or 'RK4' for fixed-step RK4
    rtol, atol, max_step: solve_ivp tolerances and max internal step (days)
    max_evaluations: int. Ceiling on right-hand-side calls before giving up
    substeps: int. RK4 steps per grid interval (method='RK4' only)

    Returns:
    Trajectory with one column per grid point

    Raises:
    DivergenceError if the state or its derivative becomes non-finite, the
    solver fails, or max_evaluations is exceeded.
    """
    t = as_time_grid(time_grid)
    if isinstance(initial_state, HostVectorState):
        y0 = initial_state.as_array()
    else:
        y0 = HostVectorState.from_array(initial_state).as_array()

    n_evaluations = 0

    def rhs(tk, yk):
        nonlocal n_evaluations
        n_evaluations += 1
        if n_evaluations > max_evaluations:
            raise DivergenceError(
                f"exceeded {max_evaluations} right-hand-side evaluations at t={tk:.4g}"
            )
        if not np.all(np.isfinite(yk)):
            raise DivergenceError(f"non-finite state at t={tk:.4g}: {yk}")
        dydt = np.asarray(model(tk, yk, params), dtype=float)
        if not np.all(np.isfinite(dydt)):
            raise DivergenceError(f"non-finite derivative at t={tk:.4g}: {dydt}")
        return dydt

    if method == 'RK4':
        if substeps < 1:
            raise ValueError("substeps must be at least 1")
        y = _rk4_solve(rhs, t, y0, substeps)
    elif method in SCIPY_METHODS:
        solution = solve_ivp(
            fun = rhs,
            t_span = (t[0], t[-1]),
            y0 = y0,
            method = method,
            t_eval = t,
            rtol = rtol,
            atol = atol,
            max_step = max_step
        )
        if not solution.success:
            raise DivergenceError(f"ODE solver failed: {solution.message}")
        y = np.array(solution.y, dtype=float)
        # report the initial state exactly, not the solver's copy of it
        y[:, 0] = y0
    else:
        raise ValueError(f"Unsupported method: {method}")

    if not np.all(np.isfinite(y)):
        raise DivergenceError("trajectory contains non-finite values")

    return Trajectory(t=t, y=y)
