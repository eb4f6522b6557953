"""
===============================================================================
parameters.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===============================================================================
Model Parameters for the Host-Vector (SIR/SI) Transmission Model

Coefficients, initial state and time grid for a vector-borne infection
circulating between a human host population (S_h, I_h, R_h) and a mosquito
vector population (S_v, I_v).

All rates are per day. The biting rate b is the only coefficient that the
scenario sweep varies: b = baseline_biting_rate * p, where p is the fraction
of the human population that remains unprotected (no bed nets, repellent...).

Default values:
    mu_h    = 0.0000457   human natality = mortality (~60 year lifespan)
    beta_h  = 0.75        probability a bite by an infected vector infects a human
    b_base  = 0.5         baseline bites per vector per day
    m       = 0           saturation offset in the incidence denominator
    mu_v    = 0.25        vector mortality (4 day mean lifespan)
    beta_v  = 1.0         probability a bite on an infected human infects a vector
    N_h     = 10000       human population constant
    gamma_h = 0.1428      human recovery rate (1 / 7 days)
    A       = 1250        vector recruitment per day
--------------------------------------------------------------------------------
License: MIT
================================================================================
"""
from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Optional, Sequence

from .errors import DomainError, ShapeError

COMPARTMENTS = ('S_h', 'I_h', 'R_h', 'S_v', 'I_v')


@dataclass(frozen=True)
class HostVectorParameters:
    """
    Coefficients of the host-vector model.

    biting_rate is the effective b used by the equations. Leave it as None
    to use baseline_biting_rate; the sweep sets it per scenario through
    for_scenario().
    """

    # ==================== Human Demographics & Disease ===========================
    mu_h: float = 0.0000457     # natality = natural mortality (per day)
    beta_h: float = 0.75        # vector -> human transmission probability per bite
    gamma_h: float = 0.1428     # recovery rate (1/infectious period)
    N_h: float = 10000.0        # human population constant

    # ==================== Vector Demographics & Disease ==========================
    mu_v: float = 0.25          # vector mortality (per day)
    beta_v: float = 1.0         # human -> vector transmission probability per bite
    A: float = 1250.0           # vector recruitment (per day)

    # ==================== Contact ================================================
    baseline_biting_rate: float = 0.5   # bites per vector per day, no protection
    m: float = 0.0                      # saturation offset, denominator is N_h + m
    biting_rate: Optional[float] = field(default=None)

    def __post_init__(self):
        """Derive the effective biting rate and validate"""
        if self.biting_rate is None:
            object.__setattr__(self, 'biting_rate', self.baseline_biting_rate)
        self._validate_parameters()

    def _validate_parameters(self):
        """Validate that all parameters are physically reasonable"""
        for f in fields(self):
            value = getattr(self, f.name)
            if not np.isfinite(value):
                raise DomainError(f"{f.name} must be finite, got {value}")
        for name in ('mu_h', 'beta_h', 'gamma_h', 'mu_v', 'beta_v', 'A',
                     'baseline_biting_rate', 'biting_rate'):
            if getattr(self, name) < 0:
                raise DomainError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.N_h <= 0:
            raise DomainError(f"human population N_h must be positive, got {self.N_h}")

    def for_scenario(self, p: float) -> "HostVectorParameters":
        """Return a copy with biting_rate = baseline_biting_rate * p"""
        return replace(self, biting_rate=self.baseline_biting_rate * float(p))

    def to_dict(self) -> Dict[str, float]:
        """Convert parameters to a {name: value} dictionary"""
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, values: Dict[str, float]) -> "HostVectorParameters":
        """Build a parameter set from a mapping; unknown names raise DomainError"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise DomainError(f"Unrecognized parameter(s): {', '.join(unknown)}")
        return cls(**{k: float(v) if v is not None else None for k, v in values.items()})


@dataclass(frozen=True)
class HostVectorState:
    """Compartment sizes [S_h, I_h, R_h, S_v, I_v]"""
    S_h: float = 100000.0
    I_h: float = 1.0
    R_h: float = 0.0
    S_v: float = 4500.0
    I_v: float = 1.0

    def __post_init__(self):
        for name in COMPARTMENTS:
            value = getattr(self, name)
            if not np.isfinite(value) or value < 0:
                raise DomainError(f"initial {name} must be finite and non-negative, got {value}")

    def as_array(self) -> np.ndarray:
        return np.array([self.S_h, self.I_h, self.R_h, self.S_v, self.I_v], dtype=float)

    def to_dict(self) -> Dict[str, float]:
        return dict(zip(COMPARTMENTS, self.as_array().tolist()))

    @classmethod
    def from_array(cls, y: Sequence[float]) -> "HostVectorState":
        y = np.asarray(y, dtype=float)
        if y.shape != (len(COMPARTMENTS),):
            raise ShapeError(f"state vector must have {len(COMPARTMENTS)} components, got shape {y.shape}")
        return cls(*y.tolist())

    @classmethod
    def from_dict(cls, values: Dict[str, float]) -> "HostVectorState":
        unknown = sorted(set(values) - set(COMPARTMENTS))
        if unknown:
            raise DomainError(f"Unrecognized compartment(s): {', '.join(unknown)}")
        return cls(**{k: float(v) for k, v in values.items()})


def as_time_grid(points: Sequence[float]) -> np.ndarray:
    """
    Validate an explicit list of output times and return it as a read-only
    float array. The first point is the simulation start time.
    """
    t = np.array(points, dtype=float)
    if t.ndim != 1 or t.size < 2:
        raise ShapeError(f"time grid needs at least 2 points, got shape {t.shape}")
    if not np.all(np.isfinite(t)):
        raise ShapeError("time grid contains non-finite values")
    if not np.all(np.diff(t) > 0):
        raise ShapeError("time grid must be strictly increasing")
    t.setflags(write=False)
    return t


def make_time_grid(start: float, end: float, step: float = 1.0) -> np.ndarray:
    """
    Inclusive, evenly spaced grid start, start+step, ..., end.

    make_time_grid(0, 365, 1) has 366 points. Points are computed as
    start + k*step so rounding error does not accumulate; the last point is
    dropped if it would overshoot end by more than half a step.
    """
    if step <= 0:
        raise ShapeError(f"step must be positive, got {step}")
    if end <= start:
        raise ShapeError(f"end ({end}) must be greater than start ({start})")
    n_steps = int(np.floor((end - start) / step + 0.5))
    return as_time_grid(start + step * np.arange(n_steps + 1, dtype=float))


# Alternative parameter sets for sensitivity analysis
def create_dense_vector_params() -> HostVectorParameters:
    """Twice the vector recruitment (rainy season)"""
    return HostVectorParameters(A=2500.0)


def create_sparse_vector_params() -> HostVectorParameters:
    """Half the vector recruitment (dry season)"""
    return HostVectorParameters(A=625.0)


def create_saturated_contact_params() -> HostVectorParameters:
    """Non-zero saturation offset, diluting bites over N_h + m"""
    return HostVectorParameters(m=5000.0)
