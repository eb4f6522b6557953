"""
===========================================================
model.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================
Host-vector SIR/SI model

Compartments:
    Humans:  S_h -> I_h -> R_h   (births/deaths at rate mu_h)
    Vectors: S_v -> I_v          (recruitment A, deaths at rate mu_v)

Humans are infected by bites of infected vectors and vectors by
biting infected humans. Both incidence terms share the contact
coefficient b / (N_h + m).

    dS_h = mu_h*N_h - (beta_h*b)/(N_h+m)*S_h*I_v - mu_h*S_h
    dI_h = (beta_h*b)/(N_h+m)*S_h*I_v - (mu_h+gamma_h)*I_h
    dR_h = gamma_h*I_h - mu_h*R_h
    dS_v = A - (beta_v*b)/(N_h+m)*S_v*I_h - mu_v*S_v
    dI_v = (beta_v*b)/(N_h+m)*S_v*I_h - mu_v*I_v

License: MIT
===========================================================
"""
from __future__ import annotations

import numpy as np
from typing import Optional

from .errors import DomainError
from .parameters import HostVectorParameters


def derivative(t: float, y: np.ndarray, p: HostVectorParameters) -> np.ndarray:
    """
    Right-hand side of the host-vector equations.

    Parameters:
    t: float. Current time (unused, the system is autonomous)
    y: array-like. Current state [S_h, I_h, R_h, S_v, I_v]
    p: HostVectorParameters

    Returns:
    dydt: ndarray. [dS_h, dI_h, dR_h, dS_v, dI_v]
    """
    denom = p.N_h + p.m
    if denom == 0:
        raise DomainError(f"N_h + m must be non-zero (N_h={p.N_h}, m={p.m})")
    S_h, I_h, R_h, S_v, I_v = y

    # new infections per day in each population
    human_incidence = p.beta_h * p.biting_rate / denom * S_h * I_v
    vector_incidence = p.beta_v * p.biting_rate / denom * S_v * I_h

    dS_h = p.mu_h * p.N_h - human_incidence - p.mu_h * S_h
    dI_h = human_incidence - (p.mu_h + p.gamma_h) * I_h
    dR_h = p.gamma_h * I_h - p.mu_h * R_h
    dS_v = p.A - vector_incidence - p.mu_v * S_v
    dI_v = vector_incidence - p.mu_v * I_v

    return np.array([dS_h, dI_h, dR_h, dS_v, dI_v])


def basic_reproduction_number(
        p: HostVectorParameters,
        S_h: Optional[float] = None,
        S_v: Optional[float] = None
) -> float:
    """Next-generation R0 for one host-vector-host cycle, square-rooted

    R0^2 = [beta_h*b*S_h / ((N_h+m)*mu_v)] * [beta_v*b*S_v / ((N_h+m)*(mu_h+gamma_h))]

    The first factor counts humans infected by one infected vector over its
    lifetime, the second vectors infected by one infected human over the
    infectious period. S_h and S_v default to the disease-free equilibrium
    (N_h and A/mu_v).

    Returns:
    r0: float. np.inf when a removal rate is zero
    """
    denom = p.N_h + p.m
    if denom == 0:
        raise DomainError(f"N_h + m must be non-zero (N_h={p.N_h}, m={p.m})")
    if p.mu_v == 0 or (p.mu_h + p.gamma_h) == 0:
        return np.inf
    S_h = p.N_h if S_h is None else S_h
    S_v = p.A / p.mu_v if S_v is None else S_v

    vector_to_human = p.beta_h * p.biting_rate * S_h / (denom * p.mu_v)
    human_to_vector = p.beta_v * p.biting_rate * S_v / (denom * (p.mu_h + p.gamma_h))
    return float(np.sqrt(vector_to_human * human_to_vector))
