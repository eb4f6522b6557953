"""Shared fixtures: the canonical parameter set, initial state and daily grid."""
import pytest

from vectorsweep.parameters import HostVectorParameters, HostVectorState, make_time_grid
from vectorsweep.sweep import run_sweep

CANONICAL_SCENARIOS = [0.0, 0.25, 0.5, 0.75, 1.0]


@pytest.fixture
def params():
    return HostVectorParameters()


@pytest.fixture
def state():
    return HostVectorState(S_h=100000, I_h=1, R_h=0, S_v=4500, I_v=1)


@pytest.fixture
def grid():
    return make_time_grid(0, 365, 1)


@pytest.fixture(scope="module")
def canonical_sweep():
    """The five-scenario sweep, computed once per test module."""
    return run_sweep(
        CANONICAL_SCENARIOS,
        HostVectorParameters(),
        HostVectorState(S_h=100000, I_h=1, R_h=0, S_v=4500, I_v=1),
        make_time_grid(0, 365, 1),
    )
