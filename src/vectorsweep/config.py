"""
===========================================================
config.py
Author: Veronica Scerra
Last Updated: 2026-10-18
===========================================================

Description:
    Sweep configuration: {parameters, initial_state, grid,
    scenarios, solver}. Loaded from YAML and deep-merged over the
    canonical defaults, so a file only needs the values it changes.

Example YAML:
    parameters:
      baseline_biting_rate: 0.4
      A: 2000
    initial_state:
      I_h: 10
    grid:
      start: 0
      end: 730
      step: 1
    scenarios: [0, 0.5, 1]
    solver:
      method: DOP853

Notes:
    - grid accepts either start/end/step or an explicit `points` list.
    - Unrecognized keys are reported with warnings.warn and ignored.
    - parameters.biting_rate is derived per scenario and is ignored
      (with a warning) if present. A null `scenarios:` means the defaults.
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations

import copy
import warnings
import numpy as np
import yaml
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from .errors import DomainError, ShapeError
from .parameters import (
    COMPARTMENTS,
    HostVectorParameters,
    HostVectorState,
    as_time_grid,
    make_time_grid,
)

DEFAULT_SCENARIOS = [0.0, 0.25, 0.5, 0.75, 1.0]

SECTIONS = ('parameters', 'initial_state', 'grid', 'scenarios', 'solver')
GRID_KEYS = ('start', 'end', 'step', 'points')
SOLVER_KEYS = ('method',)


@dataclass
class GridSpec:
    """Output time grid, either start/end/step or explicit points"""
    start: float = 0.0
    end: float = 365.0
    step: float = 1.0
    points: Optional[List[float]] = None

    def build(self) -> np.ndarray:
        if self.points is not None:
            return as_time_grid(self.points)
        return make_time_grid(self.start, self.end, self.step)


@dataclass
class SweepConfig:
    """Everything run_from_config needs"""
    parameters: HostVectorParameters = field(default_factory=HostVectorParameters)
    initial_state: HostVectorState = field(default_factory=HostVectorState)
    grid: GridSpec = field(default_factory=GridSpec)
    scenarios: List[float] = field(default_factory=lambda: list(DEFAULT_SCENARIOS))
    method: str = 'RK45'

    def time_grid(self) -> np.ndarray:
        return self.grid.build()

    def to_dict(self) -> Dict[str, Any]:
        """Plain-python form, the same layout load_config reads"""
        params = self.parameters.to_dict()
        # biting_rate is per-scenario; only the baseline belongs in a config file
        params.pop('biting_rate')
        grid = {'points': list(self.grid.points)} if self.grid.points is not None else {
            'start': self.grid.start, 'end': self.grid.end, 'step': self.grid.step}
        return {
            'parameters': params,
            'initial_state': self.initial_state.to_dict(),
            'grid': grid,
            'scenarios': [float(p) for p in self.scenarios],
            'solver': {'method': self.method},
        }


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into a copy of base"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _known_only(section: str, data: Dict, known: Sequence[str]) -> Dict:
    """Drop (with a warning) keys a section does not recognize"""
    unknown = sorted(set(data) - set(known))
    if unknown:
        warnings.warn(f"Ignoring unrecognized {section} key(s): {', '.join(unknown)}")
    return {k: v for k, v in data.items() if k in known}


def _dict_to_config(data: Dict) -> SweepConfig:
    """Build a SweepConfig from a merged config dictionary"""
    data = _known_only('top-level', data, SECTIONS)
    param_names = [f.name for f in fields(HostVectorParameters) if f.name != 'biting_rate']
    params = dict(data.get('parameters') or {})
    if 'biting_rate' in params:
        # b is derived per scenario as baseline_biting_rate * p
        warnings.warn("Ignoring parameters.biting_rate; set baseline_biting_rate instead")
        del params['biting_rate']
    params = _known_only('parameters', params, param_names)
    state = _known_only('initial_state', data.get('initial_state') or {}, COMPARTMENTS)
    grid = _known_only('grid', data.get('grid') or {}, GRID_KEYS)
    solver = _known_only('solver', data.get('solver') or {}, SOLVER_KEYS)

    scenarios = data.get('scenarios')
    if scenarios is None:
        scenarios = DEFAULT_SCENARIOS
    elif not isinstance(scenarios, (list, tuple)):
        raise ShapeError(f"scenarios must be a list, got {type(scenarios).__name__}")

    if grid.get('points') is not None:
        grid_spec = GridSpec(points=[float(x) for x in grid['points']])
    else:
        grid_spec = GridSpec(**{k: float(v) for k, v in grid.items() if k != 'points'})

    return SweepConfig(
        parameters=HostVectorParameters.from_dict(params),
        initial_state=HostVectorState.from_dict(state),
        grid=grid_spec,
        scenarios=[float(p) for p in scenarios],
        method=str(solver.get('method', 'RK45')),
    )


def validate_config(config: SweepConfig) -> None:
    """Raise DomainError/ShapeError if the configuration cannot be run"""
    if len(config.scenarios) == 0:
        raise ShapeError("scenarios must contain at least one value")
    for p in config.scenarios:
        if not np.isfinite(p) or p < 0:
            raise DomainError(f"scenario values must be finite and non-negative, got {p}")
    if config.parameters.N_h + config.parameters.m == 0:
        raise DomainError("parameters.N_h + parameters.m must be non-zero")
    config.time_grid()


def load_config(
        path: Union[str, Path],
        overrides: Optional[Dict] = None
) -> SweepConfig:
    """
    Load a YAML sweep configuration.

    Parameters:
    path: str or Path. YAML file; missing sections fall back to default_config()
    overrides: dict, optional. Applied on top of the file (e.g. from a CLI)

    Returns:
    config: SweepConfig (validated)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        file_dict = yaml.safe_load(f) or {}
    if not isinstance(file_dict, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(file_dict).__name__}")

    merged = deep_merge(default_config().to_dict(), file_dict)
    if overrides:
        merged = deep_merge(merged, overrides)
    # an explicit point list replaces start/end/step rather than merging with them
    if (file_dict.get('grid') or {}).get('points') is not None or \
            ((overrides or {}).get('grid') or {}).get('points') is not None:
        merged['grid'] = {'points': merged['grid']['points']}

    config = _dict_to_config(merged)
    validate_config(config)
    return config


def save_config(config: SweepConfig, path: Union[str, Path]) -> Path:
    """Write a SweepConfig as YAML"""
    path = Path(path)
    with open(path, 'w') as f:
        yaml.safe_dump(config.to_dict(), f, sort_keys=False)
    return path


def default_config() -> SweepConfig:
    """Canonical configuration: default parameters, 0..365 daily, p in {0, .25, .5, .75, 1}"""
    return SweepConfig()
