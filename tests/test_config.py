"""Tests for vectorsweep.config — configuration loading and validation."""
from pathlib import Path

import numpy as np
import pytest
import yaml

from vectorsweep.config import (
    DEFAULT_SCENARIOS,
    GridSpec,
    SweepConfig,
    deep_merge,
    default_config,
    load_config,
    save_config,
    validate_config,
)
from vectorsweep.errors import DomainError, ShapeError
from vectorsweep.parameters import HostVectorParameters

REPO_CONFIGS = Path(__file__).resolve().parent.parent / "configs"


def _write_yaml(path: Path, data) -> Path:
    with open(path, "w") as f:
        yaml.safe_dump(data, f)
    return path


# ── deep_merge ────────────────────────────────────────────────────────

class TestDeepMerge:
    def test_simple_override(self):
        assert deep_merge({'a': 1, 'b': 2}, {'b': 3}) == {'a': 1, 'b': 3}

    def test_nested_merge(self):
        base = {'x': {'a': 1, 'b': 2}, 'y': 10}
        result = deep_merge(base, {'x': {'b': 3, 'c': 4}})
        assert result == {'x': {'a': 1, 'b': 3, 'c': 4}, 'y': 10}

    def test_base_not_modified(self):
        base = {'x': {'a': 1}}
        deep_merge(base, {'x': {'a': 2}})
        assert base == {'x': {'a': 1}}

    def test_list_replaced(self):
        assert deep_merge({'s': [1, 2, 3]}, {'s': [4]}) == {'s': [4]}


# ── defaults ──────────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_canonical_values(self):
        config = default_config()
        assert config.parameters == HostVectorParameters()
        assert config.initial_state.S_h == 100000.0
        assert config.initial_state.S_v == 4500.0
        assert config.scenarios == DEFAULT_SCENARIOS
        assert config.method == 'RK45'

    def test_daily_grid(self):
        t = default_config().time_grid()
        assert t.size == 366
        assert t[-1] == 365.0

    def test_instances_independent(self):
        a = default_config()
        a.scenarios.append(2.0)
        assert default_config().scenarios == DEFAULT_SCENARIOS

    def test_points_grid(self):
        config = SweepConfig(grid=GridSpec(points=[0, 7, 30]))
        np.testing.assert_array_equal(config.time_grid(), [0, 7, 30])

    def test_to_dict_has_no_effective_biting_rate(self):
        assert 'biting_rate' not in default_config().to_dict()['parameters']


# ── validation ────────────────────────────────────────────────────────

class TestValidateConfig:
    def test_default_valid(self):
        validate_config(default_config())  # should not raise

    def test_empty_scenarios(self):
        config = default_config()
        config.scenarios = []
        with pytest.raises(ShapeError, match="at least one"):
            validate_config(config)

    def test_negative_scenario(self):
        config = default_config()
        config.scenarios = [0.0, -0.1]
        with pytest.raises(DomainError, match="scenario values"):
            validate_config(config)

    def test_zero_denominator(self):
        config = default_config()
        config.parameters = HostVectorParameters(m=-10000.0)
        with pytest.raises(DomainError, match="N_h"):
            validate_config(config)

    def test_bad_grid(self):
        config = default_config()
        config.grid = GridSpec(start=10, end=0)
        with pytest.raises(ShapeError):
            validate_config(config)


# ── YAML loading ──────────────────────────────────────────────────────

class TestLoadConfig:
    def test_roundtrip(self, tmp_path):
        config = default_config()
        config.scenarios = [1.0, 0.0]
        config.method = 'DOP853'
        path = save_config(config, tmp_path / "sweep.yaml")
        loaded = load_config(path)
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file_uses_defaults(self, tmp_path):
        path = _write_yaml(tmp_path / "partial.yaml", {
            'parameters': {'baseline_biting_rate': 0.4},
            'initial_state': {'I_h': 10},
            'scenarios': [0, 0.5],
        })
        config = load_config(path)
        assert config.parameters.baseline_biting_rate == 0.4
        assert config.parameters.biting_rate == 0.4
        assert config.parameters.A == 1250.0
        assert config.initial_state.I_h == 10.0
        assert config.initial_state.S_h == 100000.0
        assert config.scenarios == [0.0, 0.5]
        assert config.time_grid().size == 366

    def test_grid_points_replace_range(self, tmp_path):
        path = _write_yaml(tmp_path / "points.yaml", {'grid': {'points': [0, 1, 5, 10]}})
        config = load_config(path)
        assert config.grid.points == [0.0, 1.0, 5.0, 10.0]
        np.testing.assert_array_equal(config.time_grid(), [0, 1, 5, 10])

    def test_overrides(self, tmp_path):
        path = _write_yaml(tmp_path / "base.yaml", {'grid': {'end': 100}})
        config = load_config(path, overrides={'grid': {'step': 0.5}, 'solver': {'method': 'RK4'}})
        assert config.time_grid().size == 201
        assert config.method == 'RK4'

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).to_dict() == default_config().to_dict()

    def test_unknown_keys_warn(self, tmp_path):
        path = _write_yaml(tmp_path / "typo.yaml", {
            'parameters': {'betah': 0.9},
            'plotting': {'dpi': 300},
        })
        with pytest.warns(UserWarning, match="unrecognized"):
            config = load_config(path)
        assert config.parameters.beta_h == 0.75

    def test_effective_biting_rate_ignored(self, tmp_path):
        path = _write_yaml(tmp_path / "b.yaml", {
            'parameters': {'biting_rate': 0.9, 'baseline_biting_rate': 0.4},
        })
        with pytest.warns(UserWarning, match="biting_rate"):
            config = load_config(path)
        assert config.parameters.baseline_biting_rate == 0.4
        assert config.parameters.biting_rate == 0.4

    def test_null_scenarios_use_defaults(self, tmp_path):
        path = tmp_path / "null.yaml"
        path.write_text("scenarios:\n")
        assert load_config(path).scenarios == DEFAULT_SCENARIOS

    def test_scalar_scenarios_rejected(self, tmp_path):
        path = _write_yaml(tmp_path / "scalar.yaml", {'scenarios': 0.5})
        with pytest.raises(ShapeError, match="scenarios must be a list"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)

    def test_invalid_values_rejected(self, tmp_path):
        path = _write_yaml(tmp_path / "bad.yaml", {'parameters': {'mu_v': -0.25}})
        with pytest.raises(DomainError, match="mu_v"):
            load_config(path)

    def test_shipped_canonical_config(self):
        config = load_config(REPO_CONFIGS / "canonical.yaml")
        assert config.to_dict() == default_config().to_dict()
