import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from particle_sim.config import (
    SimConfig,
    config_from_dict,
    config_to_dict,
    load_run_config,
)
from particle_sim.errors import ConfigError

REPO_CONFIG = Path(__file__).resolve().parent.parent / "config.json"


def test_defaults():
    cfg = SimConfig()
    assert cfg.particle_count == 10
    assert cfg.bounds == (800, 800)
    assert cfg.radius == 10.0
    assert cfg.fps == 240
    assert cfg.max_iterations == 5
    assert cfg.gravity == pytest.approx(9.81 * 100.0)
    assert cfg.velocity_range == pytest.approx(100.0)


def test_config_is_immutable():
    cfg = SimConfig()
    with pytest.raises(FrozenInstanceError):
        cfg.radius = 3.0


@pytest.mark.parametrize("kwargs", [
    {"particle_count": 0},
    {"particle_count": 2.5},
    {"particle_count": True},
    {"width": 800.0},
    {"height": "800"},
    {"fps": 30.5},
    {"max_iterations": 2.0},
    {"master_seed": -3},
    {"master_seed": 1.5},
    {"radius": 0.0},
    {"radius": 400.0},
    {"width": 15, "radius": 10.0},
    {"dampening": 0.0},
    {"dampening": 1.5},
    {"restitution": -0.1},
    {"correction_percent": 2.0},
    {"slop": -1.0},
    {"max_iterations": 0},
    {"fps": 0},
    {"max_delta_time": 0.0},
    {"max_speed": -1.0},
])
def test_invalid_values_raise_config_error(kwargs):
    with pytest.raises(ConfigError):
        SimConfig(**kwargs)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        SimConfig(radius=-1.0)


def test_config_from_dict_rejects_unknown_and_malformed_settings():
    with pytest.raises(ConfigError, match="gravity_strength"):
        config_from_dict({"gravity_strength": 3.0})
    with pytest.raises(ConfigError):
        config_from_dict({"radius": "large"})


def test_dict_round_trip():
    cfg = SimConfig(particle_count=33, radius=4.0, master_seed=8)
    assert config_from_dict(config_to_dict(cfg)) == cfg


def test_load_run_config(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "run_id": "test-run",
        "master_seed": 99,
        "logging": {"level": "debug", "format": "%(message)s"},
        "simulation": {"particle_count": 3, "dampening": 0.5},
    }))

    run = load_run_config(str(path))

    assert run.run_id == "test-run"
    assert run.log_level == "DEBUG"
    assert run.log_format == "%(message)s"
    assert run.simulation.particle_count == 3
    assert run.simulation.dampening == 0.5
    assert run.simulation.master_seed == 99


def test_simulation_seed_wins_over_top_level_seed(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"master_seed": 1, "simulation": {"master_seed": 2}}))
    assert load_run_config(str(path)).simulation.master_seed == 2


def test_load_run_config_rejects_bad_shapes(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ConfigError):
        load_run_config(str(path))

    path.write_text(json.dumps({"logging": "loud"}))
    with pytest.raises(ConfigError):
        load_run_config(str(path))


def test_shipped_config_file_is_valid():
    run = load_run_config(str(REPO_CONFIG))
    assert run.simulation == SimConfig(master_seed=42)


def test_load_run_config_rejects_unknown_log_level(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"logging": {"level": "LOUD"}}))
    with pytest.raises(ConfigError, match="LOUD"):
        load_run_config(str(path))


def test_load_run_config_rejects_negative_top_level_seed(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"master_seed": -3}))
    with pytest.raises(ConfigError, match="master_seed"):
        load_run_config(str(path))
