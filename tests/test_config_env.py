from pathlib import Path
from typing import Any

from sceneintel.config import load_config
from sceneintel.config.schema import CONFIG_ENV_VAR


def test_env_config_file(monkeypatch: Any, tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("locations:\n  drop_vehicles: true\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(cfg_file))
    cfg = load_config()
    assert cfg.locations.drop_vehicles is True


def test_explicit_path_beats_env(monkeypatch: Any, tmp_path: Path) -> None:
    env_file = tmp_path / "env.yml"
    env_file.write_text("locations:\n  strategy: transitive\n")
    explicit = tmp_path / "explicit.yml"
    explicit.write_text("locations:\n  min_shared_root: 5\n")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
    cfg = load_config(explicit)
    assert cfg.locations.strategy == "seed"
    assert cfg.locations.min_shared_root == 5


def test_env_mapping_injection(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("ranking:\n  tiers:\n    lead_count: 3\n")
    cfg = load_config(env={CONFIG_ENV_VAR: str(cfg_file)})
    assert cfg.ranking.tiers.lead_count == 3
    assert load_config(env={}).ranking.tiers.lead_count == 2
