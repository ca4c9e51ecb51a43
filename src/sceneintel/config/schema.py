"""Typed configuration schema and loader for the sceneintel package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint

CONFIG_ENV_VAR = "SCENEINTEL_CONFIG"

Weight = confloat(ge=0.0, le=1.0)

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class MentionFields(BaseModel):
    """Names of the descriptive sub-fields read from a character mention."""

    word_fields: list[str]
    mood_field: str

    model_config = ConfigDict(extra="forbid")


class RankingWeights(BaseModel):
    """Composite score weights and the sub-weights of each component."""

    dialogue_volume: Weight  # type: ignore[valid-type]
    appearance_frequency: Weight  # type: ignore[valid-type]
    page_spread: Weight  # type: ignore[valid-type]
    salience_bonus: Weight  # type: ignore[valid-type]
    dialogue_words: Weight  # type: ignore[valid-type]
    dialogue_scenes: Weight  # type: ignore[valid-type]
    appearance_scenes: Weight  # type: ignore[valid-type]
    appearance_pages: Weight  # type: ignore[valid-type]
    spread_density: Weight  # type: ignore[valid-type]
    spread_span: Weight  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")


class TierSettings(BaseModel):
    """Rank bands and guardrail thresholds used for tier assignment."""

    lead_count: conint(ge=0)  # type: ignore[valid-type]
    strong_support_count: conint(ge=0)  # type: ignore[valid-type]
    feature_count: conint(ge=0)  # type: ignore[valid-type]
    monologue_cap_rank: conint(ge=0)  # type: ignore[valid-type]
    recurring_scene_fraction: Weight  # type: ignore[valid-type]
    recurring_page_fraction: Weight  # type: ignore[valid-type]

    model_config = ConfigDict(extra="forbid")


class RankingSettings(BaseModel):
    """Character salience ranking settings."""

    crowd_roles: list[str]
    mention_fields: MentionFields
    weights: RankingWeights
    tiers: TierSettings

    model_config = ConfigDict(extra="forbid")


class LocationSettings(BaseModel):
    """Shared-root location clustering settings."""

    strategy: Literal["seed", "transitive"]
    min_root_length: conint(ge=1)  # type: ignore[valid-type]
    min_shared_root: conint(ge=1)  # type: ignore[valid-type]
    drop_vehicles: bool
    stop_words: list[str]

    model_config = ConfigDict(extra="forbid")


class CategorySources(BaseModel):
    """Breakdown keys collected into each element category."""

    characters: list[str]
    locations: list[str]
    wardrobe: list[str]
    props: list[str]
    visual_design: list[str]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)  # type: ignore[valid-type]
    ranking: RankingSettings
    locations: LocationSettings
    categories: CategorySources

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML.  When
    ``path`` is omitted the file named by ``SCENEINTEL_CONFIG`` is used as the
    user YAML, if that variable is set.
    """

    with (
        importlib_resources.files("sceneintel.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    environ = env if env is not None else os.environ
    if path is None and environ.get(CONFIG_ENV_VAR):
        path = environ[CONFIG_ENV_VAR]

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    return ConfigModel.model_validate(merged)


__all__ = [
    "CONFIG_ENV_VAR",
    "ConfigModel",
    "MentionFields",
    "RankingWeights",
    "TierSettings",
    "RankingSettings",
    "LocationSettings",
    "CategorySources",
    "deep_merge_dicts",
    "load_config",
]
