from __future__ import annotations

import os
from typing import cast

import pytest

from evaluation.perf import profile_document, profile_synthetic
from evaluation.synthetic import synthetic_breakdown
from sceneintel.config import load_config

if os.getenv("SKIP_PERF_TESTS") == "1":
    pytest.skip("Performance tests skipped by SKIP_PERF_TESTS", allow_module_level=True)


def _get_env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, "").strip() or default)
    except ValueError:
        return default


def _required_keys() -> set[str]:
    return {"parse", "elements", "rank", "total"}


def test_profile_document_smoke() -> None:
    timings = profile_document(synthetic_breakdown(20, seed=1), load_config(env={}))
    assert set(timings) == _required_keys()
    for value in timings.values():
        assert isinstance(value, float)
        assert value >= 0.0
    subtotal = sum(v for k, v in timings.items() if k != "total")
    assert timings["total"] >= subtotal - 0.005


def test_profile_synthetic_smoke() -> None:
    res = profile_synthetic([10, 30], seed=2)
    assert [item["scenes"] for item in res] == [10, 30]
    for item in res:
        stages = cast(dict[str, float], item["stages"])
        assert set(stages) == _required_keys()


def test_profile_budget() -> None:
    stages = profile_document(synthetic_breakdown(400, seed=5), load_config(env={}))
    budget = _get_env_float("PERF_MAX_SEC", 5.0)
    assert stages["total"] <= budget, f"total {stages['total']:.3f}s (budget {budget:.3f}s)"
