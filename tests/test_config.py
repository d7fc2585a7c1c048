"""
Tests for environment-driven configuration
"""

import json

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.valuation import Condition, TargetPropertyAttributes
from utils.config import Config


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DEFAULT_BASELINE_PPA", "MIN_CONFIDENCE", "MAX_CONFIDENCE", "VALUATION_SEED",
        "REFERENCE_YEAR", "MULTIPLIER_TABLE_PATH", "LISTINGS_PATH", "SIMULATED_LATENCY_MS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfig:

    def test_defaults(self, clean_env):
        config = Config.load()

        assert config.default_baseline_ppa == 1700.0
        assert config.min_confidence == 65
        assert config.max_confidence == 90
        assert config.random_seed is None
        assert config.reference_year is None
        assert config.simulated_latency_ms == 0

    def test_env_overrides(self, clean_env):
        clean_env.setenv("DEFAULT_BASELINE_PPA", "1500")
        clean_env.setenv("VALUATION_SEED", "12")
        clean_env.setenv("REFERENCE_YEAR", "2030")

        config = Config.load()

        assert config.default_baseline_ppa == 1500.0
        assert config.random_seed == 12
        assert config.reference_year == 2030
        assert config.to_dict()["random_seed"] == 12

    def test_build_engine_uses_default_baseline(self, clean_env):
        clean_env.setenv("DEFAULT_BASELINE_PPA", "1500")
        engine = Config.load().build_engine()
        target = TargetPropertyAttributes(
            location="Zenica", area=60, level=2, year_built=2000, condition=Condition.GOOD,
        )

        result = engine.estimate(target, [])

        assert result.baseline_price_per_area == 1500.0
        assert result.default_baseline_used is True

    def test_seeded_engines_agree(self, clean_env):
        clean_env.setenv("VALUATION_SEED", "3")
        target = TargetPropertyAttributes(
            location="Zenica", area=60, level=2, year_built=2000, condition=Condition.GOOD,
        )

        a = Config.load().build_engine().estimate(target, [])
        b = Config.load().build_engine().estimate(target, [])

        assert a.confidence == b.confidence

    def test_multiplier_table_path(self, clean_env, tmp_path):
        path = tmp_path / "table.json"
        path.write_text(json.dumps({"condition": {"good": 1.05}}))
        clean_env.setenv("MULTIPLIER_TABLE_PATH", str(path))
        target = TargetPropertyAttributes(
            location="Zenica", area=60, level=2, year_built=2000, condition=Condition.GOOD,
        )

        result = Config.load().build_engine().estimate(target, [])

        assert result.multipliers["condition"] == 1.05

    def test_listings_path(self, clean_env, tmp_path):
        path = tmp_path / "listings.json"
        path.write_text(json.dumps([
            {"id": "z1", "title": "Flat", "city": "Zenica", "area": 50, "price": 60000},
        ]))
        clean_env.setenv("LISTINGS_PATH", str(path))

        store = Config.load().load_listings()

        assert [l.id for l in store] == ["z1"]
