"""
Configuration management.
"""

import os
import random
from dataclasses import dataclass, field
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


@dataclass
class Config:
    """
    Application configuration.

    Loads from environment variables with sensible defaults.
    """

    # Server
    host: str = field(default_factory=lambda: os.getenv("HOST", "127.0.0.1"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Simulated network latency before API responses (cosmetic, ms)
    simulated_latency_ms: int = field(
        default_factory=lambda: int(os.getenv("SIMULATED_LATENCY_MS", "0"))
    )

    # Valuation
    default_baseline_ppa: float = field(
        default_factory=lambda: float(os.getenv("DEFAULT_BASELINE_PPA", "1700"))
    )
    local_median_ppa: float = field(
        default_factory=lambda: float(os.getenv("LOCAL_MEDIAN_PPA", "1700"))
    )
    min_confidence: int = field(default_factory=lambda: int(os.getenv("MIN_CONFIDENCE", "65")))
    max_confidence: int = field(default_factory=lambda: int(os.getenv("MAX_CONFIDENCE", "90")))
    random_seed: Optional[int] = field(default_factory=lambda: _optional_int("VALUATION_SEED"))
    reference_year: Optional[int] = field(default_factory=lambda: _optional_int("REFERENCE_YEAR"))

    # Data
    multiplier_table_path: Optional[str] = field(
        default_factory=lambda: os.getenv("MULTIPLIER_TABLE_PATH") or None
    )
    listings_path: Optional[str] = field(
        default_factory=lambda: os.getenv("LISTINGS_PATH") or None
    )

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from environment."""
        return cls()

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "log_level": self.log_level,
            "simulated_latency_ms": self.simulated_latency_ms,
            "default_baseline_ppa": self.default_baseline_ppa,
            "local_median_ppa": self.local_median_ppa,
            "min_confidence": self.min_confidence,
            "max_confidence": self.max_confidence,
            "random_seed": self.random_seed,
            "reference_year": self.reference_year,
            "multiplier_table_path": self.multiplier_table_path,
            "listings_path": self.listings_path,
        }

    def make_rng(self) -> random.Random:
        """Random source for the heuristics, seeded when VALUATION_SEED is set."""
        return random.Random(self.random_seed)

    def build_engine(self):
        """Valuation engine configured from these settings."""
        from core.valuation import (
            ConfidenceEstimator,
            DEFAULT_MULTIPLIER_TABLE,
            MultiplierTable,
            ValuationEngine,
        )

        table = DEFAULT_MULTIPLIER_TABLE
        if self.multiplier_table_path:
            table = MultiplierTable.from_json_file(self.multiplier_table_path)

        return ValuationEngine(
            default_baseline=self.default_baseline_ppa,
            table=table,
            reference_year=self.reference_year,
            confidence_estimator=ConfidenceEstimator(
                min_confidence=self.min_confidence,
                max_confidence=self.max_confidence,
                rng=self.make_rng(),
            ),
        )

    def load_listings(self):
        """Listing store from LISTINGS_PATH, or the built-in demo listings."""
        from core.listings import ListingStore

        if self.listings_path:
            return ListingStore.from_json_file(self.listings_path)
        return ListingStore.demo()
