"""
Confidence Estimator for the Valuation Engine

The confidence figure is a presentation placeholder, not a statistical
confidence interval. It is drawn uniformly from a bounded integer range and
never feeds back into the price computation.
"""

import random
from typing import Optional


DEFAULT_MIN_CONFIDENCE = 65
DEFAULT_MAX_CONFIDENCE = 90


class ConfidenceEstimator:
    """
    Bounded random confidence percentage.

    Pass ``seed`` (or a ``random.Random`` as ``rng``) for reproducible draws.
    """

    def __init__(
        self,
        min_confidence: int = DEFAULT_MIN_CONFIDENCE,
        max_confidence: int = DEFAULT_MAX_CONFIDENCE,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        if not 0 <= min_confidence <= max_confidence <= 100:
            raise ValueError(
                "confidence bounds must satisfy 0 <= min <= max <= 100, "
                f"got min={min_confidence}, max={max_confidence}"
            )
        self.min_confidence = min_confidence
        self.max_confidence = max_confidence
        self._rng = rng or random.Random(seed)

    def estimate(self) -> int:
        """Draw a confidence percentage in [min_confidence, max_confidence]."""
        return self._rng.randint(self.min_confidence, self.max_confidence)
