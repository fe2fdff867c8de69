from __future__ import annotations

import random
from typing import Any, Optional


class FakeImageAnalyzer:
    """
    Stand-in image analyzer that answers at random.

    Used by the dev runner in place of a real classifier. The image and the
    confidence threshold are ignored.

    Parameters
    ----------
    rng
        Random generator. Pass a seeded ``random.Random`` for repeatable runs.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        return self._rng.random() < 0.5
