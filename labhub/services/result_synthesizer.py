from __future__ import annotations
import logging
import random
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.timeutil import now_utc
from ..domain.catalog import ASSAY_CATALOG, AssaySpec
from ..domain.errors import InvalidArgument
from ..domain.models import TestResult

logger = logging.getLogger(__name__)


class ResultSynthesizer:
    """Produces plausible lab results, one per day going back from now.

    Stateless apart from the injected RNG and clock; safe to share.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        catalog: tuple[AssaySpec, ...] = ASSAY_CATALOG,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or now_utc
        self._catalog = catalog

    def _one(self, ts: datetime) -> TestResult:
        assay = self._rng.choice(self._catalog)
        value = assay.round_value(self._rng.uniform(assay.draw_low, assay.draw_high))
        return TestResult(
            timestamp=ts,
            test_type=assay.name,
            value=value,
            unit=assay.unit,
            status=assay.classify(value),
        )

    def generate(self, n: int = 7) -> list[TestResult]:
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgument(f"count must be an integer, got {n!r}")
        if n < 1:
            raise InvalidArgument(f"count must be >= 1, got {n}")

        now = self._clock()
        results = [self._one(now - timedelta(days=i)) for i in range(n)]
        results.sort(key=lambda r: r.timestamp, reverse=True)

        logger.debug("Generated %d synthetic results ending %s", n, now.isoformat())
        return results
