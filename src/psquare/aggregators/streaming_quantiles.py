from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from psquare.models import AggregatorState, QuantileState, QuantileSummary
from psquare.p2_quantile import InvalidQuantileError, P2Quantile

logger = logging.getLogger(__name__)

DEFAULT_PROBABILITIES = (0.01, 0.05, 0.5, 0.95, 0.99)


def quantile_key(p: float) -> str:
    """Return the summary key for probability *p*, e.g. ``0.999 -> 'p99.9'``."""
    return f"p{p * 100:g}"


class StreamingQuantileAggregator:
    """Streaming moments via Welford + one independent P² estimator per quantile."""

    def __init__(self, probabilities: Iterable[float] = DEFAULT_PROBABILITIES) -> None:
        self._estimators: dict[str, P2Quantile] = {}
        for p in probabilities:
            try:
                estimator = P2Quantile(p)
            except InvalidQuantileError:
                logger.error("Aggregator rejected probability %r.", p)
                raise
            key = quantile_key(p)
            if key in self._estimators:
                logger.error("Aggregator received duplicate quantile key %s.", key)
                raise ValueError(f"Duplicate quantile key {key!r} for p={p!r}.")
            self._estimators[key] = estimator
        if not self._estimators:
            raise ValueError("At least one probability is required.")
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0

    @property
    def estimators(self) -> Mapping[str, P2Quantile]:
        return self._estimators

    @property
    def count(self) -> int:
        return self._count

    def update(self, values: NDArray[np.number]) -> None:
        value_count = int(values.size)
        logger.debug(
            "Updating quantile aggregator with %d values shape=%s.",
            value_count,
            values.shape,
        )
        if value_count == 0:
            return
        if not bool(np.all(np.isfinite(values))):
            logger.error("Non-finite value encountered in quantile aggregation.")
            raise ValueError("Non-finite value encountered in quantile aggregation.")

        for entry in values.flat:
            self._update_value(float(entry))
        logger.debug("Updated quantile aggregator count=%d.", self._count)

    def finalize(self) -> QuantileSummary:
        if self._count == 0:
            logger.error("Finalize called without any values.")
            raise ValueError("No values provided for quantile aggregation.")
        summary = QuantileSummary(
            count=self._count,
            mean=self._mean,
            std=math.sqrt(self._m2 / self._count),
            quantiles={
                key: estimator.value() for key, estimator in self._estimators.items()
            },
        )
        logger.debug(
            "Finalized quantile summary: count=%d mean=%.6f std=%.6f quantiles=%s.",
            summary.count,
            summary.mean,
            summary.std,
            summary.quantiles,
        )
        return summary

    def reset(self) -> None:
        self._count = 0
        self._mean = 0.0
        self._m2 = 0.0
        for estimator in self._estimators.values():
            estimator.reset()

    def export_state(self) -> AggregatorState:
        return AggregatorState(
            count=self._count,
            mean=self._mean,
            m2=self._m2,
            quantiles={
                key: estimator.export_state()
                for key, estimator in self._estimators.items()
            },
        )

    def import_state(self, state: AggregatorState) -> None:
        if set(state.quantiles) != set(self._estimators):
            logger.error(
                "Aggregator state keys %s do not match configured keys %s.",
                sorted(state.quantiles),
                sorted(self._estimators),
            )
            raise ValueError("Aggregator state does not match configured quantiles.")
        quantiles: Mapping[str, QuantileState] = state.quantiles
        for key, estimator in self._estimators.items():
            if quantiles[key].p != estimator.p:
                logger.error(
                    "Aggregator state for %s carries p=%s, expected p=%s.",
                    key,
                    quantiles[key].p,
                    estimator.p,
                )
                raise ValueError(
                    f"Aggregator state for {key!r} does not match configured p."
                )
        for key, estimator in self._estimators.items():
            estimator.import_state(quantiles[key])
        self._count = state.count
        self._mean = state.mean
        self._m2 = state.m2

    def _update_value(self, value: float) -> None:
        self._count += 1
        delta = value - self._mean
        self._mean += delta / self._count
        delta2 = value - self._mean
        self._m2 += delta * delta2
        for estimator in self._estimators.values():
            estimator.append(value)
