import logging
import sys

from .contracts import QuantileEstimator, Reporter, StateCodec
from .models import AggregatorState, QuantileState, QuantileSummary
from .p2_quantile import InvalidQuantileError, P2Quantile

__all__ = [
    "AggregatorState",
    "InvalidQuantileError",
    "P2Quantile",
    "QuantileEstimator",
    "QuantileState",
    "QuantileSummary",
    "Reporter",
    "StateCodec",
]

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
