from .quantile_estimator import QuantileEstimator
from .reporter import Reporter
from .state_codec import StateCodec

__all__ = [
    "QuantileEstimator",
    "Reporter",
    "StateCodec",
]
