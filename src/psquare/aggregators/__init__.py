from .streaming_quantiles import (
    DEFAULT_PROBABILITIES,
    StreamingQuantileAggregator,
    quantile_key,
)

__all__ = ["DEFAULT_PROBABILITIES", "StreamingQuantileAggregator", "quantile_key"]
