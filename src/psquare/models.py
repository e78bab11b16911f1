from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

_MARKERS = 5

Quintuple = tuple[float, float, float, float, float]


class QuantileState(BaseModel):
    """Complete persisted state of a single P² estimator."""

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        frozen=True,
        ser_json_inf_nan="constants",
    )

    p: float
    filled: bool
    pos: tuple[int, int, int, int, int]
    npos: Quintuple
    dn: Quintuple
    heights: list[float]

    @field_validator("p")
    @classmethod
    def _check_p(cls, value: float) -> float:
        if not 0.0 <= value <= 1.0:
            raise ValueError("p must be in [0, 1]")
        return value

    @model_validator(mode="after")
    def _check_markers(self) -> QuantileState:
        if len(self.heights) > _MARKERS:
            raise ValueError(f"heights holds at most {_MARKERS} values")
        if not self.filled:
            if self.pos != tuple(range(_MARKERS)):
                raise ValueError("unfilled state requires initial marker positions")
            return self
        if len(self.heights) != _MARKERS:
            raise ValueError(f"filled state requires exactly {_MARKERS} heights")
        if self.pos[0] != 0:
            raise ValueError("first marker position must be 0")
        if any(later <= earlier for earlier, later in zip(self.pos, self.pos[1:])):
            raise ValueError("marker positions must be strictly increasing")
        # NaN heights compare False and are left to the caller
        heights = self.heights
        if any(later < earlier for earlier, later in zip(heights, heights[1:])):
            raise ValueError("marker heights must be non-decreasing")
        return self


class AggregatorState(BaseModel):
    """Persisted state of a streaming quantile aggregator."""

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        frozen=True,
        ser_json_inf_nan="constants",
    )

    count: int
    mean: float
    m2: float
    quantiles: dict[str, QuantileState]


class QuantileSummary(BaseModel):
    """Moments and quantile estimates over a stream of values."""

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    count: int
    mean: float
    std: float
    quantiles: dict[str, float]
