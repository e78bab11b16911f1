from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psquare.models import QuantileState


class QuantileEstimator(ABC):
    """Estimate a single quantile over a stream of observations."""

    @abstractmethod
    def append(self, value: float) -> None:
        """Consume one observation."""
        raise NotImplementedError

    @abstractmethod
    def value(self) -> float:
        """Return the current quantile estimate."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        """Discard all observations."""
        raise NotImplementedError

    @abstractmethod
    def export_state(self) -> QuantileState:
        """Return a snapshot of the full estimator state."""
        raise NotImplementedError

    @abstractmethod
    def import_state(self, state: QuantileState) -> None:
        """Replace the estimator state with *state*."""
        raise NotImplementedError
