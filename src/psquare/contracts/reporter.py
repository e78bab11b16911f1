from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psquare.models import QuantileSummary


class Reporter(ABC):
    """Render quantile summaries for presentation."""

    @abstractmethod
    def render(self, summary: QuantileSummary, title: str) -> None:
        """Render the summary to the configured output."""
        raise NotImplementedError
