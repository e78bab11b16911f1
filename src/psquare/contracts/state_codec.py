from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psquare.models import QuantileState


class StateCodec(ABC):
    """Encode estimator state records to bytes and back."""

    @abstractmethod
    def encode(self, state: QuantileState) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode(self, payload: bytes) -> QuantileState:
        raise NotImplementedError
