from __future__ import annotations

import logging

from pydantic import ValidationError

from psquare.contracts import StateCodec
from psquare.models import QuantileState
from psquare.p2_quantile import P2Quantile

logger = logging.getLogger(__name__)


class JsonStateCodec(StateCodec):
    """Serialize P² state records as UTF-8 JSON via pydantic."""

    def encode(self, state: QuantileState) -> bytes:
        return state.model_dump_json().encode("utf-8")

    def decode(self, payload: bytes) -> QuantileState:
        try:
            return QuantileState.model_validate_json(payload)
        except ValidationError as exc:
            logger.error(
                "Failed to decode quantile state (%d bytes): %d error(s).",
                len(payload),
                exc.error_count(),
            )
            raise


def encode_quantile(estimator: P2Quantile, codec: StateCodec | None = None) -> bytes:
    """Encode the full state of *estimator* with *codec* (JSON by default)."""
    return (codec or JsonStateCodec()).encode(estimator.export_state())


def decode_quantile(payload: bytes, codec: StateCodec | None = None) -> P2Quantile:
    """Restore an estimator previously written by :func:`encode_quantile`.

    The restored estimator reports the same value and evolves identically
    to the one that was encoded when fed the same observations.
    """
    state = (codec or JsonStateCodec()).decode(payload)
    return P2Quantile.from_state(state)
