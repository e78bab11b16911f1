from __future__ import annotations

import pytest
from pydantic import ValidationError

from psquare.models import AggregatorState, QuantileState, QuantileSummary


def _state(**overrides: object) -> QuantileState:
    fields: dict[str, object] = {
        "p": 0.5,
        "filled": False,
        "pos": (0, 1, 2, 3, 4),
        "npos": (0.0, 1.0, 2.0, 3.0, 4.0),
        "dn": (0.0, 0.25, 0.5, 0.75, 1.0),
        "heights": [3.0, 1.0],
    }
    fields.update(overrides)
    return QuantileState(**fields)  # type: ignore[arg-type]


def test_quantile_state_accepts_bootstrap_record() -> None:
    state = _state()

    assert state.heights == [3.0, 1.0]
    assert state.filled is False


@pytest.mark.parametrize("p", [-0.01, 1.01])
def test_quantile_state_rejects_out_of_range_p(p: float) -> None:
    with pytest.raises(ValidationError, match="p must be in"):
        _state(p=p)


def test_quantile_state_rejects_too_many_heights() -> None:
    with pytest.raises(ValidationError, match="at most 5"):
        _state(heights=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_quantile_state_requires_five_heights_when_filled() -> None:
    with pytest.raises(ValidationError, match="exactly 5"):
        _state(filled=True, heights=[1.0, 2.0, 3.0, 4.0])


def test_quantile_state_rejects_wrong_marker_count() -> None:
    with pytest.raises(ValidationError):
        _state(pos=(0, 1, 2, 3))


def test_quantile_state_rejects_extra_fields() -> None:
    with pytest.raises(ValidationError):
        _state(count=10)


def test_quantile_state_is_frozen() -> None:
    state = _state()

    with pytest.raises(ValidationError):
        state.p = 0.9  # type: ignore[misc]


def test_aggregator_state_nests_quantile_states() -> None:
    state = AggregatorState(
        count=2, mean=2.0, m2=2.0, quantiles={"p50": _state()}
    )

    dumped = state.model_dump()
    assert dumped["quantiles"]["p50"]["heights"] == [3.0, 1.0]


def test_quantile_summary_is_strict() -> None:
    with pytest.raises(ValidationError):
        QuantileSummary(
            count="3", mean=1.0, std=0.0, quantiles={}  # type: ignore[arg-type]
        )


def test_quantile_state_rejects_moved_markers_before_filled() -> None:
    with pytest.raises(ValidationError, match="initial marker positions"):
        _state(pos=(0, 1, 2, 4, 5))


def test_quantile_state_rejects_non_increasing_positions() -> None:
    with pytest.raises(ValidationError, match="strictly increasing"):
        _state(filled=True, pos=(0, 1, 1, 3, 4), heights=[1.0, 2.0, 3.0, 4.0, 5.0])


def test_quantile_state_rejects_shifted_minimum_marker() -> None:
    with pytest.raises(ValidationError, match="first marker position"):
        _state(filled=True, pos=(1, 2, 3, 4, 5), heights=[1.0, 2.0, 3.0, 4.0, 5.0])


def test_quantile_state_rejects_unsorted_filled_heights() -> None:
    with pytest.raises(ValidationError, match="non-decreasing"):
        _state(filled=True, heights=[5.0, 4.0, 3.0, 2.0, 1.0])


def test_quantile_state_accepts_filled_record() -> None:
    state = _state(
        filled=True, pos=(0, 1, 3, 4, 9), heights=[1.0, 2.0, 2.0, 4.0, 5.0]
    )

    assert state.pos == (0, 1, 3, 4, 9)
