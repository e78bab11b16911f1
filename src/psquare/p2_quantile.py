from __future__ import annotations

import logging

from psquare.contracts import QuantileEstimator
from psquare.models import QuantileState

logger = logging.getLogger(__name__)

MARKERS = 5
_LAST = MARKERS - 1


class InvalidQuantileError(ValueError):
    """Raised when the target quantile lies outside [0, 1]."""


def parabolic(
    d: float,
    hp1: float,
    h: float,
    hm1: float,
    np1: float,
    n: float,
    nm1: float,
) -> float:
    """Piecewise-parabolic (PP) prediction of a marker height.

    *d* is the signed unit step, ``h``/``n`` the marker height and position,
    ``hp1``/``np1`` and ``hm1``/``nm1`` those of its right and left
    neighbours.  The sub-expressions are evaluated in a fixed order so that
    results are reproducible bit for bit.
    """
    a = d / (np1 - nm1)
    b1 = (n - nm1 + d) * (hp1 - h) / (np1 - n)
    b2 = (np1 - n - d) * (h - hm1) / (n - nm1)
    return h + a * (b1 + b2)


class P2Quantile(QuantileEstimator):
    """P² estimate of a single p-quantile using five markers.

    The first five observations are buffered unsorted in ``heights``; they
    are sorted lazily when the sixth observation arrives, at which point the
    estimator switches to the steady-phase marker update.
    """

    def __init__(self, p: float) -> None:
        if not 0.0 <= p <= 1.0:
            logger.error("Rejected quantile p=%r outside [0, 1].", p)
            raise InvalidQuantileError(f"p-quantile is out of range: {p!r}")
        self._p = float(p)
        self._filled = False
        self._heights: list[float] = []
        self._pos: list[int] = []
        self._npos: list[float] = []
        self._dn: list[float] = []
        self.reset()

    @classmethod
    def from_state(cls, state: QuantileState) -> P2Quantile:
        estimator = cls(state.p)
        estimator.import_state(state)
        return estimator

    @property
    def p(self) -> float:
        return self._p

    @property
    def filled(self) -> bool:
        return self._filled

    @property
    def count(self) -> int:
        """Number of observations appended since construction or reset."""
        if self._filled:
            return self._pos[_LAST] + 1
        return len(self._heights)

    def reset(self) -> None:
        p = self._p
        self._filled = False
        self._heights.clear()
        self._pos = list(range(MARKERS))
        self._npos = [0.0, 2.0 * p, 4.0 * p, 2.0 + 2.0 * p, 4.0]
        self._dn = [0.0, p / 2.0, p, (1.0 + p) / 2.0, 1.0]
        logger.debug("Reset P2 estimator p=%s.", p)

    def append(self, value: float) -> None:
        value = float(value)
        if len(self._heights) != MARKERS:
            self._heights.append(value)
            return
        if not self._filled:
            self._filled = True
            self._heights.sort()
            logger.debug(
                "P2 estimator p=%s entered steady phase with heights=%s.",
                self._p,
                self._heights,
            )
        self._update(value)

    def value(self) -> float:
        if self._filled:
            return self._heights[2]
        size = len(self._heights)
        if size == 0:
            return 0.0
        if size == 1:
            return self._heights[0]
        ordered = sorted(self._heights)
        rank = min(int(self._p * size), size - 1)
        return ordered[rank]

    def export_state(self) -> QuantileState:
        return QuantileState(
            p=self._p,
            filled=self._filled,
            pos=(
                self._pos[0],
                self._pos[1],
                self._pos[2],
                self._pos[3],
                self._pos[4],
            ),
            npos=(
                self._npos[0],
                self._npos[1],
                self._npos[2],
                self._npos[3],
                self._npos[4],
            ),
            dn=(self._dn[0], self._dn[1], self._dn[2], self._dn[3], self._dn[4]),
            heights=list(self._heights),
        )

    def import_state(self, state: QuantileState) -> None:
        self._p = state.p
        self._filled = state.filled
        self._pos = list(state.pos)
        self._npos = list(state.npos)
        self._dn = list(state.dn)
        self._heights.clear()
        self._heights.extend(state.heights)
        logger.debug(
            "Imported P2 state p=%s filled=%s count=%d.",
            self._p,
            self._filled,
            self.count,
        )

    def _update(self, value: float) -> None:
        heights = self._heights
        cell = -1
        if value < heights[0]:
            cell = 0
            heights[0] = value
        elif heights[_LAST] <= value:
            cell = _LAST - 1
            heights[_LAST] = value
        else:
            for index in range(1, MARKERS):
                if heights[index - 1] <= value < heights[index]:
                    cell = index - 1
                    break

        for index in range(MARKERS):
            if index > cell:
                self._pos[index] += 1
            self._npos[index] += self._dn[index]

        self._adjust_heights()

    def _adjust_heights(self) -> None:
        heights = self._heights
        positions = self._pos
        for index in range(1, _LAST):
            n = positions[index]
            np1 = positions[index + 1]
            nm1 = positions[index - 1]
            d = self._npos[index] - n

            if not ((d >= 1.0 and np1 - n > 1) or (d <= -1.0 and nm1 - n < -1)):
                continue
            step = 1 if d >= 0.0 else -1
            d = float(step)

            h = heights[index]
            hp1 = heights[index + 1]
            hm1 = heights[index - 1]
            candidate = parabolic(d, hp1, h, hm1, float(np1), float(n), float(nm1))
            if hm1 < candidate < hp1:
                heights[index] = candidate
            else:
                neighbour = index + step
                heights[index] = h + d * (heights[neighbour] - h) / float(
                    positions[neighbour] - n
                )
            positions[index] += step
