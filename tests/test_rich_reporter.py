from __future__ import annotations

import numpy as np
from rich.console import Console

from psquare.aggregators import StreamingQuantileAggregator
from psquare.models import QuantileSummary
from psquare.reporters import RichReporter


def _console() -> Console:
    return Console(
        record=True,
        force_terminal=False,
        color_system=None,
        width=120,
    )


def test_rich_reporter_renders_summary() -> None:
    console = _console()
    summary = QuantileSummary(
        count=1234,
        mean=0.5,
        std=0.25,
        quantiles={"p50": 0.5, "p99": 0.99},
    )

    RichReporter(console).render(summary, "latency")

    output = console.export_text()
    assert "Quantiles for latency" in output
    assert "count:" in output
    assert "1,234" in output
    assert "Estimates (2)" in output
    assert "p50:" in output
    assert "0.990000" in output


def test_rich_reporter_renders_aggregator_output() -> None:
    console = _console()
    aggregator = StreamingQuantileAggregator(probabilities=(0.5, 0.999))
    aggregator.update(np.arange(1_000, dtype=np.float64))

    RichReporter(console).render(aggregator.finalize(), "sequence")

    output = console.export_text()
    assert "p99.9:" in output
    assert "mean:" in output
    assert "499.500000" in output
