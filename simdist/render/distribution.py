"""
Text rendering of a similarity distribution.

The full view is an ASCII histogram sitting on an axis with ticks at the
min, mean and max scores, with the three values labelled underneath and
a mean/count footer.

Each label is centred on its tick by splitting its text around the decimal
point; the resulting left/right shifts decide how far the axis reaches past
the outer ticks.
"""

import logging
from typing import List, Tuple

import numpy as np

from ..core.results import DEFAULT_PRECISION, ResultsSet, format_score

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 100
MIN_WIDTH = 20
DEFAULT_FILL_CHAR = "x"
DEFAULT_HEIGHT_RATIO = 30


def calculate_shift(value: float, precision: int = DEFAULT_PRECISION) -> Tuple[int, int]:
    """
    Columns a value's label extends left and right of its tick.

    Labels shorter than three characters (``0``, ``1``) start at the tick.
    """
    size = len(format_score(value, precision))
    if size < 3:
        return 0, 0

    left = size // 2 + size % 2 - 1
    right = size - left - 1
    return left, right


def _to_int(value: float, precision: int) -> int:
    return int(round(value * 10 ** precision))


class DistributionLayout:
    """Column positions shared by the histogram, axis and labels."""

    def __init__(self, results: ResultsSet, width: int):
        self.results = results
        self.width = max(width, MIN_WIDTH)

        self.min_shift = calculate_shift(results.min, results.precision)
        self.avg_shift = calculate_shift(results.mean, results.precision)
        self.max_shift = calculate_shift(results.max, results.precision)

        self.min_tick = self.min_shift[0]
        self.max_tick = self.width - self.max_shift[1] - 1
        self.avg_tick = self.min_tick + self._min_avg_width()

    @property
    def canvas_width(self) -> int:
        """Histogram columns, from the min tick to the max tick inclusive."""
        return self.max_tick - self.min_tick + 1

    def _min_avg_width(self) -> int:
        """Columns between the min and mean ticks."""
        if self.results.is_degenerate:
            return 0

        precision = self.results.precision
        low = _to_int(self.results.min, precision)
        high = _to_int(self.results.max, precision)
        avg = _to_int(self.results.mean, precision)

        span = self.width - self.min_shift[0] - self.max_shift[1]
        offset = span * (avg - low) // (high - low)
        return min(max(offset, 0), self.max_tick - self.min_tick)

    def ticks(self) -> List[Tuple[int, float, Tuple[int, int]]]:
        """(column, value, shift) for min, mean and max, in drawing order."""
        if self.results.is_degenerate:
            return [(self.min_tick, self.results.min, self.min_shift)]
        return [
            (self.min_tick, self.results.min, self.min_shift),
            (self.avg_tick, self.results.mean, self.avg_shift),
            (self.max_tick, self.results.max, self.max_shift),
        ]


def build_axis(layout: DistributionLayout) -> str:
    """Axis line and label line, joined by a newline."""
    axis = ["-"] * layout.width
    for column, _, _ in layout.ticks():
        axis[column] = "|"

    labels = [" "] * layout.width
    next_free = 0
    for column, value, (shift_left, _) in layout.ticks():
        text = format_score(value, layout.results.precision)
        start = max(column - shift_left, 0)
        if start < next_free:
            # Overlaps the previous label
            continue
        end = start + len(text)
        if end > len(labels):
            labels.extend(" " * (end - len(labels)))
        labels[start:end] = list(text)
        next_free = end + 1

    return "".join(axis) + "\n" + "".join(labels).rstrip()


def bucket_frequencies(results: ResultsSet, canvas_width: int) -> np.ndarray:
    """
    Count scores per histogram column.

    Scores map linearly from [min, max] onto ``canvas_width`` columns. When
    min equals max every score lands in the first column.
    """
    scores = np.asarray(results.scores, dtype=float)
    if scores.size == 0:
        return np.zeros(canvas_width, dtype=int)

    span = results.max - results.min
    if span == 0:
        indices = np.zeros(scores.size, dtype=int)
    else:
        indices = np.floor((scores - results.min) * canvas_width / span).astype(int)
        indices = np.clip(indices, 0, canvas_width - 1)

    return np.bincount(indices, minlength=canvas_width)


def scale_frequencies(frequencies: np.ndarray, canvas_height: int) -> np.ndarray:
    """Scale counts so the tallest column reaches ``canvas_height``."""
    max_freq = int(frequencies.max()) if frequencies.size else 0
    if max_freq == 0:
        return np.zeros_like(frequencies)
    return frequencies * canvas_height // max_freq


def build_histogram(
    results: ResultsSet,
    layout: DistributionLayout,
    fill_char: str = DEFAULT_FILL_CHAR,
    height_ratio: int = DEFAULT_HEIGHT_RATIO
) -> str:
    """Histogram rows, top to bottom, each prefixed by a newline."""
    canvas_width = layout.canvas_width
    canvas_height = canvas_width * height_ratio // 100

    scaled = scale_frequencies(bucket_frequencies(results, canvas_width), canvas_height)
    indent = " " * layout.min_tick

    rows = []
    for height in reversed(range(canvas_height)):
        cells = np.where(scaled >= height, fill_char, " ")
        rows.append("\n" + indent + "".join(cells.tolist()))
    return "".join(rows)


def render_distribution(
    results: ResultsSet,
    width: int = DEFAULT_WIDTH,
    fill_char: str = DEFAULT_FILL_CHAR,
    height_ratio: int = DEFAULT_HEIGHT_RATIO
) -> str:
    """
    Render the full distribution view.

    Args:
        results: Finalized results
        width: Target line width in columns
        fill_char: Character used for histogram bars
        height_ratio: Histogram height as a percentage of its width

    Returns:
        Multi-line text block without a trailing newline
    """
    layout = DistributionLayout(results, width)
    logger.debug(
        f"Rendering {results.count} similarities on {layout.canvas_width} columns "
        f"(ticks at {layout.min_tick}/{layout.avg_tick}/{layout.max_tick})"
    )

    lines = [
        build_histogram(results, layout, fill_char, height_ratio),
        build_axis(layout),
        f"Mean: {format_score(results.mean, results.precision)}",
        f"Total similarities: {results.count}",
    ]
    return "\n".join(lines)


def render_compact(results: ResultsSet) -> str:
    """One score per line, no trailing newline."""
    return "\n".join(format_score(score, results.precision) for score in results.scores)
