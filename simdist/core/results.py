"""Score rounding, formatting and the finalized results set."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

DEFAULT_PRECISION = 3


def round_score(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """
    Round half away from zero at ``precision`` decimals.

    The decimal text of ``value`` is rounded, so ``0.2195`` becomes ``0.22``
    even though its binary representation sits just below the midpoint.
    """
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_score(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Fixed-point text for a score without trailing zeros (``0``, ``1``, ``0.00004``)."""
    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class ResultsSet:
    """All similarity scores of a run plus their summary statistics."""

    scores: Tuple[float, ...]
    mean: float
    min: float
    max: float
    precision: int = DEFAULT_PRECISION

    @property
    def count(self) -> int:
        return len(self.scores)

    @property
    def is_degenerate(self) -> bool:
        """True when every score maps onto a single axis point."""
        return self.max == self.min

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "count": self.count,
            "mean": self.mean,
            "min": self.min,
            "max": self.max,
            "precision": self.precision,
        }
