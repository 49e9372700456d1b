"""Rendering of similarity results."""

from .distribution import (
    DEFAULT_WIDTH,
    DistributionLayout,
    calculate_shift,
    render_compact,
    render_distribution,
)

__all__ = [
    "DEFAULT_WIDTH",
    "DistributionLayout",
    "calculate_shift",
    "render_compact",
    "render_distribution",
]
