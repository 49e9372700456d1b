"""Console output for rendered results."""

import logging
from typing import List, Optional

from rich.console import Console

from ..render import DEFAULT_WIDTH, render_compact, render_distribution
from .results import ResultsSet

logger = logging.getLogger(__name__)


def detect_terminal_width(console: Optional[Console] = None, fallback: int = DEFAULT_WIDTH) -> int:
    """Width of the attached terminal, or ``fallback`` when output is not a terminal."""
    console = console or Console()
    if console.is_terminal:
        return console.width
    return fallback


class ConsoleWriter:
    """
    Buffered line writer over a rich console.

    Text is written raw: no markup, highlighting or wrapping, so histogram
    columns stay where the renderer put them.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self._lines: List[str] = []

    def add_line(self, line: str) -> None:
        """Buffer one line of output."""
        self._lines.append(line)

    def flush(self) -> None:
        """Write and clear everything buffered so far."""
        if not self._lines:
            return
        self.console.out("\n".join(self._lines), highlight=False)
        self._lines.clear()

    def write_results(
        self,
        results: ResultsSet,
        display: bool,
        width: int = DEFAULT_WIDTH,
        fill_char: str = "x",
        height_ratio: int = 30
    ) -> None:
        """
        Write either the full distribution view or the compact score list.

        Args:
            results: Finalized results
            display: Full distribution when true, one score per line otherwise
            width: Line width for the distribution view
            fill_char: Histogram bar character
            height_ratio: Histogram height as a percentage of its width
        """
        if display:
            text = render_distribution(results, width, fill_char=fill_char, height_ratio=height_ratio)
        else:
            text = render_compact(results)

        logger.debug(f"Writing {'distribution' if display else 'compact'} output ({len(text)} chars)")
        self.add_line(text)
        self.flush()
