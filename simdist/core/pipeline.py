"""End-to-end similarity run: tokenize, compare, aggregate."""

import logging
import time
from typing import Mapping, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from ..utils.logging_setup import log_duration, log_operation
from .aggregator import aggregate
from .comparator import combinations, compare
from .results import DEFAULT_PRECISION, ResultsSet
from .tokenizer import tokenize_records

logger = logging.getLogger(__name__)


def _progress(console: Optional[Console]) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console or Console(stderr=True),
        transient=True,
        refresh_per_second=4
    )


def run(
    records: Mapping[str, str],
    precision: int = DEFAULT_PRECISION,
    workers: Optional[int] = None,
    show_progress: bool = False,
    console: Optional[Console] = None
) -> ResultsSet:
    """
    Compute every pairwise similarity between records.

    The tokenizer phase finishes before the comparison phase starts; the
    two phases use separate pools.

    Args:
        records: Mapping of record id to raw text
        precision: Decimals kept on every score and on the mean
        workers: Pool size for both phases (default: logical CPU count)
        show_progress: Display a progress bar while comparing
        console: Console for the progress bar (default: stderr)

    Returns:
        Finalized results

    Raises:
        WorkerError: If any tokenization or comparison unit failed
    """
    log_operation(logger, "tokenize", records=len(records))
    start_time = time.perf_counter()
    token_sets = tokenize_records(records, workers)
    log_duration(logger, "tokenize", time.perf_counter() - start_time)

    total = combinations(len(token_sets))
    log_operation(logger, "compare", records=len(token_sets), combinations=total)
    start_time = time.perf_counter()

    batches = compare(token_sets, precision, workers)
    if show_progress:
        with _progress(console) as progress:
            results = aggregate(batches, total, precision, progress=progress)
    else:
        results = aggregate(batches, total, precision)

    log_duration(logger, "compare", time.perf_counter() - start_time, similarities=results.count)
    return results
