"""
Pairwise Jaccard comparison over the upper triangle of the record matrix.

Work is split by row: the unit for row ``i`` compares token set ``i`` with
every later set and sends the whole row as one batch, so there are
``n - 1`` messages for ``n * (n - 1) / 2`` comparisons.
"""

import logging
import threading
from typing import AbstractSet, List, Optional, Sequence, Tuple

from ..parallel import Receiver, Sender, WorkerPool, channel
from .results import DEFAULT_PRECISION, round_score
from .tokenizer import TokenSet

logger = logging.getLogger(__name__)


def similarity(a: AbstractSet[str], b: AbstractSet[str], precision: int = DEFAULT_PRECISION) -> float:
    """
    Jaccard index of two token sets, rounded to ``precision`` decimals.

    Two empty sets have no union; their similarity is defined as 0.0.
    """
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    if union == 0:
        return 0.0
    return round_score(intersection / union, precision)


def combinations(n: int) -> int:
    """Number of unordered pairs among ``n`` records."""
    if n < 2:
        return 0
    return n * (n - 1) // 2


def compare_row(token_sets: Sequence[TokenSet], i: int, precision: int = DEFAULT_PRECISION) -> List[float]:
    """Scores of row ``i`` against every later row."""
    row = token_sets[i]
    return [similarity(row, token_sets[j], precision) for j in range(i + 1, len(token_sets))]


def run_similarities(
    token_sets: Sequence[TokenSet],
    tx: Sender,
    precision: int = DEFAULT_PRECISION,
    workers: Optional[int] = None
) -> None:
    """
    Submit one unit of work per row and send each row's scores through ``tx``.

    Fewer than two token sets means nothing to compare: the sender is
    dropped straight away and the receiver sees an empty stream. Blocks
    until every row has been computed.
    """
    with tx:
        n = len(token_sets)
        if n <= 1:
            logger.debug(f"Nothing to compare for {n} record(s)")
            return

        shared: Tuple[TokenSet, ...] = tuple(token_sets)
        with WorkerPool(workers, name="simdist-comparator") as pool:
            for i in range(n - 1):
                unit_tx = tx.clone()

                def unit(i: int = i, unit_tx: Sender = unit_tx) -> None:
                    with unit_tx:
                        unit_tx.send(compare_row(shared, i, precision))

                pool.execute(unit)


def compare(
    token_sets: Sequence[TokenSet],
    precision: int = DEFAULT_PRECISION,
    workers: Optional[int] = None
) -> Receiver:
    """
    Start the comparison phase in the background.

    Returns:
        Receiver yielding one list of scores per row
    """
    if workers is not None and workers < 1:
        raise ValueError(f"pool size must be at least 1, got {workers}")

    tx, rx = channel()
    producer = threading.Thread(
        target=run_similarities,
        args=(token_sets, tx, precision, workers),
        name="simdist-compare-producer",
        daemon=True
    )
    producer.start()
    rx.attach(producer)
    return rx
