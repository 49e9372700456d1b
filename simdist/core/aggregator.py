"""Streaming aggregation of score batches into a ``ResultsSet``."""

import logging
from typing import Iterable, List, Optional, Sequence

from rich.progress import Progress

from .results import DEFAULT_PRECISION, ResultsSet, round_score

logger = logging.getLogger(__name__)


def aggregate(
    batches: Iterable[Sequence[float]],
    total: int,
    precision: int = DEFAULT_PRECISION,
    progress: Optional[Progress] = None,
    description: str = "Comparing records"
) -> ResultsSet:
    """
    Consume score batches until the stream ends.

    Min and max both start at 0.0. A score lowers the min only when it is
    strictly below it, otherwise raises the max only when strictly above
    it; ties and in-between values change neither.

    Args:
        batches: Stream of score lists (e.g. a channel receiver)
        total: Expected number of scores, used to size the progress bar
        precision: Decimals used for the mean
        progress: Optional progress display
        description: Progress task label

    Returns:
        Finalized results
    """
    task_id = None
    if progress is not None:
        task_id = progress.add_task(description, total=total)

    scores: List[float] = []
    running_sum = 0.0
    low = 0.0
    high = 0.0

    for batch in batches:
        for score in batch:
            running_sum += score
            if score < low:
                low = score
            elif score > high:
                high = score
            scores.append(score)

        if progress is not None and task_id is not None:
            progress.update(task_id, advance=len(batch))

    if scores:
        mean = round_score(running_sum / len(scores), precision)
    else:
        mean = 0.0

    if len(scores) != total:
        logger.warning(f"Expected {total} similarities, received {len(scores)}")

    logger.debug(f"Aggregated {len(scores)} similarities (mean={mean}, min={low}, max={high})")
    return ResultsSet(scores=tuple(scores), mean=mean, min=low, max=high, precision=precision)
