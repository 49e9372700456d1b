"""Text normalization into token sets, fanned out over a worker pool."""

import logging
import re
import threading
from typing import FrozenSet, List, Mapping, Optional

from ..parallel import Sender, WorkerPool, channel

logger = logging.getLogger(__name__)

TokenSet = FrozenSet[str]

PUNCTUATION_PATTERN = re.compile(r"['`’.,?!:;]")


def tokenize(text: str) -> TokenSet:
    """
    Normalize text into a set of words.

    Punctuation is replaced by whitespace before splitting, so ``you?you``
    yields a single ``you`` token. Case is preserved.
    """
    return frozenset(PUNCTUATION_PATTERN.sub(" ", text).split())


def _submit_records(records: Mapping[str, str], tx: Sender, pool: WorkerPool) -> None:
    """Producer side: one unit of work per record, then drop the pool and sender."""
    with tx, pool:
        for content in records.values():
            unit_tx = tx.clone()

            def unit(content: str = content, unit_tx: Sender = unit_tx) -> None:
                with unit_tx:
                    unit_tx.send(tokenize(content))

            pool.execute(unit)


def tokenize_records(records: Mapping[str, str], workers: Optional[int] = None) -> List[TokenSet]:
    """
    Tokenize every record's content in parallel.

    Record identifiers are dropped. The returned list is in completion
    order, not in the mapping's order.

    Args:
        records: Mapping of record id to raw text
        workers: Pool size (default: logical CPU count)

    Returns:
        One token set per record

    Raises:
        WorkerError: If any record could not be tokenized
    """
    tx, rx = channel()
    pool = WorkerPool(workers, name="simdist-tokenizer")
    producer = threading.Thread(
        target=_submit_records,
        args=(records, tx, pool),
        name="simdist-tokenize-producer",
        daemon=True
    )
    producer.start()
    rx.attach(producer)

    token_sets = rx.drain()

    logger.debug(f"Tokenized {len(token_sets)} records")
    return token_sets
