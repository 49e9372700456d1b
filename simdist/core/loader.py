"""CSV record loading."""

import csv
import logging
from pathlib import Path
from typing import Dict, Union

from ..errors import InputEmptyError, InputError, InputMalformedError, InputNotFoundError

logger = logging.getLogger(__name__)

ID_FIELD = "uid"
CONTENT_FIELD = "content"
REQUIRED_FIELDS = (ID_FIELD, CONTENT_FIELD)


def load_records(path: Union[str, Path]) -> Dict[str, str]:
    """Load ``uid`` -> ``content`` records from a CSV file with a header row.

    A later row with an already seen ``uid`` replaces the earlier one.

    Args:
        path: CSV file to read

    Returns:
        Mapping of record id to raw text

    Raises:
        InputNotFoundError: If the file does not exist
        InputEmptyError: If no records could be parsed
        InputMalformedError: If the header or a row lacks a required field
    """
    path = Path(path)
    if not path.exists():
        raise InputNotFoundError(str(path))

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            records = _parse_records(csv.DictReader(f), path)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise InputError(f"could not read `{path}`: {e}", path=str(path)) from e

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def _parse_records(reader: csv.DictReader, path: Path) -> Dict[str, str]:
    if not reader.fieldnames:
        raise InputEmptyError(str(path))

    missing_columns = [name for name in REQUIRED_FIELDS if name not in reader.fieldnames]
    if missing_columns:
        raise InputMalformedError(
            f"the file `{path}` is missing required column(s): {', '.join(missing_columns)}",
            path=str(path),
            missing=missing_columns
        )

    records: Dict[str, str] = {}
    rows = 0
    for row_number, row in enumerate(reader, start=1):
        uid = row.get(ID_FIELD)
        content = row.get(CONTENT_FIELD)

        missing = []
        if not uid:
            missing.append(ID_FIELD)
        if content is None:
            missing.append(CONTENT_FIELD)
        if missing:
            raise InputMalformedError(
                f"row {row_number} of `{path}` is missing field(s): {', '.join(missing)}",
                path=str(path),
                row=row_number,
                missing=missing
            )

        if uid in records:
            logger.debug(f"Duplicate uid {uid!r} at row {row_number}; keeping the later content")
        records[uid] = content
        rows += 1

    if rows == 0:
        raise InputEmptyError(str(path))

    return records
