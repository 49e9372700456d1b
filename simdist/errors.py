"""
Error types for the similarity pipeline.

Every error carries a human-readable message plus an optional ``details``
mapping used for structured logging.
"""

from typing import Optional, Any, Dict, List


class SimilarityError(Exception):
    """
    Base exception for all simdist errors.

    The CLI catches this type and reports ``message`` on stderr.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputError(SimilarityError):
    """Raised when the record source cannot produce records."""

    def __init__(self, message: str, path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.path = path
        self.details['path'] = path


class InputNotFoundError(InputError):
    """Raised when the input path does not exist."""

    def __init__(self, path: str):
        super().__init__(f"the file `{path}` does not exist", path=path)


class InputEmptyError(InputError):
    """Raised when zero records could be parsed."""

    def __init__(self, path: str):
        super().__init__(f"the file `{path}` is empty", path=path)


class InputMalformedError(InputError):
    """Raised when a row does not match the expected schema."""

    def __init__(self, message: str, path: str,
                 row: Optional[int] = None,
                 missing: Optional[List[str]] = None):
        """
        Initialize malformed input error.

        Args:
            message: Error message
            path: Offending file
            row: 1-based data row number (header excluded)
            missing: Field names that were missing or empty
        """
        super().__init__(message, path=path)
        self.row = row
        self.missing = missing or []
        self.details.update({
            'row': row,
            'missing': self.missing
        })


class WorkerError(SimilarityError):
    """
    Raised when one or more units of work failed.

    Partial results are never returned; the collected exceptions are kept
    in ``errors`` for inspection.
    """

    def __init__(self, message: str, errors: Optional[List[BaseException]] = None):
        super().__init__(message)
        self.errors = list(errors or [])
        self.details['failed_units'] = len(self.errors)


class PoolShutdownError(SimilarityError):
    """Raised when work is submitted to a pool that was shut down."""


class ConfigError(SimilarityError):
    """Raised when configuration values are invalid."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key
        self.details['key'] = key
