"""Similarity pipeline stages."""

from .aggregator import aggregate
from .comparator import combinations, compare, run_similarities, similarity
from .loader import load_records
from .pipeline import run
from .results import ResultsSet, format_score, round_score
from .tokenizer import tokenize, tokenize_records

__all__ = [
    "ResultsSet",
    "aggregate",
    "combinations",
    "compare",
    "format_score",
    "load_records",
    "round_score",
    "run",
    "run_similarities",
    "similarity",
    "tokenize",
    "tokenize_records",
]
