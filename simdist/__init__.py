"""simdist - pairwise Jaccard similarity distribution of text records."""

__version__ = "0.1.0"

from .core.pipeline import run
from .core.results import ResultsSet
from .errors import SimilarityError

__all__ = ["ResultsSet", "SimilarityError", "run", "__version__"]
