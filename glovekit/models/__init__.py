"""
This package contains the co-occurrence accumulator, the GloVe training engine and vector export.
"""

# bring model classes directly into package namespace, to save some typing
from .cooccurrence import Cooccurrence, CooccurrenceMatrix  # noqa:F401
from .glove import GloVe  # noqa:F401
from .utils_any2vec import save_word2vec_format, load_word2vec_format  # noqa:F401
