"""
This package contains implementations of the corpus streaming and vocabulary building stages.
"""

# bring corpus classes directly into package namespace, to save some typing
from .linesentence import LineSentence, iter_chunked_lines, tokenize  # noqa:F401
from .vocabulary import Vocabulary, build_vocabulary  # noqa:F401
