"""
This package learns dense word vectors from a plain text corpus with the GloVe algorithm:
vocabulary counting, windowed co-occurrence accumulation and weighted least-squares training.

"""

__version__ = "0.1.0.dev0"

import logging

from glovekit import corpora, models, utils  # noqa:F401

logger = logging.getLogger("glovekit")
if not logger.handlers:  # To ensure reload() doesn't add another one
    logger.addHandler(logging.NullHandler())
