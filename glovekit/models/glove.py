#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Introduction
============

This module fits GloVe word vectors: for every co-occurrence record ``(i, j, x_ij)`` the model
moves ``dot(w_i, c_j) + b_i + b'_j`` towards ``log(x_ij)``, weighting the squared error by

.. math::

    f(x) = (x / x_{max})^\\alpha  \\text{ if } x < x_{max} \\text{ else } 1

`Jeffrey Pennington, Richard Socher, Christopher D. Manning: GloVe: Global Vectors for Word
Representation <https://nlp.stanford.edu/pubs/glove.pdf>`_.

Optimization is plain stochastic gradient descent with a fixed learning rate (no AdaGrad), one
record at a time, over records reshuffled at the start of every epoch. Each epoch's permutation is
seeded by the epoch number, so training is reproducible.

Usage examples
==============

.. sourcecode:: pycon

    >>> from glovekit.corpora.vocabulary import build_vocabulary
    >>> from glovekit.models.cooccurrence import CooccurrenceMatrix
    >>> from glovekit.models.glove import GloVe
    >>> from glovekit.test.utils import datapath
    >>>
    >>> vocab = build_vocabulary(datapath('toy_corpus.txt'), min_count=1)
    >>> matrix = CooccurrenceMatrix(window_size=5, symmetric=True)
    >>> matrix.ingest_corpus(datapath('toy_corpus.txt'), vocab)
    >>> model = GloVe(len(vocab), vector_size=10)
    >>> model.train(matrix, epochs=5)
    >>> vector = model.embedding_of(vocab.index_of(b'human'))

"""

import logging
import math
from timeit import default_timer

import numpy as np

from glovekit import utils

logger = logging.getLogger(__name__)

DEFAULT_VECTOR_SIZE = 50
DEFAULT_EPOCHS = 25
DEFAULT_X_MAX = 100.0
DEFAULT_ALPHA = 0.75
DEFAULT_LEARNING_RATE = 0.05

LOG_EPSILON = 1e-8  # keeps log(x) finite for zero weights


class GloVe(utils.SaveLoad):
    """Target/context vectors and biases for a fixed number of word ids.

    Attributes
    ----------
    vectors : numpy.ndarray
        Target word vectors, shape (`vocab_size`, `vector_size`).
    context_vectors : numpy.ndarray
        Context word vectors, shape (`vocab_size`, `vector_size`).
    biases : numpy.ndarray
        Target biases, shape (`vocab_size`,).
    context_biases : numpy.ndarray
        Context biases, shape (`vocab_size`,).

    """
    def __init__(
            self, vocab_size, vector_size=DEFAULT_VECTOR_SIZE, x_max=DEFAULT_X_MAX, alpha=DEFAULT_ALPHA,
            learning_rate=DEFAULT_LEARNING_RATE, seed=0,
    ):
        """

        Parameters
        ----------
        vocab_size : int
            Number of word ids; valid ids are ``0 .. vocab_size - 1``.
        vector_size : int, optional
            Dimensionality of the word vectors.
        x_max : float, optional
            Co-occurrence weight at which the weighting function saturates to 1.
        alpha : float, optional
            Exponent of the weighting function below `x_max`.
        learning_rate : float, optional
            Fixed gradient descent step size.
        seed : int, optional
            Seed for the random initialization of the vectors.

        """
        self.vocab_size = utils.check_non_negative_int(vocab_size, 'vocab_size')
        self.vector_size = utils.check_non_negative_int(vector_size, 'vector_size')
        self.x_max = float(x_max)
        self.alpha = float(alpha)
        self.learning_rate = float(learning_rate)
        self.seed = seed
        self.init_weights()

    def init_weights(self):
        """Reset all parameters to their initial, untrained state.

        Target and context vectors start out identical, with components uniform in [-0.005, 0.005);
        all biases start at zero.

        """
        logger.info("resetting weights for %i words x %i dimensions", self.vocab_size, self.vector_size)
        random = utils.get_random_state(self.seed)
        self.vectors = (random.random_sample((self.vocab_size, self.vector_size)) - 0.5) * 0.01
        self.context_vectors = self.vectors.copy()
        self.biases = np.zeros(self.vocab_size, dtype=np.float64)
        self.context_biases = np.zeros(self.vocab_size, dtype=np.float64)

    def __len__(self):
        return self.vocab_size

    def __str__(self):
        return "%s(vocab=%s, vector_size=%s, x_max=%s, alpha=%s, learning_rate=%s)" % (
            self.__class__.__name__, self.vocab_size, self.vector_size, self.x_max, self.alpha, self.learning_rate,
        )

    def weighting(self, x):
        """Weight of a co-occurrence of strength `x` in the loss: ``(x / x_max) ** alpha``, capped at 1."""
        if x >= self.x_max:
            return 1.0
        return (x / self.x_max) ** self.alpha

    def train_on_record(self, word_i, word_j, x_ij):
        """Apply one gradient descent step for a single co-occurrence record.

        Records referring to an id outside ``0 .. vocab_size - 1`` are ignored.

        Parameters
        ----------
        word_i : int
            Target word id.
        word_j : int
            Context word id.
        x_ij : float
            Co-occurrence weight.

        """
        if not (0 <= word_i < self.vocab_size and 0 <= word_j < self.vocab_size):
            return
        w_i = self.vectors[word_i]
        c_j = self.context_vectors[word_j]

        inner = np.dot(w_i, c_j) + self.biases[word_i] + self.context_biases[word_j]
        diff = inner - math.log(x_ij + LOG_EPSILON)
        scale = self.weighting(x_ij) * diff * self.learning_rate

        # both gradients are taken from the pre-update vectors
        grad_i = scale * c_j
        grad_j = scale * w_i
        w_i -= grad_i
        c_j -= grad_j

        self.biases[word_i] -= scale
        self.context_biases[word_j] -= scale

    def train(self, records, epochs=DEFAULT_EPOCHS):
        """Run `epochs` full passes of gradient descent over `records`.

        The records are shuffled in place at the start of every epoch, using a permutation
        seeded with the epoch number.

        Every record is a separate Python-level update over a few small numpy operations, so the
        cost grows as ``len(records) * epochs`` with a high constant factor; expect large corpora
        (millions of records) to take minutes per epoch.

        Parameters
        ----------
        records : {:class:`~glovekit.models.cooccurrence.CooccurrenceMatrix`, list of (int, int, float)}
            Co-occurrence records. Their order is not preserved.
        epochs : int, optional
            Number of passes. No early stopping.

        """
        epochs = utils.check_non_negative_int(epochs, 'epochs')
        if hasattr(records, 'records'):
            records = records.records
        logger.info(
            "training %s on %i co-occurrence records for %i epochs", self, len(records), epochs,
        )
        start = default_timer()
        for cur_epoch in range(epochs):
            epoch_start = default_timer()
            utils.get_random_state(cur_epoch).shuffle(records)
            train_on_record = self.train_on_record
            for word_i, word_j, x_ij in records:
                train_on_record(word_i, word_j, x_ij)
            logger.info(
                "EPOCH %i/%i: trained on %i records in %.1fs",
                cur_epoch + 1, epochs, len(records), default_timer() - epoch_start,
            )
        logger.info("training on %i records took %.1fs", len(records) * epochs, default_timer() - start)

    def embedding_of(self, index):
        """Final vector of word id `index`: the average of its target and context vectors.

        Returns
        -------
        numpy.ndarray
            Freshly allocated vector of length `vector_size`.

        Raises
        ------
        IndexError
            If `index` is not a valid word id.

        """
        if not 0 <= index < self.vocab_size:
            raise IndexError("word id %r out of range for %i words" % (index, self.vocab_size))
        return (self.vectors[index] + self.context_vectors[index]) / 2.0

    def embeddings(self):
        """Final vectors of all word ids, shape (`vocab_size`, `vector_size`)."""
        return (self.vectors + self.context_vectors) / 2.0
