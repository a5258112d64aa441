#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Windowed word co-occurrence records.

Every line of the corpus is converted to a sequence of vocabulary ids (unknown words are dropped,
so their neighbours become adjacent), then one record ``(i, j, 1 / distance)`` is appended for each
pair of positions within `window_size` of each other. With `symmetric` set, the mirrored record
``(j, i, 1 / distance)`` is appended as well, right after the original one.

Records are append-only and never coalesced: the same pair typically appears many times.

Examples
--------

.. sourcecode:: pycon

    >>> from glovekit.corpora.vocabulary import build_vocabulary
    >>> from glovekit.models.cooccurrence import CooccurrenceMatrix
    >>> from glovekit.test.utils import datapath
    >>>
    >>> vocab = build_vocabulary(datapath('toy_corpus.txt'), min_count=1)
    >>> matrix = CooccurrenceMatrix(window_size=2, symmetric=True)
    >>> matrix.ingest_corpus(datapath('toy_corpus.txt'), vocab)

"""

from collections import namedtuple
import logging
import math

import numpy as np
from scipy import sparse

from glovekit import utils
from glovekit.corpora.linesentence import LineSentence

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 15


class Cooccurrence(namedtuple('Cooccurrence', 'word_i, word_j, weight')):
    """A single weighted co-occurrence of word id `word_i` with context word id `word_j`."""
    __slots__ = ()


class CooccurrenceMatrix(utils.SaveLoad):
    """Ordered, append-only list of :class:`Cooccurrence` records.

    Attributes
    ----------
    window_size : int
        Maximum token distance between two co-occurring positions.
    symmetric : bool
        Whether every record is immediately followed by its mirror image.
    records : list of :class:`Cooccurrence`
        The records, in the order they were produced.

    """
    def __init__(self, window_size=DEFAULT_WINDOW_SIZE, symmetric=False):
        self.window_size = utils.check_non_negative_int(window_size, 'window_size')
        self.symmetric = bool(symmetric)
        self.records = []

    def __str__(self):
        return "%s(%i records, window_size=%i, symmetric=%s)" % (
            self.__class__.__name__, len(self.records), self.window_size, self.symmetric,
        )

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def size(self):
        """Number of records."""
        return len(self.records)

    def add_record(self, word_i, word_j, weight):
        """Append one record. Ids are not checked against any vocabulary here."""
        self.records.append(Cooccurrence(word_i, word_j, weight))

    def add_sentence(self, sentence):
        """Append the records of one line already converted to word ids.

        Parameters
        ----------
        sentence : list of int
            Vocabulary ids of the line, in order.

        Returns
        -------
        int
            Number of records appended.

        """
        window = self.window_size
        length = len(sentence)
        before = len(self.records)
        append = self.records.append
        for pos, word_i in enumerate(sentence):
            start = max(0, pos - window)
            end = min(length, pos + window + 1)
            for pos2 in range(start, end):
                if pos2 == pos:
                    continue
                word_j = sentence[pos2]
                weight = 1.0 / abs(pos - pos2)
                append(Cooccurrence(word_i, word_j, weight))
                if self.symmetric:
                    append(Cooccurrence(word_j, word_i, weight))
        return len(self.records) - before

    def ingest_corpus(self, source, vocabulary, progress_per=10000):
        """Stream a corpus and append the records of all its lines.

        Parameters
        ----------
        source : {str, file-like}
            Corpus in :class:`~glovekit.corpora.linesentence.LineSentence` format.
        vocabulary : :class:`~glovekit.corpora.vocabulary.Vocabulary`
            Finalized vocabulary used to map tokens to ids; unknown tokens are dropped.
        progress_per : int, optional
            Log progress every `progress_per` lines.

        """
        logger.info("collecting co-occurrences within window_size=%i (symmetric=%s)", self.window_size, self.symmetric)
        line_no = -1
        for line_no, tokens in enumerate(LineSentence(source)):
            if line_no % progress_per == 0:
                logger.info("PROGRESS: at line #%i, collected %i co-occurrence records", line_no, len(self.records))
            self.add_sentence(vocabulary.doc2idx(tokens))
        logger.info("collected %i co-occurrence records from %i lines", len(self.records), line_no + 1)

    def max_index(self):
        """Largest word id referenced by any record, 0 for an empty matrix."""
        result = 0
        for word_i, word_j, _ in self.records:
            result = max(result, word_i, word_j)
        return result

    def to_sparse(self, num_words=None):
        """Aggregate the records into a square sparse matrix, summing the weights of repeated pairs.

        Parameters
        ----------
        num_words : int, optional
            Matrix dimension; defaults to ``max_index() + 1``.

        Returns
        -------
        :class:`scipy.sparse.csr_matrix`
            Matrix with entry ``(i, j)`` = total weight of all ``(i, j)`` records.

        """
        if num_words is None:
            num_words = self.max_index() + 1
        if self.records:
            rows, cols, weights = zip(*self.records)
        else:
            rows, cols, weights = (), (), ()
        coo = sparse.coo_matrix(
            (np.asarray(weights, dtype=np.float64), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
            shape=(num_words, num_words),
        )
        return coo.tocsr()

    def save_as_text(self, fname):
        """Save the records to a text file, one `<word_i> <word_j> <weight>` line per record.

        The weight is written with 6 decimal places.

        """
        logger.info("saving %i co-occurrence records to %s", len(self.records), fname)
        with utils.open(fname, 'wb') as fout:
            for word_i, word_j, weight in self.records:
                fout.write(b"%d %d %.6f\n" % (word_i, word_j, weight))

    @classmethod
    def load_from_text(cls, fname, window_size=DEFAULT_WINDOW_SIZE, symmetric=True):
        """Load records stored by :meth:`save_as_text`.

        Lines with fewer than three fields are skipped.

        Parameters
        ----------
        fname : str
            Path to a co-occurrence file.
        window_size : int, optional
            Window size recorded on the result; the file does not carry it.
        symmetric : bool, optional
            Symmetric flag recorded on the result; the file does not carry it.

        Returns
        -------
        :class:`CooccurrenceMatrix`
            Matrix holding the records in file order.

        Raises
        ------
        ValueError
            If an id or weight field is not a valid number, an id is negative, or a weight is
            negative or not finite.

        """
        result = cls(window_size=window_size, symmetric=symmetric)
        for tokens in LineSentence(fname):
            if len(tokens) < 3:
                continue
            word_i, word_j = int(tokens[0]), int(tokens[1])
            if word_i < 0 or word_j < 0:
                raise ValueError("negative word id in co-occurrence file %s: %r" % (fname, tokens))
            weight = float(tokens[2])
            if not (math.isfinite(weight) and weight >= 0.0):
                raise ValueError("invalid weight in co-occurrence file %s: %r" % (fname, tokens))
            result.add_record(word_i, word_j, weight)
        logger.info("loaded %s from %s", result, fname)
        return result
