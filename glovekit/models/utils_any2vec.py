#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Export trained vectors in the plain text word2vec format.

Format::

    <vocab_size> <vector_size>
    word_1 v_0 v_1 ... v_(vector_size - 1)
    word_2 v_0 v_1 ... v_(vector_size - 1)
    ...

Every component is written with 6 decimal places. Such files load with any word2vec-format
reader, e.g. ``gensim.models.KeyedVectors.load_word2vec_format(fname, binary=False)``.

"""

import logging

import numpy as np

from glovekit import utils

logger = logging.getLogger(__name__)


def save_word2vec_format(fname, model, vocabulary):
    """Store the averaged target/context vectors of `model` in word2vec text format.

    Parameters
    ----------
    fname : str
        The file path used to save the vectors in.
    model : :class:`~glovekit.models.glove.GloVe`
        Trained model.
    vocabulary : {:class:`~glovekit.corpora.vocabulary.Vocabulary`, :class:`~glovekit.utils.FakeDict`}
        Maps word ids to words through `word_at`; ids without a word are skipped.

    Returns
    -------
    int
        Number of vectors written.

    """
    total_vec, vector_size = len(model), model.vector_size
    logger.info("storing %sx%s projection weights into %s", total_vec, vector_size, fname)
    written = 0
    with utils.open(fname, 'wb') as fout:
        fout.write(b"%d %d\n" % (total_vec, vector_size))
        for index in range(total_vec):
            word = vocabulary.word_at(index)
            if word is None:
                continue
            row = model.embedding_of(index)
            fout.write(utils.to_utf8(word) + b"".join(b" %.6f" % val for val in row) + b"\n")
            written += 1
    if written != total_vec:
        logger.info("skipped %i word ids without a word", total_vec - written)
    return written


def load_word2vec_format(fname):
    """Load vectors stored by :func:`save_word2vec_format`.

    Parameters
    ----------
    fname : str
        Path to the vectors file.

    Returns
    -------
    (list of bytes, numpy.ndarray)
        Words in file order and their vectors, one row per word.

    Raises
    ------
    ValueError
        If the header or a vector line is malformed.

    """
    logger.info("loading projection weights from %s", fname)
    words, rows = [], []
    with utils.open(fname, 'rb') as fin:
        header = fin.readline().split()
        if len(header) != 2:
            raise ValueError("invalid header in %s: %r" % (fname, header))
        vocab_size, vector_size = int(header[0]), int(header[1])
        for line_no, line in enumerate(fin, start=1):
            parts = line.rstrip(b"\n").split(b" ")
            if len(parts) != vector_size + 1:
                raise ValueError(
                    "invalid vector on line %s of %s; expected %i components" % (line_no, fname, vector_size))
            words.append(parts[0])
            rows.append([float(x) for x in parts[1:]])
    vectors = np.array(rows, dtype=np.float64).reshape(len(rows), vector_size)
    logger.info("loaded %s vectors of %s declared from %s", len(words), vocab_size, fname)
    return words, vectors
