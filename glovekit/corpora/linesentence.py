#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""Stream a plain text corpus as lines of raw byte tokens.

The corpus is read in fixed-size binary chunks, so arbitrarily long files (and long lines) are
handled in bounded memory. A line that straddles a chunk boundary is reassembled exactly before
it is handed out.

Corpus format: one sentence per line, tokens separated by single spaces. Tokens are kept as
raw bytes; no case folding, punctuation stripping or decoding happens here.

Examples
--------

.. sourcecode:: pycon

    >>> from glovekit.corpora.linesentence import LineSentence
    >>> from glovekit.test.utils import datapath
    >>>
    >>> for tokens in LineSentence(datapath('toy_corpus.txt')):
    ...     pass

"""

import itertools
import logging

from glovekit import utils

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # read the corpus in 1MiB pieces


def iter_chunked_lines(fin, chunk_size=CHUNK_SIZE):
    """Yield newline-delimited lines from the binary stream `fin`, reading `chunk_size` bytes at a time.

    Parameters
    ----------
    fin : file-like
        Stream opened in binary mode.
    chunk_size : int, optional
        Number of bytes requested from `fin` per read.

    Yields
    ------
    bytes
        One line, without its terminating newline. A final line that lacks a newline is yielded
        at end of stream; empty lines are yielded as ``b''``.

    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive, got %r" % chunk_size)
    left_over = b''
    while True:
        chunk = fin.read(chunk_size)
        if not chunk:
            break
        lines = chunk.split(b'\n')
        lines[0] = left_over + lines[0]
        # the last piece is either b'' (chunk ended on a newline) or an unfinished line
        left_over = lines.pop()
        for line in lines:
            yield line
    if left_over:
        yield left_over


def tokenize(line):
    """Split a byte `line` on single spaces, dropping empty tokens.

    Parameters
    ----------
    line : bytes
        One corpus line.

    Returns
    -------
    list of bytes
        Tokens in order of appearance.

    """
    return [token for token in line.split(b' ') if token]


class LineSentence(object):
    def __init__(self, source, chunk_size=CHUNK_SIZE, limit=None):
        """Iterate over a file that contains sentences: one line = one sentence.
        Words must be already preprocessed and separated by single spaces.

        Parameters
        ----------
        source : string or a file-like object
            Path to the file on disk (compressed files are decompressed transparently by `smart_open`),
            or an already-open binary file object (must support `seek(0)`).
        chunk_size : int, optional
            Number of bytes read from the source at a time.
        limit : int or None
            Clip the file to the first `limit` lines. Do no clipping if `limit is None` (the default).

        """
        self.source = source
        self.chunk_size = chunk_size
        self.limit = limit

    def iter_lines(self):
        """Iterate through the raw byte lines of the source."""
        try:
            # Assume it is a file-like object and try treating it as such
            # Things that don't have seek will trigger an exception
            self.source.seek(0)
        except AttributeError:
            # If it didn't work like a file, use it as a string filename
            with utils.open(self.source, 'rb') as fin:
                yield from itertools.islice(iter_chunked_lines(fin, self.chunk_size), self.limit)
        else:
            yield from itertools.islice(iter_chunked_lines(self.source, self.chunk_size), self.limit)

    def __iter__(self):
        """Iterate through the lines in the source, yielding the tokens of each line."""
        for line in self.iter_lines():
            yield tokenize(line)
