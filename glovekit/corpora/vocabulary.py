#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module implements the concept of a Vocabulary -- a mapping between words and their integer ids.

Words are counted while a corpus is streamed, then the vocabulary is finalized exactly once:
words rarer than `min_count` are discarded and the survivors are ordered by count (descending),
ties broken by the word itself (ascending). A word's position in that order is its permanent id.

Examples
--------

.. sourcecode:: pycon

    >>> from glovekit.corpora.vocabulary import Vocabulary
    >>>
    >>> vocab = Vocabulary(min_count=1)
    >>> for word in [b'a', b'b', b'a']:
    ...     vocab.observe(word)
    >>> vocab.finalize()
    >>> vocab.index_of(b'a'), vocab.count_of(b'a')
    (0, 2)

"""

from collections import defaultdict
import logging
import os

from glovekit import utils
from glovekit.corpora.linesentence import LineSentence

logger = logging.getLogger(__name__)

DEFAULT_MIN_COUNT = 5


class Vocabulary(utils.SaveLoad):
    """Word -> count mapping with a frozen, frequency-sorted id assignment.

    Attributes
    ----------
    min_count : int
        Words observed fewer times than this are discarded by :meth:`finalize`.
    counts : dict of (bytes, int)
        Occurrence count of every word (only surviving words after finalization).
    index_to_key : list of bytes
        Finalized words, position = word id. Empty until :meth:`finalize`.
    key_to_index : dict of (bytes, int)
        Reverse of `index_to_key`.

    """
    def __init__(self, min_count=DEFAULT_MIN_COUNT):
        self.min_count = utils.check_non_negative_int(min_count, 'min_count')
        self.counts = defaultdict(int)
        self.index_to_key = []
        self.key_to_index = {}
        self.finalized = False

    def __str__(self):
        return "%s(%i unique words, min_count=%i%s)" % (
            self.__class__.__name__, len(self.counts), self.min_count, "" if self.finalized else ", not finalized",
        )

    def __len__(self):
        """Number of finalized words."""
        return len(self.index_to_key)

    def __contains__(self, word):
        return utils.to_utf8(word) in self.key_to_index

    def __iter__(self):
        """Iterate over finalized words in id order."""
        return iter(self.index_to_key)

    def items(self):
        """Iterate over (word, count) pairs of finalized words, in id order."""
        for word in self.index_to_key:
            yield word, self.counts[word]

    def observe(self, word):
        """Count one more occurrence of `word`.

        Parameters
        ----------
        word : {bytes, str}
            Token; text is stored as utf8 bytes.

        Raises
        ------
        RuntimeError
            If the vocabulary was already finalized.

        """
        if self.finalized:
            raise RuntimeError("cannot observe words in a finalized vocabulary")
        self.counts[utils.to_utf8(word)] += 1

    def scan_corpus(self, source, progress_per=10000):
        """Observe every token of a corpus.

        Parameters
        ----------
        source : {str, file-like, iterable of list of bytes}
            Path or binary file in :class:`~glovekit.corpora.linesentence.LineSentence` format, or
            an already tokenized corpus.
        progress_per : int, optional
            Log progress every `progress_per` lines.

        Returns
        -------
        (int, int)
            Number of raw tokens and number of lines processed.

        """
        if isinstance(source, (str, os.PathLike)) or hasattr(source, 'read'):
            source = LineSentence(source)
        logger.info("collecting all words and their counts")
        total_words = 0
        line_no = -1
        for line_no, tokens in enumerate(source):
            if line_no % progress_per == 0:
                logger.info(
                    "PROGRESS: at line #%i, processed %i words, keeping %i word types",
                    line_no, total_words, len(self.counts),
                )
            for token in tokens:
                self.observe(token)
            total_words += len(tokens)
        logger.info(
            "collected %i word types from a corpus of %i raw words and %i lines",
            len(self.counts), total_words, line_no + 1,
        )
        return total_words, line_no + 1

    def finalize(self, trim_rule=None):
        """Discard rare words and assign word ids, most frequent first.

        Calling this again without new observations leaves the vocabulary unchanged.

        Parameters
        ----------
        trim_rule : function, optional
            Vocabulary trimming rule, see :func:`~glovekit.utils.keep_vocab_item`.

        """
        retain_total = drop_total = drop_unique = 0
        for word, count in list(self.counts.items()):
            if utils.keep_vocab_item(word, count, self.min_count, trim_rule=trim_rule):
                retain_total += count
            else:
                del self.counts[word]
                drop_unique += 1
                drop_total += count

        self.index_to_key = sorted(self.counts, key=lambda word: (-self.counts[word], word))
        self.key_to_index = {word: index for index, word in enumerate(self.index_to_key)}
        self.finalized = True
        logger.info(
            "min_count=%i retains %i unique words (drops %i), leaves %i word corpus (drops %i)",
            self.min_count, len(self.index_to_key), drop_unique, retain_total, drop_total,
        )

    def count_of(self, word):
        """Occurrence count of `word`, or None when unseen or discarded by :meth:`finalize`."""
        return self.counts.get(utils.to_utf8(word))

    def index_of(self, word):
        """Id of `word` in the finalized order, or None."""
        return self.key_to_index.get(utils.to_utf8(word))

    def word_at(self, index):
        """Word with id `index`, or None when out of range."""
        if 0 <= index < len(self.index_to_key):
            return self.index_to_key[index]
        return None

    def doc2idx(self, tokens):
        """Convert `tokens` to word ids, silently dropping words not in the vocabulary.

        Parameters
        ----------
        tokens : list of bytes
            One tokenized line.

        Returns
        -------
        list of int
            Ids of the known tokens, in order.

        """
        key_to_index = self.key_to_index
        return [key_to_index[token] for token in tokens if token in key_to_index]

    def save_as_text(self, fname):
        """Save the finalized vocabulary to a text file.

        Notes
        -----
        Format::

            word_1[SPACE]count_1[NEWLINE]
            word_2[SPACE]count_2[NEWLINE]
            ....

        Lines follow id order, i.e. most frequent word first.

        """
        logger.info("saving vocabulary of %i words to %s", len(self), fname)
        with utils.open(fname, 'wb') as fout:
            for word, count in self.items():
                fout.write(word + b" " + str(count).encode('ascii') + b"\n")

    @classmethod
    def load_from_text(cls, fname, min_count=1):
        """Load a vocabulary stored by :meth:`save_as_text`, keeping the stored order and counts.

        Parameters
        ----------
        fname : str
            Path to a file produced by :meth:`save_as_text`.
        min_count : int, optional
            Threshold recorded on the loaded vocabulary; stored words are not re-filtered.

        Raises
        ------
        ValueError
            If a line is not of the form `<word> <count>`.

        """
        result = cls(min_count=min_count)
        for lineno, line in enumerate(LineSentence(fname).iter_lines()):
            if not line:
                continue
            word, sep, count = line.rpartition(b' ')
            if not sep or not word:
                raise ValueError("invalid line %i in vocabulary file %s: %r" % (lineno, fname, line))
            result.counts[word] = int(count)
            result.key_to_index[word] = len(result.index_to_key)
            result.index_to_key.append(word)
        result.finalized = True
        logger.info("loaded %s from %s", result, fname)
        return result


def build_vocabulary(source, min_count=DEFAULT_MIN_COUNT, trim_rule=None, progress_per=10000):
    """Count words in a corpus and finalize the resulting vocabulary.

    Parameters
    ----------
    source : {str, file-like, iterable of list of bytes}
        Corpus, see :meth:`Vocabulary.scan_corpus`.
    min_count : int, optional
        Discard words occurring fewer times than this.
    trim_rule : function, optional
        Vocabulary trimming rule, see :func:`~glovekit.utils.keep_vocab_item`.
    progress_per : int, optional
        Log progress every `progress_per` lines.

    Returns
    -------
    :class:`Vocabulary`
        Finalized vocabulary.

    """
    vocab = Vocabulary(min_count=min_count)
    vocab.scan_corpus(source, progress_per=progress_per)
    vocab.finalize(trim_rule=trim_rule)
    return vocab
