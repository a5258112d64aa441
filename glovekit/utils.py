#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""This module contains various general utility functions."""

import logging
import numbers
import pickle as _pickle

import numpy as np
from smart_open import open  # noqa:F401

logger = logging.getLogger(__name__)


def get_random_state(seed):
    """Generate :class:`numpy.random.RandomState` based on input seed.

    Parameters
    ----------
    seed : {None, int, :class:`numpy.random.RandomState`}
        Seed for random state.

    Returns
    -------
    :class:`numpy.random.RandomState`
        Random state.

    Raises
    ------
    ValueError
        If seed is not {None, int, :class:`numpy.random.RandomState`}.

    """
    if seed is None or seed is np.random:
        return np.random.mtrand._rand
    if isinstance(seed, (numbers.Integral, np.integer)):
        return np.random.RandomState(seed)
    if isinstance(seed, np.random.RandomState):
        return seed
    raise ValueError('%r cannot be used to seed a np.random.RandomState instance' % seed)


def any2utf8(text, errors='strict', encoding='utf8'):
    """Convert `text` to bytestring in utf8.

    Bytestrings are passed through untouched: corpus tokens are raw bytes and are never re-validated.

    Parameters
    ----------
    text : {str, bytes}
        Input text.
    errors : str, optional
        Error handling behaviour for encoding.
    encoding : str, optional
        Target encoding.

    Returns
    -------
    bytes
        Bytestring.

    """
    if isinstance(text, bytes):
        return text
    return str(text).encode(encoding, errors)


to_utf8 = any2utf8


def check_non_negative_int(value, name):
    """Raise :class:`ValueError` unless `value` is a non-negative integer (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, (numbers.Integral, np.integer)) or value < 0:
        raise ValueError("%s must be a non-negative integer, got %r" % (name, value))
    return int(value)


class SaveLoad(object):
    """Class which inherit from this class have save/load functions, which un/pickle them to disk.

    Warnings
    --------
    This uses pickle for de/serializing, so objects must not contain unpicklable attributes,
    such as lambda functions etc.

    """
    @classmethod
    def load(cls, fname):
        """Load a previously saved object (using :meth:`~glovekit.utils.SaveLoad.save`) from file.

        Parameters
        ----------
        fname : str
            Path to file that contains needed object.

        Returns
        -------
        object
            Object loaded from `fname`.

        Raises
        ------
        TypeError
            When the stored object is not an instance of `cls`.

        """
        logger.info("loading %s object from %s", cls.__name__, fname)
        obj = unpickle(fname)
        if not isinstance(obj, cls):
            raise TypeError("Object of type %s can't be loaded by %s" % (type(obj), cls.__name__))
        logger.info("loaded %s", fname)
        return obj

    def save(self, fname_or_handle, pickle_protocol=_pickle.HIGHEST_PROTOCOL):
        """Save the object to file.

        Parameters
        ----------
        fname_or_handle : str or file-like
            Path to output file or already opened file-like object.
        pickle_protocol : int
            Protocol number for pickle.

        See Also
        --------
        :meth:`~glovekit.utils.SaveLoad.load`

        """
        try:
            _pickle.dump(self, fname_or_handle, protocol=pickle_protocol)
            logger.info("saved %s object", self.__class__.__name__)
        except TypeError:  # `fname_or_handle` does not have write attribute
            pickle(self, fname_or_handle, protocol=pickle_protocol)
            logger.info("saved %s object to %s", self.__class__.__name__, fname_or_handle)


def pickle(obj, fname, protocol=_pickle.HIGHEST_PROTOCOL):
    """Pickle object `obj` to file `fname`.

    Parameters
    ----------
    obj : object
        Any python object.
    fname : str
        Path to pickle file.
    protocol : int, optional
        Pickle protocol number.

    """
    with open(fname, 'wb') as fout:  # 'b' for binary, needed on Windows
        _pickle.dump(obj, fout, protocol=protocol)


def unpickle(fname):
    """Load object from `fname`.

    Parameters
    ----------
    fname : str
        Path to pickle file.

    Returns
    -------
    object
        Python object loaded from `fname`.

    """
    with open(fname, 'rb') as f:
        return _pickle.load(f)


class FakeDict(object):
    """Objects of this class act as vocabularies that map integer -> placeholder word, for a specified
    range of integers <0, num_terms).

    Used when vectors are trained straight from a persisted co-occurrence file, where only word
    indices are known and no real words are available.

    """

    def __init__(self, num_terms, prefix=b'word_'):
        """

        Parameters
        ----------
        num_terms : int
            Number of terms.
        prefix : bytes, optional
            Prefix of every placeholder word; the index is appended to it.

        """
        self.num_terms = num_terms
        self.prefix = to_utf8(prefix)

    def __str__(self):
        return "FakeDict(num_terms=%s)" % self.num_terms

    def __len__(self):
        return self.num_terms

    def word_at(self, index):
        """Get the placeholder word for `index`, or None when out of range."""
        if 0 <= index < self.num_terms:
            return self.prefix + str(index).encode('ascii')
        return None


RULE_DEFAULT = 0
RULE_DISCARD = 1
RULE_KEEP = 2


def keep_vocab_item(word, count, min_count, trim_rule=None):
    """Check that should we keep `word` in vocab or remove.

    Parameters
    ----------
    word : bytes
        Input word.
    count : int
        Number of times that word contains in corpus.
    min_count : int
        Frequency threshold for `word`.
    trim_rule : function, optional
        Function for trimming entities from vocab, default behaviour is `count >= min_count`.

    Returns
    -------
    bool
        True if `word` should stay, False otherwise.

    """
    default_res = count >= min_count

    if trim_rule is None:
        return default_res
    else:
        rule_res = trim_rule(word, count, min_count)
        if rule_res == RULE_KEEP:
            return True
        elif rule_res == RULE_DISCARD:
            return False
        else:
            return default_res
