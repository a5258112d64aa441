#!/usr/bin/env python
# encoding: utf-8

"""Module contains common utilities used in automated code tests for glovekit modules.

Attributes:
-----------
module_path : str
    Full path to this module directory.

common_texts : list of list of bytes
    Toy dataset, the tokenized content of ``test_data/toy_corpus.txt``.


Examples:
---------
We can find our toy set in test data directory.

>>> from glovekit.test.utils import datapath
>>>
>>> with open(datapath("toy_corpus.txt"), 'rb') as f:
...     texts = [line.split() for line in f]
>>> print(texts[0])
[b'human', b'interface', b'computer']

If you don't need to keep temporary objects on disk use :func:`~glovekit.test.utils.temporary_file`:

>>> from glovekit.test.utils import temporary_file
>>> from glovekit.corpora.vocabulary import build_vocabulary
>>>
>>> with temporary_file("vocab.txt") as tf:
...     build_vocabulary(datapath("toy_corpus.txt"), min_count=1).save_as_text(tf)

"""

import contextlib
import os
import shutil
import tempfile

module_path = os.path.dirname(__file__)  # needed because sample data files are located in the same folder


def datapath(fname):
    """Get full path for file `fname` in test data directory placed in this module directory.

    Parameters
    ----------
    fname : str
        Name of file.

    Returns
    -------
    str
        Full path to `fname` in test_data folder.

    """
    return os.path.join(module_path, 'test_data', fname)


def get_tmpfile(suffix):
    """Get full path to file `suffix` in temporary folder.
    This function doesn't creates file (only generate unique name).

    Parameters
    ----------
    suffix : str
        Suffix of file.

    Returns
    -------
    str
        Path to `suffix` file in temporary folder.

    """
    return os.path.join(tempfile.gettempdir(), suffix)


@contextlib.contextmanager
def temporary_file(name=""):
    """This context manager creates file `name` in temporary directory and returns its full path.
    Temporary directory with included files will deleted at the end of context. Note, it won't create file.

    Parameters
    ----------
    name : str
        Filename.

    Yields
    ------
    str
        Path to file `name` in temporary directory.

    """
    tmp = tempfile.mkdtemp()
    try:
        yield os.path.join(tmp, name)
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


def write_corpus(fname, lines):
    """Write `lines` (bytes or str) to `fname`, newline terminated."""
    with open(fname, 'wb') as fout:
        for line in lines:
            if isinstance(line, str):
                line = line.encode('utf8')
            fout.write(line + b'\n')


common_texts = [
    [b'human', b'interface', b'computer'],
    [b'survey', b'user', b'computer', b'system', b'response', b'time'],
    [b'eps', b'user', b'interface', b'system'],
    [b'system', b'human', b'system', b'eps'],
    [b'user', b'response', b'time'],
    [b'trees'],
    [b'graph', b'trees'],
    [b'graph', b'minors', b'trees'],
    [b'graph', b'minors', b'survey'],
]
