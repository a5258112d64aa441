#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html

"""
Automated tests for the command line pipeline in glovekit.scripts.glove_standalone.
"""

import logging
import os
import shutil
import tempfile
import unittest

from testfixtures import log_capture

from glovekit.corpora.vocabulary import Vocabulary
from glovekit.models.cooccurrence import CooccurrenceMatrix
from glovekit.models.utils_any2vec import load_word2vec_format
from glovekit.scripts.glove_standalone import main
from glovekit.test.utils import datapath, write_corpus


class TestGloveStandalone(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.corpus = datapath('toy_corpus.txt')

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def tmp(self, name):
        return os.path.join(self.tmpdir, name)

    def test_vocab(self):
        output = self.tmp('vocab.txt')
        self.assertEqual(main(['vocab', self.corpus, output, '--min-count', '3']), 0)
        vocab = Vocabulary.load_from_text(output)
        self.assertEqual(list(vocab.items()), [(b"system", 4), (b"graph", 3), (b"trees", 3), (b"user", 3)])

    def test_vocab_default_min_count(self):
        output = self.tmp('vocab.txt')
        main(['vocab', self.corpus, output])
        with open(output, 'rb') as fin:
            self.assertEqual(fin.read(), b"")

    def test_cooccur(self):
        output = self.tmp('cooccur.txt')
        status = main(['cooccur', self.corpus, self.tmp('unused_vocab.txt'), output, '--window-size', '2'])
        self.assertEqual(status, 0)
        matrix = CooccurrenceMatrix.load_from_text(output)
        self.assertGreater(len(matrix), 0)
        # every word of the corpus is kept, 12 distinct words
        self.assertEqual(matrix.max_index(), 11)

    def test_cooccur_symmetric(self):
        plain, mirrored = self.tmp('plain.txt'), self.tmp('mirrored.txt')
        main(['cooccur', self.corpus, 'vocab.txt', plain, '--window-size', '2'])
        main(['cooccur', self.corpus, 'vocab.txt', mirrored, '--window-size', '2', '--symmetric'])
        self.assertEqual(
            2 * len(CooccurrenceMatrix.load_from_text(plain)), len(CooccurrenceMatrix.load_from_text(mirrored)),
        )

    def test_train_exports_placeholders(self):
        cooccur, output = self.tmp('cooccur.txt'), self.tmp('vectors.txt')
        write_corpus(cooccur, ["0 1 1.000000", "1 0 1.000000", "3 1 0.500000"])
        status = main([
            'train', cooccur, 'vocab.txt', output, '--vector-size', '5', '--iterations', '2',
        ])
        self.assertEqual(status, 0)
        with open(output, 'rb') as fin:
            self.assertEqual(fin.readline(), b"4 5\n")
        words, vectors = load_word2vec_format(output)
        self.assertEqual(words, [b"word_0", b"word_1", b"word_2", b"word_3"])
        self.assertEqual(vectors.shape, (4, 5))

    def test_full(self):
        output = self.tmp('vectors.txt')
        status = main([
            'full', self.corpus, output, '--min-count', '2', '--window-size', '3',
            '--vector-size', '4', '--iterations', '3', '--learning-rate', '0.01',
        ])
        self.assertEqual(status, 0)
        words, vectors = load_word2vec_format(output)
        self.assertEqual(len(words), 12)
        self.assertEqual(words[0], b"system")
        self.assertEqual(vectors.shape, (12, 4))

    @log_capture()
    def test_full_is_always_symmetric(self, loglines):
        # 20 adjacent pairs in the toy corpus, each scanned from both ends and mirrored
        status = main([
            'full', self.corpus, self.tmp('vectors.txt'), '--min-count', '1', '--window-size', '1',
            '--iterations', '0',
        ])
        self.assertEqual(status, 0)
        self.assertTrue("co-occurrence matrix size: 80" in str(loglines))

    @log_capture()
    def test_full_tolerates_malformed_values(self, loglines):
        output = self.tmp('vectors.txt')
        status = main([
            'full', self.corpus, output, '--min-count', '3', '--vector-size', 'abc', '--iterations', '-2',
        ])
        self.assertEqual(status, 0)
        self.assertTrue("ignoring malformed value 'abc', using default 50" in str(loglines))
        words, vectors = load_word2vec_format(output)
        self.assertEqual(len(words), 4)
        self.assertEqual(vectors.shape, (4, 50))

    def test_strict_commands_reject_malformed_values(self):
        for argv in [
            ['vocab', self.corpus, self.tmp('vocab.txt'), '--min-count', 'abc'],
            ['cooccur', self.corpus, 'vocab.txt', self.tmp('cooccur.txt'), '--window-size', '-1'],
            ['train', 'cooccur.txt', 'vocab.txt', self.tmp('vectors.txt'), '--alpha', 'x'],
        ]:
            with self.assertRaises(SystemExit) as cm:
                main(argv)
            self.assertEqual(cm.exception.code, 2)

    def test_missing_arguments(self):
        with self.assertRaises(SystemExit) as cm:
            main(['vocab', self.corpus])
        self.assertEqual(cm.exception.code, 2)

    def test_no_command(self):
        self.assertEqual(main([]), 1)

    def test_missing_corpus(self):
        with self.assertRaises(IOError):
            main(['vocab', self.tmp('no_such_corpus.txt'), self.tmp('vocab.txt')])


if __name__ == '__main__':
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.DEBUG)
    unittest.main(module='glovekit.test.test_scripts')
