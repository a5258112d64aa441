#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Licensed under the GNU LGPL v2.1 - https://www.gnu.org/licenses/old-licenses/lgpl-2.1.en.html


"""
USAGE: %(prog)s COMMAND ARGS...

Trains GloVe word vectors on a text file with one sentence per line and space separated words.
Each stage can run on its own, persisting its result as plain text, or all stages can run at once.

Commands:
        vocab <corpus> <output> [--min-count N]
                Count words, keep those seen at least N times (default 5) and write
                `<word> <count>` lines, most frequent first
        cooccur <corpus> <vocab> <output> [--window-size N] [--symmetric]
                Write one `<i> <j> <weight>` line per co-occurrence within N words (default 15).
                The vocabulary is rebuilt from the corpus with min-count 1; <vocab> is not read
        train <cooccur> <vocab> <output> [--vector-size N] [--iterations N] [--x-max F] [--alpha F]
              [--learning-rate F]
                Train vectors on a co-occurrence file and write them in word2vec text format.
                The number of words is the largest id in <cooccur> plus one; <vocab> is not read
                and words are exported as `word_<id>` placeholders
        full <corpus> <output> [all options above]
                Run vocab, cooccur and train in memory. Co-occurrences are symmetric. Malformed
                option values fall back to their defaults instead of aborting

Example: python -m glovekit.scripts.glove_standalone full data.txt vectors.txt --min-count 1 --iterations 10
"""

import argparse
import logging
import os.path
import sys

from glovekit.corpora.vocabulary import DEFAULT_MIN_COUNT, build_vocabulary
from glovekit.models.cooccurrence import DEFAULT_WINDOW_SIZE, CooccurrenceMatrix
from glovekit.models.glove import (
    DEFAULT_ALPHA, DEFAULT_EPOCHS, DEFAULT_LEARNING_RATE, DEFAULT_VECTOR_SIZE, DEFAULT_X_MAX, GloVe,
)
from glovekit.models.utils_any2vec import save_word2vec_format
from glovekit.utils import FakeDict

logger = logging.getLogger(__name__)


def non_negative_int(value):
    """Parse a non-negative integer option value, rejecting anything else."""
    result = int(value)
    if result < 0:
        raise ValueError("negative value %r" % value)
    return result


def lenient(parse, default):
    """Wrap the option parser `parse` so that a malformed value yields `default` instead of an error."""
    def parse_or_default(value):
        try:
            return parse(value)
        except ValueError:
            logger.warning("ignoring malformed value %r, using default %r", value, default)
            return default
    parse_or_default.__name__ = parse.__name__
    return parse_or_default


def add_option(parser, name, parse, default, help, tolerant=False):
    if tolerant:
        parse = lenient(parse, default)
    parser.add_argument(name, type=parse, default=default, help="%s (default: %s)" % (help, default))


def add_vocab_options(parser, tolerant=False):
    add_option(parser, "--min-count", non_negative_int, DEFAULT_MIN_COUNT, "Minimum word count", tolerant)


def add_cooccur_options(parser, tolerant=False):
    add_option(parser, "--window-size", non_negative_int, DEFAULT_WINDOW_SIZE, "Context window size", tolerant)


def add_train_options(parser, tolerant=False):
    add_option(parser, "--vector-size", non_negative_int, DEFAULT_VECTOR_SIZE, "Vector dimension", tolerant)
    add_option(parser, "--iterations", non_negative_int, DEFAULT_EPOCHS, "Training iterations", tolerant)
    add_option(parser, "--x-max", float, DEFAULT_X_MAX, "X_max parameter", tolerant)
    add_option(parser, "--alpha", float, DEFAULT_ALPHA, "Alpha parameter", tolerant)
    add_option(parser, "--learning-rate", float, DEFAULT_LEARNING_RATE, "Learning rate", tolerant)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="glovekit", description=__doc__.split("\n\n")[1], formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    vocab = commands.add_parser("vocab", help="Build vocabulary from corpus")
    vocab.add_argument("corpus", help="Path to the training corpus")
    vocab.add_argument("output", help="Path to the vocabulary file to write")
    add_vocab_options(vocab)

    cooccur = commands.add_parser("cooccur", help="Build co-occurrence matrix")
    cooccur.add_argument("corpus", help="Path to the training corpus")
    cooccur.add_argument("vocab", help="Path to a vocabulary file (accepted, not read)")
    cooccur.add_argument("output", help="Path to the co-occurrence file to write")
    add_cooccur_options(cooccur)
    cooccur.add_argument("--symmetric", action="store_true", help="Also record every pair in reverse")

    train = commands.add_parser("train", help="Train GloVe model")
    train.add_argument("cooccur", help="Path to a co-occurrence file")
    train.add_argument("vocab", help="Path to a vocabulary file (accepted, not read)")
    train.add_argument("output", help="Path to the vectors file to write")
    add_train_options(train)

    full = commands.add_parser("full", help="Run full pipeline (vocab -> cooccur -> train)")
    full.add_argument("corpus", help="Path to the training corpus")
    full.add_argument("output", help="Path to the vectors file to write")
    add_vocab_options(full, tolerant=True)
    add_cooccur_options(full, tolerant=True)
    add_train_options(full, tolerant=True)
    full.add_argument("--symmetric", action="store_true", help="Accepted for compatibility; always on")

    return parser


def run_vocab(args):
    logger.info("building vocabulary from %s", args.corpus)
    vocab = build_vocabulary(args.corpus, min_count=args.min_count)
    logger.info("vocabulary size: %i", len(vocab))
    vocab.save_as_text(args.output)


def run_cooccur(args):
    logger.warning("vocabulary file %s is not read; rebuilding the vocabulary from %s", args.vocab, args.corpus)
    vocab = build_vocabulary(args.corpus, min_count=1)
    matrix = CooccurrenceMatrix(window_size=args.window_size, symmetric=args.symmetric)
    matrix.ingest_corpus(args.corpus, vocab)
    logger.info("co-occurrence matrix size: %i", len(matrix))
    matrix.save_as_text(args.output)


def run_train(args):
    logger.warning("vocabulary file %s is not read; exporting placeholder words", args.vocab)
    matrix = CooccurrenceMatrix.load_from_text(args.cooccur)
    vocab_size = matrix.max_index() + 1
    model = GloVe(
        vocab_size, vector_size=args.vector_size, x_max=args.x_max, alpha=args.alpha,
        learning_rate=args.learning_rate,
    )
    model.train(matrix, epochs=args.iterations)
    save_word2vec_format(args.output, model, FakeDict(vocab_size))


def run_full(args):
    logger.info("step 1: building vocabulary from %s", args.corpus)
    vocab = build_vocabulary(args.corpus, min_count=args.min_count)
    logger.info("vocabulary size: %i", len(vocab))

    logger.info("step 2: building co-occurrence matrix")
    matrix = CooccurrenceMatrix(window_size=args.window_size, symmetric=True)
    matrix.ingest_corpus(args.corpus, vocab)
    logger.info("co-occurrence matrix size: %i", len(matrix))

    logger.info("step 3: training GloVe model")
    model = GloVe(
        len(vocab), vector_size=args.vector_size, x_max=args.x_max, alpha=args.alpha,
        learning_rate=args.learning_rate,
    )
    model.train(matrix, epochs=args.iterations)

    logger.info("step 4: saving vectors")
    save_word2vec_format(args.output, model, vocab)


COMMANDS = {
    "vocab": run_vocab,
    "cooccur": run_cooccur,
    "train": run_train,
    "full": run_full,
}


def main(argv=None):
    """Parse `argv` (defaults to ``sys.argv[1:]``) and run the requested command.

    Returns
    -------
    int
        Process exit status.

    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_usage(sys.stderr)
        return 1
    logger.info("running %s %s", os.path.basename(sys.argv[0]), " ".join(sys.argv[1:] if argv is None else argv))
    COMMANDS[args.command](args)
    logger.info("finished running %s", args.command)
    return 0


if __name__ == "__main__":
    logging.basicConfig(format='%(asctime)s : %(levelname)s : %(message)s', level=logging.INFO)
    sys.exit(main())
