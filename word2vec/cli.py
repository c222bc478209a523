#!/usr/bin/env python3
"""
Word2Vec command line

Trains a skip-gram model on a corpus file (one sentence per line) and prints
the nearest neighbours of the query words.

Installed as ``word2vec-sg``; from a checkout run ``python -m word2vec.cli``.
"""

import os
import sys
import argparse
from typing import List, Optional

from .data_utils import create_sample_corpus, read_corpus
from .exceptions import Word2VecError
from .word2vec_trainer import Word2Vec


def print_section(title: str) -> None:
    """Print a formatted section header."""
    print("\n" + "=" * 80)
    print(f" {title} ".center(80, "="))
    print("=" * 80)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='word2vec-sg',
        description='Train skip-gram word embeddings and query nearest neighbours.'
    )
    parser.add_argument('--corpus', default='sample_corpus.txt',
                        help='corpus file, one sentence per line (created if missing)')
    parser.add_argument('--method', default='negative_sampling',
                        choices=['negative_sampling', 'hierarchical_softmax', 'neg', 'hs'])
    parser.add_argument('--dim', type=int, default=50, help='embedding dimension')
    parser.add_argument('--window', type=int, default=2, help='context window size (1-5)')
    parser.add_argument('--epochs', type=int, default=100)
    parser.add_argument('--min-count', type=int, default=1)
    parser.add_argument('--sample', type=float, default=1e-3, help='subsampling rate')
    parser.add_argument('--alpha', type=float, default=0.025, help='initial learning rate')
    parser.add_argument('--negative', type=int, default=1, help='negative samples per pair')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--top-k', type=int, default=5)
    parser.add_argument('--query', nargs='*', default=[], help='words to find neighbours for')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if not os.path.exists(args.corpus):
        print(f"Corpus file {args.corpus} not found. Creating sample corpus...")
        create_sample_corpus(args.corpus)

    sentences = read_corpus(args.corpus)

    print_section("TRAINING")
    print(f"✓ Loaded {len(sentences)} sentences from {args.corpus}")

    try:
        model = Word2Vec(
            training_method=args.method,
            window_size=args.window,
            embedding_dim=args.dim,
            sample=args.sample,
            learning_rate=args.alpha,
            num_epochs=args.epochs,
            min_count=args.min_count,
            num_negative_samples=args.negative,
            seed=args.seed,
        )
        model.fit(sentences)
    except Word2VecError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Trained {model.vocab_count()} word vectors of dimension {args.dim}")

    queries = args.query or model.index2word()[:3]

    print_section("MOST SIMILAR WORDS")
    for word in queries:
        word = word.lower()
        if model.word_vector(word) is None:
            print(f"{word}: not in vocabulary")
            continue

        similar = model.most_similar([word], top_k=args.top_k)
        neighbours = ', '.join(f"{w} ({score:.3f})" for w, score in similar.items())
        print(f"{word}: {neighbours}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
