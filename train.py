#!/usr/bin/env python3
"""
N-gram Language Model Training Script

Train an absolute-discounting n-gram model on a text file or the Brown
corpus, then score held-out text or generate random text from it.

Usage:
    python train.py --n 3 --file book.txt --generate 30 --seed 7
    python train.py --n 2 --categories news fiction --evaluate held_out.txt
    python train.py --n 4 --file book.txt --tokens character --generate 200
    python train.py --interactive  # Run interactive demo after training
"""

import argparse
import logging
import sys

from rich.logging import RichHandler

from ngramlm import TokenKind
from ngramlm.corpus import get_brown_categories
from ngramlm.training import (
    console, train_model_cli, evaluate_model_cli, generate_cli, interactive_demo
)


def main():
    parser = argparse.ArgumentParser(
        description="Train an absolute-discounting n-gram language model",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --n 3 --file book.txt --generate 30
  %(prog)s --n 2 --categories news fiction --evaluate held_out.txt
  %(prog)s --n 5 --file book.txt --tokens character --generate 200 --seed 3

Token kinds:
  word          - words and punctuation
  character     - single characters, whitespace collapsed
  pos           - part-of-speech tags
  function_word - function words, other words replaced by <content>
        """
    )

    parser.add_argument(
        '-n', '--n',
        type=int,
        default=3,
        help='Order of the n-gram model (default: 3 for trigram)'
    )

    parser.add_argument(
        '-f', '--file',
        type=str,
        default=None,
        help='Training document (default: the Brown corpus)'
    )

    parser.add_argument(
        '-c', '--categories',
        type=str,
        nargs='+',
        default=None,
        help='Brown corpus categories to use (default: all)'
    )

    parser.add_argument(
        '-t', '--tokens',
        type=str,
        default='word',
        choices=[kind.value for kind in TokenKind],
        help='Token unit to model (default: word)'
    )

    parser.add_argument(
        '--no-lowercase',
        action='store_true',
        help='Keep the original casing of the training text'
    )

    parser.add_argument(
        '-e', '--evaluate',
        type=str,
        default=None,
        help='Document to compute log-likelihood and perplexity for'
    )

    parser.add_argument(
        '-g', '--generate',
        type=int,
        default=0,
        help='Number of tokens to generate after training'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=1,
        help='Random seed for generation (default: 1)'
    )

    parser.add_argument(
        '-i', '--interactive',
        action='store_true',
        help='Run interactive demo after training'
    )

    parser.add_argument(
        '--list-categories',
        action='store_true',
        help='List available Brown corpus categories and exit'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )

    if args.list_categories:
        console.print("Available Brown corpus categories:")
        for cat in get_brown_categories():
            console.print(f"  - {cat}")
        return 0

    if args.n < 1:
        parser.error("--n must be at least 1")
    if args.generate < 0:
        parser.error("--generate must be non-negative")

    model = train_model_cli(
        n=args.n,
        kind=TokenKind(args.tokens),
        file_path=args.file,
        categories=args.categories,
        lowercase=not args.no_lowercase
    )

    if args.evaluate:
        evaluate_model_cli(model, args.evaluate)

    if args.generate:
        generate_cli(model, args.seed, args.generate)

    if args.interactive:
        interactive_demo(model)

    return 0


if __name__ == '__main__':
    sys.exit(main())
