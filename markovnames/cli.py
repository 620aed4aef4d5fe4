#!/usr/bin/env python3
"""
markovnames CLI
===============
Command-line interface for training on a name list and generating names.

Usage:
    markovnames                          # one new name from the bundled corpus
    markovnames generate -n 10 -k 3
    markovnames generate --corpus census-derived-all-first.txt --seed 42
    markovnames stats --top 15
"""

import argparse
import logging
import random
import sys

from markovnames import __version__
from markovnames.config import GeneratorConfig
from markovnames.corpus import CorpusReadError, load_model
from markovnames.frequency import EmptyTableError
from markovnames.model import NoSuchContextError, RetryLimitExceededError

logger = logging.getLogger(__name__)

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def result(self, *args, **kwargs):
        """Always printed: the output the command exists for."""
        print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)


def build_config(args) -> GeneratorConfig:
    return GeneratorConfig(
        context_length=getattr(args, 'context_length', None),
        corpus_path=getattr(args, 'corpus', None),
        count=getattr(args, 'count', None),
        max_attempts=getattr(args, 'max_attempts', None),
        seed=getattr(args, 'seed', None),
    )


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names not present in the corpus."""
    cfg = build_config(args)
    model = load_model(cfg.corpus_path, cfg.context_length)
    rng = random.Random(cfg.seed)

    for name in model.generate_many(cfg.count, rng, max_attempts=cfg.attempt_limit):
        out.result(name)

    return 0


def cmd_stats(args, out: Output):
    """Show statistics for the trained model."""
    from markovnames.settings import get_setting
    from markovnames.ui import render_stats

    top = args.top if args.top is not None else get_setting("stats.top", 10)
    if top < 1:
        raise ValueError(f"top must be at least 1, got {top}")

    cfg = build_config(args)
    model = load_model(cfg.corpus_path, cfg.context_length)

    if out.quiet:
        return 0

    render_stats(model, cfg.corpus_path, top=top)
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    # Options shared by every command that trains a model
    model_opts = argparse.ArgumentParser(add_help=False)
    model_opts.add_argument('--corpus', '-c', help='Name list, one name per line (default: bundled list)')
    model_opts.add_argument('--context-length', '-k', type=int,
                            help='Characters of context per prediction (default: 2)')

    parser = argparse.ArgumentParser(
        prog='markovnames',
        description='markovnames - Markov chain name generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s generate -n 10 -k 3
  %(prog)s generate --corpus names.txt --seed 42
  %(prog)s stats --top 15
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], parents=[model_opts],
                              help='Generate new names (default command)')
    p.add_argument('-n', '--count', type=int, help='Number of names (default: 1)')
    p.add_argument('--seed', type=int, help='Random seed for reproducible output')
    p.add_argument('--max-attempts', type=int,
                   help='Give up after this many rejected samples per name (default: never)')

    # --- stats ---
    p = subparsers.add_parser('stats', parents=[model_opts], help='Show model statistics')
    p.add_argument('--top', '-t', type=int, help='Rows in the start distribution (default: 10)')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    # Handle aliases; bare invocation generates one name
    cmd_map = {'gen': 'generate', 'g': 'generate'}
    command = cmd_map.get(args.command, args.command) or 'generate'

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'stats': cmd_stats,
    }

    handler = commands.get(command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (CorpusReadError, RetryLimitExceededError, ValueError) as e:
        out.error(str(e))
        return 1
    except (NoSuchContextError, EmptyTableError) as e:
        # Internal consistency failures
        logger.debug("Model failure", exc_info=True)
        out.error(f"model is inconsistent: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
