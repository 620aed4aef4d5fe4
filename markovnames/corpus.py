#!/usr/bin/env python3
"""
Name Corpus Loading
===================
Reads a name list (one name per line) and trains a model from it.

Only the first whitespace-delimited token of each line is used, so census
style files with trailing frequency columns work unchanged:

    JAMES          3.318  3.318      1
    JOHN           3.271  6.589      2
"""

import logging
from pathlib import Path
from typing import Iterator, Union

from .model import NameModel

logger = logging.getLogger(__name__)


class CorpusReadError(OSError):
    """Raised when the name list cannot be read."""


def read_names(path: Union[str, Path]) -> Iterator[str]:
    """
    Yield the names in a corpus file, in file order.

    Raises:
        CorpusReadError: If the file cannot be opened or decoded
    """
    path = Path(path)
    try:
        with path.open(encoding='utf-8') as handle:
            for line_no, line in enumerate(handle, 1):
                tokens = line.split()
                if not tokens:
                    logger.debug("%s:%d: skipping blank line", path, line_no)
                    continue
                yield tokens[0]
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusReadError(f"could not read name list: {path}") from e


def load_model(path: Union[str, Path], context_length: int = 2) -> NameModel:
    """Train a fresh model on the names in path."""
    model = NameModel(context_length=context_length)

    read = 0
    learned = 0
    for name in read_names(path):
        read += 1
        if model.observe(name):
            learned += 1

    if not learned:
        raise CorpusReadError(f"could not read name list: {path} contains no names")

    logger.info(
        "Trained on %s: %d names read, %d unique, %d contexts",
        path, read, learned, len(model.tables),
    )
    return model
