#!/usr/bin/env python3
"""
markovnames - Markov Chain Name Generator
=========================================

Learns a character-level Markov chain from a list of known names and
samples new, plausible-sounding names that are not in the list.

Quick Start
-----------
    import random
    from markovnames import NameModel, load_model

    model = load_model("census-derived-all-first.txt", context_length=2)
    model.generate_unique(random.Random(42))

    # Or train directly
    model = NameModel(context_length=3)
    model.train(["Alice", "Alina", "Alma"])

Modules
-------
    markovnames.frequency - Weighted frequency tables
    markovnames.model     - Context-indexed name model
    markovnames.corpus    - Name list reading and training
    markovnames.config    - Run configuration backed by configs/app.yaml

CLI Usage
---------
    python -m markovnames generate -n 10
    python -m markovnames stats
"""

__version__ = "0.1.0"
__author__ = "markovnames"

from .frequency import FrequencyTable, EmptyTableError
from .model import (
    NameModel,
    ModelStats,
    NoSuchContextError,
    RetryLimitExceededError,
)
from .corpus import CorpusReadError, read_names, load_model
from .config import GeneratorConfig

__all__ = [
    '__version__',
    'FrequencyTable',
    'EmptyTableError',
    'NameModel',
    'ModelStats',
    'NoSuchContextError',
    'RetryLimitExceededError',
    'CorpusReadError',
    'read_names',
    'load_model',
    'GeneratorConfig',
]
