#!/usr/bin/env python3
"""
Configuration Management
========================
Generator settings with fallback to configs/app.yaml.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from markovnames.settings import get_setting, resolve_path


@dataclass
class GeneratorConfig:
    """Settings for one training + generation run."""
    context_length: Optional[int] = None
    corpus_path: Optional[Path] = None
    count: Optional[int] = None
    max_attempts: Optional[int] = None     # 0 or None = retry forever
    seed: Optional[int] = None             # None = system entropy

    def __post_init__(self):
        if self.context_length is None:
            self.context_length = get_setting("model.context_length")
        if self.corpus_path is None:
            corpus = get_setting("corpus.path")
            self.corpus_path = resolve_path(corpus) if corpus else None
        else:
            self.corpus_path = Path(self.corpus_path)
        if self.count is None:
            self.count = get_setting("generation.count")
        if self.max_attempts is None:
            self.max_attempts = get_setting("generation.max_attempts")
        if self.seed is None:
            self.seed = get_setting("generation.seed")

        missing = [
            name for name, value in (
                ("model.context_length", self.context_length),
                ("corpus.path", self.corpus_path),
                ("generation.count", self.count),
            )
            if value is None
        ]
        if missing:
            raise ValueError(f"settings missing in app.yaml: {', '.join(missing)}")

        if self.context_length < 1:
            raise ValueError(f"context length must be at least 1, got {self.context_length}")
        if self.count < 1:
            raise ValueError(f"count must be at least 1, got {self.count}")
        if self.max_attempts is not None and self.max_attempts < 0:
            raise ValueError(f"max attempts cannot be negative, got {self.max_attempts}")

    @property
    def attempt_limit(self) -> Optional[int]:
        """max_attempts as understood by NameModel (None = unbounded)."""
        return self.max_attempts or None
