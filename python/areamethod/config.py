# AreaMethod SDK - Configuration
# Copyright (c) 2024 AreaMethod Contributors. All rights reserved.

"""Configuration settings for the simplifier."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """
    Configuration for simplification requests.

    Attributes:
        max_iterations: Maximum number of rewrites that change the expression
            before giving up. The step that finds the fixpoint is not counted.
            None lets the fixpoint loop run until it converges.
        trace: Log every intermediate expression at DEBUG level.
    """
    max_iterations: Optional[int] = None
    trace: bool = False

    def __post_init__(self):
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")

    @classmethod
    def unbounded(cls) -> Config:
        """Run to the fixpoint whatever it takes (default)."""
        return cls()

    @classmethod
    def bounded(cls, max_iterations: int) -> Config:
        """Give up once ``max_iterations`` rewrites have not reached a fixpoint."""
        return cls(max_iterations=max_iterations)

    def __repr__(self) -> str:
        return f"Config(max_iterations={self.max_iterations}, trace={self.trace})"
