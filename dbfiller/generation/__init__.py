"""
Value generation package: random sources and per-column literal generation.
"""

from dbfiller.generation.random_source import RandomSource, create_random_source
from dbfiller.generation.values import ValueGenerator

__all__ = ["RandomSource", "create_random_source", "ValueGenerator"]
