"""Boundary adapters injected by the embedding host"""

from .serialization import NumberNode, ValueSerializer
from .random import RandomSource

__all__ = [
    "NumberNode",
    "ValueSerializer",
    "RandomSource",
]
