"""Pure similarity functions.

Cosine similarity is the semantic half of the hybrid score.
"""

from collections.abc import Sequence
from math import sqrt

from .types import Score


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> Score:
    """Compute cosine similarity between two vectors.

    Args:
        a: First vector
        b: Second vector, same dimensionality as ``a``

    Returns:
        ``dot(a, b) / (|a| * |b|)``, or exactly 0.0 when either norm is zero

    Raises:
        ValueError: If the vectors have different lengths
    """
    if len(a) != len(b):
        raise ValueError(f"vector dimensions differ: {len(a)} != {len(b)}")
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    norm_a = sqrt(norm_a)
    norm_b = sqrt(norm_b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)
