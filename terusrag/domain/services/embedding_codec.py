"""Embedding (de)serialization for persisted chunks.

Vectors are stored as JSON arrays; ``repr``-exact float formatting makes the
round trip lossless. Decoding never raises: a payload that is missing or cannot
be read as a non-empty list of numbers decodes to ``None`` so the ranker can treat
that chunk's similarity as 0.
"""

from __future__ import annotations

import json
import math
from collections.abc import Sequence

from terusrag.domain.types import Vector


def encode_embedding(vector: Sequence[float]) -> str:
    return json.dumps([float(x) for x in vector])


def decode_embedding(raw: str | bytes | None) -> Vector | None:
    if raw is None or raw == "" or raw == b"":
        return None
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, list) or not data:
        return None
    values: list[float] = []
    for item in data:
        # bool is an int subclass but never a valid component
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            return None
        if not math.isfinite(item):
            return None
        values.append(float(item))
    return tuple(values)
