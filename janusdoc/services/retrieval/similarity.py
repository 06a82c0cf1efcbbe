from __future__ import annotations

from typing import Sequence

import numpy as np

from janusdoc.core.errors import DimensionMismatch


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine of the angle between a and b, in [-1, 1].
    Zero-magnitude vector -> 0.0 (no similarity, not an error).
    Inputs are only read.
    """
    va = np.asarray(a, dtype=np.float64).reshape(-1)
    vb = np.asarray(b, dtype=np.float64).reshape(-1)

    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatch(va.shape[0], vb.shape[0])

    magnitude = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if magnitude == 0.0:
        return 0.0

    # rounding can push identical vectors just past 1
    return float(np.clip(np.dot(va, vb) / magnitude, -1.0, 1.0))
