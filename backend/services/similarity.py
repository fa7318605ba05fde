"""Cosine similarity on embedding vectors, scaled to a 0-100 score."""

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine


def cosine_score(vec_a, vec_b) -> float:
    """Cosine similarity of two vectors mapped to [0, 100].

    Negative similarity clamps to 0. A zero vector on either side scores 0.
    """
    a = np.asarray(vec_a, dtype=np.float64).reshape(1, -1)
    b = np.asarray(vec_b, dtype=np.float64).reshape(1, -1)
    if a.shape != b.shape:
        raise ValueError(f"Vector dimensions differ: {a.shape[1]} vs {b.shape[1]}")
    if not np.any(a) or not np.any(b):
        return 0.0

    raw = float(sklearn_cosine(a, b)[0][0])
    return float(np.clip(raw * 100, 0.0, 100.0))
