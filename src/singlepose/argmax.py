"""Per-channel argmax over a dense score volume."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from singlepose.errors import InvalidInputError
from singlepose.types import GridCell


def argmax2d(
    scores: np.ndarray, num_keypoints: Optional[int] = None
) -> List[GridCell]:
    """Find the highest-scoring grid cell of every keypoint channel.

    The (gh, gw) plane is scanned in row-major order and the first maximum
    wins, so ties always resolve to the smallest (row, col).

    Args:
        scores: Score volume of shape (gh, gw, k).
        num_keypoints: Expected k, usually the catalog length.

    Returns:
        k grid cells, index-aligned with the channels.
    """
    scores = np.asarray(scores)
    if scores.ndim != 3:
        raise InvalidInputError(
            f"Score volume must be (height, width, keypoints), got shape {scores.shape}"
        )
    height, width, depth = scores.shape
    if height == 0 or width == 0:
        raise InvalidInputError(f"Score volume has an empty grid: {scores.shape}")
    if num_keypoints is not None and depth != num_keypoints:
        raise InvalidInputError(
            f"Score volume has {depth} channels, expected {num_keypoints}"
        )

    flat_idx = np.argmax(scores.reshape(height * width, depth), axis=0)
    rows, cols = np.divmod(flat_idx, width)
    return [GridCell(int(r), int(c)) for r, c in zip(rows, cols)]


__all__ = ["argmax2d"]
