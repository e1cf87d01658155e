"""Single-pose decoding: grid cells + stride (+ offsets) -> keypoints.

Positions come out in the resized (letterboxed) frame. Cell ``(row, col)``
maps to pixel ``(row * stride, col * stride)``; in offset mode the offset
volume adds a sub-pixel correction, channel ``c`` for y and ``c + k``
for x.

``Pose.score`` is the mean of the keypoint scores. Heatmap-only models have
no confidence estimate, so their keypoints all carry
``HEATMAP_ONLY_KEYPOINT_SCORE`` and the pose score is the same constant.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from singlepose.argmax import argmax2d
from singlepose.errors import InvalidInputError, UnsupportedModeError
from singlepose.types import (
    CPM_KEYPOINT_NAMES,
    HEATMAP_ONLY_KEYPOINT_SCORE,
    POSENET_KEYPOINT_NAMES,
    DecodeMode,
    GridCell,
    Keypoint,
    Pose,
    Vector2D,
)

logger = logging.getLogger(__name__)


def default_keypoint_names(mode: DecodeMode) -> Sequence[str]:
    """Catalog used when the caller does not supply one."""
    if mode == DecodeMode.HEATMAP_ONLY:
        return CPM_KEYPOINT_NAMES
    return POSENET_KEYPOINT_NAMES


def resolve_mode(
    mode: Optional[DecodeMode], offsets: Optional[np.ndarray]
) -> DecodeMode:
    """Infer the decode mode from ``offsets`` or check it against them."""
    if mode is None:
        return DecodeMode.HEATMAP_ONLY if offsets is None else DecodeMode.HEATMAP_OFFSETS
    mode = DecodeMode(mode)
    if mode == DecodeMode.HEATMAP_OFFSETS and offsets is None:
        raise UnsupportedModeError("Offset decoding requested without an offset volume")
    if mode == DecodeMode.HEATMAP_ONLY and offsets is not None:
        raise UnsupportedModeError("Heatmap-only decoding was given an offset volume")
    return mode


def get_offset_point(cell: GridCell, keypoint: int, offsets: np.ndarray) -> Vector2D:
    """Sub-pixel (y, x) correction for ``keypoint`` at ``cell``."""
    num_keypoints = offsets.shape[2] // 2
    return Vector2D(
        y=float(offsets[cell.row, cell.col, keypoint]),
        x=float(offsets[cell.row, cell.col, keypoint + num_keypoints]),
    )


def _check_shapes(
    scores: np.ndarray,
    offsets: Optional[np.ndarray],
    keypoint_names: Sequence[str],
    output_stride: int,
) -> None:
    if scores.ndim != 3:
        raise InvalidInputError(
            f"Score volume must be (height, width, keypoints), got shape {scores.shape}"
        )
    if output_stride <= 0:
        raise InvalidInputError(f"Output stride must be positive, got {output_stride}")
    height, width, depth = scores.shape
    if depth != len(keypoint_names):
        raise InvalidInputError(
            f"Score volume has {depth} channels but the keypoint catalog "
            f"has {len(keypoint_names)} entries"
        )
    if offsets is not None and offsets.shape != (height, width, 2 * depth):
        raise InvalidInputError(
            f"Offset volume shape {offsets.shape} does not match "
            f"expected {(height, width, 2 * depth)}"
        )


def decode_keypoints(
    cells: Sequence[GridCell],
    scores: np.ndarray,
    output_stride: int,
    offsets: Optional[np.ndarray] = None,
    mode: Optional[DecodeMode] = None,
    keypoint_names: Optional[Sequence[str]] = None,
) -> List[Keypoint]:
    """Turn per-channel argmax cells into keypoints in the resized frame.

    Args:
        cells: One grid cell per keypoint channel, from :func:`argmax2d`.
        scores: Score volume (gh, gw, k), already squashed to [0, 1].
        output_stride: Input pixels per grid cell.
        offsets: Offset volume (gh, gw, 2k) in offset mode, else None.
        mode: Decode mode; inferred from ``offsets`` when None.
        keypoint_names: Catalog in channel order; defaults to the mode's
            standard catalog.

    Returns:
        Keypoints in catalog order.
    """
    scores = np.asarray(scores)
    if offsets is not None:
        offsets = np.asarray(offsets)
    mode = resolve_mode(mode, offsets)
    names = tuple(keypoint_names) if keypoint_names is not None else default_keypoint_names(mode)
    _check_shapes(scores, offsets, names, output_stride)
    if len(cells) != len(names):
        raise InvalidInputError(
            f"Got {len(cells)} grid cells for {len(names)} keypoints"
        )

    height, width, _ = scores.shape
    keypoints = []
    for c, (name, cell) in enumerate(zip(names, cells)):
        cell = GridCell(int(cell[0]), int(cell[1]))
        if not (0 <= cell.row < height and 0 <= cell.col < width):
            raise InvalidInputError(f"Grid cell {cell} is outside the {height}x{width} grid")

        y = float(cell.row * output_stride)
        x = float(cell.col * output_stride)
        if mode == DecodeMode.HEATMAP_OFFSETS:
            correction = get_offset_point(cell, c, offsets)
            y += correction.y
            x += correction.x
            score = float(scores[cell.row, cell.col, c])
        else:
            score = HEATMAP_ONLY_KEYPOINT_SCORE

        keypoints.append(Keypoint(name=name, position=Vector2D(y=y, x=x), score=score))

    return keypoints


def decode_single_pose(
    scores: np.ndarray,
    output_stride: int,
    offsets: Optional[np.ndarray] = None,
    mode: Optional[DecodeMode] = None,
    keypoint_names: Optional[Sequence[str]] = None,
) -> Pose:
    """Decode the single most likely pose from a score volume.

    Example:
        >>> pose = decode_single_pose(heatmap_scores, 16, offsets=offsets)
        >>> pose.keypoints[0].name
        'nose'
    """
    scores = np.asarray(scores)
    if offsets is not None:
        offsets = np.asarray(offsets)
    mode = resolve_mode(mode, offsets)
    names = tuple(keypoint_names) if keypoint_names is not None else default_keypoint_names(mode)
    _check_shapes(scores, offsets, names, output_stride)

    cells = argmax2d(scores, num_keypoints=len(names))
    keypoints = decode_keypoints(
        cells, scores, output_stride, offsets=offsets, mode=mode, keypoint_names=names,
    )
    pose_score = float(np.mean([kp.score for kp in keypoints])) if keypoints else 0.0
    logger.debug(
        "Decoded %d keypoints (mode=%s, stride=%d, score=%.3f)",
        len(keypoints), mode.value, output_stride, pose_score,
    )
    return Pose(keypoints=tuple(keypoints), score=pose_score)


__all__ = [
    "default_keypoint_names",
    "resolve_mode",
    "get_offset_point",
    "decode_keypoints",
    "decode_single_pose",
]
