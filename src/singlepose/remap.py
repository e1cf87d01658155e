"""Map decoded poses from the letterboxed frame back to the original image."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from singlepose.errors import InvalidInputError
from singlepose.types import Keypoint, Padding, Pose, Vector2D

logger = logging.getLogger(__name__)


def flip_pose_horizontal(pose: Pose, image_width: float) -> Pose:
    """Mirror every keypoint about the image width: ``x <- W - 1 - x``."""
    keypoints = tuple(
        Keypoint(
            name=kp.name,
            position=Vector2D(y=kp.position.y, x=image_width - 1 - kp.position.x),
            score=kp.score,
        )
        for kp in pose.keypoints
    )
    return Pose(keypoints=keypoints, score=pose.score)


def remap_pose(
    pose: Pose,
    original_size: Tuple[int, int],
    input_resolution: Tuple[int, int],
    padding: Padding,
    flip_horizontal: bool = False,
) -> Pose:
    """Undo the letterbox transform for one pose.

    Subtracts the top/left padding, divides by the letterbox scale
    ``s = min(Rh / H, Rw / W)`` (``R / max(H, W)`` for a square input) and,
    if requested, mirrors x about the original width.

    Args:
        pose: Pose in resized-frame pixels.
        original_size: (H, W) of the original image.
        input_resolution: (Rh, Rw) the image was letterboxed to.
        padding: Padding returned by :func:`pad_and_resize_to`.
        flip_horizontal: Mirror the result horizontally.

    Returns:
        A new pose in original-image pixels; scores unchanged.
    """
    height, width = original_size
    res_h, res_w = input_resolution
    if height <= 0 or width <= 0:
        raise InvalidInputError(f"Original size must be positive, got {original_size}")
    if res_h <= 0 or res_w <= 0:
        raise InvalidInputError(
            f"Input resolution must be positive, got {input_resolution}"
        )

    scale = min(res_h / height, res_w / width)
    keypoints = tuple(
        Keypoint(
            name=kp.name,
            position=Vector2D(
                y=(kp.position.y - padding.top) / scale,
                x=(kp.position.x - padding.left) / scale,
            ),
            score=kp.score,
        )
        for kp in pose.keypoints
    )
    remapped = Pose(keypoints=keypoints, score=pose.score)

    if flip_horizontal:
        remapped = flip_pose_horizontal(remapped, width)
    return remapped


def remap_poses(
    poses: Sequence[Pose],
    original_size: Tuple[int, int],
    input_resolution: Tuple[int, int],
    padding: Padding,
    flip_horizontal: bool = False,
) -> List[Pose]:
    """:func:`remap_pose` over several poses sharing one letterbox."""
    return [
        remap_pose(pose, original_size, input_resolution, padding, flip_horizontal)
        for pose in poses
    ]


__all__ = ["flip_pose_horizontal", "remap_pose", "remap_poses"]
