"""singlepose - single-person keypoint decoding for PoseNet-style models.

Turns per-keypoint heatmaps (and optional sub-pixel offsets) into keypoint
coordinates in the original image, undoing the letterbox resize/pad applied
before inference.

Quick Start:
    >>> from singlepose import decode_single_pose, pad_and_resize_to, remap_pose
    >>> resized, padding = pad_and_resize_to(image, 257)
    >>> pose = decode_single_pose(heatmap_scores, 16, offsets=offsets)
    >>> pose = remap_pose(pose, image.shape[:2], (257, 257), padding)
"""

from singlepose.argmax import argmax2d
from singlepose.decode import decode_keypoints, decode_single_pose
from singlepose.errors import (
    InvalidInputError,
    InvalidResolutionError,
    PoseDecodeError,
    UnsupportedModeError,
)
from singlepose.letterbox import LetterboxPlan, compute_letterbox, pad_and_resize_to
from singlepose.preprocess import normalize_image
from singlepose.remap import flip_pose_horizontal, remap_pose, remap_poses
from singlepose.types import (
    CPM_KEYPOINT_NAMES,
    POSENET_KEYPOINT_NAMES,
    DecodeMode,
    GridCell,
    InferenceConfig,
    Keypoint,
    Padding,
    Pose,
    Vector2D,
)

__all__ = [
    "argmax2d",
    "decode_keypoints",
    "decode_single_pose",
    "PoseDecodeError",
    "InvalidInputError",
    "InvalidResolutionError",
    "UnsupportedModeError",
    "LetterboxPlan",
    "compute_letterbox",
    "pad_and_resize_to",
    "normalize_image",
    "flip_pose_horizontal",
    "remap_pose",
    "remap_poses",
    "CPM_KEYPOINT_NAMES",
    "POSENET_KEYPOINT_NAMES",
    "DecodeMode",
    "GridCell",
    "InferenceConfig",
    "Keypoint",
    "Padding",
    "Pose",
    "Vector2D",
]
