"""Pose decoding domain types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Tuple


class DecodeMode(str, Enum):
    """Which tensors the model produces, and so how keypoints are decoded."""

    HEATMAP_ONLY = "heatmap_only"
    HEATMAP_OFFSETS = "heatmap_offsets"


VALID_OUTPUT_STRIDES: Tuple[int, ...] = (32, 16, 8, 2)

VALID_INPUT_RESOLUTIONS: Tuple[int, ...] = (
    161, 193, 257, 289, 321, 353, 385, 417, 449, 481, 513, 801, 1217,
)

# Heatmap-only (CPM) models run at a fixed 192x192 input with a 96x96 grid.
CPM_INPUT_RESOLUTION = 192
CPM_OUTPUT_STRIDE = 2

SUPPORTED_RESOLUTIONS = frozenset(VALID_INPUT_RESOLUTIONS) | {CPM_INPUT_RESOLUTION}

# Added to raw 0-255 RGB pixel values before inference.
IMAGE_NET_MEAN: Tuple[float, float, float] = (-123.15, -115.9, -103.06)

# Heatmap-only models carry no confidence estimate; every keypoint gets this.
HEATMAP_ONLY_KEYPOINT_SCORE = 1.0


class CPMKeypointIndex:
    """Channel indices of the 14-keypoint heatmap-only (CPM) catalog.

    Example:
        >>> pose.keypoints[CPMKeypointIndex.NECK].position
    """

    NOSE = 0
    NECK = 1
    LEFT_SHOULDER = 2
    LEFT_ELBOW = 3
    LEFT_WRIST = 4
    RIGHT_SHOULDER = 5
    RIGHT_ELBOW = 6
    RIGHT_WRIST = 7
    LEFT_HIP = 8
    LEFT_KNEE = 9
    LEFT_ANKLE = 10
    RIGHT_HIP = 11
    RIGHT_KNEE = 12
    RIGHT_ANKLE = 13


CPM_KEYPOINT_NAMES: Tuple[str, ...] = (
    "nose",
    "neck",
    "left_shoulder",
    "left_elbow",
    "left_wrist",
    "right_shoulder",
    "right_elbow",
    "right_wrist",
    "left_hip",
    "left_knee",
    "left_ankle",
    "right_hip",
    "right_knee",
    "right_ankle",
)


class PoseNetKeypointIndex:
    """Channel indices of the 17-keypoint PoseNet catalog (COCO parts)."""

    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16


POSENET_KEYPOINT_NAMES: Tuple[str, ...] = (
    "nose",
    "left_eye",
    "right_eye",
    "left_ear",
    "right_ear",
    "left_shoulder",
    "right_shoulder",
    "left_elbow",
    "right_elbow",
    "left_wrist",
    "right_wrist",
    "left_hip",
    "right_hip",
    "left_knee",
    "right_knee",
    "left_ankle",
    "right_ankle",
)


class GridCell(NamedTuple):
    """A (row, col) cell of a score or offset volume."""

    row: int
    col: int


@dataclass(frozen=True)
class Vector2D:
    y: float
    x: float


@dataclass(frozen=True)
class Keypoint:
    """A single decoded keypoint.

    Attributes:
        name: Catalog name of the body part.
        position: Pixel position in the frame current at this pipeline
            stage (resized frame after decoding, original frame after
            remapping).
        score: Confidence in [0, 1].
    """

    name: str
    position: Vector2D
    score: float

    def to_dict(self) -> dict:
        return {
            "part": self.name,
            "position": {"y": self.position.y, "x": self.position.x},
            "score": self.score,
        }


@dataclass(frozen=True)
class Pose:
    """One person's keypoints, in catalog order, plus an aggregate score."""

    keypoints: Tuple[Keypoint, ...]
    score: float

    def to_dict(self) -> dict:
        return {
            "keypoints": [kp.to_dict() for kp in self.keypoints],
            "score": self.score,
        }


@dataclass(frozen=True)
class Padding:
    """Pixels added around the resized content, in resized-frame units."""

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


@dataclass(frozen=True)
class InferenceConfig:
    """Per-call options.

    Attributes:
        flip_horizontal: Mirror the output poses about the original image
            width. Set this for sources that are already mirrored, such as
            most webcams.
    """

    flip_horizontal: bool = False


__all__ = [
    "DecodeMode",
    "VALID_OUTPUT_STRIDES",
    "VALID_INPUT_RESOLUTIONS",
    "CPM_INPUT_RESOLUTION",
    "CPM_OUTPUT_STRIDE",
    "SUPPORTED_RESOLUTIONS",
    "IMAGE_NET_MEAN",
    "HEATMAP_ONLY_KEYPOINT_SCORE",
    "CPMKeypointIndex",
    "CPM_KEYPOINT_NAMES",
    "PoseNetKeypointIndex",
    "POSENET_KEYPOINT_NAMES",
    "GridCell",
    "Vector2D",
    "Keypoint",
    "Pose",
    "Padding",
    "InferenceConfig",
]
