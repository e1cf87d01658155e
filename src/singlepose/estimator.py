"""Single-pose estimation: letterbox -> network -> decode -> remap."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from singlepose.backends.base import PoseModel
from singlepose.config import assert_valid_resolution
from singlepose.decode import decode_single_pose
from singlepose.errors import InvalidResolutionError, UnsupportedModeError
from singlepose.letterbox import PadPlacement, get_input_dimensions, pad_and_resize_to
from singlepose.preprocess import normalize_image
from singlepose.remap import remap_pose
from singlepose.types import CPM_INPUT_RESOLUTION, DecodeMode, InferenceConfig, Pose

logger = logging.getLogger(__name__)


class SinglePoseEstimator:
    """Estimate one pose per image with a PoseNet-style model.

    Args:
        model: Backend implementing :class:`PoseModel`.
        device: Device passed to ``model.initialize``.
        placement: Letterbox padding placement.

    Example:
        >>> with SinglePoseEstimator(create_model(ModelConfig.resnet50())) as est:
        ...     pose = est.estimate_single_pose(rgb, 257)
        >>> pose.keypoints[0].position
    """

    def __init__(
        self,
        model: PoseModel,
        device: str = "cpu",
        placement: PadPlacement = "bottom_right",
    ):
        self._model = model
        self._device = device
        self._placement = placement

    @property
    def model(self) -> PoseModel:
        return self._model

    def initialize(self) -> None:
        self._model.initialize(self._device)

    def cleanup(self) -> None:
        self._model.cleanup()

    def __enter__(self) -> SinglePoseEstimator:
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def estimate_single_pose(
        self,
        image: np.ndarray,
        input_resolution: Optional[int] = None,
        config: Optional[InferenceConfig] = None,
    ) -> Pose:
        """Estimate the pose in ``image``.

        Args:
            image: (H, W, 3) RGB image with 0-255 values.
            input_resolution: Square inference resolution. Heatmap-only
                models default to (and require) 192.
            config: Per-call options.

        Returns:
            Pose in the original image's pixel coordinates.
        """
        config = config or InferenceConfig()
        mode = DecodeMode(self._model.mode)
        output_stride = self._model.output_stride
        if input_resolution is None:
            if mode != DecodeMode.HEATMAP_ONLY:
                raise InvalidResolutionError("input_resolution is required for offset models")
            input_resolution = CPM_INPUT_RESOLUTION
        assert_valid_resolution(input_resolution, output_stride, mode)

        height, width = get_input_dimensions(image)
        resized, padding = pad_and_resize_to(image, input_resolution, self._placement)

        output = self._model.predict(normalize_image(resized))
        if output.mode != mode:
            raise UnsupportedModeError(
                f"Model declared mode {mode.value} but produced {output.mode.value} outputs"
            )

        pose = decode_single_pose(
            output.heatmap_scores,
            output_stride,
            offsets=output.offsets,
            mode=mode,
            keypoint_names=self._model.keypoint_names,
        )
        result = remap_pose(
            pose,
            (height, width),
            (input_resolution, input_resolution),
            padding,
            config.flip_horizontal,
        )
        logger.debug(
            "Estimated pose on %dx%d image at resolution %d (score=%.3f)",
            height, width, input_resolution, result.score,
        )
        return result


__all__ = ["SinglePoseEstimator"]
