"""Model configuration.

Example:
    >>> from singlepose.config import ModelConfig
    >>> config = ModelConfig.resnet50(output_stride=16, input_resolution=257)
    >>> config.mode
    <DecodeMode.HEATMAP_OFFSETS: 'heatmap_offsets'>
    >>> cpm = ModelConfig.cpm(model_path="models/cpm.onnx")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from singlepose.errors import InvalidResolutionError
from singlepose.types import (
    CPM_INPUT_RESOLUTION,
    CPM_KEYPOINT_NAMES,
    CPM_OUTPUT_STRIDE,
    POSENET_KEYPOINT_NAMES,
    VALID_INPUT_RESOLUTIONS,
    VALID_OUTPUT_STRIDES,
    DecodeMode,
)

ARCHITECTURES = ("resnet50", "cpm")


def assert_valid_output_stride(output_stride: int) -> None:
    if output_stride not in VALID_OUTPUT_STRIDES:
        raise InvalidResolutionError(
            f"Invalid output stride {output_stride}. "
            f"Valid strides: {list(VALID_OUTPUT_STRIDES)}"
        )


def assert_valid_resolution(
    resolution: int, output_stride: int, mode: DecodeMode = DecodeMode.HEATMAP_OFFSETS
) -> None:
    """Check that ``resolution`` and ``output_stride`` fit the decode mode.

    Offset models need a resolution from ``VALID_INPUT_RESOLUTIONS`` with
    ``(resolution - 1) % output_stride == 0``. Heatmap-only models only run
    at 192 with stride 2.
    """
    assert_valid_output_stride(output_stride)
    if mode == DecodeMode.HEATMAP_ONLY:
        if resolution != CPM_INPUT_RESOLUTION or output_stride != CPM_OUTPUT_STRIDE:
            raise InvalidResolutionError(
                f"Heatmap-only models run at {CPM_INPUT_RESOLUTION}x"
                f"{CPM_INPUT_RESOLUTION} with stride {CPM_OUTPUT_STRIDE}, "
                f"got {resolution} / stride {output_stride}"
            )
        return

    if resolution not in VALID_INPUT_RESOLUTIONS:
        raise InvalidResolutionError(
            f"Invalid input resolution {resolution}. "
            f"Valid resolutions: {list(VALID_INPUT_RESOLUTIONS)}"
        )
    if (resolution - 1) % output_stride != 0:
        raise InvalidResolutionError(
            f"Input resolution {resolution} is not compatible with output "
            f"stride {output_stride}: (resolution - 1) must be divisible by the stride"
        )


@dataclass
class ModelConfig:
    """Configuration of one pose model.

    Attributes:
        architecture: ``"resnet50"`` (heatmap + offsets) or ``"cpm"``
            (heatmap only).
        output_stride: Input pixels per output grid cell.
        input_resolution: Square letterbox resolution.
        model_path: ONNX file. Defaults to
            ``{models_dir}/posenet/{architecture}.onnx``.
        output_names: Optional mapping of ``"heatmaps"``, ``"offsets"``,
            ``"displacement_fwd"``, ``"displacement_bwd"`` to ONNX output
            names. Outputs are matched by position when empty.
        device: ``"cpu"`` or ``"cuda:N"``.
    """

    architecture: str = "resnet50"
    output_stride: int = 16
    input_resolution: Optional[int] = None
    model_path: Optional[Path] = None
    output_names: Dict[str, str] = field(default_factory=dict)
    device: str = "cpu"

    def __post_init__(self) -> None:
        if self.architecture not in ARCHITECTURES:
            raise ValueError(
                f"Unknown architecture {self.architecture!r}. "
                f"Valid architectures: {list(ARCHITECTURES)}"
            )
        if self.input_resolution is None:
            self.input_resolution = (
                CPM_INPUT_RESOLUTION if self.mode == DecodeMode.HEATMAP_ONLY else 257
            )
        if self.model_path is not None:
            self.model_path = Path(self.model_path)
        assert_valid_resolution(self.input_resolution, self.output_stride, self.mode)

    @property
    def mode(self) -> DecodeMode:
        if self.architecture == "cpm":
            return DecodeMode.HEATMAP_ONLY
        return DecodeMode.HEATMAP_OFFSETS

    @property
    def keypoint_names(self) -> Tuple[str, ...]:
        if self.mode == DecodeMode.HEATMAP_ONLY:
            return CPM_KEYPOINT_NAMES
        return POSENET_KEYPOINT_NAMES

    def resolve_model_path(self) -> Path:
        if self.model_path is not None:
            return self.model_path
        from singlepose.paths import get_models_dir

        return get_models_dir() / "posenet" / f"{self.architecture}.onnx"

    @classmethod
    def resnet50(cls, output_stride: int = 16, input_resolution: int = 257, **kwargs) -> ModelConfig:
        return cls(
            architecture="resnet50",
            output_stride=output_stride,
            input_resolution=input_resolution,
            **kwargs,
        )

    @classmethod
    def cpm(cls, **kwargs) -> ModelConfig:
        return cls(
            architecture="cpm",
            output_stride=CPM_OUTPUT_STRIDE,
            input_resolution=CPM_INPUT_RESOLUTION,
            **kwargs,
        )


__all__ = [
    "ARCHITECTURES",
    "assert_valid_output_stride",
    "assert_valid_resolution",
    "ModelConfig",
]
