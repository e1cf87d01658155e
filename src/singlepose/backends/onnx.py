"""ONNX Runtime backend for PoseNet-family models.

Models are NHWC graphs with a dynamic spatial input:
  - resnet50: [1, R, R, 3] -> displacement_fwd, displacement_bwd, offsets,
    heatmaps (logits, squashed here with a sigmoid)
  - cpm: [1, 192, 192, 3] -> heatmaps [1, 96, 96, 14] (raw, argmax only)

Input is the mean-offset RGB image from ``normalize_image``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

import numpy as np

from singlepose.backends.base import ModelOutput, sigmoid
from singlepose.decode import default_keypoint_names
from singlepose.errors import InvalidInputError
from singlepose.types import DecodeMode

logger = logging.getLogger(__name__)

# Output order of the converted PoseNet ResNet graph.
OFFSET_MODEL_OUTPUTS = ("displacement_fwd", "displacement_bwd", "offsets", "heatmaps")


class OnnxPoseModel:
    """PoseNet model run through ONNX Runtime.

    Args:
        model_path: ONNX file.
        mode: Whether the graph produces offsets besides heatmaps.
        output_stride: Input pixels per output grid cell.
        keypoint_names: Channel catalog; defaults to the mode's catalog.
        output_names: Maps ``heatmaps``/``offsets``/``displacement_*`` to
            graph output names. When empty, outputs are taken by position.
        apply_sigmoid: Squash heatmap logits. Defaults to True for offset
            models and False for heatmap-only models.

    Example:
        >>> model = OnnxPoseModel("resnet50.onnx", DecodeMode.HEATMAP_OFFSETS, 16)
        >>> model.initialize("cpu")
        >>> out = model.predict(normalize_image(letterboxed))
        >>> model.cleanup()
    """

    def __init__(
        self,
        model_path: Path,
        mode: DecodeMode,
        output_stride: int,
        keypoint_names: Optional[Sequence[str]] = None,
        output_names: Optional[Dict[str, str]] = None,
        apply_sigmoid: Optional[bool] = None,
    ):
        self._model_path = Path(model_path)
        self.mode = DecodeMode(mode)
        self.output_stride = output_stride
        self.keypoint_names = tuple(keypoint_names or default_keypoint_names(self.mode))
        self._output_names = dict(output_names or {})
        if apply_sigmoid is None:
            apply_sigmoid = self.mode == DecodeMode.HEATMAP_OFFSETS
        self._apply_sigmoid = apply_sigmoid
        self._session = None
        self._input_name: str = ""
        self._initialized = False

    def initialize(self, device: str = "cpu") -> None:
        if self._initialized:
            return

        import onnxruntime as ort

        if not self._model_path.exists():
            raise FileNotFoundError(
                f"Pose model not found at {self._model_path}. "
                "Set SINGLEPOSE_MODELS_DIR or pass an explicit model path."
            )

        providers = ["CUDAExecutionProvider", "CPUExecutionProvider"]
        if "cpu" in device.lower():
            providers = ["CPUExecutionProvider"]

        self._session = ort.InferenceSession(str(self._model_path), providers=providers)
        self._input_name = self._session.get_inputs()[0].name
        self._initialized = True
        logger.info(
            "Pose model initialized from %s (mode=%s, stride=%d)",
            self._model_path, self.mode.value, self.output_stride,
        )

    def predict(self, image: np.ndarray) -> ModelOutput:
        """Run the network on a normalized (H, W, 3) image."""
        if not self._initialized or self._session is None:
            raise RuntimeError("Backend not initialized. Call initialize() first.")
        if image.ndim != 3:
            raise InvalidInputError(f"Expected an (H, W, 3) image, got shape {image.shape}")

        batch = image.astype(np.float32, copy=False)[np.newaxis, ...]
        raw = self._session.run(None, {self._input_name: batch})
        names = [o.name for o in self._session.get_outputs()]
        outputs = self._map_outputs(raw, names)

        heatmaps = outputs["heatmaps"]
        heatmap_scores = sigmoid(heatmaps) if self._apply_sigmoid else heatmaps
        if self.mode == DecodeMode.HEATMAP_ONLY:
            return ModelOutput(heatmap_scores=heatmap_scores)
        return ModelOutput(
            heatmap_scores=heatmap_scores,
            offsets=outputs["offsets"],
            displacement_fwd=outputs.get("displacement_fwd"),
            displacement_bwd=outputs.get("displacement_bwd"),
        )

    def _map_outputs(self, raw: list, names: Sequence[str]) -> Dict[str, np.ndarray]:
        """Strip the batch axis and key outputs by role."""
        if self._output_names:
            by_name = {name: np.asarray(arr)[0] for name, arr in zip(names, raw)}
            missing = sorted(set(self._output_names.values()) - set(by_name))
            if missing:
                raise InvalidInputError(
                    f"Model has no outputs named {missing}. Available: {list(by_name)}"
                )
            mapped = {
                role: by_name[graph_name]
                for role, graph_name in self._output_names.items()
            }
            required = ["heatmaps"]
            if self.mode == DecodeMode.HEATMAP_OFFSETS:
                required.append("offsets")
            for role in required:
                if role not in mapped:
                    raise InvalidInputError(f"output_names has no entry for {role!r}")
            return mapped

        squeezed = [np.asarray(arr)[0] for arr in raw]
        if self.mode == DecodeMode.HEATMAP_ONLY:
            return {"heatmaps": squeezed[0]}
        if len(squeezed) != len(OFFSET_MODEL_OUTPUTS):
            raise InvalidInputError(
                f"Expected {len(OFFSET_MODEL_OUTPUTS)} outputs "
                f"{OFFSET_MODEL_OUTPUTS}, model returned {len(squeezed)}"
            )
        return dict(zip(OFFSET_MODEL_OUTPUTS, squeezed))

    def cleanup(self) -> None:
        self._session = None
        self._initialized = False
        logger.info("Pose model cleaned up")


__all__ = ["OFFSET_MODEL_OUTPUTS", "OnnxPoseModel"]
