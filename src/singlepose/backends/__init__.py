from singlepose.backends.base import ModelOutput, PoseModel, sigmoid
from singlepose.backends.onnx import OnnxPoseModel
from singlepose.config import ModelConfig


def create_model(config: ModelConfig) -> OnnxPoseModel:
    """Build an (uninitialized) ONNX pose model from ``config``."""
    return OnnxPoseModel(
        model_path=config.resolve_model_path(),
        mode=config.mode,
        output_stride=config.output_stride,
        keypoint_names=config.keypoint_names,
        output_names=config.output_names,
    )


__all__ = ["ModelOutput", "PoseModel", "sigmoid", "OnnxPoseModel", "create_model"]
