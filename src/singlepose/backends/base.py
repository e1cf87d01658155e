"""Backend protocol definitions for pose models."""

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

import numpy as np

from singlepose.types import DecodeMode


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Numerically stable logistic function."""
    x = np.asarray(x, dtype=np.float32)
    out = np.empty_like(x)
    pos = x >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    exp_x = np.exp(x[~pos])
    out[~pos] = exp_x / (1.0 + exp_x)
    return out


@dataclass
class ModelOutput:
    """Tensors returned by one forward pass, batch axis removed.

    Attributes:
        heatmap_scores: (gh, gw, k) scores, squashed to [0, 1] when the
            model emits logits.
        offsets: (gh, gw, 2k) sub-pixel offsets, offset models only.
        displacement_fwd: Forward displacement field, if the model has one.
        displacement_bwd: Backward displacement field, if the model has one.
    """

    heatmap_scores: np.ndarray
    offsets: Optional[np.ndarray] = None
    displacement_fwd: Optional[np.ndarray] = None
    displacement_bwd: Optional[np.ndarray] = None

    @property
    def mode(self) -> DecodeMode:
        if self.offsets is None:
            return DecodeMode.HEATMAP_ONLY
        return DecodeMode.HEATMAP_OFFSETS


class PoseModel(Protocol):
    """Protocol for pose network backends.

    The network is opaque: it takes a normalized (H, W, 3) float32 image and
    returns dense score (and optionally offset) volumes. The decoder branches
    on ``mode``, never on the concrete backend type.
    """

    mode: DecodeMode
    output_stride: int
    keypoint_names: Sequence[str]

    def initialize(self, device: str = "cpu") -> None:
        """Initialize the backend and load the model."""
        ...

    def predict(self, image: np.ndarray) -> ModelOutput:
        """Run the network on a normalized image."""
        ...

    def cleanup(self) -> None:
        """Release resources and unload the model."""
        ...


__all__ = ["sigmoid", "ModelOutput", "PoseModel"]
