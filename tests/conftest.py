"""Shared fixtures for singlepose tests.

All score/offset volumes are synthetic, NO model files needed.
"""

import numpy as np
import pytest

from singlepose.backends.base import ModelOutput
from singlepose.types import (
    CPM_KEYPOINT_NAMES,
    POSENET_KEYPOINT_NAMES,
    DecodeMode,
)


@pytest.fixture
def make_heatmap():
    """Factory: (gh, gw, k) volume with one hot cell per keypoint.

    ``peaks`` maps keypoint index -> (row, col, value). Everything else is
    a small deterministic background below 0.1.
    """
    def _make(grid=(17, 17), num_keypoints=17, peaks=None, seed=0):
        rng = np.random.default_rng(seed)
        scores = rng.uniform(0.0, 0.1, size=(*grid, num_keypoints)).astype(np.float32)
        for k, (row, col, value) in (peaks or {}).items():
            scores[row, col, k] = value
        return scores
    return _make


@pytest.fixture
def make_offsets():
    """Factory: (gh, gw, 2k) offset volume, zero except where given.

    ``corrections`` maps keypoint index -> (row, col, dy, dx).
    """
    def _make(grid=(17, 17), num_keypoints=17, corrections=None):
        offsets = np.zeros((*grid, 2 * num_keypoints), dtype=np.float32)
        for k, (row, col, dy, dx) in (corrections or {}).items():
            offsets[row, col, k] = dy
            offsets[row, col, k + num_keypoints] = dx
        return offsets
    return _make


class MockPoseModel:
    """In-memory PoseModel returning canned outputs."""

    def __init__(self, output, mode, output_stride, keypoint_names):
        self._output = output
        self.mode = mode
        self.output_stride = output_stride
        self.keypoint_names = keypoint_names
        self.initialized = False
        self.device = None
        self.last_input = None

    def initialize(self, device="cpu"):
        self.initialized = True
        self.device = device

    def predict(self, image):
        self.last_input = image
        return self._output

    def cleanup(self):
        self.initialized = False


@pytest.fixture
def offset_model(make_heatmap, make_offsets):
    """ResNet-style model at resolution 257 / stride 16 (17x17 grid)."""
    scores = make_heatmap(peaks={0: (3, 5, 0.9), 16: (10, 2, 0.6)})
    offsets = make_offsets(corrections={0: (3, 5, 1.5, -2.0)})
    return MockPoseModel(
        ModelOutput(heatmap_scores=scores, offsets=offsets),
        DecodeMode.HEATMAP_OFFSETS,
        16,
        POSENET_KEYPOINT_NAMES,
    )


@pytest.fixture
def heatmap_only_model(make_heatmap):
    """CPM-style model at 192 / stride 2 (96x96 grid, 14 keypoints)."""
    scores = make_heatmap(grid=(96, 96), num_keypoints=14, peaks={0: (10, 20, 5.0)})
    return MockPoseModel(
        ModelOutput(heatmap_scores=scores),
        DecodeMode.HEATMAP_ONLY,
        2,
        CPM_KEYPOINT_NAMES,
    )


@pytest.fixture
def make_model():
    """Factory fixture building a MockPoseModel from canned outputs."""
    def _make(output, mode, output_stride, keypoint_names):
        return MockPoseModel(output, mode, output_stride, keypoint_names)
    return _make
