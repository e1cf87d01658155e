"""Aspect-preserving resize + pad to a square inference resolution.

The default placement keeps the resized content in the top-left corner and
pads bottom/right with zeros, so the inverse transform only has to undo the
scale. A centered placement is available too; :func:`remap_pose` subtracts
whatever top/left padding precedes the content, so both placements invert
exactly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Tuple

import cv2
import numpy as np

from singlepose.errors import InvalidInputError, InvalidResolutionError
from singlepose.types import SUPPORTED_RESOLUTIONS, Padding

logger = logging.getLogger(__name__)

PadPlacement = Literal["bottom_right", "center"]

# dtypes cv2.resize handles with bilinear interpolation
_RESIZABLE_DTYPES = (np.uint8, np.uint16, np.int16, np.float32, np.float64)


@dataclass(frozen=True)
class LetterboxPlan:
    """Resize + pad plan for one image.

    Attributes:
        scale: Uniform scale factor ``R / max(H, W)``.
        resized_size: (height, width) of the resized content.
        padding: Padding that brings the content up to ``R x R``.
        resolution: Side of the square canvas.
    """

    scale: float
    resized_size: Tuple[int, int]
    padding: Padding
    resolution: int


def get_input_dimensions(image: np.ndarray) -> Tuple[int, int]:
    """Return (height, width) of an (H, W) or (H, W, C) image."""
    if image.ndim not in (2, 3):
        raise InvalidInputError(
            f"Expected an (H, W) or (H, W, C) image, got shape {image.shape}"
        )
    return int(image.shape[0]), int(image.shape[1])


def assert_supported_resolution(resolution: int) -> None:
    if resolution not in SUPPORTED_RESOLUTIONS:
        raise InvalidResolutionError(
            f"Unsupported input resolution {resolution}. "
            f"Valid resolutions: {sorted(SUPPORTED_RESOLUTIONS)}"
        )


def compute_letterbox(
    height: int,
    width: int,
    resolution: int,
    placement: PadPlacement = "bottom_right",
) -> LetterboxPlan:
    """Compute the resize + pad plan for an ``height x width`` image.

    Args:
        height: Original image height in pixels.
        width: Original image width in pixels.
        resolution: Target square resolution, one of
            ``SUPPORTED_RESOLUTIONS``.
        placement: ``"bottom_right"`` puts all padding after the content;
            ``"center"`` splits it, the leading side getting the smaller half.

    Returns:
        The letterbox plan.
    """
    assert_supported_resolution(resolution)
    if height <= 0 or width <= 0:
        raise InvalidInputError(f"Image has zero area: {height}x{width}")

    scale = resolution / max(height, width)
    resized_h = min(resolution, max(1, int(round(height * scale))))
    resized_w = min(resolution, max(1, int(round(width * scale))))

    pad_h = resolution - resized_h
    pad_w = resolution - resized_w
    if placement == "bottom_right":
        padding = Padding(top=0.0, bottom=float(pad_h), left=0.0, right=float(pad_w))
    elif placement == "center":
        top = pad_h // 2
        left = pad_w // 2
        padding = Padding(
            top=float(top),
            bottom=float(pad_h - top),
            left=float(left),
            right=float(pad_w - left),
        )
    else:
        raise ValueError(f"Unknown padding placement: {placement!r}")

    return LetterboxPlan(
        scale=scale,
        resized_size=(resized_h, resized_w),
        padding=padding,
        resolution=resolution,
    )


def pad_and_resize_to(
    image: np.ndarray,
    resolution: int,
    placement: PadPlacement = "bottom_right",
) -> Tuple[np.ndarray, Padding]:
    """Letterbox ``image`` onto a zero-filled ``resolution x resolution`` canvas.

    Args:
        image: (H, W) or (H, W, C) array.
        resolution: Target square resolution.
        placement: Padding placement, see :func:`compute_letterbox`.

    Returns:
        Tuple of (canvas, padding). The canvas keeps the input's dtype
        unless cv2 cannot resize it, in which case it is float32.
    """
    height, width = get_input_dimensions(image)
    plan = compute_letterbox(height, width, resolution, placement)
    resized_h, resized_w = plan.resized_size

    if image.dtype not in _RESIZABLE_DTYPES:
        image = image.astype(np.float32)

    if (resized_h, resized_w) == (height, width):
        resized = image
    else:
        resized = cv2.resize(
            image, (resized_w, resized_h), interpolation=cv2.INTER_LINEAR
        )
        # cv2 drops a trailing singleton channel axis
        if resized.ndim < image.ndim:
            resized = resized[..., np.newaxis]

    canvas = np.zeros((resolution, resolution) + image.shape[2:], dtype=image.dtype)
    top = int(plan.padding.top)
    left = int(plan.padding.left)
    canvas[top:top + resized_h, left:left + resized_w] = resized

    logger.debug(
        "Letterboxed %dx%d -> %dx%d (scale=%.4f, padding=%s)",
        height, width, resized_h, resized_w, plan.scale, plan.padding,
    )
    return canvas, plan.padding


__all__ = [
    "PadPlacement",
    "LetterboxPlan",
    "get_input_dimensions",
    "assert_supported_resolution",
    "compute_letterbox",
    "pad_and_resize_to",
]
