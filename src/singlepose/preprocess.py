"""Input normalization for PoseNet-family models."""

import numpy as np

from singlepose.errors import InvalidInputError
from singlepose.types import IMAGE_NET_MEAN

_MEAN = np.array(IMAGE_NET_MEAN, dtype=np.float32)


def to_float_if_int(image: np.ndarray) -> np.ndarray:
    """Cast integer pixel arrays to float32; float arrays pass through."""
    image = np.asarray(image)
    if np.issubdtype(image.dtype, np.integer) or image.dtype == np.bool_:
        return image.astype(np.float32)
    return image


def normalize_image(image: np.ndarray) -> np.ndarray:
    """Add the per-channel mean offset to raw 0-255 RGB values.

    Args:
        image: (H, W, 3) RGB image.

    Returns:
        float32 (H, W, 3) array, ``image + [-123.15, -115.9, -103.06]``.
    """
    image = to_float_if_int(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise InvalidInputError(f"Expected an (H, W, 3) RGB image, got shape {image.shape}")
    return image.astype(np.float32, copy=False) + _MEAN


__all__ = ["to_float_if_int", "normalize_image"]
