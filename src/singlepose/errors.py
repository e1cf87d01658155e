"""Error kinds raised by the decoding pipeline.

All errors are raised synchronously where the precondition is violated.
They signal programming or configuration mistakes, so nothing in the
pipeline retries them.
"""


class PoseDecodeError(Exception):
    """Base class for all singlepose errors."""


class InvalidInputError(PoseDecodeError, ValueError):
    """Malformed or mismatched array shapes, or non-positive dimensions."""


class InvalidResolutionError(PoseDecodeError, ValueError):
    """Unsupported input resolution or output stride."""


class UnsupportedModeError(PoseDecodeError):
    """Offset-mode decoding without an offset volume, or the reverse."""


__all__ = [
    "PoseDecodeError",
    "InvalidInputError",
    "InvalidResolutionError",
    "UnsupportedModeError",
]
