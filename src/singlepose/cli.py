"""CLI for singlepose: ``singlepose estimate`` and ``singlepose list``."""

import argparse
import json
import logging
import sys

from singlepose.config import ARCHITECTURES
from singlepose.errors import PoseDecodeError
from singlepose.types import (
    CPM_INPUT_RESOLUTION,
    CPM_KEYPOINT_NAMES,
    CPM_OUTPUT_STRIDE,
    POSENET_KEYPOINT_NAMES,
    VALID_INPUT_RESOLUTIONS,
    VALID_OUTPUT_STRIDES,
    InferenceConfig,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="singlepose",
        description="Single-person keypoint estimation with PoseNet-style models",
    )
    sub = parser.add_subparsers(dest="command")

    # singlepose estimate
    est_p = sub.add_parser("estimate", help="Estimate the pose in an image")
    est_p.add_argument("image", help="Input image path")
    est_p.add_argument(
        "--arch",
        choices=ARCHITECTURES,
        default="resnet50",
        help="Model architecture (default: resnet50)",
    )
    est_p.add_argument(
        "--stride",
        type=int,
        choices=VALID_OUTPUT_STRIDES,
        default=None,
        help=f"Output stride (default: 16, or {CPM_OUTPUT_STRIDE} for cpm)",
    )
    est_p.add_argument(
        "--resolution",
        type=int,
        default=None,
        help=f"Input resolution (default: 257, or {CPM_INPUT_RESOLUTION} for cpm)",
    )
    est_p.add_argument(
        "--model",
        default=None,
        help="ONNX model path (default: $SINGLEPOSE_MODELS_DIR/posenet/<arch>.onnx)",
    )
    est_p.add_argument("--device", default="cpu", help="Device (default: cpu)")
    est_p.add_argument(
        "--flip",
        action="store_true",
        help="Mirror keypoints horizontally (mirrored webcam input)",
    )
    est_p.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent (default: 2)",
    )
    est_p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # singlepose list
    sub.add_parser("list", help="List supported strides, resolutions and keypoints")

    return parser


def _build_config(args: argparse.Namespace):
    from singlepose.config import ModelConfig

    if args.arch == "cpm":
        return ModelConfig.cpm(model_path=args.model, device=args.device)
    return ModelConfig.resnet50(
        output_stride=args.stride or 16,
        input_resolution=args.resolution or 257,
        model_path=args.model,
        device=args.device,
    )


def _load_rgb(path: str):
    import cv2

    bgr = cv2.imread(path, cv2.IMREAD_COLOR)
    if bgr is None:
        raise FileNotFoundError(f"Could not read image: {path}")
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def _cmd_estimate(args: argparse.Namespace) -> None:
    """Handle ``singlepose estimate``."""
    from singlepose.backends import create_model
    from singlepose.estimator import SinglePoseEstimator

    try:
        config = _build_config(args)
        image = _load_rgb(args.image)
        with SinglePoseEstimator(create_model(config), device=config.device) as estimator:
            pose = estimator.estimate_single_pose(
                image,
                config.input_resolution,
                InferenceConfig(flip_horizontal=args.flip),
            )
    except (PoseDecodeError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(pose.to_dict(), indent=args.indent))


def _cmd_list(args: argparse.Namespace) -> None:
    """Handle ``singlepose list``."""
    print(f"Output strides: {', '.join(str(s) for s in VALID_OUTPUT_STRIDES)}")
    print(f"Input resolutions: {', '.join(str(r) for r in VALID_INPUT_RESOLUTIONS)}")
    print(f"cpm: {CPM_INPUT_RESOLUTION}x{CPM_INPUT_RESOLUTION}, stride {CPM_OUTPUT_STRIDE}")
    print("resnet50 keypoints:")
    for i, name in enumerate(POSENET_KEYPOINT_NAMES):
        print(f"  {i:2d}  {name}")
    print("cpm keypoints:")
    for i, name in enumerate(CPM_KEYPOINT_NAMES):
        print(f"  {i:2d}  {name}")


def main():
    """Entry point for ``singlepose`` CLI."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "estimate":
        _cmd_estimate(args)
    elif args.command == "list":
        _cmd_list(args)


if __name__ == "__main__":
    main()
