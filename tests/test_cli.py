"""Tests for singlepose CLI."""

import json
import sys
from unittest.mock import patch

import cv2
import numpy as np
import pytest

from singlepose import cli
from singlepose.backends.base import ModelOutput
from singlepose.cli import _build_config, _build_parser
from singlepose.types import CPM_KEYPOINT_NAMES, DecodeMode


class TestCLIParser:
    def test_estimate_defaults(self):
        parser = _build_parser()
        args = parser.parse_args(["estimate", "person.jpg"])
        assert args.command == "estimate"
        assert args.image == "person.jpg"
        assert args.arch == "resnet50"
        assert args.stride is None
        assert args.resolution is None
        assert args.flip is False
        assert args.device == "cpu"

    def test_estimate_options(self):
        parser = _build_parser()
        args = parser.parse_args([
            "estimate", "person.jpg", "--arch", "resnet50", "--stride", "32",
            "--resolution", "513", "--model", "m.onnx", "--flip", "-v",
        ])
        assert args.stride == 32
        assert args.resolution == 513
        assert args.model == "m.onnx"
        assert args.flip is True
        assert args.verbose is True

    def test_invalid_stride_choice(self):
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["estimate", "person.jpg", "--stride", "4"])

    def test_list(self):
        args = _build_parser().parse_args(["list"])
        assert args.command == "list"


class TestBuildConfig:
    def test_resnet_defaults(self):
        args = _build_parser().parse_args(["estimate", "x.jpg"])
        config = _build_config(args)
        assert config.output_stride == 16
        assert config.input_resolution == 257

    def test_cpm_ignores_stride(self):
        args = _build_parser().parse_args(["estimate", "x.jpg", "--arch", "cpm"])
        config = _build_config(args)
        assert config.mode == DecodeMode.HEATMAP_ONLY
        assert config.input_resolution == 192


class TestMain:
    def test_no_command_prints_help(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["singlepose"])
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 0

    def test_list_output(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["singlepose", "list"])
        cli.main()
        out = capsys.readouterr().out
        assert "1217" in out
        assert "right_ankle" in out

    def test_estimate_prints_json(self, tmp_path, monkeypatch, capsys, make_model, make_heatmap):
        image_path = tmp_path / "frame.png"
        cv2.imwrite(str(image_path), np.zeros((192, 192, 3), dtype=np.uint8))
        model = make_model(
            ModelOutput(heatmap_scores=make_heatmap(
                grid=(96, 96), num_keypoints=14, peaks={0: (10, 20, 1.0)},
            )),
            DecodeMode.HEATMAP_ONLY,
            2,
            CPM_KEYPOINT_NAMES,
        )
        monkeypatch.setattr(
            sys, "argv", ["singlepose", "estimate", str(image_path), "--arch", "cpm"]
        )

        with patch("singlepose.backends.create_model", return_value=model):
            cli.main()

        result = json.loads(capsys.readouterr().out)
        assert result["keypoints"][0]["part"] == "nose"
        assert result["keypoints"][0]["position"] == {"y": 20.0, "x": 40.0}
        assert result["score"] == 1.0

    def test_estimate_missing_image(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(
            sys, "argv", ["singlepose", "estimate", str(tmp_path / "nope.png")]
        )
        with pytest.raises(SystemExit) as exc:
            cli.main()
        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().err
