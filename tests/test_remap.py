"""Tests for the coordinate remapper and its round trip with the letterbox."""

import pytest

from singlepose.errors import InvalidInputError
from singlepose.letterbox import compute_letterbox
from singlepose.remap import flip_pose_horizontal, remap_pose, remap_poses
from singlepose.types import Keypoint, Padding, Pose, Vector2D


def _pose(*points, score=0.5):
    keypoints = tuple(
        Keypoint(name=f"kp_{i}", position=Vector2D(y=y, x=x), score=0.1 * (i + 1))
        for i, (y, x) in enumerate(points)
    )
    return Pose(keypoints=keypoints, score=score)


class TestRemapScenarios:
    def test_square_image_identity(self):
        pose = _pose((20.0, 40.0))
        out = remap_pose(pose, (192, 192), (192, 192), Padding())
        assert out.keypoints[0].position == Vector2D(y=20.0, x=40.0)

    def test_wide_image_with_padding(self):
        """H=100, W=200, R=192: (50, 100) -> (50/0.96, 100/0.96)."""
        plan = compute_letterbox(100, 200, 192)
        pose = _pose((50.0, 100.0))
        out = remap_pose(pose, (100, 200), (192, 192), plan.padding)
        assert out.keypoints[0].position.y == pytest.approx(52.0833, abs=1e-3)
        assert out.keypoints[0].position.x == pytest.approx(104.1667, abs=1e-3)

    def test_flip_mirrors_about_original_width(self):
        """Original width 200: x=10 -> x=189."""
        pose = _pose((5.0, 10.0))
        out = flip_pose_horizontal(pose, 200)
        assert out.keypoints[0].position.x == 189.0
        assert out.keypoints[0].position.y == 5.0

    def test_flip_applied_after_unscaling(self):
        plan = compute_letterbox(100, 200, 192)
        pose = _pose((0.0, 9.6))
        out = remap_pose(pose, (100, 200), (192, 192), plan.padding, flip_horizontal=True)
        assert out.keypoints[0].position.x == pytest.approx(189.0)


class TestRoundTrip:
    @pytest.mark.parametrize("placement", ["bottom_right", "center"])
    @pytest.mark.parametrize(
        "size,resolution",
        [((100, 200), 192), ((480, 640), 257), ((1080, 720), 513), ((33, 1000), 161)],
    )
    def test_forward_then_inverse(self, size, resolution, placement):
        height, width = size
        plan = compute_letterbox(height, width, resolution, placement)
        original = [(0.0, 0.0), (height / 3, width / 7), (height - 1.0, width - 1.0)]

        # forward: scale then shift by the leading padding
        forward = _pose(*[
            (y * plan.scale + plan.padding.top, x * plan.scale + plan.padding.left)
            for y, x in original
        ])
        out = remap_pose(forward, size, (resolution, resolution), plan.padding)

        for kp, (y, x) in zip(out.keypoints, original):
            assert kp.position.y == pytest.approx(y, abs=1e-4)
            assert kp.position.x == pytest.approx(x, abs=1e-4)


class TestFlipInvolution:
    def test_flip_twice_is_identity(self):
        pose = _pose((3.0, 17.25), (40.0, 0.0))
        twice = flip_pose_horizontal(flip_pose_horizontal(pose, 200), 200)
        for a, b in zip(twice.keypoints, pose.keypoints):
            assert a.position.x == pytest.approx(b.position.x)

    def test_remap_twice_with_flip(self):
        pose = _pose((3.0, 17.25))
        args = ((192, 192), (192, 192), Padding())
        once = remap_pose(pose, *args, flip_horizontal=True)
        twice = remap_pose(once, *args, flip_horizontal=True)
        assert once.keypoints[0].position.x == pytest.approx(192 - 1 - 17.25)
        assert twice.keypoints[0].position.x == pytest.approx(17.25)


class TestRemapPassThrough:
    def test_scores_and_names_unchanged(self):
        pose = _pose((1.0, 2.0), (3.0, 4.0), score=0.77)
        out = remap_pose(pose, (100, 200), (192, 192), Padding(bottom=96), True)
        assert out.score == 0.77
        assert [kp.score for kp in out.keypoints] == [kp.score for kp in pose.keypoints]
        assert [kp.name for kp in out.keypoints] == ["kp_0", "kp_1"]

    def test_input_pose_not_mutated(self):
        pose = _pose((10.0, 10.0))
        remap_pose(pose, (100, 200), (192, 192), Padding(bottom=96), True)
        assert pose.keypoints[0].position == Vector2D(y=10.0, x=10.0)

    def test_remap_poses(self):
        poses = [_pose((19.2, 19.2)), _pose((96.0, 0.0))]
        out = remap_poses(poses, (100, 200), (192, 192), Padding(bottom=96))
        assert len(out) == 2
        assert out[0].keypoints[0].position.y == pytest.approx(20.0)
        assert out[1].keypoints[0].position.y == pytest.approx(100.0)


class TestRemapErrors:
    @pytest.mark.parametrize(
        "size,resolution",
        [((0, 100), (192, 192)), ((100, -1), (192, 192)), ((100, 100), (0, 192))],
    )
    def test_non_positive_dimensions(self, size, resolution):
        with pytest.raises(InvalidInputError):
            remap_pose(_pose((1.0, 1.0)), size, resolution, Padding())
