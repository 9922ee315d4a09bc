"""Tests for the vision and inpainting collaborator interfaces."""

import numpy as np
import pytest

from wallhue.errors import InpaintingError, InvalidHexColor
from wallhue.image.replacement import ReplacementRequest
from wallhue.providers.inpainting import (
    PassthroughInpaintingProvider,
    WallRecolorer,
    build_instruction,
)
from wallhue.providers.seed import (
    NullSeedProvider,
    StaticSeedProvider,
    parse_seed_entries,
    parse_seed_response,
)


class TestSeedParsing:
    """Vision replies and seed entries."""

    def test_fenced_reply(self):
        reply = (
            "```json\n"
            '[{"hex": "#FF5733", "rgb": {"r": 255, "g": 87, "b": 51}, '
            '"percentage": 35.5, "position": {"x": 100, "y": 150}}]\n'
            "```"
        )

        entries = parse_seed_response(reply)

        assert len(entries) == 1
        assert entries[0]["hex"] == "#FF5733"

    def test_prose_around_array(self):
        reply = 'Here are the colors: [{"hex": "#112233"}] Hope this helps!'
        assert parse_seed_response(reply) == [{"hex": "#112233"}]

    @pytest.mark.parametrize(
        "reply", ["", "no colors here", '{"hex": "#112233"}', "[not json]"]
    )
    def test_unusable_replies(self, reply):
        assert parse_seed_response(reply) == []

    def test_entries_without_valid_hex_are_dropped(self):
        seeds = parse_seed_entries(
            [
                {"hex": "#ff5733", "percentage": "35.5", "position": {"x": 1, "y": 2}},
                {"hex": "orange"},
                {"percentage": 10},
                "garbage",
            ]
        )

        assert len(seeds) == 1
        assert seeds[0].hex == "#FF5733"
        assert seeds[0].rgb == (255, 87, 51)
        assert seeds[0].percentage == pytest.approx(35.5)
        assert seeds[0].position == (1.0, 2.0)

    @pytest.mark.parametrize(
        "position", [{"x": "left", "y": 3}, {"x": 1}, "top-left", [1, 2], None]
    )
    def test_malformed_position_is_ignored(self, position):
        seeds = parse_seed_entries([{"hex": "#AABBCC", "position": position}])

        assert len(seeds) == 1
        assert seeds[0].position is None

    def test_default_providers(self):
        image = np.zeros((2, 2, 3), dtype=np.uint8)
        assert NullSeedProvider().propose_colors(image) == []

        provider = StaticSeedProvider([{"hex": "#000000"}])
        entries = provider.propose_colors(image)
        entries[0]["hex"] = "#FFFFFF"
        assert provider.propose_colors(image) == [{"hex": "#000000"}]


class _FailingProvider:
    def inpaint(self, image, mask, instruction):
        raise InpaintingError("service unavailable")


class _RecordingProvider:
    def __init__(self, output=None):
        self.output = output
        self.calls = []

    def inpaint(self, image, mask, instruction):
        self.calls.append((image, mask, instruction))
        if self.output is not None:
            return self.output
        return np.full_like(image, 7)


@pytest.fixture
def wall_image():
    image = np.full((20, 20, 3), (60, 60, 60), dtype=np.uint8)
    image[:6] = (230, 220, 200)
    return image


@pytest.fixture
def request_():
    return ReplacementRequest(target_hex="#E6DCC8", new_hex="#5588AA", tolerance=20)


class TestWallRecolorer:
    """Choice between the inpainting service and the local engine."""

    def test_local_without_provider(self, wall_image, request_):
        outcome = WallRecolorer().recolor(wall_image, request_)

        assert outcome.method == "local"
        assert outcome.pixels_changed == 6 * 20
        np.testing.assert_array_equal(outcome.image[6:], wall_image[6:])

    def test_provider_result_used(self, wall_image, request_):
        provider = _RecordingProvider()

        outcome = WallRecolorer(provider=provider).recolor(wall_image, request_)

        assert outcome.method == "inpainting"
        assert (outcome.image == 7).all()

        _, mask, instruction = provider.calls[0]
        assert mask.shape == wall_image.shape
        assert set(np.unique(mask)).issubset({0, 255})
        assert mask[0, 0, 0] == 255
        assert mask[10, 10, 0] == 0
        assert "#E6DCC8" in instruction and "#5588AA" in instruction

    def test_passthrough_provider(self, wall_image, request_):
        outcome = WallRecolorer(provider=PassthroughInpaintingProvider()).recolor(
            wall_image, request_
        )

        assert outcome.method == "inpainting"
        np.testing.assert_array_equal(outcome.image, wall_image)
        assert outcome.image is not wall_image

    def test_failure_falls_back_to_local(self, wall_image, request_):
        outcome = WallRecolorer(provider=_FailingProvider()).recolor(wall_image, request_)

        assert outcome.method == "local"
        assert outcome.pixels_changed > 0

    def test_wrong_shape_falls_back_to_local(self, wall_image, request_):
        provider = _RecordingProvider(output=np.zeros((5, 5, 3), dtype=np.uint8))

        outcome = WallRecolorer(provider=provider).recolor(wall_image, request_)

        assert outcome.method == "local"

    def test_invalid_color_is_not_sent(self, wall_image):
        provider = _RecordingProvider()
        request = ReplacementRequest(target_hex="#E6DCC8", new_hex="blue")

        with pytest.raises(InvalidHexColor):
            WallRecolorer(provider=provider).recolor(wall_image, request)

        assert provider.calls == []

    def test_instruction_normalises_colors(self):
        instruction = build_instruction("e6dcc8", "#5588aa")
        assert "#E6DCC8" in instruction
        assert "#5588AA" in instruction
