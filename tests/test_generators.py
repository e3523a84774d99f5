"""Tests for story stack generators."""

import pytest

from tower_stories.errors import InvalidArgument
from tower_stories.generators.stacks import from_heights, uniform, with_basement


class TestFromHeights:
    def test_basic(self):
        t = from_heights(2.0, ["A", "B"], [3.0, 4.0])
        assert t.base_elevation == 2.0
        assert t.story_names() == ["A", "B"]
        assert [s.elevation for s in t.stories] == [2.0, 5.0]

    def test_default_metadata(self):
        s = from_heights(0.0, ["A"], [3.0]).stories[0]
        assert s.is_master_story is False
        assert s.similar_to_story == ""
        assert s.splice_above is False
        assert s.color == -1

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgument, match="same length"):
            from_heights(0.0, ["A", "B"], [3.0])


class TestUniform:
    def test_three_stories(self):
        t = uniform(base_elevation=0, count=3, typical_height=3.5)
        assert t.story_names() == ["STORY1", "STORY2", "STORY3"]
        assert [s.elevation for s in t.stories] == pytest.approx([0.0, 3.5, 7.0])
        assert [s.height for s in t.stories] == [3.5, 3.5, 3.5]
        assert t.total_height() == pytest.approx(10.5)

    def test_first_story_height(self):
        t = uniform(0.0, 3, 3.0, first_story_height=4.5)
        assert [s.height for s in t.stories] == [4.5, 3.0, 3.0]
        assert [s.elevation for s in t.stories] == pytest.approx([0.0, 4.5, 7.5])

    def test_zero_first_height_means_typical(self):
        t = uniform(0.0, 2, 3.0, first_story_height=0)
        assert t.stories[0].height == 3.0

    def test_custom_prefix(self):
        t = uniform(0.0, 2, 3.0, name_prefix="L")
        assert t.story_names() == ["L1", "L2"]

    def test_base_elevation(self):
        t = uniform(100.0, 2, 3.0)
        assert t.stories[0].elevation == 100.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"count": 0, "typical_height": 3.0},
            {"count": -2, "typical_height": 3.0},
            {"count": 3, "typical_height": 0.0},
            {"count": 3, "typical_height": -3.0},
            {"count": 3, "typical_height": 3.0, "first_story_height": -1.0},
        ],
    )
    def test_invalid_arguments(self, kwargs):
        with pytest.raises(InvalidArgument):
            uniform(0.0, **kwargs)

    @pytest.mark.parametrize("count", [1, 2, 10, 60])
    def test_output_validates(self, count):
        assert uniform(-1.5, count, 3.2, first_story_height=5.0).validate().ok


class TestWithBasement:
    def test_names_and_base(self):
        t = with_basement(
            basement_levels=2, above_ground_levels=3,
            basement_height=3.0, typical_height=4.0,
        )
        assert t.story_names() == ["B2", "B1", "GROUND", "LEVEL1", "LEVEL2"]
        assert t.base_elevation == -6.0
        assert t.get_elevation("GROUND") == pytest.approx(0.0)

    def test_heights(self):
        t = with_basement(2, 3, 3.0, 4.0, ground_height=5.0)
        assert [s.height for s in t.stories] == [3.0, 3.0, 5.0, 4.0, 4.0]
        assert t.get_elevation("LEVEL1") == pytest.approx(5.0)

    def test_ground_defaults_to_typical(self):
        t = with_basement(1, 2, 3.0, 4.0)
        assert t.get_height("GROUND") == 4.0

    def test_no_basement(self):
        t = with_basement(0, 2, 3.0, 4.0)
        assert t.story_names() == ["GROUND", "LEVEL1"]
        assert t.base_elevation == 0.0

    def test_only_basement(self):
        t = with_basement(3, 0, 2.5, 4.0)
        assert t.story_names() == ["B3", "B2", "B1"]
        assert t.total_height() == pytest.approx(7.5)

    @pytest.mark.parametrize(
        "args",
        [
            (-1, 3, 3.0, 4.0),
            (2, -1, 3.0, 4.0),
            (0, 0, 3.0, 4.0),
            (2, 3, 0.0, 4.0),
            (2, 3, 3.0, -4.0),
        ],
    )
    def test_invalid_arguments(self, args):
        with pytest.raises(InvalidArgument):
            with_basement(*args)

    def test_negative_ground_height(self):
        with pytest.raises(InvalidArgument):
            with_basement(1, 2, 3.0, 4.0, ground_height=-1.0)

    @pytest.mark.parametrize("basements, above", [(0, 1), (1, 1), (4, 12), (5, 0)])
    def test_output_validates(self, basements, above):
        assert with_basement(basements, above, 3.1, 3.6, 4.2).validate().ok
