"""Tests for the story stack elevation drawing."""

from tower_stories.export.section import render_section, story_color
from tower_stories.generators.stacks import with_basement
from tower_stories.models import StoryTopology


class TestStoryColor:
    def test_auto_cycles_palette(self):
        assert story_color(-1, 0) == story_color(-1, 8)
        assert story_color(-1, 0) != story_color(-1, 1)

    def test_packed_bgr(self):
        assert story_color(0x0000FF, 0) == "#FF0000"
        assert story_color(0xFF0000, 0) == "#0000FF"
        assert story_color(0x00FF00, 3) == "#00FF00"


class TestRenderSection:
    def test_writes_png(self, tmp_path):
        t = with_basement(2, 4, 3.0, 3.5)
        t.stories[2].is_master_story = True
        t.stories[3].similar_to_story = "GROUND"
        t.stories[4].splice_above = True
        t.stories[4].splice_height = 1.0
        path = render_section(t, tmp_path / "out" / "section.png")
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_empty_topology(self, tmp_path):
        path = render_section(StoryTopology(), tmp_path / "empty.png", title="Nothing")
        assert path.exists()
