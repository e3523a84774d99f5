"""Tests for the engine story table and handoff."""

import pytest

from tower_stories.errors import EngineError, InvalidArgument
from tower_stories.export.engine import (
    StoryTable,
    from_table,
    pull_topology,
    push_topology,
    to_table,
    validate_table,
)
from tower_stories.generators.stacks import uniform, with_basement
from tower_stories.models import StoryTopology
from tower_stories.validators.topology import Rule


def _tower() -> StoryTopology:
    t = with_basement(1, 4, 3.0, 3.2, ground_height=4.5)
    t.stories[1].is_master_story = True
    t.stories[3].similar_to_story = "GROUND"
    t.stories[3].splice_above = True
    t.stories[3].splice_height = 1.2
    t.stories[4].color = 255
    return t


class FakeEngine:
    """In-memory stand-in for the engine's story interface."""

    def __init__(self, status: int = 0):
        self.status = status
        self.calls: list[tuple] = []
        self.stored: tuple | None = None

    def set_stories(self, *args):
        self.calls.append(args)
        if self.status == 0:
            self.stored = args
        return self.status

    def get_stories(self):
        return (*self.stored, self.status)


class TestStoryTable:
    def test_to_table_field_order(self):
        table = to_table(_tower())
        args = table.as_args()
        assert len(args) == 10
        assert args[0] == -3.0
        assert args[1] == 5
        assert args[2] == ["B1", "GROUND", "LEVEL1", "LEVEL2", "LEVEL3"]
        assert args[3] == pytest.approx([-3.0, 0.0, 4.5, 7.7, 10.9])
        assert args[4] == [3.0, 4.5, 3.2, 3.2, 3.2]
        assert args[5] == [False, True, False, False, False]
        assert args[6] == ["", "", "", "GROUND", ""]
        assert args[7] == [False, False, False, True, False]
        assert args[8] == [0.0, 0.0, 0.0, 1.2, 0.0]
        assert args[9] == [-1, -1, -1, -1, 255]

    def test_round_trip(self):
        t = _tower()
        assert from_table(to_table(t)) == t

    def test_round_trip_empty(self):
        assert from_table(to_table(StoryTopology(base_elevation=2.0))) == StoryTopology(
            base_elevation=2.0
        )

    def test_optional_arrays_default(self):
        table = StoryTable(
            base_elevation=0.0,
            number_stories=2,
            story_names=["A", "B"],
            story_elevations=[0.0, 3.0],
            story_heights=[3.0, 3.0],
            is_master_story=[False, False],
            similar_to_story=["", ""],
        )
        assert table.as_args()[7:] == ([False, False], [0.0, 0.0], [-1, -1])
        t = from_table(table)
        assert t.stories[1].color == -1
        assert t.stories[1].splice_above is False

    def test_splice_above_inferred_from_height(self):
        table = to_table(uniform(0.0, 2, 3.0))
        table.splice_above = None
        table.splice_height = [0.0, 0.8]
        t = from_table(table)
        assert [s.splice_above for s in t.stories] == [False, True]

    def test_mismatched_lengths_rejected(self):
        table = to_table(uniform(0.0, 3, 3.0))
        table.story_heights = [3.0, 3.0]
        with pytest.raises(InvalidArgument, match="story_heights"):
            from_table(table)

    def test_save_and_load(self, tmp_path):
        table = to_table(_tower())
        path = table.save(tmp_path / "sub" / "stories.json")
        assert path.exists()
        assert StoryTable.load(path) == table


class TestValidateTable:
    def test_valid(self):
        assert validate_table(to_table(_tower())).ok

    def test_shape_before_semantics(self):
        table = to_table(uniform(0.0, 2, 3.0))
        table.story_names = ["A", "A", "A"]
        result = validate_table(table)
        assert result.violation.rule == Rule.STRUCTURE
        assert "story_names" in result.violation.message

    def test_negative_count(self):
        table = StoryTable(number_stories=-1)
        assert validate_table(table).violation.rule == Rule.STRUCTURE

    def test_semantic_violation(self):
        table = to_table(uniform(0.0, 2, 3.0))
        table.similar_to_story = ["", "L9"]
        result = validate_table(table)
        assert result.violation.rule == Rule.SIMILAR_TO

    def test_empty_table(self):
        assert validate_table(StoryTable()).violation.rule == Rule.NOT_EMPTY


class TestPushTopology:
    def test_sends_table(self):
        engine = FakeEngine()
        table = push_topology(engine, _tower())
        assert engine.calls == [table.as_args()]

    def test_invalid_topology_not_sent(self):
        engine = FakeEngine()
        t = uniform(0.0, 2, 3.0)
        t.stories[1].name = "STORY1"
        with pytest.raises(InvalidArgument):
            push_topology(engine, t)
        assert engine.calls == []

    def test_engine_failure(self):
        with pytest.raises(EngineError) as excinfo:
            push_topology(FakeEngine(status=1), _tower())
        assert excinfo.value.status == 1
        assert excinfo.value.call == "set_stories"


class TestPullTopology:
    def test_export_then_import(self):
        engine = FakeEngine()
        t = _tower()
        push_topology(engine, t)
        assert pull_topology(engine) == t

    def test_engine_failure(self):
        engine = FakeEngine()
        push_topology(engine, _tower())
        engine.status = 3
        with pytest.raises(EngineError):
            pull_topology(engine)

    def test_null_arrays_for_empty_model(self):
        class EmptyEngine:
            def get_stories(self):
                return (0.0, 0, None, None, None, None, None, None, None, None, 0)

        t = pull_topology(EmptyEngine())
        assert t.stories == []

    def test_wrong_field_count(self):
        class ShortEngine:
            def get_stories(self):
                return (0.0, 0, 0)

        with pytest.raises(InvalidArgument):
            pull_topology(ShortEngine())

    def test_empty_reply(self):
        class SilentEngine:
            def get_stories(self):
                return ()

        with pytest.raises(InvalidArgument, match="expected 11"):
            pull_topology(SilentEngine())
