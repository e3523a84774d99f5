"""Office tower with parking levels — proof of concept.

Builds three parking basements under a tall lobby and twelve office
floors, marks the lobby and the first office floor as master stories,
points the remaining office floors at the typical master, and writes
the engine story table plus an elevation drawing.

   LEVEL11  ┐
   ...      │ similar to LEVEL1
   LEVEL2   ┘
   LEVEL1   [master]
   GROUND   [master, 5.5 high]
   ──────── 0.00
   B1..B3   parking, 3.2 high
"""

from pathlib import Path

from tower_stories.export.engine import to_table
from tower_stories.export.section import render_section
from tower_stories.generators import with_basement

OUTPUT = Path(__file__).parent / "output"


def build_tower():
    tower = with_basement(
        basement_levels=3,
        above_ground_levels=12,
        basement_height=3.2,
        typical_height=3.8,
        ground_height=5.5,
    )
    tower.get_story("GROUND").is_master_story = True
    tower.get_story("LEVEL1").is_master_story = True
    for story in tower.stories:
        if story.name.startswith("LEVEL") and story.name != "LEVEL1":
            story.similar_to_story = "LEVEL1"

    # Column splice 1.1 above every third office floor
    for i in range(3, 12, 3):
        story = tower.get_story(f"LEVEL{i}")
        story.splice_above = True
        story.splice_height = 1.1
    return tower


if __name__ == "__main__":
    tower = build_tower()
    tower.validate().raise_for_violation()
    print(tower.describe())

    table_path = to_table(tower).save(OUTPUT / "office_tower.json")
    image_path = render_section(tower, OUTPUT / "office_tower.png")
    print(f"Story table: {table_path}")
    print(f"Section: {image_path}")
