"""Elevation view of a story stack using matplotlib.

Each story is drawn as a horizontal band from its elevation to its top,
filled with its display color. Master stories are outlined in bold and
similar-to links are noted next to the story label.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.pyplot as plt
import matplotlib.patches as patches

from tower_stories.defaults import AUTO_COLOR
from tower_stories.models.topology import StoryTopology

_AUTO_COLORS = [
    "#BBDEFB",  # blue
    "#C8E6C9",  # green
    "#FFE0B2",  # orange
    "#E1BEE7",  # purple
    "#FFCCBC",  # salmon
    "#B2EBF2",  # teal
    "#FFF9C4",  # yellow
    "#D7CCC8",  # brown
]


def story_color(color: int, index: int) -> str:
    """Hex color for an engine display color.

    Engine colors are packed 0x00BBGGRR integers; AUTO_COLOR (or any
    negative value) cycles through a fixed palette by story index.
    """
    if color == AUTO_COLOR or color < 0:
        return _AUTO_COLORS[index % len(_AUTO_COLORS)]
    r = color & 0xFF
    g = (color >> 8) & 0xFF
    b = (color >> 16) & 0xFF
    return f"#{r:02X}{g:02X}{b:02X}"


def render_section(
    topology: StoryTopology,
    output_path: str | Path,
    title: str | None = None,
    dpi: int = 150,
    width: float = 10.0,
) -> Path:
    """Render the story stack as an elevation drawing to PNG.

    Args:
        topology: Stories to draw. Should be valid; overlapping or
            zero-height stories are drawn as they are.
        output_path: Output image path.
        title: Plot title (defaults to a story count summary).
        dpi: Image resolution.
        width: Drawn width of the stack in model units.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    fig, ax = plt.subplots(1, 1, figsize=(8, 10))
    fig.patch.set_facecolor("white")

    for i, story in enumerate(topology.stories):
        band = patches.Rectangle(
            (0.0, story.elevation),
            width,
            story.height,
            facecolor=story_color(story.color, i),
            edgecolor="#212121",
            linewidth=2.0 if story.is_master_story else 0.8,
            zorder=2,
        )
        ax.add_patch(band)

        label = story.name
        if story.is_master_story:
            label += " [M]"
        elif story.similar_to_story:
            label += f" → {story.similar_to_story}"
        ax.text(width / 2, story.elevation + story.height / 2, label,
                fontsize=9, ha="center", va="center", zorder=3)
        ax.text(-0.3, story.elevation, f"{story.elevation:.2f}",
                fontsize=8, ha="right", va="center", color="#616161")

        if story.splice_above:
            y = story.elevation + story.splice_height
            ax.plot([0.0, width], [y, y], color="#D32F2F",
                    linestyle="--", linewidth=1.0, zorder=3)

    # Base line
    ax.axhline(topology.base_elevation, color="#424242", linewidth=2.5, zorder=1)

    if topology.stories:
        top = topology.stories[-1].top
        ax.text(-0.3, top, f"{top:.2f}", fontsize=8, ha="right",
                va="center", color="#616161")
        ax.set_ylim(topology.base_elevation - 1.0, top + 1.0)
    else:
        ax.set_ylim(topology.base_elevation - 1.0, topology.base_elevation + 1.0)
    ax.set_xlim(-width * 0.3, width * 1.1)
    ax.set_xticks([])
    ax.set_ylabel("Elevation")

    if title is None:
        title = (
            f"{topology.story_count()} stories, "
            f"total height {topology.total_height():.2f}"
        )
    ax.set_title(title, fontsize=12, fontweight="bold")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path
