"""Visualization of a laid-out family forest."""

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch, PathPatch
from matplotlib.path import Path as MplPath

from config import CONNECTOR_COLOR, DEFAULT_CONFIG, DPI, EMPTY_MESSAGE, GENDER_COLORS, LayoutConfig
from models import Connector, ForestLayout, NodePosition


def connector_path(connector: Connector, config: LayoutConfig = DEFAULT_CONFIG) -> MplPath:
    """Cubic Bezier from the parent's bottom centre to the child's top centre."""
    c1, c2 = connector.control_points(config.v_gap)
    return MplPath(
        [(connector.x1, connector.y1), c1, c2, (connector.x2, connector.y2)],
        [MplPath.MOVETO, MplPath.CURVE4, MplPath.CURVE4, MplPath.CURVE4],
    )


def node_label(pos: NodePosition) -> str:
    person = pos.person
    label = person.display_name
    if person.birth_date:
        label += f"\n{person.birth_date.isoformat()}"
    return label


def _draw_node(ax, pos: NodePosition, config: LayoutConfig) -> None:
    gender = pos.person.gender.value if pos.person.gender else None
    fill, edge = GENDER_COLORS.get(gender, GENDER_COLORS[None])
    ax.add_patch(
        FancyBboxPatch(
            (pos.x - config.node_width / 2, pos.y),
            config.node_width,
            config.node_height,
            boxstyle="round,pad=0,rounding_size=8",
            facecolor=fill,
            edgecolor=edge,
            linewidth=2,
            zorder=2,
        )
    )
    ax.text(
        pos.x,
        pos.y + config.node_height / 2,
        node_label(pos),
        ha="center",
        va="center",
        fontsize=9,
        clip_on=True,
        zorder=3,
    )


def plot_layout(
    layout: ForestLayout,
    output_path: Path | None = None,
    config: LayoutConfig = DEFAULT_CONFIG,
):
    """
    Draw a forest layout with matplotlib.

    One figure unit is one layout unit at DPI, with the y axis pointing down
    like the layout coordinates. Connectors are drawn under the boxes.

    Args:
        layout: Result of layout.compute_layout
        output_path: File to write (format from the extension). If None, displays interactively.
        config: The config the layout was computed with

    Returns:
        The matplotlib Figure
    """
    if layout.is_empty:
        fig, ax = plt.subplots(figsize=(4, 1))
        ax.text(0.5, 0.5, EMPTY_MESSAGE, ha="center", va="center", color="gray")
    else:
        fig, ax = plt.subplots(figsize=(layout.width / DPI, layout.height / DPI))
        fig.subplots_adjust(left=0, right=1, bottom=0, top=1)
        ax.set_xlim(0, layout.width)
        ax.set_ylim(layout.height, 0)

        for connector in layout.connectors:
            ax.add_patch(
                PathPatch(
                    connector_path(connector, config),
                    facecolor="none",
                    edgecolor=CONNECTOR_COLOR,
                    linewidth=2,
                    zorder=1,
                )
            )
        for pos in layout.positions:
            _draw_node(ax, pos, config)

    ax.set_axis_off()

    if output_path:
        ext = Path(output_path).suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        fig.savefig(output_path, format=ext, dpi=DPI)
        plt.close(fig)
    else:
        plt.show()

    return fig
