from matplotlib.colors import to_rgba
from matplotlib.path import Path as MplPath
import pytest

from conftest import make_edges, make_people
from config import DEFAULT_CONFIG, EMPTY_MESSAGE
from layout import compute_layout
from models import Gender, Person
from plotting import connector_path, node_label, plot_layout


def test_connector_path_is_cubic_bezier():
    layout = compute_layout(make_people("A", "B"), make_edges(("A", "B")))
    path = connector_path(layout.connectors[0])

    assert list(path.codes) == [MplPath.MOVETO, MplPath.CURVE4, MplPath.CURVE4, MplPath.CURVE4]
    assert path.vertices.tolist() == [[120, 110], [120, 150], [120, 150], [120, 190]]


def test_node_label(family):
    people, edges = family
    layout = compute_layout(people, edges)
    assert node_label(layout.positions[0]) == "Karen"


def test_plot_layout_writes_file(tmp_path, family):
    people, edges = family
    layout = compute_layout(people, edges)
    out = tmp_path / "tree.png"

    fig = plot_layout(layout, out)

    assert out.exists()
    assert out.stat().st_size > 0
    assert len(fig.axes[0].patches) == len(layout.positions) + len(layout.connectors)


def test_plot_empty_layout(tmp_path):
    out = tmp_path / "empty.svg"
    fig = plot_layout(compute_layout([], []), out, DEFAULT_CONFIG)
    assert out.exists()
    assert [t.get_text() for t in fig.axes[0].texts] == [EMPTY_MESSAGE]


@pytest.mark.parametrize(
    "gender, fill",
    [(Gender.MALE, "lightblue"), (Gender.OTHER, "lavender"), (None, "whitesmoke")],
)
def test_node_colour_by_gender(tmp_path, gender, fill):
    layout = compute_layout([Person(id="a", first_name="A", gender=gender)], [])
    fig = plot_layout(layout, tmp_path / "one.png")
    (box,) = fig.axes[0].patches
    assert box.get_facecolor() == to_rgba(fill)
