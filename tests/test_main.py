import json

import pytest

from main import main, restrict_to_descendants
from conftest import make_edges, make_people


def test_main_renders_snapshot(tmp_path, snapshot_data, capsys):
    source = tmp_path / "tree.json"
    source.write_text(json.dumps(snapshot_data), encoding="utf-8")
    out = tmp_path / "tree.png"

    assert main([str(source), "-o", str(out)]) == 0

    assert out.exists()
    stdout = capsys.readouterr().out
    assert "Found 4 people and 2 relationships" in stdout
    assert "3 trees, largest has 2 people" in stdout
    assert "2 connectors" in stdout


def test_main_reports_bad_input(tmp_path, capsys):
    source = tmp_path / "tree.json"
    source.write_text("{}", encoding="utf-8")

    assert main([str(source), "-o", str(tmp_path / "x.png")]) == 1
    assert "Error:" in capsys.readouterr().err


@pytest.mark.parametrize("payload", [{"people": None}, {"people": [{"id": "a", "firstName": None}]}])
def test_main_reports_malformed_records(tmp_path, capsys, payload):
    source = tmp_path / "tree.json"
    source.write_text(json.dumps(payload), encoding="utf-8")

    assert main([str(source), "-o", str(tmp_path / "x.png")]) == 1
    assert "Error:" in capsys.readouterr().err
    assert not (tmp_path / "x.png").exists()


def test_main_unknown_focus(tmp_path, snapshot_data):
    source = tmp_path / "tree.json"
    source.write_text(json.dumps(snapshot_data), encoding="utf-8")
    assert main([str(source), "--focus", "nobody", "-o", str(tmp_path / "x.png")]) == 1


def test_restrict_to_descendants():
    people = make_people("a", "b", "c", "d")
    edges = make_edges(("a", "b"), ("b", "c"), ("d", "c"))
    kept_people, kept_edges = restrict_to_descendants(people, edges, "b")
    assert [p.id for p in kept_people] == ["b", "c"]
    assert [(r.parent_id, r.child_id) for r in kept_edges] == [("b", "c")]
