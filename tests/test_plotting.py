"""
Tests for DOT export and matplotlib rendering.
"""

import pydot

from genogram.layout import layout_document
from genogram.plotting import person_label, plot_layout, to_dot


def test_person_label():
    assert person_label({"name": "Taro", "birthYear": 1950}) == "Taro\n1950"
    assert person_label({"name": "Taro"}) == "Taro"


def test_to_dot_counts(family_layout):
    P = to_dot(family_layout)
    assert isinstance(P, pydot.Dot)
    assert len(P.get_nodes()) == len(family_layout.nodes)
    assert len(P.get_edges()) == len(family_layout.edges)


def test_to_dot_pins_positions(small_layout):
    text = to_dot(small_layout).to_string()
    assert "100,-100!" in text
    assert "150,-260!" in text
    assert "point" in text


def test_plot_to_png(family_layout, tmp_path):
    output = tmp_path / "family.png"
    plot_layout(family_layout, output)
    assert output.exists()
    assert output.read_bytes()[:4] == b"\x89PNG"


def test_plot_all_statuses(tmp_path):
    doc = {
        "members": [
            {"id": "a", "gender": "M", "isKeyPerson": True},
            {"id": "b", "gender": "F", "isDeceased": True},
            {"id": "c", "gender": "U"},
            {"id": "d", "gender": "F"},
        ],
        "marriages": [
            {"husband": "a", "wife": "b", "status": "divorced"},
            {"husband": "a", "wife": "c", "status": "separated"},
            {"husband": "a", "wife": "d", "status": "cohabitation"},
        ],
    }
    output = tmp_path / "statuses.svg"
    plot_layout(layout_document(doc), output)
    assert output.exists()
