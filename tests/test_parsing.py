"""
Tests for raw document parsing.
"""

import pytest

from genogram.errors import InvalidInputError
from genogram.models import Gender, UnionStatus
from genogram.parsing import load_document, parse_document


def test_defaults_for_missing_fields():
    members, unions = parse_document(
        {"members": [{"id": "p1"}], "marriages": [{"husband": "p1"}]}
    )
    p = members[0]
    assert p.name == "Unknown"
    assert p.gender is Gender.UNKNOWN
    assert p.generation == 0
    assert p.birth_year is None
    assert not p.is_deceased and not p.is_self and not p.is_key_person

    u = unions[0]
    assert u.id == "marriage-node-0"
    assert u.partner_a == "p1"
    assert u.partner_b is None
    assert u.status is UnionStatus.MARRIED
    assert u.children == []


def test_full_member():
    members, _ = parse_document(
        {
            "members": [
                {
                    "id": "self",
                    "name": "Taro",
                    "gender": "M",
                    "birthYear": 1940,
                    "isDeceased": True,
                    "isSelf": True,
                    "isKeyPerson": True,
                    "generation": -1,
                    "note": "lives alone",
                }
            ],
            "marriages": [],
        }
    )
    p = members[0]
    assert p.gender is Gender.MALE
    assert p.birth_year == 1940
    assert p.is_self and p.is_deceased and p.is_key_person
    assert p.generation == -1
    assert p.to_dict()["note"] == "lives alone"


def test_numeric_ids_become_strings():
    members, unions = parse_document(
        {"members": [{"id": 1}, {"id": 2}], "marriages": [{"husband": 1, "wife": 2, "children": []}]}
    )
    assert members[0].id == "1"
    assert (unions[0].partner_a, unions[0].partner_b) == ("1", "2")


def test_status_and_gender_normalized():
    members, unions = parse_document(
        {
            "members": [{"id": "a", "gender": "female"}],
            "marriages": [{"husband": "a", "status": "Divorced"}, {"husband": "a", "status": "engaged"}],
        }
    )
    assert members[0].gender is Gender.FEMALE
    assert unions[0].status is UnionStatus.DIVORCED
    assert unions[1].status is UnionStatus.MARRIED


def test_bad_birth_year_ignored():
    members, _ = parse_document({"members": [{"id": "a", "birthYear": "unknown"}], "marriages": []})
    assert members[0].birth_year is None


@pytest.mark.parametrize(
    "doc",
    [
        None,
        [],
        {"marriages": []},
        {"members": []},
        {"members": {"id": "a"}, "marriages": []},
        {"members": ["a"], "marriages": []},
        {"members": [{"name": "no id"}], "marriages": []},
        {"members": [{"id": "a", "generation": "old"}], "marriages": []},
        {"members": [], "marriages": [{"husband": "a", "children": "b"}]},
        {"members": [], "marriages": ["a"]},
    ],
)
def test_invalid_shapes(doc):
    with pytest.raises(InvalidInputError):
        parse_document(doc)


def test_load_document(tmp_path):
    path = tmp_path / "doc.json"
    path.write_text('{"members": [], "marriages": []}', encoding="utf-8")
    assert load_document(path) == {"members": [], "marriages": []}

    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        load_document(path)


def test_load_document_unreadable(tmp_path):
    with pytest.raises(InvalidInputError):
        load_document(tmp_path / "missing.json")
    with pytest.raises(InvalidInputError):
        load_document(tmp_path)


def test_generated_union_ids_marked():
    _, unions = parse_document(
        {"members": [], "marriages": [{"id": "m1", "husband": "a"}, {"husband": "b"}]}
    )
    assert (unions[0].id, unions[0].id_given) == ("m1", True)
    assert (unions[1].id, unions[1].id_given) == ("marriage-node-1", False)
