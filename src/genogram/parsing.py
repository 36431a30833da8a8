"""Parsing of raw genogram description documents."""

from collections.abc import Mapping
import json
import logging
from pathlib import Path

from genogram.errors import InvalidInputError
from genogram.models import Gender, Person, Union, UnionStatus

logger = logging.getLogger(__name__)


GENDER_MAP = {
    "M": Gender.MALE,
    "MALE": Gender.MALE,
    "F": Gender.FEMALE,
    "FEMALE": Gender.FEMALE,
    "U": Gender.UNKNOWN,
    "UNKNOWN": Gender.UNKNOWN,
}


def _records(doc: Mapping, key: str) -> list:
    if key not in doc:
        raise InvalidInputError(f"Document has no '{key}' list")
    value = doc[key]
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError(f"'{key}' must be a list, got {type(value).__name__}")
    return list(value)


def _ref(value) -> str | None:
    """Normalize a person reference; empty values mean 'absent'."""
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list, tuple)):
        raise InvalidInputError(f"Person reference must be a string, got {value!r}")
    return str(value)


def parse_gender(value) -> Gender:
    if not value:
        return Gender.UNKNOWN
    return GENDER_MAP.get(str(value).strip().upper(), Gender.UNKNOWN)


def parse_status(value) -> UnionStatus:
    if not value:
        return UnionStatus.MARRIED
    try:
        return UnionStatus(str(value).strip().lower())
    except ValueError:
        logger.warning("Unknown marriage status %r, treating as married", value)
        return UnionStatus.MARRIED


def parse_birth_year(value) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring unparseable birthYear %r", value)
        return None


def parse_generation(value) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise InvalidInputError(f"generation must be a number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"generation must be a number, got {value!r}") from None


def parse_member(rec) -> Person:
    if not isinstance(rec, Mapping):
        raise InvalidInputError(f"Member record must be an object, got {rec!r}")
    person_id = _ref(rec.get("id"))
    if person_id is None:
        raise InvalidInputError(f"Member record has no id: {dict(rec)!r}")

    return Person(
        id=person_id,
        name=str(rec.get("name") or "Unknown"),
        gender=parse_gender(rec.get("gender")),
        birth_year=parse_birth_year(rec.get("birthYear")),
        is_deceased=bool(rec.get("isDeceased", False)),
        is_self=bool(rec.get("isSelf", False)),
        is_key_person=bool(rec.get("isKeyPerson", False)),
        generation=parse_generation(rec.get("generation")),
        note=rec.get("note") or None,
    )


def parse_marriage(rec, index: int) -> Union:
    if not isinstance(rec, Mapping):
        raise InvalidInputError(f"Marriage record must be an object, got {rec!r}")

    children = rec.get("children") or []
    if not isinstance(children, (list, tuple)):
        raise InvalidInputError(f"'children' must be a list, got {children!r}")

    union_id = _ref(rec.get("id"))
    return Union(
        id=union_id or f"marriage-node-{index}",
        id_given=union_id is not None,
        partner_a=_ref(rec.get("husband")),
        partner_b=_ref(rec.get("wife")),
        status=parse_status(rec.get("status")),
        children=[c for c in (_ref(child) for child in children) if c is not None],
    )


def parse_document(doc) -> tuple[list[Person], list[Union]]:
    """
    Convert a raw {members, marriages} document into Person and Union records.

    Only the overall shape is checked here. References between records are
    resolved (and reported) by the layout pass.

    Raises:
        InvalidInputError: if the document or one of its records has the wrong shape
    """
    if not isinstance(doc, Mapping):
        raise InvalidInputError(f"Document must be an object, got {type(doc).__name__}")

    members = [parse_member(rec) for rec in _records(doc, "members")]
    unions = [parse_marriage(rec, i) for i, rec in enumerate(_records(doc, "marriages"))]
    return members, unions


def load_document(path: Path) -> dict:
    """Read a JSON document from disk."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidInputError(f"Cannot read {path}: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"{path} is not valid JSON: {e}") from e
