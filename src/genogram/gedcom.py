"""Import of GEDCOM files into raw genogram documents."""

import logging
from pathlib import Path
import re

from ged4py import GedcomReader
import networkx as nx

from genogram.errors import InvalidInputError

logger = logging.getLogger(__name__)


def normalize_xref(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a plain id 'I_347421849'."""
    return xref_id.strip().strip("@")


def extract_name(indi) -> str:
    """Extract a display name from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return "Unknown"

    name_value = name_rec.value
    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_value, tuple):
        parts = [p for p in name_value if p]
        return " ".join(parts) if parts else "Unknown"

    return str(name_value).replace("/", "").strip() or "Unknown"


def extract_sex(indi) -> str:
    sex_rec = indi.sub_tag("SEX")
    value = sex_rec.value if sex_rec else None
    return value if value in ("M", "F") else "U"


def extract_birth_year(indi) -> int | None:
    date_rec = indi.sub_tag("BIRT/DATE")
    if date_rec is None or not date_rec.value:
        return None
    # ged4py may return DateValue objects; the year is the first 4-digit run
    match = re.search(r"\b(\d{4})\b", str(date_rec.value))
    return int(match.group(1)) if match else None


def infer_generations(kinship: nx.DiGraph, self_id: str) -> dict[str, int]:
    """
    Assign each reachable person a generation relative to `self_id`.

    Edges of `kinship` carry a `delta`: +1 parent to child, -1 child to
    parent, 0 between spouses. The first path found breadth-first wins.
    """
    generations = {self_id: 0}
    for u, v in nx.bfs_edges(kinship, self_id):
        generations[v] = generations[u] + kinship.edges[u, v]["delta"]
    return generations


def load_gedcom_document(path: Path, self_ref: str | None = None) -> dict:
    """
    Read a GEDCOM file into a {members, marriages} document.

    Args:
        path: GEDCOM file
        self_ref: xref of the care recipient; defaults to the first individual

    Returns:
        A raw document accepted by layout_document()
    """
    members: list[dict] = []
    marriages: list[dict] = []

    with GedcomReader(str(path)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue
            members.append(
                {
                    "id": normalize_xref(rec.xref_id),
                    "name": extract_name(rec),
                    "gender": extract_sex(rec),
                    "birthYear": extract_birth_year(rec),
                    "isDeceased": rec.sub_tag("DEAT") is not None,
                }
            )

        for rec in reader.records0("FAM"):
            if rec.xref_id is None:
                continue
            husb = rec.sub_tag("HUSB")
            wife = rec.sub_tag("WIFE")
            marriages.append(
                {
                    "id": normalize_xref(rec.xref_id),
                    "husband": normalize_xref(husb.xref_id) if husb and husb.xref_id else None,
                    "wife": normalize_xref(wife.xref_id) if wife and wife.xref_id else None,
                    "status": "divorced" if rec.sub_tag("DIV") is not None else "married",
                    "children": [
                        normalize_xref(c.xref_id) for c in rec.sub_tags("CHIL") if c.xref_id
                    ],
                }
            )

    if not members:
        raise InvalidInputError(f"{path} contains no individuals")

    ids = [m["id"] for m in members]
    self_id = normalize_xref(self_ref) if self_ref else ids[0]
    if self_id not in ids:
        raise InvalidInputError(f"Individual {self_ref} not found in {path}")

    kinship = nx.DiGraph()
    kinship.add_nodes_from(ids)
    for fam in marriages:
        parents = [p for p in (fam["husband"], fam["wife"]) if p]
        if len(parents) == 2:
            kinship.add_edge(parents[0], parents[1], delta=0)
            kinship.add_edge(parents[1], parents[0], delta=0)
        for child in fam["children"]:
            for parent in parents:
                kinship.add_edge(parent, child, delta=1)
                kinship.add_edge(child, parent, delta=-1)

    generations = infer_generations(kinship, self_id)
    unreachable = [i for i in ids if i not in generations]
    if unreachable:
        logger.warning(
            "%d individual(s) are not related to %s and stay in generation 0", len(unreachable), self_id
        )

    for member in members:
        member["generation"] = generations.get(member["id"], 0)
        member["isSelf"] = member["id"] == self_id

    return {"members": members, "marriages": marriages}
