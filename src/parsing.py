"""Snapshot loading, GEDCOM import and date handling utilities."""

from datetime import date
import json
from pathlib import Path
import re

from ged4py import GedcomReader

from models import Gender, Person, Relationship


class SnapshotError(ValueError):
    pass


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)


def _make_date(year: int, month: int | None, day: int | None) -> date | None:
    # 00 month/day in ISO-like input means "unknown"
    try:
        return date(year, month or 1, day or 1)
    except ValueError:
        return None


def _month(name: str) -> int | None:
    return MONTH_MAP.get(name.upper().rstrip("."))


def parse_date_string(date_str: str | None) -> date | None:
    """
    Parse a stored or GEDCOM date string into a date.
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1954-11-25" (ISO, as stored by the web application)
    - "25 NOV 1954", "08 March 1893", "11 Aug. 1968"
    - "NOV 1954", "May, 1837"
    - "1698", "ABT 1905", "(about 1833)"
    - "April 17, 1850", "SEPT. 17,1910"
    - "01/27/1920", "04 05 1911" (month first)

    Partial dates resolve to the first of the month or year.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None

    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", s)
    if match:
        return _make_date(*(int(g) for g in match.groups()))

    match = re.match(r"^(\d{4})$", s)
    if match:
        return _make_date(int(match.group(1)), None, None)

    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = _month(match.group(2))
        if month:
            return _make_date(int(match.group(3)), month, int(match.group(1)))

    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = _month(match.group(1))
        if month:
            return _make_date(int(match.group(2)), month, None)

    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = _month(match.group(1))
        if month:
            return _make_date(int(match.group(3)), month, int(match.group(2)))

    match = re.match(r"^(\d{1,2})(?:[-/]|\s+)(\d{1,2})(?:[-/]|\s+)(\d{4})$", s)
    if match:
        return _make_date(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    return None


# ============================================================================
# JSON snapshot
# ============================================================================


def _optional(record: dict, key: str) -> str | None:
    value = record.get(key)
    return str(value) if value not in (None, "") else None


def _required(record: dict, key: str, kind: str) -> str:
    if not isinstance(record, dict):
        raise SnapshotError(f"{kind} record must be an object: {record!r}")
    value = record.get(key)
    if value is None or value == "":
        raise SnapshotError(f"{kind} record is missing '{key}': {record!r}")
    return str(value)


def parse_person(record: dict) -> Person:
    """Build a Person from a camelCase record as served by the tree endpoint."""
    person_id = _required(record, "id", "Person")
    first_name = _required(record, "firstName", "Person")

    return Person(
        id=person_id,
        first_name=first_name,
        last_name=_optional(record, "lastName"),
        birth_date=parse_date_string(_optional(record, "birthDate")),
        death_date=parse_date_string(_optional(record, "deathDate")),
        gender=Gender.parse(_optional(record, "gender")),
        notes=_optional(record, "notes"),
    )


def parse_relationship(record: dict, index: int = 0) -> Relationship:
    """Build a Relationship from a `{id, parentId, childId}` record."""
    parent_id = _required(record, "parentId", "Relationship")
    child_id = _required(record, "childId", "Relationship")

    return Relationship(
        id=str(record.get("id") or f"rel-{index}"),
        parent_id=parent_id,
        child_id=child_id,
    )


def parse_snapshot(data: dict) -> tuple[list[Person], list[Relationship]]:
    """Split a `{"people": [...], "relationships": [...]}` document into records."""
    if not isinstance(data, dict) or not isinstance(data.get("people"), list):
        raise SnapshotError("Snapshot must be an object with a 'people' list")
    relationships = data.get("relationships")
    if relationships is None:
        relationships = []
    if not isinstance(relationships, list):
        raise SnapshotError("Snapshot 'relationships' must be a list")

    people = [parse_person(p) for p in data["people"]]
    relationships = [parse_relationship(r, i) for i, r in enumerate(relationships)]
    return people, relationships


def load_snapshot(path: Path) -> tuple[list[Person], list[Relationship]]:
    """Read a JSON snapshot file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path} is not valid JSON: {e}") from e
    return parse_snapshot(data)


# ============================================================================
# GEDCOM
# ============================================================================


def xref_to_id(xref_id: str) -> str:
    """Turn a GEDCOM xref like '@I_347421849@' into a person id."""
    person_id = xref_id.strip().strip("@")
    if not person_id:
        raise ValueError(f"Empty GEDCOM xref: {xref_id!r}")
    return person_id


def extract_name_parts(indi) -> tuple[str, str | None]:
    """Extract first name(s) and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return ("Unknown", None)

    # ged4py returns NAME as tuple: (given, surname, suffix)
    if isinstance(name_rec.value, tuple):
        given, surname, _ = name_rec.value
        return (given or "Unknown", surname or None)

    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    if givn and givn.value:
        return (givn.value, surn.value if surn else None)

    # Fallback: "Given /Surname/"
    given, _, rest = str(name_rec.value).partition("/")
    surname = rest.partition("/")[0].strip()
    return (given.strip() or "Unknown", surname or None)


def extract_event_date(indi, tag: str) -> date | None:
    """Extract the date of an event tag (BIRT, DEAT)."""
    event = indi.sub_tag(tag)
    if event is None:
        return None
    date_rec = event.sub_tag("DATE")
    if date_rec is None or not date_rec.value:
        return None
    # ged4py may return DateValue objects
    return parse_date_string(str(date_rec.value))


def extract_notes(indi) -> str | None:
    notes = [str(n.value) for n in indi.sub_tags("NOTE") if n.value]
    return "\n".join(notes) or None


def normalize_gedcom(reader: GedcomReader) -> tuple[list[Person], list[Relationship]]:
    """
    Extract people and parent -> child edges from parsed GEDCOM data.

    Each FAM record yields one edge per (HUSB or WIFE, CHIL) pair. Spouse
    links have no counterpart in this model and are skipped.
    """
    people: list[Person] = []
    relationships: list[Relationship] = []

    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            continue

        first_name, last_name = extract_name_parts(rec)
        sex_rec = rec.sub_tag("SEX")

        people.append(
            Person(
                id=xref_to_id(rec.xref_id),
                first_name=first_name,
                last_name=last_name,
                birth_date=extract_event_date(rec, "BIRT"),
                death_date=extract_event_date(rec, "DEAT"),
                gender=Gender.parse(sex_rec.value if sex_rec else None),
                notes=extract_notes(rec),
            )
        )

    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            continue
        fam_id = xref_to_id(rec.xref_id)

        parent_ids = []
        for tag in ("HUSB", "WIFE"):
            parent = rec.sub_tag(tag)
            if parent and parent.xref_id:
                parent_ids.append(xref_to_id(parent.xref_id))

        for child in rec.sub_tags("CHIL"):
            if not child.xref_id:
                continue
            child_id = xref_to_id(child.xref_id)
            for parent_id in parent_ids:
                relationships.append(
                    Relationship(
                        id=f"{fam_id}:{parent_id}:{child_id}",
                        parent_id=parent_id,
                        child_id=child_id,
                    )
                )

    return people, relationships


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Relationship]]:
    """Parse a GEDCOM file into people and relationships."""
    with GedcomReader(str(filepath)) as reader:
        return normalize_gedcom(reader)
