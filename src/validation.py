"""Record validation and snapshot diagnostics for family tree data."""

from collections import Counter

from graph import build_graph, find_parent_cycles
from models import Person, Relationship


class InvalidPersonError(ValueError):
    pass


class RelationshipError(ValueError):
    pass


class MissingPersonError(RelationshipError):
    pass


class SelfParentError(RelationshipError):
    pass


class DuplicateRelationshipError(RelationshipError):
    pass


def validate_person(person: Person) -> None:
    """Reject a person record that could not be created."""
    if not person.first_name or not person.first_name.strip():
        raise InvalidPersonError(f"First name is required (person {person.id})")
    if person.birth_date and person.death_date and person.death_date < person.birth_date:
        raise InvalidPersonError(f"{person.display_name} cannot die before being born")


def validate_new_relationship(
    relationships: list[Relationship],
    parent_id: str,
    child_id: str,
    known_ids: set[str] | None = None,
) -> None:
    """
    Check that a parent -> child edge may be added to `relationships`.

    Args:
        relationships: The existing edges
        parent_id: Proposed parent
        child_id: Proposed child
        known_ids: If given, both ids must be in it

    Raises:
        MissingPersonError: An id is empty or unknown
        SelfParentError: parent_id == child_id
        DuplicateRelationshipError: The pair already exists
    """
    if not parent_id or not child_id:
        raise MissingPersonError("Both parent and child are required")
    if known_ids is not None:
        for person_id in (parent_id, child_id):
            if person_id not in known_ids:
                raise MissingPersonError(f"Person ID {person_id} not found")
    if parent_id == child_id:
        raise SelfParentError(f"Person {parent_id} cannot be their own parent")
    for rel in relationships:
        if rel.parent_id == parent_id and rel.child_id == child_id:
            raise DuplicateRelationshipError(
                f"Relationship {parent_id} -> {child_id} already exists ({rel.id})"
            )


def validate_snapshot(people: list[Person], relationships: list[Relationship]) -> list[str]:
    """
    Validate a snapshot for:
    - Duplicate person ids
    - Edges to unknown people, self-parent edges and duplicate edges
    - Cycles in parent-child relationships
    - Person records that could not be created (no first name, death before birth)
    - Child born before (or soon after) a parent

    Returns a list of warning messages. Layout tolerates all of these.
    """
    warnings: list[str] = []
    known_ids = {p.id for p in people}

    for person_id, count in Counter(p.id for p in people).items():
        if count > 1:
            warnings.append(f"Person ID {person_id} appears {count} times")

    pair_counts = Counter((r.parent_id, r.child_id) for r in relationships)
    for rel in relationships:
        if rel.parent_id == rel.child_id:
            warnings.append(f"Self-parent edge {rel.id} on {rel.parent_id}")
        missing = [i for i in (rel.parent_id, rel.child_id) if i not in known_ids]
        if missing:
            warnings.append(f"Edge {rel.id} references unknown people: {missing}")
    for (parent_id, child_id), count in pair_counts.items():
        if count > 1:
            warnings.append(f"Edge {parent_id} -> {child_id} appears {count} times")

    G = build_graph(people, relationships)

    for cycle in find_parent_cycles(G):
        warnings.append(f"Cycle detected in parent-child relationships: {cycle}")

    for parent, child in G.edges():
        parent_person: Person = G.nodes[parent]["person"]
        child_person: Person = G.nodes[child]["person"]
        if parent_person.birth_date and child_person.birth_date:
            if child_person.birth_date < parent_person.birth_date:
                warnings.append(
                    f"Impossible: {child_person.display_name} born before parent "
                    f"{parent_person.display_name}"
                )
            # Parent younger than 12 at the birth
            elif child_person.birth_date.year - parent_person.birth_date.year < 12:
                warnings.append(
                    f"Suspicious: {parent_person.display_name} was less than 12 years "
                    f"old when {child_person.display_name} was born"
                )

    for person in people:
        try:
            validate_person(person)
        except InvalidPersonError as e:
            warnings.append(f"Invalid person: {e}")

    return warnings
