from datetime import date

import pytest

from conftest import make_edges, make_people
from models import Person
from validation import (
    DuplicateRelationshipError,
    InvalidPersonError,
    MissingPersonError,
    RelationshipError,
    SelfParentError,
    validate_new_relationship,
    validate_person,
    validate_snapshot,
)


class TestValidatePerson:
    def test_accepts_minimal_person(self):
        validate_person(Person(id="a", first_name="Anna"))

    @pytest.mark.parametrize("name", ["", "   "])
    def test_requires_first_name(self, name):
        with pytest.raises(InvalidPersonError):
            validate_person(Person(id="a", first_name=name))

    def test_rejects_death_before_birth(self):
        person = Person(
            id="a", first_name="Anna", birth_date=date(1900, 5, 1), death_date=date(1899, 1, 1)
        )
        with pytest.raises(InvalidPersonError, match="before being born"):
            validate_person(person)


class TestValidateNewRelationship:
    def test_accepts_new_edge(self):
        validate_new_relationship(make_edges(("a", "b")), "a", "c", known_ids={"a", "b", "c"})

    def test_rejects_self_parent(self):
        with pytest.raises(SelfParentError):
            validate_new_relationship([], "a", "a")

    def test_rejects_duplicate(self):
        with pytest.raises(DuplicateRelationshipError):
            validate_new_relationship(make_edges(("a", "b")), "a", "b")

    def test_reverse_pair_is_not_a_duplicate(self):
        validate_new_relationship(make_edges(("a", "b")), "b", "a")

    @pytest.mark.parametrize("parent, child", [("", "b"), ("a", None), ("a", "zz")])
    def test_rejects_missing_people(self, parent, child):
        with pytest.raises(MissingPersonError):
            validate_new_relationship([], parent, child, known_ids={"a", "b"})

    def test_errors_are_value_errors(self):
        assert issubclass(RelationshipError, ValueError)
        assert issubclass(SelfParentError, RelationshipError)


class TestValidateSnapshot:
    def test_clean_snapshot(self, family):
        people, edges = family
        assert validate_snapshot(people, edges) == []

    def test_reports_edge_problems(self):
        people = make_people("a", "b")
        edges = make_edges(("a", "a"), ("a", "ghost"), ("a", "b"), ("a", "b"))
        warnings = validate_snapshot(people, edges)

        assert any("Self-parent" in w for w in warnings)
        assert any("unknown people: ['ghost']" in w for w in warnings)
        assert any("a -> b appears 2 times" in w for w in warnings)

    def test_reports_duplicate_person_ids(self):
        warnings = validate_snapshot(make_people("a", "a"), [])
        assert warnings == ["Person ID a appears 2 times"]

    def test_reports_cycles(self):
        warnings = validate_snapshot(make_people("a", "b"), make_edges(("a", "b"), ("b", "a")))
        assert len(warnings) == 1
        assert warnings[0].startswith("Cycle detected")

    def test_reports_impossible_dates(self):
        people = [
            Person(id="p", first_name="Parent", birth_date=date(1950, 1, 1)),
            Person(id="c", first_name="Child", birth_date=date(1940, 1, 1)),
            Person(id="y", first_name="Young", birth_date=date(1955, 1, 1)),
            Person(
                id="d", first_name="Dead", birth_date=date(1900, 1, 1), death_date=date(1800, 1, 1)
            ),
        ]
        warnings = validate_snapshot(people, make_edges(("p", "c"), ("p", "y")))

        assert "Impossible: Child born before parent Parent" in warnings
        assert any(w.startswith("Suspicious: Parent") for w in warnings)
        assert "Invalid person: Dead cannot die before being born" in warnings
