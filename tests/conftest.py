import matplotlib

matplotlib.use("Agg")

import pytest

from models import Gender, Person, Relationship


def make_people(*ids: str) -> list[Person]:
    return [Person(id=i, first_name=i) for i in ids]


def make_edges(*pairs: tuple[str, str]) -> list[Relationship]:
    return [Relationship(id=f"r{n}", parent_id=p, child_id=c) for n, (p, c) in enumerate(pairs)]


@pytest.fixture
def snapshot_data():
    """A snapshot as served by the tree endpoint."""
    return {
        "people": [
            {
                "id": "p1",
                "firstName": "Karen",
                "lastName": "Hansen",
                "birthDate": "1950-03-14",
                "deathDate": None,
                "gender": "female",
                "notes": "",
            },
            {"id": "p2", "firstName": "Jens", "lastName": "Hansen", "gender": "male"},
            {"id": "p3", "firstName": "Mette", "lastName": None, "birthDate": "1978-11-02"},
            {"id": "p4", "firstName": "Ole"},
        ],
        "relationships": [
            {"id": "r1", "parentId": "p1", "childId": "p3"},
            {"id": "r2", "parentId": "p2", "childId": "p3"},
        ],
    }


@pytest.fixture
def family():
    people = [
        Person(id="p1", first_name="Karen", gender=Gender.FEMALE),
        Person(id="p2", first_name="Jens", gender=Gender.MALE),
        Person(id="p3", first_name="Mette"),
    ]
    return people, make_edges(("p1", "p3"), ("p2", "p3"))
