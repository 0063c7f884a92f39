"""NetworkX graph building and queries over a family snapshot."""

import networkx as nx

from models import Person, Relationship


def build_graph(people: list[Person], relationships: list[Relationship]) -> nx.DiGraph:
    """
    Build a directed parent -> child graph from a snapshot.

    Person records are stored on the nodes under `person`. Edges whose
    endpoints are not both known people are left out, as are self-loops.
    """
    G = nx.DiGraph()

    for person in people:
        if person.id not in G:
            G.add_node(person.id, person=person)

    for rel in relationships:
        if rel.parent_id == rel.child_id:
            continue
        if rel.parent_id not in G or rel.child_id not in G:
            continue
        if not G.has_edge(rel.parent_id, rel.child_id):
            G.add_edge(rel.parent_id, rel.child_id, relationship_id=rel.id)

    return G


def _require(G: nx.DiGraph, person_id: str) -> None:
    if person_id not in G:
        raise ValueError(f"Person ID {person_id} not found in graph")


def get_parents(G: nx.DiGraph, person_id: str) -> list[Person]:
    """Parents of a person, in edge insertion order."""
    _require(G, person_id)
    return [G.nodes[p]["person"] for p in G.predecessors(person_id)]


def get_children(G: nx.DiGraph, person_id: str) -> list[Person]:
    """Children of a person, in edge insertion order."""
    _require(G, person_id)
    return [G.nodes[c]["person"] for c in G.successors(person_id)]


def get_descendant_subgraph(G: nx.DiGraph, person_id: str) -> nx.DiGraph:
    """
    Extract the subgraph of a person and everyone descended from them.

    Args:
        G: The full graph
        person_id: The person to start from

    Returns:
        A copy of the subgraph induced by `person_id` and its descendants
    """
    _require(G, person_id)
    nodes = nx.descendants(G, person_id) | {person_id}
    return G.subgraph(nodes).copy()


def find_parent_cycles(G: nx.DiGraph) -> list[list[str]]:
    """Every elementary parent-child cycle, as lists of person ids."""
    return [list(cycle) for cycle in nx.simple_cycles(G)]
