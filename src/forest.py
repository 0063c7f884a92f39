"""Forest construction: turn people and parent-child edges into rooted trees."""

import logging
from collections.abc import Iterable

from models import Forest, Person, Relationship, TreeNode

logger = logging.getLogger(__name__)


def child_ids(relationships: Iterable[Relationship]) -> set[str]:
    """Ids that appear as the child of any edge (self-loops excluded)."""
    return {r.child_id for r in relationships if r.parent_id != r.child_id}


def build_children_map(relationships: Iterable[Relationship]) -> dict[str, list[str]]:
    """
    Map each parent id to its child ids in edge insertion order.

    Self-loops and repeated (parent, child) pairs are dropped.
    """
    children_map: dict[str, list[str]] = {}
    for rel in relationships:
        if rel.parent_id == rel.child_id:
            logger.debug("Ignoring self-parent edge %s on %s", rel.id, rel.parent_id)
            continue
        children = children_map.setdefault(rel.parent_id, [])
        if rel.child_id in children:
            logger.debug("Ignoring duplicate edge %s -> %s", rel.parent_id, rel.child_id)
            continue
        children.append(rel.child_id)
    return children_map


def build_tree_node(
    person_id: str,
    person_map: dict[str, Person],
    children_map: dict[str, list[str]],
    visited: set[str],
) -> TreeNode | None:
    """
    Expand a person into a TreeNode by walking the children map.

    `visited` is owned by the caller and shared across a whole construction
    pass, so a person reachable along several paths (or around a cycle) is
    attached only where the walk first reaches them.

    Returns:
        The subtree, or None if the id was already visited or names nobody.
    """
    if person_id in visited:
        return None
    visited.add(person_id)

    person = person_map.get(person_id)
    if person is None:
        logger.debug("Edge references unknown person %s", person_id)
        return None

    node = TreeNode(person=person)
    for child_id in children_map.get(person_id, []):
        child = build_tree_node(child_id, person_map, children_map, visited)
        if child is not None:
            node.children.append(child)
    return node


def build_forest(people: list[Person], relationships: list[Relationship]) -> Forest:
    """
    Build the forest of root trees for a snapshot of people and edges.

    Roots are the people who are never a child, in people order. Anyone no
    root reaches (people whose only parents sit on an unreachable cycle) is
    appended as a standalone tree, again in people order. Every person ends
    up in exactly one place and this never raises.
    """
    children = child_ids(relationships)
    children_map = build_children_map(relationships)
    person_map = {p.id: p for p in people}

    forest = Forest()
    visited: set[str] = set()

    for person in people:
        if person.id in children:
            continue
        node = build_tree_node(person.id, person_map, children_map, visited)
        if node is not None:
            forest.trees.append(node)

    for person in people:
        if person.id in visited:
            continue
        # Duplicate ids in the people list collapse onto the first record
        visited.add(person.id)
        forest.trees.append(TreeNode(person=person))
        if person.id in children:
            logger.debug("Person %s is unreachable from any root, placed standalone", person.id)
            forest.detached_ids.add(person.id)

    return forest


def iter_nodes(node: TreeNode) -> Iterable[TreeNode]:
    """Yield a node and all its descendants, depth first."""
    yield node
    for child in node.children:
        yield from iter_nodes(child)
