"""Recursive subtree-width layout of a family forest."""

import logging

from config import DEFAULT_CONFIG, LayoutConfig
from forest import build_forest
from models import Connector, Forest, ForestLayout, NodePosition, Person, Relationship, TreeNode

logger = logging.getLogger(__name__)


def children_width(node: TreeNode, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Combined width of a node's child subtrees, with h_gap between siblings."""
    if not node.children:
        return 0.0
    total = sum(subtree_width(child, config) for child in node.children)
    return total + config.h_gap * (len(node.children) - 1)


def subtree_width(node: TreeNode, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Width reserved for a subtree; never narrower than a single node box."""
    if not node.children:
        return config.node_width
    return max(config.node_width, children_width(node, config))


def layout_tree(
    node: TreeNode,
    x: float,
    y: float,
    positions: list[NodePosition],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> None:
    """
    Place `node` with its centre at `x` and its top at `y`, then its subtree.

    Children are spread left to right under the parent, each centred in its
    own subtree width, so the parent sits over the midpoint of their span.
    """
    positions.append(NodePosition(node=node, x=x, y=y))
    if not node.children:
        return

    current_x = x - children_width(node, config) / 2
    child_y = y + config.node_height + config.v_gap

    for child in node.children:
        child_width = subtree_width(child, config)
        layout_tree(child, current_x + child_width / 2, child_y, positions, config)
        current_x += child_width + config.h_gap


def build_connectors(
    positions: list[NodePosition],
    relationships: list[Relationship],
    config: LayoutConfig = DEFAULT_CONFIG,
    skip_child_ids: set[str] | None = None,
) -> list[Connector]:
    """
    One connector per edge whose endpoints both have a position.

    Every edge is considered, not just the ones the tree walk followed, so a
    second parent in another tree still gets its curve. Self-loops, repeated
    pairs and edges into `skip_child_ids` are not drawn.
    """
    skip_child_ids = skip_child_ids or set()
    position_map = {pos.person.id: pos for pos in positions}
    seen: set[tuple[str, str]] = set()
    connectors: list[Connector] = []

    for rel in relationships:
        key = (rel.parent_id, rel.child_id)
        if rel.parent_id == rel.child_id or key in seen or rel.child_id in skip_child_ids:
            continue
        parent_pos = position_map.get(rel.parent_id)
        child_pos = position_map.get(rel.child_id)
        if parent_pos is None or child_pos is None:
            logger.debug("No connector for edge %s: endpoint not placed", rel.id)
            continue
        seen.add(key)
        connectors.append(
            Connector(
                parent_id=rel.parent_id,
                child_id=rel.child_id,
                x1=parent_pos.x,
                y1=parent_pos.y + config.node_height,
                x2=child_pos.x,
                y2=child_pos.y,
            )
        )

    return connectors


def layout_forest(
    forest: Forest,
    relationships: list[Relationship],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> ForestLayout:
    """Lay out root trees left to right and compute connectors and canvas size."""
    if not forest.trees:
        return ForestLayout()

    positions: list[NodePosition] = []
    offset_x = 0.0
    for tree in forest.trees:
        width = subtree_width(tree, config)
        layout_tree(tree, offset_x + width / 2 + config.margin, config.margin, positions, config)
        offset_x += width + config.tree_gap

    connectors = build_connectors(positions, relationships, config, forest.detached_ids)

    width = max(pos.x + config.node_width / 2 for pos in positions) + config.margin
    height = max(pos.y + config.node_height for pos in positions) + config.margin

    return ForestLayout(positions=positions, connectors=connectors, width=width, height=height)


def compute_layout(
    people: list[Person],
    relationships: list[Relationship],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> ForestLayout:
    """Build the forest for a snapshot and lay it out. Zero people gives an empty layout."""
    if not people:
        return ForestLayout()
    forest = build_forest(people, relationships)
    return layout_forest(forest, relationships, config)
