"""
1) Load a family snapshot (JSON from the tree endpoint, or a GEDCOM file).
2) Validate it and report warnings.
3) Build the forest of trees from people and parent-child edges.
4) Lay the forest out.
5) Render the diagram.
"""

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

from config import DEFAULT_CONFIG, LayoutConfig
from forest import build_forest, iter_nodes
from graph import build_graph, get_descendant_subgraph
from layout import layout_forest
from models import Person, Relationship
from parsing import load_gedcom, load_snapshot
from plotting import plot_layout
from validation import validate_snapshot

MAX_WARNINGS = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="famtree", description="Lay out and draw a family tree snapshot."
    )
    parser.add_argument("input", type=Path, help="JSON snapshot or GEDCOM file")
    parser.add_argument(
        "-o", "--output", type=Path, default=None, help="PNG/SVG/PDF to write (default: show)"
    )
    parser.add_argument(
        "--gedcom", action="store_true", help="Read INPUT as GEDCOM (implied by .ged)"
    )
    parser.add_argument("--focus", default=None, help="Only draw this person and descendants")
    parser.add_argument("--node-width", type=float, default=DEFAULT_CONFIG.node_width)
    parser.add_argument("--node-height", type=float, default=DEFAULT_CONFIG.node_height)
    parser.add_argument("--h-gap", type=float, default=DEFAULT_CONFIG.h_gap)
    parser.add_argument("--v-gap", type=float, default=DEFAULT_CONFIG.v_gap)
    parser.add_argument("--margin", type=float, default=DEFAULT_CONFIG.margin)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dropped edges")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> LayoutConfig:
    return replace(
        DEFAULT_CONFIG,
        node_width=args.node_width,
        node_height=args.node_height,
        h_gap=args.h_gap,
        v_gap=args.v_gap,
        margin=args.margin,
    )


def load_input(path: Path, gedcom: bool = False) -> tuple[list[Person], list[Relationship]]:
    if gedcom or path.suffix.lower() == ".ged":
        return load_gedcom(path)
    return load_snapshot(path)


def restrict_to_descendants(
    people: list[Person], relationships: list[Relationship], person_id: str
) -> tuple[list[Person], list[Relationship]]:
    """Keep `person_id`, their descendants and the edges among them."""
    keep = set(get_descendant_subgraph(build_graph(people, relationships), person_id))
    return (
        [p for p in people if p.id in keep],
        [r for r in relationships if r.parent_id in keep and r.child_id in keep],
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)

    print(f"Loading: {args.input}")
    try:
        people, relationships = load_input(args.input, args.gedcom)
        if args.focus:
            people, relationships = restrict_to_descendants(people, relationships, args.focus)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"  Found {len(people)} people and {len(relationships)} relationships")

    print("Validating...")
    warnings = validate_snapshot(people, relationships)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:MAX_WARNINGS]:
            print(f"    - {w}")
        if len(warnings) > MAX_WARNINGS:
            print(f"    ... and {len(warnings) - MAX_WARNINGS} more")
    else:
        print("  No validation issues found")

    print("Building forest...")
    forest = build_forest(people, relationships)
    sizes = [sum(1 for _ in iter_nodes(tree)) for tree in forest.trees]
    print(f"  {len(forest)} trees, largest has {max(sizes, default=0)} people")

    print("Laying out...")
    layout = layout_forest(forest, relationships, config)
    print(f"  Canvas {layout.width:g} x {layout.height:g}, {len(layout.connectors)} connectors")

    plot_layout(layout, args.output, config)
    if args.output:
        print(f"Diagram saved to {args.output}")

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
