"""
1) Parse a GEDCOM file into the normalized family model.
    - Ignore non-standard, vendor-specific custom tags.
2) Build the relationship graph from it.
3) Optionally show ancestors, descendants and immediate family of one person.
4) Optionally validate the family tree data for cycles, impossible ages and date ordering.
"""

import argparse
import logging
import sys

from gedgraph.config import configure_logging, load_settings
from gedgraph.graph import build_relationship_graph, get_ancestors, get_descendants, get_immediate_family
from gedgraph.models import Profile
from gedgraph.parsing import ParseError, parse_gedcom_file
from gedgraph.validation import validate_graph

logger = logging.getLogger("gedgraph")


def describe(profile: Profile) -> str:
    return f"{profile.id} {profile.full_name}"


def build_arg_parser(default_generations: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gedgraph", description="Parse a GEDCOM file and query family relationships."
    )
    parser.add_argument("gedcom", help="path to the GEDCOM file")
    parser.add_argument("--person", help="cross-reference id of a person to query, e.g. @I1@")
    parser.add_argument(
        "--generations",
        type=int,
        default=default_generations,
        help=f"generations to walk for ancestors/descendants (default {default_generations})",
    )
    parser.add_argument("--validate", action="store_true", help="check the tree for inconsistencies")
    parser.add_argument("--log-level", help="logging level (default from GEDGRAPH_LOG_LEVEL or INFO)")
    return parser


def show_person(person_id: str, graph, generations: int):
    if person_id not in graph.individuals:
        print(f"Person not found: {person_id}")
        return

    print(f"Ancestors of {person_id} ({generations} generations):")
    for profile in get_ancestors(person_id, graph, generations):
        print(f"  - {describe(profile)}")

    print(f"Descendants of {person_id} ({generations} generations):")
    for profile in get_descendants(person_id, graph, generations):
        print(f"  - {describe(profile)}")

    family = get_immediate_family(person_id, graph)
    for label, members in (
        ("Parents", family.parents),
        ("Spouses", family.spouses),
        ("Children", family.children),
        ("Siblings", family.siblings),
    ):
        print(f"{label}: " + (", ".join(describe(p) for p in members) or "none"))


def main(argv: list[str] | None = None) -> int:
    try:
        settings = load_settings()
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    args = build_arg_parser(settings.generations).parse_args(argv)
    try:
        configure_logging(args.log_level or settings.log_level)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    if args.generations < 0:
        logger.error("--generations must not be negative")
        return 2

    try:
        data = parse_gedcom_file(args.gedcom, encoding=settings.encoding)
    except ParseError as exc:
        logger.error("%s", exc)
        return 1

    print(f"Found {len(data.individuals)} individuals and {len(data.families)} families")
    graph = build_relationship_graph(data)

    if args.person:
        show_person(args.person, graph, args.generations)

    if args.validate:
        warnings = validate_graph(graph)
        if warnings:
            print(f"Found {len(warnings)} validation warnings:")
            for w in warnings[:10]:  # Show first 10 warnings
                print(f"    - {w}")
            if len(warnings) > 10:
                print(f"    ... and {len(warnings) - 10} more")
        else:
            print("No validation issues found")

    return 0


if __name__ == "__main__":
    sys.exit(main())
