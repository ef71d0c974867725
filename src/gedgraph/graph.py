"""
Relationship graph building and traversal.

The graph is built once from a FamilyData and is read-only afterwards. Each
ProfileNode holds a reference to its Profile plus relationships keyed by id;
nothing here mutates a Profile or Family, so the graph stays usable after the
caller drops the FamilyData. Rebuild it whenever the model changes.
"""

from collections import deque
import logging

import networkx as nx

from gedgraph.models import (
    ChildLink,
    FamilyData,
    ImmediateFamily,
    Profile,
    ProfileNode,
    RelationshipGraph,
    SiblingKind,
    SiblingLink,
    SpouseLink,
)

logger = logging.getLogger("gedgraph.graph")


def build_relationship_graph(data: FamilyData) -> RelationshipGraph:
    """
    Resolve famc/fams pointers into per-person parents, spouses, children and siblings.

    Pointers to unknown families are ignored. Relationship lists keep the order
    of the source pointers, so building twice gives identical graphs.

    Siblings are always classified as full siblings: only the children of the
    person's own famc family are considered.
    """
    individuals: dict[str, ProfileNode] = {}
    families = {}

    for family in data.families:
        if family.id in families:
            logger.warning("Duplicate family id %s, keeping the first", family.id)
            continue
        families[family.id] = family

    # First pass: one empty node per individual
    for profile in data.individuals:
        if profile.id in individuals:
            logger.warning("Duplicate individual id %s, keeping the first", profile.id)
            continue
        individuals[profile.id] = ProfileNode(profile=profile)

    # Second pass: relationships
    for node in individuals.values():
        profile = node.profile

        if profile.famc:
            family = families.get(profile.famc)
            if family is None:
                logger.debug("%s: famc %s does not resolve", profile.id, profile.famc)
            else:
                node.parents = tuple(p for p in (family.husb, family.wife) if p)
                for sibling_id in family.children:
                    if sibling_id != profile.id:
                        node.siblings.append(SiblingLink(sibling_id, SiblingKind.FULL))

        for fam_id in profile.fams:
            family = families.get(fam_id)
            if family is None:
                logger.debug("%s: fams %s does not resolve", profile.id, fam_id)
                continue

            spouse_id = family.wife if family.husb == profile.id else family.husb
            if spouse_id:
                node.spouses.append(SpouseLink(spouse_id, fam_id))

            for child_id in family.children:
                node.children.append(ChildLink(child_id, fam_id))

    logger.info("Built relationship graph with %d individuals and %d families", len(individuals), len(families))
    return RelationshipGraph(individuals=individuals, families=families)


def _traverse(start_id: str, graph: RelationshipGraph, max_generations: int, next_ids) -> list[Profile]:
    # Breadth-first so each person is reached at their smallest generation
    result: list[Profile] = []
    if start_id not in graph.individuals or max_generations < 0:
        return result

    visited = {start_id}
    queue = deque([(start_id, 0)])
    while queue:
        person_id, depth = queue.popleft()
        node = graph.individuals[person_id]
        result.append(node.profile)

        if depth == max_generations:
            continue
        for next_id in next_ids(node):
            if next_id in visited or next_id not in graph.individuals:
                continue
            visited.add(next_id)
            queue.append((next_id, depth + 1))

    return result


def get_ancestors(start_id: str, graph: RelationshipGraph, max_generations: int) -> list[Profile]:
    """
    The start person and their ancestors up to `max_generations` back.

    Generation 0 is the start person, 1 adds parents, 2 grandparents, and so on.
    Each person appears at most once, even if the data contains a cycle.
    Returns an empty list for an unknown start id.
    """
    return _traverse(start_id, graph, max_generations, lambda node: node.parents)


def get_descendants(start_id: str, graph: RelationshipGraph, max_generations: int) -> list[Profile]:
    """The start person and their descendants up to `max_generations` down."""
    return _traverse(
        start_id, graph, max_generations, lambda node: [link.child_id for link in node.children]
    )


def get_immediate_family(start_id: str, graph: RelationshipGraph) -> ImmediateFamily:
    """Parents, spouses, children and siblings of a person. Unknown ids are left out."""
    node = graph.individuals.get(start_id)
    if node is None:
        return ImmediateFamily()

    def resolve(ids) -> list[Profile]:
        return [graph.individuals[i].profile for i in ids if i in graph.individuals]

    return ImmediateFamily(
        parents=resolve(node.parents),
        spouses=resolve(link.spouse_id for link in node.spouses),
        children=resolve(link.child_id for link in node.children),
        siblings=resolve(link.sibling_id for link in node.siblings),
    )


def _year(event) -> int | None:
    if event is None or event.date is None:
        return None
    return event.date.year


def to_digraph(graph: RelationshipGraph) -> nx.DiGraph:
    """
    Export the relationship graph as a NetworkX directed graph.

    PARENT_OF edges go from parent to child. Each couple gets one SPOUSE_OF
    edge. Edges to ids that are not in the graph are left out.
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflicts with graph exporters
    for person_id, node in graph.individuals.items():
        profile = node.profile
        G.add_node(
            person_id,
            person_name=profile.full_name,
            given_name=profile.first_name,
            surname=profile.last_name,
            sex=profile.sex.value if profile.sex else None,
            birth_year=_year(profile.birth),
            death_year=_year(profile.death),
        )

    for person_id, node in graph.individuals.items():
        for parent_id in node.parents:
            if parent_id in G:
                G.add_edge(parent_id, person_id, relationship_type="PARENT_OF")
        for link in node.spouses:
            spouse_id = link.spouse_id
            if spouse_id not in G or G.has_edge(spouse_id, person_id) or G.has_edge(person_id, spouse_id):
                continue
            G.add_edge(person_id, spouse_id, relationship_type="SPOUSE_OF", family_id=link.family_id)

    return G
