"""Consistency checks for a built relationship graph."""

import networkx as nx

from gedgraph.graph import to_digraph
from gedgraph.models import DateInfo, LifeEvent, RelationshipGraph


def _event_date(event: LifeEvent | None) -> DateInfo | None:
    if event is None or event.date is None or event.date.year is None:
        return None
    return event.date


def is_before(a: DateInfo, b: DateInfo) -> bool:
    """
    True if `a` is certainly earlier than `b`.

    Months and days are only compared when both dates carry them.
    """
    if a.year != b.year:
        return a.year < b.year
    if not a.month or not b.month:
        return False
    if a.month != b.month:
        return a.month < b.month
    if not a.day or not b.day:
        return False
    return a.day < b.day


def validate_graph(graph: RelationshipGraph) -> list[str]:
    """
    Validate the family tree for:
    - Cycles in parent-child relationships
    - People linked to themselves as parent, spouse or child
    - Impossible ages (child born before parent, parent younger than 12)
    - Death before birth

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    G = to_digraph(graph)

    # Create a subgraph with only PARENT_OF edges for cycle detection
    parent_edges = [
        (u, v) for u, v, d in G.edges(data=True) if d.get("relationship_type") == "PARENT_OF"
    ]
    parent_graph = nx.DiGraph(parent_edges)

    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    for person_id, node in graph.individuals.items():
        name = node.profile.full_name
        if person_id in node.parents:
            warnings.append(f"Self-reference: {name} ({person_id}) is their own parent")
        if any(link.spouse_id == person_id for link in node.spouses):
            warnings.append(f"Self-reference: {name} ({person_id}) is their own spouse")
        if any(link.child_id == person_id for link in node.children):
            warnings.append(f"Self-reference: {name} ({person_id}) is their own child")

    for parent_id, child_id in parent_edges:
        if parent_id == child_id:
            continue
        parent = graph.individuals[parent_id].profile
        child = graph.individuals[child_id].profile

        parent_birth = _event_date(parent.birth)
        child_birth = _event_date(child.birth)
        if parent_birth is None or child_birth is None:
            continue

        if is_before(child_birth, parent_birth):
            warnings.append(f"Impossible: {child.full_name} born before parent {parent.full_name}")
        elif child_birth.year - parent_birth.year < 12:
            warnings.append(
                f"Suspicious: {parent.full_name} was less than 12 years "
                f"old when {child.full_name} was born"
            )

    for node in graph.individuals.values():
        profile = node.profile
        birth = _event_date(profile.birth)
        death = _event_date(profile.death)
        if birth and death and is_before(death, birth):
            warnings.append(f"Impossible: {profile.full_name} died before being born")

    return warnings
