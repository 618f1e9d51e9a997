from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from coursegraph.graph.store import GraphStore
from coursegraph.models import EdgeKind, Node, Suggestion, Suggestions


def requirements_for(store: GraphStore, code: str, kind: EdgeKind) -> List[str]:
    # incoming edges in insertion order, duplicates collapsed
    return list(dict.fromkeys(e.source for e in store.incoming(code) if e.kind == kind))


def _make_predicate(
    completed: Iterable[str],
    or_groups: Optional[Iterable[Iterable[str]]],
) -> Callable[[str], bool]:
    groups = [set(g) for g in or_groups] if or_groups else []
    if groups:
        # completed is not consulted when OR-groups are given
        return lambda code: any(code in g for g in groups)
    completed_set = set(completed)
    return lambda code: code in completed_set


def _suggestion(node: Node, prereqs: List[str], coreqs: List[str], satisfied) -> Suggestion:
    return Suggestion(
        code=node.id,
        name=node.name,
        department=node.department,
        prerequisites=prereqs,
        corequisites=coreqs,
        missing_prerequisites=[p for p in prereqs if not satisfied(p)],
        missing_corequisites=[c for c in coreqs if not satisfied(c)],
    )


def suggest_courses(
    store: GraphStore,
    completed: Iterable[str],
    or_groups: Optional[Iterable[Iterable[str]]] = None,
) -> Suggestions:
    """Sort every not-yet-completed course into readiness tiers.

    Courses with requirements where none is satisfied yet are left out.
    Codes are compared case-sensitively; callers normalize them.
    """
    satisfied = _make_predicate(completed, or_groups)
    can_take: List[Suggestion] = []
    partial: List[Suggestion] = []
    no_prereqs: List[Suggestion] = []

    for node in store.nodes():
        if satisfied(node.id):
            continue
        prereqs = requirements_for(store, node.id, EdgeKind.PREREQUISITE)
        coreqs = requirements_for(store, node.id, EdgeKind.COREQUISITE)
        required = prereqs + coreqs
        if not required:
            no_prereqs.append(_suggestion(node, prereqs, coreqs, satisfied))
            continue

        met = [r for r in required if satisfied(r)]
        if len(met) == len(required):
            can_take.append(_suggestion(node, prereqs, coreqs, satisfied))
        elif met:
            partial.append(_suggestion(node, prereqs, coreqs, satisfied))

    def by_code(s: Suggestion) -> str:
        return s.code

    return Suggestions(
        can_take=sorted(can_take, key=by_code),
        partially_ready=sorted(partial, key=by_code),
        no_prerequisites=sorted(no_prereqs, key=by_code),
    )


def check_eligibility(
    store: GraphStore,
    target: str,
    completed: List[str]
) -> Tuple[bool, List[Dict[str, str]]]:
    prereq_codes: Set[str] = set(requirements_for(store, target, EdgeKind.PREREQUISITE))
    prereq_codes.update(requirements_for(store, target, EdgeKind.COREQUISITE))
    completed_set = set(completed)
    missing_codes = sorted(list(prereq_codes - completed_set))

    missing = []
    for code in missing_codes:
        node = store.get_node(code)
        missing.append({"code": code, "title": node.name if node else ""})
    eligible = (len(missing) == 0)
    return eligible, missing
