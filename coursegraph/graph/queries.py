import re
from collections import deque
from typing import Iterable, List, Optional

from coursegraph.graph.store import GraphStore
from coursegraph.models import (
    CourseDetail,
    EdgeKind,
    GraphData,
    GraphStats,
    LimitedGraphData,
    Node,
    Postrequisite,
)

OR_WORD_RE = re.compile(r"\bor\b")
DEFAULT_GRAPH_LIMIT = 500


class QueryEngine:
    """Read-only queries over a built GraphStore.

    Unknown codes and departments give empty results. The only lookup that
    signals "not found" is get_course_detail, which returns None.
    """

    def __init__(self, store: GraphStore, default_limit: int = DEFAULT_GRAPH_LIMIT):
        self.store = store
        self.default_limit = default_limit if default_limit > 0 else DEFAULT_GRAPH_LIMIT

    def _resolve(self, codes: Iterable[str]) -> List[Node]:
        nodes = []
        for code in codes:
            node = self.store.get_node(code)
            if node is not None:
                nodes.append(node)
        return nodes

    def get_prerequisites_for(self, code: str) -> List[Node]:
        return self._resolve(
            e.source for e in self.store.incoming(code) if e.kind == EdgeKind.PREREQUISITE
        )

    def get_dependents_for(self, code: str) -> List[Node]:
        return self._resolve(
            e.to for e in self.store.outgoing(code) if e.kind == EdgeKind.PREREQUISITE
        )

    def get_subgraph(self, seed_codes: Iterable[str], depth: int = 1) -> GraphData:
        """Neighborhood of the seeds within ``depth`` hops, ignoring edge direction.

        Nodes at exactly ``depth`` hops are included but not expanded. Codes
        reached through dangling edges take part in the walk and in edge
        selection, but only codes that are nodes come back in ``nodes``.
        """
        depth = max(depth, 0)
        visited = {}
        queue = deque()
        for code in seed_codes:
            if code not in visited:
                visited[code] = 0
                queue.append(code)

        while queue:
            code = queue.popleft()
            level = visited[code]
            if level >= depth:
                continue
            for nxt in self.store.neighbors(code):
                if nxt not in visited:
                    visited[nxt] = level + 1
                    queue.append(nxt)

        edges = [e for e in self.store.edges() if e.source in visited and e.to in visited]
        return GraphData(nodes=self._resolve(visited), edges=edges)

    def get_stats(self) -> GraphStats:
        edges = self.store.edges()
        prereq = sum(1 for e in edges if e.kind == EdgeKind.PREREQUISITE)
        coreq = sum(1 for e in edges if e.kind == EdgeKind.COREQUISITE)
        nodes = self.store.nodes()
        return GraphStats(
            total_courses=len(nodes),
            total_edges=len(edges),
            prerequisite_edges=prereq,
            corequisite_edges=coreq,
            departments=len({n.department for n in nodes}),
        )

    def get_department_graph(self, department: str) -> GraphData:
        """Department nodes, their edges, and the one-hop halo of outside courses."""
        dept_nodes = self.store.get_nodes_by_department(department)
        dept_codes = {n.id for n in dept_nodes}
        edges = [e for e in self.store.edges() if e.source in dept_codes or e.to in dept_codes]

        halo = set()
        for e in edges:
            if e.source not in dept_codes:
                halo.add(e.source)
            if e.to not in dept_codes:
                halo.add(e.to)
        extra = [n for n in self.store.nodes() if n.id in halo]
        return GraphData(nodes=dept_nodes + extra, edges=edges)

    def get_department_only_graph(self, department: str) -> GraphData:
        nodes = self.store.get_nodes_by_department(department)
        codes = {n.id for n in nodes}
        edges = [e for e in self.store.edges() if e.source in codes or e.to in codes]
        return GraphData(nodes=nodes, edges=edges)

    def get_limited_graph(self, limit: Optional[int] = None) -> LimitedGraphData:
        if not limit or limit <= 0:
            limit = self.default_limit
        all_nodes = self.store.nodes()
        shown = all_nodes[:limit]
        codes = {n.id for n in shown}
        edges = [e for e in self.store.edges() if e.source in codes or e.to in codes]
        return LimitedGraphData(
            nodes=shown,
            edges=edges,
            total=len(all_nodes),
            showing=min(limit, len(all_nodes)),
        )

    def list_departments(self) -> List[str]:
        return sorted({n.department for n in self.store.nodes()})

    def get_course_detail(self, code: str) -> Optional[CourseDetail]:
        record = self.store.record_for(code)
        if record is None:
            return None

        postrequisites = []
        for node in self.get_dependents_for(code):
            dependent = self.store.record_for(node.id)
            others = [p for p in dependent.prerequisites if p != code] if dependent else []
            description = dependent.description if dependent else ""
            postrequisites.append(
                Postrequisite(
                    code=node.id,
                    name=node.name,
                    other_prerequisites=others,
                    has_or_in_prereqs=_has_or_in_prereqs(description),
                )
            )

        return CourseDetail(
            code=record.code,
            name=record.name,
            department=record.department,
            description=record.description,
            url=record.url,
            prerequisites=list(record.prerequisites),
            corequisites=list(record.corequisites),
            postrequisites=postrequisites,
        )


def _has_or_in_prereqs(description: str) -> bool:
    # "and/or" counts as well
    lowered = description.lower()
    idx = lowered.find("prerequisite:")
    if idx == -1:
        return False
    return bool(OR_WORD_RE.search(lowered[idx:]))
