import logging
from typing import Dict, Iterable, List, Optional

from coursegraph.models import CourseRecord, Edge, EdgeKind, GraphData, Node

_LOGGER = logging.getLogger(__name__)


class GraphStore:
    """In-memory course graph.

    Nodes are keyed by course code. Edges are kept as raw code pairs, so an
    edge may point at a code that never became a node (an unscraped or
    discontinued course); readers resolve codes lazily and skip misses.
    The only way to change the graph is a full ``build_from_courses``.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._records: Dict[str, CourseRecord] = {}
        self._edges: List[Edge] = []
        self._incoming: Dict[str, List[Edge]] = {}
        self._outgoing: Dict[str, List[Edge]] = {}
        self._adjacency: Dict[str, Dict[str, None]] = {}

    def build_from_courses(self, records: Iterable[CourseRecord]) -> None:
        records = list(records)
        nodes: Dict[str, Node] = {}
        first_records: Dict[str, CourseRecord] = {}

        # all nodes must exist before edges are wired
        for record in records:
            if record.code not in nodes:
                nodes[record.code] = Node.from_record(record)
                first_records[record.code] = record

        edges: List[Edge] = []
        for record in records:
            for prereq in record.prerequisites:
                edges.append(Edge(source=prereq, to=record.code, kind=EdgeKind.PREREQUISITE))
            for coreq in record.corequisites:
                edges.append(Edge(source=coreq, to=record.code, kind=EdgeKind.COREQUISITE))

        incoming: Dict[str, List[Edge]] = {}
        outgoing: Dict[str, List[Edge]] = {}
        adjacency: Dict[str, Dict[str, None]] = {}
        for edge in edges:
            incoming.setdefault(edge.to, []).append(edge)
            outgoing.setdefault(edge.source, []).append(edge)
            adjacency.setdefault(edge.source, {})[edge.to] = None
            adjacency.setdefault(edge.to, {})[edge.source] = None

        self._nodes = nodes
        self._records = first_records
        self._edges = edges
        self._incoming = incoming
        self._outgoing = outgoing
        self._adjacency = adjacency

        skipped = len(records) - len(nodes)
        if skipped:
            _LOGGER.info("Ignored attributes of %d duplicate course record(s)", skipped)
        _LOGGER.info("Built course graph: %d nodes, %d edges", len(nodes), len(edges))

    def get_graph_data(self) -> GraphData:
        return GraphData(nodes=list(self._nodes.values()), edges=list(self._edges))

    def get_nodes_by_department(self, department: str) -> List[Node]:
        return [n for n in self._nodes.values() if n.department == department]

    # ---- accessors for the query engine / evaluator ----

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def edges(self) -> List[Edge]:
        return list(self._edges)

    def get_node(self, code: str) -> Optional[Node]:
        return self._nodes.get(code)

    def has_node(self, code: str) -> bool:
        return code in self._nodes

    def record_for(self, code: str) -> Optional[CourseRecord]:
        """First-seen record for ``code``."""
        return self._records.get(code)

    def incoming(self, code: str) -> List[Edge]:
        return list(self._incoming.get(code, ()))

    def outgoing(self, code: str) -> List[Edge]:
        return list(self._outgoing.get(code, ()))

    def neighbors(self, code: str) -> List[str]:
        # direction and kind are ignored
        return list(self._adjacency.get(code, ()))
