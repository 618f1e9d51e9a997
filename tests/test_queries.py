from __future__ import annotations

from coursegraph.graph.queries import QueryEngine
from coursegraph.graph.store import GraphStore
from coursegraph.models import Edge, EdgeKind

from tests.conftest import course


def _ids(nodes):
    return [n.id for n in nodes]


def test_prerequisites_and_dependents(engine) -> None:
    assert _ids(engine.get_prerequisites_for("CS 225")) == ["CS 128", "CS 173"]
    assert _ids(engine.get_dependents_for("CS 124")) == ["CS 128", "CS 173"]
    # corequisite edges are not prerequisites
    assert engine.get_prerequisites_for("CS 173")[0].id == "CS 124"
    assert len(engine.get_prerequisites_for("CS 173")) == 1


def test_every_prerequisite_edge_is_visible_from_both_ends(engine) -> None:
    for e in engine.store.edges():
        if e.kind != EdgeKind.PREREQUISITE:
            continue
        if engine.store.has_node(e.to):
            assert e.to in _ids(engine.get_dependents_for(e.source))
        if engine.store.has_node(e.source):
            assert e.source in _ids(engine.get_prerequisites_for(e.to))


def test_dangling_prerequisite_is_skipped() -> None:
    store = GraphStore()
    store.build_from_courses([course("CS 999", prerequisites=["XX 000"])])
    engine = QueryEngine(store)
    assert engine.get_prerequisites_for("CS 999") == []
    # the dependent side of the edge is a real course
    assert _ids(engine.get_dependents_for("XX 000")) == ["CS 999"]


def test_dangling_dependent_is_skipped() -> None:
    # build_from_courses always targets a real course, so feed the edge in directly
    class StoreWithStrayEdge(GraphStore):
        def outgoing(self, code):
            stray = Edge(source=code, to="XX 999", kind=EdgeKind.PREREQUISITE)
            return super().outgoing(code) + [stray]

    store = StoreWithStrayEdge()
    store.build_from_courses([course("CS 124"), course("CS 128", prerequisites=["CS 124"])])
    engine = QueryEngine(store)
    assert _ids(engine.get_dependents_for("CS 124")) == ["CS 128"]


def test_unknown_code_gives_empty_results(engine) -> None:
    assert engine.get_prerequisites_for("NOPE 1") == []
    assert engine.get_dependents_for("NOPE 1") == []
    assert engine.get_subgraph(["NOPE 1"], 3).nodes == []


def test_subgraph_depth_zero(engine) -> None:
    data = engine.get_subgraph(["CS 225"], 0)
    assert _ids(data.nodes) == ["CS 225"]
    assert data.edges == []


def test_subgraph_depth_zero_drops_unknown_seeds(engine) -> None:
    data = engine.get_subgraph(["CS 225", "NOPE 1"], 0)
    assert _ids(data.nodes) == ["CS 225"]


def test_negative_depth_behaves_like_zero(engine) -> None:
    assert engine.get_subgraph(["CS 225"], -4) == engine.get_subgraph(["CS 225"], 0)


def test_subgraph_one_hop_on_chain(chain_engine) -> None:
    data = chain_engine.get_subgraph(["B 100"], 1)
    assert set(_ids(data.nodes)) == {"A 100", "B 100", "C 100"}
    assert {(e.source, e.to) for e in data.edges} == {("A 100", "B 100"), ("B 100", "C 100")}


def test_subgraph_follows_edges_in_both_directions(chain_engine) -> None:
    data = chain_engine.get_subgraph(["D 100"], 2)
    assert set(_ids(data.nodes)) == {"B 100", "C 100", "D 100"}


def test_subgraph_includes_edges_between_boundary_nodes() -> None:
    # S -> X, S -> Y, X -> Y: at depth 1 both X and Y are on the boundary
    store = GraphStore()
    store.build_from_courses(
        [
            course("S 100"),
            course("X 100", prerequisites=["S 100"]),
            course("Y 100", prerequisites=["S 100", "X 100"]),
        ]
    )
    data = QueryEngine(store).get_subgraph(["S 100"], 1)
    assert ("X 100", "Y 100") in {(e.source, e.to) for e in data.edges}


def test_subgraph_multiple_seeds_and_cycles() -> None:
    store = GraphStore()
    store.build_from_courses(
        [
            course("A 100", prerequisites=["B 100"]),
            course("B 100", prerequisites=["A 100"]),
            course("C 100"),
        ]
    )
    data = QueryEngine(store).get_subgraph(["A 100", "C 100"], 5)
    assert sorted(_ids(data.nodes)) == ["A 100", "B 100", "C 100"]
    assert len(data.edges) == 2


def test_subgraph_walks_through_corequisites(engine) -> None:
    data = engine.get_subgraph(["MATH 221"], 1)
    assert set(_ids(data.nodes)) == {"MATH 221", "CS 173", "STAT 400"}


def test_stats(engine) -> None:
    stats = engine.get_stats()
    assert stats.total_courses == 7
    assert stats.prerequisite_edges == 7
    assert stats.corequisite_edges == 1
    assert stats.total_edges == stats.prerequisite_edges + stats.corequisite_edges
    assert stats.departments == 3
    assert stats.model_dump(by_alias=True) == {
        "totalCourses": 7,
        "totalEdges": 8,
        "prerequisiteEdges": 7,
        "corequisiteEdges": 1,
        "departments": 3,
    }


def test_stats_count_duplicate_edges_and_collapse_departments() -> None:
    store = GraphStore()
    store.build_from_courses(
        [
            course("CS 201", prerequisites=["CS 101", "CS 101"]),
            course("CS 201", department="ECE", prerequisites=["CS 101"]),
        ]
    )
    stats = QueryEngine(store).get_stats()
    assert stats.total_courses == 1
    assert stats.prerequisite_edges == 3
    assert stats.departments == 1


def test_department_graph_includes_halo(engine) -> None:
    data = engine.get_department_graph("MATH")
    assert _ids(data.nodes) == ["MATH 221", "CS 173", "STAT 400"]
    assert {(e.source, e.to, e.kind) for e in data.edges} == {
        ("MATH 221", "CS 173", EdgeKind.COREQUISITE),
        ("MATH 221", "STAT 400", EdgeKind.PREREQUISITE),
    }


def test_department_graph_drops_dangling_halo(engine) -> None:
    data = engine.get_department_graph("CS")
    assert "XX 000" not in _ids(data.nodes)
    assert "MATH 221" in _ids(data.nodes)
    assert ("XX 000", "CS 374") in {(e.source, e.to) for e in data.edges}


def test_department_only_graph(engine) -> None:
    data = engine.get_department_only_graph("MATH")
    assert _ids(data.nodes) == ["MATH 221"]
    assert len(data.edges) == 2


def test_unknown_department(engine) -> None:
    data = engine.get_department_graph("NOPE")
    assert data.nodes == [] and data.edges == []


def test_limited_graph(engine) -> None:
    data = engine.get_limited_graph(2)
    assert _ids(data.nodes) == ["CS 124", "CS 128"]
    assert data.total == 7
    assert data.showing == 2
    assert all(e.source in {"CS 124", "CS 128"} or e.to in {"CS 124", "CS 128"} for e in data.edges)


def test_limited_graph_defaults() -> None:
    store = GraphStore()
    store.build_from_courses([course(f"CS {n}") for n in range(100, 110)])
    data = QueryEngine(store, default_limit=3).get_limited_graph(0)
    assert data.showing == 3
    assert data.total == 10


def test_list_departments(engine) -> None:
    assert engine.list_departments() == ["CS", "MATH", "STAT"]


def test_course_detail_with_postrequisites(engine) -> None:
    detail = engine.get_course_detail("CS 173")
    assert detail.prerequisites == ["CS 124"]
    assert detail.corequisites == ["MATH 221"]
    [post] = detail.postrequisites
    assert post.code == "CS 225"
    assert post.other_prerequisites == ["CS 128"]
    assert post.has_or_in_prereqs is True

    payload = detail.model_dump(by_alias=True)
    assert payload["postrequisites"][0]["otherPrerequisites"] == ["CS 128"]
    assert payload["postrequisites"][0]["hasOrInPrereqs"] is True


def test_course_detail_without_or(engine) -> None:
    [post] = engine.get_course_detail("CS 225").postrequisites
    assert post.code == "CS 374"
    assert post.other_prerequisites == ["XX 000"]
    assert post.has_or_in_prereqs is False


def test_course_detail_unknown(engine) -> None:
    assert engine.get_course_detail("XX 000") is None


def test_non_positive_default_limit_is_ignored(engine) -> None:
    data = QueryEngine(engine.store, default_limit=-3).get_limited_graph()
    assert data.showing == 7
    assert len(data.nodes) == 7
