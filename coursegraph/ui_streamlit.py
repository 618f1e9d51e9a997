import sys
from pathlib import Path

# Add project root to PYTHONPATH for Streamlit
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))



import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from coursegraph.advising.eligibility import suggest_courses
from coursegraph.advising.formatters import format_course_detail
from coursegraph.commands.planner import normalize_code
from coursegraph.config import configure_logging, load_settings
from coursegraph.import_data import build_engine
from coursegraph.models import GraphData

load_dotenv()


@st.cache_resource
def get_engine():
    settings = load_settings()
    configure_logging(settings.log_level)
    return settings, build_engine(settings)


def _split_codes(raw: str):
    return [normalize_code(c) for c in raw.split(",") if c.strip()]


def _graph_frames(data: GraphData):
    nodes = pd.DataFrame([n.model_dump(include={"id", "name", "department"}) for n in data.nodes])
    edges = pd.DataFrame([e.model_dump(by_alias=True, mode="json") for e in data.edges])
    return nodes, edges


def _show_graph(data: GraphData):
    nodes, edges = _graph_frames(data)
    c1, c2 = st.columns(2)
    with c1:
        st.caption(f"{len(nodes)} courses")
        st.dataframe(nodes, use_container_width=True)
    with c2:
        st.caption(f"{len(edges)} edges")
        st.dataframe(edges, use_container_width=True)
    with st.expander("JSON payload", expanded=False):
        st.json(data.model_dump(by_alias=True, mode="json"))


def _suggestion_frame(items):
    rows = []
    for s in items:
        rows.append({
            "code": s.code,
            "name": s.name,
            "department": s.department,
            "missing": ", ".join(s.missing_prerequisites + s.missing_corequisites),
        })
    return pd.DataFrame(rows)


def main():
    st.set_page_config(page_title="Course Graph Explorer", layout="wide")
    st.title("Course Graph Explorer")

    settings, engine = get_engine()
    stats = engine.get_stats()

    cols = st.columns(5)
    for col, (key, value) in zip(cols, stats.model_dump(by_alias=True).items()):
        col.metric(key, value)

    tab_dept, tab_sub, tab_course, tab_suggest = st.tabs(["Department", "Subgraph", "Course", "Suggest"])

    with tab_dept:
        depts = engine.list_departments()
        if depts:
            dept = st.selectbox("Department", depts)
            _show_graph(engine.get_department_graph(dept))
        else:
            limit = st.number_input("Node limit", min_value=1, value=settings.graph_limit)
            data = engine.get_limited_graph(int(limit))
            st.caption(f"Showing {data.showing} of {data.total}")
            _show_graph(data)

    with tab_sub:
        raw = st.text_input("Seed courses", placeholder="e.g., CS 225, CS 374")
        depth = st.number_input("Depth", min_value=0, value=settings.subgraph_depth)
        if raw.strip():
            codes = _split_codes(raw)
            if not codes:
                st.error("No courses specified")
            else:
                _show_graph(engine.get_subgraph(codes, int(depth)))

    with tab_course:
        raw = st.text_input("Course code", placeholder="e.g., CS-225")
        if raw.strip():
            detail = engine.get_course_detail(normalize_code(raw))
            if detail is None:
                st.warning("Course not found")
            else:
                st.markdown(format_course_detail(detail))
                with st.expander("JSON payload", expanded=False):
                    st.json(detail.model_dump(by_alias=True))

    with tab_suggest:
        raw = st.text_area("Completed courses (comma separated)")
        groups_raw = st.text_area(
            "Or-groups (one group per line, interchangeable codes comma separated)",
            help="When any group is given, the completed list above is not used.",
        )
        if st.button("Suggest"):
            groups = [_split_codes(line) for line in groups_raw.splitlines() if line.strip()]
            result = suggest_courses(engine.store, _split_codes(raw), groups or None)
            for label, items in (
                ("Can take", result.can_take),
                ("Partially ready", result.partially_ready),
                ("No prerequisites", result.no_prerequisites),
            ):
                st.subheader(f"{label} ({len(items)})")
                if items:
                    st.dataframe(_suggestion_frame(items), use_container_width=True)


if __name__ == "__main__":
    main()
