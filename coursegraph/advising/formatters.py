from typing import List

from rich.table import Table

from coursegraph.models import CourseDetail, GraphData, GraphStats, Node, Suggestion, Suggestions


def format_course_node(n: Node) -> str:
    return f"{n.id} ({n.name})" if n.name else n.id


def format_course_list(nodes: List[Node]) -> str:
    # unique by code, sorted
    by_code = {}
    for n in nodes:
        by_code[n.id] = n.name
    lines = []
    for c in sorted(by_code.keys()):
        t = by_code[c]
        lines.append(f"- {c}" + (f": {t}" if t else ""))
    return "\n".join(lines)


def format_course_detail(detail: CourseDetail) -> str:
    out = f"**{detail.code} — {detail.name}**"
    if detail.department:
        out += f" ({detail.department})"
    if detail.description:
        out += f"\n{detail.description}"
    if detail.prerequisites:
        out += "\nPrerequisites: " + ", ".join(detail.prerequisites)
    if detail.corequisites:
        out += "\nCorequisites: " + ", ".join(detail.corequisites)
    if detail.postrequisites:
        out += "\nUnlocks:"
        for p in detail.postrequisites:
            line = f"\n- {p.code}" + (f": {p.name}" if p.name else "")
            if p.other_prerequisites:
                label = "may also accept" if p.has_or_in_prereqs else "also needs"
                line += f" ({label}: {', '.join(p.other_prerequisites)})"
            out += line
    return out


def graph_table(data: GraphData, title: str = "Courses") -> Table:
    table = Table(title=f"{title} ({len(data.nodes)} courses, {len(data.edges)} edges)")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Department")
    for n in data.nodes:
        table.add_row(n.id, n.name, n.department)
    return table


def stats_table(stats: GraphStats) -> Table:
    table = Table(title="Graph stats")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in stats.model_dump(by_alias=True).items():
        table.add_row(key, str(value))
    return table


def _missing(s: Suggestion) -> str:
    return ", ".join(s.missing_prerequisites + s.missing_corequisites)


def suggestions_table(suggestions: Suggestions) -> Table:
    table = Table(title="Suggested courses")
    table.add_column("Tier")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Missing")
    for s in suggestions.can_take:
        table.add_row("can take", s.code, s.name, "")
    for s in suggestions.partially_ready:
        table.add_row("partially ready", s.code, s.name, _missing(s))
    for s in suggestions.no_prerequisites:
        table.add_row("no prerequisites", s.code, s.name, "")
    return table
