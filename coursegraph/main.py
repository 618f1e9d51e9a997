import logging

from dotenv import load_dotenv
from rich import print

from coursegraph.advising.eligibility import check_eligibility, suggest_courses
from coursegraph.advising.formatters import (
    format_course_detail,
    format_course_list,
    graph_table,
    stats_table,
    suggestions_table,
)
from coursegraph.commands.planner import HELP, make_plan
from coursegraph.config import configure_logging, load_settings
from coursegraph.graph.queries import QueryEngine
from coursegraph.import_data import build_engine

load_dotenv()

_LOGGER = logging.getLogger(__name__)


def answer(engine: QueryEngine, question: str, default_depth: int = 1):
    """Run one command against the engine and return something rich can print."""
    plan = make_plan(question)
    _LOGGER.debug("Plan: %s", plan.model_dump())

    if plan.intent == "eligibility_check" and plan.target_course:
        eligible, missing = check_eligibility(engine.store, plan.target_course, plan.completed_courses)
        if eligible:
            return f"Yes — you appear eligible to take {plan.target_course}. (All prerequisites are satisfied based on the graph.)"
        missing_str = ", ".join([m["code"] for m in missing])
        return f"Not yet — to take {plan.target_course}, you’re missing: {missing_str}."

    if plan.intent == "course_details":
        detail = engine.get_course_detail(plan.course_codes[0])
        if detail is None:
            return "I couldn't find that course in the graph."
        return format_course_detail(detail)

    if plan.intent in ("direct_prereqs", "next_courses"):
        code = plan.course_codes[0]
        if plan.intent == "next_courses":
            nodes = engine.get_dependents_for(code)
            header, empty = "Courses unlocked next:", "I couldn't find any next courses unlocked by that course in the graph."
        else:
            nodes = engine.get_prerequisites_for(code)
            header, empty = "Direct prerequisites (1-hop):", "I couldn't find prerequisites for that course in the graph."
        if not nodes:
            return empty
        return header + "\n" + format_course_list(nodes)

    if plan.intent == "subgraph":
        depth = plan.depth if plan.depth is not None else default_depth
        data = engine.get_subgraph(plan.course_codes, depth)
        return graph_table(data, title=f"Within {max(depth, 0)} hop(s) of {', '.join(plan.course_codes)}")

    if plan.intent == "department_graph":
        if not plan.department:
            return "Which department? e.g. dept CS"
        data = engine.get_department_graph(plan.department)
        if not data.nodes:
            return f"I couldn't find department {plan.department} in the graph."
        return graph_table(data, title=f"{plan.department} and outside requirements")

    if plan.intent == "stats":
        return stats_table(engine.get_stats())

    if plan.intent == "departments":
        return ", ".join(engine.list_departments()) or "No departments loaded."

    if plan.intent == "suggest":
        return suggestions_table(suggest_courses(engine.store, plan.completed_courses, plan.or_groups))

    return HELP


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    engine = build_engine(settings)

    print("[bold cyan]Course graph explorer (type 'help' or 'exit')[/bold cyan]")
    print(stats_table(engine.get_stats()))
    while True:
        q = input("\nQuestion> ").strip()
        if q.lower() in ("exit", "quit"):
            break
        try:
            out = answer(engine, q, default_depth=settings.subgraph_depth)
        except ValueError as exc:
            print(f"[bold red]{exc}[/bold red]")
            continue
        print("\n[bold green]Answer[/bold green]")
        print(out)


if __name__ == "__main__":
    main()
