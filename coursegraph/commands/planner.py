import re
from pydantic import BaseModel
from typing import List, Literal, Optional

Intent = Literal[
    "course_details",
    "direct_prereqs",
    "next_courses",
    "subgraph",
    "department_graph",
    "stats",
    "departments",
    "eligibility_check",
    "suggest",
    "unknown"
]


COURSE_RE = re.compile(r"\b([A-Z]{2,5})[ -]?(\d{3}[A-Z]?)\b")
DEPTH_RE = re.compile(r"\bDEPTH\s*=?\s*(-?\d+)\b")
DEPT_RE = re.compile(r"\b(?:DEPT|DEPARTMENT)\s+([A-Z]{2,5})\b")

KEYWORDS = {
    "course": "course_details",
    "show": "course_details",
    "prereqs": "direct_prereqs",
    "prerequisites": "direct_prereqs",
    "dependents": "next_courses",
    "next": "next_courses",
    "unlocks": "next_courses",
    "subgraph": "subgraph",
    "around": "subgraph",
    "dept": "department_graph",
    "department": "department_graph",
    "stats": "stats",
    "departments": "departments",
    "suggest": "suggest",
}

HELP = """
Commands:
  course CS 225                     course details and postrequisites
  prereqs CS 225                    direct prerequisites
  dependents CS 225                 courses unlocked by CS 225
  subgraph CS 225, CS 374 depth 2   neighborhood around the seed courses
  dept CS                           department graph with outside prerequisites
  stats | departments
  suggest CS 124, CS 128            what can I take next
  suggest CS 124|CS 125, MATH 221   same, with interchangeable options per group
  can I take CS 225 if I completed CS 124, CS 128
"""


class Plan(BaseModel):
    intent: Intent
    course_codes: List[str] = []
    department: Optional[str] = None
    depth: Optional[int] = None
    notes: str = ""
    target_course: Optional[str] = None
    completed_courses: List[str] = []
    or_groups: Optional[List[List[str]]] = None


def normalize_code(code: str) -> str:
    """'cs-225' -> 'CS 225'. Only the first dash is replaced."""
    return code.strip().upper().replace("-", " ", 1)


def _regex_extract(text: str) -> List[str]:
    return list(dict.fromkeys(f"{dept} {num}" for dept, num in COURSE_RE.findall(text.upper())))


def _or_groups(text: str) -> List[List[str]]:
    groups = []
    for chunk in text.split(","):
        group = [normalize_code(c) for c in chunk.split("|") if c.strip()]
        group = _regex_extract(" ".join(group)) or group
        if group:
            groups.append(group)
    return groups


def make_plan(question: str) -> Plan:
    text = question.strip()
    upper = text.upper()
    words = text.lower().split()
    if not words:
        return Plan(intent="unknown", notes="empty question")

    if "take" in words and ("completed" in words or "finished" in words or "took" in words):
        codes = _regex_extract(text)
        if not codes:
            raise ValueError("No courses specified")
        return Plan(
            intent="eligibility_check",
            course_codes=codes,
            target_course=codes[0],
            completed_courses=codes[1:],
        )

    intent = KEYWORDS.get(words[0], "unknown")
    rest = text[len(words[0]):].strip()

    if intent in ("stats", "departments"):
        return Plan(intent=intent)

    if intent == "department_graph":
        m = DEPT_RE.search(upper)
        dept = m.group(1) if m else rest.upper()
        return Plan(intent=intent, department=dept or None)

    codes = _regex_extract(rest)

    if intent == "suggest":
        if "|" in rest:
            return Plan(intent=intent, or_groups=_or_groups(rest), notes="or-groups")
        return Plan(intent=intent, completed_courses=codes)

    if intent == "subgraph":
        m = DEPTH_RE.search(upper)
        depth = int(m.group(1)) if m else None
        seeds = _regex_extract(DEPTH_RE.sub("", rest.upper()))
        if not seeds:
            raise ValueError("No courses specified")
        return Plan(intent=intent, course_codes=seeds, depth=depth)

    if intent != "unknown":
        if not codes:
            raise ValueError("No courses specified")
        return Plan(intent=intent, course_codes=codes, target_course=codes[0])

    return Plan(intent="unknown", course_codes=_regex_extract(text), notes="unrecognized command")
