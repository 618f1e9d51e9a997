from __future__ import annotations

from typing import List

import pytest

from coursegraph.graph.queries import QueryEngine
from coursegraph.graph.store import GraphStore
from coursegraph.models import CourseRecord


def course(code: str, department: str | None = None, prerequisites=None, corequisites=None, **kw) -> CourseRecord:
    return CourseRecord(
        code=code,
        name=kw.pop("name", f"{code} title"),
        department=department if department is not None else code.split()[0],
        description=kw.pop("description", ""),
        prerequisites=prerequisites or [],
        corequisites=corequisites or [],
        **kw,
    )


@pytest.fixture
def catalog() -> List[CourseRecord]:
    return [
        course("CS 124"),
        course("CS 128", prerequisites=["CS 124"]),
        course("CS 173", prerequisites=["CS 124"], corequisites=["MATH 221"]),
        course(
            "CS 225",
            prerequisites=["CS 128", "CS 173"],
            description="Data structures. Prerequisite: CS 128 and CS 173 or MATH 213.",
        ),
        course("CS 374", prerequisites=["CS 225", "XX 000"]),
        course("MATH 221"),
        course("STAT 400", prerequisites=["MATH 221"]),
    ]


@pytest.fixture
def store(catalog) -> GraphStore:
    s = GraphStore()
    s.build_from_courses(catalog)
    return s


@pytest.fixture
def engine(store) -> QueryEngine:
    return QueryEngine(store)


@pytest.fixture
def chain_engine() -> QueryEngine:
    # A -> B -> C -> D
    s = GraphStore()
    s.build_from_courses(
        [
            course("A 100"),
            course("B 100", prerequisites=["A 100"]),
            course("C 100", prerequisites=["B 100"]),
            course("D 100", prerequisites=["C 100"]),
        ]
    )
    return QueryEngine(s)
