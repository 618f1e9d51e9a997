from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class EdgeKind(str, Enum):
    PREREQUISITE = "prerequisite"
    COREQUISITE = "corequisite"


class CourseRecord(BaseModel):
    """One course as produced by the catalog scraper."""

    code: str
    name: str = ""
    department: str = ""
    description: str = ""
    url: Optional[str] = None
    prerequisites: List[str] = []
    corequisites: List[str] = []

    @field_validator("code", "name", "department", "description", mode="before")
    @classmethod
    def _to_text(cls, v):
        return "" if v is None else str(v).strip()

    @field_validator("url", mode="before")
    @classmethod
    def _url_to_text(cls, v):
        return None if v is None or v == "" else str(v)

    @field_validator("prerequisites", "corequisites", mode="before")
    @classmethod
    def _to_code_list(cls, v):
        # scraped files sometimes carry null, a bare string, or stray non-string entries
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [c.strip() for c in v if isinstance(c, str) and c.strip()]


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    name: str = ""
    department: str = ""
    description: str = ""
    url: Optional[str] = None

    @classmethod
    def from_record(cls, record: CourseRecord) -> "Node":
        return cls(
            id=record.code,
            label=record.code,
            name=record.name,
            department=record.department,
            description=record.description,
            url=record.url,
        )


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="from")
    to: str
    kind: EdgeKind

    @computed_field
    @property
    def label(self) -> str:
        return self.kind.value


class GraphData(BaseModel):
    nodes: List[Node] = []
    edges: List[Edge] = []


class LimitedGraphData(GraphData):
    total: int
    showing: int


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GraphStats(_CamelModel):
    total_courses: int
    total_edges: int
    prerequisite_edges: int
    corequisite_edges: int
    departments: int


class Suggestion(_CamelModel):
    code: str
    name: str
    department: str
    prerequisites: List[str]
    corequisites: List[str]
    missing_prerequisites: List[str]
    missing_corequisites: List[str]


class Suggestions(_CamelModel):
    can_take: List[Suggestion] = []
    partially_ready: List[Suggestion] = []
    no_prerequisites: List[Suggestion] = []


class Postrequisite(_CamelModel):
    code: str
    name: str
    other_prerequisites: List[str]
    has_or_in_prereqs: bool


class CourseDetail(_CamelModel):
    code: str
    name: str
    department: str
    description: str
    url: Optional[str] = None
    prerequisites: List[str]
    corequisites: List[str]
    postrequisites: List[Postrequisite]
