import logging
import os

from pydantic import BaseModel, Field
from rich.logging import RichHandler

_LOGGER = logging.getLogger(__name__)

DEFAULT_DATA_PATH = "data/courses.json"


class Settings(BaseModel):
    data_path: str = DEFAULT_DATA_PATH
    graph_limit: int = Field(default=500, gt=0)
    subgraph_depth: int = Field(default=1, ge=0)
    log_level: str = "INFO"


def _int_env(name: str, default: int, minimum: int = 0) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value < minimum:
        _LOGGER.warning("Ignoring %s=%d below %d", name, value, minimum)
        return default
    return value


def load_settings() -> Settings:
    """Read COURSEGRAPH_* variables (call load_dotenv() first to pick up .env)."""
    return Settings(
        data_path=os.environ.get("COURSEGRAPH_DATA_PATH") or DEFAULT_DATA_PATH,
        graph_limit=_int_env("COURSEGRAPH_GRAPH_LIMIT", 500, minimum=1),
        subgraph_depth=_int_env("COURSEGRAPH_SUBGRAPH_DEPTH", 1),
        log_level=(os.environ.get("COURSEGRAPH_LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
        force=True,
    )
