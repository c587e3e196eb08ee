"""
Knowledge record: the fixed profile the assistant answers from.

Loaded once from JSON (app/data/profile.json unless KNOWLEDGE_FILE says otherwise),
validated into frozen pydantic models, and shared read-only by every request.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.config import KNOWLEDGE_FILE
from app.core.errors import StartupConfigurationError

logger = logging.getLogger(__name__)


class ProjectEntry(BaseModel):
    """One portfolio project."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str


class KnowledgeRecord(BaseModel):
    """Static profile of the person the assistant speaks for."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    role: str
    expertise: str = ""
    soft_skills: str = Field("", alias="softSkills")
    experience: tuple[str, ...] = ()
    projects: tuple[ProjectEntry, ...] = ()
    contact: str = ""


def load_knowledge_record(path: str | Path) -> KnowledgeRecord:
    """Read and validate the profile JSON at path. Raises StartupConfigurationError if unusable."""
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StartupConfigurationError(f"Knowledge file not readable: {path} ({e})") from e
    try:
        record = KnowledgeRecord.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise StartupConfigurationError(f"Knowledge file is not a valid profile: {path} ({e})") from e
    logger.info(
        "[knowledge:load] path=%s name=%r experience=%d projects=%d",
        path,
        record.name,
        len(record.experience),
        len(record.projects),
    )
    return record


def serialize_record(record: KnowledgeRecord) -> str:
    """Pretty JSON (2-space indent, JSON key names) as embedded in the prompt."""
    return json.dumps(record.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


@lru_cache(maxsize=1)
def get_knowledge_record() -> KnowledgeRecord:
    return load_knowledge_record(KNOWLEDGE_FILE)


@lru_cache(maxsize=1)
def get_serialized_record() -> str:
    return serialize_record(get_knowledge_record())
