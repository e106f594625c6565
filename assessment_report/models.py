from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from sqlmodel import Field, SQLModel, create_engine, Session

from . import config


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"


@dataclass(frozen=True)
class CategoryScore:
    score: float
    max_score: float
    percentage: int


@dataclass(frozen=True)
class ContactInfo:
    name: str = ""
    company: str = ""


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    actions: Tuple[str, ...] = ()
    priority: str = Priority.MEDIUM.value


@dataclass(frozen=True)
class AssessmentReport:
    """Scored assessment results, ready to be laid out.

    ``category_scores`` keeps insertion order, which is the render order.
    """

    overall_percentage: int
    category_scores: Dict[str, CategoryScore]
    readiness_level: str
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    recommendations: Tuple[Recommendation, ...] = ()


class RunStatus(str, Enum):
    READY = "READY"
    FAILED = "FAILED"


class ReportRun(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True)
    folder: str = ""
    company: str = ""
    participant: str = ""
    overall_percentage: int = 0
    readiness_level: str = ""
    filename: str = ""
    page_count: int = 0
    status: RunStatus = Field(default=RunStatus.READY)
    fail_code: Optional[str] = None
    fail_detail: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Artifact(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    run_id: int = Field(foreign_key="reportrun.id")
    type: str
    path: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


engine = create_engine(f"sqlite:///{config.DB_PATH}")


def reset_engine() -> None:
    global engine
    engine = create_engine(f"sqlite:///{config.DB_PATH}")


def init_db() -> None:
    config.OUT_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine, expire_on_commit=False)
