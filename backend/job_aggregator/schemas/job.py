from __future__ import annotations
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    company: str | None = None
    location: str | None = None
    salary: str | None = None
    description: str | None = None
    posted_at: datetime
    source: str
    url: str
    is_new: bool = False
    is_archived: bool = False


class StatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_active_jobs: int
    jobs_per_source: dict[str, int] = Field(default_factory=dict)
    new_today_count: int


class AggregateOut(BaseModel):
    jobs: list[JobOut]
    errors: list[str] = Field(default_factory=list)
    stats: StatsOut | None = None
