"""Pydantic schemas for lesson progress and stats."""
from datetime import datetime

from pydantic import BaseModel


class MessageSchema(BaseModel):
    message: str


class ProgressEntrySchema(BaseModel):
    completed: bool
    lastAccessed: datetime | None = None


class ProgressOutSchema(BaseModel):
    progress: dict[int, ProgressEntrySchema]


class StatsOutSchema(BaseModel):
    totalLessons: int
    completedLessons: int
    totalQuizzes: int
    avgScore: int
    progressPercentage: int
