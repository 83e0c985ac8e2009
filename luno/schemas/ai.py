"""Pydantic schemas for chat, debugging and code review."""
from datetime import datetime

from pydantic import BaseModel, Field


class ChatMessageSchema(BaseModel):
    role: str = "user"
    content: str = ""


class ChatInSchema(BaseModel):
    message: str | None = None
    history: list[ChatMessageSchema] = []


class ChatOutSchema(BaseModel):
    response: str
    timestamp: datetime


class DebugInSchema(BaseModel):
    code: str | None = None
    errorMessage: str | None = None


class DebugOutSchema(BaseModel):
    suggestion: str
    timestamp: datetime


class CodeSuggestionSchema(BaseModel):
    type: str = "suggestion"  # error | warning | suggestion | best-practice | accessibility
    priority: str | None = None  # high | medium | low
    line: int | None = None
    startLine: int | None = None
    endLine: int | None = None
    message: str = ""
    explanation: str | None = None
    oldCode: str | None = None
    newCode: str | None = None
    code: str | None = None


class CodeReviewInSchema(BaseModel):
    code: str | None = None
    language: str = "html"


class CodeReviewOutSchema(BaseModel):
    score: int = Field(ge=0, le=100)
    summary: str | None = None
    suggestions: list[CodeSuggestionSchema]
    message: str | None = None


class SuggestionsInSchema(BaseModel):
    code: str | None = None
    issue: str | None = None
    language: str = "html"


class SuggestionsOutSchema(BaseModel):
    suggestions: list[CodeSuggestionSchema]


class ApplySuggestionInSchema(BaseModel):
    code: str = ""
    suggestion: CodeSuggestionSchema


class CodeOutSchema(BaseModel):
    code: str


class PreviewInSchema(BaseModel):
    html: str = ""
    css: str = ""


class PreviewOutSchema(BaseModel):
    document: str
