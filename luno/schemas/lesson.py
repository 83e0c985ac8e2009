"""Pydantic schemas for lessons, lines and explanations."""
from pydantic import BaseModel


class LessonSummarySchema(BaseModel):
    id: int
    title: str
    description: str | None = None
    order_index: int
    difficulty_level: str

    class Config:
        from_attributes = True


class LessonLineSchema(BaseModel):
    id: int
    line_number: int
    code_content: str
    line_type: str

    class Config:
        from_attributes = True


class EditorCodeSchema(BaseModel):
    html: str
    css: str


class LessonDetailSchema(LessonSummarySchema):
    lines: list[LessonLineSchema]
    editor: EditorCodeSchema


class LessonListOutSchema(BaseModel):
    lessons: list[LessonSummarySchema]


class LessonOutSchema(BaseModel):
    lesson: LessonDetailSchema


class ExplainLineSchema(BaseModel):
    lineId: int | None = None


class ExplanationOutSchema(BaseModel):
    explanation: str
