"""Lesson, its code lines, and cached AI explanations per line."""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from luno.db.session import Base


class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0, index=True)
    difficulty_level = Column(String(32), nullable=False, default="beginner")  # beginner | intermediate | advanced

    lines = relationship("LessonLine", back_populates="lesson", order_by="LessonLine.line_number")
    quizzes = relationship("Quiz", back_populates="lesson")


class LessonLine(Base):
    __tablename__ = "lesson_lines"
    __table_args__ = (UniqueConstraint("lesson_id", "line_number", name="uq_lesson_line_number"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    lesson_id = Column(Integer, ForeignKey("lessons.id"), nullable=False, index=True)
    line_number = Column(Integer, nullable=False)  # 1-based
    code_content = Column(Text, nullable=False)
    line_type = Column(String(16), nullable=False, default="html")  # html | css | comment

    lesson = relationship("Lesson", back_populates="lines")
    explanation = relationship("LineExplanation", back_populates="line", uselist=False)


class LineExplanation(Base):
    __tablename__ = "line_explanations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lesson_line_id = Column(Integer, ForeignKey("lesson_lines.id"), nullable=False, unique=True)
    explanation = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    line = relationship("LessonLine", back_populates="explanation")
