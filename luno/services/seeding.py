"""Seed built-in lessons (and their classified lines) when the lessons table is empty."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from luno.models.lesson import Lesson, LessonLine
from luno.services.editor import classify_lines
from luno.services.lesson_content import LESSONS

log = logging.getLogger(__name__)


async def seed_lessons(db: AsyncSession) -> int:
    """Insert LESSONS if no lesson exists yet; returns the number of lessons created."""
    result = await db.execute(select(func.count(Lesson.id)))
    if result.scalar_one() > 0:
        return 0

    for data in LESSONS:
        lesson = Lesson(
            title=data["title"],
            description=data["description"],
            order_index=data["order_index"],
            difficulty_level=data["difficulty_level"],
        )
        lesson.lines = [
            LessonLine(line_number=number, code_content=content, line_type=line_type)
            for number, (content, line_type) in enumerate(classify_lines(data["code"]), start=1)
        ]
        db.add(lesson)

    await db.commit()
    log.info("Seeded %d lessons", len(LESSONS))
    return len(LESSONS)
