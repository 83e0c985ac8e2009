"""Per-lesson progress upserts and learner stats."""
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from luno.models.lesson import Lesson
from luno.models.progress import UserProgress
from luno.models.quiz import QuizAttempt
from luno.schemas.progress import StatsOutSchema


async def _get_or_create(db: AsyncSession, user_id: int, lesson_id: int) -> UserProgress:
    result = await db.execute(
        select(UserProgress).where(UserProgress.user_id == user_id, UserProgress.lesson_id == lesson_id)
    )
    progress = result.scalar_one_or_none()
    if progress is None:
        progress = UserProgress(user_id=user_id, lesson_id=lesson_id, completed=False)
        db.add(progress)
    return progress


async def touch_lesson(db: AsyncSession, user_id: int, lesson_id: int) -> UserProgress:
    """Set last_accessed_at to now, creating the row on first visit. Caller commits."""
    progress = await _get_or_create(db, user_id, lesson_id)
    progress.last_accessed_at = datetime.now(timezone.utc)
    return progress


async def mark_completed(db: AsyncSession, user_id: int, lesson_id: int) -> UserProgress:
    """Mark the lesson completed (and accessed now). Caller commits."""
    progress = await touch_lesson(db, user_id, lesson_id)
    progress.completed = True
    return progress


async def compute_stats(db: AsyncSession, user_id: int) -> StatsOutSchema:
    total_lessons = (await db.execute(select(func.count(Lesson.id)))).scalar_one()
    completed_lessons = (await db.execute(
        select(func.count(UserProgress.id)).where(
            UserProgress.user_id == user_id,
            UserProgress.completed.is_(True),
        )
    )).scalar_one()

    attempts_row = (await db.execute(
        select(
            func.count(QuizAttempt.id),
            func.avg(QuizAttempt.score * 100.0 / func.nullif(QuizAttempt.total_questions, 0)),
        ).where(QuizAttempt.user_id == user_id)
    )).one()
    total_quizzes, avg_score = attempts_row

    return StatsOutSchema(
        totalLessons=total_lessons,
        completedLessons=completed_lessons,
        totalQuizzes=total_quizzes,
        avgScore=int(float(avg_score) + 0.5) if avg_score is not None else 0,
        progressPercentage=int(completed_lessons * 100 / total_lessons + 0.5) if total_lessons else 0,
    )
