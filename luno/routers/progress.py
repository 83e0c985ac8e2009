"""Progress routes: lesson access/completion tracking, per-lesson progress and stats."""
from fastapi import APIRouter, HTTPException
from sqlalchemy import select

from luno.models.lesson import Lesson
from luno.models.progress import UserProgress
from luno.routers.deps import CurrentUserId, DbSession
from luno.schemas.progress import MessageSchema, ProgressEntrySchema, ProgressOutSchema, StatsOutSchema
from luno.services.progress import compute_stats, mark_completed, touch_lesson

router = APIRouter(prefix="/api/progress", tags=["progress"])


async def _ensure_lesson(db, lesson_id: int) -> None:
    result = await db.execute(select(Lesson.id).where(Lesson.id == lesson_id))
    if result.first() is None:
        raise HTTPException(status_code=404, detail="Lesson not found")


@router.post("/lesson/{lesson_id}/access", response_model=MessageSchema)
async def track_lesson_access(lesson_id: int, user_id: CurrentUserId, db: DbSession):
    await _ensure_lesson(db, lesson_id)
    await touch_lesson(db, user_id, lesson_id)
    await db.commit()
    return MessageSchema(message="Progress tracked")


@router.post("/lesson/{lesson_id}/complete", response_model=MessageSchema)
async def mark_lesson_completed(lesson_id: int, user_id: CurrentUserId, db: DbSession):
    await _ensure_lesson(db, lesson_id)
    await mark_completed(db, user_id, lesson_id)
    await db.commit()
    return MessageSchema(message="Lesson marked as completed")


@router.get("/progress", response_model=ProgressOutSchema)
async def get_user_progress(user_id: CurrentUserId, db: DbSession):
    """Progress keyed by lesson id."""
    result = await db.execute(select(UserProgress).where(UserProgress.user_id == user_id))
    return ProgressOutSchema(progress={
        p.lesson_id: ProgressEntrySchema(completed=bool(p.completed), lastAccessed=p.last_accessed_at)
        for p in result.scalars().all()
    })


@router.get("/stats", response_model=StatsOutSchema)
async def get_user_stats(user_id: CurrentUserId, db: DbSession):
    return await compute_stats(db, user_id)
