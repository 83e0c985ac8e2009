"""Streak routes: streak summary, activities, daily challenge."""
from fastapi import APIRouter, HTTPException
from sqlalchemy import select

from luno.models.streak import DailyChallenge
from luno.routers.deps import CurrentUserId, DbSession, OptionalUserId
from luno.schemas.streak import (
    ActivityInSchema,
    ActivityOutSchema,
    BadgeSchema,
    ChallengeCompleteInSchema,
    ChallengeSchema,
    StreakOutSchema,
    TodayChallengeOutSchema,
)
from luno.services import streaks

router = APIRouter(prefix="/api/streak", tags=["streak"])


@router.get("", response_model=StreakOutSchema)
async def get_user_streak(user_id: CurrentUserId, db: DbSession):
    summary = await streaks.get_streak_summary(db, user_id)
    streak = summary["streak"]
    challenge = summary["challenge"]
    today_challenge = None
    if challenge is not None:
        today_challenge = ChallengeSchema.model_validate(challenge).model_copy(
            update={"completed": summary["challenge_completed"]}
        )

    return StreakOutSchema(
        currentStreak=streak.current_streak,
        longestStreak=streak.longest_streak,
        totalDaysActive=streak.total_days_active,
        lastActivityDate=streak.last_activity_date,
        todayActivityCount=summary["today_count"],
        todayChallenge=today_challenge,
        badges=[BadgeSchema.model_validate(b) for b in summary["badges"]],
        isActiveToday=summary["today_count"] > 0,
        nextBadge=summary["next_badge"],
    )


@router.post("/activity", response_model=ActivityOutSchema)
async def record_activity(body: ActivityInSchema, user_id: CurrentUserId, db: DbSession):
    """Record a learning activity (lesson, quiz, practice ...) and advance the streak."""
    activity_type = (body.activityType or "").strip()
    if not activity_type:
        raise HTTPException(status_code=400, detail="Activity type is required")

    recorded, badges = await streaks.record_activity(
        db, user_id, activity_type, body.activityId, body.points,
    )
    if not recorded:
        return ActivityOutSchema(message="Activity already recorded today")
    return ActivityOutSchema(message="Activity recorded", pointsEarned=body.points, newBadges=badges)


@router.post("/challenge/complete", response_model=ActivityOutSchema)
async def complete_challenge(body: ChallengeCompleteInSchema, user_id: CurrentUserId, db: DbSession):
    if body.challengeId is None:
        raise HTTPException(status_code=400, detail="Challenge ID is required")

    result = await db.execute(select(DailyChallenge).where(DailyChallenge.id == body.challengeId))
    challenge = result.scalar_one_or_none()
    if not challenge:
        raise HTTPException(status_code=404, detail="Challenge not found")

    completed, badges = await streaks.complete_challenge(db, user_id, challenge)
    if not completed:
        return ActivityOutSchema(message="Challenge already completed", pointsEarned=challenge.points_reward)
    return ActivityOutSchema(message="Challenge completed", pointsEarned=challenge.points_reward, newBadges=badges)


@router.get("/challenge/today", response_model=TodayChallengeOutSchema)
async def get_today_challenge(db: DbSession, user_id: OptionalUserId):
    """Today's challenge (generated on first request); `completed` only for signed-in users."""
    challenge = await streaks.get_or_create_today_challenge(db)
    if challenge is None:
        return TodayChallengeOutSchema(challenge=None, completed=False)

    completed = False
    if user_id:
        completed = await streaks.is_challenge_completed(db, user_id, challenge.id)
    return TodayChallengeOutSchema(
        challenge=ChallengeSchema.model_validate(challenge).model_copy(update={"completed": completed}),
        completed=completed,
    )
