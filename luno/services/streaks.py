"""Daily streaks, activities, daily challenges and badge unlocks."""
import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from luno.models.lesson import Lesson
from luno.models.streak import (
    ChallengeCompletion,
    DailyActivity,
    DailyChallenge,
    UserBadge,
    UserStreak,
)
from luno.schemas.streak import AwardedBadgeSchema, NextBadgeSchema

log = logging.getLogger(__name__)

CHALLENGE_POINTS = 10
CHALLENGE_DIFFICULTY = "beginner"


@dataclass(frozen=True)
class StreakState:
    current_streak: int
    longest_streak: int
    total_days_active: int
    last_activity_date: date | None


@dataclass(frozen=True)
class BadgeRule:
    type: str
    name: str
    description: str
    field: str  # UserStreak attribute compared against threshold
    threshold: int


BADGE_RULES = [
    BadgeRule("streak_7", "Week Warrior", "Maintain a 7-day streak!", "current_streak", 7),
    BadgeRule("streak_30", "Monthly Master", "Maintain a 30-day streak!", "current_streak", 30),
    BadgeRule("streak_100", "Century Champion", "Achieve a 100-day streak!", "longest_streak", 100),
    BadgeRule("days_10", "Getting Started", "Be active for 10 days!", "total_days_active", 10),
    BadgeRule("days_50", "Dedicated Learner", "Be active for 50 days!", "total_days_active", 50),
]

STREAK_MILESTONES = [rule for rule in BADGE_RULES if rule.type.startswith("streak_")]


def utc_today() -> date:
    """Activity days are UTC calendar days."""
    return datetime.now(timezone.utc).date()


def advance_streak(state: StreakState, today: date) -> StreakState | None:
    """Apply one activity on `today`; None when today was already counted."""
    last = state.last_activity_date
    if last is None:
        current, total = 1, 1
    elif last == today:
        return None
    elif (today - last).days == 1:
        current, total = state.current_streak + 1, state.total_days_active + 1
    else:
        current, total = 1, state.total_days_active + 1
    return StreakState(
        current_streak=current,
        longest_streak=max(current, state.longest_streak),
        total_days_active=total,
        last_activity_date=today,
    )


def is_streak_broken(last_activity: date | None, today: date) -> bool:
    return last_activity is not None and (today - last_activity).days > 1


def due_badges(streak: UserStreak, owned: set[str]) -> list[BadgeRule]:
    """Rules whose threshold is reached and which the user does not own yet."""
    return [
        rule for rule in BADGE_RULES
        if rule.type not in owned and (getattr(streak, rule.field) or 0) >= rule.threshold
    ]


def next_streak_badge(current_streak: int) -> NextBadgeSchema | None:
    for rule in STREAK_MILESTONES:
        if current_streak < rule.threshold:
            return NextBadgeSchema(
                type=rule.type,
                name=rule.name,
                days=rule.threshold,
                daysRemaining=rule.threshold - current_streak,
            )
    return None


# ---------- persistence ----------

async def get_or_create_streak(db: AsyncSession, user_id: int) -> UserStreak:
    result = await db.execute(select(UserStreak).where(UserStreak.user_id == user_id))
    streak = result.scalar_one_or_none()
    if streak is None:
        streak = UserStreak(
            user_id=user_id,
            current_streak=0,
            longest_streak=0,
            last_activity_date=None,
            total_days_active=0,
        )
        db.add(streak)
        await db.flush()
    return streak


async def update_streak(db: AsyncSession, user_id: int, today: date) -> UserStreak:
    streak = await get_or_create_streak(db, user_id)
    new_state = advance_streak(
        StreakState(
            current_streak=streak.current_streak or 0,
            longest_streak=streak.longest_streak or 0,
            total_days_active=streak.total_days_active or 0,
            last_activity_date=streak.last_activity_date,
        ),
        today,
    )
    if new_state is not None:
        streak.current_streak = new_state.current_streak
        streak.longest_streak = new_state.longest_streak
        streak.total_days_active = new_state.total_days_active
        streak.last_activity_date = new_state.last_activity_date
        await db.flush()
    return streak


async def check_badge_unlocks(db: AsyncSession, user_id: int) -> list[AwardedBadgeSchema]:
    """Award every badge whose threshold is reached; each badge at most once."""
    result = await db.execute(select(UserStreak).where(UserStreak.user_id == user_id))
    streak = result.scalar_one_or_none()
    if streak is None:
        return []

    owned_result = await db.execute(select(UserBadge.badge_type).where(UserBadge.user_id == user_id))
    owned = set(owned_result.scalars().all())

    awarded = []
    for rule in due_badges(streak, owned):
        db.add(UserBadge(
            user_id=user_id,
            badge_type=rule.type,
            badge_name=rule.name,
            badge_description=rule.description,
        ))
        awarded.append(AwardedBadgeSchema(type=rule.type, name=rule.name, description=rule.description))
    if awarded:
        await db.flush()
        log.info("User %s earned badges: %s", user_id, ", ".join(b.type for b in awarded))
    return awarded


async def record_activity(
    db: AsyncSession,
    user_id: int,
    activity_type: str,
    activity_id: int | None = None,
    points: int = 0,
    today: date | None = None,
) -> tuple[bool, list[AwardedBadgeSchema]]:
    """Record an activity once per day; returns (recorded, newly awarded badges)."""
    today = today or utc_today()
    result = await db.execute(
        select(DailyActivity.id).where(
            DailyActivity.user_id == user_id,
            DailyActivity.activity_date == today,
            DailyActivity.activity_type == activity_type,
            DailyActivity.activity_id.is_(None) if activity_id is None else DailyActivity.activity_id == activity_id,
        )
    )
    if result.first() is not None:
        return False, []

    db.add(DailyActivity(
        user_id=user_id,
        activity_date=today,
        activity_type=activity_type,
        activity_id=activity_id,
        points_earned=points,
    ))
    await update_streak(db, user_id, today)
    badges = await check_badge_unlocks(db, user_id)
    await db.commit()
    return True, badges


async def get_streak_summary(db: AsyncSession, user_id: int, today: date | None = None) -> dict:
    """Streak state for display; a streak with a gap over one day reads (and is stored) as 0."""
    today = today or utc_today()
    streak = await get_or_create_streak(db, user_id)
    if is_streak_broken(streak.last_activity_date, today) and streak.current_streak:
        streak.current_streak = 0
    await db.commit()

    count_result = await db.execute(
        select(func.count(DailyActivity.id)).where(
            DailyActivity.user_id == user_id,
            DailyActivity.activity_date == today,
        )
    )
    today_count = count_result.scalar_one()

    challenge = await find_challenge(db, today)
    completed = await is_challenge_completed(db, user_id, challenge.id) if challenge else False

    badges_result = await db.execute(
        select(UserBadge).where(UserBadge.user_id == user_id).order_by(UserBadge.earned_at.desc(), UserBadge.id.desc())
    )

    return {
        "streak": streak,
        "today_count": today_count,
        "challenge": challenge,
        "challenge_completed": completed,
        "badges": list(badges_result.scalars().all()),
        "next_badge": next_streak_badge(streak.current_streak),
    }


async def find_challenge(db: AsyncSession, day: date) -> DailyChallenge | None:
    result = await db.execute(select(DailyChallenge).where(DailyChallenge.challenge_date == day))
    return result.scalar_one_or_none()


async def is_challenge_completed(db: AsyncSession, user_id: int, challenge_id: int) -> bool:
    result = await db.execute(
        select(ChallengeCompletion.id).where(
            ChallengeCompletion.user_id == user_id,
            ChallengeCompletion.challenge_id == challenge_id,
        )
    )
    return result.first() is not None


def challenge_templates(lesson: Lesson) -> list[dict]:
    return [
        {
            "challenge_type": "lesson",
            "title": f"Complete: {lesson.title}",
            "description": f'Finish the lesson "{lesson.title}" to earn bonus points!',
        },
        {
            "challenge_type": "quiz",
            "title": "Take a Quiz",
            "description": "Complete any quiz to keep your streak alive!",
        },
        {
            "challenge_type": "practice",
            "title": "Practice Coding",
            "description": "Spend 15 minutes coding in the editor today!",
        },
    ]


async def get_or_create_today_challenge(
    db: AsyncSession,
    today: date | None = None,
    rng: random.Random | None = None,
) -> DailyChallenge | None:
    """Today's challenge, generated from a random lesson on first request; None without lessons."""
    today = today or utc_today()
    challenge = await find_challenge(db, today)
    if challenge is not None:
        return challenge

    rng = rng or random
    lessons_result = await db.execute(select(Lesson))
    lessons = lessons_result.scalars().all()
    if not lessons:
        return None

    lesson = rng.choice(lessons)
    template = rng.choice(challenge_templates(lesson))
    challenge = DailyChallenge(
        challenge_date=today,
        target_id=lesson.id,
        points_reward=CHALLENGE_POINTS,
        difficulty=CHALLENGE_DIFFICULTY,
        **template,
    )
    db.add(challenge)
    try:
        await db.commit()
    except IntegrityError:
        # generated by a concurrent request for the same day
        await db.rollback()
        return await find_challenge(db, today)
    await db.refresh(challenge)
    log.info("Generated daily challenge %s for %s (%s)", challenge.id, today, challenge.challenge_type)
    return challenge


async def complete_challenge(
    db: AsyncSession,
    user_id: int,
    challenge: DailyChallenge,
    today: date | None = None,
) -> tuple[bool, list[AwardedBadgeSchema]]:
    """Record a challenge completion once; returns (newly completed, newly awarded badges)."""
    if await is_challenge_completed(db, user_id, challenge.id):
        return False, []

    today = today or utc_today()
    db.add(ChallengeCompletion(
        user_id=user_id,
        challenge_id=challenge.id,
        points_earned=challenge.points_reward,
    ))
    db.add(DailyActivity(
        user_id=user_id,
        activity_date=today,
        activity_type="challenge",
        activity_id=challenge.id,
        points_earned=challenge.points_reward,
    ))
    await update_streak(db, user_id, today)
    badges = await check_badge_unlocks(db, user_id)
    await db.commit()
    return True, badges
