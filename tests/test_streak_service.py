import random
from datetime import date, timedelta

import pytest
from sqlalchemy import func, select

from luno.db.session import AsyncSessionLocal
from luno.models.streak import DailyActivity, DailyChallenge, UserBadge, UserStreak
from luno.models.user import User
from luno.services import streaks

pytestmark = pytest.mark.anyio

START = date(2025, 1, 1)


async def _user(db, name="carol"):
    user = User(username=name, email=f"{name}@example.com", password_hash="x")
    db.add(user)
    await db.commit()
    return user


async def test_consecutive_days_build_streak(db):
    user = await _user(db)
    for offset in range(3):
        recorded, _ = await streaks.record_activity(db, user.id, "lesson", 1, today=START + timedelta(days=offset))
        assert recorded

    streak = await streaks.get_or_create_streak(db, user.id)
    assert (streak.current_streak, streak.longest_streak, streak.total_days_active) == (3, 3, 3)
    assert streak.last_activity_date == START + timedelta(days=2)


async def test_same_activity_twice_a_day_is_ignored(db):
    user = await _user(db)
    assert (await streaks.record_activity(db, user.id, "quiz", 4, today=START))[0] is True
    assert (await streaks.record_activity(db, user.id, "quiz", 4, today=START))[0] is False
    # a different activity the same day is recorded but does not add a day
    assert (await streaks.record_activity(db, user.id, "quiz", 5, today=START))[0] is True

    count = (await db.execute(select(func.count(DailyActivity.id)))).scalar_one()
    streak = await streaks.get_or_create_streak(db, user.id)
    assert count == 2
    assert streak.total_days_active == 1


async def test_week_streak_awards_badge_once(db):
    user = await _user(db)
    awarded = []
    for offset in range(8):
        _, badges = await streaks.record_activity(db, user.id, "practice", today=START + timedelta(days=offset))
        awarded.append([b.type for b in badges])

    assert awarded[6] == ["streak_7"]
    assert all(not day for i, day in enumerate(awarded) if i != 6)
    owned = (await db.execute(select(UserBadge.badge_type).where(UserBadge.user_id == user.id))).scalars().all()
    assert owned == ["streak_7"]


async def test_broken_streak_reads_as_zero(db):
    user = await _user(db)
    await streaks.record_activity(db, user.id, "lesson", 1, today=START)
    await streaks.record_activity(db, user.id, "lesson", 1, today=START + timedelta(days=1))

    summary = await streaks.get_streak_summary(db, user.id, today=START + timedelta(days=5))
    assert summary["streak"].current_streak == 0
    assert summary["streak"].longest_streak == 2
    assert summary["streak"].last_activity_date == START + timedelta(days=1)
    assert summary["today_count"] == 0
    assert summary["next_badge"].daysRemaining == 7

    stored = (await db.execute(select(UserStreak.current_streak).where(UserStreak.user_id == user.id))).scalar_one()
    assert stored == 0


async def test_today_challenge_is_generated_once(db):
    first = await streaks.get_or_create_today_challenge(db, today=START, rng=random.Random(7))
    second = await streaks.get_or_create_today_challenge(db, today=START, rng=random.Random(99))
    assert first is not None
    assert first.id == second.id
    assert first.points_reward == 10
    assert first.challenge_type in {"lesson", "quiz", "practice"}
    assert first.target_id is not None


async def test_complete_challenge_once(db):
    user = await _user(db)
    challenge = await streaks.get_or_create_today_challenge(db, today=START)

    completed, _ = await streaks.complete_challenge(db, user.id, challenge, today=START)
    again, badges = await streaks.complete_challenge(db, user.id, challenge, today=START)
    assert completed is True
    assert again is False
    assert badges == []
    assert await streaks.is_challenge_completed(db, user.id, challenge.id)

    streak = await streaks.get_or_create_streak(db, user.id)
    assert streak.current_streak == 1


async def test_concurrently_generated_challenge_is_reused(db, monkeypatch):
    async with AsyncSessionLocal() as other:
        existing = await streaks.get_or_create_today_challenge(other, today=START)

    real_find = streaks.find_challenge
    lookups = []

    async def stale_find(session, day):
        # the first lookup runs before the other request committed
        lookups.append(day)
        if len(lookups) == 1:
            return None
        return await real_find(session, day)

    monkeypatch.setattr(streaks, "find_challenge", stale_find)
    challenge = await streaks.get_or_create_today_challenge(db, today=START)
    assert challenge.id == existing.id
    assert len(lookups) == 2
    count = (await db.execute(select(func.count(DailyChallenge.id)))).scalar_one()
    assert count == 1
