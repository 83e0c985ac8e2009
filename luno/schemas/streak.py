"""Pydantic schemas for streaks, activities, daily challenges and badges."""
from datetime import date, datetime

from pydantic import BaseModel


class ActivityInSchema(BaseModel):
    activityType: str | None = None
    activityId: int | None = None
    points: int = 0


class BadgeSchema(BaseModel):
    id: int
    badge_type: str
    badge_name: str
    badge_description: str | None = None
    earned_at: datetime | None = None

    class Config:
        from_attributes = True


class AwardedBadgeSchema(BaseModel):
    type: str
    name: str
    description: str


class ActivityOutSchema(BaseModel):
    message: str
    pointsEarned: int = 0
    newBadges: list[AwardedBadgeSchema] = []


class ChallengeSchema(BaseModel):
    id: int
    challenge_date: date
    title: str
    description: str | None = None
    challenge_type: str
    target_id: int | None = None
    points_reward: int
    difficulty: str
    completed: bool = False

    class Config:
        from_attributes = True


class TodayChallengeOutSchema(BaseModel):
    challenge: ChallengeSchema | None = None
    completed: bool = False


class ChallengeCompleteInSchema(BaseModel):
    challengeId: int | None = None


class NextBadgeSchema(BaseModel):
    type: str
    name: str
    days: int
    daysRemaining: int


class StreakOutSchema(BaseModel):
    currentStreak: int
    longestStreak: int
    totalDaysActive: int
    lastActivityDate: date | None = None
    todayActivityCount: int
    todayChallenge: ChallengeSchema | None = None
    badges: list[BadgeSchema]
    isActiveToday: bool
    nextBadge: NextBadgeSchema | None = None
