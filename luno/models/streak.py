"""Streak bookkeeping: per-user streak, daily activities, daily challenges, badges."""
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from luno.db.session import Base


class UserStreak(Base):
    __tablename__ = "user_streaks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True)
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_activity_date = Column(Date, nullable=True)
    total_days_active = Column(Integer, nullable=False, default=0)

    user = relationship("User", back_populates="streak")


class DailyActivity(Base):
    __tablename__ = "daily_activities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    activity_date = Column(Date, nullable=False, index=True)
    activity_type = Column(String(32), nullable=False)  # lesson | quiz | practice | challenge ...
    activity_id = Column(Integer, nullable=True)
    points_earned = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)


class DailyChallenge(Base):
    __tablename__ = "daily_challenges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    challenge_date = Column(Date, nullable=False, unique=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    challenge_type = Column(String(32), nullable=False)  # lesson | quiz | practice
    target_id = Column(Integer, nullable=True)
    points_reward = Column(Integer, nullable=False, default=10)
    difficulty = Column(String(32), nullable=False, default="beginner")


class ChallengeCompletion(Base):
    __tablename__ = "challenge_completions"
    __table_args__ = (UniqueConstraint("user_id", "challenge_id", name="uq_challenge_completion"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    challenge_id = Column(Integer, ForeignKey("daily_challenges.id"), nullable=False, index=True)
    points_earned = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)


class UserBadge(Base):
    __tablename__ = "user_badges"
    __table_args__ = (UniqueConstraint("user_id", "badge_type", name="uq_user_badge_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    badge_type = Column(String(32), nullable=False)
    badge_name = Column(String(100), nullable=False)
    badge_description = Column(String(255), nullable=True)
    earned_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
