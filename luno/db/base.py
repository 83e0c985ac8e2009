"""SQLAlchemy declarative base and model imports for Alembic."""
from luno.db.session import Base

# Import all models so Alembic can see them
from luno.models.user import User  # noqa: F401
from luno.models.lesson import Lesson, LessonLine, LineExplanation  # noqa: F401
from luno.models.quiz import Quiz, Question, QuizAttempt  # noqa: F401
from luno.models.progress import UserProgress  # noqa: F401
from luno.models.streak import (  # noqa: F401
    ChallengeCompletion,
    DailyActivity,
    DailyChallenge,
    UserBadge,
    UserStreak,
)

__all__ = [
    "Base",
    "User",
    "Lesson",
    "LessonLine",
    "LineExplanation",
    "Quiz",
    "Question",
    "QuizAttempt",
    "UserProgress",
    "UserStreak",
    "DailyActivity",
    "DailyChallenge",
    "ChallengeCompletion",
    "UserBadge",
]
