from luno.models.user import User
from luno.models.lesson import Lesson, LessonLine, LineExplanation
from luno.models.quiz import Quiz, Question, QuizAttempt
from luno.models.progress import UserProgress
from luno.models.streak import (
    ChallengeCompletion,
    DailyActivity,
    DailyChallenge,
    UserBadge,
    UserStreak,
)

__all__ = [
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
