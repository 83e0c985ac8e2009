from luno.services.ai import AIServiceError, AITutor, get_tutor
from luno.services.scoring import percentage, score_answers
from luno.services.seeding import seed_lessons
from luno.services.streaks import advance_streak, record_activity

__all__ = [
    "AIServiceError",
    "AITutor",
    "get_tutor",
    "percentage",
    "score_answers",
    "seed_lessons",
    "advance_streak",
    "record_activity",
]
