from luno.schemas.auth import AuthOutSchema, LoginSchema, ProfileOutSchema, SignupSchema, UserOutSchema
from luno.schemas.lesson import LessonDetailSchema, LessonLineSchema, LessonSummarySchema
from luno.schemas.progress import MessageSchema, ProgressOutSchema, StatsOutSchema
from luno.schemas.quiz import QuestionResultSchema, QuizOutSchema, QuizResultSchema, QuizSubmitSchema
from luno.schemas.streak import ActivityInSchema, BadgeSchema, ChallengeSchema, StreakOutSchema

__all__ = [
    "AuthOutSchema",
    "LoginSchema",
    "ProfileOutSchema",
    "SignupSchema",
    "UserOutSchema",
    "LessonDetailSchema",
    "LessonLineSchema",
    "LessonSummarySchema",
    "MessageSchema",
    "ProgressOutSchema",
    "StatsOutSchema",
    "QuestionResultSchema",
    "QuizOutSchema",
    "QuizResultSchema",
    "QuizSubmitSchema",
    "ActivityInSchema",
    "BadgeSchema",
    "ChallengeSchema",
    "StreakOutSchema",
]
