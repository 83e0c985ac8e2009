"""Pydantic schemas for quizzes, submissions and attempt history."""
from datetime import datetime

from pydantic import BaseModel


class QuizQuestionSchema(BaseModel):
    id: int
    question: str
    options: dict[str, str]


class QuizOutSchema(BaseModel):
    id: int
    lesson_id: int
    title: str
    description: str | None = None
    questions: list[QuizQuestionSchema]


class QuizEnvelopeSchema(BaseModel):
    quiz: QuizOutSchema


class AnsweredQuestionSchema(QuizQuestionSchema):
    """Question including its answer; returned to whoever generated the quiz."""
    correctAnswer: str
    explanation: str | None = None


class GeneratedQuizSchema(BaseModel):
    id: int
    lesson_id: int
    questions: list[AnsweredQuestionSchema]


class GeneratedQuizEnvelopeSchema(BaseModel):
    quiz: GeneratedQuizSchema


class QuizSubmitSchema(BaseModel):
    # {questionId: "a" | "b" | "c" | "d"}
    answers: dict[str, str | None] | None = None


class QuestionResultSchema(BaseModel):
    questionId: int
    userAnswer: str | None = None
    correctAnswer: str
    isCorrect: bool
    question: str
    explanation: str | None = None


class QuizResultSchema(BaseModel):
    score: int
    totalQuestions: int
    percentage: int
    results: list[QuestionResultSchema]
    lessonCompleted: bool = False


class QuizHistoryItemSchema(BaseModel):
    id: int
    quizId: int
    lessonId: int
    lessonTitle: str
    quizTitle: str
    score: int
    totalQuestions: int
    percentage: int
    completedAt: datetime | None = None


class QuizHistoryOutSchema(BaseModel):
    history: list[QuizHistoryItemSchema]


class QuizAttemptSchema(BaseModel):
    id: int
    score: int
    totalQuestions: int
    percentage: int
    completedAt: datetime | None = None
    answers: dict


class QuizAttemptsOutSchema(BaseModel):
    attempts: list[QuizAttemptSchema]
