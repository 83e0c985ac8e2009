"""Quiz routes: take a quiz, submit answers, attempt history."""
import json
import logging

from fastapi import APIRouter, HTTPException
from sqlalchemy import select

from luno.core.config import get_settings
from luno.models.lesson import Lesson
from luno.models.quiz import Question, Quiz, QuizAttempt
from luno.routers.deps import CurrentUserId, DbSession
from luno.schemas.quiz import (
    QuizAttemptSchema,
    QuizAttemptsOutSchema,
    QuizEnvelopeSchema,
    QuizHistoryItemSchema,
    QuizHistoryOutSchema,
    QuizOutSchema,
    QuizQuestionSchema,
    QuizResultSchema,
    QuizSubmitSchema,
)
from luno.services.progress import mark_completed
from luno.services.scoring import is_passing, percentage, score_answers

router = APIRouter(prefix="/api/quiz", tags=["quizzes"])
settings = get_settings()
log = logging.getLogger(__name__)

HISTORY_LIMIT = 50
ATTEMPTS_LIMIT = 10


def _load_answers(raw: str | None) -> dict:
    try:
        data = json.loads(raw or "{}")
    except json.JSONDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


@router.get("/history", response_model=QuizHistoryOutSchema)
async def get_quiz_history(user_id: CurrentUserId, db: DbSession):
    """Latest attempts of the user with quiz and lesson titles."""
    result = await db.execute(
        select(QuizAttempt, Quiz.title, Quiz.lesson_id, Lesson.title)
        .join(Quiz, QuizAttempt.quiz_id == Quiz.id)
        .join(Lesson, Quiz.lesson_id == Lesson.id)
        .where(QuizAttempt.user_id == user_id)
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
        .limit(HISTORY_LIMIT)
    )
    history = [
        QuizHistoryItemSchema(
            id=attempt.id,
            quizId=attempt.quiz_id,
            lessonId=lesson_id,
            lessonTitle=lesson_title,
            quizTitle=quiz_title,
            score=attempt.score,
            totalQuestions=attempt.total_questions,
            percentage=percentage(attempt.score, attempt.total_questions),
            completedAt=attempt.completed_at,
        )
        for attempt, quiz_title, lesson_id, lesson_title in result.all()
    ]
    return QuizHistoryOutSchema(history=history)


@router.get("/{quiz_id}", response_model=QuizEnvelopeSchema)
async def get_quiz(quiz_id: int, db: DbSession):
    """Quiz with its questions; correct answers are not included."""
    result = await db.execute(select(Quiz).where(Quiz.id == quiz_id))
    quiz = result.scalar_one_or_none()
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")

    questions = await db.execute(
        select(Question).where(Question.quiz_id == quiz_id).order_by(Question.order_index.asc())
    )
    return QuizEnvelopeSchema(quiz=QuizOutSchema(
        id=quiz.id,
        lesson_id=quiz.lesson_id,
        title=quiz.title,
        description=quiz.description,
        questions=[
            QuizQuestionSchema(id=q.id, question=q.question_text, options=q.options)
            for q in questions.scalars().all()
        ],
    ))


@router.post("/{quiz_id}/submit", response_model=QuizResultSchema)
async def submit_quiz(quiz_id: int, body: QuizSubmitSchema, user_id: CurrentUserId, db: DbSession):
    """Score answers, save the attempt, and complete the lesson on a passing score."""
    if body.answers is None:
        raise HTTPException(status_code=400, detail="Answers are required")

    quiz_result = await db.execute(select(Quiz).where(Quiz.id == quiz_id))
    quiz = quiz_result.scalar_one_or_none()
    questions_result = await db.execute(
        select(Question).where(Question.quiz_id == quiz_id).order_by(Question.order_index.asc())
    )
    questions = list(questions_result.scalars().all())
    if not quiz or not questions:
        raise HTTPException(status_code=404, detail="Quiz not found")

    score, results = score_answers(questions, body.answers)
    total = len(questions)

    db.add(QuizAttempt(
        user_id=user_id,
        quiz_id=quiz_id,
        score=score,
        total_questions=total,
        answers=json.dumps(body.answers),
    ))

    passed = is_passing(score, total, settings.quiz_pass_percentage)
    if passed:
        await mark_completed(db, user_id, quiz.lesson_id)

    # attempt and lesson completion are committed together
    await db.commit()
    log.info("User %s scored %d/%d on quiz %s", user_id, score, total, quiz_id)

    return QuizResultSchema(
        score=score,
        totalQuestions=total,
        percentage=percentage(score, total),
        results=results,
        lessonCompleted=passed,
    )


@router.get("/{quiz_id}/attempts", response_model=QuizAttemptsOutSchema)
async def get_quiz_attempts(quiz_id: int, user_id: CurrentUserId, db: DbSession):
    result = await db.execute(
        select(QuizAttempt)
        .where(QuizAttempt.quiz_id == quiz_id, QuizAttempt.user_id == user_id)
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
        .limit(ATTEMPTS_LIMIT)
    )
    return QuizAttemptsOutSchema(attempts=[
        QuizAttemptSchema(
            id=a.id,
            score=a.score,
            totalQuestions=a.total_questions,
            percentage=percentage(a.score, a.total_questions),
            completedAt=a.completed_at,
            answers=_load_answers(a.answers),
        )
        for a in result.scalars().all()
    ])
