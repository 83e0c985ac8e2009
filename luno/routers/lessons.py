"""Lesson routes: list, detail, AI line explanations, AI quiz generation."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from luno.models.lesson import Lesson, LessonLine, LineExplanation
from luno.models.quiz import Question, Quiz
from luno.routers.deps import CurrentUserId, DbSession, OptionalUserId
from luno.schemas.lesson import (
    EditorCodeSchema,
    ExplainLineSchema,
    ExplanationOutSchema,
    LessonDetailSchema,
    LessonLineSchema,
    LessonListOutSchema,
    LessonOutSchema,
    LessonSummarySchema,
)
from luno.schemas.quiz import AnsweredQuestionSchema, GeneratedQuizEnvelopeSchema, GeneratedQuizSchema
from luno.services.ai import AIServiceError, AITutor, get_tutor
from luno.services.editor import split_html_css
from luno.services.progress import touch_lesson

router = APIRouter(prefix="/api/lesson", tags=["lessons"])
log = logging.getLogger(__name__)

# Lines on each side of an explained line sent as context
CONTEXT_RADIUS = 2
ANSWER_LETTERS = ("a", "b", "c", "d")


async def _get_lesson_or_404(db, lesson_id: int) -> Lesson:
    result = await db.execute(select(Lesson).where(Lesson.id == lesson_id))
    lesson = result.scalar_one_or_none()
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


async def _lesson_lines(db, lesson_id: int) -> list[LessonLine]:
    result = await db.execute(
        select(LessonLine).where(LessonLine.lesson_id == lesson_id).order_by(LessonLine.line_number.asc())
    )
    return list(result.scalars().all())


def _answered_question(q: Question) -> AnsweredQuestionSchema:
    return AnsweredQuestionSchema(
        id=q.id,
        question=q.question_text,
        options=q.options,
        correctAnswer=q.correct_answer,
        explanation=q.explanation,
    )


def _valid_generated_question(q) -> bool:
    return (
        isinstance(q, dict)
        and q.get("question")
        and isinstance(q.get("options"), dict)
        and str(q.get("correctAnswer", "")).strip().lower() in ANSWER_LETTERS
    )


@router.get("", response_model=LessonListOutSchema)
async def list_lessons(db: DbSession):
    result = await db.execute(select(Lesson).order_by(Lesson.order_index.asc(), Lesson.id.asc()))
    return LessonListOutSchema(
        lessons=[LessonSummarySchema.model_validate(lesson) for lesson in result.scalars().all()]
    )


@router.get("/{lesson_id}", response_model=LessonOutSchema)
async def get_lesson(lesson_id: int, db: DbSession, user_id: OptionalUserId):
    """Lesson with its lines; records the visit for signed-in users."""
    lesson = await _get_lesson_or_404(db, lesson_id)
    lines = await _lesson_lines(db, lesson_id)

    # built before tracking: a rollback expires the loaded rows
    html, css = split_html_css("\n".join(line.code_content for line in lines))
    detail = LessonDetailSchema(
        **LessonSummarySchema.model_validate(lesson).model_dump(),
        lines=[LessonLineSchema.model_validate(line) for line in lines],
        editor=EditorCodeSchema(html=html, css=css),
    )

    if user_id:
        try:
            await touch_lesson(db, user_id, lesson_id)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            log.exception("Failed to track access to lesson %s for user %s", lesson_id, user_id)

    return LessonOutSchema(lesson=detail)


@router.post("/{lesson_id}/explain-line", response_model=ExplanationOutSchema)
async def explain_line(
    lesson_id: int,
    body: ExplainLineSchema,
    db: DbSession,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    """Explain one lesson line; explanations are cached per line."""
    if not body.lineId:
        raise HTTPException(status_code=400, detail="Line ID is required")

    result = await db.execute(
        select(LessonLine).where(LessonLine.id == body.lineId, LessonLine.lesson_id == lesson_id)
    )
    line = result.scalar_one_or_none()
    if not line:
        raise HTTPException(status_code=404, detail="Line not found")

    cached = await db.execute(
        select(LineExplanation).where(LineExplanation.lesson_line_id == line.id)
    )
    cached_explanation = cached.scalar_one_or_none()
    if cached_explanation:
        return ExplanationOutSchema(explanation=cached_explanation.explanation)

    context_result = await db.execute(
        select(LessonLine.code_content)
        .where(
            LessonLine.lesson_id == lesson_id,
            LessonLine.line_number.between(max(1, line.line_number - CONTEXT_RADIUS), line.line_number + CONTEXT_RADIUS),
        )
        .order_by(LessonLine.line_number.asc())
    )
    context = "\n".join(context_result.scalars().all())

    try:
        explanation = await tutor.explain_line(line.code_content, context)
    except AIServiceError as e:
        log.error("Explain line %s failed: %s", line.id, e)
        raise HTTPException(status_code=500, detail="Failed to generate explanation")

    line_id = line.id
    db.add(LineExplanation(lesson_line_id=line_id, explanation=explanation))
    try:
        await db.commit()
    except IntegrityError:
        # explained by a concurrent request; keep the stored text
        await db.rollback()
        stored = await db.execute(
            select(LineExplanation.explanation).where(LineExplanation.lesson_line_id == line_id)
        )
        explanation = stored.scalar_one()
    return ExplanationOutSchema(explanation=explanation)


@router.post("/{lesson_id}/generate-quiz", response_model=GeneratedQuizEnvelopeSchema)
async def generate_quiz(
    lesson_id: int,
    db: DbSession,
    user_id: CurrentUserId,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    """Return the lesson's quiz, generating and saving it with the AI on first request."""
    existing = await db.execute(select(Quiz).where(Quiz.lesson_id == lesson_id).order_by(Quiz.id.asc()))
    quiz = existing.scalars().first()
    if quiz is not None:
        questions = await db.execute(
            select(Question).where(Question.quiz_id == quiz.id).order_by(Question.order_index.asc())
        )
        return GeneratedQuizEnvelopeSchema(quiz=GeneratedQuizSchema(
            id=quiz.id,
            lesson_id=lesson_id,
            questions=[_answered_question(q) for q in questions.scalars().all()],
        ))

    lesson = await _get_lesson_or_404(db, lesson_id)
    lines = await _lesson_lines(db, lesson_id)
    content = "\n".join(line.code_content for line in lines)

    try:
        quiz_data = await tutor.generate_quiz(content, lesson.title)
    except AIServiceError as e:
        log.error("Quiz generation for lesson %s failed: %s", lesson_id, e)
        raise HTTPException(status_code=500, detail="Failed to generate quiz")

    quiz = Quiz(
        lesson_id=lesson_id,
        title=f"Quiz: {lesson.title}",
        description=f"Test your knowledge of {lesson.title}",
    )
    db.add(quiz)
    await db.flush()

    saved = []
    for index, q in enumerate(quiz_data["questions"], start=1):
        if not _valid_generated_question(q):
            log.warning("Skipping invalid generated question for lesson %s: %r", lesson_id, q)
            continue
        options = q["options"]
        question = Question(
            quiz_id=quiz.id,
            question_text=q["question"],
            option_a=options.get("a") or "",
            option_b=options.get("b") or "",
            option_c=options.get("c") or "",
            option_d=options.get("d") or "",
            correct_answer=str(q["correctAnswer"]).strip().lower(),
            explanation=q.get("explanation") or "",
            order_index=index,
        )
        db.add(question)
        saved.append(question)

    if not saved:
        await db.rollback()
        log.error("AI returned no usable questions for lesson %s", lesson_id)
        raise HTTPException(status_code=500, detail="Failed to generate quiz")

    await db.commit()
    log.info("Generated quiz %s with %d questions for lesson %s (user %s)", quiz.id, len(saved), lesson_id, user_id)
    return GeneratedQuizEnvelopeSchema(quiz=GeneratedQuizSchema(
        id=quiz.id,
        lesson_id=lesson_id,
        questions=[_answered_question(q) for q in saved],
    ))
