"""Code review routes: AI review, focused suggestions, applying a suggestion, live preview."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from luno.core.errors import error_response
from luno.routers.deps import CurrentUserId
from luno.schemas.ai import (
    ApplySuggestionInSchema,
    CodeOutSchema,
    CodeReviewInSchema,
    CodeReviewOutSchema,
    PreviewInSchema,
    PreviewOutSchema,
    SuggestionsInSchema,
    SuggestionsOutSchema,
)
from luno.services.ai import AIServiceError, AITutor, describe_ai_error, get_tutor, parse_suggestions
from luno.services.editor import apply_suggestion, combine_html_css

router = APIRouter(prefix="/api/code-review", tags=["code-review"])
log = logging.getLogger(__name__)


@router.post("/review", response_model=CodeReviewOutSchema)
async def review_code(
    body: CodeReviewInSchema,
    user_id: CurrentUserId,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    if body.code is None:
        raise HTTPException(status_code=400, detail="Code is required")

    if not body.code.strip():
        return CodeReviewOutSchema(
            score=100,
            suggestions=[],
            message="Code is empty. Start typing to get suggestions!",
        )

    try:
        analysis = await tutor.review_code(body.code, body.language)
    except AIServiceError as e:
        log.error("Code review failed for user %s: %s", user_id, e)
        return error_response(500, "Failed to review code", message=describe_ai_error(str(e)))

    return CodeReviewOutSchema(
        score=analysis["score"],
        summary=analysis["summary"],
        suggestions=parse_suggestions(analysis["suggestions"]),
    )


@router.post("/suggestions", response_model=SuggestionsOutSchema)
async def get_suggestions(
    body: SuggestionsInSchema,
    user_id: CurrentUserId,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    if not body.code or not body.issue:
        raise HTTPException(status_code=400, detail="Code and issue are required")

    try:
        suggestions = await tutor.suggest_fixes(body.code, body.issue, body.language)
    except AIServiceError as e:
        log.error("Suggestions failed for user %s: %s", user_id, e)
        return error_response(500, "Failed to get suggestions", message=describe_ai_error(str(e)))

    return SuggestionsOutSchema(suggestions=parse_suggestions(suggestions))


@router.post("/apply", response_model=CodeOutSchema)
async def apply_code_suggestion(body: ApplySuggestionInSchema, user_id: CurrentUserId):
    """Apply one review suggestion to the code and return the result."""
    try:
        code = apply_suggestion(body.code, body.suggestion.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CodeOutSchema(code=code)


@router.post("/preview", response_model=PreviewOutSchema)
async def preview(body: PreviewInSchema):
    """Combine editor HTML and CSS into one previewable document."""
    return PreviewOutSchema(document=combine_html_css(body.html, body.css))
