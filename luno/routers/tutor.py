"""AI tutor routes: chat and debugging help."""
import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from luno.core.errors import error_response
from luno.routers.deps import CurrentUserId, OptionalUserId
from luno.schemas.ai import ChatInSchema, ChatOutSchema, DebugInSchema, DebugOutSchema
from luno.services.ai import AIServiceError, AITutor, describe_ai_error, get_tutor

router = APIRouter(prefix="/api", tags=["tutor"])
log = logging.getLogger(__name__)


@router.post("/chat", response_model=ChatOutSchema)
async def chat(
    body: ChatInSchema,
    user_id: OptionalUserId,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    """Chat with the tutor; works signed in or anonymous."""
    message = (body.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    history = [{"role": turn.role or "user", "content": turn.content} for turn in body.history]
    try:
        response = await tutor.chat(message, history)
    except AIServiceError as e:
        log.error("Chat failed for user %s: %s", user_id, e)
        return error_response(500, "Failed to get response from tutor", message=describe_ai_error(str(e)))

    return ChatOutSchema(response=response, timestamp=datetime.now(timezone.utc))


@router.post("/debug", response_model=DebugOutSchema)
async def debug(
    body: DebugInSchema,
    user_id: CurrentUserId,
    tutor: Annotated[AITutor, Depends(get_tutor)],
):
    code = (body.code or "").strip()
    if not code:
        raise HTTPException(status_code=400, detail="Code is required")

    try:
        suggestion = await tutor.debug_code(code, body.errorMessage or "")
    except AIServiceError as e:
        log.error("Debug failed for user %s: %s", user_id, e)
        raise HTTPException(status_code=500, detail="Failed to debug code")

    return DebugOutSchema(suggestion=suggestion, timestamp=datetime.now(timezone.utc))
