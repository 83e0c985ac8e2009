"""Luno - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from luno.core.config import get_settings
from luno.core.errors import RequestIDMiddleware, register_exception_handlers
from luno.core.logging import configure_logging
from luno.db.base import Base
from luno.db.session import engine, AsyncSessionLocal
from luno.routers import auth, code_review, lessons, progress, quizzes, streaks, tutor
from luno.services.seeding import seed_lessons

settings = get_settings()
configure_logging(settings)
log = logging.getLogger("luno")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables (async)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # seed lessons (async)
    async with AsyncSessionLocal() as db:
        await seed_lessons(db)

    if settings.openai_api_key:
        log.info("AI provider configured (%s)", "OpenRouter" if settings.is_openrouter else "OpenAI")
    else:
        log.warning("OPENAI_API_KEY not set; AI features will answer with errors")

    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Learn HTML/CSS with lessons, quizzes, streaks and an AI tutor",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(lessons.router)
app.include_router(quizzes.router)
app.include_router(tutor.router)
app.include_router(progress.router)
app.include_router(streaks.router)
app.include_router(code_review.router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "message": "Luno API is running"}
