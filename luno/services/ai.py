"""AI gateway: one OpenAI-compatible chat-completion client shared by every AI feature.

A key starting with ``sk-or-`` is an OpenRouter key: requests then go to the
OpenRouter base URL with its ``HTTP-Referer`` / ``X-Title`` headers and the
model name gets the ``openai/`` vendor prefix.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import APIError, APIStatusError, AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from luno.core.config import Settings, get_settings
from luno.schemas.ai import CodeSuggestionSchema

log = logging.getLogger(__name__)

TUTOR_PERSONA = (
    "You are Luno, a friendly and patient AI coding tutor specializing in HTML and CSS. "
    "You help students learn step-by-step, explain concepts clearly, and encourage them. "
    "Keep responses concise (under 200 words) and beginner-friendly."
)

EXPLAIN_SYSTEM = (
    "You are a friendly, patient coding tutor who explains code in simple terms "
    "for beginners learning HTML and CSS."
)
QUIZ_SYSTEM = "You are a coding tutor creating quiz questions. Always respond with valid JSON only, no markdown formatting."
DEBUG_SYSTEM = (
    "You are a helpful debugging assistant. Explain errors clearly and provide solutions "
    "in a friendly, encouraging way."
)
REVIEW_SYSTEM = (
    "You are a senior front-end reviewer helping beginners write better HTML and CSS. "
    "Always respond with valid JSON only, no markdown formatting."
)

SUGGESTION_FORMAT = """{
  "type": "error" | "warning" | "suggestion" | "best-practice" | "accessibility",
  "priority": "high" | "medium" | "low",
  "startLine": 1,
  "endLine": 1,
  "message": "Short description of the issue",
  "explanation": "Why it matters, in beginner-friendly words",
  "oldCode": "exact code to replace (copied from the input)",
  "newCode": "replacement code"
}"""

_FENCE_RE = re.compile(r"```(?:json)?\n?")

# Provider error fragments that mean the key is wrong, missing or revoked
_KEY_ERROR_MARKERS = ("user not found", "api key", "openrouter", "invalid", "expired", "not configured")


class AIServiceError(Exception):
    """Raised when the AI provider is unavailable or returns unusable output."""


def strip_code_fences(content: str) -> str:
    return _FENCE_RE.sub("", content).strip()


def parse_json_reply(content: str) -> Any:
    """Parse a JSON completion, tolerating ```json fences around it."""
    text = strip_code_fences(content)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # Models sometimes wrap the object in prose; keep the outermost {...}
        start, end = text.find("{"), text.rfind("}")
        if start != -1 and end > start:
            try:
                return json.loads(text[start:end + 1])
            except json.JSONDecodeError:
                pass
        raise AIServiceError("AI returned invalid JSON")


def describe_ai_error(message: str | None) -> str:
    """Friendlier client message for a provider error."""
    text = (message or "").lower()
    if any(marker in text for marker in _KEY_ERROR_MARKERS):
        return (
            "The AI provider rejected the API key (invalid or expired). "
            "Verify the key at https://openrouter.ai/keys or https://platform.openai.com "
            "and update OPENAI_API_KEY."
        )
    if "rate limit" in text or "429" in text:
        return "The AI tutor is receiving too many requests. Please try again in a moment."
    if "timeout" in text or "timed out" in text:
        return "The AI tutor took too long to answer. Please try again."
    return "The AI tutor is temporarily unavailable. Please try again."


def clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


def _provider_message(exc: OpenAIError) -> str:
    if isinstance(exc, APIError) and isinstance(exc.body, dict):
        err = exc.body.get("error", exc.body)
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
    return str(exc) or exc.__class__.__name__


def parse_suggestions(items: Any) -> list[CodeSuggestionSchema]:
    """Validated suggestions; items without a message or with off-format fields are dropped."""
    if not isinstance(items, list):
        return []
    suggestions = []
    for item in items:
        if isinstance(item, CodeSuggestionSchema):
            suggestions.append(item)
            continue
        if not isinstance(item, dict) or not item.get("message"):
            continue
        try:
            suggestions.append(CodeSuggestionSchema.model_validate(item))
        except ValidationError as e:
            log.warning("Dropping malformed suggestion %r: %s", item, e.errors()[:2])
    return suggestions


class AITutor:
    """Async wrapper around the chat-completion API used by the AI features."""

    def __init__(self, settings: Settings | None = None, client: AsyncOpenAI | None = None):
        self.settings = settings or get_settings()
        self.is_openrouter = self.settings.is_openrouter
        self._client = client

    @property
    def model(self) -> str:
        model = self.settings.openai_model
        if self.is_openrouter and "/" not in model:
            return f"openai/{model}"
        return model

    @property
    def provider(self) -> str:
        return "OpenRouter" if self.is_openrouter else "OpenAI"

    def _get_client(self) -> AsyncOpenAI:
        if self._client is not None:
            return self._client
        if not self.settings.openai_api_key:
            raise AIServiceError("OpenAI API key is not configured")

        kwargs: dict[str, Any] = {
            "api_key": self.settings.openai_api_key,
            "timeout": self.settings.ai_timeout_seconds,
            "max_retries": self.settings.ai_max_retries,
        }
        if self.is_openrouter:
            kwargs["base_url"] = self.settings.openrouter_base_url
            kwargs["default_headers"] = {
                "HTTP-Referer": self.settings.site_url,
                "X-Title": self.settings.ai_app_title,
            }
        self._client = AsyncOpenAI(**kwargs)
        log.info(
            "AI client ready (%s, model=%s, key=%s...)",
            self.provider, self.model, self.settings.openai_api_key[:7],
        )
        return self._client

    async def _complete(self, messages: list[dict], *, max_tokens: int, action: str) -> str:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=self.settings.ai_temperature,
            )
        except OpenAIError as e:
            status = e.status_code if isinstance(e, APIStatusError) else None
            message = _provider_message(e)
            log.error("%s error while trying to %s (status=%s): %s", self.provider, action, status, message)
            raise AIServiceError(f"Failed to {action}: {message}") from e

        if not response or not response.choices:
            raise AIServiceError(f"Failed to {action}: Invalid response from API")
        content = response.choices[0].message.content
        if not content:
            raise AIServiceError(f"Failed to {action}: Empty response from API")
        return content.strip()

    async def explain_line(self, code_line: str, context: str = "") -> str:
        context_part = f"Context: {context}" if context else ""
        prompt = f"""You are a friendly coding tutor teaching HTML and CSS to beginners. Explain this line of code in a simple, encouraging way:

{code_line}

{context_part}

Keep the explanation:
- Simple and beginner-friendly
- Fun and engaging
- Under 100 words
- Focus on what this line does and why it's important"""
        return await self._complete(
            [{"role": "system", "content": EXPLAIN_SYSTEM}, {"role": "user", "content": prompt}],
            max_tokens=200,
            action="generate explanation",
        )

    async def generate_quiz(self, lesson_content: str, lesson_title: str) -> dict:
        prompt = f"""Generate 5 multiple-choice questions about this HTML/CSS lesson:

Lesson Title: {lesson_title}
Lesson Content:
{lesson_content}

Create 5 MCQ questions with:
- Clear, beginner-friendly question text
- 4 options (a, b, c, d) for each question
- One correct answer per question
- Brief explanation for the correct answer

Format as JSON:
{{
  "questions": [
    {{
      "question": "Question text?",
      "options": {{"a": "Option A", "b": "Option B", "c": "Option C", "d": "Option D"}},
      "correctAnswer": "a",
      "explanation": "Brief explanation"
    }}
  ]
}}"""
        content = await self._complete(
            [{"role": "system", "content": QUIZ_SYSTEM}, {"role": "user", "content": prompt}],
            max_tokens=1500,
            action="generate quiz",
        )
        data = parse_json_reply(content)
        if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
            raise AIServiceError("Invalid quiz data format: questions array not found")
        return data

    async def chat(self, message: str, history: list[dict] | None = None) -> str:
        if not message or not isinstance(message, str):
            raise AIServiceError("Message must be a non-empty string")
        messages = [{"role": "system", "content": TUTOR_PERSONA}]
        for turn in history or []:
            if turn.get("role") in ("user", "assistant") and (turn.get("content") or "").strip():
                messages.append({"role": turn["role"], "content": turn["content"]})
        messages.append({"role": "user", "content": message})
        log.debug("Sending chat request to %s (%d messages)", self.provider, len(messages))
        return await self._complete(messages, max_tokens=300, action="get response from tutor")

    async def debug_code(self, code: str, error_message: str = "") -> str:
        error_part = (
            f"Error message: {error_message}" if error_message
            else "No specific error, but the code is not working as expected."
        )
        prompt = f"""A student is having trouble with their HTML/CSS code. Help them debug it:

Code:
{code}

{error_part}

Provide:
1. What's wrong with the code
2. How to fix it
3. A corrected version (if applicable)

Keep it beginner-friendly and encouraging."""
        return await self._complete(
            [{"role": "system", "content": DEBUG_SYSTEM}, {"role": "user", "content": prompt}],
            max_tokens=500,
            action="debug code",
        )

    async def review_code(self, code: str, language: str = "html") -> dict:
        numbered = "\n".join(f"{i}: {line}" for i, line in enumerate(code.split("\n"), start=1))
        prompt = f"""Review this {language.upper()} code written by a beginner. Line numbers are prefixed for reference and are not part of the code.

{numbered}

Respond with JSON:
{{
  "score": 0-100 overall quality,
  "summary": "one encouraging sentence",
  "suggestions": [
{SUGGESTION_FORMAT}
  ]
}}
Return at most 8 suggestions, most important first. Return an empty list if the code is fine."""
        content = await self._complete(
            [{"role": "system", "content": REVIEW_SYSTEM}, {"role": "user", "content": prompt}],
            max_tokens=1200,
            action="review code",
        )
        data = parse_json_reply(content)
        if not isinstance(data, dict):
            raise AIServiceError("Invalid review format")
        return {
            "score": clamp_score(data.get("score", 0)),
            "summary": data.get("summary") or "Code review completed",
            "suggestions": parse_suggestions(data.get("suggestions")),
        }

    async def suggest_fixes(self, code: str, issue: str, language: str = "html") -> list[CodeSuggestionSchema]:
        prompt = f"""A beginner asks about this issue in their {language.upper()} code:

Issue: {issue}

Code:
{code}

Respond with JSON: {{"suggestions": [
{SUGGESTION_FORMAT}
]}}
Only include suggestions that address the issue."""
        content = await self._complete(
            [{"role": "system", "content": REVIEW_SYSTEM}, {"role": "user", "content": prompt}],
            max_tokens=800,
            action="get suggestions",
        )
        data = parse_json_reply(content)
        if isinstance(data, dict):
            return parse_suggestions(data.get("suggestions"))
        return parse_suggestions(data)


_tutor: AITutor | None = None


def get_tutor() -> AITutor:
    """FastAPI dependency: process-wide AITutor, built on first use."""
    global _tutor
    if _tutor is None:
        _tutor = AITutor()
    return _tutor
