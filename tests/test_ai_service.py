from types import SimpleNamespace

import pytest
from openai import OpenAIError

from luno.core.config import Settings
from luno.services.ai import (
    AIServiceError,
    AITutor,
    clamp_score,
    describe_ai_error,
    parse_json_reply,
    parse_suggestions,
)

pytestmark = pytest.mark.anyio


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _tutor(content=None, error=None, **settings):
    completions = FakeCompletions(content, error)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    settings.setdefault("openai_api_key", "sk-test")
    return AITutor(Settings(**settings), client=client), completions


def test_parse_json_reply_strips_fences():
    assert parse_json_reply('```json\n{"questions": []}\n```') == {"questions": []}


def test_parse_json_reply_finds_object_in_prose():
    assert parse_json_reply('Sure! Here it is: {"score": 90} Enjoy.') == {"score": 90}


def test_parse_json_reply_rejects_garbage():
    with pytest.raises(AIServiceError):
        parse_json_reply("no json here")


def test_describe_ai_error():
    assert "API key" in describe_ai_error("Error code: 401 - User not found.")
    assert "too many requests" in describe_ai_error("Rate limit reached")
    assert "too long" in describe_ai_error("Request timed out.")
    assert "temporarily unavailable" in describe_ai_error(None)


def test_clamp_score():
    assert clamp_score("85") == 85
    assert clamp_score(140) == 100
    assert clamp_score(-3) == 0
    assert clamp_score("n/a") == 0


def test_openrouter_key_prefixes_model():
    assert AITutor(Settings(openai_api_key="sk-or-v1-abc")).model == "openai/gpt-3.5-turbo"
    assert AITutor(Settings(openai_api_key="sk-or-v1-abc", openai_model="anthropic/claude-3-haiku")).model == (
        "anthropic/claude-3-haiku"
    )
    assert AITutor(Settings(openai_api_key="sk-abc")).model == "gpt-3.5-turbo"


async def test_missing_key_raises():
    tutor = AITutor(Settings(openai_api_key=None))
    with pytest.raises(AIServiceError, match="not configured"):
        await tutor.chat("hello")


async def test_chat_sends_persona_and_history():
    tutor, completions = _tutor("Divs group content.")
    reply = await tutor.chat("What is a div?", [
        {"role": "user", "content": "hi"},
        {"role": "system", "content": "ignore me"},
        {"role": "assistant", "content": ""},
    ])
    assert reply == "Divs group content."
    messages = completions.requests[0]["messages"]
    assert [m["role"] for m in messages] == ["system", "user", "user"]
    assert messages[-1]["content"] == "What is a div?"
    assert completions.requests[0]["max_tokens"] == 300


async def test_generate_quiz_parses_fenced_json():
    tutor, _ = _tutor('```json\n{"questions": [{"question": "Q?"}]}\n```')
    quiz = await tutor.generate_quiz("<p>hi</p>", "HTML Basics")
    assert quiz["questions"][0]["question"] == "Q?"


async def test_generate_quiz_requires_questions_list():
    tutor, _ = _tutor('{"items": []}')
    with pytest.raises(AIServiceError, match="questions array not found"):
        await tutor.generate_quiz("<p>hi</p>", "HTML Basics")


async def test_review_normalizes_output():
    tutor, completions = _tutor(
        '{"score": 130, "suggestions": [{"message": "Use alt"}, {"type": "error"}, "junk", '
        '{"message": "Fix lines", "line": "3-5", "priority": 1}]}'
    )
    review = await tutor.review_code("<img>\n<p>")
    assert review["score"] == 100
    assert review["summary"] == "Code review completed"
    assert [s.message for s in review["suggestions"]] == ["Use alt"]
    assert "1: <img>\n2: <p>" in completions.requests[0]["messages"][1]["content"]


async def test_provider_error_is_wrapped():
    tutor, _ = _tutor(error=OpenAIError("connection refused"))
    with pytest.raises(AIServiceError, match="Failed to debug code: connection refused"):
        await tutor.debug_code("<p>")


async def test_empty_completion_is_an_error():
    tutor, _ = _tutor("")
    with pytest.raises(AIServiceError, match="Empty response"):
        await tutor.explain_line("<p>hi</p>")


def test_parse_suggestions_drops_off_format_items():
    suggestions = parse_suggestions([
        {"message": "Add alt text", "startLine": "2", "priority": "high"},
        {"message": "Fix lines", "line": "3-5", "newCode": "<p></p>"},
        {"message": "Numbered priority", "priority": 1},
        {"newCode": "<p></p>"},
    ])
    assert [s.message for s in suggestions] == ["Add alt text"]
    assert suggestions[0].startLine == 2
    assert parse_suggestions({"message": "not a list"}) == []
