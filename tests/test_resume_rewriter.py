import json
from types import SimpleNamespace

import httpx
from openai import RateLimitError

import near_resume.cv_pipeline.resume_rewriter as resume_rewriter
from near_resume.cv_pipeline.resume_rewriter import RATE_LIMIT_NOTE, apply_feedback, rewrite_resume
from near_resume.schemas.resume import Resume

RESUME_TEXT = "Maria Silva\nAccount Executive at Acme, São Paulo\nClosed deals worth $500K in 2023.\n"


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(content=None, error=None):
    completions = FakeCompletions(content, error)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def _rate_limit_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return RateLimitError("quota exceeded", response=httpx.Response(429, request=request), body=None)


def test_rewrite_returns_parsed_json():
    """
    Test the model's JSON object is returned and JSON mode is requested.
    """
    client, completions = _client(json.dumps({"header": {"firstName": "Maria"}}))
    result = rewrite_resume(RESUME_TEXT, client=client)

    assert result == {"header": {"firstName": "Maria"}}
    assert completions.calls[0]["response_format"] == {"type": "json_object"}
    assert completions.calls[0]["messages"][1]["content"] == RESUME_TEXT.strip()


def test_rewrite_handles_bad_output_and_short_text():
    """
    Test non-JSON output and too-short text both give None.
    """
    client, completions = _client("Sorry, I cannot help with that.")
    assert rewrite_resume(RESUME_TEXT, client=client) is None

    client, completions = _client("{}")
    assert rewrite_resume("too short", client=client) is None
    assert completions.calls == []


def test_rewrite_rate_limited_returns_none():
    """
    Test a rate-limit error is logged and swallowed.
    """
    client, _ = _client(error=_rate_limit_error())
    assert rewrite_resume(RESUME_TEXT, client=client) is None


def test_rewrite_without_api_key(monkeypatch):
    """
    Test a missing API key short-circuits before any call.
    """
    monkeypatch.setattr(resume_rewriter, "OPENAI_API_KEY", "")
    assert rewrite_resume(RESUME_TEXT) is None


def test_apply_feedback_returns_update_and_changes():
    """
    Test the updated résumé and change list come back from the model response.
    """
    current = Resume.model_validate({"header": {"firstName": "Maria"}, "summary": "Long summary."})
    response = {
        "updatedResume": {"header": {"firstName": "Maria"}, "summary": "Short."},
        "changes": [{"type": "summary", "description": "Shortened"}, "ignored"],
    }
    client, completions = _client(json.dumps(response))
    updated, changes = apply_feedback("Shorten the summary", current, client=client)

    assert updated["summary"] == "Short."
    assert changes == [{"type": "summary", "description": "Shortened"}]
    assert "Long summary." in completions.calls[0]["messages"][0]["content"]
    assert completions.calls[0]["messages"][1]["content"] == "Shorten the summary"


def test_apply_feedback_rate_limited_keeps_current_resume():
    """
    Test a rate-limited edit returns the current résumé plus a note.
    """
    current = Resume.model_validate({"header": {"firstName": "Maria"}, "summary": "Keep me."})
    client, _ = _client(error=_rate_limit_error())
    updated, changes = apply_feedback("Rewrite everything", current, client=client)

    assert updated == current.to_payload()
    assert changes == [RATE_LIMIT_NOTE]


def test_apply_feedback_missing_update_keeps_current_resume():
    """
    Test a response without 'updatedResume' changes nothing.
    """
    current = Resume.model_validate({"summary": "Keep me."})
    client, _ = _client(json.dumps({"changes": []}))
    updated, changes = apply_feedback("Do something", current, client=client)

    assert updated == current.to_payload()
    assert changes == []
