"""LLM rewrite of résumé text into the Near format JSON, and chat-driven edits of an existing résumé."""

import asyncio
import json
from typing import Any, Dict, List, Optional, Tuple

from openai import AsyncOpenAI, RateLimitError

from near_resume.config import LLM_TEMPERATURE, MAX_INPUT_CHARS, MODEL_NAME, OPENAI_API_KEY
from near_resume.schemas.resume import Resume
from near_resume.utils.helpers import parse_llm_json
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

RESUME_JSON_SHAPE = """{
  "header": {"firstName": "string", "tagline": "string", "location": "string", "city": "string", "country": "string"},
  "summary": "string",
  "skills": [{"category": "string", "items": ["string"]}],
  "experience": [
    {
      "company": "string", "location": "string", "title": "string",
      "startDate": "string", "endDate": "string",
      "bullets": [{"text": "string", "metrics": ["string"]}]
    }
  ],
  "education": [
    {"institution": "string", "degree": "string", "location": "string", "year": "string", "additionalInfo": "string"}
  ],
  "additionalExperience": "string"
}"""

REWRITE_SYSTEM_PROMPT = f"""You are an expert résumé editor producing résumés in the "Near format":
one page, confident and specific, factually faithful to the source.
- First name only. Tagline: role-specific title of at most 5 words.
- Summary: two concise sentences, no generic phrases.
- Skills grouped as "Skills" and "Languages" (spoken languages with level, e.g. "English C2").
- Experience in reverse chronological order; dates as "Mon YYYY" with "Present" for the current role.
- Past tense except the current role; every bullet is one sentence ending with a period.
- Every role has at least one quantified result; put short quantified facts in "metrics".
- Money in USD with K/M/B suffixes and no decimals; areas in square feet.
- Education: degree and major in "degree", graduation year in "year".
Return only valid JSON matching this schema (no markdown, no code block):
{RESUME_JSON_SHAPE}
If a field cannot be determined, use an empty string or empty array."""

FEEDBACK_SYSTEM_PROMPT = """You are an expert résumé editor keeping a résumé in the "Near format".
The user asks for changes to the résumé below. Apply exactly what is asked, keep every
Near format rule (first name only, two-sentence summary, "Mon YYYY" dates, bullets ending
with periods, at least one quantified metric per role), and change nothing else.

Current résumé (JSON):
{resume_json}

Return only valid JSON with two keys:
  "updatedResume": the full updated résumé JSON, same schema as above
  "changes": an array of {{"type": "string", "description": "string"}} describing each change"""

RATE_LIMIT_NOTE = {
    "type": "note",
    "description": "Unable to apply the requested changes right now because the AI service is rate limited.",
}


def _message_content(response: Any) -> Optional[str]:
    choice = response.choices[0] if response.choices else None
    if not choice or not choice.message or not choice.message.content:
        return None
    return choice.message.content


async def _complete_json(client: AsyncOpenAI, system_prompt: str, user_content: str) -> Optional[Any]:
    response = await client.chat.completions.create(
        model=MODEL_NAME,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ],
        temperature=LLM_TEMPERATURE,
        response_format={"type": "json_object"},
    )
    content = _message_content(response)
    return parse_llm_json(content) if content else None


async def rewrite_resume_async(client: AsyncOpenAI, resume_text: str) -> Optional[Dict[str, Any]]:
    """Call the LLM to turn extracted résumé text into a raw Near-format dict."""
    if not resume_text or len(resume_text.strip()) < 50:
        logger.warning("Résumé text too short for rewriting")
        return None
    content = resume_text[:MAX_INPUT_CHARS].strip()
    try:
        parsed = await _complete_json(client, REWRITE_SYSTEM_PROMPT, content)
    except RateLimitError as e:
        logger.warning("Rate limited while rewriting résumé: %s", e)
        return None
    except Exception as e:
        logger.exception("Résumé rewrite failed: %s", e)
        return None
    if not isinstance(parsed, dict):
        logger.warning("Rewriter returned no JSON object")
        return None
    return parsed


async def apply_feedback_async(
    client: AsyncOpenAI,
    message: str,
    current: Resume,
) -> Tuple[Dict[str, Any], List[Dict[str, str]]]:
    """Ask the LLM to edit the current résumé; on failure the current résumé comes back unchanged."""
    current_payload = current.to_payload()
    prompt = FEEDBACK_SYSTEM_PROMPT.format(resume_json=json.dumps(current_payload, indent=2, ensure_ascii=False))
    try:
        parsed = await _complete_json(client, prompt, message)
    except RateLimitError as e:
        logger.warning("Rate limited while applying feedback: %s", e)
        return current_payload, [dict(RATE_LIMIT_NOTE)]
    except Exception as e:
        logger.exception("Applying feedback failed: %s", e)
        return current_payload, []
    if not isinstance(parsed, dict) or not isinstance(parsed.get("updatedResume"), dict):
        logger.warning("Feedback response missing 'updatedResume'")
        return current_payload, []
    changes = [
        {"type": str(c.get("type", "")), "description": str(c.get("description", ""))}
        for c in parsed.get("changes") or []
        if isinstance(c, dict)
    ]
    return parsed["updatedResume"], changes


def _run(coro: Any) -> Any:
    """Run a coroutine on a fresh event loop; safe to call from sync context (e.g. Streamlit)."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _default_client() -> Optional[AsyncOpenAI]:
    if not OPENAI_API_KEY:
        logger.error("OPENAI_API_KEY is not set; cannot call the résumé rewriter")
        return None
    return AsyncOpenAI(api_key=OPENAI_API_KEY)


def rewrite_resume(resume_text: str, client: Optional[AsyncOpenAI] = None) -> Optional[Dict[str, Any]]:
    """Sync wrapper around rewrite_resume_async."""
    client = client or _default_client()
    if client is None:
        return None
    return _run(rewrite_resume_async(client, resume_text))


def apply_feedback(
    message: str,
    current: Resume,
    client: Optional[AsyncOpenAI] = None,
) -> Tuple[Dict[str, Any], List[Dict[str, str]]]:
    """Sync wrapper around apply_feedback_async."""
    client = client or _default_client()
    if client is None:
        return current.to_payload(), []
    return _run(apply_feedback_async(client, message, current))
