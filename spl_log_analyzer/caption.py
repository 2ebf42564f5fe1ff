"""
Optional LLM captioning of an analyzed log.

The captioner receives the file name and the StatsBundle and returns an
EventInsight. It is an enrichment only: when no model is configured, the
provider errors, or the reply is not the expected JSON, a static fallback
built from the file name metadata is returned instead. Nothing here raises
to the caller.
"""

import json
import os
import re

from langchain_core.messages import HumanMessage, SystemMessage

from .filename_meta import extract_file_metadata
from .models import EventInsight, StatsBundle
from .prompt_templates import CAPTION_PROMPT, SYSTEM_PROMPT

DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4o"

REQUIRED_KEYS = ("eventName", "eventDate", "summary", "complianceNote")

UNAVAILABLE_SUMMARY = (
    "AI analysis unavailable. Please configure ANTHROPIC_API_KEY or OPENAI_API_KEY."
)
UNAVAILABLE_NOTE = "Integration requires a valid LLM API key."
FAILED_SUMMARY = "Analysis unavailable."
FAILED_NOTE = "Could not generate compliance insights."

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


class CaptionResponseError(ValueError):
    """The model reply could not be turned into an EventInsight."""


# ---------------------------------------------------------------------------
# Prompt / response
# ---------------------------------------------------------------------------

def build_caption_prompt(file_name: str, stats: StatsBundle) -> str:
    peak = stats.peak_before_10
    return CAPTION_PROMPT.format(
        file_name=file_name,
        average_level=stats.average_level,
        max_level=stats.max_level,
        peak_before_10=f"{peak.level} dB" if peak else "None",
        duration=stats.duration_label,
    )


def _message_text(content) -> str:
    """Flatten a chat message's content (str or list of content blocks)."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def parse_caption_response(text: str) -> EventInsight:
    """
    Parse the model's JSON reply. Code fences around the JSON are tolerated.

    Raises:
        CaptionResponseError: empty reply, invalid JSON, or missing keys
    """
    if not text or not text.strip():
        raise CaptionResponseError("No response from model")

    fenced = _FENCE_RE.search(text)
    payload = fenced.group(1) if fenced else text.strip()
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise CaptionResponseError(f"Reply is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise CaptionResponseError("Reply is not a JSON object")
    missing = [k for k in REQUIRED_KEYS if not isinstance(data.get(k), str)]
    if missing:
        raise CaptionResponseError(f"Reply missing keys: {', '.join(missing)}")

    return EventInsight(
        event_name=data["eventName"],
        event_date=data["eventDate"],
        summary=data["summary"],
        compliance_note=data["complianceNote"],
        source="llm",
    )


def fallback_insight(file_name: str, *, unavailable: bool = False) -> EventInsight:
    meta = extract_file_metadata(file_name)
    return EventInsight(
        event_name=meta.derived_name,
        event_date=meta.derived_date,
        summary=UNAVAILABLE_SUMMARY if unavailable else FAILED_SUMMARY,
        compliance_note=UNAVAILABLE_NOTE if unavailable else FAILED_NOTE,
        source="fallback",
    )


# ---------------------------------------------------------------------------
# Model selection
# ---------------------------------------------------------------------------

def default_llm():
    """
    Pick a chat model from the environment.

    Anthropic is preferred, OpenAI is the second choice. Returns None when no
    API key is set or the provider package is not installed.
    """
    if os.environ.get("ANTHROPIC_API_KEY"):
        try:
            from langchain_anthropic import ChatAnthropic
            return ChatAnthropic(model=DEFAULT_ANTHROPIC_MODEL, temperature=0)
        except ImportError:
            pass
    if os.environ.get("OPENAI_API_KEY"):
        try:
            from langchain_openai import ChatOpenAI
            return ChatOpenAI(model=DEFAULT_OPENAI_MODEL, temperature=0)
        except ImportError:
            pass
    return None


def generate_event_insight(
    file_name: str,
    stats: StatsBundle,
    llm=None,
    verbose: bool = False,
) -> EventInsight:
    """
    Caption a log with an LLM, falling back to file name metadata.

    Args:
        file_name: Original file name (the model extracts name/date from it)
        stats: Statistics of the analyzed log
        llm: Any LangChain chat model. If None, uses default_llm().
        verbose: Print the reason when falling back

    Returns:
        EventInsight with source "llm", or "fallback" on any failure
    """
    if llm is None:
        llm = default_llm()
    if llm is None:
        if verbose:
            print("[WARN] No LLM API key configured. Skipping AI analysis.")
        return fallback_insight(file_name, unavailable=True)

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_caption_prompt(file_name, stats)),
    ]
    try:
        response = llm.invoke(messages)
        return parse_caption_response(_message_text(response.content))
    except Exception as e:
        # Any provider or parsing failure degrades to the fallback
        print(f"[WARN] Event captioning failed: {e}")
        return fallback_insight(file_name)
