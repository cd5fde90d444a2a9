"""
Helpers for reading structured JSON out of Responses API payloads.

Model output can arrive wrapped in Markdown code fences or surrounded by
prose, so the JSON object is cut out of the first non-blank text block.
"""

import json
from typing import Any

from ocr_enhance.exceptions import PlannerError


def extract_response_text(payload: Any) -> str | None:
    """
    Return the first non-blank text block of a Responses API payload.

    Looks at ``output[].content[].text`` in order.

    Args:
        payload: Decoded JSON response body.

    Returns:
        The text, or None if the payload carries no text.
    """
    if not isinstance(payload, dict):
        return None

    output = payload.get("output")
    if not isinstance(output, list):
        return None

    for item in output:
        if not isinstance(item, dict):
            continue
        content = item.get("content")
        if not isinstance(content, list):
            continue
        for part in content:
            if not isinstance(part, dict):
                continue
            text = part.get("text")
            if isinstance(text, str) and text.strip():
                return text

    return None


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json fence if present."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped

    # Drop the opening fence line, including any language tag
    first_newline = stripped.find("\n")
    if first_newline >= 0:
        stripped = stripped[first_newline + 1:]

    last_fence = stripped.rfind("```")
    if last_fence >= 0:
        stripped = stripped[:last_fence]

    return stripped.strip()


def extract_first_json_object(text: str) -> str:
    """
    Cut out the span from the first '{' to the last '}'.

    Raises:
        PlannerError: If the text holds no JSON object.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        raise PlannerError(f"Planner returned no JSON object: {text[:200]!r}")
    return text[start:end + 1]


def json_from_response(payload: Any) -> str:
    """
    Full extraction chain: first text block, fences stripped, JSON object cut out.

    Raises:
        PlannerError: If the payload holds no usable JSON.
    """
    text = extract_response_text(payload)
    if text is None:
        raise PlannerError("Planner response contained no text output")
    return extract_first_json_object(strip_code_fences(text))


def load_json_object(text: str) -> dict[str, Any]:
    """
    Parse extracted text as a JSON object.

    Raises:
        PlannerError: If the text is not valid JSON or not an object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise PlannerError(f"Planner returned malformed JSON: {e}\n{text}")

    if not isinstance(document, dict):
        raise PlannerError(f"Planner returned {type(document).__name__}, expected a JSON object")
    return document
