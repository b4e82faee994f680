"""
Tolerant recovery of JSON payloads from free-form model output

Candidates, in order: the trimmed text, an enclosing ``[...]`` slice, the
first-``{`` to last-``}`` slice, the text without code fences.
"""

import json
import re
from typing import Any

from interview_coach.core.errors import MalformedResponse, InvalidShape

FENCE_RE = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)

FEEDBACK_FIELDS = {
    "overallScore": (int, float),
    "overallSummary": str,
    "communicationScore": (int, float),
    "strengths": list,
    "improvements": list,
    "recommendations": list,
    "questionAnalysis": list,
}


def strip_code_fences(text: str) -> str:
    return FENCE_RE.sub("", text).replace("```", "").strip()


def _bracket_slice(text: str) -> str | None:
    first_brace = text.find("{")
    last_brace = text.rfind("}")
    first_bracket = text.find("[")
    last_bracket = text.rfind("]")

    if first_bracket == -1 or last_bracket <= first_bracket:
        return None
    if first_brace != -1 and (first_bracket > first_brace or last_bracket < last_brace):
        return None
    return text[first_bracket:last_bracket + 1]


def _brace_slice(text: str) -> str | None:
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        return None
    return text[first:last + 1]


def _candidates(text: str):
    yield text.strip()
    yield _bracket_slice(text)
    yield _brace_slice(text)
    yield strip_code_fences(text)


def extract_json(text: str | None) -> Any:
    """Return the first object or array recoverable from ``text``."""
    if not text or not text.strip():
        raise MalformedResponse("Model returned an empty response")

    last_error = "no JSON object found"
    for candidate in _candidates(text):
        if not candidate:
            continue
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = str(e)
            continue
        if isinstance(value, (dict, list)):
            return value
        last_error = f"expected a JSON object, got {type(value).__name__}"

    raise MalformedResponse(f"Failed to parse model response: {last_error}")


def extract_question_set(text: str | None) -> dict:
    data = extract_json(text)

    # Models sometimes answer with the bare array
    if isinstance(data, list):
        data = {"questions": data}

    questions = data.get("questions")
    if not isinstance(questions, list):
        raise InvalidShape(
            "Model returned invalid question format: "
            + json.dumps(data)[:100]
        )
    return data


def extract_feedback(text: str | None) -> dict:
    data = extract_json(text)

    if not isinstance(data, dict):
        raise InvalidShape("Model returned invalid feedback format: expected an object")

    missing = [field for field in FEEDBACK_FIELDS if field not in data]
    if missing:
        raise InvalidShape(
            "Model feedback is missing fields: " + ", ".join(missing)
        )

    for field, expected in FEEDBACK_FIELDS.items():
        value = data[field]
        # bool is an int subclass but never a valid score
        if isinstance(value, bool) or not isinstance(value, expected):
            raise InvalidShape(f"Model feedback field '{field}' has the wrong type")

    return data
