"""Fast JSON parsing for model output and snapshot encoding."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """
    Return the body of the first markdown code block, or the text unchanged.

    Handles both ```lang and bare ``` openers.
    """
    if "```" not in text:
        return text.strip()

    start = text.find("```")
    newline = text.find("\n", start)
    if newline == -1:
        return text.strip()

    end = text.find("```", newline)
    body = text[newline + 1:end] if end != -1 else text[newline + 1:]
    return body.strip()


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from model output.

    Args:
        text: Text containing a JSON object, possibly fenced or surrounded by prose
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If no object can be recovered
    """
    working = strip_code_fences(text)
    start = working.find("{")
    end = working.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise JSONParseError(f"No JSON object found in text: {text[:200]}")

    json_str = working[start:end + 1]

    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e
        try:
            result = json.loads(repair_json(json_str))
        except Exception as repair_error:
            raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def dumps(obj: Any, indent: bool = False) -> str:
    """
    Encode to JSON with orjson.

    Args:
        obj: Object to encode (pydantic dumps, dicts, lists)
        indent: Pretty-print with two-space indentation

    Returns:
        JSON string
    """
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(obj, option=option).decode("utf-8")


def loads(data: str | bytes) -> Any:
    """Decode JSON with orjson."""
    try:
        return orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise JSONParseError(f"Invalid JSON: {e}", e) from e
