"""Output Sanitizer - Free-Form Backend Text to Bounded Domain Results.

Backends are asked for JSON but answer with prose around it, comments inside
it, missing fields, out-of-range numbers and invented enum values. The
sanitizer turns any of that into a fully-populated result model and never
raises.

Pipeline:
    1. Extract: greedy scan from the first '{' to the last '}'
    2. Parse: json.loads, retried once after stripping // and /* */ comments
       and trailing commas
    3. Validate: the result model's lenient field types decide every field
       (presence → type → clamp / whitelist → default)
    4. Anything unparseable → ``schema.fallback(**context)``

Lenient Field Types:
    Built with ``Annotated[..., BeforeValidator(...)]`` so the coercion lives
    in the type, not in per-model validation code:

    >>> class Pick(LenientModel):
    ...     confidence: Confidence = 0.5
    >>> Pick.model_validate({"confidence": 5}).confidence
    1.0
    >>> Pick.model_validate({"confidence": "high"}).confidence
    0.5

Booleans are never numbers and NaN is treated as missing.
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Annotated, Any, Self, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound="LenientModel")

_LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------


def is_number(value: Any) -> bool:
    """True for ints and floats other than bool and NaN."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def clamp(value: float, low: float | None = None, high: float | None = None) -> float:
    if low is not None:
        value = max(low, value)
    if high is not None:
        value = min(high, value)
    return value


def is_finite_number(value: Any) -> bool:
    """Numbers other than ±Infinity; ints of any size count."""
    return is_number(value) and (isinstance(value, int) or math.isfinite(value))


def _bounded(value: Any, low: float | None, high: float | None) -> float | None:
    """Clamped float, or None when ``value`` is not a usable number.

    Ints are clamped before conversion; one still too large for a float
    (no bound on that side) counts as missing.
    """
    if not is_finite_number(value):
        return None
    try:
        return float(clamp(value, low, high))
    except OverflowError:
        return None


def clamped(low: float | None, high: float | None, default: float) -> Any:
    """Float field clamped to ``[low, high]``; non-numbers become ``default``."""

    def coerce(value: Any) -> float:
        result = _bounded(value, low, high)
        return default if result is None else result

    return Annotated[float, BeforeValidator(coerce)]


def clamped_int(low: int | None, high: int | None, default: int) -> Any:
    def coerce(value: Any) -> int:
        result = _bounded(value, low, high)
        return default if result is None else int(round(result))

    return Annotated[int, BeforeValidator(coerce)]


def optional_clamped(low: float | None, high: float | None) -> Any:
    """Like ``clamped`` but absent stays absent."""
    return Annotated[float | None, BeforeValidator(lambda value: _bounded(value, low, high))]


def one_of(enum_type: type[StrEnum], default: StrEnum) -> Any:
    """Enum whitelist; unknown values (any case mismatch aside) become ``default``."""
    by_value = {member.value: member for member in enum_type}
    by_folded = {member.value.casefold(): member for member in enum_type}

    def coerce(value: Any) -> StrEnum:
        if not isinstance(value, str):
            return default
        key = value.strip()
        return by_value.get(key) or by_folded.get(key.casefold()) or default

    return Annotated[enum_type, BeforeValidator(coerce)]


def text_or(default: str) -> Any:
    """Non-empty string, else ``default``."""
    return Annotated[str, BeforeValidator(lambda value: value if isinstance(value, str) and value else default)]


def flag(default: bool = False) -> Any:
    return Annotated[bool, BeforeValidator(lambda value: value if isinstance(value, bool) else default)]


def _string_items(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _int_items(value: Any) -> list[int]:
    if not isinstance(value, list):
        return []
    return [int(item) for item in value if is_finite_number(item)]


def _mapping_items(value: Any) -> list[Mapping[str, Any] | BaseModel]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping | BaseModel)]


def _string_values(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): item for key, item in value.items() if isinstance(item, str)}


def as_mapping(value: Any) -> Mapping[str, Any] | BaseModel:
    """Non-objects become ``{}`` so nested models fall back to their defaults."""
    return value if isinstance(value, Mapping | BaseModel) else {}


StringList = Annotated[list[str], BeforeValidator(_string_items)]
IntList = Annotated[list[int], BeforeValidator(_int_items)]
StringMap = Annotated[dict[str, str], BeforeValidator(_string_values)]


def object_list(model: type[BaseModel]) -> Any:
    """List of nested models; non-list input is empty, non-object items are dropped."""
    return Annotated[list[model], BeforeValidator(_mapping_items)]  # type: ignore[valid-type]


def nested(model: type[BaseModel]) -> Any:
    return Annotated[model, BeforeValidator(as_mapping)]


def optional_nested(model: type[BaseModel]) -> Any:
    """Nested model that stays ``None`` unless the backend sent an object."""
    return Annotated[model | None, BeforeValidator(lambda value: value if isinstance(value, Mapping | BaseModel) else None)]


# Shared field types
Confidence = clamped(0.0, 1.0, 0.5)
Points = clamped(None, None, 0.0)


class LenientModel(BaseModel):
    """Base for sanitized results.

    Every field has a default and a coercing type, so validation of any JSON
    object succeeds. Field names are snake_case in Python and camelCase on
    the wire.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def fallback(cls, **context: Any) -> Self:
        """Instance returned when the backend output is unusable."""
        return cls()


# ---------------------------------------------------------------------------
# Text → JSON → model
# ---------------------------------------------------------------------------


def extract_json_object(text: str) -> str | None:
    """Greedy span from the first '{' to the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def strip_json_comments(text: str) -> str:
    cleaned = _LINE_COMMENT.sub("", text)
    cleaned = _BLOCK_COMMENT.sub("", cleaned)
    return _TRAILING_COMMA.sub(r"\1", cleaned)


def parse_json_object(text: str) -> dict[str, Any] | None:
    """The JSON object embedded in ``text``, or None."""
    candidate = extract_json_object(text or "")
    if candidate is None:
        return None
    for attempt in (candidate, strip_json_comments(candidate)):
        try:
            parsed = json.loads(attempt)
        except ValueError:
            continue
        return parsed if isinstance(parsed, dict) else None
    return None


def sanitize_data(data: Any, schema: type[ModelT], **context: Any) -> ModelT:
    """Validate already-decoded JSON into ``schema``; fallback on failure."""
    if not isinstance(data, Mapping):
        logger.warning("sanitize_fallback", extra={"schema": schema.__name__, "reason": "not_an_object"})
        return schema.fallback(**context)
    try:
        return schema.model_validate(data, context=context)
    except ValidationError as exc:
        logger.warning(
            "sanitize_fallback",
            extra={"schema": schema.__name__, "reason": "validation", "errors": exc.error_count()},
        )
        return schema.fallback(**context)


def sanitize(text: str, schema: type[ModelT], **context: Any) -> ModelT:
    """Decode backend ``text`` into ``schema``. Never raises.

    Args:
        text: Raw backend content
        schema: Result model (a ``LenientModel`` subclass)
        **context: Request details forwarded to validators and ``fallback()``
    """
    data = parse_json_object(text)
    if data is None:
        logger.warning("sanitize_fallback", extra={"schema": schema.__name__, "reason": "no_json_object"})
        return schema.fallback(**context)
    return sanitize_data(data, schema, **context)


__all__ = [
    "Confidence",
    "IntList",
    "LenientModel",
    "Points",
    "StringList",
    "StringMap",
    "as_mapping",
    "clamp",
    "clamped",
    "clamped_int",
    "extract_json_object",
    "flag",
    "is_number",
    "nested",
    "object_list",
    "one_of",
    "optional_clamped",
    "optional_nested",
    "parse_json_object",
    "sanitize",
    "sanitize_data",
    "strip_json_comments",
    "text_or",
]
