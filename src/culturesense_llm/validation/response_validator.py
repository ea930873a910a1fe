"""
Response validator: recover structured data from free-form model output.

Recovery order:
1. Parse the whole text as JSON
2. Parse the interior of each markdown fence (```json ... ``` or ``` ... ```),
   then the widest ```{...}``` span
3. Substitute the caller's fallback value

``parse`` is pure and total: the same text and fallback always give the same
result and no exception ever escapes.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Iterator, Optional, TypeVar

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from culturesense_llm.monitoring.metrics import response_parse_total
from culturesense_llm.validation.exceptions import ParseError

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_EXCERPT_LIMIT = 500

# Interior of each fenced block, shortest match first
FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\r?\n?(.*?)```", re.DOTALL | re.IGNORECASE)
# Opening of a fenced object; the widest span is closed by scanning back from the end
OBJECT_FENCE_OPEN = re.compile(r"```(?:json)?\s*\{", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedResult:
    """
    Outcome of structured-data recovery.
    
    Attributes:
        value: Recovered value, or the caller's fallback
        recovered_from_fence: True when the value came from a fenced block
        used_fallback: True when nothing could be recovered
        raw_excerpt: Bounded excerpt of unparseable text (fallback only)
    """
    
    value: Any
    recovered_from_fence: bool = False
    used_fallback: bool = False
    raw_excerpt: Optional[str] = None


class ResponseValidator:
    """
    Tolerant JSON recovery with caller-supplied defaults.
    
    Attributes:
        excerpt_limit: Max characters of offending text kept for diagnostics
    """
    
    def __init__(self, excerpt_limit: int = DEFAULT_EXCERPT_LIMIT):
        self.excerpt_limit = excerpt_limit
    
    def parse(self, raw_text: Any, fallback: Any) -> ParsedResult:
        """
        Recover a JSON value from model output.
        
        Args:
            raw_text: Completion text (non-strings degrade to the fallback)
            fallback: Value returned when nothing can be recovered
        
        Returns:
            ParsedResult; never raises
        """
        result = self._recover(raw_text, fallback)
        if not result.used_fallback:
            _count_recovered(result)
        return result
    
    def _recover(self, raw_text: Any, fallback: Any) -> ParsedResult:
        """Recovery steps; only the fallback path is counted here."""
        if not isinstance(raw_text, str) or not raw_text.strip():
            return self._fallback(raw_text, fallback, reason="empty_content")
        
        try:
            value = _loads(raw_text.strip())
        except ParseError:
            pass
        else:
            return ParsedResult(value=value)
        
        for candidate in _fenced_candidates(raw_text):
            try:
                value = _loads(candidate)
            except ParseError:
                continue
            logger.debug("Recovered JSON from fenced block", candidate_length=len(candidate))
            return ParsedResult(value=value, recovered_from_fence=True)
        
        return self._fallback(raw_text, fallback, reason="no_json_found")
    
    def parse_model(self, raw_text: Any, default: ModelT) -> ParsedResult:
        """
        Recover a value and validate it against the default's model class.
        
        A recovered value that does not fit the model degrades to ``default``.
        
        Args:
            raw_text: Completion text
            default: Typed default instance, built by the call site
        
        Returns:
            ParsedResult whose ``value`` is always an instance of
            ``type(default)``
        """
        result = self._recover(raw_text, default)
        if result.used_fallback:
            return result
        
        try:
            value = type(default).model_validate(result.value)
        except PydanticValidationError as e:
            response_parse_total.labels(result="schema_mismatch").inc()
            logger.warning(
                "Recovered JSON does not match expected shape, using default",
                model=type(default).__name__,
                error_count=e.error_count(),
                content_snippet=self._excerpt(raw_text),
            )
            return ParsedResult(
                value=default,
                used_fallback=True,
                raw_excerpt=self._excerpt(raw_text),
            )
        _count_recovered(result)
        return ParsedResult(value=value, recovered_from_fence=result.recovered_from_fence)
    
    def _fallback(self, raw_text: Any, fallback: Any, reason: str) -> ParsedResult:
        excerpt = self._excerpt(raw_text)
        response_parse_total.labels(result="fallback").inc()
        logger.warning(
            "Failed to parse JSON response, using fallback",
            reason=reason,
            content_snippet=excerpt,
        )
        return ParsedResult(value=fallback, used_fallback=True, raw_excerpt=excerpt)
    
    def _excerpt(self, raw_text: Any) -> Optional[str]:
        if not isinstance(raw_text, str):
            return None
        return raw_text[: self.excerpt_limit]


def _count_recovered(result: ParsedResult) -> None:
    response_parse_total.labels(result="fence" if result.recovered_from_fence else "direct").inc()


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as e:
        raise ParseError(
            "Failed to parse content as JSON",
            raw_content=text,
            parse_error=str(e),
        ) from e


def _fenced_candidates(text: str) -> Iterator[str]:
    """Yield fenced interiors, shortest first, then the widest object span."""
    for match in FENCE_PATTERN.finditer(text):
        interior = match.group(1).strip()
        if interior:
            yield interior
    widest = _widest_fenced_object(text)
    if widest:
        yield widest


def _widest_fenced_object(text: str) -> Optional[str]:
    """
    Span from the first fenced ``{`` to the last ``}`` that closes a fence.
    
    Survives fences nested inside JSON string values. Linear in the text
    length: the closing fence is found with ``rfind`` instead of regex
    backtracking.
    """
    opening = OBJECT_FENCE_OPEN.search(text)
    if opening is None:
        return None
    start = opening.end() - 1
    end = len(text)
    while True:
        end = text.rfind("```", start + 1, end)
        if end == -1:
            return None
        last = end - 1
        while last > start and text[last].isspace():
            last -= 1
        if last > start and text[last] == "}":
            return text[start : last + 1]
