"""
Structured output recovery.

- response_validator.py: ResponseValidator (direct JSON, fenced JSON, fallback)
- exceptions.py: ParseError (internal, never propagated)
"""

from .exceptions import ParseError
from .response_validator import ParsedResult, ResponseValidator

__all__ = [
    "ResponseValidator",
    "ParsedResult",
    "ParseError",
]
