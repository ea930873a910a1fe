"""
Validation-specific exceptions.

ParseError is internal to the ResponseValidator: it is raised between
recovery steps and always resolved to a fallback value before returning.
"""

from typing import Any


class ParseError(Exception):
    """
    Structured data could not be recovered from a piece of model output.
    """
    
    def __init__(self, message: str, raw_content: str | None = None, parse_error: str | None = None):
        """
        Initialize parse error.
        
        Args:
            message: Error description
            raw_content: Offending text (only the first 500 chars are kept)
            parse_error: Original decoder error message
        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = {}
        if raw_content:
            self.details["content_snippet"] = raw_content[:500]
        if parse_error:
            self.details["parse_error"] = parse_error
