"""
FastAPI API routes and endpoints.

- routes.py: /completions, /chat/message, /insights/{kind}, /health
- dependencies.py: Singleton dispatcher, validator, services
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
- middleware.py: Request id tracing
"""

from culturesense_llm.api import dependencies, error_handlers, models
from culturesense_llm.api.routes import router

__all__ = [
    "router",
    "dependencies",
    "error_handlers",
    "models",
]
