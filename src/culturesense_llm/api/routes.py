"""
API routes.

- POST /completions: raw completion with provider failover
- POST /chat/message: CultureSense chat reply (static fallback when degraded)
- POST /insights/{kind}: structured cultural insight with typed defaults
- GET /health: provider credential presence and models
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, status

from culturesense_llm.api.dependencies import (
    get_chat_assistant,
    get_dispatcher,
    get_insight_service,
)
from culturesense_llm.api.models import (
    AttemptInfo,
    ChatMessageRequest,
    ChatMessageResponse,
    CompletionRequest,
    CompletionResponse,
    HealthResponse,
    InsightRequest,
    InsightResponse,
)
from culturesense_llm.chat.assistant import ChatAssistant
from culturesense_llm.dispatch.hybrid import HybridDispatcher
from culturesense_llm.insights.service import InsightService
from culturesense_llm.models.enums import InsightKind

logger = structlog.get_logger(__name__)

router = APIRouter()

UNAVAILABLE_RESPONSE = {503: {"description": "Every provider exhausted"}}


@router.post(
    "/completions",
    response_model=CompletionResponse,
    status_code=status.HTTP_200_OK,
    summary="Chat completion with provider failover",
    responses={400: {"description": "Invalid request"}, **UNAVAILABLE_RESPONSE},
)
async def create_completion(
    request: CompletionRequest,
    dispatcher: HybridDispatcher = Depends(get_dispatcher),
) -> CompletionResponse:
    outcome = await dispatcher.dispatch(request.messages, request.preferred_provider)
    return CompletionResponse(
        content=outcome.raw_text,
        provider=outcome.provider,
        model=outcome.model,
        attempts=[AttemptInfo(**record.to_dict()) for record in outcome.attempts],
    )


@router.post(
    "/chat/message",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Send a message to the CultureSense assistant",
    responses={400: {"description": "Message is required"}},
)
async def chat_message(
    request: ChatMessageRequest,
    assistant: ChatAssistant = Depends(get_chat_assistant),
) -> ChatMessageResponse:
    """
    Reply to a chat message.
    
    Never returns 503: when every provider is down the reply is a static,
    keyword-matched message and ``degraded`` is true.
    """
    reply = await assistant.reply(
        request.message,
        history=request.history,
        preferences=request.preferences,
        context=request.context,
    )
    return ChatMessageResponse(
        content=reply.content,
        suggestions=reply.suggestions,
        degraded=reply.degraded,
        provider=reply.provider,
        model=reply.model,
    )


@router.post(
    "/insights/{kind}",
    response_model=InsightResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate an AI cultural insight",
    responses=UNAVAILABLE_RESPONSE,
)
async def generate_insight(
    kind: InsightKind,
    request: InsightRequest,
    service: InsightService = Depends(get_insight_service),
) -> InsightResponse:
    result = await service.generate(kind, request.data, request.preferred_provider)
    return InsightResponse(
        kind=result.kind,
        insight=result.insight.model_dump(by_alias=True),
        recovered_from_fence=result.recovered_from_fence,
        used_fallback=result.used_fallback,
        provider=result.provider,
        model=result.model,
        attempts=result.attempts,
        generated_at=result.generated_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Provider availability",
)
async def health_check(
    dispatcher: HybridDispatcher = Depends(get_dispatcher),
) -> HealthResponse:
    """
    Report which providers have credentials configured and their models.
    
    Does not call upstream; "degraded" means at least one provider has no
    API key.
    """
    services = dispatcher.available_models()
    all_available = all(service["available"] for service in services.values())
    return HealthResponse(
        status="healthy" if all_available else "degraded",
        services=services,
        timestamp=datetime.now(timezone.utc),
    )
