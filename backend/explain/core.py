"""Core explanation flow: parse, prompt, call the model, map the reply."""

import logging

from pydantic import ValidationError

from anthropic_client import AnthropicClient, MessagesPayload
from schemas import ExplainRequest
from settings import Settings

from .prompts import SYSTEM_PROMPT, build_messages, select_max_tokens
from .result import Explained, ExplainResult, Failed, MISSING_API_KEY

logger = logging.getLogger(__name__)


def parse_request(body: object) -> ExplainRequest | Failed:
    """Validate a decoded JSON body.

    Malformed input is not reported as its own error kind; the caller gets
    the same generic failure as any other processing error.
    """
    try:
        return ExplainRequest.model_validate(body)
    except ValidationError as e:
        logger.warning("Rejected explain request with %d validation error(s)", e.error_count())
        return Failed.generic()


def build_payload(request: ExplainRequest, settings: Settings) -> MessagesPayload:
    return MessagesPayload(
        model=settings.anthropic_model,
        max_tokens=select_max_tokens(request),
        system=SYSTEM_PROMPT,
        messages=build_messages(request),
    )


async def explain_position(
    body: object,
    settings: Settings,
    client: AnthropicClient | None = None,
) -> ExplainResult:
    """Produce a coach explanation for a decoded request body.

    Args:
        body: The JSON-decoded request body.
        settings: Application settings; must carry the API key.
        client: Messages API client. Built from settings when omitted.

    Returns:
        Explained on success, otherwise Failed with the status and message
        to return to the caller.
    """
    if not settings.anthropic_api_key:
        return Failed(500, MISSING_API_KEY)

    request = parse_request(body)
    if isinstance(request, Failed):
        return request

    payload = build_payload(request, settings)
    if client is None:
        client = AnthropicClient(settings.anthropic_api_key, settings)

    result = await client.create_message(payload)
    if isinstance(result, Explained):
        logger.info(
            "Explained position (%s, %d history turn(s))",
            "follow-up" if request.messages else "initial",
            len(request.messages or []),
        )
    return result
