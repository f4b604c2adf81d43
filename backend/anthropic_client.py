import logging

import httpx
from pydantic import BaseModel, ValidationError

from explain.result import Explained, ExplainResult, Failed, UPSTREAM_FAILURE
from settings import Settings

logger = logging.getLogger(__name__)

MESSAGES_PATH = "/v1/messages"


class MessagesPayload(BaseModel):
    """Body of a Messages API request."""

    model: str
    max_tokens: int
    system: str
    messages: list[dict]


class ContentBlock(BaseModel):
    type: str
    text: str | None = None


class MessagesResponse(BaseModel):
    content: list[ContentBlock]

    def first_text(self) -> str | None:
        for block in self.content:
            if block.type == "text" and block.text is not None:
                return block.text
        return None


class ApiErrorDetail(BaseModel):
    type: str | None = None
    message: str | None = None


class ApiErrorBody(BaseModel):
    error: ApiErrorDetail | None = None


def upstream_error_message(response: httpx.Response) -> str:
    """Best-effort extraction of ``error.message`` from a failed API reply."""
    try:
        body = ApiErrorBody.model_validate(response.json())
    except (ValueError, ValidationError):
        return UPSTREAM_FAILURE
    if body.error and body.error.message:
        return body.error.message
    return UPSTREAM_FAILURE


def map_response(response: httpx.Response) -> ExplainResult:
    """Translate an HTTP reply from the Messages API into an explanation result.

    Args:
        response: The raw reply.

    Returns:
        Explained with the first text block, or Failed carrying either the
        upstream status and message or the generic 500.
    """
    if not response.is_success:
        message = upstream_error_message(response)
        logger.warning("Anthropic API returned %s: %s", response.status_code, message)
        return Failed(response.status_code, message)

    try:
        parsed = MessagesResponse.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Malformed Anthropic API reply: %s", e)
        return Failed.generic()

    text = parsed.first_text()
    if text is None:
        logger.warning("Anthropic API reply has no text content block")
        return Failed.generic()
    return Explained(text)


class AnthropicClient:
    """Thin async wrapper around the Anthropic Messages endpoint."""

    def __init__(self, api_key: str, settings: Settings, http: httpx.AsyncClient | None = None) -> None:
        self.api_key = api_key
        self.http = http
        self.url = settings.anthropic_api_url + MESSAGES_PATH
        self.version = settings.anthropic_version
        self.timeout = settings.anthropic_timeout_s

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.version,
        }

    async def _post(self, http: httpx.AsyncClient, payload: MessagesPayload) -> httpx.Response:
        return await http.post(self.url, headers=self._headers(), json=payload.model_dump())

    async def create_message(self, payload: MessagesPayload) -> ExplainResult:
        """Send one Messages request; transport failures become the generic 500.

        Uses the shared client when one was given, otherwise a short-lived one.
        """
        try:
            if self.http is not None:
                response = await self._post(self.http, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as http:
                    response = await self._post(http, payload)
        except httpx.HTTPError as e:
            logger.warning("Anthropic API request failed: %s", type(e).__name__)
            return Failed.generic()
        return map_response(response)
