from contextlib import asynccontextmanager
import logging

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
import httpx
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from anthropic_client import AnthropicClient
from explain.core import explain_position
from explain.result import Explained, ExplainResult, Failed, METHOD_NOT_ALLOWED
from schemas import ErrorResponse, ExplainResponse
from settings import Settings, load_settings

logger = logging.getLogger(__name__)

EXPLAIN_PATH = "/api/explain"


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_origins,
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_anthropic_client(request: Request, settings: Settings = Depends(get_settings)) -> AnthropicClient | None:
    if not settings.anthropic_api_key:
        return None
    http = getattr(request.app.state, "http_client", None)
    return AnthropicClient(settings.anthropic_api_key, settings, http=http)


def to_response(result: ExplainResult, headers: dict[str, str]) -> JSONResponse:
    if isinstance(result, Explained):
        return JSONResponse(ExplainResponse(explanation=result.explanation).model_dump(), status_code=200, headers=headers)
    return JSONResponse(ErrorResponse(error=result.error).model_dump(), status_code=result.status_code, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One pooled client for all upstream calls, closed on shutdown
    settings: Settings = app.state.settings
    async with httpx.AsyncClient(timeout=settings.anthropic_timeout_s) as http:
        app.state.http_client = http
        yield
    app.state.http_client = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API around an already-loaded, immutable Settings value."""
    app = FastAPI(title="Chess Explain Proxy", version="0.3.0", lifespan=lifespan)
    app.state.settings = settings if settings is not None else load_settings()

    @app.exception_handler(StarletteHTTPException)
    async def explain_method_not_allowed(request: Request, exc: StarletteHTTPException) -> Response:
        # Routing rejects every method except POST/OPTIONS before the handler runs
        if exc.status_code == 405 and request.url.path == EXPLAIN_PATH:
            return to_response(Failed(405, METHOD_NOT_ALLOWED), cors_headers(get_settings(request)))
        return await http_exception_handler(request, exc)

    @app.get("/healthz")
    def healthz(current: Settings = Depends(get_settings)):
        return {"ok": True, "configured": bool(current.anthropic_api_key)}

    @app.api_route(EXPLAIN_PATH, methods=["POST", "OPTIONS"])
    async def explain(
        request: Request,
        settings: Settings = Depends(get_settings),
        client: AnthropicClient | None = Depends(get_anthropic_client),
    ) -> Response:
        headers = cors_headers(settings)
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        try:
            body = await request.json()
        except ValueError:
            body = None

        try:
            result = await explain_position(body, settings, client)
        except Exception:
            logger.exception("Unexpected error while explaining position")
            result = Failed.generic()
        return to_response(result, headers)

    return app


def main() -> None:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()

if __name__ == "__main__":
    main()
