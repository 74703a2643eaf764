from __future__ import annotations  # FastAPI server for the PrepMaster+ gateway

import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents import AiProxyClient
from api import router
from config import Settings
from errors import PrepError
from observability import configure_logging
from storage.json_files import JsonDataStore


logger = logging.getLogger(__name__)


def _error_body(message: str, details: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if details:
        body["details"] = details
    return body


async def _prep_error_handler(request: Request, exc: PrepError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.details))


async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    details = first.get("msg") if isinstance(first, dict) else None
    return JSONResponse(status_code=400, content=_error_body("Invalid request body", details))


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal server error", str(exc)))


def create_app(
    settings: Optional[Settings] = None,
    *,
    ai_client: Optional[AiProxyClient] = None,
    data_store: Optional[JsonDataStore] = None,
) -> FastAPI:
    """Build the gateway app; collaborators are created once and kept on ``app.state``."""

    settings = settings or Settings()
    app = FastAPI(title="PrepMaster+ API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.CORS_ORIGINS),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.ai_client = ai_client or AiProxyClient(settings.provider_route())
    app.state.data_store = data_store or JsonDataStore(settings.data_path)

    app.add_exception_handler(PrepError, _prep_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
    app.include_router(router)

    if not app.state.ai_client.configured:
        logger.warning("GEMINI_API_KEY is not configured; AI routes will serve static fallbacks")
    return app


def main() -> None:
    from config import settings

    configure_logging()
    logger.info("PrepMaster+ API listening on port %s (env=%s)", settings.PORT, settings.ENV)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
