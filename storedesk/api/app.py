"""FastAPI application factory for StoreDesk.

Routes:
    GET  /health                      liveness probe
    POST /chat/message                send a message, get the reply
    GET  /chat/history/{session_id}   full conversation history
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storedesk.api.schemas import ChatMessageRequest
from storedesk.core.database import get_database
from storedesk.services.chat_service import ChatService
from storedesk.services.llm_service import LLMService
from storedesk.utils.config import Settings, load_settings
from storedesk.utils.errors import AppError
from storedesk.utils.logger import setup_logger
from storedesk.utils.validators import NOT_PROVIDED, validate_chat_message, validate_session_id


logger = setup_logger("API")

UNEXPECTED_ERROR = "An unexpected error occurred. Please try again later."


def build_chat_service(settings: Settings) -> ChatService:
    """Wire the database and LLM service from settings."""
    db = get_database(settings.database_path)
    return ChatService(db, LLMService(settings), history_limit=settings.history_limit)


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def create_app(chat_service: Optional[ChatService] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    owns_service = chat_service is None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Shutdown: close the database if this app created it."""
        logger.info(f"API started | Config: {settings.summary()}")
        yield
        if owns_service:
            app.state.chat_service.db.close()
            logger.info("Database connection closed")

    app = FastAPI(title="StoreDesk", version="1.0.0", lifespan=lifespan)
    app.state.chat_service = chat_service or build_chat_service(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    # --- Error handlers ---

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.error(f"Error occurred | {request.method} {request.url.path} | {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(status_code=404, content={"error": "Route not found"})
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error | {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": UNEXPECTED_ERROR})

    # --- Routes ---

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.post("/chat/message")
    async def send_message(
        body: ChatMessageRequest,
        service: ChatService = Depends(get_chat_service),
    ) -> Dict[str, Any]:
        session_id = body.sessionId if "sessionId" in body.model_fields_set else NOT_PROVIDED
        validate_chat_message(body.message, session_id)
        response = await service.send_message(body.message, body.sessionId)
        logger.info(f"Message processed successfully | Session: {response.session_id}")
        return response.to_dict()

    @app.get("/chat/history/{session_id}")
    async def get_history(
        session_id: str,
        service: ChatService = Depends(get_chat_service),
    ) -> Dict[str, Any]:
        validate_session_id(session_id)
        return service.get_history(session_id).to_dict()

    return app
